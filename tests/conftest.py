from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tcgtracker.models.db import Base
from tcgtracker.pricing.client import JustTCGClient

UPSTREAM_URL = "https://upstream.test/v1/cards"


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
def justtcg_client() -> JustTCGClient:
    """Upstream client pointed at a mockable test URL."""
    return JustTCGClient(api_key="test-key", base_url=UPSTREAM_URL, game="magic-the-gathering")


@pytest.fixture
def bolt_cards() -> list[dict[str, Any]]:
    """Two printings of Lightning Bolt as the upstream returns them."""
    return [
        {
            "name": "Lightning Bolt",
            "set": "Beta",
            "number": "162",
            "variants": [
                {"id": "b-lp", "condition": "Lightly Played", "printing": "Normal", "price": 300},
                {"id": "b-nm", "condition": "Near Mint", "printing": "Normal", "price": 450},
            ],
        },
        {
            "name": "Lightning Bolt",
            "set": "Alpha",
            "number": "161",
            "variants": [
                {"id": "a-mp", "condition": "Moderately Played", "price": 700.5},
                {"id": "a-nm", "condition": "NM", "price": "899.99"},
            ],
        },
    ]


@pytest.fixture
def sample_csv() -> str:
    """Sample Manabox-style collection export."""
    return (
        "Name,Set code,Set name,Collector number,Foil,Quantity\n"
        "Lightning Bolt,LEA,Alpha,161,normal,4\n"
        "Counterspell,LEB,Beta,55,normal,2\n"
        "Llanowar Elves,M19,Core Set 2019,314,foil,1\n"
    )
