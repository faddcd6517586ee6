"""Tests for the cross-user search endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tcgtracker.db.database import get_session
from tcgtracker.db.operations import create_collection
from tcgtracker.main import app
from tcgtracker.parsers.csv_import import ImportRow


@pytest.fixture
async def client(async_engine):
    """Provide an async test client over a seeded database."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        await create_collection(
            session,
            "alice-0000-1111",
            "Vintage",
            [ImportRow("Lightning Bolt", 4, "Alpha", "161"), ImportRow("Counterspell", 2)],
        )
        await create_collection(
            session, "bob-2222-3333", "Burn", [ImportRow("lightning bolt", 3, "M10", "146")]
        )
        await session.commit()

    async def override_get_session():
        async with async_session() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


class TestSearch:
    async def test_groups_by_card_name(self, client: AsyncClient) -> None:
        """Matches from all users are grouped under one lower-cased key."""
        response = await client.get("/search", params={"q": "bolt"})

        assert response.status_code == 200
        data = response.json()
        assert data["total_rows"] == 2
        assert list(data["groups"]) == ["lightning bolt"]

        owners = {entry["owner"]: entry for entry in data["groups"]["lightning bolt"]}
        assert set(owners) == {"alice-00", "bob-2222"}
        assert owners["alice-00"]["collection"] == "Vintage"
        assert owners["alice-00"]["quantity"] == 4
        assert owners["bob-2222"]["set_name"] == "M10"

    async def test_groups_sorted(self, client: AsyncClient) -> None:
        """Group keys are sorted."""
        response = await client.get("/search", params={"q": "l"})

        assert list(response.json()["groups"]) == ["counterspell", "lightning bolt"]

    async def test_no_match(self, client: AsyncClient) -> None:
        """Unmatched queries return no groups."""
        response = await client.get("/search", params={"q": "lotus"})

        assert response.status_code == 200
        assert response.json()["groups"] == {}

    async def test_blank_query(self, client: AsyncClient) -> None:
        """A blank query is rejected."""
        response = await client.get("/search", params={"q": "   "})
        assert response.status_code == 400
