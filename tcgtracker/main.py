import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tcgtracker.api import (
    collections_router,
    health_router,
    prices_router,
    search_router,
)
from tcgtracker.config import Settings, settings
from tcgtracker.db.database import init_db
from tcgtracker.models.failure import KnownError, PriceServiceNotConfiguredError
from tcgtracker.pricing.client import JustTCGClient
from tcgtracker.pricing.resolver import PriceResolver

logger = logging.getLogger(__name__)


def build_price_resolver(app_settings: Settings) -> PriceResolver | None:
    """
    Build the shared price resolver from settings.

    Returns None when the upstream credential is missing; price requests
    then fail as a whole with a configuration error.
    """
    try:
        client = JustTCGClient.from_settings(app_settings)
    except PriceServiceNotConfiguredError as e:
        logger.error("Price lookups disabled: %s", e.message)
        return None
    return PriceResolver(client)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    app.state.price_resolver = build_price_resolver(settings)
    await init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("tcgtracker"),
    lifespan=lifespan,
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render known failures as {"error": message}."""
    if exc.status_code >= 500:
        logger.error("Request failed: %s", exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_response().model_dump())


app.include_router(collections_router)
app.include_router(health_router)
app.include_router(prices_router)
app.include_router(search_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
