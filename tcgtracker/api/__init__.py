from tcgtracker.api.collections import router as collections_router
from tcgtracker.api.health import router as health_router
from tcgtracker.api.prices import router as prices_router
from tcgtracker.api.search import router as search_router

__all__ = [
    "collections_router",
    "health_router",
    "prices_router",
    "search_router",
]
