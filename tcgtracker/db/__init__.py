from tcgtracker.db.database import get_session, init_db
from tcgtracker.db.operations import (
    CardHit,
    CollectionSummary,
    collection_to_model,
    create_collection,
    delete_collection,
    get_collection,
    list_collections,
    search_cards,
)

__all__ = [
    "CardHit",
    "CollectionSummary",
    "collection_to_model",
    "create_collection",
    "delete_collection",
    "get_collection",
    "get_session",
    "init_db",
    "list_collections",
    "search_cards",
]
