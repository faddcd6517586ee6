"""
Database CRUD operations.

Provides async functions for creating, reading and deleting collections,
and for searching card rows across every user's collections.
"""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tcgtracker.config import SEARCH_RESULT_LIMIT
from tcgtracker.models.collection import Collection, CollectionCard
from tcgtracker.models.db import CollectionCardDB, CollectionDB
from tcgtracker.parsers.csv_import import ImportRow


@dataclass(frozen=True, slots=True)
class CardHit:
    """A card row found by search, joined with its owning collection."""

    card_name: str
    quantity: int
    set_name: str | None
    collector_number: str | None
    collection_id: int
    collection_name: str
    user_id: str


@dataclass(frozen=True, slots=True)
class CollectionSummary:
    """A collection with aggregate card counts, for listings."""

    id: int
    name: str
    user_id: str
    created_at: datetime | None
    unique_cards: int
    total_cards: int


# --- Collection Operations ---


async def create_collection(
    session: AsyncSession,
    user_id: str,
    name: str,
    rows: list[ImportRow],
) -> CollectionDB:
    """
    Create a collection together with its card rows.

    Both are flushed in the caller's transaction, so a failure
    leaves neither behind.
    """
    collection = CollectionDB(name=name, user_id=user_id)
    collection.cards = [
        CollectionCardDB(
            card_name=row.card_name,
            quantity=row.quantity,
            set_name=row.set_name,
            collector_number=row.collector_number,
        )
        for row in rows
    ]
    session.add(collection)
    await session.flush()
    await session.refresh(collection, attribute_names=["created_at"])
    return collection


async def get_collection(session: AsyncSession, collection_id: int) -> CollectionDB | None:
    """
    Get a collection with its cards by id.

    Returns None if no such collection exists.
    """
    result = await session.execute(
        select(CollectionDB)
        .where(CollectionDB.id == collection_id)
        .options(selectinload(CollectionDB.cards))
    )
    return result.scalar_one_or_none()


async def list_collections(session: AsyncSession, user_id: str) -> list[CollectionSummary]:
    """List a user's collections, newest first, with card counts."""
    result = await session.execute(
        select(
            CollectionDB,
            func.count(func.distinct(func.lower(CollectionCardDB.card_name))),
            func.coalesce(func.sum(CollectionCardDB.quantity), 0),
        )
        .outerjoin(CollectionCardDB, CollectionCardDB.collection_id == CollectionDB.id)
        .where(CollectionDB.user_id == user_id)
        .group_by(CollectionDB.id)
        .order_by(CollectionDB.created_at.desc(), CollectionDB.id.desc())
    )
    return [
        CollectionSummary(
            id=collection.id,
            name=collection.name,
            user_id=collection.user_id,
            created_at=collection.created_at,
            unique_cards=int(unique),
            total_cards=int(total),
        )
        for collection, unique, total in result.all()
    ]


async def delete_collection(session: AsyncSession, collection_id: int) -> bool:
    """
    Delete a collection and its cards.

    Returns True if deleted, False if not found.
    """
    collection = await get_collection(session, collection_id)
    if not collection:
        return False

    await session.delete(collection)
    await session.flush()
    return True


def collection_to_model(collection: CollectionDB) -> Collection:
    """Convert a database collection to a domain model, cards ordered by name."""
    cards = sorted(
        (
            CollectionCard(
                card_name=card.card_name,
                quantity=card.quantity,
                set_name=card.set_name,
                collector_number=card.collector_number,
            )
            for card in collection.cards
        ),
        key=lambda card: (card.card_name.lower(), card.set_name or ""),
    )
    return Collection(
        id=collection.id,
        name=collection.name,
        user_id=collection.user_id,
        created_at=collection.created_at,
        cards=cards,
    )


# --- Search Operations ---


async def search_cards(
    session: AsyncSession, query: str, limit: int = SEARCH_RESULT_LIMIT
) -> list[CardHit]:
    """
    Find card rows whose name contains ``query`` across all collections.

    Matching is case-insensitive. At most ``limit`` rows are returned.
    """
    pattern = f"%{query.strip().lower()}%"
    result = await session.execute(
        select(CollectionCardDB, CollectionDB)
        .join(CollectionDB, CollectionCardDB.collection_id == CollectionDB.id)
        .where(func.lower(CollectionCardDB.card_name).like(pattern))
        .order_by(CollectionCardDB.card_name, CollectionCardDB.id)
        .limit(limit)
    )
    return [
        CardHit(
            card_name=card.card_name,
            quantity=card.quantity,
            set_name=card.set_name,
            collector_number=card.collector_number,
            collection_id=collection.id,
            collection_name=collection.name,
            user_id=collection.user_id,
        )
        for card, collection in result.all()
    ]
