"""
Collection API endpoints.

Import collections from CSV exports, list a user's collections, view and
delete a single collection.
"""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from tcgtracker.db import (
    collection_to_model,
    create_collection,
    delete_collection,
    get_collection,
    list_collections,
)
from tcgtracker.db.database import get_session
from tcgtracker.parsers.csv_import import parse_collection_csv

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/collections", tags=["collections"])


class CollectionImportRequest(BaseModel):
    """Request model for importing a collection from CSV text."""

    name: str = Field(
        ...,
        description="Name for the new collection",
        examples=["Modern Staples"],
    )
    text: str = Field(
        ...,
        description="Raw CSV export (Manabox or Moxfield)",
        examples=["Name,Quantity,Set\nLightning Bolt,4,Alpha"],
    )


class CollectionSummaryResponse(BaseModel):
    """A collection in a user's listing."""

    id: int
    name: str
    created_at: datetime | None = None
    unique_cards: int = 0
    total_cards: int = 0


class CollectionListResponse(BaseModel):
    """Response model for a user's collections."""

    user_id: str
    collections: list[CollectionSummaryResponse] = Field(default_factory=list)


class CardRowResponse(BaseModel):
    """One card row within a collection."""

    card_name: str
    quantity: int
    set_name: str | None = None
    collector_number: str | None = None


class CollectionDetailResponse(BaseModel):
    """Response model for a single collection and its cards."""

    id: int
    name: str
    user_id: str
    created_at: datetime | None = None
    total_cards: int = 0
    unique_cards: int = 0
    cards: list[CardRowResponse] = Field(default_factory=list)


class ImportResponse(BaseModel):
    """Response model for collection import."""

    id: int
    name: str
    user_id: str
    rows_imported: int
    total_cards: int


class DeleteResponse(BaseModel):
    """Response model for delete operations."""

    collection_id: int
    deleted: bool


@router.post(
    "/user/{user_id}/import",
    response_model=ImportResponse,
    status_code=status.HTTP_201_CREATED,
)
async def import_collection(
    user_id: str,
    request: CollectionImportRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ImportResponse:
    """
    Import a new collection from a CSV export.

    Recognized columns: Name, Quantity/Count, Edition/Set, Collector Number.
    The collection and all its cards are stored together or not at all.
    """
    name = request.name.strip()
    if not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Collection name cannot be empty",
        )

    rows = parse_collection_csv(request.text)
    if not rows:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid card rows found in CSV",
        )

    collection = await create_collection(session, user_id, name, rows)
    logger.info("Imported %d rows into collection %d for %s", len(rows), collection.id, user_id)

    return ImportResponse(
        id=collection.id,
        name=collection.name,
        user_id=user_id,
        rows_imported=len(rows),
        total_cards=sum(row.quantity for row in rows),
    )


@router.get("/user/{user_id}", response_model=CollectionListResponse)
async def get_user_collections(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CollectionListResponse:
    """List a user's collections, newest first."""
    summaries = await list_collections(session, user_id)

    return CollectionListResponse(
        user_id=user_id,
        collections=[
            CollectionSummaryResponse(
                id=summary.id,
                name=summary.name,
                created_at=summary.created_at,
                unique_cards=summary.unique_cards,
                total_cards=summary.total_cards,
            )
            for summary in summaries
        ],
    )


@router.get("/{collection_id}", response_model=CollectionDetailResponse)
async def get_collection_detail(
    collection_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
    q: Annotated[str, Query(description="Filter cards by name substring")] = "",
) -> CollectionDetailResponse:
    """
    Get a collection with its cards, ordered by name.

    Counts always cover the whole collection; ``q`` only filters the card list.
    """
    db_collection = await get_collection(session, collection_id)
    if db_collection is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Collection {collection_id} not found",
        )

    model = collection_to_model(db_collection)

    return CollectionDetailResponse(
        id=model.id,
        name=model.name,
        user_id=model.user_id,
        created_at=model.created_at,
        total_cards=model.total_cards(),
        unique_cards=model.unique_cards(),
        cards=[
            CardRowResponse(
                card_name=card.card_name,
                quantity=card.quantity,
                set_name=card.set_name,
                collector_number=card.collector_number,
            )
            for card in model.filter_cards(q)
        ],
    )


@router.delete("/{collection_id}", response_model=DeleteResponse)
async def delete_user_collection(
    collection_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    """Delete a collection and all of its cards."""
    deleted = await delete_collection(session, collection_id)
    return DeleteResponse(collection_id=collection_id, deleted=deleted)
