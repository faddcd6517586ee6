"""
Cross-user card search endpoint.

Searches every user's collections for cards by name.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from tcgtracker.config import SEARCH_RESULT_LIMIT
from tcgtracker.db import search_cards
from tcgtracker.db.database import get_session
from tcgtracker.services.card_search import group_search_results

router = APIRouter(tags=["search"])


class OwnerEntryResponse(BaseModel):
    """One owner's holding of a card."""

    card_name: str
    set_name: str | None = None
    collector_number: str | None = None
    quantity: int
    collection: str
    owner: str


class SearchResponse(BaseModel):
    """Search results grouped by lower-cased card name."""

    query: str
    total_rows: int = 0
    groups: dict[str, list[OwnerEntryResponse]] = Field(default_factory=dict)


@router.get("/search", response_model=SearchResponse)
async def search(
    session: Annotated[AsyncSession, Depends(get_session)],
    q: Annotated[str, Query(description="Card name substring")] = "",
    limit: Annotated[int, Query(ge=1, le=SEARCH_RESULT_LIMIT)] = SEARCH_RESULT_LIMIT,
) -> SearchResponse:
    """
    Find who owns cards matching a name.

    Results are grouped by card name across all users' collections.
    """
    if not q.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query cannot be empty",
        )

    hits = await search_cards(session, q, limit=limit)
    grouped = group_search_results(hits)

    return SearchResponse(
        query=q,
        total_rows=len(hits),
        groups={
            key: [
                OwnerEntryResponse(
                    card_name=entry.card_name,
                    set_name=entry.set_name,
                    collector_number=entry.collector_number,
                    quantity=entry.quantity,
                    collection=entry.collection,
                    owner=entry.owner,
                )
                for entry in entries
            ]
            for key, entries in grouped.items()
        },
    )
