"""
Price lookup endpoint.

Resolves a batch of card references to live market prices.
"""

import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from tcgtracker.models.failure import (
    ErrorResponse,
    InvalidPriceRequestError,
    PriceServiceNotConfiguredError,
)
from tcgtracker.models.pricing import PriceRequest, PriceResult
from tcgtracker.pricing.resolver import PriceResolver

router = APIRouter(tags=["prices"])


class PriceResponse(BaseModel):
    """Response model for a batch price lookup."""

    prices: list[PriceResult] = Field(
        default_factory=list,
        description="One result per requested card, in request order",
    )


def get_price_resolver(request: Request) -> PriceResolver:
    """
    Dependency that provides the shared price resolver.

    The resolver is built once at startup. It is absent when the upstream
    credential is not configured, which fails the whole batch.
    """
    resolver: PriceResolver | None = getattr(request.app.state, "price_resolver", None)
    if resolver is None:
        raise PriceServiceNotConfiguredError()
    return resolver


async def _read_price_request(request: Request) -> PriceRequest:
    """Parse the body; any malformed body is batch-fatal, not a 422."""
    try:
        body: Any = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidPriceRequestError("Invalid request: body must be JSON") from e

    if not isinstance(body, dict) or not isinstance(body.get("cards"), list):
        raise InvalidPriceRequestError()

    try:
        return PriceRequest.model_validate(body)
    except ValidationError as e:
        raise InvalidPriceRequestError(
            f"Invalid request: {e.errors()[0]['msg']}"
        ) from e


@router.post(
    "/prices",
    response_model=PriceResponse,
    responses={500: {"model": ErrorResponse}},
)
@router.post("/get-card-prices", include_in_schema=False)
async def get_card_prices(
    request: Request,
    resolver: Annotated[PriceResolver, Depends(get_price_resolver)],
) -> JSONResponse:
    """
    Look up market prices for a batch of cards.

    Body: {"cards": [{"name": ..., "setName": ..., "collectorNumber": ...}]}

    Every card is looked up independently. A card whose lookup fails gets
    a null price with an error; a card that is simply not found gets a null
    price with no error. The response always has one entry per card, in
    request order.
    """
    price_request = await _read_price_request(request)
    prices = await resolver.resolve_prices(price_request.cards)
    return JSONResponse({"prices": [price.to_payload() for price in prices]})
