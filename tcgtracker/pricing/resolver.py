"""
Batch price resolution.

Fans out one upstream lookup per card reference, concurrently, and joins
the results back in input order. Each lookup catches its own failure and
turns it into that reference's PriceResult, so one bad lookup never
cancels or corrupts its siblings.
"""

import asyncio
import logging

import httpx

from tcgtracker.models.failure import PriceLookupError
from tcgtracker.models.pricing import CardReference, PriceResult
from tcgtracker.pricing.client import JustTCGClient
from tcgtracker.pricing.matching import best_price

logger = logging.getLogger(__name__)


class PriceResolver:
    """
    Resolves card references to market prices.

    Stateless between calls: the same input against the same upstream
    responses always yields the same output.
    """

    def __init__(self, client: JustTCGClient) -> None:
        self.client = client

    async def resolve_prices(self, refs: list[CardReference]) -> list[PriceResult]:
        """
        Resolve a batch of references.

        Returns:
            One PriceResult per reference, in the same order as refs
        """
        if not refs:
            return []

        logger.info("Fetching prices for %d cards", len(refs))

        async with self.client.http_client() as http:
            results = await asyncio.gather(*(self._resolve_one(http, ref) for ref in refs))

        found = sum(1 for result in results if result.price is not None)
        logger.info("Fetched prices for %d/%d cards", found, len(results))
        return list(results)

    async def _resolve_one(self, http: httpx.AsyncClient, ref: CardReference) -> PriceResult:
        """Resolve one reference; every failure stays inside its own result."""
        try:
            cards = await self.client.search(http, ref)
        except PriceLookupError as e:
            logger.warning("Price lookup failed for %s: %s", ref.name, e.message)
            return PriceResult(name=ref.name, price=None, error=e.message)
        except httpx.HTTPError as e:
            logger.warning("Network error fetching price for %s: %s", ref.name, e)
            return PriceResult(name=ref.name, price=None, error=str(e) or type(e).__name__)
        except ValueError as e:
            logger.warning("Unparseable price response for %s: %s", ref.name, e)
            return PriceResult(name=ref.name, price=None, error=f"Invalid response: {e}")
        except Exception as e:
            logger.exception("Unexpected error fetching price for %s", ref.name)
            return PriceResult(name=ref.name, price=None, error=str(e) or type(e).__name__)

        return PriceResult(name=ref.name, price=best_price(ref, cards))
