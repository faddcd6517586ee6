"""
JustTCG inventory API client.

Searches the upstream card inventory for a card reference and returns the
decoded cards. Matching is not done here; see pricing.matching.
"""

import logging

import httpx

from tcgtracker.config import PRICE_PAGE_SIZE, Settings
from tcgtracker.models.failure import PriceServiceNotConfiguredError, UpstreamApiError
from tcgtracker.models.pricing import CardReference, RawCard
from tcgtracker.pricing.response_shapes import parse_response

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"


class JustTCGClient:
    """
    Client for the JustTCG card search endpoint.

    Holds the pinned upstream contract: endpoint, game id, credential and
    page size. One instance is built at startup and shared by all requests.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        game: str,
        page_size: int = PRICE_PAGE_SIZE,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialize the JustTCG client.

        Args:
            api_key: Upstream API key, sent on every request.
            base_url: Card search endpoint URL.
            game: Upstream game identifier.
            page_size: Maximum cards requested per lookup.
            timeout: Request timeout in seconds.

        Raises:
            PriceServiceNotConfiguredError: If api_key is empty
        """
        if not api_key:
            raise PriceServiceNotConfiguredError()
        self.api_key = api_key
        self.base_url = base_url
        self.game = game
        self.page_size = page_size
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "JustTCGClient":
        """Build a client from application settings."""
        return cls(
            api_key=settings.justtcg_api_key,
            base_url=settings.justtcg_base_url,
            game=settings.justtcg_game,
            timeout=settings.http_timeout,
        )

    def http_client(self) -> httpx.AsyncClient:
        """Create an HTTP client carrying the credential header."""
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers={API_KEY_HEADER: self.api_key, "Accept": "application/json"},
        )

    def build_params(self, ref: CardReference) -> dict[str, str]:
        """
        Build search query parameters for a reference.

        The collector number is deliberately left out: upstream filtering on
        it is unreliable, so it is only used when matching results.
        """
        params = {
            "q": ref.name.strip(),
            "game": self.game,
            "limit": str(self.page_size),
        }
        if ref.set_name:
            params["set"] = ref.set_name.strip()
        return params

    async def search(self, http: httpx.AsyncClient, ref: CardReference) -> list[RawCard]:
        """
        Search upstream for cards matching a reference.

        Args:
            http: Client from http_client()
            ref: Card reference to search for

        Returns:
            Decoded cards, possibly empty

        Raises:
            UpstreamApiError: If upstream answers with a non-2xx status
            ResponseShapeError: If the body is not a tolerated shape
            httpx.HTTPError: On network failure
            ValueError: If the body is not JSON
        """
        params = self.build_params(ref)
        logger.debug("Searching upstream for %r with %s", ref.name, params)

        response = await http.get(self.base_url, params=params)
        if not response.is_success:
            raise UpstreamApiError(response.status_code, response.text)

        return parse_response(response.json())
