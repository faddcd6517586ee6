"""
Failure classification.

Two tiers of failure exist for price lookups:

- Batch-fatal: the whole request is invalid (malformed body, missing
  upstream credential). Raised as a BatchFatalError subclass and rendered
  once for the entire call as ``500 {"error": message}``.
- Per-reference: upstream non-2xx, network error, unparseable response.
  Raised as a PriceLookupError (or httpx.HTTPError) inside a single lookup
  and converted into that reference's PriceResult. Never crosses the
  batch boundary.

"Not found" is neither: it resolves to a null price with no error.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"

    # Configuration failures
    NOT_CONFIGURED = "not_configured"

    # Upstream failures
    EXTERNAL_API_ERROR = "external_api_error"
    MALFORMED_RESPONSE = "malformed_response"


class ErrorResponse(BaseModel):
    """Body of a batch-fatal error response."""

    error: str = Field(..., description="Explanation of why the request failed")


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(self, kind: FailureKind, message: str, status_code: int = 400):
        self.kind = kind
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to an ErrorResponse."""
        return ErrorResponse(error=self.message)


class BatchFatalError(KnownError):
    """A failure that invalidates an entire batch price request."""

    def __init__(self, kind: FailureKind, message: str):
        super().__init__(kind=kind, message=message, status_code=500)


class InvalidPriceRequestError(BatchFatalError):
    """Raised when the request body is not a valid batch of card references."""

    def __init__(self, message: str = "Invalid request: cards array is required"):
        super().__init__(kind=FailureKind.INVALID_INPUT, message=message)


class PriceServiceNotConfiguredError(BatchFatalError):
    """Raised when the upstream price API credential is missing."""

    def __init__(self) -> None:
        super().__init__(
            kind=FailureKind.NOT_CONFIGURED,
            message="JustTCG API key not configured",
        )


class PriceLookupError(KnownError):
    """A failure confined to a single card reference lookup."""

    def __init__(self, kind: FailureKind, message: str):
        super().__init__(kind=kind, message=message, status_code=502)


class UpstreamApiError(PriceLookupError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        self.upstream_status = status_code
        self.body = body
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=f"API error: {status_code} {body}".rstrip(),
        )


class ResponseShapeError(PriceLookupError):
    """Upstream payload is not any of the tolerated shapes."""

    def __init__(self, message: str):
        super().__init__(kind=FailureKind.MALFORMED_RESPONSE, message=message)
