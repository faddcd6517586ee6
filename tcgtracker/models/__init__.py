from tcgtracker.models.collection import Collection, CollectionCard
from tcgtracker.models.failure import (
    BatchFatalError,
    ErrorResponse,
    FailureKind,
    InvalidPriceRequestError,
    KnownError,
    PriceLookupError,
    PriceServiceNotConfiguredError,
    ResponseShapeError,
    UpstreamApiError,
)
from tcgtracker.models.pricing import (
    CardReference,
    PriceRequest,
    PriceResult,
    RawCard,
    RawVariant,
    VariantCandidate,
)

__all__ = [
    "BatchFatalError",
    "CardReference",
    "Collection",
    "CollectionCard",
    "ErrorResponse",
    "FailureKind",
    "InvalidPriceRequestError",
    "KnownError",
    "PriceLookupError",
    "PriceRequest",
    "PriceResult",
    "PriceServiceNotConfiguredError",
    "RawCard",
    "RawVariant",
    "ResponseShapeError",
    "UpstreamApiError",
    "VariantCandidate",
]
