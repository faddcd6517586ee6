from tcgtracker.pricing.client import JustTCGClient
from tcgtracker.pricing.matching import best_price, coerce_price
from tcgtracker.pricing.resolver import PriceResolver
from tcgtracker.pricing.response_shapes import parse_response

__all__ = [
    "JustTCGClient",
    "PriceResolver",
    "best_price",
    "coerce_price",
    "parse_response",
]
