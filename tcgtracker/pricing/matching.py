"""
Best-match price selection.

Given the cards returned for one CardReference, pick the single price quote
that best matches it:

1. Flatten every card's variants into VariantCandidates.
2. Apply matching tiers, most specific first; the first non-empty tier wins.
   - Tier A: name matches, and set matches when a set was requested
   - Tier B: name matches and collector number matches
   - Tier C: name matches
3. Within the matched card, prefer a Near Mint variant, else the first one.
4. Coerce the chosen variant's price to a float, or None.

All comparisons are case-insensitive and whitespace-trimmed.
"""

import math
from collections.abc import Callable
from typing import Any

from tcgtracker.models.pricing import CardReference, RawCard, VariantCandidate

# Condition labels treated as Near Mint (compared normalized)
NEAR_MINT_CONDITIONS = frozenset({"near mint", "nm"})

Predicate = Callable[[VariantCandidate], bool]


def normalize(value: str | None) -> str:
    """Normalize a string for comparison."""
    return value.strip().lower() if value else ""


def _equal(left: str | None, right: str | None) -> bool:
    return normalize(left) == normalize(right)


def flatten_variants(cards: list[RawCard]) -> list[VariantCandidate]:
    """Pair every variant with its owning card's identity fields."""
    return [
        VariantCandidate(
            card_index=index,
            parent_name=card.name,
            parent_set=card.set_name,
            parent_number=card.number,
            condition=variant.condition,
            printing=variant.printing,
            price=variant.price,
        )
        for index, card in enumerate(cards)
        for variant in card.variants
    ]


def _matching_tiers(ref: CardReference) -> list[Predicate]:
    """Build the tier predicates for a reference, in priority order."""

    def name_matches(candidate: VariantCandidate) -> bool:
        return _equal(candidate.parent_name, ref.name)

    def tier_a(candidate: VariantCandidate) -> bool:
        if not name_matches(candidate):
            return False
        if normalize(ref.set_name):
            return _equal(candidate.parent_set, ref.set_name)
        return True

    def tier_b(candidate: VariantCandidate) -> bool:
        return (
            name_matches(candidate)
            and bool(normalize(ref.collector_number))
            and bool(normalize(candidate.parent_number))
            and _equal(candidate.parent_number, ref.collector_number)
        )

    return [tier_a, tier_b, name_matches]


def match_candidates(
    ref: CardReference, candidates: list[VariantCandidate]
) -> list[VariantCandidate]:
    """
    Return the candidates of the first tier that yields any match.

    Returns an empty list when no tier matches.
    """
    for tier in _matching_tiers(ref):
        matched = [candidate for candidate in candidates if tier(candidate)]
        if matched:
            return matched
    return []


def is_near_mint(condition: str | None) -> bool:
    """Check if a condition label means Near Mint."""
    return normalize(condition) in NEAR_MINT_CONDITIONS


def select_variant(matched: list[VariantCandidate]) -> VariantCandidate | None:
    """
    Pick the variant to price from tier-matched candidates.

    The matched card is the owner of the first candidate. Among that card's
    matched variants, Near Mint wins; otherwise upstream order decides.
    """
    if not matched:
        return None

    card_index = matched[0].card_index
    card_variants = [candidate for candidate in matched if candidate.card_index == card_index]

    for candidate in card_variants:
        if is_near_mint(candidate.condition):
            return candidate
    return card_variants[0]


def coerce_price(value: Any) -> float | None:
    """
    Convert an upstream price value to a float.

    Non-numeric, non-finite or absent values become None.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int | float):
        price = float(value)
    elif isinstance(value, str):
        try:
            price = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    return price if math.isfinite(price) else None


def best_price(ref: CardReference, cards: list[RawCard]) -> float | None:
    """Resolve the best-matching price for a reference, or None if nothing matches."""
    chosen = select_variant(match_candidates(ref, flatten_variants(cards)))
    if chosen is None:
        return None
    return coerce_price(chosen.price)
