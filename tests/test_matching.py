"""Tests for tiered price matching."""

from typing import Any

import pytest

from tcgtracker.models.pricing import CardReference, RawCard, RawVariant
from tcgtracker.pricing.matching import (
    best_price,
    coerce_price,
    flatten_variants,
    is_near_mint,
    match_candidates,
    select_variant,
)
from tcgtracker.pricing.response_shapes import parse_response


def _card(name: str, set_name: str | None, number: str | None, *prices: Any) -> RawCard:
    return RawCard(
        name=name,
        set_name=set_name,
        number=number,
        variants=[
            RawVariant(id=None, condition="Near Mint", printing=None, language=None, price=p)
            for p in prices
        ],
    )


class TestFlattenVariants:
    def test_one_candidate_per_variant(self, bolt_cards: list[dict[str, Any]]) -> None:
        """Every variant becomes a candidate tagged with its card."""
        candidates = flatten_variants(parse_response(bolt_cards))

        assert len(candidates) == 4
        assert [c.card_index for c in candidates] == [0, 0, 1, 1]
        assert candidates[2].parent_set == "Alpha"
        assert candidates[2].parent_number == "161"

    def test_card_without_variants_yields_nothing(self) -> None:
        """Cards with no variants contribute no candidates."""
        assert flatten_variants([RawCard(name="Bolt", set_name=None, number=None)]) == []


class TestTierA:
    def test_selects_requested_set(self) -> None:
        """Name and set match picks the requested printing."""
        cards = [_card("Bolt", "LEB", None, 1.0), _card("Bolt", "LEA", None, 2.0)]
        ref = CardReference(name="Bolt", setName="LEA")

        assert best_price(ref, cards) == 2.0

    def test_case_and_whitespace_insensitive(self) -> None:
        """Comparisons ignore case and surrounding whitespace."""
        cards = [_card(" lightning BOLT ", "alpha ", None, 5.0)]
        ref = CardReference(name="Lightning Bolt", setName=" ALPHA")

        assert best_price(ref, cards) == 5.0

    def test_no_set_requested_matches_name(self) -> None:
        """Without a set, Tier A matches on name alone and takes the first card."""
        cards = [_card("Bolt", "LEB", None, 1.0), _card("Bolt", "LEA", None, 2.0)]

        assert best_price(CardReference(name="Bolt"), cards) == 1.0


class TestFallbackCascade:
    def test_tier_b_matches_number(self) -> None:
        """Unmatched set falls back to collector number."""
        cards = [_card("Bolt", "LEB", "162", 1.0), _card("Bolt", "LEA", "161", 2.0)]
        ref = CardReference(name="Bolt", setName="Revised", collectorNumber="161")

        assert best_price(ref, cards) == 2.0

    def test_tier_b_needs_candidate_number(self) -> None:
        """Candidates without a number never satisfy Tier B."""
        cards = [_card("Bolt", "LEB", None, 1.0), _card("Bolt", "LEA", "999", 2.0)]
        ref = CardReference(name="Bolt", setName="Revised", collectorNumber="161")

        # Tier C: name alone, first card wins
        assert best_price(ref, cards) == 1.0

    def test_tier_c_name_only(self) -> None:
        """Neither set nor number matches, name alone decides."""
        cards = [_card("Shock", "M19", "1", 0.1), _card("Bolt", "LEB", "162", 3.0)]
        ref = CardReference(name="Bolt", setName="LEA", collectorNumber="161")

        assert best_price(ref, cards) == 3.0

    def test_no_match_is_none(self) -> None:
        """A name that matches nothing resolves to None."""
        cards = [_card("Shock", "M19", "1", 0.1)]

        assert best_price(CardReference(name="Bolt"), cards) is None
        assert match_candidates(CardReference(name="Bolt"), flatten_variants(cards)) == []


class TestSelectVariant:
    def test_prefers_near_mint(self) -> None:
        """Near Mint wins over an earlier Lightly Played variant."""
        cards = parse_response(
            [
                {
                    "name": "Bolt",
                    "variants": [
                        {"condition": "Lightly Played", "price": 5},
                        {"condition": "Near Mint", "price": 10},
                    ],
                }
            ]
        )

        assert best_price(CardReference(name="Bolt"), cards) == 10.0

    def test_nm_abbreviation(self) -> None:
        """The NM abbreviation counts as Near Mint."""
        cards = parse_response(
            [{"name": "Bolt", "variants": [{"condition": "LP", "price": 5}, {"condition": "nm", "price": 7}]}]
        )

        assert best_price(CardReference(name="Bolt"), cards) == 7.0

    def test_falls_back_to_first_variant(self) -> None:
        """Without a Near Mint variant, the first in upstream order wins."""
        cards = parse_response(
            [
                {
                    "name": "Bolt",
                    "variants": [
                        {"condition": "Damaged", "price": 1},
                        {"condition": "Heavily Played", "price": 2},
                    ],
                }
            ]
        )

        assert best_price(CardReference(name="Bolt"), cards) == 1.0

    def test_stays_within_matched_card(self) -> None:
        """A Near Mint variant of a different card is not considered."""
        cards = parse_response(
            [
                {"name": "Bolt", "set": "LEB", "variants": [{"condition": "LP", "price": 5}]},
                {"name": "Bolt", "set": "LEA", "variants": [{"condition": "NM", "price": 50}]},
            ]
        )

        assert best_price(CardReference(name="Bolt"), cards) == 5.0

    def test_empty_is_none(self) -> None:
        """No candidates, no selection."""
        assert select_variant([]) is None

    @pytest.mark.parametrize(
        ("condition", "expected"),
        [("Near Mint", True), (" NM ", True), ("near mint", True), ("Lightly Played", False), (None, False)],
    )
    def test_is_near_mint(self, condition: str | None, expected: bool) -> None:
        """Near Mint detection is normalized."""
        assert is_near_mint(condition) is expected


class TestCoercePrice:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (10, 10.0),
            (4.25, 4.25),
            ("12.50", 12.5),
            (" 3 ", 3.0),
            (0, 0.0),
            (None, None),
            ("n/a", None),
            (True, None),
            (float("nan"), None),
            ({"usd": 1}, None),
        ],
    )
    def test_coercion(self, value: Any, expected: float | None) -> None:
        """Numeric values coerce to float; anything else is None."""
        assert coerce_price(value) == expected

    def test_null_price_variant(self) -> None:
        """A matched variant with no price resolves to None, not an error."""
        cards = parse_response([{"name": "Bolt", "variants": [{"condition": "NM", "price": None}]}])

        assert best_price(CardReference(name="Bolt"), cards) is None
