"""Tests for search result grouping."""

from tcgtracker.db.operations import CardHit
from tcgtracker.services.card_search import group_search_results, owner_label


def _hit(name: str, user_id: str, collection: str = "Binder", quantity: int = 1) -> CardHit:
    return CardHit(
        card_name=name,
        quantity=quantity,
        set_name=None,
        collector_number=None,
        collection_id=1,
        collection_name=collection,
        user_id=user_id,
    )


class TestOwnerLabel:
    def test_truncates_user_id(self) -> None:
        """Owner label is the first eight characters of the user id."""
        assert owner_label("3f2b9c1e-aaaa-bbbb") == "3f2b9c1e"

    def test_missing_user_id(self) -> None:
        """A missing owner is labelled Unknown."""
        assert owner_label("") == "Unknown"
        assert owner_label(None) == "Unknown"


class TestGroupSearchResults:
    def test_groups_case_insensitively(self) -> None:
        """Different capitalizations share one group, hit order kept."""
        grouped = group_search_results(
            [_hit("Lightning Bolt", "user-one-1"), _hit("LIGHTNING BOLT", "user-two-2")]
        )

        assert list(grouped) == ["lightning bolt"]
        assert [entry.owner for entry in grouped["lightning bolt"]] == ["user-one", "user-two"]
        assert [entry.card_name for entry in grouped["lightning bolt"]] == [
            "Lightning Bolt",
            "LIGHTNING BOLT",
        ]

    def test_keys_sorted(self) -> None:
        """Groups come out in sorted key order."""
        grouped = group_search_results([_hit("Shock", "u"), _hit("Bolt", "u"), _hit("Opt", "u")])
        assert list(grouped) == ["bolt", "opt", "shock"]

    def test_empty(self) -> None:
        """No hits, no groups."""
        assert group_search_results([]) == {}
