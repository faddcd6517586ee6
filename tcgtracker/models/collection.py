from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True)
class CollectionCard:
    """One card row in a collection, as imported."""

    card_name: str
    quantity: int
    set_name: str | None = None
    collector_number: str | None = None


@dataclass
class Collection:
    """
    A named card collection owned by a user.

    A user may own any number of collections. Cards are kept as imported
    rows, so the same card name may appear once per printing.
    """

    id: int
    name: str
    user_id: str
    created_at: datetime | None = None
    cards: list[CollectionCard] = field(default_factory=list)

    def total_cards(self) -> int:
        """Total number of cards in collection."""
        return sum(card.quantity for card in self.cards)

    def unique_cards(self) -> int:
        """Number of distinct card names in collection."""
        return len({card.card_name.lower() for card in self.cards})

    def filter_cards(self, query: str) -> list[CollectionCard]:
        """Cards whose name contains ``query`` (case-insensitive)."""
        needle = query.strip().lower()
        if not needle:
            return list(self.cards)
        return [card for card in self.cards if needle in card.card_name.lower()]
