"""
Cross-user card search grouping.

Groups card rows found across every user's collections by card name, so a
search for "bolt" shows each distinct card once with everyone who owns it.
"""

from dataclasses import dataclass

from tcgtracker.db.operations import CardHit

# Length of the user id prefix shown as the owner label
OWNER_LABEL_LENGTH = 8


@dataclass(frozen=True, slots=True)
class OwnerEntry:
    """One owner's holding of a card."""

    card_name: str
    set_name: str | None
    collector_number: str | None
    quantity: int
    collection: str
    owner: str


def owner_label(user_id: str | None) -> str:
    """Short display label for a collection owner."""
    if not user_id:
        return "Unknown"
    return user_id[:OWNER_LABEL_LENGTH]


def group_search_results(hits: list[CardHit]) -> dict[str, list[OwnerEntry]]:
    """
    Group search hits by lower-cased card name.

    Returns:
        Dict of card key -> owner entries, keys in sorted order and
        entries in hit order within each group
    """
    grouped: dict[str, list[OwnerEntry]] = {}

    for hit in hits:
        key = hit.card_name.lower()
        grouped.setdefault(key, []).append(
            OwnerEntry(
                card_name=hit.card_name,
                set_name=hit.set_name,
                collector_number=hit.collector_number,
                quantity=hit.quantity,
                collection=hit.collection_name or "Unknown",
                owner=owner_label(hit.user_id),
            )
        )

    return {key: grouped[key] for key in sorted(grouped)}
