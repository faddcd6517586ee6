from tcgtracker.services.card_search import OwnerEntry, group_search_results, owner_label

__all__ = [
    "OwnerEntry",
    "group_search_results",
    "owner_label",
]
