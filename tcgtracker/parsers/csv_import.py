"""
Parser for collection CSV exports.

Supports Manabox and Moxfield exports, and any CSV that names its columns
with one of the recognized headers below. Header matching is
case-insensitive and ignores surrounding whitespace.
"""

import csv
import math
from dataclasses import dataclass
from io import StringIO

NAME_HEADERS = ("name", "card name")
QUANTITY_HEADERS = ("quantity", "count", "qty")
SET_HEADERS = ("edition", "set", "set name", "set code")
NUMBER_HEADERS = ("collector number", "collector_number", "card number", "number")


@dataclass(frozen=True, slots=True)
class ImportRow:
    """One parsed CSV row, ready to store as a collection card."""

    card_name: str
    quantity: int
    set_name: str | None = None
    collector_number: str | None = None


def _find_column(headers: dict[str, str], candidates: tuple[str, ...]) -> str | None:
    """Return the original header for the first candidate present."""
    for candidate in candidates:
        if candidate in headers:
            return headers[candidate]
    return None


def _parse_quantity(value: str | None) -> int | None:
    """Floor a quantity cell to a non-negative int; None if not a number."""
    if value is None:
        return None
    try:
        number = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return max(0, math.floor(number))


def _optional(row: dict[str, str | None], column: str | None) -> str | None:
    if column is None:
        return None
    value = (row.get(column) or "").strip()
    return value or None


def parse_collection_csv(text: str) -> list[ImportRow]:
    """
    Parse a collection CSV export.

    Expected columns:
        - Name / Card Name
        - Quantity / Count / Qty
        - Edition / Set / Set Name / Set Code (optional)
        - Collector Number / Card Number / Number (optional)

    Returns:
        Parsed rows in file order. Empty if the name or quantity
        column is missing.
    """
    reader = csv.DictReader(StringIO(text.lstrip("\ufeff")))

    if not reader.fieldnames:
        return []

    # Normalized header -> original header (first occurrence wins)
    headers: dict[str, str] = {}
    for column in reader.fieldnames:
        headers.setdefault(column.strip().lower(), column)

    name_col = _find_column(headers, NAME_HEADERS)
    qty_col = _find_column(headers, QUANTITY_HEADERS)
    if not name_col or not qty_col:
        return []

    set_col = _find_column(headers, SET_HEADERS)
    number_col = _find_column(headers, NUMBER_HEADERS)

    rows: list[ImportRow] = []
    for row in reader:
        name = (row.get(name_col) or "").strip()
        if not name:
            continue

        quantity = _parse_quantity(row.get(qty_col))
        if quantity is None:
            continue

        rows.append(
            ImportRow(
                card_name=name,
                quantity=quantity,
                set_name=_optional(row, set_col),
                collector_number=_optional(row, number_col),
            )
        )

    return rows
