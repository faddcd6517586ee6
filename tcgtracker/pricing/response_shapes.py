"""
Upstream response decoding.

The price API does not commit to a single response shape. Three top-level
shapes have been observed and are all accepted:

- ArrayShape:   [card, card, ...]
- WrappedShape: {"data": [card, card, ...]}
- SingleShape:  {card}

classify_response() tags a decoded JSON payload with its shape, and
decode_cards() turns any shape into the canonical list[RawCard].
Both are pure functions; nothing here performs I/O.
"""

from dataclasses import dataclass
from typing import Any

from tcgtracker.models.failure import ResponseShapeError
from tcgtracker.models.pricing import RawCard, RawVariant


@dataclass(frozen=True, slots=True)
class ArrayShape:
    """Bare JSON array of cards."""

    items: list[Any]


@dataclass(frozen=True, slots=True)
class WrappedShape:
    """Object carrying its cards under ``data``."""

    items: list[Any]


@dataclass(frozen=True, slots=True)
class SingleShape:
    """A single bare card object."""

    item: dict[str, Any]


ResponseShape = ArrayShape | WrappedShape | SingleShape

# Field aliases seen across upstream revisions, most preferred first
_SET_KEYS = ("set", "setName", "set_name")
_NUMBER_KEYS = ("number", "collectorNumber", "collector_number")


def classify_response(payload: Any) -> ResponseShape:
    """
    Tag a decoded JSON payload with its top-level shape.

    Raises:
        ResponseShapeError: If the payload is neither a list nor an object
    """
    if isinstance(payload, list):
        return ArrayShape(items=payload)

    if isinstance(payload, dict):
        if "data" in payload:
            data = payload["data"]
            if isinstance(data, list):
                return WrappedShape(items=data)
            if isinstance(data, dict):
                return WrappedShape(items=[data])
            if data is None:
                return WrappedShape(items=[])
        return SingleShape(item=payload)

    raise ResponseShapeError(f"Unexpected response shape: {type(payload).__name__}")


def decode_cards(shape: ResponseShape) -> list[RawCard]:
    """Decode any response shape into a list of RawCard, skipping malformed entries."""
    if isinstance(shape, SingleShape):
        return [_decode_card(shape.item)]
    return [_decode_card(item) for item in shape.items if isinstance(item, dict)]


def parse_response(payload: Any) -> list[RawCard]:
    """Classify and decode in one step."""
    return decode_cards(classify_response(payload))


def _decode_card(item: dict[str, Any]) -> RawCard:
    return RawCard(
        name=_text(item.get("name")),
        set_name=_set_name(item),
        number=_first_text(item, _NUMBER_KEYS),
        variants=_decode_variants(item.get("variants")),
    )


def _decode_variants(raw: Any) -> list[RawVariant]:
    """Normalize absent / single object / list into a list of variants."""
    if raw is None:
        return []
    if isinstance(raw, dict):
        raw = [raw]
    if not isinstance(raw, list):
        return []

    return [
        RawVariant(
            id=_text(entry.get("id")),
            condition=_text(entry.get("condition")),
            printing=_text(entry.get("printing")),
            language=_text(entry.get("language")),
            price=entry.get("price"),
        )
        for entry in raw
        if isinstance(entry, dict)
    ]


def _set_name(item: dict[str, Any]) -> str | None:
    for key in _SET_KEYS:
        value = item.get(key)
        # Some revisions nest the set as {"id": ..., "name": ...}
        if isinstance(value, dict):
            value = value.get("name")
        text = _text(value)
        if text is not None:
            return text
    return None


def _first_text(item: dict[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        text = _text(item.get(key))
        if text is not None:
            return text
    return None


def _text(value: Any) -> str | None:
    if value is None or isinstance(value, dict | list | bool):
        return None
    text = str(value).strip()
    return text or None
