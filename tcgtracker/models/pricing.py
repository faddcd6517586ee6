"""
Price lookup models.

This module defines the trust boundary between the upstream price API
and the price results returned to callers.

INVARIANTS:
- CardReference is UNTRUSTED caller input (validated by pydantic)
- RawCard / RawVariant are UNTRUSTED upstream data, already coerced to lists
- VariantCandidate is the unit of matching, one per upstream variant
- Exactly one PriceResult exists per CardReference, in input order
"""

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Currency = Literal["USD"]


class CardReference(BaseModel):
    """A user's identification of a physical card printing."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(..., min_length=1, examples=["Lightning Bolt"])
    set_name: str | None = Field(default=None, alias="setName", examples=["Alpha"])
    collector_number: str | None = Field(default=None, alias="collectorNumber")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name cannot be blank")
        return value

    @field_validator("set_name", "collector_number", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value


class PriceRequest(BaseModel):
    """Batch price lookup request body."""

    cards: list[CardReference]


class PriceResult(BaseModel):
    """Resolved price for one card reference."""

    name: str
    price: float | None = None
    currency: Currency = "USD"
    error: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Serialize for the wire, omitting ``error`` when there is none."""
        payload = self.model_dump()
        if self.error is None:
            del payload["error"]
        return payload


@dataclass(frozen=True, slots=True)
class RawVariant:
    """
    One sellable condition/printing/language combination of a card.

    ``price`` is kept exactly as the upstream sent it; coercion happens
    at selection time.
    """

    id: str | None
    condition: str | None
    printing: str | None
    language: str | None
    price: Any


@dataclass(frozen=True, slots=True)
class RawCard:
    """One logical card from the upstream API, variants normalized to a list."""

    name: str | None
    set_name: str | None
    number: str | None
    variants: list[RawVariant] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class VariantCandidate:
    """
    A variant annotated with its owning card's identity.

    Attributes:
        card_index: Position of the owning card in the decoded card list
        parent_name: Owning card's name
        parent_set: Owning card's set name
        parent_number: Owning card's collector number
        condition: Variant condition (e.g. "Near Mint", "NM")
        printing: Variant printing (e.g. "Normal", "Foil")
        price: Raw upstream price value
    """

    card_index: int
    parent_name: str | None
    parent_set: str | None
    parent_number: str | None
    condition: str | None
    printing: str | None
    price: Any
