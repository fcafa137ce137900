"""Parsed quote data model."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

SENTINEL = "--"


class Direction(Enum):
    """Sign of the change against the previous close."""

    UP = "up"
    DOWN = "down"
    FLAT = "flat"

    @classmethod
    def from_percent(cls, percent: float) -> Direction:
        if percent > 0:
            return cls.UP
        if percent < 0:
            return cls.DOWN
        return cls.FLAT


def format_price(price: Decimal | None) -> str:
    """Price as the service sent it, or the sentinel when unknown."""
    return SENTINEL if price is None else str(price)


def format_percent(percent: float | None) -> str:
    """Two-decimal percent with a trailing ``%``, or the sentinel."""
    return SENTINEL if percent is None else f"{percent:.2f}%"


@dataclass(frozen=True)
class ParsedQuote:
    """Fields extracted for one symbol from a quote response.

    Attributes:
        name: Display name (field 1).
        price: Current price (field 3), kept as the exact decimal text sent.
        previous_close: Previous close (field 4).
        change_percent: ``(price - previous_close) / previous_close * 100``.
        direction: Sign of ``change_percent``.
    """

    name: str
    price: Decimal
    previous_close: Decimal
    change_percent: float
    direction: Direction

    @property
    def price_text(self) -> str:
        return format_price(self.price)

    @property
    def change_text(self) -> str:
        return format_percent(self.change_percent)
