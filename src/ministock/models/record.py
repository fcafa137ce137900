"""Quote record — last-known state for one tracked symbol."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal

from ministock.models.quote import Direction, format_percent, format_price


@dataclass(frozen=True)
class QuoteRecord:
    """Last-known quote for a symbol.

    A fresh record carries sentinel values: empty name, no price, no change
    and ``Direction.FLAT``. The ``id`` is assigned at creation and survives
    every update, so two records for the same symbol built at different
    times are distinct.

    Attributes:
        symbol: Market-prefixed ticker, e.g. ``sh600000``.
        id: Stable identity for the lifetime of the record.
        name: Display name, empty until the first successful parse.
        price: Last price, ``None`` until the first successful parse.
        change_percent: Percent change vs previous close, ``None`` until known.
        direction: Sign of the change.
    """

    symbol: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    name: str = ""
    price: Decimal | None = None
    change_percent: float | None = None
    direction: Direction = Direction.FLAT

    @property
    def has_data(self) -> bool:
        return self.price is not None

    @property
    def price_text(self) -> str:
        return format_price(self.price)

    @property
    def change_text(self) -> str:
        return format_percent(self.change_percent)
