"""Merge freshly parsed quotes into the ordered record list."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import replace

from ministock.models.quote import ParsedQuote
from ministock.models.record import QuoteRecord


def merge(
    current: Sequence[QuoteRecord],
    parsed: Mapping[str, ParsedQuote],
) -> list[QuoteRecord]:
    """Return ``current`` with every matched symbol updated in place.

    Records without a parsed counterpart pass through untouched, so the
    result always has the same length and order as ``current``. ``id`` and
    ``symbol`` are never changed.
    """
    merged: list[QuoteRecord] = []
    for record in current:
        quote = parsed.get(record.symbol)
        if quote is None:
            merged.append(record)
            continue
        merged.append(replace(
            record,
            name=quote.name,
            price=quote.price,
            change_percent=quote.change_percent,
            direction=quote.direction,
        ))
    return merged
