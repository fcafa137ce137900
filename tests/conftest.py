"""Shared fixtures for ministock tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from ministock.board import QuoteBoard
from ministock.models.record import QuoteRecord


def quote_line(
    symbol: str,
    name: str = "Name",
    price: str = "10.50",
    previous_close: str = "10.00",
    n_fields: int = 33,
) -> str:
    """One ``v_<symbol>="..."`` statement with ``n_fields`` tilde fields."""
    fields = ["1", name, symbol[2:], price, previous_close]
    fields += ["0"] * (n_fields - len(fields))
    return f'v_{symbol}="{"~".join(fields[:n_fields])}";'


class FakeFetcher:
    """Stands in for QuoteFetcher; returns queued texts or raises queued errors."""

    def __init__(self, *results: str | Exception) -> None:
        self.results = list(results)
        self.calls: list[list[str]] = []
        self.closed = False

    def fetch(self, symbols):
        self.calls.append(list(symbols))
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def sample_response() -> str:
    """Two well-formed quotes: one up, one down."""
    return "\n".join([
        quote_line("sh600000", "浦发银行", "10.50", "10.00"),
        quote_line("sz000001", "平安银行", "11.00", "11.50"),
    ])


@pytest.fixture
def sample_records() -> list[QuoteRecord]:
    return [QuoteRecord(symbol="sh600000"), QuoteRecord(symbol="sz000001")]


@pytest.fixture
def board() -> QuoteBoard:
    return QuoteBoard("sh600000,sz000001")
