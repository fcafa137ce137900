"""Tests for quote models — sentinels, identity and formatting."""

import dataclasses
from decimal import Decimal

import pytest

from ministock.models.quote import SENTINEL, Direction, format_percent, format_price
from ministock.models.record import QuoteRecord


class TestDirection:
    def test_from_percent(self):
        assert Direction.from_percent(0.01) == Direction.UP
        assert Direction.from_percent(-0.01) == Direction.DOWN
        assert Direction.from_percent(0.0) == Direction.FLAT


class TestFormatting:
    def test_price_keeps_exact_text(self):
        assert format_price(Decimal("10.50")) == "10.50"
        assert format_price(None) == SENTINEL

    def test_percent_two_decimals(self):
        assert format_percent(5.0) == "5.00%"
        assert format_percent(-4.347826) == "-4.35%"
        assert format_percent(None) == SENTINEL


class TestQuoteRecord:
    def test_sentinel_defaults(self):
        record = QuoteRecord(symbol="sh600000")
        assert record.name == ""
        assert record.price_text == SENTINEL
        assert record.change_text == SENTINEL
        assert record.direction == Direction.FLAT
        assert not record.has_data

    def test_ids_distinct_per_creation(self):
        a = QuoteRecord(symbol="sh600000")
        b = QuoteRecord(symbol="sh600000")
        assert a.id != b.id

    def test_frozen(self):
        record = QuoteRecord(symbol="sh600000")
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.symbol = "sz000001"  # type: ignore[misc]
