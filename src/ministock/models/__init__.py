"""Quote data models."""

from ministock.models.quote import SENTINEL, Direction, ParsedQuote
from ministock.models.record import QuoteRecord

__all__ = [
    "SENTINEL",
    "Direction",
    "ParsedQuote",
    "QuoteRecord",
]
