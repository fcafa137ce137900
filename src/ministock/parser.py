"""Tencent quote response parser.

The service answers with a run of JavaScript-style assignments::

    v_sh600000="1~浦发银行~600000~10.50~10.00~10.02~...";
    v_sz000001="51~平安银行~000001~11.20~11.31~...";

Each value is a ``~``-separated field list. Only the name (field 1), the
current price (field 3) and the previous close (field 4) are consumed.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation

from ministock.models.quote import Direction, ParsedQuote

logger = logging.getLogger(__name__)

MIN_FIELDS = 32
FIELD_DELIMITER = "~"
NAME_FIELD = 1
PRICE_FIELD = 3
PREVIOUS_CLOSE_FIELD = 4

_ASSIGNMENT_RE = re.compile(r'v_([A-Za-z0-9.]+)="([^"]+)"')


def parse_response(text: str) -> dict[str, ParsedQuote]:
    """Extract every well-formed quote from a response body.

    Malformed entries (too few fields, non-numeric prices, zero previous
    close) are skipped; they never fail the batch. If the regular
    assignment pattern matches nothing at all, a looser split-based pass
    over ``;``-separated fragments is tried instead.
    """
    parsed = _parse_pairs(_primary_pairs(text))
    if not parsed:
        fallback = _parse_pairs(_fallback_pairs(text))
        if fallback:
            logger.info("Primary pattern matched nothing; fallback parsed %d quotes", len(fallback))
        parsed = fallback
    return parsed


def parse_fields(fields: list[str]) -> ParsedQuote | None:
    """Build a ParsedQuote from a split field list, or None to skip it."""
    if len(fields) < MIN_FIELDS:
        return None

    price = _to_decimal(fields[PRICE_FIELD])
    previous_close = _to_decimal(fields[PREVIOUS_CLOSE_FIELD])
    if price is None or previous_close is None or previous_close == 0:
        return None

    percent = float((price - previous_close) / previous_close * 100)
    return ParsedQuote(
        name=fields[NAME_FIELD].strip(),
        price=price,
        previous_close=previous_close,
        change_percent=percent,
        direction=Direction.from_percent(percent),
    )


def _parse_pairs(pairs: list[tuple[str, str]]) -> dict[str, ParsedQuote]:
    result: dict[str, ParsedQuote] = {}
    for symbol, value in pairs:
        quote = parse_fields(value.split(FIELD_DELIMITER))
        if quote is None:
            logger.debug("Skipping unparsable quote for %s", symbol)
            continue
        result[symbol] = quote
    return result


def _primary_pairs(text: str) -> list[tuple[str, str]]:
    return [(m.group(1), m.group(2)) for m in _ASSIGNMENT_RE.finditer(text)]


def _fallback_pairs(text: str) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for fragment in text.split(";"):
        if "v_" not in fragment or '="' not in fragment:
            continue
        head = fragment.split("=", 1)[0]
        symbol = head.rsplit("_", 1)[-1].strip()
        value = fragment.rsplit("=", 1)[-1].strip().strip('"')
        if symbol:
            pairs.append((symbol, value))
    return pairs


def _to_decimal(raw: str) -> Decimal | None:
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        return None
    return value if value.is_finite() else None
