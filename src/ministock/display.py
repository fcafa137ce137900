"""Presentation projections computed from quote records.

Nothing here is stored on the records; a UI calls these on each publish.
"""

from __future__ import annotations

from collections.abc import Sequence

from ministock.config import DEFAULT_ANIMATION_INTERVAL, DisplayMode
from ministock.models.quote import Direction
from ministock.models.record import QuoteRecord

PLACEHOLDER_TITLE = "多股票监控"

# Mainland convention: red for a rise, green for a fall.
DIRECTION_COLORS: dict[Direction, str] = {
    Direction.UP: "red",
    Direction.DOWN: "green",
    Direction.FLAT: "default",
}

WOODFISH_FRAMES = ("🎵", "🎶", "🎵", "🎶", "🎼")


def color_for(direction: Direction) -> str:
    return DIRECTION_COLORS[direction]


def woodfish_frame(index: int) -> str:
    return WOODFISH_FRAMES[index % len(WOODFISH_FRAMES)]


def animation_frame(elapsed: float, interval: float) -> int:
    """Frame index after ``elapsed`` seconds at one frame per ``interval``."""
    if interval <= 0:
        interval = DEFAULT_ANIMATION_INTERVAL
    return int(max(elapsed, 0.0) // interval)


def menu_bar_label(
    records: Sequence[QuoteRecord],
    mode: DisplayMode,
    frame_index: int = 0,
) -> str:
    """Status-bar text for the first tracked symbol.

    Shows the placeholder title when nothing is tracked.
    """
    if not records:
        return PLACEHOLDER_TITLE

    first = records[0]
    if mode is DisplayMode.PRICE:
        return first.price_text
    if mode is DisplayMode.CHANGE_PERCENT:
        return first.change_text
    if mode is DisplayMode.BOTH:
        return f"{first.price_text} {first.change_text}"
    return woodfish_frame(frame_index)


def format_record(record: QuoteRecord) -> str:
    """One-line card: name (symbol), price, change."""
    name = record.name or record.symbol
    return f"{name} ({record.symbol})  {record.price_text}  {record.change_text}"
