"""Quote poller configuration."""

from __future__ import annotations

import codecs
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from ministock.errors import ConfigError

DEFAULT_SYMBOLS = "sh600000,sh600001"
DEFAULT_INTERVAL = 5
MIN_INTERVAL = 1
DEFAULT_ANIMATION_INTERVAL = 1.0
DEFAULT_BASE_URL = "https://qt.gtimg.cn"
# GB18030 is a superset of GBK, which the service uses for mainland names.
DEFAULT_ENCODINGS = ("gb18030", "utf-8", "ascii", "latin-1")


class DisplayMode(Enum):
    """What the menu-bar label shows for the first tracked symbol."""

    PRICE = "price"
    CHANGE_PERCENT = "change_percent"
    BOTH = "both"
    WOODFISH = "woodfish"


def parse_symbols(raw: str | Iterable[str]) -> list[str]:
    """Split a comma-separated symbol string, trimming blanks and empties.

    Iterables are accepted too; each item is trimmed the same way. Order is
    kept and duplicates are not removed.
    """
    items = raw.split(",") if isinstance(raw, str) else raw
    return [s.strip() for s in items if s and s.strip()]


@dataclass
class MiniStockConfig:
    """Configuration for QuotePoller.

    Attributes:
        symbols: Comma-separated symbol list, e.g. "sh600000,sz000001".
        update_interval: Poll interval in seconds; a string as typed into a
            settings form is accepted and parsed by ``effective_interval``.
        display_mode: Menu-bar label mode.
        animation_interval: Frame interval for the woodfish label.
        base_url: Quote service root; requests go to ``{base_url}/q=...``.
        timeout_seconds: HTTP timeout per fetch.
        encodings: Candidate body encodings, tried in order.
        max_workers: Concurrent in-flight fetches.
    """

    symbols: str = DEFAULT_SYMBOLS
    update_interval: int | str = DEFAULT_INTERVAL
    display_mode: DisplayMode = DisplayMode.PRICE
    animation_interval: float = DEFAULT_ANIMATION_INTERVAL

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 10.0
    encodings: tuple[str, ...] = field(default_factory=lambda: DEFAULT_ENCODINGS)
    max_workers: int = 2

    @property
    def symbol_list(self) -> list[str]:
        return parse_symbols(self.symbols)

    @property
    def effective_interval(self) -> int:
        """Interval in whole seconds: unparsable -> default, below 1 -> 1."""
        try:
            interval = int(str(self.update_interval).strip())
        except ValueError:
            interval = DEFAULT_INTERVAL
        return max(interval, MIN_INTERVAL)


def validate_config(config: MiniStockConfig) -> None:
    """Reject settings a user should be told about before polling starts."""
    if not config.symbol_list:
        raise ConfigError("At least one stock symbol is required")

    try:
        interval = int(str(config.update_interval).strip())
    except ValueError:
        raise ConfigError(
            f"Update interval must be an integer, got {config.update_interval!r}"
        ) from None
    if interval < MIN_INTERVAL:
        raise ConfigError(f"Update interval must be at least {MIN_INTERVAL} second")

    if not config.encodings:
        raise ConfigError("At least one response encoding is required")
    for encoding in config.encodings:
        try:
            codecs.lookup(encoding)
        except LookupError:
            raise ConfigError(f"Unknown response encoding {encoding!r}") from None
