"""ministock — polling quote board for Tencent market quotes.

Polls ``qt.gtimg.cn`` for a list of market-prefixed symbols, parses the
``v_<symbol>="~-fields"`` response and keeps an ordered list of last-known
quotes that survives partial or failed fetches.

Quick start::

    from ministock import create_poller_from_env
    poller = create_poller_from_env()
    poller.board.subscribe(lambda records: print(records))
    poller.start()
"""

from __future__ import annotations

import os

from ministock.board import QuoteBoard
from ministock.config import DisplayMode, MiniStockConfig, parse_symbols, validate_config
from ministock.errors import (
    ConfigError,
    DecodeError,
    EmptyResponseError,
    NetworkError,
    PollerStateError,
    QuoteFeedError,
    QuoteFeedErrorCode,
)
from ministock.fetcher import QuoteFetcher
from ministock.models.quote import SENTINEL, Direction, ParsedQuote
from ministock.models.record import QuoteRecord
from ministock.parser import parse_response
from ministock.poller import PollerStats, QuotePoller
from ministock.reconciler import merge
from ministock.settings import SettingsStore

__version__ = "0.1.0"

__all__ = [
    # Poller
    "QuotePoller",
    "PollerStats",
    "QuoteBoard",
    "QuoteFetcher",
    "create_poller_from_env",
    # Core functions
    "parse_response",
    "merge",
    # Config
    "MiniStockConfig",
    "DisplayMode",
    "SettingsStore",
    "parse_symbols",
    "validate_config",
    # Errors
    "QuoteFeedError",
    "QuoteFeedErrorCode",
    "NetworkError",
    "EmptyResponseError",
    "DecodeError",
    "ConfigError",
    "PollerStateError",
    # Models
    "QuoteRecord",
    "ParsedQuote",
    "Direction",
    "SENTINEL",
]


def create_poller_from_env() -> QuotePoller:
    """Zero-config factory — reads settings from env vars and the state file.

    Persisted settings are loaded first; environment variables override them.

    Environment variables:
        MINISTOCK_STATE_PATH: Settings file (default: "state/ministock_settings.json").
        MINISTOCK_SYMBOLS: Comma-separated symbol list.
        MINISTOCK_INTERVAL: Poll interval in seconds.
        MINISTOCK_DISPLAY_MODE: "price", "change_percent", "both" or "woodfish".
        MINISTOCK_BASE_URL: Quote service root (default: "https://qt.gtimg.cn").
        MINISTOCK_TIMEOUT: HTTP timeout in seconds (default: 10).
    """
    settings = SettingsStore(state_path=os.getenv("MINISTOCK_STATE_PATH"))
    config = settings.load()

    if os.getenv("MINISTOCK_SYMBOLS"):
        config.symbols = os.environ["MINISTOCK_SYMBOLS"]
    if os.getenv("MINISTOCK_INTERVAL"):
        config.update_interval = os.environ["MINISTOCK_INTERVAL"]
    if os.getenv("MINISTOCK_DISPLAY_MODE"):
        config.display_mode = DisplayMode(os.environ["MINISTOCK_DISPLAY_MODE"])
    config.base_url = os.getenv("MINISTOCK_BASE_URL", config.base_url)
    config.timeout_seconds = float(os.getenv("MINISTOCK_TIMEOUT", str(config.timeout_seconds)))

    return QuotePoller(config, settings=settings)
