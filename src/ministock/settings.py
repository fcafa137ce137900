"""Persisted user settings for the quote poller.

Settings live in a small JSON state file so the symbol list, interval and
display mode survive restarts. Nothing here is global: callers load a
``MiniStockConfig`` once and call ``save`` after each change.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

from ministock.config import (
    DEFAULT_ANIMATION_INTERVAL,
    DisplayMode,
    MiniStockConfig,
)

logger = logging.getLogger(__name__)

KEY_SYMBOLS = "stock_codes"
KEY_INTERVAL = "update_interval"
KEY_DISPLAY_MODE = "menu_bar_display_option"
KEY_ANIMATION_INTERVAL = "animation_interval"


class SettingsStore:
    """Load and save ``MiniStockConfig`` user fields as JSON.

    By default the file is rooted at the current working directory unless an
    explicit ``app_root`` or ``state_path`` is provided.
    """

    def __init__(
        self,
        state_path: Path | str | None = None,
        app_root: Path | str | None = None,
    ) -> None:
        root = Path(app_root).resolve() if app_root else Path.cwd()
        self._state_path = (
            Path(state_path)
            if state_path
            else root / "state" / "ministock_settings.json"
        )

    @property
    def path(self) -> Path:
        return self._state_path

    def load(self, base: MiniStockConfig | None = None) -> MiniStockConfig:
        """Return ``base`` (or defaults) overlaid with the persisted values."""
        config = replace(base) if base is not None else MiniStockConfig()
        state = self._load_state()

        symbols = state.get(KEY_SYMBOLS)
        if isinstance(symbols, str):
            config.symbols = symbols

        interval = state.get(KEY_INTERVAL)
        if isinstance(interval, (str, int)) and not isinstance(interval, bool):
            config.update_interval = interval

        mode = state.get(KEY_DISPLAY_MODE)
        if isinstance(mode, str):
            try:
                config.display_mode = DisplayMode(mode)
            except ValueError:
                logger.warning("Ignoring unknown display mode %r", mode)

        animation = state.get(KEY_ANIMATION_INTERVAL)
        if isinstance(animation, (int, float)) and not isinstance(animation, bool):
            config.animation_interval = float(animation)
        if config.animation_interval <= 0:
            config.animation_interval = DEFAULT_ANIMATION_INTERVAL

        return config

    def save(self, config: MiniStockConfig) -> None:
        state = self._load_state()
        state.update({
            KEY_SYMBOLS: config.symbols,
            KEY_INTERVAL: str(config.update_interval),
            KEY_DISPLAY_MODE: config.display_mode.value,
            KEY_ANIMATION_INTERVAL: config.animation_interval,
        })
        self._save_state(state)

    def _load_state(self) -> dict[str, Any]:
        if not self._state_path.exists():
            return {}
        try:
            raw = json.loads(self._state_path.read_text(encoding="utf-8"))
            if isinstance(raw, dict):
                return raw
        except (OSError, ValueError) as exc:
            logger.warning("Unreadable settings file %s: %s", self._state_path, exc)
        return {}

    def _save_state(self, state: dict[str, Any]) -> None:
        self._state_path.parent.mkdir(parents=True, exist_ok=True)
        self._state_path.write_text(
            json.dumps(state, indent=2, sort_keys=True, ensure_ascii=False),
            encoding="utf-8",
        )
