"""Terminal front end: ``python -m ministock``."""

from __future__ import annotations

import argparse
import logging
import sys
import threading
import time
from collections.abc import Sequence

from ministock.config import DisplayMode, parse_symbols, validate_config
from ministock.display import animation_frame, format_record, menu_bar_label
from ministock.errors import ConfigError
from ministock.logging_config import setup_logging
from ministock.models.record import QuoteRecord
from ministock.poller import QuotePoller
from ministock.settings import SettingsStore

logger = logging.getLogger("ministock")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ministock",
        description="Poll Tencent quotes for a list of symbols",
    )
    parser.add_argument("--symbols", help="Comma-separated symbols, e.g. sh600000,sz000001")
    parser.add_argument("--interval", help="Update interval in seconds (>= 1)")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in DisplayMode],
        help="Status label display mode",
    )
    parser.add_argument("--once", action="store_true", help="Fetch once, print and exit")
    parser.add_argument("--settings", help="Settings file (default: state/ministock_settings.json)")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser


def render(records: Sequence[QuoteRecord], mode: DisplayMode, frame_index: int = 0) -> str:
    lines = [menu_bar_label(records, mode, frame_index)]
    lines.extend(f"  {format_record(r)}" for r in records)
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    settings = SettingsStore(state_path=args.settings)
    config = settings.load()
    if args.symbols is not None:
        config.symbols = ",".join(parse_symbols(args.symbols))
    if args.interval is not None:
        config.update_interval = args.interval
    if args.mode is not None:
        config.display_mode = DisplayMode(args.mode)

    try:
        validate_config(config)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    settings.save(config)
    poller = QuotePoller(config, settings=settings)

    if args.once:
        with poller:
            poller.refresh()
            print(render(poller.records, config.display_mode))
        return 0

    started = time.monotonic()

    def current_frame() -> int:
        return animation_frame(time.monotonic() - started, config.animation_interval)

    def on_publish(records: tuple[QuoteRecord, ...]) -> None:
        print(render(records, config.display_mode, current_frame()), flush=True)

    poller.board.subscribe(on_publish)
    done = threading.Event()
    with poller:
        poller.start()
        try:
            if config.display_mode is DisplayMode.WOODFISH:
                while not done.wait(config.animation_interval):
                    label = menu_bar_label(poller.records, config.display_mode, current_frame())
                    print(label, flush=True)
            else:
                done.wait()
        except KeyboardInterrupt:
            logger.info("Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
