"""QuotePoller — timed fetch -> parse -> reconcile loop."""

from __future__ import annotations

import itertools
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterable

from ministock.board import QuoteBoard
from ministock.config import MIN_INTERVAL, DisplayMode, MiniStockConfig
from ministock.errors import PollerStateError, QuoteFeedError
from ministock.fetcher import QuoteFetcher
from ministock.models.record import QuoteRecord
from ministock.parser import parse_response

if TYPE_CHECKING:
    from ministock.settings import SettingsStore

logger = logging.getLogger(__name__)


@dataclass
class PollerStats:
    """Counters for fetch cycles since the poller was created."""

    issued: int = 0
    applied: int = 0
    failed: int = 0
    stale: int = 0
    last_error: QuoteFeedError | None = None
    last_success_at: datetime | None = None


class QuotePoller:
    """Drive the quote board from a repeating timer.

    Each tick takes a snapshot of the board's symbols, tags it with the next
    sequence number and hands it to a small worker pool, so the timer never
    waits on the network. A failed cycle leaves the board untouched; the
    next tick is the retry.

    Usage::

        poller = QuotePoller(MiniStockConfig(symbols="sh600000,sz000001"))
        poller.board.subscribe(print)
        poller.start()
        ...
        poller.stop()
    """

    def __init__(
        self,
        config: MiniStockConfig | None = None,
        *,
        board: QuoteBoard | None = None,
        fetcher: QuoteFetcher | None = None,
        settings: SettingsStore | None = None,
    ) -> None:
        self.config = config or MiniStockConfig()
        self.board = board if board is not None else QuoteBoard(self.config.symbols)
        self.fetcher = fetcher or QuoteFetcher(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            encodings=self.config.encodings,
        )
        self.settings = settings
        self.stats = PollerStats()

        self._state_lock = threading.Lock()
        self._stats_lock = threading.Lock()
        self._sequence = itertools.count()
        self._stop_event: threading.Event | None = None
        self._timer: threading.Thread | None = None
        self._executor: ThreadPoolExecutor | None = None

    # ---------------------------------------------------------------- state

    @property
    def is_updating(self) -> bool:
        with self._state_lock:
            return self._timer is not None

    @property
    def interval(self) -> int:
        return self.config.effective_interval

    @property
    def records(self) -> tuple[QuoteRecord, ...]:
        return self.board.records

    # -------------------------------------------------------- configuration

    def set_symbols(self, raw: str | Iterable[str]) -> tuple[QuoteRecord, ...]:
        """Rebuild the board with sentinel records and persist the list.

        Allowed while running: in-flight cycles still carry the old symbol
        snapshot and only update records whose symbol survived.
        """
        records = self.board.set_symbols(raw)
        self.config.symbols = ",".join(r.symbol for r in records)
        self._save()
        return records

    def set_interval(self, seconds: int | str) -> None:
        if self.is_updating:
            raise PollerStateError("Stop polling before changing the update interval")
        self.config.update_interval = seconds
        self._save()

    def set_display_mode(self, mode: DisplayMode) -> None:
        self.config.display_mode = mode
        self._save()

    # ------------------------------------------------------------ lifecycle

    def start(self, interval: int | str | None = None) -> bool:
        """Fetch once now, then every ``interval`` seconds.

        Returns False without side effects if already running or if there
        are no symbols to poll.
        """
        if self.is_updating:
            return False
        if interval is not None:
            self.set_interval(interval)

        with self._state_lock:
            if self._timer is not None:
                return False
            if not self.board.symbols:
                logger.info("No symbols configured; not starting")
                return False

            seconds = max(self.config.effective_interval, MIN_INTERVAL)
            stop_event = threading.Event()
            timer = threading.Thread(
                target=self._tick_loop,
                args=(stop_event, seconds),
                name="ministock-poller",
                daemon=True,
            )
            self._stop_event = stop_event
            self._timer = timer
            # First tick fires after ``seconds``; the immediate fetch is below.
            timer.start()

        logger.info("Polling %d symbols every %ds", len(self.board), seconds)
        self._submit_cycle()
        return True

    def stop(self) -> bool:
        """Cancel future ticks. In-flight fetches still complete and apply."""
        with self._state_lock:
            if self._timer is None:
                return False
            timer, stop_event = self._timer, self._stop_event
            self._timer = None
            self._stop_event = None

        if stop_event is not None:
            stop_event.set()
        if timer is not threading.current_thread():
            timer.join()
        logger.info("Polling stopped")
        return True

    def close(self) -> None:
        """Stop polling, wait for in-flight fetches and release the session."""
        self.stop()
        with self._state_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
        self.fetcher.close()

    def __enter__(self) -> QuotePoller:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --------------------------------------------------------------- cycles

    def refresh(self) -> bool:
        """Run one fetch cycle on the calling thread.

        Returns True if the board was updated.
        """
        symbols = self.board.symbols
        if not symbols:
            return False
        return self._run_cycle(self._next_sequence(), symbols)

    def _tick_loop(self, stop_event: threading.Event, seconds: int) -> None:
        while not stop_event.wait(seconds):
            self._submit_cycle()

    def _submit_cycle(self) -> Future[bool] | None:
        symbols = self.board.symbols
        if not symbols:
            return None
        sequence = self._next_sequence()
        future = self._get_executor().submit(self._run_cycle, sequence, symbols)
        future.add_done_callback(self._log_crash)
        return future

    def _run_cycle(self, sequence: int, symbols: list[str]) -> bool:
        with self._stats_lock:
            self.stats.issued += 1

        try:
            text = self.fetcher.fetch(symbols)
        except QuoteFeedError as exc:
            logger.warning("Quote fetch %d failed [%s]: %s", sequence, exc.code.value, exc)
            with self._stats_lock:
                self.stats.failed += 1
                self.stats.last_error = exc
            return False

        parsed = parse_response(text)
        if len(parsed) < len(symbols):
            logger.debug(
                "Cycle %d parsed %d of %d symbols", sequence, len(parsed), len(symbols),
            )

        applied = self.board.apply(parsed, sequence)
        with self._stats_lock:
            if applied:
                self.stats.applied += 1
                self.stats.last_success_at = datetime.now(timezone.utc)
            else:
                self.stats.stale += 1
        return applied

    # ------------------------------------------------------------- internal

    def _next_sequence(self) -> int:
        with self._stats_lock:
            return next(self._sequence)

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._state_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=max(self.config.max_workers, 1),
                    thread_name_prefix="ministock-fetch",
                )
            return self._executor

    @staticmethod
    def _log_crash(future: Future[bool]) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error("Quote cycle crashed", exc_info=exc)

    def _save(self) -> None:
        if self.settings is not None:
            self.settings.save(self.config)
