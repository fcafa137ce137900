"""QuoteBoard — single-writer owner of the ordered record list."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping

from ministock.config import parse_symbols
from ministock.models.quote import ParsedQuote
from ministock.models.record import QuoteRecord
from ministock.reconciler import merge

logger = logging.getLogger(__name__)

Listener = Callable[[tuple[QuoteRecord, ...]], None]


class QuoteBoard:
    """Holds the current records and publishes each change to subscribers.

    Every mutation goes through ``set_symbols`` or ``apply`` under one lock,
    so concurrent fetch completions never interleave partial writes. Readers
    get immutable tuple snapshots.

    ``apply`` takes the sequence number the cycle was issued with; a
    completion older than the last applied one is dropped, so a slow
    response cannot overwrite fresher data.
    """

    def __init__(self, symbols: str | Iterable[str] = ()) -> None:
        self._lock = threading.Lock()
        # Held across update and publish so listeners see writes in order.
        self._write_lock = threading.RLock()
        self._records: tuple[QuoteRecord, ...] = ()
        self._listeners: list[Listener] = []
        self._last_sequence = -1
        if symbols:
            self.set_symbols(symbols)

    @property
    def records(self) -> tuple[QuoteRecord, ...]:
        with self._lock:
            return self._records

    @property
    def symbols(self) -> list[str]:
        return [r.symbol for r in self.records]

    def __len__(self) -> int:
        return len(self.records)

    def set_symbols(self, raw: str | Iterable[str]) -> tuple[QuoteRecord, ...]:
        """Replace the tracked symbols with fresh sentinel records."""
        records = tuple(QuoteRecord(symbol=s) for s in parse_symbols(raw))
        with self._write_lock:
            with self._lock:
                self._records = records
            logger.info("Tracking %d symbols: %s", len(records), ",".join(r.symbol for r in records))
            self._publish(records)
        return records

    def apply(
        self,
        parsed: Mapping[str, ParsedQuote],
        sequence: int | None = None,
    ) -> bool:
        """Reconcile ``parsed`` into the board; False if it was discarded as stale."""
        with self._write_lock:
            with self._lock:
                if sequence is not None:
                    if sequence < self._last_sequence:
                        logger.debug(
                            "Dropping stale cycle %d (last applied %d)",
                            sequence, self._last_sequence,
                        )
                        return False
                    self._last_sequence = sequence
                records = tuple(merge(self._records, parsed))
                self._records = records
            self._publish(records)
        return True

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, records: tuple[QuoteRecord, ...]) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(records)
            except Exception:  # noqa: BLE001
                logger.exception("Quote listener %r failed", listener)
