"""Batched HTTP fetcher for the Tencent quote service."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import certifi
import requests

from ministock.config import DEFAULT_BASE_URL, DEFAULT_ENCODINGS
from ministock.errors import DecodeError, EmptyResponseError, NetworkError

logger = logging.getLogger(__name__)


class QuoteFetcher:
    """Fetch raw quote text for a batch of symbols.

    One GET per call, all symbols comma-joined into the path. The body is
    decoded with the first candidate encoding that accepts it.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        encodings: Sequence[str] = DEFAULT_ENCODINGS,
        session: Any | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.encodings = tuple(encodings)
        if session is None:
            session = requests.Session()
            session.verify = certifi.where()
        self.session = session

    def build_url(self, symbols: Sequence[str]) -> str:
        return f"{self.base_url}/q={','.join(symbols)}"

    def fetch(self, symbols: Sequence[str]) -> str:
        """Return decoded response text for ``symbols``.

        Raises:
            NetworkError: Connection failure, timeout or HTTP error status.
            EmptyResponseError: The body was empty.
            DecodeError: No candidate encoding decoded the body.
        """
        url = self.build_url(symbols)
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise NetworkError(f"Quote request failed: {exc}") from exc

        body = resp.content
        if not body:
            raise EmptyResponseError(f"Empty response for {len(symbols)} symbols")
        return self.decode(body)

    def decode(self, body: bytes) -> str:
        for encoding in self.encodings:
            try:
                text = body.decode(encoding)
            except UnicodeDecodeError:
                continue
            except LookupError:
                logger.warning("Skipping unknown encoding %r", encoding)
                continue
            logger.debug("Decoded %d bytes as %s", len(body), encoding)
            return text
        raise DecodeError(
            f"Could not decode {len(body)} bytes with any of {list(self.encodings)}"
        )

    def close(self) -> None:
        self.session.close()
