"""Quote feed error types."""

from __future__ import annotations

from enum import Enum


class QuoteFeedErrorCode(Enum):
    """Error classification codes."""

    NETWORK = "network"
    EMPTY_RESPONSE = "empty_response"
    DECODE_FAILED = "decode_failed"
    INVALID_CONFIG = "invalid_config"
    INVALID_STATE = "invalid_state"


class QuoteFeedError(Exception):
    """Quote feed exception with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether the next poll tick may succeed where this one failed.
    """

    default_code = QuoteFeedErrorCode.NETWORK
    default_retryable = True

    def __init__(
        self,
        message: str,
        code: QuoteFeedErrorCode | None = None,
        retryable: bool | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code or self.default_code
        self.retryable = self.default_retryable if retryable is None else retryable


class NetworkError(QuoteFeedError):
    """Transport or connection failure talking to the quote service."""


class EmptyResponseError(QuoteFeedError):
    """The quote service answered with a zero-byte body."""

    default_code = QuoteFeedErrorCode.EMPTY_RESPONSE


class DecodeError(QuoteFeedError):
    """No candidate encoding could decode the response body."""

    default_code = QuoteFeedErrorCode.DECODE_FAILED


class ConfigError(QuoteFeedError, ValueError):
    """Invalid symbol list, interval or display setting."""

    default_code = QuoteFeedErrorCode.INVALID_CONFIG
    default_retryable = False


class PollerStateError(QuoteFeedError, RuntimeError):
    """Operation not allowed in the poller's current state."""

    default_code = QuoteFeedErrorCode.INVALID_STATE
    default_retryable = False
