"""Custom exceptions for record feeds, settings and reload cycles."""

from __future__ import annotations


class TradeMonitorError(Exception):
    """Base exception for trade-offer-monitor errors."""

    pass


class MissingRequiredConfigError(TradeMonitorError):
    """Raised when a required configuration value is missing."""

    pass


class InvalidRecordError(TradeMonitorError, ValueError):
    """Raised when a feed row cannot be turned into a record (missing id, bad points)."""

    def __init__(self, message: str, *, row: object | None = None) -> None:
        super().__init__(message)
        self.row = row


class SettingsCorruptedError(TradeMonitorError):
    """Raised when persisted monitor settings cannot be decoded."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class FeedAPIError(TradeMonitorError):
    """Raised when a record feed request fails after retries."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class RateLimitError(FeedAPIError):
    """Raised when the feed returns HTTP 429 (Too Many Requests)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded (429)",
        *,
        url: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, url=url, status_code=429)
        self.retry_after = retry_after
