"""Exceptions subpackage."""

from trade_offer_monitor.exceptions.exceptions import (
    FeedAPIError,
    InvalidRecordError,
    MissingRequiredConfigError,
    RateLimitError,
    SettingsCorruptedError,
    TradeMonitorError,
)

__all__ = [
    "FeedAPIError",
    "InvalidRecordError",
    "MissingRequiredConfigError",
    "RateLimitError",
    "SettingsCorruptedError",
    "TradeMonitorError",
]
