"""Configuration subpackage."""

from trade_offer_monitor.config.config import (
    AppSettings,
    ConsoleNotificationSettings,
    FeedSettings,
    LoggingSettings,
    SchedulerSettings,
    Settings,
    StoreSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "ConsoleNotificationSettings",
    "FeedSettings",
    "LoggingSettings",
    "SchedulerSettings",
    "Settings",
    "StoreSettings",
    "get_settings",
]
