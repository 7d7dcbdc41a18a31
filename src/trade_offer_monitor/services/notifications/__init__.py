"""Notification-backed services."""

from trade_offer_monitor.services.notifications.cycle_display import NotificationDisplaySink
from trade_offer_monitor.services.notifications.reload_failed_notifier import (
    ReloadFailedNotifier,
)

__all__ = ["NotificationDisplaySink", "ReloadFailedNotifier"]
