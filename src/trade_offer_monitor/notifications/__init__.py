"""Notification subsystem."""

from trade_offer_monitor.notifications.notification_manager import (
    NotificationService,
)
from trade_offer_monitor.notifications.strategies import (
    BaseNotificationStrategy,
    ConsoleNotifier,
)
from trade_offer_monitor.notifications.stylers import AlertNotificationStyler
from trade_offer_monitor.notifications.types import (
    AlertEffect,
    NotificationMessage,
    NotificationStyler,
)

__all__ = [
    "AlertEffect",
    "AlertNotificationStyler",
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "NotificationMessage",
    "NotificationService",
    "NotificationStyler",
]
