"""Notification channels."""

from trade_offer_monitor.notifications.strategies.base import BaseNotificationStrategy
from trade_offer_monitor.notifications.strategies.console import ConsoleNotifier

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
]
