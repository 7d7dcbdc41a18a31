"""Notification stylers."""

from trade_offer_monitor.notifications.stylers.notification_styler import AlertNotificationStyler

__all__ = ["AlertNotificationStyler"]
