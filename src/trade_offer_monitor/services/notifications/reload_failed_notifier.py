# -*- coding: utf-8 -*-
"""ReloadFailedNotifier: listens to ReloadFailedEvent and sends notifications."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from trade_offer_monitor.events.analytics_events import ReloadFailedEvent
from trade_offer_monitor.notifications.types import NotificationMessage

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from trade_offer_monitor.notifications.notification_manager import NotificationService


_REASON_LABELS = {
    "barrier_timeout": "Feeds did not complete in time",
}


class ReloadFailedNotifier:
    """Subscribes to ReloadFailedEvent and tells the user the reload was abandoned."""

    def __init__(
        self,
        notification_service: "NotificationService",
        event_bus: Any,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._notification_service = notification_service
        self._event_bus: "EventBus" = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def start(self) -> None:
        self._event_bus.on(ReloadFailedEvent, self._on_failed)
        self._logger.debug("reload_failed_notifier_started")

    def stop(self) -> None:
        key = ReloadFailedEvent.__name__
        handlers = getattr(self._event_bus, "handlers", {})
        if key in handlers:
            handlers[key] = [h for h in handlers[key] if h != self._on_failed]
        self._logger.debug("reload_failed_notifier_stopped")

    def _on_failed(self, event: ReloadFailedEvent) -> None:
        label = _REASON_LABELS.get(event.reason, event.reason.replace("_", " ").capitalize())
        pending = ", ".join(event.pending_feeds) or "none"
        notification = NotificationMessage(
            event_type="reload_failed",
            message=f"Reload {event.cycle} abandoned: {label} (waiting on: {pending})",
            payload={
                "reason": event.reason,
                "cycle": event.cycle,
                "pending_feeds": list(event.pending_feeds),
                "pages_loaded": event.pages_loaded,
                "session_id": event.session_id,
            },
        )
        self._notification_service.notify(notification)
        self._logger.debug(
            "reload_failed_notified",
            reason=event.reason,
            cycle=event.cycle,
        )
