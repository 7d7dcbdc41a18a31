# -*- coding: utf-8 -*-
"""NotificationDisplaySink: publishes each poll cycle as a notification."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from trade_offer_monitor.notifications.types import NotificationMessage
from trade_offer_monitor.services.poll_cycle.display_sink import IDisplaySink
from trade_offer_monitor.services.poll_cycle.poll_cycle_service import PollCycleResult

if TYPE_CHECKING:
    from trade_offer_monitor.notifications.notification_manager import NotificationService


class NotificationDisplaySink(IDisplaySink):
    """Sends a poll_cycle_complete message carrying alerts and table counters."""

    def __init__(
        self,
        notification_service: "NotificationService",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._notification_service = notification_service
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def render(self, result: PollCycleResult) -> None:
        message = f"Found {len(result.alerts)} alerts, {result.new_alert_count} new or expanded"
        if result.filtered_count:
            message += f"; filtered {result.filtered_count} trades"
        self._notification_service.notify(
            NotificationMessage(
                event_type="poll_cycle_complete",
                message=message,
                payload=result.to_payload(),
            )
        )
        self._logger.debug("poll_cycle_rendered", cycle=result.cycle)
