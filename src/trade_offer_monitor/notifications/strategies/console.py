# -*- coding: utf-8 -*-
"""Console notifier (print-based)."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from trade_offer_monitor.config import Settings
from trade_offer_monitor.notifications.strategies.base import BaseNotificationStrategy
from trade_offer_monitor.notifications.types import AlertEffect, NotificationMessage

if TYPE_CHECKING:  # pragma: no cover
    from trade_offer_monitor.notifications.types import NotificationStyler


class ConsoleNotifier(BaseNotificationStrategy):
    """Print notifications to a text stream (stdout by default).

    The sound effect is rendered as a terminal bell when console.bell_on_sound is set.
    """

    def __init__(
        self,
        settings: "Settings",
        styler: "NotificationStyler",
        *,
        stream: TextIO | None = None,
    ) -> None:
        super().__init__(settings)
        self._running = False
        self._styler = styler
        self._stream = stream

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        self._running = True

    async def shutdown(self) -> None:
        self._running = False

    async def send_notification(self, message: NotificationMessage) -> None:
        """Send a notification to the console."""
        if not self.is_running or not self.settings.console.enabled:
            return
        stream = self._stream or sys.stdout
        if message.event_type == AlertEffect.SOUND.event_type:
            if self.settings.console.bell_on_sound:
                stream.write("\a")
                stream.flush()
            return
        body = self._styler.render(message) if self._styler else message.message
        print(body, file=stream)
