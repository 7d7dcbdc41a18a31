# -*- coding: utf-8 -*-
"""Unit tests for NotificationService, ConsoleNotifier and AlertNotificationStyler."""

from __future__ import annotations

import io
from typing import Any

import pytest

from trade_offer_monitor.config import ConsoleNotificationSettings, Settings
from trade_offer_monitor.notifications.notification_manager import NotificationService
from trade_offer_monitor.notifications.strategies.base import BaseNotificationStrategy
from trade_offer_monitor.notifications.strategies.console import ConsoleNotifier
from trade_offer_monitor.notifications.stylers.notification_styler import AlertNotificationStyler
from trade_offer_monitor.notifications.types import NotificationMessage


class _RecordingNotifier(BaseNotificationStrategy):
    def __init__(self, *, fail: bool = False) -> None:
        super().__init__(settings=Settings())
        self.sent: list[NotificationMessage] = []
        self.fail = fail
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        self._running = True

    async def shutdown(self) -> None:
        self._running = False

    async def send_notification(self, message: NotificationMessage) -> None:
        if self.fail:
            raise RuntimeError("channel down")
        self.sent.append(message)


def _message(event_type: str = "alert_title", **kwargs: Any) -> NotificationMessage:
    return NotificationMessage(event_type=event_type, message=kwargs.pop("message", "hi"), **kwargs)


async def test_messages_reach_every_channel() -> None:
    first, second = _RecordingNotifier(), _RecordingNotifier()
    service = NotificationService(notifiers=[first, second])
    await service.initialize()

    service.notify(_message())
    await service.flush()
    await service.shutdown()

    assert len(first.sent) == len(second.sent) == 1
    assert not first.is_running


async def test_failing_channel_does_not_block_others() -> None:
    broken, healthy = _RecordingNotifier(fail=True), _RecordingNotifier()
    service = NotificationService(notifiers=[broken, healthy])
    await service.initialize()

    service.notify_many([_message(), _message()])
    await service.shutdown()

    assert len(healthy.sent) == 2


async def test_notify_without_channels_is_noop() -> None:
    service = NotificationService(notifiers=[])
    await service.initialize()

    service.notify(_message())

    assert service.is_running is False


def test_notify_before_initialize_raises() -> None:
    service = NotificationService(notifiers=[_RecordingNotifier()])

    with pytest.raises(RuntimeError):
        service.notify(_message())


async def test_full_queue_drops_message() -> None:
    service = NotificationService(notifiers=[_RecordingNotifier()], queue_size=1)
    await service.initialize()

    service.notify(_message())
    service.notify(_message())

    assert service.dropped == 1
    await service.shutdown()


async def test_console_prints_styled_message_and_rings_bell() -> None:
    stream = io.StringIO()
    notifier = ConsoleNotifier(Settings(), AlertNotificationStyler(), stream=stream)
    await notifier.initialize()

    await notifier.send_notification(_message("alert_title", message="★ Trade alert! ★"))
    await notifier.send_notification(_message("alert_sound", message="alert.mp3"))

    output = stream.getvalue()
    assert "★ Trade alert! ★" in output
    assert output.endswith("\a")


async def test_console_disabled_prints_nothing() -> None:
    stream = io.StringIO()
    settings = Settings(console=ConsoleNotificationSettings(enabled=False))
    notifier = ConsoleNotifier(settings, AlertNotificationStyler(), stream=stream)
    await notifier.initialize()

    await notifier.send_notification(_message())

    assert stream.getvalue() == ""


def test_styler_renders_poll_cycle_counters() -> None:
    text = AlertNotificationStyler().render(
        _message(
            "poll_cycle_complete",
            payload={
                "cycle": 4,
                "alert_count": 1,
                "new_alert_count": 0,
                "visible_count": 10,
                "filtered_count": 2,
                "alerts": [{"value": 120, "style": "warning", "message": "Alice wants 2 cards"}],
            },
        )
    )

    assert "Poll cycle #4" in text
    assert "Visible trades: 10" in text
    assert "120!" in text
    assert "Alice wants 2 cards" in text


def test_styler_generic_lists_payload() -> None:
    text = AlertNotificationStyler().render(
        _message("session_summary", message="done", payload={"sent_trades": 3, "x": None})
    )

    assert "Session summary" in text
    assert "sent_trades: 3" in text
    assert "x:" not in text
