"""Queued notification service fanning messages out to every channel."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

import structlog

from trade_offer_monitor.notifications.strategies import BaseNotificationStrategy
from trade_offer_monitor.notifications.types import NotificationMessage


@dataclass
class NotificationService:
    """Deliver alert effects and cycle summaries to the configured channels.

    notify() never blocks the caller: messages go through a bounded queue drained
    by a single worker task. A failing channel is logged and skipped so the other
    channels still receive the message.
    """

    notifiers: list[BaseNotificationStrategy]
    queue_size: int = 256
    get_logger: Callable[[str], Any] = field(default=structlog.get_logger)
    dropped: int = field(init=False, default=0)
    _queue: asyncio.Queue[NotificationMessage] | None = field(init=False, default=None)
    _worker_task: asyncio.Task[None] | None = field(init=False, default=None)
    _logger: Any = field(init=False)

    def __post_init__(self) -> None:
        self._logger = self.get_logger("NotificationService")

    @property
    def is_running(self) -> bool:
        return self._worker_task is not None and not self._worker_task.done()

    async def initialize(self) -> None:
        """Start every channel and the delivery worker."""
        for notifier in self.notifiers:
            await notifier.initialize()
        if not self.notifiers:
            self._logger.info("notification_no_channels")
            return
        self._queue = asyncio.Queue[NotificationMessage](maxsize=self.queue_size)
        self._worker_task = asyncio.create_task(
            self._worker_loop(self._queue), name="notification-worker"
        )
        self._logger.debug(
            "notification_started",
            notification_channels=[type(n).__name__ for n in self.notifiers],
            notification_queue_size=self.queue_size,
        )

    async def flush(self) -> None:
        """Wait until every queued message has been delivered."""
        if self._queue is not None:
            await self._queue.join()

    async def shutdown(self) -> None:
        """Drain the queue, stop the worker, then stop every channel."""
        queue, worker = self._queue, self._worker_task
        self._queue = None
        self._worker_task = None
        if queue is not None:
            queue.shutdown()
            await queue.join()
        if worker is not None:
            await worker
        for notifier in self.notifiers:
            await notifier.shutdown()
        self._logger.debug("notification_stopped", notification_dropped=self.dropped)

    def notify(self, message: NotificationMessage) -> None:
        """Enqueue one message. Silently ignored when no channel is configured."""
        queue = self._queue
        if queue is None:
            if not self.notifiers:
                return
            raise RuntimeError("NotificationService not initialized")
        try:
            queue.put_nowait(message)
        except asyncio.QueueFull:
            self.dropped += 1
            self._logger.warning(
                "notification_queue_full_dropped",
                notification_event_type=message.event_type,
            )

    def notify_many(self, messages: Iterable[NotificationMessage]) -> None:
        for message in messages:
            self.notify(message)

    async def _worker_loop(self, queue: asyncio.Queue[NotificationMessage]) -> None:
        while True:
            try:
                message = await queue.get()
            except asyncio.QueueShutDown:
                break
            try:
                await self._deliver(message)
            finally:
                queue.task_done()

    async def _deliver(self, message: NotificationMessage) -> None:
        for notifier in self.notifiers:
            try:
                await notifier.send_notification(message)
            except Exception:
                self._logger.exception(
                    "notification_channel_failed",
                    notification_channel=type(notifier).__name__,
                    notification_event_type=message.event_type,
                )
