# -*- coding: utf-8 -*-
"""
Entry point for the trade offer monitor.

Orchestrates: logging, settings, container, notifications, reload scheduler,
shutdown (SIGINT or CancelledError) and the end-of-session summary.

Run with: trade-offer-monitor  (or python -m trade_offer_monitor.main)
"""
from __future__ import annotations

import asyncio
import signal
from typing import Any

import structlog

from trade_offer_monitor.DI import Container
from trade_offer_monitor.config import get_settings
from trade_offer_monitor.exceptions import MissingRequiredConfigError
from trade_offer_monitor.logging.config import configure_logging
from trade_offer_monitor.models.session import SessionSummary
from trade_offer_monitor.notifications.types import NotificationMessage


def _setup_sigint(shutdown_event: asyncio.Event) -> None:
    try:
        loop = asyncio.get_running_loop()
        loop.add_signal_handler(
            signal.SIGINT,
            lambda: shutdown_event.set(),
        )
    except NotImplementedError:
        pass  # Windows has no add_signal_handler


def summary_message(summary: SessionSummary) -> NotificationMessage:
    """End-of-session report: trades sent and points alerted on."""
    lines: list[str] = []
    if summary.sent_trades > 0:
        lines.append(f"You sent {summary.sent_trades} trades this session.")
    if summary.alerted_points > 0:
        lines.append(
            f"You were alerted to {summary.alerted_points} points "
            f"in {summary.alerted_trades} trades this session."
        )
    if not lines:
        lines.append("No alerts this session.")
    return NotificationMessage(
        event_type="session_summary",
        message="\n".join(lines),
        payload={
            "session_id": str(summary.session_id),
            "started_at": summary.started_at.isoformat(),
            "sent_trades": summary.sent_trades,
            "alerted_trades": summary.alerted_trades,
            "alerted_points": summary.alerted_points,
        },
    )


async def _log_summary(logger: Any, summary: SessionSummary) -> None:
    logger.info(
        "main_session_summary",
        session_id=str(summary.session_id),
        sent_trades=summary.sent_trades,
        alerted_trades=summary.alerted_trades,
        alerted_points=summary.alerted_points,
    )


async def run() -> None:
    settings = get_settings()
    configure_logging(settings)
    logger = structlog.get_logger("main")
    if not settings.feed.base_url.strip():
        logger.error("main_missing_feed_url", message="FEED__BASE_URL is not set")
        raise MissingRequiredConfigError("FEED__BASE_URL")

    container = Container()
    settings_repository = container.settings_repository()
    session = container.session()
    session.settings = await settings_repository.load()
    # Rewrites legacy payloads in the current format.
    await settings_repository.save(session.settings)

    notification_service = container.notification_service()
    await notification_service.initialize()
    reload_failed_notifier = container.reload_failed_notifier()
    reload_failed_notifier.start()
    scheduler = container.reload_scheduler()
    feed_client = container.record_feed_client()

    shutdown_event = asyncio.Event()
    _setup_sigint(shutdown_event)

    logger.info(
        "main_monitor_started",
        feed_base_url=settings.feed.base_url,
        reload_interval=session.settings.reload_interval,
        max_pages=session.settings.max_pages,
    )
    notification_service.notify(
        NotificationMessage(
            event_type="system_started",
            message="Trade offer monitor started",
            payload={"session_id": str(session.id)},
        )
    )

    try:
        await scheduler.start()
        await shutdown_event.wait()
    finally:
        summary = await scheduler.aclose()
        await _log_summary(logger, summary)
        reload_failed_notifier.stop()
        notification_service.notify(summary_message(summary))
        await notification_service.shutdown()
        await feed_client.aclose()
        logger.info("main_shutdown_complete")


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main", "summary_message"]

if __name__ == "__main__":
    main()
