# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from trade_offer_monitor.clients.http import AsyncHttpClient
from trade_offer_monitor.clients.record_feed import RecordFeedClient
from trade_offer_monitor.config import Settings, get_settings
from trade_offer_monitor.events.bus import get_event_bus
from trade_offer_monitor.ingestion import BlockingStateFlag, RecordParser
from trade_offer_monitor.models.session import MonitorSession
from trade_offer_monitor.notifications.notification_manager import NotificationService
from trade_offer_monitor.notifications.strategies.base import BaseNotificationStrategy
from trade_offer_monitor.notifications.strategies.console import ConsoleNotifier
from trade_offer_monitor.notifications.stylers.notification_styler import AlertNotificationStyler
from trade_offer_monitor.persistence.repositories import (
    ISettingsRepository,
    InMemorySettingsRepository,
    JsonFileSettingsRepository,
)
from trade_offer_monitor.services.aggregation import OutgoingAggregator, TradeAggregator
from trade_offer_monitor.services.alerts import AlertEngine
from trade_offer_monitor.services.filtering import TradeFilter
from trade_offer_monitor.services.notifications import (
    NotificationDisplaySink,
    ReloadFailedNotifier,
)
from trade_offer_monitor.services.poll_cycle import PollCycleService
from trade_offer_monitor.services.reload import ReloadScheduler


def _build_notification_notifiers(
    settings: Settings,
    styler: AlertNotificationStyler,
) -> list[BaseNotificationStrategy]:
    notifiers: list[BaseNotificationStrategy] = []
    if settings.console.enabled:
        notifiers.append(ConsoleNotifier(settings=settings, styler=styler))
    return notifiers


def _build_settings_repository(settings: Settings) -> ISettingsRepository:
    if settings.store.persist:
        return JsonFileSettingsRepository(settings.store.settings_path)
    return InMemorySettingsRepository()


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, feed client, pipeline, notifications, scheduler."""

    config = providers.Callable(get_settings)

    event_bus = providers.Callable(get_event_bus)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    record_parser = providers.Singleton(RecordParser)

    record_feed_client = providers.Singleton(
        RecordFeedClient,
        http_client=http_client,
        settings=config,
        parser=record_parser,
    )

    blocking_probe = providers.Singleton(BlockingStateFlag)

    settings_repository = providers.Singleton(_build_settings_repository, config)

    session = providers.Singleton(MonitorSession)

    notification_styler = providers.Singleton(AlertNotificationStyler)

    notification_service = providers.Singleton(
        NotificationService,
        notifiers=providers.Callable(_build_notification_notifiers, config, notification_styler),
    )

    trade_aggregator = providers.Singleton(TradeAggregator)

    outgoing_aggregator = providers.Singleton(OutgoingAggregator)

    alert_engine = providers.Singleton(
        AlertEngine,
        notification_service=notification_service,
        event_bus=event_bus,
    )

    trade_filter = providers.Singleton(TradeFilter)

    poll_cycle_service = providers.Singleton(
        PollCycleService,
        aggregator=trade_aggregator,
        alert_engine=alert_engine,
        trade_filter=trade_filter,
    )

    display_sink = providers.Singleton(
        NotificationDisplaySink,
        notification_service=notification_service,
    )

    reload_failed_notifier = providers.Singleton(
        ReloadFailedNotifier,
        notification_service=notification_service,
        event_bus=event_bus,
    )

    reload_scheduler = providers.Singleton(
        ReloadScheduler,
        ingestor=record_feed_client,
        poll_cycle=poll_cycle_service,
        session=session,
        settings=config,
        outgoing_aggregator=outgoing_aggregator,
        blocking_probe=blocking_probe,
        settings_repository=settings_repository,
        display=display_sink,
        event_bus=event_bus,
    )
