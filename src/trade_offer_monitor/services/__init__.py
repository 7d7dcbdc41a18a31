# -*- coding: utf-8 -*-
"""Application services."""

from trade_offer_monitor.services.aggregation import (
    AggregationResult,
    OutgoingAggregator,
    TradeAggregator,
)
from trade_offer_monitor.services.alerts import AlertCheckResult, AlertEngine
from trade_offer_monitor.services.bundle import BundleResult, best_bundle
from trade_offer_monitor.services.filtering import FilterReason, FilterResult, TradeFilter
from trade_offer_monitor.services.notifications import (
    NotificationDisplaySink,
    ReloadFailedNotifier,
)
from trade_offer_monitor.services.poll_cycle import (
    IDisplaySink,
    PollCycleResult,
    PollCycleService,
)
from trade_offer_monitor.services.reload import CycleToken, ReloadScheduler, ReloadState

__all__ = [
    "AggregationResult",
    "AlertCheckResult",
    "AlertEngine",
    "BundleResult",
    "CycleToken",
    "FilterReason",
    "FilterResult",
    "IDisplaySink",
    "NotificationDisplaySink",
    "OutgoingAggregator",
    "PollCycleResult",
    "PollCycleService",
    "ReloadFailedNotifier",
    "ReloadScheduler",
    "ReloadState",
    "TradeAggregator",
    "TradeFilter",
    "best_bundle",
]
