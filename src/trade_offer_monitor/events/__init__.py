# -*- coding: utf-8 -*-
"""Event bus and event types."""

from trade_offer_monitor.events.analytics_events import (
    AlertRaisedEvent,
    ReloadFailedEvent,
    ReloadStartedEvent,
    TradeSentEvent,
)
from trade_offer_monitor.events.bus import get_event_bus, set_event_bus

__all__ = [
    "AlertRaisedEvent",
    "ReloadFailedEvent",
    "ReloadStartedEvent",
    "TradeSentEvent",
    "get_event_bus",
    "set_event_bus",
]
