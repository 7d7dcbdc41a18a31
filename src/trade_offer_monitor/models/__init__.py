"""Domain models: records, aggregates, alerts, settings and session state."""

from trade_offer_monitor.models.alert import AlertKind, AlertRecord, AlertStyle
from trade_offer_monitor.models.member_aggregate import MemberAggregate
from trade_offer_monitor.models.monitor_settings import (
    MAX_PAGES_CAP,
    MIN_RELOAD_INTERVAL_SECONDS,
    SETTINGS_VERSION,
    AlertOptions,
    FilterOptions,
    MonitorSettings,
    migrate_settings_payload,
)
from trade_offer_monitor.models.outgoing_record import OutgoingRecord, OutgoingTradeRow
from trade_offer_monitor.models.session import MonitorSession, SessionState, SessionSummary
from trade_offer_monitor.models.trade_record import TradeRecord

__all__ = [
    "AlertKind",
    "AlertOptions",
    "AlertRecord",
    "AlertStyle",
    "FilterOptions",
    "MAX_PAGES_CAP",
    "MIN_RELOAD_INTERVAL_SECONDS",
    "MemberAggregate",
    "MonitorSession",
    "MonitorSettings",
    "OutgoingRecord",
    "OutgoingTradeRow",
    "SETTINGS_VERSION",
    "SessionState",
    "SessionSummary",
    "TradeRecord",
    "migrate_settings_payload",
]
