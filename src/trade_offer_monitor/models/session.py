"""MonitorSession: explicit session context threaded through every component call.

Holds the user's current settings and the state that survives across poll
cycles (previous alert snapshot, seen alerts, sent trade counter, trigger-once
effect flags). Poll-scoped data (records, aggregates) never lives here.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

from trade_offer_monitor.models.monitor_settings import MonitorSettings
from trade_offer_monitor.models.trade_record import TradeRecord


@dataclass(slots=True)
class SessionState:
    """Mutable cross-poll state of one running session."""

    seen_alerts: dict[str, int] = field(default_factory=dict)
    """trade_id -> card_points of every offer ever alerted on. Only grows."""
    sent_trades: int = 0
    prev_alerts: dict[str, frozenset[str]] = field(default_factory=dict)
    """member_id -> trade ids alerted in the previous check (newness diffing only)."""
    is_first_alert_check: bool = True
    # Trigger-once guards; True until the first reload opens a cycle.
    has_played_sound: bool = True
    has_changed_title: bool = True
    has_shown_notification: bool = True
    card_points: dict[str, int] = field(default_factory=dict)
    """trade_id -> card_points of the last aggregated poll (for sent-trade analytics)."""

    def begin_cycle(self) -> None:
        """Re-arm the trigger-once effects for a new reload cycle."""
        self.has_played_sound = False
        self.has_changed_title = False
        self.has_shown_notification = False

    def remember_cards(self, records: Iterable[TradeRecord]) -> None:
        """Replace the card points lookup with the offers of the current poll."""
        self.card_points = {r.trade_id: r.card_points for r in records}

    def fold_seen_alert(self, trade_id: str, card_points: int) -> None:
        self.seen_alerts[trade_id] = card_points

    @property
    def alerted_points(self) -> int:
        """Sum of the values of all distinct offers alerted on this session."""
        return sum(self.seen_alerts.values())

    def reset(self) -> None:
        """Forget everything (session reset)."""
        self.seen_alerts.clear()
        self.sent_trades = 0
        self.prev_alerts.clear()
        self.is_first_alert_check = True
        self.has_played_sound = True
        self.has_changed_title = True
        self.has_shown_notification = True
        self.card_points.clear()


@dataclass(frozen=True, slots=True)
class SessionSummary:
    """Cumulative session statistics for reporting."""

    session_id: UUID
    started_at: datetime
    sent_trades: int
    alerted_trades: int
    alerted_points: int


@dataclass(slots=True)
class MonitorSession:
    """Settings plus cross-poll state for one monitoring session."""

    settings: MonitorSettings = field(default_factory=MonitorSettings)
    state: SessionState = field(default_factory=SessionState)
    id: UUID = field(default_factory=uuid4)
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.id,
            started_at=self.started_at,
            sent_trades=self.state.sent_trades,
            alerted_trades=len(self.state.seen_alerts),
            alerted_points=self.state.alerted_points,
        )
