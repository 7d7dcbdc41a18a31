# -*- coding: utf-8 -*-
"""Analytics events (bubus BaseEvent) emitted by the scheduler and alert engine.

The core only dispatches these; formatting and transmission belong to whoever
subscribes.
"""

from __future__ import annotations

from typing import Literal

from bubus import BaseEvent  # type: ignore[import-untyped]


class ReloadStartedEvent(BaseEvent[None]):
    """Emitted when a reload cycle starts fetching feeds."""

    session_id: str
    cycle: int


class AlertRaisedEvent(BaseEvent[None]):
    """Emitted after an alert check that produced at least one alert."""

    session_id: str
    alert_count: int
    new_alert_count: int


class TradeSentEvent(BaseEvent[None]):
    """Emitted when the user confirms sending a card to a member."""

    session_id: str
    trade_id: str
    card_points: int
    """Value of the sent card; 0 when the offer was not in the last poll."""


class ReloadFailedEvent(BaseEvent[None]):
    """Emitted when a reload cycle is abandoned (a feed never completed)."""

    session_id: str
    cycle: int
    reason: Literal["barrier_timeout"]
    pending_feeds: list[str]
    """Feeds that had not completed: "trades", "outgoing"."""
    pages_loaded: int
