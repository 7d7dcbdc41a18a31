# -*- coding: utf-8 -*-
"""Unit tests for the end-of-session summary message."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from trade_offer_monitor.main import summary_message
from trade_offer_monitor.models.session import SessionSummary


def _summary(**overrides: int) -> SessionSummary:
    return SessionSummary(
        session_id=uuid4(),
        started_at=datetime(2024, 1, 1, tzinfo=UTC),
        sent_trades=overrides.get("sent_trades", 0),
        alerted_trades=overrides.get("alerted_trades", 0),
        alerted_points=overrides.get("alerted_points", 0),
    )


def test_summary_without_activity() -> None:
    message = summary_message(_summary())

    assert message.event_type == "session_summary"
    assert message.message == "No alerts this session."


def test_summary_reports_sent_and_alerted() -> None:
    message = summary_message(_summary(sent_trades=3, alerted_trades=4, alerted_points=820))

    assert message.message.splitlines() == [
        "You sent 3 trades this session.",
        "You were alerted to 820 points in 4 trades this session.",
    ]
    assert message.payload is not None
    assert message.payload["alerted_points"] == 820
    assert message.payload["started_at"] == "2024-01-01T00:00:00+00:00"


def test_summary_only_sent_trades() -> None:
    message = summary_message(_summary(sent_trades=1))

    assert message.message == "You sent 1 trades this session."
