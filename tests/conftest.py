# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from bubus import EventBus  # type: ignore[import-untyped]

from trade_offer_monitor.models.monitor_settings import MonitorSettings
from trade_offer_monitor.models.outgoing_record import OutgoingTradeRow
from trade_offer_monitor.models.session import MonitorSession
from trade_offer_monitor.models.trade_record import TradeRecord


class FakeEventBus:
    """Minimal event bus fake for unit tests."""

    def __init__(self) -> None:
        self.handlers: dict[str, list[Any]] = {}
        self.dispatched: list[Any] = []

    def on(self, event_type: type[Any], handler: Any) -> None:
        key = event_type.__name__
        self.handlers.setdefault(key, []).append(handler)

    def dispatch(self, event: Any) -> None:
        self.dispatched.append(event)
        for handler in self.handlers.get(type(event).__name__, []):
            handler(event)

    def of_type(self, event_type: type[Any]) -> list[Any]:
        return [e for e in self.dispatched if isinstance(e, event_type)]


class NullLogger:
    """Logger double that accepts any structlog-style call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def _record(self, level: str) -> Callable[..., None]:
        def _log(event: str, *args: Any, **kwargs: Any) -> None:
            self.calls.append((level, event, kwargs))

        return _log

    def __getattr__(self, level: str) -> Callable[..., None]:
        return self._record(level)

    def events(self, level: str | None = None) -> list[str]:
        return [e for lvl, e, _ in self.calls if level is None or lvl == level]


@pytest.fixture
def null_logger() -> NullLogger:
    return NullLogger()


@pytest.fixture
def get_logger(null_logger: NullLogger) -> Callable[[str], NullLogger]:
    """Logger factory handing out the shared null_logger."""
    return lambda _name: null_logger


@pytest.fixture
def fake_event_bus() -> FakeEventBus:
    return FakeEventBus()


@pytest.fixture
def event_bus() -> EventBus:
    """Isolated event bus instance for tests."""
    return EventBus(
        name="TradeOfferMonitorTests",
        max_history_size=200,
        wal_path=None,
    )


@pytest.fixture
def trade_record_factory() -> Callable[..., TradeRecord]:
    """Build TradeRecord with sensible defaults and easy overrides."""
    counter = {"n": 0}

    def _build(**overrides: Any) -> TradeRecord:
        counter["n"] += 1
        member_id = overrides.pop("member_id", "m1")
        return TradeRecord(
            trade_id=overrides.pop("trade_id", f"uc_{counter['n']}"),
            member_id=member_id,
            member_name=overrides.pop("member_name", f"Member {member_id}"),
            member_points=overrides.pop("member_points", 1000),
            country=overrides.pop("country", "US"),
            card_name=overrides.pop("card_name", f"Card {counter['n']}"),
            card_points=overrides.pop("card_points", 100),
            card_set=overrides.pop("card_set", ""),
        )

    return _build


@pytest.fixture
def outgoing_row_factory() -> Callable[..., OutgoingTradeRow]:
    def _build(**overrides: Any) -> OutgoingTradeRow:
        member_id = overrides.pop("member_id", "m1")
        return OutgoingTradeRow(
            member_id=member_id,
            member_name=overrides.pop("member_name", f"Member {member_id}"),
            card_points=overrides.pop("card_points", 30),
        )

    return _build


@pytest.fixture
def settings_factory() -> Callable[..., MonitorSettings]:
    """Build MonitorSettings from snake_case overrides: alert={...}, filter={...}, ..."""

    def _build(**overrides: Any) -> MonitorSettings:
        return MonitorSettings.model_validate(overrides)

    return _build


@pytest.fixture
def session() -> MonitorSession:
    """Fresh session with default settings."""
    return MonitorSession()
