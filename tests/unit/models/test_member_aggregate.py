# -*- coding: utf-8 -*-
"""Unit tests for MemberAggregate and AlertRecord ordering."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from trade_offer_monitor.models.alert import AlertKind, AlertRecord, AlertStyle
from trade_offer_monitor.models.member_aggregate import MemberAggregate
from trade_offer_monitor.models.trade_record import TradeRecord


def test_add_offer_keeps_counters_consistent(
    trade_record_factory: Callable[..., TradeRecord],
) -> None:
    record = trade_record_factory(member_points=120)
    member = MemberAggregate.from_record(record)

    member.add_offer("a", 60)
    member.add_offer("b", 50)

    assert member.card_qty == 2
    assert member.total_card_points == 110
    assert member.first_trade_id == "a"
    assert member.can_afford_all is True


def test_add_offer_rejects_duplicate(
    trade_record_factory: Callable[..., TradeRecord],
) -> None:
    member = MemberAggregate.from_record(trade_record_factory())
    member.add_offer("a", 60)

    with pytest.raises(ValueError):
        member.add_offer("a", 60)
    assert member.card_qty == 1


def _alert(is_new: bool, value: int) -> AlertRecord:
    return AlertRecord(
        member_id=f"{is_new}-{value}",
        member_name="x",
        message="",
        style=AlertStyle.NORMAL,
        value=value,
        is_new=is_new,
        kind=AlertKind.BUNDLE,
    )


def test_sort_key_orders_new_first_then_value_desc() -> None:
    alerts = [_alert(False, 50), _alert(True, 10), _alert(True, 30)]

    ordered = sorted(alerts, key=AlertRecord.sort_key)

    assert [(a.is_new, a.value) for a in ordered] == [(True, 30), (True, 10), (False, 50)]


def test_alert_to_dict_uses_plain_values() -> None:
    data = _alert(True, 10).to_dict()

    assert data["kind"] == "bundle"
    assert data["style"] == ""
