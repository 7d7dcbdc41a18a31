# -*- coding: utf-8 -*-
"""Unit tests for TradeRecord and OutgoingTradeRow row factories."""

from __future__ import annotations

from typing import Any

import pytest

from trade_offer_monitor.exceptions import InvalidRecordError
from trade_offer_monitor.models.outgoing_record import OutgoingRecord, OutgoingTradeRow
from trade_offer_monitor.models.trade_record import TradeRecord


def _row(**overrides: Any) -> dict[str, Any]:
    row: dict[str, Any] = {
        "tradeId": "uc_1",
        "memberId": "42",
        "memberName": " Alice ",
        "memberPoints": "350",
        "country": "CA",
        "cardName": "Island",
        "cardPoints": 75,
        "cardSet": "Alpha",
    }
    row.update(overrides)
    return row


def test_from_row_parses_camel_case_row() -> None:
    record = TradeRecord.from_row(_row())

    assert record == TradeRecord(
        trade_id="uc_1",
        member_id="42",
        member_name="Alice",
        member_points=350,
        country="CA",
        card_name="Island",
        card_points=75,
        card_set="Alpha",
    )


@pytest.mark.parametrize(
    "overrides",
    [
        {"tradeId": None},
        {"memberId": "  "},
        {"cardPoints": -1},
        {"cardPoints": "12.5"},
        {"memberPoints": True},
    ],
)
def test_from_row_rejects_malformed_rows(overrides: dict[str, Any]) -> None:
    with pytest.raises(InvalidRecordError):
        TradeRecord.from_row(_row(**overrides))


def test_outgoing_row_without_member_keeps_none() -> None:
    row = OutgoingTradeRow.from_row({"memberName": "Bob", "cardPoints": 30})

    assert row.member_id is None
    assert row.card_points == 30


def test_outgoing_record_folds_rows() -> None:
    first = OutgoingTradeRow(member_id="m1", member_name="Bob", card_points=30)
    second = OutgoingTradeRow(member_id="m1", member_name="Bob", card_points=20)

    record = OutgoingRecord.first("m1", first).with_row(second)

    assert record.card_qty == 2
    assert record.total_points == 50
