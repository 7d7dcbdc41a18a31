# -*- coding: utf-8 -*-
"""Unit tests for OutgoingAggregator."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from trade_offer_monitor.models.outgoing_record import OutgoingTradeRow
from trade_offer_monitor.services.aggregation.outgoing_aggregator import OutgoingAggregator


def test_folds_rows_per_member(outgoing_row_factory: Callable[..., OutgoingTradeRow]) -> None:
    rows = [
        outgoing_row_factory(member_id="m1", card_points=30),
        outgoing_row_factory(member_id="m2", card_points=5),
        outgoing_row_factory(member_id="m1", card_points=20),
    ]

    folded = OutgoingAggregator().fold(rows)

    assert set(folded) == {"m1", "m2"}
    assert folded["m1"].card_qty == 2
    assert folded["m1"].total_points == 50
    assert folded["m2"].card_qty == 1


def test_rows_without_member_are_dropped_with_warning(
    outgoing_row_factory: Callable[..., OutgoingTradeRow],
    get_logger: Callable[[str], Any],
    null_logger: Any,
) -> None:
    rows = [
        outgoing_row_factory(member_id=None, member_name="Ghost", card_points=10),
        outgoing_row_factory(member_id="m1", card_points=30),
    ]

    folded = OutgoingAggregator(get_logger=get_logger).fold(rows)

    assert list(folded) == ["m1"]
    level, event, fields = null_logger.calls[0]
    assert (level, event) == ("warning", "outgoing_row_missing_member")
    assert fields["member_name"] == "Ghost"
    assert fields["row_index"] == 0
