# -*- coding: utf-8 -*-
"""TradeAggregator: fold one poll's trade records into per-member aggregates."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

import structlog

from trade_offer_monitor.models.member_aggregate import MemberAggregate
from trade_offer_monitor.models.trade_record import TradeRecord


@dataclass(frozen=True)
class AggregationResult:
    """Output of one aggregation pass. Poll-scoped; never carried into the next poll."""

    records: list[TradeRecord]
    """Records kept, in input order, duplicates removed."""
    seen_trade_ids: frozenset[str]
    members: dict[str, MemberAggregate]
    """member_id -> aggregate, in member discovery order."""
    duplicates_dropped: int = 0


class TradeAggregator:
    """Single-pass aggregation with duplicate trade id detection.

    A repeated trade_id is discarded (first occurrence wins), never merged.
    Deterministic for a deterministic input order.
    """

    def __init__(
        self,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def aggregate(self, records: Iterable[TradeRecord]) -> AggregationResult:
        kept: list[TradeRecord] = []
        seen: set[str] = set()
        members: dict[str, MemberAggregate] = {}
        duplicates = 0

        for record in records:
            if record.trade_id in seen:
                duplicates += 1
                self._logger.debug(
                    "trade_duplicate_dropped",
                    trade_id=record.trade_id,
                    member_id=record.member_id,
                )
                continue
            seen.add(record.trade_id)
            kept.append(record)

            member = members.get(record.member_id)
            if member is None:
                member = MemberAggregate.from_record(record)
                members[record.member_id] = member
            member.add_offer(record.trade_id, record.card_points)

        return AggregationResult(
            records=kept,
            seen_trade_ids=frozenset(seen),
            members=members,
            duplicates_dropped=duplicates,
        )
