# -*- coding: utf-8 -*-
"""TradeFilter: hide low-value offers and low-points members that raised no alert.

Pure logic, no I/O.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from trade_offer_monitor.models.member_aggregate import MemberAggregate
    from trade_offer_monitor.models.monitor_settings import FilterOptions
    from trade_offer_monitor.models.trade_record import TradeRecord


class FilterReason(str, Enum):
    """Which criterion removed an offer (the first one matched)."""

    CARD_VALUE = "card_value"
    MEMBER_POINTS = "member_points"


@dataclass(frozen=True)
class FilterResult:
    """Offers to hide and the resulting table counters."""

    filtered_trade_ids: list[str]
    reasons: dict[str, FilterReason] = field(default_factory=dict)
    filtered_count: int = 0
    visible_count: int = 0
    """len(records) - filtered_count; the table's "Total" counter."""


class TradeFilter:
    """Applies the card-value filter, then the member-points filter.

    Offers of members with an alert are never removed.
    """

    def __init__(
        self,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def apply(
        self,
        records: Sequence["TradeRecord"],
        members: Mapping[str, "MemberAggregate"],
        filter_options: "FilterOptions",
    ) -> FilterResult:
        filtered: list[str] = []
        reasons: dict[str, FilterReason] = {}

        for record in records:
            member = members.get(record.member_id)
            if member is not None and member.has_alert:
                continue
            member_points = member.member_points if member is not None else record.member_points

            reason: FilterReason | None = None
            if filter_options.cards_by_value and record.card_points < filter_options.cards_min_value:
                reason = FilterReason.CARD_VALUE
            elif (
                filter_options.members_by_points
                and member_points < filter_options.members_min_points
            ):
                reason = FilterReason.MEMBER_POINTS

            if reason is not None:
                filtered.append(record.trade_id)
                reasons[record.trade_id] = reason

        if filtered:
            self._logger.info("trades_filtered", filtered_count=len(filtered))
        return FilterResult(
            filtered_trade_ids=filtered,
            reasons=reasons,
            filtered_count=len(filtered),
            visible_count=len(records) - len(filtered),
        )
