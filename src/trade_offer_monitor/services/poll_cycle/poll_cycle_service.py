# -*- coding: utf-8 -*-
"""PollCycleService: aggregate, check alerts, filter; always in that order."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import structlog
from structlog.contextvars import bound_contextvars

from trade_offer_monitor.models.alert import AlertRecord
from trade_offer_monitor.models.outgoing_record import OutgoingRecord
from trade_offer_monitor.models.session import MonitorSession
from trade_offer_monitor.models.trade_record import TradeRecord
from trade_offer_monitor.services.aggregation.trade_aggregator import TradeAggregator
from trade_offer_monitor.services.alerts.alert_engine import AlertEngine
from trade_offer_monitor.services.filtering.trade_filter import TradeFilter


@dataclass(frozen=True)
class PollCycleResult:
    """Everything the display layer needs after one poll."""

    cycle: int
    alerts: list[AlertRecord]
    new_alert_count: int
    hidden_trade_ids: list[str]
    filtered_count: int
    visible_count: int
    row_colors: dict[str, str] = field(default_factory=dict)
    point_warnings: list[str] = field(default_factory=list)
    duplicates_dropped: int = 0

    def to_payload(self) -> dict[str, Any]:
        """Summary dict for notifications and logs."""
        return {
            "cycle": self.cycle,
            "alert_count": len(self.alerts),
            "new_alert_count": self.new_alert_count,
            "filtered_count": self.filtered_count,
            "visible_count": self.visible_count,
            "duplicates_dropped": self.duplicates_dropped,
            "alerts": [a.to_dict() for a in self.alerts],
        }


class PollCycleService:
    """Runs one poll's decision pipeline over records whose feeds have both completed.

    The filter must see the has_alert flags set by the alert engine, so the
    order is fixed: aggregation, alert check, filter.
    """

    def __init__(
        self,
        aggregator: TradeAggregator,
        alert_engine: AlertEngine,
        trade_filter: TradeFilter,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._aggregator = aggregator
        self._alert_engine = alert_engine
        self._trade_filter = trade_filter
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def run(
        self,
        records: Iterable[TradeRecord],
        outgoing: Mapping[str, OutgoingRecord],
        session: MonitorSession,
        *,
        cycle: int = 0,
    ) -> PollCycleResult:
        with bound_contextvars(session_id=str(session.id), cycle=cycle):
            aggregation = self._aggregator.aggregate(records)
            session.state.remember_cards(aggregation.records)

            checked = self._alert_engine.check(aggregation, outgoing, session)
            filtered = self._trade_filter.apply(
                aggregation.records,
                aggregation.members,
                session.settings.filter,
            )

            self._logger.info(
                "poll_cycle_complete",
                trade_count=len(aggregation.records),
                member_count=len(aggregation.members),
                outgoing_member_count=len(outgoing),
                duplicates_dropped=aggregation.duplicates_dropped,
                alert_count=len(checked.alerts),
                new_alert_count=checked.new_alert_count,
                filtered_count=filtered.filtered_count,
                visible_count=filtered.visible_count,
            )
            return PollCycleResult(
                cycle=cycle,
                alerts=checked.alerts,
                new_alert_count=checked.new_alert_count,
                hidden_trade_ids=filtered.filtered_trade_ids,
                filtered_count=filtered.filtered_count,
                visible_count=filtered.visible_count,
                row_colors=checked.row_colors,
                point_warnings=checked.point_warnings,
                duplicates_dropped=aggregation.duplicates_dropped,
            )
