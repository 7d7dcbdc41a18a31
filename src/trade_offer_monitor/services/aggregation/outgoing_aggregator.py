# -*- coding: utf-8 -*-
"""OutgoingAggregator: fold unshipped outgoing trades into one record per member."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

import structlog

from trade_offer_monitor.models.outgoing_record import OutgoingRecord, OutgoingTradeRow


class OutgoingAggregator:
    """Folds OutgoingTradeRow values by member_id. Rows without a member are dropped."""

    def __init__(
        self,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def fold(self, rows: Iterable[OutgoingTradeRow]) -> dict[str, OutgoingRecord]:
        folded: dict[str, OutgoingRecord] = {}
        for index, row in enumerate(rows):
            if not row.member_id:
                self._logger.warning(
                    "outgoing_row_missing_member",
                    row_index=index,
                    member_name=row.member_name or None,
                    card_points=row.card_points,
                )
                continue
            current = folded.get(row.member_id)
            folded[row.member_id] = (
                OutgoingRecord.first(row.member_id, row) if current is None else current.with_row(row)
            )
        return folded
