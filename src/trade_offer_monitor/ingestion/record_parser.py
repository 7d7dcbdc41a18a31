"""Turn raw feed rows into records, skipping rows that cannot be parsed."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

import structlog

from trade_offer_monitor.exceptions import InvalidRecordError
from trade_offer_monitor.models.outgoing_record import OutgoingTradeRow
from trade_offer_monitor.models.trade_record import TradeRecord


class RecordParser:
    """Parses trade and outgoing feed rows. Malformed rows are logged and dropped."""

    def __init__(
        self,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def parse_trades(self, rows: Iterable[Any], *, page: int | None = None) -> list[TradeRecord]:
        """Parse trade rows in order. Duplicates are kept; the aggregator drops them."""
        records: list[TradeRecord] = []
        skipped = 0
        for index, row in enumerate(rows):
            if not isinstance(row, Mapping):
                skipped += 1
                self._logger.warning(
                    "trade_row_skipped",
                    page=page,
                    row_index=index,
                    reason="row is not an object",
                )
                continue
            try:
                records.append(TradeRecord.from_row(row))
            except InvalidRecordError as e:
                skipped += 1
                self._logger.warning(
                    "trade_row_skipped",
                    page=page,
                    row_index=index,
                    trade_id=row.get("tradeId"),
                    reason=str(e),
                )
        if skipped:
            self._logger.info(
                "trade_rows_parsed",
                page=page,
                parsed=len(records),
                skipped=skipped,
            )
        return records

    def parse_outgoing(self, rows: Iterable[Any]) -> list[OutgoingTradeRow]:
        """Parse outgoing rows; rows without member linkage are kept for the folder to report."""
        parsed: list[OutgoingTradeRow] = []
        for index, row in enumerate(rows):
            if not isinstance(row, Mapping):
                self._logger.warning(
                    "outgoing_row_skipped",
                    row_index=index,
                    reason="row is not an object",
                )
                continue
            try:
                parsed.append(OutgoingTradeRow.from_row(row))
            except InvalidRecordError as e:
                self._logger.warning(
                    "outgoing_row_skipped",
                    row_index=index,
                    member_id=row.get("memberId"),
                    reason=str(e),
                )
        return parsed
