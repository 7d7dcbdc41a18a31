# -*- coding: utf-8 -*-
"""Record ingestor backed by JSON feeds served over HTTP."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, List, Optional, cast

import structlog
from structlog.contextvars import bound_contextvars

from trade_offer_monitor.clients.record_feed.schema import OutgoingRowSchema, TradeRowSchema
from trade_offer_monitor.config import Settings
from trade_offer_monitor.ingestion.base import IRecordIngestor, TradePage
from trade_offer_monitor.ingestion.record_parser import RecordParser
from trade_offer_monitor.models.outgoing_record import OutgoingTradeRow

if TYPE_CHECKING:
    from trade_offer_monitor.clients.http import AsyncHttpClient


class RecordFeedClient(IRecordIngestor):
    """Fetches trade pages and outgoing trades as structured JSON rows."""

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        parser: Optional[RecordParser] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client.
            settings: Application settings (uses settings.feed).
            parser: Row parser; a default one is built when omitted.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._parser = parser or RecordParser(get_logger=get_logger)
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _url(self, path: str) -> str:
        return f"{self._settings.feed.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _as_rows(self, data: Any, url: str) -> List[Any]:
        if isinstance(data, dict) and isinstance(data.get("items"), list):
            return cast(List[Any], data["items"])
        if not isinstance(data, list):
            self._logger.warning(
                "record_feed_unexpected_payload",
                url=url,
                payload_type=type(data).__name__,
            )
            return []
        return cast(List[Any], data)

    async def fetch_trade_page(self, page: int) -> TradePage:
        """GET {base}{trades_path}?page=N and parse the offers.

        row_count keeps every row the feed returned, malformed ones included,
        so a full page is still recognised as full.
        """
        url = self._url(self._settings.feed.trades_path)
        with bound_contextvars(record_feed_page=page):
            data = await self._http.get(url, params={"page": page})
            rows = cast(List[TradeRowSchema], self._as_rows(data, url))
            records = self._parser.parse_trades(rows, page=page)
            self._logger.debug(
                "record_feed_trade_page_fetched",
                rows=len(rows),
                records=len(records),
            )
            return TradePage(page=page, records=records, row_count=len(rows))

    async def fetch_outgoing(self) -> list[OutgoingTradeRow]:
        """GET {base}{outgoing_path} and parse the unshipped trades."""
        url = self._url(self._settings.feed.outgoing_path)
        data = await self._http.get(url)
        rows = cast(List[OutgoingRowSchema], self._as_rows(data, url))
        parsed = self._parser.parse_outgoing(rows)
        self._logger.debug(
            "record_feed_outgoing_fetched",
            rows=len(rows),
            parsed=len(parsed),
        )
        return parsed

    async def aclose(self) -> None:
        await self._http.aclose()
