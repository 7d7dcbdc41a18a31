# -*- coding: utf-8 -*-
"""Unit tests for RecordFeedClient (HTTP layer faked)."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

from trade_offer_monitor.clients.record_feed.record_feed_client import RecordFeedClient
from trade_offer_monitor.config import FeedSettings, Settings


def _settings() -> Settings:
    return Settings(feed=FeedSettings(base_url="http://feed.local/", trades_path="/trades"))


def _trade_row(trade_id: str) -> dict[str, Any]:
    return {
        "tradeId": trade_id,
        "memberId": "m1",
        "memberName": "Alice",
        "memberPoints": 300,
        "country": "US",
        "cardName": "Plains",
        "cardPoints": 25,
    }


async def test_fetch_trade_page_requests_page_and_parses() -> None:
    http = AsyncMock()
    http.get.return_value = [_trade_row("a"), {"tradeId": "broken"}]
    client = RecordFeedClient(http, _settings())

    trade_page = await client.fetch_trade_page(3)

    http.get.assert_awaited_once_with("http://feed.local/trades", params={"page": 3})
    assert trade_page.page == 3
    assert [r.trade_id for r in trade_page.records] == ["a"]


async def test_fetch_trade_page_accepts_items_envelope() -> None:
    http = AsyncMock()
    http.get.return_value = {"items": [_trade_row("a"), _trade_row("b")]}
    client = RecordFeedClient(http, _settings())

    trade_page = await client.fetch_trade_page(1)

    assert len(trade_page.records) == 2
    assert trade_page.row_count == 2


async def test_row_count_includes_malformed_rows() -> None:
    http = AsyncMock()
    http.get.return_value = [_trade_row(f"t{i}") for i in range(174)] + [{"tradeId": "bad"}]
    client = RecordFeedClient(http, _settings())

    trade_page = await client.fetch_trade_page(1)

    assert len(trade_page.records) == 174
    assert trade_page.row_count == 175


async def test_unexpected_payload_yields_no_rows(
    get_logger: Callable[[str], Any],
    null_logger: Any,
) -> None:
    http = AsyncMock()
    http.get.return_value = "oops"
    client = RecordFeedClient(http, _settings(), get_logger=get_logger)

    assert await client.fetch_outgoing() == []
    assert "record_feed_unexpected_payload" in null_logger.events("warning")


async def test_fetch_outgoing() -> None:
    http = AsyncMock()
    http.get.return_value = [{"memberId": "m1", "memberName": "A", "cardPoints": 40}]
    client = RecordFeedClient(http, _settings())

    rows = await client.fetch_outgoing()

    http.get.assert_awaited_once_with("http://feed.local/trades/active")
    assert rows[0].member_id == "m1"
    assert rows[0].card_points == 40


async def test_aclose_closes_http_client() -> None:
    http = AsyncMock()
    client = RecordFeedClient(http, _settings())

    await client.aclose()

    http.aclose.assert_awaited_once()
