"""Offer filtering."""

from trade_offer_monitor.services.filtering.trade_filter import (
    FilterReason,
    FilterResult,
    TradeFilter,
)

__all__ = ["FilterReason", "FilterResult", "TradeFilter"]
