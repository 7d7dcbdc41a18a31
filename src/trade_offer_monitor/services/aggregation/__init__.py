"""Aggregation of trade offers and outgoing trades."""

from trade_offer_monitor.services.aggregation.outgoing_aggregator import OutgoingAggregator
from trade_offer_monitor.services.aggregation.trade_aggregator import (
    AggregationResult,
    TradeAggregator,
)

__all__ = [
    "AggregationResult",
    "OutgoingAggregator",
    "TradeAggregator",
]
