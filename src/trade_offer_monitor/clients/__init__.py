"""HTTP and feed clients."""

from trade_offer_monitor.clients.http import AsyncHttpClient
from trade_offer_monitor.clients.record_feed import RecordFeedClient

__all__ = [
    "AsyncHttpClient",
    "RecordFeedClient",
]
