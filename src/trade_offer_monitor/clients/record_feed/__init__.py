"""JSON record feed ingestor."""

from trade_offer_monitor.clients.record_feed.record_feed_client import RecordFeedClient
from trade_offer_monitor.clients.record_feed.schema import OutgoingRowSchema, TradeRowSchema

__all__ = ["OutgoingRowSchema", "RecordFeedClient", "TradeRowSchema"]
