"""Record ingestion: ingestor interface, blocking probe and row parsing."""

from trade_offer_monitor.ingestion.base import (
    BlockingStateFlag,
    IBlockingStateProbe,
    IRecordIngestor,
    TradePage,
)
from trade_offer_monitor.ingestion.record_parser import RecordParser

__all__ = [
    "BlockingStateFlag",
    "IBlockingStateProbe",
    "IRecordIngestor",
    "RecordParser",
    "TradePage",
]
