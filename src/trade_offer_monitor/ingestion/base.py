"""Abstract interfaces for the record ingestor and the blocking-modal probe."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from trade_offer_monitor.models.outgoing_record import OutgoingTradeRow
from trade_offer_monitor.models.trade_record import TradeRecord


@dataclass(frozen=True, slots=True)
class TradePage:
    """One fetched trade page.

    row_count is the number of rows the page delivered, malformed ones included.
    Page growth compares row_count (not len(records)) to the high-water mark.
    """

    page: int
    records: list[TradeRecord] = field(default_factory=list)
    row_count: int = 0


class IRecordIngestor(ABC):
    """Supplies the two independent record streams of a poll.

    Implementations return already-parsed, immutable records. Malformed rows
    are the implementation's to drop; a raised exception means the whole
    fetch failed.
    """

    @abstractmethod
    async def fetch_trade_page(self, page: int) -> TradePage:
        """Return the offers on trade page `page` (1-based) with the page's raw row count."""
        ...

    @abstractmethod
    async def fetch_outgoing(self) -> list[OutgoingTradeRow]:
        """Return one row per unshipped outgoing trade."""
        ...

    async def aclose(self) -> None:
        """Release resources. Default: nothing to release."""
        return None


class IBlockingStateProbe(ABC):
    """Reports whether a blocking modal (e.g. a trade confirmation) is open."""

    @abstractmethod
    def is_blocking(self) -> bool:
        ...


class BlockingStateFlag(IBlockingStateProbe):
    """Probe backed by a flag the UI layer sets and clears."""

    def __init__(self, blocking: bool = False) -> None:
        self._blocking = blocking

    def set_blocking(self, blocking: bool) -> None:
        self._blocking = blocking

    def is_blocking(self) -> bool:
        return self._blocking
