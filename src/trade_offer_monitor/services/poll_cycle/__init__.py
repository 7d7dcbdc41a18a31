"""Poll cycle pipeline."""

from trade_offer_monitor.services.poll_cycle.display_sink import IDisplaySink
from trade_offer_monitor.services.poll_cycle.poll_cycle_service import (
    PollCycleResult,
    PollCycleService,
)

__all__ = ["IDisplaySink", "PollCycleResult", "PollCycleService"]
