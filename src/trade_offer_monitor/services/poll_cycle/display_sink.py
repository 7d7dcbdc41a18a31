"""Display sink: receives each completed poll cycle."""

from __future__ import annotations

from abc import ABC, abstractmethod

from trade_offer_monitor.services.poll_cycle.poll_cycle_service import PollCycleResult


class IDisplaySink(ABC):
    """Whatever shows the user the alerts, highlights and counters of a poll."""

    @abstractmethod
    async def render(self, result: PollCycleResult) -> None:
        ...
