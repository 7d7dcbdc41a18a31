"""Abstract interface for monitor settings storage (in-memory, JSON file, etc.)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from trade_offer_monitor.models.monitor_settings import MonitorSettings


class ISettingsRepository(ABC):
    """Interface for loading and saving the user's MonitorSettings."""

    @abstractmethod
    async def load(self) -> MonitorSettings:
        """Return the stored settings, or defaults when nothing usable is stored."""
        ...

    @abstractmethod
    async def save(self, settings: MonitorSettings) -> None:
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Forget the stored settings; the next load() returns defaults."""
        ...
