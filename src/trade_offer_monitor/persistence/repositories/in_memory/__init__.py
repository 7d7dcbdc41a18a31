"""In-memory repository implementations."""

from trade_offer_monitor.persistence.repositories.in_memory.settings_repository import (
    InMemorySettingsRepository,
)

__all__ = ["InMemorySettingsRepository"]
