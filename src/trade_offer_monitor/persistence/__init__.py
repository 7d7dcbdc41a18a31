"""Persistence layer (repositories, etc.)."""

from trade_offer_monitor.persistence.repositories import (
    ISettingsRepository,
    InMemorySettingsRepository,
    JsonFileSettingsRepository,
)

__all__ = [
    "ISettingsRepository",
    "InMemorySettingsRepository",
    "JsonFileSettingsRepository",
]
