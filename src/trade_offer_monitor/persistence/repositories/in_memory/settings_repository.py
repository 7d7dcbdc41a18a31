# -*- coding: utf-8 -*-
"""In-memory monitor settings repository."""

from __future__ import annotations

from trade_offer_monitor.models.monitor_settings import MonitorSettings
from trade_offer_monitor.persistence.repositories.interfaces.settings_repository import (
    ISettingsRepository,
)


class InMemorySettingsRepository(ISettingsRepository):
    """Holds one MonitorSettings instance for the life of the process."""

    def __init__(self, initial: MonitorSettings | None = None) -> None:
        self._settings = initial

    async def load(self) -> MonitorSettings:
        return self._settings if self._settings is not None else MonitorSettings()

    async def save(self, settings: MonitorSettings) -> None:
        self._settings = settings

    async def clear(self) -> None:
        self._settings = None
