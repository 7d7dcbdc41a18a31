"""Repository interfaces."""

from trade_offer_monitor.persistence.repositories.interfaces.settings_repository import (
    ISettingsRepository,
)

__all__ = ["ISettingsRepository"]
