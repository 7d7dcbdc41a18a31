"""JSON file repository implementations."""

from trade_offer_monitor.persistence.repositories.json_file.settings_repository import (
    JsonFileSettingsRepository,
)

__all__ = ["JsonFileSettingsRepository"]
