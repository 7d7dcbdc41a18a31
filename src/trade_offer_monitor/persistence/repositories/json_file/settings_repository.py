# -*- coding: utf-8 -*-
"""Monitor settings persisted as a JSON document on disk."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Optional

import structlog
from pydantic import ValidationError

from trade_offer_monitor.exceptions import SettingsCorruptedError
from trade_offer_monitor.models.monitor_settings import MonitorSettings
from trade_offer_monitor.persistence.repositories.interfaces.settings_repository import (
    ISettingsRepository,
)


class JsonFileSettingsRepository(ISettingsRepository):
    """Reads and writes MonitorSettings as JSON.

    Legacy payloads (camelCase keys, version tag strings, millisecond timeouts)
    are migrated on load. A file that cannot be decoded is deleted and defaults
    are returned; out-of-range fields are repaired by the model.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._path = Path(path)
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> MonitorSettings:
        try:
            return await asyncio.to_thread(self._read)
        except SettingsCorruptedError as e:
            self._logger.warning(
                "settings_corrupted_reset",
                settings_path=str(self._path),
                error_message=str(e),
            )
            await self.clear()
            return MonitorSettings()

    async def save(self, settings: MonitorSettings) -> None:
        await asyncio.to_thread(self._write, settings.to_payload())
        self._logger.debug("settings_saved", settings_path=str(self._path))

    async def clear(self) -> None:
        await asyncio.to_thread(self._path.unlink, missing_ok=True)

    def _read(self) -> MonitorSettings:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return MonitorSettings()
        if not text.strip():
            return MonitorSettings()
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise SettingsCorruptedError(f"invalid JSON: {e}", source=str(self._path)) from e
        if not isinstance(payload, Mapping):
            raise SettingsCorruptedError(
                f"expected a JSON object, got {type(payload).__name__}",
                source=str(self._path),
            )
        try:
            return MonitorSettings.from_payload(payload)
        except ValidationError as e:
            raise SettingsCorruptedError(str(e), source=str(self._path)) from e

    def _write(self, payload: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp.replace(self._path)
