"""MonitorSettings: the user's versioned trade preferences.

Persisted by a settings repository and re-read at the start of every reload.
Invalid or out-of-range fields are repaired to their defaults instead of
rejecting the whole record; legacy payloads (camelCase keys, release-tag
versions, millisecond notification timeouts) are migrated forward.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from trade_offer_monitor.utils.parsing import parse_int, safe_bool, safe_positive_int, safe_text

SETTINGS_VERSION = 2
MIN_RELOAD_INTERVAL_SECONDS = 20
MAX_PAGES_CAP = 15

_MODEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
    frozen=True,
)


def _default_of(model: type[BaseModel], info: ValidationInfo) -> Any:
    if info.field_name is None:
        raise TypeError(f"{model.__name__} validator used without a field")
    return model.model_fields[info.field_name].default


class AlertOptions(BaseModel):
    """When to alert and how alerted offers are highlighted."""

    model_config = _MODEL_CONFIG

    on_bundle: bool = True
    bundle_threshold: int = 500
    colorize_bundle_rows: bool = True
    colorize_bundle_color: str = "#CCFF99"

    on_outgoing: bool = True
    colorize_outgoing_rows: bool = True
    colorize_outgoing_color: str = "#FFEBB5"

    on_new_only: bool = False
    """Only fire sound/title/notification when at least one alert is new."""

    play_sound: bool = True
    sound_file: str = "alert.mp3"
    title_text: str = "★ Trade alert! ★"
    show_notification: bool = True
    notification_timeout_seconds: float = 7.5

    @field_validator(
        "on_bundle",
        "colorize_bundle_rows",
        "on_outgoing",
        "colorize_outgoing_rows",
        "on_new_only",
        "play_sound",
        "show_notification",
        mode="before",
    )
    @classmethod
    def _repair_flag(cls, value: Any, info: ValidationInfo) -> bool:
        return safe_bool(value, _default_of(cls, info))

    @field_validator("bundle_threshold", mode="before")
    @classmethod
    def _repair_threshold(cls, value: Any, info: ValidationInfo) -> int:
        return safe_positive_int(value, _default_of(cls, info))

    @field_validator(
        "colorize_bundle_color",
        "colorize_outgoing_color",
        "sound_file",
        "title_text",
        mode="before",
    )
    @classmethod
    def _repair_text(cls, value: Any, info: ValidationInfo) -> str:
        return safe_text(value, _default_of(cls, info))

    @field_validator("notification_timeout_seconds", mode="before")
    @classmethod
    def _repair_timeout(cls, value: Any, info: ValidationInfo) -> float:
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
            return float(value)
        return _default_of(cls, info)


class FilterOptions(BaseModel):
    """Thresholds below which non-alerted offers are hidden."""

    model_config = _MODEL_CONFIG

    cards_by_value: bool = False
    cards_min_value: int = 50
    members_by_points: bool = False
    members_min_points: int = 400

    @field_validator("cards_by_value", "members_by_points", mode="before")
    @classmethod
    def _repair_flag(cls, value: Any, info: ValidationInfo) -> bool:
        return safe_bool(value, _default_of(cls, info))

    @field_validator("cards_min_value", "members_min_points", mode="before")
    @classmethod
    def _repair_minimum(cls, value: Any, info: ValidationInfo) -> int:
        return safe_positive_int(value, _default_of(cls, info))


class MonitorSettings(BaseModel):
    """Root of the persisted user settings (current version: SETTINGS_VERSION)."""

    model_config = _MODEL_CONFIG

    version: int = SETTINGS_VERSION
    reload_interval: int = 60
    """Seconds between the end of one reload and the start of the next (floor 20)."""
    max_pages: int = 10
    """Maximum trade pages fetched per reload (capped at MAX_PAGES_CAP)."""
    alert: AlertOptions = Field(default_factory=AlertOptions)
    filter: FilterOptions = Field(default_factory=FilterOptions)

    @field_validator("version", mode="before")
    @classmethod
    def _current_version(cls, value: Any) -> int:
        # Payloads are migrated before validation, so a validated model is always current.
        return SETTINGS_VERSION

    @field_validator("reload_interval", mode="before")
    @classmethod
    def _repair_interval(cls, value: Any, info: ValidationInfo) -> int:
        interval = safe_positive_int(value, _default_of(cls, info))
        return max(interval, MIN_RELOAD_INTERVAL_SECONDS)

    @field_validator("max_pages", mode="before")
    @classmethod
    def _repair_max_pages(cls, value: Any, info: ValidationInfo) -> int:
        return min(safe_positive_int(value, _default_of(cls, info)), MAX_PAGES_CAP)

    @field_validator("alert", "filter", mode="before")
    @classmethod
    def _repair_section(cls, value: Any) -> Any:
        if isinstance(value, (Mapping, BaseModel)):
            return value
        return {}

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> MonitorSettings:
        """Migrate and validate a persisted payload; missing fields take defaults."""
        if not payload:
            return cls()
        return cls.model_validate(migrate_settings_payload(payload))

    def to_payload(self) -> dict[str, Any]:
        """JSON-compatible dict (snake_case keys) for persistence."""
        return self.model_dump(mode="json")


def payload_version(raw: Any) -> int:
    """Version number of a persisted payload.

    Version 1 payloads carried the release tag (e.g. "v1.4.2") or nothing at all.
    """
    parsed = parse_int(raw)
    return parsed if parsed is not None else 1


def migrate_settings_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Bring a persisted payload up to SETTINGS_VERSION. The input is not modified."""
    data: dict[str, Any] = copy.deepcopy(dict(payload))
    version = payload_version(data.get("version"))

    if version < 2:
        # v1 stored the notification timeout in milliseconds.
        alert = data.get("alert")
        if isinstance(alert, dict) and "notificationTimeout" in alert:
            timeout_ms = parse_int(alert.pop("notificationTimeout"))
            if timeout_ms is not None and timeout_ms > 0:
                alert.setdefault("notification_timeout_seconds", timeout_ms / 1000)
        version = 2

    data["version"] = version
    return data
