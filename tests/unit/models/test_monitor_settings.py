# -*- coding: utf-8 -*-
"""Unit tests for MonitorSettings validation, repair and migration."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, cast

import pytest

from trade_offer_monitor.models.monitor_settings import (
    MAX_PAGES_CAP,
    SETTINGS_VERSION,
    AlertOptions,
    MonitorSettings,
    _default_of,
    migrate_settings_payload,
)


def test_defaults() -> None:
    settings = MonitorSettings()

    assert settings.version == SETTINGS_VERSION
    assert settings.reload_interval == 60
    assert settings.max_pages == 10
    assert settings.alert.bundle_threshold == 500
    assert settings.alert.colorize_bundle_color == "#CCFF99"
    assert settings.alert.colorize_outgoing_color == "#FFEBB5"
    assert settings.alert.notification_timeout_seconds == 7.5
    assert settings.alert.on_new_only is False
    assert settings.alert.on_bundle and settings.alert.on_outgoing
    assert settings.alert.play_sound and settings.alert.show_notification
    assert settings.filter.cards_by_value is False
    assert settings.filter.members_by_points is False
    assert settings.filter.cards_min_value == 50
    assert settings.filter.members_min_points == 400


def test_reload_interval_below_floor_is_raised_to_20() -> None:
    assert MonitorSettings(reload_interval=5).reload_interval == 20
    assert MonitorSettings(reload_interval=45).reload_interval == 45


def test_invalid_fields_are_repaired_to_defaults() -> None:
    settings = MonitorSettings.model_validate(
        {
            "reload_interval": "soon",
            "max_pages": -3,
            "alert": {"bundle_threshold": "lots", "title_text": "   ", "on_bundle": "maybe"},
            "filter": {"cards_min_value": 0},
        }
    )

    assert settings.reload_interval == 60
    assert settings.max_pages == 10
    assert settings.alert.bundle_threshold == 500
    assert settings.alert.title_text == MonitorSettings().alert.title_text
    assert settings.alert.on_bundle is True
    assert settings.filter.cards_min_value == 50


def test_max_pages_capped() -> None:
    assert MonitorSettings(max_pages=40).max_pages == MAX_PAGES_CAP


def test_non_mapping_section_falls_back_to_defaults() -> None:
    settings = MonitorSettings.model_validate({"alert": "broken", "filter": 12})

    assert settings.alert == MonitorSettings().alert
    assert settings.filter == MonitorSettings().filter


def test_legacy_payload_with_camel_case_and_millisecond_timeout() -> None:
    legacy = {
        "version": "v1.4.2",
        "reloadInterval": 90,
        "maxPages": 4,
        "alert": {
            "onBundle": True,
            "bundleThreshold": 750,
            "onNewOnly": True,
            "notificationTimeout": 3000,
        },
        "filter": {"cardsByValue": True, "cardsMinValue": 25},
    }

    settings = MonitorSettings.from_payload(legacy)

    assert settings.version == SETTINGS_VERSION
    assert settings.reload_interval == 90
    assert settings.max_pages == 4
    assert settings.alert.bundle_threshold == 750
    assert settings.alert.on_new_only is True
    assert settings.alert.notification_timeout_seconds == 3.0
    assert settings.filter.cards_by_value is True
    assert settings.filter.cards_min_value == 25


def test_migration_does_not_modify_input() -> None:
    legacy = {"alert": {"notificationTimeout": 5000}}

    migrated = migrate_settings_payload(legacy)

    assert legacy == {"alert": {"notificationTimeout": 5000}}
    assert migrated["version"] == 2
    assert migrated["alert"] == {"notification_timeout_seconds": 5.0}


def test_empty_payload_gives_defaults() -> None:
    assert MonitorSettings.from_payload(None) == MonitorSettings()
    assert MonitorSettings.from_payload({}) == MonitorSettings()


def test_payload_roundtrip_keeps_current_settings() -> None:
    settings = MonitorSettings(reload_interval=120, max_pages=3)

    assert MonitorSettings.from_payload(settings.to_payload()) == settings


def test_default_lookup_requires_field_name() -> None:
    info = cast(Any, SimpleNamespace(field_name=None))

    with pytest.raises(TypeError, match="AlertOptions"):
        _default_of(AlertOptions, info)


def test_default_lookup_returns_field_default() -> None:
    info = cast(Any, SimpleNamespace(field_name="bundle_threshold"))

    assert _default_of(AlertOptions, info) == 500
