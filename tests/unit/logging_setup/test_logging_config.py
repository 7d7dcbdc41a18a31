# -*- coding: utf-8 -*-
"""Unit tests for the structlog/stdlib logging setup."""

from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import structlog

from trade_offer_monitor.config import AppSettings, LoggingSettings, Settings
from trade_offer_monitor.logging.config import (
    build_handlers,
    build_processors,
    service_context_processor,
)


def test_no_handlers_when_outputs_disabled() -> None:
    config = LoggingSettings(log_to_console=False, log_to_file=False)

    assert build_handlers(config) == []


def test_file_handler_rotates_at_configured_level(tmp_path: Path) -> None:
    config = LoggingSettings(
        log_to_console=False,
        log_to_file=True,
        file_level="WARNING",
        log_file_path=str(tmp_path / "logs" / "monitor.log"),
    )

    handlers = build_handlers(config)
    try:
        assert len(handlers) == 1
        assert isinstance(handlers[0], TimedRotatingFileHandler)
        assert handlers[0].level == logging.WARNING
        assert (tmp_path / "logs").is_dir()
    finally:
        for handler in handlers:
            handler.close()


def test_console_renderer_unless_json_requested() -> None:
    console = Settings(logging=LoggingSettings(json_format=False, log_to_file=False))
    as_json = Settings(logging=LoggingSettings(json_format=True))

    assert isinstance(build_processors(console, render=True)[-1], structlog.dev.ConsoleRenderer)
    assert isinstance(
        build_processors(as_json, render=True)[-1], structlog.processors.JSONRenderer
    )


def test_no_renderer_without_handlers() -> None:
    processors = build_processors(Settings(logging=LoggingSettings(json_format=True)), render=False)

    assert not any(
        isinstance(p, (structlog.processors.JSONRenderer, structlog.dev.ConsoleRenderer))
        for p in processors
    )


def test_service_context_stamps_identity() -> None:
    add = service_context_processor(
        AppSettings(app_name="monitor", service_version="2.0.0", environment="test")
    )

    event = add(logging.getLogger("ReloadScheduler"), "info", {"event": "reload_started"})

    assert event["logger"] == "ReloadScheduler"
    assert event["app_name"] == "monitor"
    assert event["service_version"] == "2.0.0"
    assert event["environment"] == "test"
    assert "service_name" not in event
