# -*- coding: utf-8 -*-
"""Logging configuration for structlog + Logfire.

Every component logs through structlog with snake_case event names; this module
routes those events to the console, an optional rotating JSON file and, when
enabled, Logfire.
"""

from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Optional

import logfire
import structlog
from structlog.types import EventDict, Processor

from trade_offer_monitor.config import AppSettings, LoggingSettings, Settings, get_settings

LOG_LEVEL_TO_LOGFIRE: dict[str, str] = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warn",
    "ERROR": "error",
    "CRITICAL": "fatal",
}


def service_context_processor(app: AppSettings) -> Callable[[Any, str, EventDict], EventDict]:
    """Processor stamping logger name, app/service identity and environment on each event."""
    identity: dict[str, str] = {"app_name": app.app_name, "environment": app.environment}
    if app.service_name:
        identity["service_name"] = app.service_name
    if app.service_version:
        identity["service_version"] = app.service_version

    def _add(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        stdlib_logger = getattr(logger, "_logger", None)
        event_dict["logger"] = (
            getattr(stdlib_logger, "name", None) or getattr(logger, "name", "") or ""
        )
        event_dict.update(identity)
        return event_dict

    return _add


def _level(name: str) -> int:
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def build_handlers(config: LoggingSettings) -> list[logging.Handler]:
    """Stdlib handlers enabled in config, each with its own level."""
    handlers: list[logging.Handler] = []
    if config.log_to_console:
        console = logging.StreamHandler()
        console.setLevel(_level(config.console_level))
        handlers.append(console)
    if config.log_to_file:
        path = Path(config.log_file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = TimedRotatingFileHandler(
            path,
            when=config.log_file_when,
            interval=config.log_file_interval,
            backupCount=config.log_file_backup_count,
            encoding="utf-8",
            utc=config.log_file_utc,
        )
        rotating.setLevel(_level(config.file_level))
        handlers.append(rotating)
    for handler in handlers:
        handler.setFormatter(logging.Formatter("%(message)s"))
    return handlers


def build_processors(settings: Settings, *, render: bool) -> list[Processor]:
    """structlog chain; a renderer is appended only when stdlib handlers will print."""
    config = settings.logging
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        service_context_processor(settings.app),
    ]
    if config.logfire_enabled:
        processors.append(logfire.StructlogProcessor())  # type: ignore[arg-type]
    if render:
        # A log file is always JSON, so the console shares that format then.
        if config.log_to_file or config.json_format:
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer())
    return processors


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure stdlib handlers, Logfire (when enabled) and structlog."""
    settings = settings or get_settings()
    config = settings.logging

    handlers = build_handlers(config)
    if handlers:
        logging.basicConfig(
            level=min(h.level for h in handlers),
            handlers=handlers,
            force=True,
        )

    if config.logfire_enabled:
        app = settings.app
        logfire.configure(
            token=config.logfire_token,
            service_name=app.service_name or app.app_name,
            service_version=app.service_version,
            min_level=LOG_LEVEL_TO_LOGFIRE.get(config.logfire_level, "info"),  # type: ignore[arg-type]
            environment=app.environment,
        )

    structlog.configure(
        processors=build_processors(settings, render=bool(handlers)),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
