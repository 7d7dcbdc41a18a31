# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, FEED__BASE_URL.
The user's trade preferences (thresholds, colors, reload interval) are not part of
this configuration; see models.monitor_settings.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "trade-offer-monitor"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/trade_offer_monitor.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 14
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class FeedSettings(BaseSettings):
    """Configuration for the JSON record feeds (trade pages and outgoing trades)."""

    model_config = SettingsConfigDict(extra="ignore")

    base_url: str = Field(
        default="http://127.0.0.1:8080",
        description="Base URL of the service exposing structured trade records.",
    )
    trades_path: str = Field(
        default="/trades",
        description="Path of the paged trade offer feed (page passed as ?page=N).",
    )
    outgoing_path: str = Field(
        default="/trades/active",
        description="Path of the unshipped outgoing trade feed.",
    )
    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="HTTP request timeout in seconds.",
    )
    max_retries: int = Field(
        default=4,
        ge=1,
        le=20,
        description="Maximum number of retries for failed requests.",
    )


class SchedulerSettings(BaseSettings):
    """Timing knobs of the reload scheduler that are not user preferences."""

    model_config = SettingsConfigDict(extra="ignore")

    page_high_water_mark: int = Field(
        default=175,
        ge=1,
        description="A page with at least this many rows probably has a successor.",
    )
    page_fetch_delay_seconds: float = Field(
        default=0.25,
        ge=0.0,
        le=10.0,
        description="Delay before requesting the next trade page.",
    )
    modal_poll_seconds: float = Field(
        default=1.0,
        gt=0.0,
        le=60.0,
        description="Re-poll delay while a blocking modal is reported open.",
    )
    outgoing_refresh_seconds: float = Field(
        default=120.0,
        ge=0.0,
        description="Minimum age of cached outgoing trades before re-fetching them.",
    )
    barrier_timeout_seconds: Optional[float] = Field(
        default=300.0,
        gt=0.0,
        description="Fail a reload when no feed makes progress for this long. None disables.",
    )


class StoreSettings(BaseSettings):
    """Where the user's monitor settings are persisted."""

    model_config = SettingsConfigDict(extra="ignore")

    settings_path: str = "monitor_settings.json"
    persist: bool = Field(
        default=True,
        description="Persist to settings_path; when False settings live in memory only.",
    )


class ConsoleNotificationSettings(BaseSettings):
    """Console notification settings."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = True
    bell_on_sound: bool = Field(
        default=True,
        description="Ring the terminal bell when an alert sound is requested.",
    )


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, SCHEDULER__MODAL_POLL_SECONDS.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    feed: FeedSettings = Field(default_factory=FeedSettings)
    scheduler: SchedulerSettings = Field(default_factory=SchedulerSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
    console: ConsoleNotificationSettings = Field(default_factory=ConsoleNotificationSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.
        from_env(scheduler={"modal_poll_seconds": 0.5}).
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from trade_offer_monitor.config import get_settings

        settings = get_settings()
        interval = settings.scheduler.modal_poll_seconds
    """
    return Settings()
