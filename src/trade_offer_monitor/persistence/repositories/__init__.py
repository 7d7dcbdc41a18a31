# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory, json_file)."""

from trade_offer_monitor.persistence.repositories.interfaces import ISettingsRepository
from trade_offer_monitor.persistence.repositories.in_memory import InMemorySettingsRepository
from trade_offer_monitor.persistence.repositories.json_file import JsonFileSettingsRepository

__all__ = [
    "ISettingsRepository",
    "InMemorySettingsRepository",
    "JsonFileSettingsRepository",
]
