"""Reload scheduling."""

from trade_offer_monitor.services.reload.cycle_token import CycleToken
from trade_offer_monitor.services.reload.reload_scheduler import ReloadScheduler, ReloadState

__all__ = ["CycleToken", "ReloadScheduler", "ReloadState"]
