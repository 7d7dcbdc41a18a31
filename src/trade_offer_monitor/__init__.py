"""Trade offer monitor: aggregation, bundle search, alerting and reload scheduling."""

from trade_offer_monitor.config import get_settings
from trade_offer_monitor.DI import Container
from trade_offer_monitor.services import PollCycleService, ReloadScheduler, best_bundle

__version__ = "2.0.0"
__all__ = [
    "Container",
    "PollCycleService",
    "ReloadScheduler",
    "best_bundle",
    "get_settings",
]
