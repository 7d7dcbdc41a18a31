"""Alert engine."""

from trade_offer_monitor.services.alerts.alert_engine import (
    AlertCheckResult,
    AlertEngine,
    alert_value,
    is_new_alert,
)

__all__ = [
    "AlertCheckResult",
    "AlertEngine",
    "alert_value",
    "is_new_alert",
]
