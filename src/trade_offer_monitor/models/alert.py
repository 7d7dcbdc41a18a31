"""AlertRecord: one alert produced by an alert check."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class AlertKind(str, Enum):
    """Which rule produced the alert (the last applied rule wins)."""

    BUNDLE = "bundle"
    """Member's affordable bundle reaches the bundle threshold."""
    OUTGOING = "outgoing"
    """User already has unshipped trades to this member."""


class AlertStyle(str, Enum):
    """Display hint for the alert value."""

    NORMAL = ""
    WARNING = "warning"
    """Member cannot afford every card they want."""


@dataclass(frozen=True, slots=True)
class AlertRecord:
    """Transient alert, produced and consumed within one alert check."""

    member_id: str
    member_name: str
    message: str
    style: AlertStyle
    value: int
    """Best affordable bundle value, plus the outgoing total for outgoing alerts."""
    is_new: bool
    kind: AlertKind
    first_trade_id: str | None = None

    def sort_key(self) -> tuple[bool, int]:
        """New alerts first, then by value descending."""
        return (not self.is_new, -self.value)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["style"] = self.style.value
        data["kind"] = self.kind.value
        return data
