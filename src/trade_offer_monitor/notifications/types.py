"""Notification message types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol


class AlertEffect(str, Enum):
    """Trigger-once side effects of an alert check, at most once per reload cycle."""

    SOUND = "sound"
    TITLE = "title"
    NOTIFICATION = "notification"

    @property
    def event_type(self) -> str:
        return f"alert_{self.value}"


@dataclass(frozen=True)
class NotificationMessage:
    """Message to be sent via one or more notification channels."""

    event_type: str
    message: str
    title: str | None = None
    payload: dict[str, Any] | None = None


class NotificationStyler(Protocol):
    """Render a message into a formatted string for delivery."""

    def render(self, message: NotificationMessage) -> str:
        """Return a formatted plain-text message for the given message."""
        ...
