# -*- coding: utf-8 -*-
"""Base notification strategy."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from trade_offer_monitor.notifications.types import NotificationMessage

if TYPE_CHECKING:  # pragma: no cover
    from trade_offer_monitor.config.config import Settings


class BaseNotificationStrategy(ABC):
    """Abstract base class for notification channels."""

    def __init__(self, settings: "Settings"):
        """
        Initialize the strategy.

        Args:
            settings: Global configuration (Settings).
        """
        self.settings = settings

    @property
    @abstractmethod
    def is_running(self) -> bool:
        """Whether the channel accepts messages."""
        pass

    @abstractmethod
    async def initialize(self) -> None:
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        pass

    @abstractmethod
    async def send_notification(
        self,
        message: NotificationMessage,
    ) -> None:
        """
        Deliver one notification.

        Args:
            message: Message to deliver (NotificationMessage)
        """
        pass
