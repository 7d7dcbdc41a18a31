"""Dependency injection."""

from trade_offer_monitor.DI.container import Container

__all__ = ["Container"]
