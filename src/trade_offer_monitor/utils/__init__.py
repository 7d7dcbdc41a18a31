# -*- coding: utf-8 -*-
"""Utility modules."""

from trade_offer_monitor.utils.parsing import (
    parse_int,
    safe_bool,
    safe_positive_int,
    safe_text,
)

__all__ = ["parse_int", "safe_bool", "safe_positive_int", "safe_text"]
