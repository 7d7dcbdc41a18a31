# -*- coding: utf-8 -*-
"""Unit tests for lenient parsing helpers."""

from __future__ import annotations

from typing import Any

import pytest

from trade_offer_monitor.utils.parsing import parse_int, safe_bool, safe_positive_int, safe_text


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (5, 5),
        (" 42 ", 42),
        (3.0, 3),
        (3.5, None),
        (True, None),
        (None, None),
        ("abc", None),
        ([1], None),
    ],
)
def test_parse_int(value: Any, expected: int | None) -> None:
    assert parse_int(value) == expected


def test_safe_positive_int_falls_back_on_zero_and_garbage() -> None:
    assert safe_positive_int("30", 60) == 30
    assert safe_positive_int(0, 60) == 60
    assert safe_positive_int("x", 60) == 60


def test_safe_bool() -> None:
    assert safe_bool("yes", False) is True
    assert safe_bool("off", True) is False
    assert safe_bool(1, False) is True
    assert safe_bool(7, False) is False
    assert safe_bool("perhaps", True) is True


def test_safe_text() -> None:
    assert safe_text(" hi ", "x") == "hi"
    assert safe_text("", "x") == "x"
    assert safe_text(12, "x") == "x"
