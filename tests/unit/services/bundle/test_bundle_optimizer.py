# -*- coding: utf-8 -*-
"""Unit tests for best_bundle."""

from __future__ import annotations

import itertools
import random

import pytest

from trade_offer_monitor.services.bundle.bundle_optimizer import best_bundle


def _brute_force(trades: dict[str, int], capacity: int) -> tuple[int, int]:
    """(best value, fewest items achieving it) over every subset."""
    best = (0, 0)
    for size in range(1, len(trades) + 1):
        for combo in itertools.combinations(trades, size):
            total = sum(trades[t] for t in combo)
            if total > capacity:
                continue
            if total > best[0] or (total == best[0] and size < best[1]):
                best = (total, size)
    return best


@pytest.mark.parametrize("seed", range(25))
def test_matches_brute_force(seed: int) -> None:
    rng = random.Random(seed)
    trades = {f"t{i}": rng.randint(0, 200) for i in range(rng.randint(1, 12))}
    capacity = rng.randint(0, 800)

    result = best_bundle(trades, capacity)
    expected_value, expected_size = _brute_force(trades, capacity)

    assert result.value == expected_value
    assert sum(trades[t] for t in result.chosen_ids) == result.value
    assert result.value <= capacity
    if expected_value > 0:
        assert len(result.chosen_ids) == expected_size


def test_prefers_fewer_items_at_equal_value() -> None:
    result = best_bundle({"a": 10, "b": 20, "c": 30}, 30)

    assert result.value == 30
    assert result.chosen_ids == frozenset({"c"})


def test_first_registered_bundle_wins_at_equal_cardinality() -> None:
    result = best_bundle({"a": 10, "b": 20, "c": 15, "d": 15}, 30)

    assert result.value == 30
    assert result.chosen_ids == frozenset({"a", "b"})


def test_scenario_member_with_100_points() -> None:
    result = best_bundle({"a": 60, "b": 50, "c": 40}, 100)

    assert result.value == 100
    assert result.chosen_ids == frozenset({"a", "c"})


def test_items_above_capacity_never_chosen() -> None:
    result = best_bundle({"big": 500, "small": 40}, 100)

    assert result.value == 40
    assert "big" not in result.chosen_ids


@pytest.mark.parametrize(("trades", "capacity"), [({}, 100), ({"a": 10}, 0)])
def test_empty_or_zero_capacity(trades: dict[str, int], capacity: int) -> None:
    result = best_bundle(trades, capacity)

    assert result.value == 0
    assert result.chosen_ids == frozenset()


def test_target_value_stops_early() -> None:
    trades = {"a": 50, "b": 60, "c": 40}

    early = best_bundle(trades, 200, target_value=50)
    full = best_bundle(trades, 200)

    assert early.value == 50
    assert full.value == 150


def test_best_value_is_a_running_maximum() -> None:
    # Replacing the bundle for a lower sum must not lower the best value.
    result = best_bundle({"a": 70, "b": 10, "c": 20, "d": 30}, 100)

    assert result.value == 100
    assert len(result.chosen_ids) == 2


@pytest.mark.parametrize(("trades", "capacity"), [({"a": -1}, 10), ({"a": 1}, -5)])
def test_negative_inputs_raise(trades: dict[str, int], capacity: int) -> None:
    with pytest.raises(ValueError):
        best_bundle(trades, capacity)
