"""Best affordable bundle: maximum-value subset of a member's wanted cards.

Pure logic, no I/O. Used by the alert engine only when a member wants more
points' worth of cards than they hold.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class BundleResult:
    """Best bundle found: its total value and the trade ids that make it up."""

    value: int
    chosen_ids: frozenset[str]


EMPTY_BUNDLE = BundleResult(value=0, chosen_ids=frozenset())


def best_bundle(
    trades: Mapping[str, int],
    capacity: int,
    target_value: int | None = None,
) -> BundleResult:
    """Return the highest-value subset of trades whose sum does not exceed capacity.

    Achievable sums are indexed by value, so two bundles with the same total are
    interchangeable and only one is kept: the one with fewer trades, or the first
    one registered when both have the same count. Items are taken in the mapping's
    iteration order.

    Args:
        trades: trade_id -> card value (>= 0).
        capacity: Member's points budget (>= 0).
        target_value: Stop after the first item at which the best value reaches it.

    Raises:
        ValueError: If capacity or any trade value is negative.
    """
    if capacity < 0:
        raise ValueError(f"capacity must be >= 0, got {capacity}")
    for trade_id, value in trades.items():
        if value < 0:
            raise ValueError(f"trade {trade_id} has negative value {value}")
    if capacity == 0 or not trades:
        return EMPTY_BUNDLE

    bundles: dict[int, tuple[str, ...]] = {0: ()}
    best_value = 0

    for trade_id, value in trades.items():
        # Extend only the bundles that existed before this item.
        for total, bundle in list(bundles.items()):
            if trade_id in bundle:
                continue
            new_total = total + value
            if new_total > capacity:
                continue
            candidate = bundle + (trade_id,)
            existing = bundles.get(new_total)
            if existing is None or len(candidate) < len(existing):
                bundles[new_total] = candidate
            best_value = max(best_value, new_total)

        if target_value is not None and best_value >= target_value:
            break

    return BundleResult(value=best_value, chosen_ids=frozenset(bundles[best_value]))
