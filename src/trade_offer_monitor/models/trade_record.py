"""TradeRecord: one offer currently visible in the trade feed.

A member wants one card from the user and offers its point value. Records are
immutable once ingested; the aggregator groups them by member.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

from trade_offer_monitor.exceptions import InvalidRecordError
from trade_offer_monitor.utils.parsing import parse_int


def _required_text(row: Mapping[str, Any], key: str) -> str:
    value = row.get(key)
    if value is None or not str(value).strip():
        raise InvalidRecordError(f"missing {key}", row=row)
    return str(value).strip()


def _points(row: Mapping[str, Any], key: str) -> int:
    value = parse_int(row.get(key))
    if value is None or value < 0:
        raise InvalidRecordError(f"{key} must be a non-negative integer", row=row)
    return value


@dataclass(frozen=True, slots=True)
class TradeRecord:
    """One trade offer: a member wants card_name from the user for card_points."""

    trade_id: str
    """Unique offer identifier."""
    member_id: str
    """Stable member identifier (names are not unique)."""
    member_name: str
    member_points: int
    """Points the member currently has available to pay with."""
    country: str
    card_name: str
    card_points: int
    card_set: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Snake_case dict of all fields."""
        return asdict(self)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> TradeRecord:
        """Build from a raw feed row (camelCase keys).

        Raises:
            InvalidRecordError: If an identifier is missing or a points field is not
                a non-negative integer.
        """
        return cls(
            trade_id=_required_text(row, "tradeId"),
            member_id=_required_text(row, "memberId"),
            member_name=str(row.get("memberName") or "").strip(),
            member_points=_points(row, "memberPoints"),
            country=str(row.get("country") or "").strip(),
            card_name=str(row.get("cardName") or "").strip(),
            card_points=_points(row, "cardPoints"),
            card_set=str(row.get("cardSet") or "").strip(),
        )
