"""Outgoing trades: cards the user already committed to send but has not shipped."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from trade_offer_monitor.exceptions import InvalidRecordError
from trade_offer_monitor.utils.parsing import parse_int


@dataclass(frozen=True, slots=True)
class OutgoingTradeRow:
    """One unshipped outgoing trade as delivered by the feed.

    member_id is None when the feed row lost its link to the receiving member;
    such rows are dropped during folding.
    """

    member_id: str | None
    member_name: str
    card_points: int

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> OutgoingTradeRow:
        """Build from a raw feed row (camelCase keys).

        Raises:
            InvalidRecordError: If cardPoints is not a non-negative integer.
        """
        points = parse_int(row.get("cardPoints"))
        if points is None or points < 0:
            raise InvalidRecordError("cardPoints must be a non-negative integer", row=row)
        member_id = row.get("memberId")
        member_id = str(member_id).strip() if member_id is not None else ""
        return cls(
            member_id=member_id or None,
            member_name=str(row.get("memberName") or "").strip(),
            card_points=points,
        )


@dataclass(frozen=True, slots=True)
class OutgoingRecord:
    """All unshipped outgoing trades to one member, folded together."""

    member_id: str
    member_name: str
    card_qty: int
    total_points: int

    def with_row(self, row: OutgoingTradeRow) -> OutgoingRecord:
        """Return a copy that also counts row."""
        return OutgoingRecord(
            member_id=self.member_id,
            member_name=self.member_name,
            card_qty=self.card_qty + 1,
            total_points=self.total_points + row.card_points,
        )

    @classmethod
    def first(cls, member_id: str, row: OutgoingTradeRow) -> OutgoingRecord:
        """Start a record from the member's first outgoing row."""
        return cls(
            member_id=member_id,
            member_name=row.member_name,
            card_qty=1,
            total_points=row.card_points,
        )
