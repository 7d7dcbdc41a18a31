"""MemberAggregate: the collapsed view of every offer one member makes in a poll."""

from __future__ import annotations

from dataclasses import dataclass, field

from trade_offer_monitor.models.trade_record import TradeRecord


@dataclass(slots=True)
class MemberAggregate:
    """Per-member totals for one aggregation pass.

    Rebuilt from scratch every poll. The alert flags start False and are set by
    the alert engine; the filter reads has_alert.
    """

    member_id: str
    member_name: str
    member_points: int
    country: str
    trade_ids: dict[str, int] = field(default_factory=dict)
    """trade_id -> card_points, in offer discovery order."""
    total_card_points: int = 0
    has_alert: bool = False
    has_bundle_alert: bool = False
    has_outgoing_alert: bool = False

    @property
    def card_qty(self) -> int:
        """Number of wanted offers; always len(trade_ids)."""
        return len(self.trade_ids)

    @property
    def first_trade_id(self) -> str | None:
        """The member's first discovered offer, if any."""
        return next(iter(self.trade_ids), None)

    @property
    def can_afford_all(self) -> bool:
        return self.total_card_points <= self.member_points

    def add_offer(self, trade_id: str, card_points: int) -> None:
        """Count one offer. Callers must not add the same trade_id twice."""
        if trade_id in self.trade_ids:
            raise ValueError(f"trade {trade_id} already counted for member {self.member_id}")
        self.trade_ids[trade_id] = card_points
        self.total_card_points += card_points

    @classmethod
    def from_record(cls, record: TradeRecord) -> MemberAggregate:
        """Create an empty aggregate carrying the member fields of record."""
        return cls(
            member_id=record.member_id,
            member_name=record.member_name,
            member_points=record.member_points,
            country=record.country,
        )
