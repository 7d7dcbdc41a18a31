"""Record feed row types. Keys match the feed's JSON (camelCase)."""

from __future__ import annotations

from typing import TypedDict


class TradeRowSchema(TypedDict, total=False):
    """GET /trades?page=N item: one offer."""

    tradeId: str
    memberId: str
    memberName: str
    memberPoints: int
    country: str
    cardName: str
    cardSet: str
    cardPoints: int


class OutgoingRowSchema(TypedDict, total=False):
    """GET /trades/active item: one unshipped outgoing trade."""

    memberId: str
    memberName: str
    cardName: str
    cardPoints: int
