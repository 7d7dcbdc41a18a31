# -*- coding: utf-8 -*-
"""AlertEngine: decide which members deserve an alert and how it is shown.

Runs once per poll against the aggregation result and the previous alert
snapshot held in the session. Side effects (sound, title, desktop notification)
are handed to the NotificationService and fire at most once per reload cycle.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from trade_offer_monitor.events.analytics_events import AlertRaisedEvent
from trade_offer_monitor.models.alert import AlertKind, AlertRecord, AlertStyle
from trade_offer_monitor.models.member_aggregate import MemberAggregate
from trade_offer_monitor.models.outgoing_record import OutgoingRecord
from trade_offer_monitor.models.session import MonitorSession, SessionState
from trade_offer_monitor.notifications.types import AlertEffect, NotificationMessage
from trade_offer_monitor.services.aggregation.trade_aggregator import AggregationResult
from trade_offer_monitor.services.bundle.bundle_optimizer import best_bundle

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from trade_offer_monitor.models.monitor_settings import AlertOptions
    from trade_offer_monitor.notifications.notification_manager import NotificationService


NEW_MARKER = "★"


@dataclass(frozen=True)
class AlertCheckResult:
    """Outcome of one alert check."""

    alerts: list[AlertRecord]
    """Ordered: new alerts first, then by value descending."""
    new_alert_count: int
    row_colors: dict[str, str] = field(default_factory=dict)
    """trade_id -> highlight color for offers of alerted members."""
    point_warnings: list[str] = field(default_factory=list)
    """Offers of alerted members who cannot afford every card they want."""
    effects: list[AlertEffect] = field(default_factory=list)
    """Trigger-once effects fired by this check."""


def alert_value(member: MemberAggregate, bundle_threshold: int) -> int:
    """Value a member's offers are worth to the user.

    The total is trusted when it is under the threshold or the member can pay for
    everything; otherwise the best affordable bundle is searched.
    """
    total = member.total_card_points
    if total < bundle_threshold or total <= member.member_points:
        return total
    return best_bundle(member.trade_ids, member.member_points).value


def is_new_alert(member: MemberAggregate, prev_alerts: Mapping[str, frozenset[str]]) -> bool:
    """New when the member was not alerted last check, or wants something not seen then."""
    previous = prev_alerts.get(member.member_id)
    if previous is None:
        return True
    return any(trade_id not in previous for trade_id in member.trade_ids)


class AlertEngine:
    """Builds alerts, row highlights and point warnings; fires trigger-once effects."""

    def __init__(
        self,
        *,
        notification_service: Optional["NotificationService"] = None,
        event_bus: Optional[Any] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._notification_service = notification_service
        self._event_bus: Optional["EventBus"] = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def check(
        self,
        aggregation: AggregationResult,
        outgoing: Mapping[str, OutgoingRecord],
        session: MonitorSession,
    ) -> AlertCheckResult:
        options = session.settings.alert
        state = session.state
        show_marker = not state.is_first_alert_check

        pending: list[AlertRecord] = []
        for member in aggregation.members.values():
            alert = self._member_alert(member, outgoing.get(member.member_id), options, state, show_marker)
            if alert is not None:
                pending.append(alert)

        new_alert_count = sum(1 for a in pending if a.is_new)
        row_colors, point_warnings = self._decorate_rows(aggregation, options, state)

        effects: list[AlertEffect] = []
        if pending:
            if not options.on_new_only or new_alert_count > 0:
                effects = self._fire_effects(pending, new_alert_count, options, state)
            self._dispatch_raised(session, len(pending), new_alert_count)

        pending.sort(key=AlertRecord.sort_key)

        state.prev_alerts = {
            a.member_id: frozenset(aggregation.members[a.member_id].trade_ids) for a in pending
        }
        state.is_first_alert_check = False

        for alert in pending:
            self._logger.info(
                "alert_found",
                member_id=alert.member_id,
                alert_kind=alert.kind.value,
                alert_value=alert.value,
                alert_is_new=alert.is_new,
            )
        self._logger.debug(
            "alert_check_complete",
            alert_count=len(pending),
            new_alert_count=new_alert_count,
            effects=[e.value for e in effects],
        )
        return AlertCheckResult(
            alerts=pending,
            new_alert_count=new_alert_count,
            row_colors=row_colors,
            point_warnings=point_warnings,
            effects=effects,
        )

    def _member_alert(
        self,
        member: MemberAggregate,
        outgoing: Optional[OutgoingRecord],
        options: "AlertOptions",
        state: SessionState,
        show_marker: bool,
    ) -> Optional[AlertRecord]:
        threshold = options.bundle_threshold
        value = alert_value(member, threshold)
        if value < threshold and member.total_card_points >= threshold:
            self._logger.debug(
                "member_cannot_afford_threshold",
                member_id=member.member_id,
                member_points=member.member_points,
                bundle_threshold=threshold,
            )

        is_new = is_new_alert(member, state.prev_alerts)
        style = AlertStyle.NORMAL if member.can_afford_all else AlertStyle.WARNING
        marker = f"{NEW_MARKER} " if is_new and show_marker else ""

        # The last rule a member qualifies for decides the message.
        message: Optional[str] = None
        kind = AlertKind.BUNDLE
        if options.on_bundle and value >= threshold:
            member.has_alert = True
            member.has_bundle_alert = True
            message = (
                f"{member.member_name} wants {member.card_qty} cards for "
                f"{member.total_card_points} points {marker}({member.country})"
            )

        if options.on_outgoing and outgoing is not None:
            member.has_alert = True
            member.has_outgoing_alert = True
            value += outgoing.total_points
            kind = AlertKind.OUTGOING
            message = (
                f"{member.member_name} has outgoing trades and wants {member.card_qty} "
                f"more cards for {member.total_card_points} points {marker}"
            ).rstrip()

        if message is None:
            return None
        return AlertRecord(
            member_id=member.member_id,
            member_name=member.member_name,
            message=message,
            style=style,
            value=value,
            is_new=is_new,
            kind=kind,
            first_trade_id=member.first_trade_id,
        )

    @staticmethod
    def _decorate_rows(
        aggregation: AggregationResult,
        options: "AlertOptions",
        state: SessionState,
    ) -> tuple[dict[str, str], list[str]]:
        row_colors: dict[str, str] = {}
        point_warnings: list[str] = []
        for record in aggregation.records:
            member = aggregation.members[record.member_id]
            if not member.has_alert:
                continue
            state.fold_seen_alert(record.trade_id, record.card_points)

            color: Optional[str] = None
            if options.colorize_bundle_rows and member.has_bundle_alert:
                color = options.colorize_bundle_color
            # Outgoing overrides bundle.
            if options.colorize_outgoing_rows and member.has_outgoing_alert:
                color = options.colorize_outgoing_color
            if color is not None:
                row_colors[record.trade_id] = color

            if not member.can_afford_all:
                point_warnings.append(record.trade_id)
        return row_colors, point_warnings

    def _fire_effects(
        self,
        alerts: list[AlertRecord],
        new_alert_count: int,
        options: "AlertOptions",
        state: SessionState,
    ) -> list[AlertEffect]:
        fired: list[AlertEffect] = []
        if options.play_sound and not state.has_played_sound:
            state.has_played_sound = True
            fired.append(AlertEffect.SOUND)
        if not state.has_changed_title:
            state.has_changed_title = True
            fired.append(AlertEffect.TITLE)
        if options.show_notification and not state.has_shown_notification:
            state.has_shown_notification = True
            fired.append(AlertEffect.NOTIFICATION)

        if self._notification_service is not None:
            for effect in fired:
                self._notification_service.notify(
                    self._effect_message(effect, alerts, new_alert_count, options)
                )
        return fired

    @staticmethod
    def _effect_message(
        effect: AlertEffect,
        alerts: list[AlertRecord],
        new_alert_count: int,
        options: "AlertOptions",
    ) -> NotificationMessage:
        if effect is AlertEffect.SOUND:
            return NotificationMessage(
                event_type=effect.event_type,
                message=options.sound_file,
                payload={"sound_file": options.sound_file},
            )
        if effect is AlertEffect.TITLE:
            return NotificationMessage(event_type=effect.event_type, message=options.title_text)
        ordered = sorted(alerts, key=AlertRecord.sort_key)
        return NotificationMessage(
            event_type=effect.event_type,
            title=options.title_text,
            message=f"{len(alerts)} alerts, {new_alert_count} new or expanded",
            payload={
                "timeout_seconds": options.notification_timeout_seconds,
                "alerts": [a.to_dict() for a in ordered],
            },
        )

    def _dispatch_raised(self, session: MonitorSession, alert_count: int, new_alert_count: int) -> None:
        if self._event_bus is None:
            return
        self._event_bus.dispatch(
            AlertRaisedEvent(
                session_id=str(session.id),
                alert_count=alert_count,
                new_alert_count=new_alert_count,
            )
        )
