# -*- coding: utf-8 -*-
"""Plain-text styler for alert effects and poll cycle summaries."""

from __future__ import annotations

from typing import Any, cast

from trade_offer_monitor.notifications.types import NotificationMessage, NotificationStyler


class AlertNotificationStyler(NotificationStyler):
    """Render notifications by event_type with emoji headers and aligned sections."""

    def render(self, message: NotificationMessage) -> str:
        """Dispatch to the renderer for message.event_type."""
        if message.event_type == "alert_notification":
            return self._render_alert_notification(message)
        if message.event_type == "alert_title":
            return self._render_title(message)
        if message.event_type == "poll_cycle_complete":
            return self._render_cycle(message)
        if message.event_type == "reload_failed":
            return self._render_reload_failed(message)
        return self._render_generic(message)

    def _render_title(self, message: NotificationMessage) -> str:
        return f"{'═' * 4} {message.message} {'═' * 4}"

    def _render_alert_notification(self, message: NotificationMessage) -> str:
        payload = message.payload or {}
        emoji, title = self._title(message.event_type)
        lines = [f"{emoji} {message.title or title}", message.message]
        raw_alerts = payload.get("alerts")
        if isinstance(raw_alerts, list):
            rows = [
                ("★" if a.get("is_new") else "·", a.get("message", ""))
                for a in cast(list[dict[str, Any]], raw_alerts)
            ]
            lines.append(self._section("Alerts", rows))
        return "\n".join(line for line in lines if line).strip()

    def _render_cycle(self, message: NotificationMessage) -> str:
        payload = message.payload or {}
        emoji, title = self._title(message.event_type)
        lines = [
            f"{emoji} {title} #{payload.get('cycle', '?')}",
            self._section(
                "Counters",
                [
                    ("Alerts:", payload.get("alert_count")),
                    ("New alerts:", payload.get("new_alert_count")),
                    ("Visible trades:", payload.get("visible_count")),
                    ("Filtered trades:", payload.get("filtered_count")),
                ],
            ),
        ]
        raw_alerts = payload.get("alerts")
        if isinstance(raw_alerts, list) and raw_alerts:
            rows = [
                (self._value_label(a), a.get("message", ""))
                for a in cast(list[dict[str, Any]], raw_alerts)
            ]
            lines.append(self._section("Alerts", rows))
        return "\n".join(line for line in lines if line).strip()

    def _render_reload_failed(self, message: NotificationMessage) -> str:
        payload = message.payload or {}
        emoji, title = self._title(message.event_type)
        pending = payload.get("pending_feeds") or []
        lines = [
            f"{emoji} {title}",
            message.message,
            self._section(
                "Details",
                [
                    ("Cycle:", payload.get("cycle")),
                    ("Pending feeds:", ", ".join(str(p) for p in pending)),
                    ("Pages loaded:", payload.get("pages_loaded")),
                ],
            ),
        ]
        return "\n".join(line for line in lines if line).strip()

    def _render_generic(self, message: NotificationMessage) -> str:
        emoji, title = self._title(message.event_type)
        lines = [f"{emoji} {message.title or title}", message.message]
        if message.payload:
            for key in sorted(message.payload):
                value = message.payload[key]
                if value is not None:
                    lines.append(f"{key}: {value}")
        return "\n".join(lines).strip()

    @staticmethod
    def _value_label(alert: dict[str, Any]) -> str:
        marker = "!" if alert.get("style") == "warning" else " "
        return f"{alert.get('value', 0):>6}{marker}"

    @staticmethod
    def _title(event_type: str) -> tuple[str, str]:
        mapping = {
            "alert_notification": ("🔔", "Trade alert"),
            "alert_title": ("★", "Trade alert"),
            "poll_cycle_complete": ("🔄", "Poll cycle"),
            "reload_failed": ("⚠️", "Reload failed"),
            "session_summary": ("📋", "Session summary"),
        }
        return mapping.get(event_type, ("ℹ️", event_type.replace("_", " ").title()))

    @staticmethod
    def _section(header: str, rows: list[tuple[str, Any]]) -> str:
        """Format a header plus label/value rows; rows with an empty value are skipped."""
        content = [
            f"{label} {value}".strip()
            for label, value in rows
            if value is not None and value != ""
        ]
        if not content:
            return ""
        return "\n".join([header, "─" * 12, *content])
