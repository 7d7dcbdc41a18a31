# -*- coding: utf-8 -*-
"""ReloadScheduler: drives periodic polling of the two record feeds.

A reload fetches trade pages (growing while pages come back full) and the
outgoing trades, waits for both to complete, runs the poll cycle and re-arms a
single debounced timer. Everything runs on one event loop; feed completions
carry a CycleToken so results of a stopped or superseded cycle are ignored.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Coroutine
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from structlog.contextvars import bound_contextvars

from trade_offer_monitor.events.analytics_events import (
    ReloadFailedEvent,
    ReloadStartedEvent,
    TradeSentEvent,
)
from trade_offer_monitor.models.monitor_settings import MIN_RELOAD_INTERVAL_SECONDS
from trade_offer_monitor.models.outgoing_record import OutgoingRecord
from trade_offer_monitor.models.session import MonitorSession, SessionSummary
from trade_offer_monitor.models.trade_record import TradeRecord
from trade_offer_monitor.services.reload.cycle_token import CycleToken

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from trade_offer_monitor.config import Settings
    from trade_offer_monitor.ingestion.base import IBlockingStateProbe, IRecordIngestor
    from trade_offer_monitor.persistence.repositories.interfaces import ISettingsRepository
    from trade_offer_monitor.services.aggregation.outgoing_aggregator import OutgoingAggregator
    from trade_offer_monitor.services.poll_cycle import (
        IDisplaySink,
        PollCycleResult,
        PollCycleService,
    )


class ReloadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    AWAITING_BARRIER = "awaiting_barrier"
    AGGREGATING = "aggregating"
    SCHEDULED = "scheduled"
    STOPPED = "stopped"


class ReloadScheduler:
    """State machine joining the trade and outgoing feeds before each poll cycle.

    IDLE -> LOADING -> AWAITING_BARRIER -> AGGREGATING -> SCHEDULED -> LOADING ...
    and STOPPED from any state.
    """

    def __init__(
        self,
        ingestor: "IRecordIngestor",
        poll_cycle: "PollCycleService",
        session: MonitorSession,
        settings: "Settings",
        *,
        outgoing_aggregator: "OutgoingAggregator",
        blocking_probe: Optional["IBlockingStateProbe"] = None,
        settings_repository: Optional["ISettingsRepository"] = None,
        display: Optional["IDisplaySink"] = None,
        event_bus: Optional[Any] = None,
        clock: Callable[[], float] = time.monotonic,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            ingestor: Source of trade pages and outgoing trades.
            poll_cycle: Aggregate/alert/filter pipeline run once both feeds complete.
            session: Session context (user settings plus cross-poll state).
            settings: Application settings (uses settings.scheduler).
            outgoing_aggregator: Folds outgoing rows per member.
            blocking_probe: Reports a modal that should stall reloads.
            settings_repository: When set, user settings are re-read at every reload.
            display: Receives every completed PollCycleResult.
            event_bus: Optional; analytics events are dispatched on it.
            clock: Monotonic clock in seconds (injected for tests).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._ingestor = ingestor
        self._poll_cycle = poll_cycle
        self._session = session
        self._scheduler_settings = settings.scheduler
        self._outgoing_aggregator = outgoing_aggregator
        self._blocking_probe = blocking_probe
        self._settings_repository = settings_repository
        self._display = display
        self._event_bus: Optional["EventBus"] = event_bus
        self._clock = clock
        self._logger = get_logger(logger_name or self.__class__.__name__)

        self._running = False
        self._state = ReloadState.IDLE
        self._go_lock = asyncio.Lock()
        self._cycle = 0
        self._token: Optional[CycleToken] = None
        self._reload_task: Optional[asyncio.Task[None]] = None
        self._watchdog_task: Optional[asyncio.Task[None]] = None
        self._inflight: set[asyncio.Task[None]] = set()

        self._trades_complete = False
        self._outgoing_complete = False
        self._records: list[TradeRecord] = []
        self._pages_loaded = 0
        self._outgoing: Optional[dict[str, OutgoingRecord]] = None
        self._last_outgoing_load: Optional[float] = None
        self._last_progress_at = 0.0
        self._last_result: Optional["PollCycleResult"] = None

    @property
    def state(self) -> ReloadState:
        return self._state

    @property
    def running(self) -> bool:
        return self._running

    @property
    def cycle(self) -> int:
        """Number of reload cycles started so far."""
        return self._cycle

    @property
    def has_pending_reload(self) -> bool:
        return self._reload_task is not None and not self._reload_task.done()

    @property
    def last_result(self) -> Optional["PollCycleResult"]:
        return self._last_result

    @property
    def session(self) -> MonitorSession:
        return self._session

    # ---- control ----

    async def start(self) -> None:
        """Start reloading. No-op when already running."""
        if self._running:
            self._logger.debug("reload_start_ignored_running")
            return
        self._running = True
        self._logger.info("reload_scheduler_started", session_id=str(self._session.id))
        await self._go()

    def stop(self) -> SessionSummary:
        """Stop reloading and return the session summary.

        In-flight fetches are left to finish; their completions see the
        cancelled token and do nothing.
        """
        self._running = False
        if self._token is not None:
            self._token.cancel()
        self._cancel_reload_timer()
        self._cancel_watchdog()
        self._state = ReloadState.STOPPED
        summary = self._session.summary()
        self._logger.info(
            "reload_scheduler_stopped",
            session_id=str(summary.session_id),
            cycles=self._cycle,
            sent_trades=summary.sent_trades,
            alerted_trades=summary.alerted_trades,
            alerted_points=summary.alerted_points,
        )
        return summary

    async def aclose(self) -> SessionSummary:
        """Stop and cancel every task still in flight (process shutdown)."""
        summary = self.stop()
        current = asyncio.current_task()
        tasks = [
            t
            for t in (*self._inflight, self._reload_task, self._watchdog_task)
            if t is not None and t is not current and not t.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._inflight.clear()
        return summary

    async def reload_now(self) -> None:
        """Drop the pending timer and reload immediately (starts the scheduler if needed)."""
        if not self._running:
            await self.start()
            return
        self._cancel_reload_timer()
        await self._go()

    def reset_session(self) -> None:
        """Forget alert history, sent trades and cached outgoing trades.

        Raises:
            RuntimeError: If the scheduler is running; stop it first.
        """
        if self._running:
            raise RuntimeError("Cannot reset the session while the scheduler is running")
        self._session.state.reset()
        self._outgoing = None
        self._last_outgoing_load = None
        self._last_result = None
        self._logger.info("session_reset", session_id=str(self._session.id))

    def record_trade_sent(self, trade_id: str) -> int:
        """Count a card the user confirmed sending and force an outgoing refresh.

        Returns:
            The sent card's points, 0 when the offer was not in the last poll.
        """
        state = self._session.state
        state.sent_trades += 1
        self._last_outgoing_load = None
        card_points = state.card_points.get(trade_id, 0)
        self._logger.info(
            "trade_sent_recorded",
            trade_id=trade_id,
            card_points=card_points,
            sent_trades=state.sent_trades,
        )
        if self._event_bus is not None:
            self._event_bus.dispatch(
                TradeSentEvent(
                    session_id=str(self._session.id),
                    trade_id=trade_id,
                    card_points=card_points,
                )
            )
        return card_points

    # ---- cycle ----

    async def _go(self) -> None:
        async with self._go_lock:
            if not self._running:
                return
            if self._blocking_probe is not None and self._blocking_probe.is_blocking():
                self._logger.debug("reload_stalled_blocking_modal")
                self._arm_reload_timer(self._scheduler_settings.modal_poll_seconds)
                return
            await self._begin_cycle()

    async def _begin_cycle(self) -> None:
        await self._refresh_settings()
        if not self._running:
            return

        self._session.state.begin_cycle()
        if self._token is not None:
            self._token.cancel()
        self._cycle += 1
        token = CycleToken(cycle=self._cycle)
        self._token = token

        self._trades_complete = False
        self._outgoing_complete = False
        self._records = []
        self._pages_loaded = 0
        self._state = ReloadState.LOADING
        self._touch()
        self._arm_watchdog(token)

        self._logger.info("reload_started", cycle=token.cycle)
        if self._event_bus is not None:
            self._event_bus.dispatch(
                ReloadStartedEvent(session_id=str(self._session.id), cycle=token.cycle)
            )

        self._spawn(self._load_trades(token), name=f"trade-pages-{token.cycle}")
        if self._outgoing_is_fresh():
            self._outgoing_complete = True
            self._logger.debug("outgoing_cache_used", cycle=token.cycle)
        else:
            self._spawn(self._load_outgoing(token), name=f"outgoing-{token.cycle}")

    async def _refresh_settings(self) -> None:
        if self._settings_repository is None:
            return
        try:
            self._session.settings = await self._settings_repository.load()
        except Exception:
            self._logger.exception("settings_reload_failed")

    def _is_stale(self, token: CycleToken) -> bool:
        return token.cancelled or token is not self._token or not self._running

    def _touch(self) -> None:
        self._last_progress_at = self._clock()

    async def _load_trades(self, token: CycleToken) -> None:
        high_water_mark = self._scheduler_settings.page_high_water_mark
        page = 1
        with bound_contextvars(cycle=token.cycle):
            while True:
                try:
                    trade_page = await self._ingestor.fetch_trade_page(page)
                except Exception:
                    if self._is_stale(token):
                        return
                    self._logger.exception("trade_page_fetch_failed", page=page)
                    return
                if self._is_stale(token):
                    self._logger.debug("stale_trade_page_ignored", page=page)
                    return

                self._records.extend(trade_page.records)
                self._pages_loaded = page
                self._touch()

                full = trade_page.row_count >= high_water_mark
                if full and page < self._session.settings.max_pages:
                    self._logger.debug("trade_page_full", page=page, rows=trade_page.row_count)
                    await asyncio.sleep(self._scheduler_settings.page_fetch_delay_seconds)
                    if self._is_stale(token):
                        return
                    page += 1
                    continue
                break

            self._logger.debug(
                "trade_feed_complete",
                pages_loaded=self._pages_loaded,
                trade_rows=len(self._records),
            )
            self._trades_complete = True
            await self._on_feed_complete(token)

    def _outgoing_is_fresh(self) -> bool:
        if self._outgoing is None or self._last_outgoing_load is None:
            return False
        age = self._clock() - self._last_outgoing_load
        return age < self._scheduler_settings.outgoing_refresh_seconds

    async def _load_outgoing(self, token: CycleToken) -> None:
        with bound_contextvars(cycle=token.cycle):
            try:
                rows = await self._ingestor.fetch_outgoing()
            except Exception:
                if self._is_stale(token):
                    return
                self._logger.exception("outgoing_fetch_failed")
                return
            if self._is_stale(token):
                self._logger.debug("stale_outgoing_ignored")
                return

            self._outgoing = self._outgoing_aggregator.fold(rows)
            self._last_outgoing_load = self._clock()
            self._outgoing_complete = True
            self._touch()
            self._logger.debug("outgoing_feed_complete", outgoing_members=len(self._outgoing))
            await self._on_feed_complete(token)

    async def _on_feed_complete(self, token: CycleToken) -> None:
        if self._is_stale(token):
            return
        if not (self._trades_complete and self._outgoing_complete):
            self._state = ReloadState.AWAITING_BARRIER
            return
        await self._aggregate(token)

    async def _aggregate(self, token: CycleToken) -> None:
        self._state = ReloadState.AGGREGATING
        self._cancel_watchdog()
        records, self._records = self._records, []
        result: Optional["PollCycleResult"] = None
        try:
            result = self._poll_cycle.run(
                records,
                self._outgoing or {},
                self._session,
                cycle=token.cycle,
            )
            if self._display is not None:
                await self._display.render(result)
        except Exception:
            self._logger.exception("poll_cycle_failed", cycle=token.cycle)
        # A reload_now() or restart during render owns the schedule now.
        if self._is_stale(token):
            self._logger.debug("stale_poll_cycle_ignored", cycle=token.cycle)
            return
        if result is not None:
            self._last_result = result
        self._queue_reload()

    # ---- timers ----

    def _queue_reload(self) -> None:
        if not self._running:
            return
        interval = max(self._session.settings.reload_interval, MIN_RELOAD_INTERVAL_SECONDS)
        self._state = ReloadState.SCHEDULED
        self._arm_reload_timer(interval)
        self._logger.debug("reload_queued", reload_in_seconds=interval)

    def _arm_reload_timer(self, delay: float) -> None:
        self._cancel_reload_timer()
        self._reload_task = asyncio.create_task(self._reload_after(delay), name="reload-timer")

    def _cancel_reload_timer(self) -> None:
        task = self._reload_task
        self._reload_task = None
        if task is not None and task is not asyncio.current_task() and not task.done():
            task.cancel()

    async def _reload_after(self, delay: float) -> None:
        await asyncio.sleep(delay)
        # The timer has fired; from here on it must not be cancelled as "pending".
        self._reload_task = None
        try:
            await self._go()
        except Exception:
            self._logger.exception("reload_failed")
            self._queue_reload()

    def _arm_watchdog(self, token: CycleToken) -> None:
        self._cancel_watchdog()
        timeout = self._scheduler_settings.barrier_timeout_seconds
        if timeout is None:
            return
        self._watchdog_task = asyncio.create_task(
            self._watch_barrier(token, timeout), name=f"barrier-watchdog-{token.cycle}"
        )

    def _cancel_watchdog(self) -> None:
        task = self._watchdog_task
        self._watchdog_task = None
        if task is not None and task is not asyncio.current_task() and not task.done():
            task.cancel()

    async def _watch_barrier(self, token: CycleToken, timeout: float) -> None:
        while True:
            remaining = self._last_progress_at + timeout - self._clock()
            if remaining <= 0:
                break
            await asyncio.sleep(remaining)
            if self._is_stale(token):
                return
        if self._is_stale(token):
            return
        self._fail_cycle(token)

    def _fail_cycle(self, token: CycleToken) -> None:
        pending = [
            name
            for name, complete in (
                ("trades", self._trades_complete),
                ("outgoing", self._outgoing_complete),
            )
            if not complete
        ]
        self._logger.error(
            "reload_barrier_timeout",
            cycle=token.cycle,
            pending_feeds=pending,
            pages_loaded=self._pages_loaded,
        )
        token.cancel()
        self._records = []
        if self._event_bus is not None:
            self._event_bus.dispatch(
                ReloadFailedEvent(
                    session_id=str(self._session.id),
                    cycle=token.cycle,
                    reason="barrier_timeout",
                    pending_feeds=pending,
                    pages_loaded=self._pages_loaded,
                )
            )
        self._queue_reload()

    def _spawn(self, coro: Coroutine[Any, Any, None], *, name: str) -> None:
        task = asyncio.create_task(coro, name=name)
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
