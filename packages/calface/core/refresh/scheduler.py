"""Refresh scheduling: when to recompute the dial layout, and where.

A refresh fetches events from the calendar source, runs the layout
pipeline and publishes the result. It is triggered at startup, when the
local hour rolls over, and when the calendar reports a change. The work
runs on a worker thread so the event loop (and the renderer reading the
store) never waits on the solver.

At most one refresh is in flight. Requests arriving while one is running
are dropped rather than queued; the running refresh, or the next hourly
check, picks up the newer state.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging

from calface.core.calendar.source import CalendarSource
from calface.core.config.models import RefreshConfig
from calface.core.layout.models import LayoutResult
from calface.core.layout.window import query_range
from calface.core.pipeline.result import StageResult
from calface.core.pipeline.runner import LayoutPipeline
from calface.core.refresh.store import LayoutStore
from calface.core.timing.clock import Clock, ClockReading

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Owns the refresh cycle for one watch face.

    Created and torn down by its owner; there is no global instance.

    Args:
        source: Calendar source to fetch raw events from.
        pipeline: Layout pipeline to run on fetched events.
        store: Store the results are published to.
        clock: Clock used to place the display window.
        config: Refresh timing configuration.

    Example:
        >>> scheduler = RefreshScheduler(source, LayoutPipeline(config), store, SystemClock())
        >>> await scheduler.start()
        >>> ...
        >>> scheduler.notify_calendar_changed()  # from any thread
        >>> ...
        >>> await scheduler.stop()
    """

    def __init__(
        self,
        source: CalendarSource,
        pipeline: LayoutPipeline,
        store: LayoutStore,
        clock: Clock,
        config: RefreshConfig | None = None,
    ) -> None:
        self.source = source
        self.pipeline = pipeline
        self.store = store
        self.clock = clock
        self.config = config or RefreshConfig()

        self._in_flight: asyncio.Task[LayoutResult | None] | None = None
        self._ticker: asyncio.Task[None] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._last_hour_ms: int | None = None

    @property
    def in_flight(self) -> bool:
        """Whether a refresh is currently running."""
        return self._in_flight is not None and not self._in_flight.done()

    def request_refresh(self, reason: str = "requested") -> asyncio.Task[LayoutResult | None] | None:
        """Start a refresh unless one is already running.

        Must be called from the event loop thread.

        Args:
            reason: Why the refresh was requested (for logs).

        Returns:
            The task computing the refresh, or None if the request was
            coalesced into the one already running.
        """
        if self.in_flight:
            logger.info(f"Refresh already in progress, ignoring request ({reason})")
            return None

        self._loop = asyncio.get_running_loop()
        logger.info(f"Refresh starting ({reason})")
        task = asyncio.create_task(self._refresh(reason))
        self._in_flight = task
        return task

    async def refresh(self, reason: str = "requested") -> LayoutResult | None:
        """Run a refresh and wait for it.

        If a refresh is already running, waits for that one instead.

        Returns:
            The published snapshot, or None if nothing was published.
        """
        task = self.request_refresh(reason)
        if task is None:
            assert self._in_flight is not None
            task = self._in_flight
        return await task

    def check_hour(self) -> asyncio.Task[LayoutResult | None] | None:
        """Request a refresh if the local hour changed since the last one."""
        hour_ms = self.clock.read().local_floor_hour_ms
        if hour_ms == self._last_hour_ms:
            return None
        return self.request_refresh("hour changed")

    def notify_calendar_changed(self) -> None:
        """Signal that calendar contents changed. Safe from any thread."""
        loop = self._loop
        if loop is None or loop.is_closed():
            logger.warning("Calendar change ignored: scheduler is not running")
            return
        loop.call_soon_threadsafe(self.request_refresh, "calendar changed")

    async def start(self) -> None:
        """Run the initial refresh and begin hourly checks."""
        self._loop = asyncio.get_running_loop()
        self.request_refresh("startup")
        if self._ticker is None or self._ticker.done():
            self._ticker = asyncio.create_task(self._tick_loop())

    async def stop(self) -> None:
        """Stop hourly checks and wait for any running refresh."""
        if self._ticker is not None:
            self._ticker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._ticker
            self._ticker = None

        if self._in_flight is not None and not self._in_flight.done():
            await self._in_flight
        self._loop = None

    async def _tick_loop(self) -> None:
        while True:
            await asyncio.sleep(self.config.check_interval_s)
            self.check_hour()

    async def _refresh(self, reason: str) -> LayoutResult | None:
        reading = self.clock.read()
        self._last_hour_ms = reading.local_floor_hour_ms

        try:
            result = await asyncio.to_thread(self._compute, reading)
        except Exception:
            # keep showing the previous snapshot
            logger.exception(f"Refresh failed ({reason})")
            return None

        if not result.success or result.output is None:
            logger.error(f"Refresh produced no layout ({reason}): {result.error}")
            return None

        return self.store.publish(result.output)

    def _compute(self, reading: ClockReading) -> StageResult[LayoutResult]:
        start_ms, end_ms = query_range(reading)
        events = self.source.fetch(start_ms, end_ms)
        logger.debug(f"Fetched {len(events)} events for [{start_ms}, {end_ms})")
        return self.pipeline.run(events, reading)


__all__ = [
    "RefreshScheduler",
]
