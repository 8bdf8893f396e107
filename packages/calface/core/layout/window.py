"""Window clipper: maps absolute calendar events onto the twelve-hour dial.

The dial always shows the twelve hours starting at the top of the current
local hour. Events are intersected with that window, filtered for
visibility, and shifted into local time for the renderer's angle math.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging

from calface.core.layout.models import (
    HOUR_MS,
    WINDOW_MS,
    ClippedEvent,
    DisplayWindow,
    RawEvent,
)
from calface.core.timing.clock import ClockReading

logger = logging.getLogger(__name__)

# Calendar sources are queried for a full day so the next hourly refresh
# still has data if the source is slow.
QUERY_SPAN_MS = 24 * HOUR_MS


def compute_window(local_ms: int, utc_offset_ms: int) -> DisplayWindow:
    """Compute the display window for a local time.

    Args:
        local_ms: Current local time in milliseconds.
        utc_offset_ms: Local offset from UTC in milliseconds.

    Returns:
        Window starting at the local floor hour, expressed in UTC.

    Example:
        >>> w = compute_window(local_ms=5_400_000, utc_offset_ms=0)  # 01:30
        >>> w.start_ms, w.end_ms
        (3600000, 46800000)
    """
    floor_hour = local_ms - local_ms % HOUR_MS
    start = floor_hour - utc_offset_ms
    return DisplayWindow(start_ms=start, end_ms=start + WINDOW_MS, utc_offset_ms=utc_offset_ms)


def window_for(reading: ClockReading) -> DisplayWindow:
    """Display window for a clock reading."""
    return compute_window(reading.local_ms, reading.utc_offset_ms)


def query_range(reading: ClockReading) -> tuple[int, int]:
    """UTC range a calendar source should be asked for."""
    start = reading.local_floor_hour_ms - reading.utc_offset_ms
    return start, start + QUERY_SPAN_MS


def clip_event(event: RawEvent, window: DisplayWindow) -> ClippedEvent | None:
    """Intersect one event with the window.

    Times stay in the absolute timebase, so clipping an already-clipped
    event against the same window returns an equal event.

    Returns:
        The clipped event, or None when it is not visible: entirely
        outside the window, covering the entire window, or empty.
    """
    start = max(event.start_ms, window.start_ms)
    end = min(event.end_ms, window.end_ms)

    if end <= window.start_ms or start >= window.end_ms:
        return None
    # an event filling the whole dial would hide everything else
    if start == window.start_ms and end == window.end_ms:
        return None
    if end <= start:
        return None

    return ClippedEvent(start_ms=start, end_ms=end, color=event.color)


def clip_to_window(events: Iterable[RawEvent], window: DisplayWindow) -> list[ClippedEvent]:
    """Clip events to the window and shift survivors into local time.

    Input order is preserved; the layout engines depend on it.

    Args:
        events: Raw events in UTC.
        window: Current display window.

    Returns:
        Visible events in the local timebase.
    """
    offset = window.utc_offset_ms
    clipped: list[ClippedEvent] = []
    total = 0
    for event in events:
        total += 1
        visible = clip_event(event, window)
        if visible is None:
            continue
        clipped.append(
            ClippedEvent(
                start_ms=visible.start_ms + offset,
                end_ms=visible.end_ms + offset,
                color=visible.color,
            )
        )

    logger.debug(f"Clipped {total} events to {len(clipped)} visible")
    return clipped


def display_order(events: Sequence[RawEvent]) -> list[RawEvent]:
    """Order events the way the layout engines expect them.

    Sort keys, in priority order:

    1. Duration bucket (whole hours), shorter events first.
    2. Color, so events from the same calendar become adjacent wedges.
    3. End time, earlier first; long events ending late drift inward.
    4. Start time, later first.
    """
    return sorted(
        events,
        key=lambda e: (e.duration_ms // HOUR_MS, e.color, e.end_ms, -e.start_ms),
    )


__all__ = [
    "QUERY_SPAN_MS",
    "clip_event",
    "clip_to_window",
    "compute_window",
    "display_order",
    "query_range",
    "window_for",
]
