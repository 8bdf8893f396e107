"""Tests for the window clipper and display ordering."""

from __future__ import annotations

from calface.core.layout.models import WINDOW_MS, ClippedEvent, DisplayWindow, RawEvent
from calface.core.layout.window import (
    QUERY_SPAN_MS,
    clip_event,
    clip_to_window,
    compute_window,
    display_order,
    query_range,
    window_for,
)
from calface.core.timing.clock import ClockReading
from calface.core.timing.constants import HOUR_MS, MINUTE_MS
from tests.fixtures.calface import BASE_MS, raw


class TestComputeWindow:
    """Test window placement."""

    def test_starts_at_floor_hour(self):
        window = compute_window(local_ms=BASE_MS + 32 * MINUTE_MS, utc_offset_ms=0)
        assert window.start_ms == BASE_MS
        assert window.end_ms == BASE_MS + WINDOW_MS

    def test_window_is_in_utc(self):
        """A local 17:xx reading at UTC-5 still starts the window at 22:00 UTC."""
        offset = -5 * HOUR_MS
        reading = ClockReading(utc_ms=BASE_MS + 30 * MINUTE_MS, utc_offset_ms=offset)
        window = window_for(reading)
        assert window.start_ms == BASE_MS
        assert window.utc_offset_ms == offset
        assert window.local_start_ms == BASE_MS + offset

    def test_half_hour_offset(self):
        """At UTC+5:30 the local hour boundary falls on a UTC half hour."""
        offset = 5 * HOUR_MS + 30 * MINUTE_MS
        reading = ClockReading(utc_ms=BASE_MS + 10 * MINUTE_MS, utc_offset_ms=offset)
        window = window_for(reading)
        assert window.start_ms == BASE_MS - 30 * MINUTE_MS

    def test_query_range_covers_a_day_from_window_start(self):
        reading = ClockReading(utc_ms=BASE_MS + 45 * MINUTE_MS)
        start, end = query_range(reading)
        assert start == window_for(reading).start_ms
        assert end - start == QUERY_SPAN_MS


class TestClipEvent:
    """Test single-event clipping at the window boundaries."""

    def test_inside_window_unchanged(self, window: DisplayWindow):
        event = raw(30, 90, color=7)
        assert clip_event(event, window) == ClippedEvent(
            start_ms=event.start_ms, end_ms=event.end_ms, color=7
        )

    def test_start_clamped_to_window_start(self, window: DisplayWindow):
        clipped = clip_event(raw(-60, 60), window)
        assert clipped is not None
        assert clipped.start_ms == window.start_ms
        assert clipped.end_ms == BASE_MS + 60 * MINUTE_MS

    def test_end_clamped_to_window_end(self, window: DisplayWindow):
        clipped = clip_event(raw(11 * 60, 13 * 60), window)
        assert clipped is not None
        assert clipped.end_ms == window.end_ms

    def test_ending_at_window_start_dropped(self, window: DisplayWindow):
        assert clip_event(raw(-60, 0), window) is None

    def test_starting_at_window_end_dropped(self, window: DisplayWindow):
        assert clip_event(raw(12 * 60, 13 * 60), window) is None

    def test_exact_full_window_dropped(self, window: DisplayWindow):
        assert clip_event(raw(0, 12 * 60), window) is None

    def test_event_spanning_whole_window_dropped(self, window: DisplayWindow):
        assert clip_event(raw(-120, 14 * 60), window) is None

    def test_almost_full_window_kept(self, window: DisplayWindow):
        assert clip_event(raw(1, 12 * 60), window) is not None

    def test_zero_length_dropped(self, window: DisplayWindow):
        assert clip_event(raw(30, 30), window) is None

    def test_reversed_event_dropped(self, window: DisplayWindow):
        assert clip_event(raw(90, 30), window) is None

    def test_idempotent(self, window: DisplayWindow):
        for event in [raw(-60, 60), raw(30, 90), raw(11 * 60, 13 * 60)]:
            once = clip_event(event, window)
            assert once is not None
            assert clip_event(once, window) == once


class TestClipToWindow:
    """Test batch clipping and the shift into local time."""

    def test_preserves_order_and_filters(self, window: DisplayWindow):
        events = [raw(60, 120, 1), raw(-120, -60, 2), raw(0, 30, 3)]
        clipped = clip_to_window(events, window)
        assert [e.color for e in clipped] == [1, 3]

    def test_shifts_into_local_time(self):
        offset = -5 * HOUR_MS
        window = DisplayWindow(start_ms=BASE_MS, end_ms=BASE_MS + WINDOW_MS, utc_offset_ms=offset)
        [clipped] = clip_to_window([raw(60, 120)], window)
        assert clipped.start_ms == BASE_MS + HOUR_MS + offset
        assert clipped.end_ms == BASE_MS + 2 * HOUR_MS + offset

    def test_empty_input(self, window: DisplayWindow):
        assert clip_to_window([], window) == []


class TestDisplayOrder:
    """Test the sort order handed to the layout engines."""

    def test_shorter_duration_bucket_first(self):
        long = raw(0, 180)
        short = raw(0, 30)
        medium = raw(0, 90)
        assert display_order([long, short, medium]) == [short, medium, long]

    def test_color_within_bucket(self):
        a = raw(0, 30, color=2)
        b = raw(100, 130, color=1)
        assert display_order([a, b]) == [b, a]

    def test_earlier_end_first(self):
        a = raw(20, 50, color=1)
        b = raw(0, 40, color=1)
        assert display_order([a, b]) == [b, a]

    def test_later_start_first_on_equal_end(self):
        a = raw(0, 50, color=1)
        b = raw(20, 50, color=1)
        assert display_order([a, b]) == [b, a]

    def test_does_not_mutate_input(self):
        events: list[RawEvent] = [raw(0, 180), raw(0, 30)]
        before = list(events)
        display_order(events)
        assert events == before
