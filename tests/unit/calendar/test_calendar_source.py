"""Tests for calendar event loading and the static source."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError
import pytest

from calface.core.calendar.source import (
    DEFAULT_COLOR,
    CalendarInstance,
    StaticCalendarSource,
    load_events,
    resolve_color,
    to_raw_events,
)
from tests.fixtures.calface import raw


class TestResolveColor:
    """Test wedge color selection."""

    def test_event_color_wins(self):
        assert resolve_color(0xFF0000FF, 0xFF00FF00) == 0xFF0000FF

    def test_calendar_color_fallback(self):
        assert resolve_color(0, 0xFF00FF00) == 0xFF00FF00

    def test_gray_when_uncolored(self):
        assert resolve_color(0, 0) == DEFAULT_COLOR


class TestToRawEvents:
    """Test instance filtering and conversion."""

    def test_filters_all_day_and_hidden(self):
        instances = [
            CalendarInstance(start_ms=0, end_ms=10, event_color=1),
            CalendarInstance(start_ms=0, end_ms=10, all_day=True),
            CalendarInstance(start_ms=0, end_ms=10, visible=False),
        ]
        events = to_raw_events(instances)
        assert len(events) == 1
        assert events[0].color == 1


class TestLoadEvents:
    """Test event file loading."""

    def test_load_sample_file(self, events_file: Path):
        events = load_events(events_file)
        assert [e.color for e in events] == [0xFF3366CC, 0xFF109618, DEFAULT_COLOR]

    def test_json_file(self, tmp_path: Path):
        path = tmp_path / "events.json"
        path.write_text('{"events": [{"start_ms": 0, "end_ms": 60000, "event_color": 7}]}')
        [event] = load_events(path)
        assert (event.start_ms, event.end_ms, event.color) == (0, 60_000, 7)

    def test_invalid_record(self, tmp_path: Path):
        path = tmp_path / "events.yaml"
        path.write_text("events:\n  - start_ms: soon\n    end_ms: 10\n")
        with pytest.raises(ValidationError):
            load_events(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_events(tmp_path / "nope.yaml")


class TestStaticCalendarSource:
    """Test the in-memory source."""

    def test_fetch_returns_intersecting_events(self):
        inside, before, after = raw(10, 20), raw(-60, -10), raw(200, 260)
        source = StaticCalendarSource([inside, before, after])
        start, end = inside.start_ms - 1, inside.end_ms + 1
        assert source.fetch(start, end) == [inside]

    def test_fetch_excludes_touching(self):
        event = raw(0, 60)
        source = StaticCalendarSource([event])
        assert source.fetch(event.end_ms, event.end_ms + 1) == []

    def test_replace(self):
        source = StaticCalendarSource([raw(0, 60)])
        source.replace([])
        assert source.fetch(0, 2**62) == []

    def test_from_file(self, events_file: Path):
        source = StaticCalendarSource.from_file(events_file)
        assert len(source.fetch(0, 2**62)) == 3
