"""Shared pytest fixtures for calface tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from calface.core.calendar.source import StaticCalendarSource
from calface.core.config.models import AppConfig
from calface.core.layout.models import DisplayWindow, RawEvent
from calface.core.layout.window import window_for
from calface.core.timing.clock import FixedClock
from calface.core.timing.constants import MINUTE_MS
from tests.fixtures.calface import BASE_MS, EVENTS_FILE, raw

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def events_file() -> Path:
    """Sample event file with colored, all-day and hidden instances."""
    return EVENTS_FILE


# ============================================================================
# Clock Fixtures
# ============================================================================


@pytest.fixture
def clock() -> FixedClock:
    """Clock at BASE_MS + 10 minutes, UTC."""
    return FixedClock(BASE_MS + 10 * MINUTE_MS)


@pytest.fixture
def window(clock: FixedClock) -> DisplayWindow:
    """Display window for the fixed clock (starts at BASE_MS)."""
    return window_for(clock.read())


# ============================================================================
# Config / Source Fixtures
# ============================================================================


@pytest.fixture
def app_config() -> AppConfig:
    """Default application config."""
    return AppConfig()


@pytest.fixture
def overlapping_events() -> list[RawEvent]:
    """Three events where the middle one overlaps both neighbours."""
    return [raw(0, 60, 1), raw(30, 90, 2), raw(60, 120, 1)]


@pytest.fixture
def calendar_source(overlapping_events: list[RawEvent]) -> StaticCalendarSource:
    """In-memory source holding the overlapping events."""
    return StaticCalendarSource(overlapping_events)
