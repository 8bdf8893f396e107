"""Calendar event sources."""

from calface.core.calendar.source import (
    DEFAULT_COLOR,
    CalendarInstance,
    CalendarSource,
    EventFile,
    StaticCalendarSource,
    load_events,
    resolve_color,
    to_raw_events,
)

__all__ = [
    "DEFAULT_COLOR",
    "CalendarInstance",
    "CalendarSource",
    "EventFile",
    "StaticCalendarSource",
    "load_events",
    "resolve_color",
    "to_raw_events",
]
