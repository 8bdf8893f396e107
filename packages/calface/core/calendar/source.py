"""Calendar sources: where raw events come from.

The watch face proper queries the platform calendar; here a source is
anything that can return the events in a UTC range. A static in-memory
source and an event-file loader cover tests and the developer CLI.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from calface.core.config.loader import load_config
from calface.core.layout.models import RawEvent

logger = logging.getLogger(__name__)

# Fallback wedge color (opaque dark gray) when neither the event nor its
# calendar defines one
DEFAULT_COLOR = 0xFF444444


class CalendarSource(Protocol):
    """Protocol for calendar event producers."""

    def fetch(self, start_ms: int, end_ms: int) -> Sequence[RawEvent]:
        """Return events intersecting ``[start_ms, end_ms)`` (UTC ms).

        May block on I/O; callers run it off the render thread.
        """
        ...


class CalendarInstance(BaseModel):
    """One event instance as stored in an event file.

    Mirrors the fields a platform calendar query returns, before
    filtering and color resolution.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    start_ms: int
    end_ms: int
    event_color: int = 0
    calendar_color: int = 0
    all_day: bool = False
    visible: bool = True


class EventFile(BaseModel):
    """Top-level layout of an event file."""

    model_config = ConfigDict(extra="forbid")

    events: list[CalendarInstance] = Field(default_factory=list)


def resolve_color(event_color: int, calendar_color: int) -> int:
    """Pick the wedge color: the event's own, else its calendar's, else gray."""
    if event_color != 0:
        return event_color
    if calendar_color != 0:
        return calendar_color
    return DEFAULT_COLOR


def to_raw_events(instances: Iterable[CalendarInstance]) -> list[RawEvent]:
    """Convert calendar instances to raw events.

    All-day and hidden instances are dropped; they never appear on the dial.
    """
    return [
        RawEvent(
            start_ms=instance.start_ms,
            end_ms=instance.end_ms,
            color=resolve_color(instance.event_color, instance.calendar_color),
        )
        for instance in instances
        if instance.visible and not instance.all_day
    ]


def load_events(path: str | Path) -> list[RawEvent]:
    """Load raw events from a JSON or YAML event file.

    Args:
        path: File with a top-level ``events`` list.

    Returns:
        Visible, timed events with resolved colors, in file order.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file cannot be parsed
        ValidationError: If an event record is invalid
    """
    parsed = EventFile.model_validate(load_config(path))
    events = to_raw_events(parsed.events)
    logger.debug(f"Loaded {len(events)} of {len(parsed.events)} events from {path}")
    return events


class StaticCalendarSource:
    """In-memory calendar source."""

    def __init__(self, events: Iterable[RawEvent] = ()) -> None:
        self._events: tuple[RawEvent, ...] = tuple(events)

    @classmethod
    def from_file(cls, path: str | Path) -> StaticCalendarSource:
        """Build a source from an event file."""
        return cls(load_events(path))

    def replace(self, events: Iterable[RawEvent]) -> None:
        """Swap in a new event set (the next fetch sees it)."""
        self._events = tuple(events)

    def fetch(self, start_ms: int, end_ms: int) -> list[RawEvent]:
        return [e for e in self._events if e.start_ms < end_ms and e.end_ms > start_ms]


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
