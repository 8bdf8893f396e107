"""Dial geometry for laid-out events.

Converts level bands into ring radii and local times into dial positions.
Radii are fractions of the dial radius. Positions are in dial units: the
full circle is 60 units and covers 12 hours, so one unit is 12 minutes and
an hour mark sits every 5 units.
"""

from __future__ import annotations

from calface.core.config.models import DialConfig
from calface.core.layout.models import LeveledEvent
from calface.core.timing.constants import HOUR_MS, MINUTE_MS

DIAL_UNITS = 60
UNIT_MS = 12 * MINUTE_MS


def ring_radii(event: LeveledEvent, max_level: int, ring: DialConfig | None = None) -> tuple[float, float]:
    """Radial extent of an event's wedge.

    Level 0 sits at the outer edge of the ring and each level takes an
    equal share of the ring width, so a band ``[lo, hi]`` covers
    ``hi - lo + 1`` shares.

    Args:
        event: Laid-out event.
        max_level: Highest level in the layout the event belongs to.
        ring: Ring geometry (defaults to ``DialConfig()``).

    Returns:
        ``(outer, inner)`` radius fractions, outer first.
    """
    if max_level < event.max_level:
        raise ValueError(f"max_level {max_level} is below the event's band top {event.max_level}")

    ring = ring or DialConfig()
    share = ring.ring_width / (max_level + 1)
    outer = ring.ring_max_radius - event.min_level * share
    inner = ring.ring_max_radius - (event.max_level + 1) * share
    return outer, inner


def dial_position(local_ms: int) -> float:
    """Dial position of a local time, in ``[0, 60)``."""
    return (local_ms / UNIT_MS) % DIAL_UNITS


def arc_span(event: LeveledEvent) -> tuple[float, float]:
    """Start and end dial positions of an event's wedge.

    The end is not wrapped, so ``end - start`` is always the event's
    length in dial units even when the wedge crosses 12 o'clock.
    """
    start = dial_position(event.start_ms)
    return start, start + event.duration_ms / UNIT_MS


def hour_mark(local_ms: int) -> int:
    """Dial position of the hour the display window starts at."""
    return (local_ms // HOUR_MS) * 5 % DIAL_UNITS


__all__ = [
    "DIAL_UNITS",
    "UNIT_MS",
    "arc_span",
    "dial_position",
    "hour_mark",
    "ring_radii",
]
