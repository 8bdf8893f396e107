"""Dial geometry: level bands to radii, local times to dial positions."""

from calface.core.dial.geometry import (
    DIAL_UNITS,
    UNIT_MS,
    arc_span,
    dial_position,
    hour_mark,
    ring_radii,
)

__all__ = [
    "DIAL_UNITS",
    "UNIT_MS",
    "arc_span",
    "dial_position",
    "hour_mark",
    "ring_radii",
]
