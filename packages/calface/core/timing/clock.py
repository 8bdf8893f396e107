"""Clock readings for the dial.

The layout only needs two numbers from the outside world: the current
UTC instant and the local offset from UTC. Both are captured together in
a ``ClockReading`` so a refresh cycle works against one consistent view
of "now" even if it straddles an hour boundary.
"""

from __future__ import annotations

from datetime import datetime
import time
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from calface.core.timing.constants import HOUR_MS


class ClockReading(BaseModel):
    """A single reading of the wall clock.

    Attributes:
        utc_ms: Current instant in UTC milliseconds.
        utc_offset_ms: Local offset from UTC in milliseconds, including
            any daylight saving correction.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    utc_ms: int
    utc_offset_ms: int = 0

    @property
    def local_ms(self) -> int:
        """Current instant in the local timebase."""
        return self.utc_ms + self.utc_offset_ms

    @property
    def local_floor_hour_ms(self) -> int:
        """Local time truncated to the hour (12:32 becomes 12:00)."""
        return self.local_ms - self.local_ms % HOUR_MS


class Clock(Protocol):
    """Source of clock readings."""

    def read(self) -> ClockReading:
        """Take a reading of the current time."""
        ...


class SystemClock:
    """Reads the host clock and local timezone."""

    def read(self) -> ClockReading:
        now_s = time.time()
        offset = datetime.fromtimestamp(now_s).astimezone().utcoffset()
        offset_ms = int(offset.total_seconds() * 1000) if offset is not None else 0
        return ClockReading(utc_ms=int(now_s * 1000), utc_offset_ms=offset_ms)


class FixedClock:
    """Clock pinned to a reading; advance it by hand."""

    def __init__(self, utc_ms: int, utc_offset_ms: int = 0) -> None:
        self._reading = ClockReading(utc_ms=utc_ms, utc_offset_ms=utc_offset_ms)

    def read(self) -> ClockReading:
        return self._reading

    def advance(self, delta_ms: int) -> None:
        """Move the clock forward by ``delta_ms``."""
        self._reading = self._reading.model_copy(
            update={"utc_ms": self._reading.utc_ms + delta_ms}
        )


__all__ = [
    "Clock",
    "ClockReading",
    "FixedClock",
    "SystemClock",
]
