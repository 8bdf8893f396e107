"""Time-interval overlap test shared by both layout engines."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Protocol


class TimeSpan(Protocol):
    """Anything with a start and end in milliseconds."""

    @property
    def start_ms(self) -> int: ...

    @property
    def end_ms(self) -> int: ...


def overlaps(a: TimeSpan, b: TimeSpan) -> bool:
    """Whether two intervals intersect.

    The comparison is strict, so intervals that only touch at an
    endpoint (a meeting ending at 10:00, the next starting at 10:00)
    do not overlap.
    """
    return a.start_ms < b.end_ms and b.start_ms < a.end_ms


def overlapping_pairs(events: Sequence[TimeSpan]) -> Iterator[tuple[int, int]]:
    """Yield every index pair ``(i, j)`` with ``i < j`` whose events overlap."""
    for i in range(len(events)):
        for j in range(i + 1, len(events)):
            if overlaps(events[i], events[j]):
                yield i, j


__all__ = [
    "TimeSpan",
    "overlapping_pairs",
    "overlaps",
]
