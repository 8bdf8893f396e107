"""Greedy hole-finding layout.

Deterministic and infallible, so it doubles as the fallback when the
constraint solver gives up.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging

from calface.core.layout.models import (
    ClippedEvent,
    LayoutEngineKind,
    LayoutResult,
    LeveledEvent,
)
from calface.core.layout.overlap import overlaps
from calface.core.utils.logging import log_performance

logger = logging.getLogger(__name__)


class GreedyLayoutEngine:
    """Assigns level bands by filling the first free hole.

    Events are placed one at a time in input order. Event ``i`` looks at
    the levels already taken by every earlier event it overlaps and takes
    the first contiguous run of free levels. When there is no free level,
    a new top level is opened for it, and every earlier event that sat on
    the previous top level without overlapping event ``i`` widens by one
    to absorb the new level.

    O(n²) overlap checks in the common case; widening chains can push
    this toward O(n³), which is fine for the handful of events visible on
    a twelve-hour dial.

    Example:
        >>> engine = GreedyLayoutEngine()
        >>> result = engine.layout(clipped_events)
        >>> [(e.min_level, e.max_level) for e in result.events]
    """

    @property
    def name(self) -> str:
        return "greedy_layout"

    @log_performance
    def layout(self, events: Sequence[ClippedEvent]) -> LayoutResult:
        """Lay out events.

        Args:
            events: Clipped events, already in display order.

        Returns:
            Result whose ``max_level`` is the highest level used.
        """
        logger.debug(f"Running greedy layout with {len(events)} events")

        if not events:
            return LayoutResult(engine=LayoutEngineKind.GREEDY)

        bands, max_level = self.assign_levels(events)
        leveled = tuple(
            LeveledEvent.from_clipped(event, lo, hi)
            for event, (lo, hi) in zip(events, bands, strict=True)
        )
        return LayoutResult(events=leveled, max_level=max_level, engine=LayoutEngineKind.GREEDY)

    @staticmethod
    def assign_levels(events: Sequence[ClippedEvent]) -> tuple[list[list[int]], int]:
        """Compute ``[min_level, max_level]`` for each event.

        Returns:
            Tuple of (bands in input order, highest level used).
        """
        n = len(events)
        if n == 0:
            return [], 0

        bands: list[list[int]] = [[0, 0] for _ in range(n)]
        max_level_anywhere = 0

        for i in range(1, n):
            event = events[i]

            # index max_level_anywhere + 1 is a sentinel that is always
            # taken, so every scan terminates on a full slot
            taken = [False] * (max_level_anywhere + 2)
            for j in range(i):
                if overlaps(event, events[j]):
                    lo, hi = bands[j]
                    for level in range(lo, hi + 1):
                        taken[level] = True
            taken[max_level_anywhere + 1] = True

            hole_start = -1
            hole_end = -1
            for level in range(max_level_anywhere + 1):
                if hole_start == -1:
                    if not taken[level]:
                        hole_start = hole_end = level
                elif not taken[level]:
                    hole_end = level
                else:
                    break

            if hole_start != -1:
                bands[i] = [hole_start, hole_end]
                continue

            new_level = max_level_anywhere + 1
            bands[i] = [new_level, new_level]
            for j in range(i):
                if bands[j][1] == max_level_anywhere and not overlaps(event, events[j]):
                    bands[j][1] = new_level
            max_level_anywhere = new_level

        return bands, max_level_anywhere


__all__ = [
    "GreedyLayoutEngine",
]
