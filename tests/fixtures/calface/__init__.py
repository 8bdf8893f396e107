"""Event builders for layout tests.

Times are given in minutes to keep test cases readable.
"""

from pathlib import Path

from calface.core.layout.models import ClippedEvent, RawEvent
from calface.core.timing.constants import MINUTE_MS

# 2023-11-14T22:00:00Z, on an hour boundary
BASE_MS = 1_699_999_200_000

EVENTS_FILE = Path(__file__).parent / "events.yaml"


def raw(start_min: int, end_min: int, color: int = 0) -> RawEvent:
    """Raw event given in minutes after BASE_MS."""
    return RawEvent(
        start_ms=BASE_MS + start_min * MINUTE_MS,
        end_ms=BASE_MS + end_min * MINUTE_MS,
        color=color,
    )


def clipped(start_min: int, end_min: int, color: int = 0) -> ClippedEvent:
    """Clipped event given in minutes on the dial."""
    return ClippedEvent(start_ms=start_min * MINUTE_MS, end_ms=end_min * MINUTE_MS, color=color)


__all__ = ["BASE_MS", "EVENTS_FILE", "clipped", "raw"]
