"""Clock readings and time constants."""

from calface.core.timing.clock import Clock, ClockReading, FixedClock, SystemClock
from calface.core.timing.constants import HOUR_MS, MINUTE_MS, WINDOW_MS

__all__ = [
    "HOUR_MS",
    "MINUTE_MS",
    "WINDOW_MS",
    "Clock",
    "ClockReading",
    "FixedClock",
    "SystemClock",
]
