"""Time constants shared across the dial (all values in milliseconds)."""

MINUTE_MS = 60_000
HOUR_MS = 60 * MINUTE_MS

# The dial shows twelve hours, one full revolution of the hour hand.
WINDOW_MS = 12 * HOUR_MS

__all__ = [
    "HOUR_MS",
    "MINUTE_MS",
    "WINDOW_MS",
]
