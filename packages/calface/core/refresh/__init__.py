"""Refresh scheduling and snapshot publication."""

from calface.core.refresh.scheduler import RefreshScheduler
from calface.core.refresh.store import LayoutStore

__all__ = [
    "LayoutStore",
    "RefreshScheduler",
]
