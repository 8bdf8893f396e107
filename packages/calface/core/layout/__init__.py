"""Dial event layout: window clipping and level-band assignment."""

from calface.core.layout.constraint import (
    DEFAULT_MAX_LEVEL,
    ConstraintLayoutEngine,
    LayoutFailure,
)
from calface.core.layout.greedy import GreedyLayoutEngine
from calface.core.layout.models import (
    ClippedEvent,
    DisplayWindow,
    LayoutEngineKind,
    LayoutResult,
    LeveledEvent,
    RawEvent,
)
from calface.core.layout.orchestrator import LayoutOrchestrator, SolverFailurePolicy
from calface.core.layout.overlap import overlapping_pairs, overlaps
from calface.core.layout.window import (
    clip_event,
    clip_to_window,
    compute_window,
    display_order,
    query_range,
    window_for,
)

__all__ = [
    "DEFAULT_MAX_LEVEL",
    "ClippedEvent",
    "ConstraintLayoutEngine",
    "DisplayWindow",
    "GreedyLayoutEngine",
    "LayoutEngineKind",
    "LayoutFailure",
    "LayoutOrchestrator",
    "LayoutResult",
    "LeveledEvent",
    "RawEvent",
    "SolverFailurePolicy",
    "clip_event",
    "clip_to_window",
    "compute_window",
    "display_order",
    "overlapping_pairs",
    "overlaps",
    "query_range",
    "window_for",
]
