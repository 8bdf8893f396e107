"""Concrete stages of the refresh pipeline: order, clip, lay out."""

from __future__ import annotations

from collections.abc import Sequence
import logging

from calface.core.layout.models import ClippedEvent, LayoutResult, RawEvent
from calface.core.layout.orchestrator import LayoutOrchestrator
from calface.core.layout.window import clip_to_window, display_order, window_for
from calface.core.pipeline.context import PipelineContext
from calface.core.pipeline.result import StageResult, exception_result, success_result

logger = logging.getLogger(__name__)

WINDOW_STATE_KEY = "window"


class EventOrderStage:
    """Sorts raw events into the order the layout engines expect."""

    @property
    def name(self) -> str:
        return "event_order"

    def execute(
        self, input: Sequence[RawEvent], context: PipelineContext
    ) -> StageResult[list[RawEvent]]:
        context.add_metric("raw_events", len(input))
        return success_result(display_order(input), stage_name=self.name)


class WindowClipStage:
    """Clips raw events to the current twelve-hour window.

    The window is derived from the context's clock reading and stored in
    context state for the layout stage.
    """

    @property
    def name(self) -> str:
        return "window_clip"

    def execute(
        self, input: Sequence[RawEvent], context: PipelineContext
    ) -> StageResult[list[ClippedEvent]]:
        window = window_for(context.reading)
        context.set_state(WINDOW_STATE_KEY, window)

        clipped = clip_to_window(input, window)
        context.add_metric("visible_events", len(clipped))
        return success_result(clipped, stage_name=self.name)


class LayoutStage:
    """Assigns level bands with the orchestrator.

    Solver failures are handled inside the orchestrator; this stage only
    fails on unexpected errors.

    Args:
        orchestrator: Layout orchestrator to run.
    """

    def __init__(self, orchestrator: LayoutOrchestrator) -> None:
        self.orchestrator = orchestrator

    @property
    def name(self) -> str:
        return "layout"

    def execute(
        self, input: Sequence[ClippedEvent], context: PipelineContext
    ) -> StageResult[LayoutResult]:
        try:
            result = self.orchestrator.layout(input)
        except Exception as e:
            logger.exception(f"Layout stage failed: {e}")
            return exception_result(e, stage_name=self.name)

        result = result.model_copy(update={"window": context.get_state(WINDOW_STATE_KEY)})
        context.add_metric("engine", result.engine.value)
        context.add_metric("max_level", result.max_level)
        return success_result(result, stage_name=self.name)


__all__ = [
    "WINDOW_STATE_KEY",
    "EventOrderStage",
    "LayoutStage",
    "WindowClipStage",
]
