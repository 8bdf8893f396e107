"""Sequential runner for the order → clip → layout pipeline."""

from __future__ import annotations

from collections.abc import Sequence
import logging
import time
from typing import Any

from calface.core.config.models import AppConfig
from calface.core.layout.constraint import ConstraintLayoutEngine
from calface.core.layout.greedy import GreedyLayoutEngine
from calface.core.layout.models import LayoutResult, RawEvent
from calface.core.layout.orchestrator import LayoutOrchestrator
from calface.core.pipeline.context import PipelineContext
from calface.core.pipeline.result import StageResult, failure_result, success_result
from calface.core.pipeline.stage import PipelineStage
from calface.core.pipeline.stages import EventOrderStage, LayoutStage, WindowClipStage
from calface.core.timing.clock import ClockReading

logger = logging.getLogger(__name__)


def build_orchestrator(config: AppConfig) -> LayoutOrchestrator:
    """Create the layout orchestrator described by ``config.layout``."""
    layout = config.layout
    return LayoutOrchestrator(
        constraint_engine=ConstraintLayoutEngine(
            max_level=layout.max_level,
            equal_size_strength=layout.equal_size_strength,
        ),
        greedy_engine=GreedyLayoutEngine(),
        on_solver_failure=layout.on_solver_failure,
    )


class LayoutPipeline:
    """Runs the refresh stages in order, feeding each output to the next.

    Pure CPU work over an in-memory list; safe to call from a worker
    thread. Each run builds its own context and a fresh result.

    Args:
        config: Application configuration.
        stages: Stages to run. Defaults to order, clip and layout.

    Example:
        >>> pipeline = LayoutPipeline(AppConfig())
        >>> result = pipeline.run(raw_events, clock.read())
        >>> if result.success:
        ...     store.publish(result.output)
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        stages: Sequence[PipelineStage] | None = None,
    ) -> None:
        self.config = config or AppConfig()
        if stages is None:
            stages = [
                EventOrderStage(),
                WindowClipStage(),
                LayoutStage(build_orchestrator(self.config)),
            ]
        self.stages: list[PipelineStage] = list(stages)

    def run(self, events: Sequence[RawEvent], reading: ClockReading) -> StageResult[LayoutResult]:
        """Run every stage on ``events``.

        Args:
            events: Raw events from the calendar source.
            reading: Clock reading for this cycle.

        Returns:
            Success with the layout, or the first stage failure.
        """
        context = PipelineContext(config=self.config, reading=reading)
        start_time = time.perf_counter()

        current: Any = events
        for stage in self.stages:
            result = stage.execute(current, context)
            if not result.success:
                logger.error(f"Stage '{stage.name}' failed: {result.error}")
                return failure_result(
                    result.error or "stage failed",
                    stage_name=stage.name,
                    metadata=dict(context.metrics),
                    error_type=result.error_type,
                )
            current = result.output

        duration_ms = (time.perf_counter() - start_time) * 1000
        context.add_metric("duration_ms", duration_ms)
        logger.debug(f"Pipeline complete in {duration_ms:.1f} ms: {context.metrics}")

        if not isinstance(current, LayoutResult):
            return failure_result(
                f"Pipeline produced {type(current).__name__}, expected LayoutResult",
                stage_name="pipeline",
                metadata=dict(context.metrics),
            )
        return success_result(current, stage_name="pipeline", metadata=dict(context.metrics))


__all__ = [
    "LayoutPipeline",
    "build_orchestrator",
]
