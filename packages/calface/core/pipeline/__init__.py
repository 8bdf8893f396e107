"""Refresh pipeline for calface.

Core concepts:
- PipelineStage: Unit of work (order events, clip to window, lay out)
- StageResult: Success/failure value returned by every stage
- PipelineContext: Shared state for one refresh cycle
- LayoutPipeline: Runs the stages in order (see ``calface.core.pipeline.runner``)

Example:
    >>> from calface.core.pipeline.runner import LayoutPipeline
    >>> pipeline = LayoutPipeline(config)
    >>> result = pipeline.run(raw_events, clock.read())
"""

from calface.core.pipeline.context import PipelineContext
from calface.core.pipeline.result import (
    StageResult,
    exception_result,
    failure_result,
    success_result,
)
from calface.core.pipeline.stage import PipelineStage

__all__ = [
    "PipelineContext",
    "PipelineStage",
    "StageResult",
    "exception_result",
    "failure_result",
    "success_result",
]
