"""Pipeline stage protocol.

Stages run synchronously on the refresh worker thread. They never raise:
errors are wrapped in a failed ``StageResult``.
"""

from __future__ import annotations

from typing import Any, Protocol

from calface.core.pipeline.context import PipelineContext
from calface.core.pipeline.result import StageResult


class PipelineStage(Protocol):
    """Protocol for layout pipeline stages.

    Uses Protocol pattern for structural subtyping (no inheritance required).

    Example:
        >>> class CountStage:
        ...     @property
        ...     def name(self) -> str:
        ...         return "count"
        ...
        ...     def execute(self, input, context):
        ...         context.add_metric("count", len(input))
        ...         return success_result(input, stage_name=self.name)
    """

    @property
    def name(self) -> str:
        """Stage name for logging and tracking."""
        ...

    def execute(
        self,
        input: Any,  # Use Any to avoid variance issues with Protocol
        context: PipelineContext,
    ) -> StageResult[Any]:
        """Execute stage with input and shared context.

        Args:
            input: Stage input (type varies by stage)
            context: Shared pipeline context

        Returns:
            StageResult containing output or error
        """
        ...
