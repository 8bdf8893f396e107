"""Layout orchestrator: constraint solver first, greedy layout as fallback."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
import logging

from calface.core.layout.constraint import ConstraintLayoutEngine
from calface.core.layout.greedy import GreedyLayoutEngine
from calface.core.layout.models import ClippedEvent, LayoutResult
from calface.core.layout.overlap import overlaps

logger = logging.getLogger(__name__)


class SolverFailurePolicy(str, Enum):
    """What to publish when the constraint solver fails.

    GREEDY re-runs the layout with the greedy engine. EMPTY publishes no
    events for the cycle, hiding everything until the next refresh.
    """

    GREEDY = "greedy"
    EMPTY = "empty"


class LayoutOrchestrator:
    """Runs the layout engines and checks the result.

    The constraint engine produces more even bands, so it always goes
    first. If it reports a failure, the configured policy decides what to
    publish. Either way the result then passes through
    :meth:`sanity_check`, which only logs: a flawed layout still renders.

    Args:
        constraint_engine: Primary engine.
        greedy_engine: Fallback engine.
        on_solver_failure: Policy applied when the primary engine fails.

    Example:
        >>> orchestrator = LayoutOrchestrator()
        >>> result = orchestrator.layout(clipped_events)
        >>> result.engine
        <LayoutEngineKind.CONSTRAINT: 'constraint'>
    """

    def __init__(
        self,
        constraint_engine: ConstraintLayoutEngine | None = None,
        greedy_engine: GreedyLayoutEngine | None = None,
        on_solver_failure: SolverFailurePolicy | str = SolverFailurePolicy.GREEDY,
    ) -> None:
        self.constraint_engine = constraint_engine or ConstraintLayoutEngine()
        self.greedy_engine = greedy_engine or GreedyLayoutEngine()
        self.on_solver_failure = SolverFailurePolicy(on_solver_failure)

    def layout(self, events: Sequence[ClippedEvent]) -> LayoutResult:
        """Lay out events, falling back per policy if the solver fails.

        Args:
            events: Clipped events, already in display order.

        Returns:
            The layout to publish. Never raises for solver failures.
        """
        if not events:
            logger.debug("No events visible")
            return LayoutResult.empty()

        attempt = self.constraint_engine.solve(events)
        if attempt.success and attempt.output is not None:
            result = attempt.output
            label = "after constraint layout"
        else:
            logger.error(
                f"Constraint layout failed ({attempt.error_type}): {attempt.error}; "
                f"policy={self.on_solver_failure.value}"
            )
            if self.on_solver_failure is SolverFailurePolicy.EMPTY:
                return LayoutResult.empty()
            result = self.greedy_engine.layout(events)
            label = "after greedy fallback"

        self.sanity_check(result, label)
        logger.debug(
            f"Layout ready: {len(result.events)} events, max_level={result.max_level}, "
            f"engine={result.engine.value}"
        )
        return result

    @staticmethod
    def sanity_check(result: LayoutResult, label: str = "layout") -> list[str]:
        """Log every band that breaks the layout invariants.

        Checks that each band lies within ``[0, result.max_level]`` and that
        no two overlapping events share a level. Violations are defects in
        an engine; they are logged, never raised.

        Args:
            result: Layout to check.
            label: Context for the log messages.

        Returns:
            Descriptions of the violations found (empty when clean).
        """
        violations: list[str] = []
        events = result.events

        for index, event in enumerate(events):
            if event.min_level < 0 or event.max_level > result.max_level:
                violations.append(
                    f"event {index} band [{event.min_level},{event.max_level}] "
                    f"outside [0,{result.max_level}]"
                )

        for i in range(len(events)):
            for j in range(i + 1, len(events)):
                if overlaps(events[i], events[j]) and events[i].shares_level_with(events[j]):
                    violations.append(f"overlapping events {i} and {j} share levels")

        for violation in violations:
            logger.error(f"Malformed layout ({label}): {violation}")
        return violations


__all__ = [
    "LayoutOrchestrator",
    "SolverFailurePolicy",
]
