"""Constraint-based layout on top of the Cassowary solver (kiwisolver).

Each event gets two continuous variables on a level axis running from 0 to
``max_level``: where its band starts and how thick it is. Required
constraints keep overlapping events apart; weak constraints push bands to
fill the dial and to share it evenly, which gives more uniform rings than
the greedy engine.

Overlapping pairs are always stacked in input order (event ``i`` sits
outside event ``j`` when ``i < j``). The solver never searches for a better
ordering.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
import logging

import kiwisolver as kiwi

from calface.core.layout.models import (
    ClippedEvent,
    LayoutEngineKind,
    LayoutResult,
    LeveledEvent,
)
from calface.core.layout.overlap import overlapping_pairs
from calface.core.pipeline.result import (
    StageResult,
    exception_result,
    failure_result,
    success_result,
)
from calface.core.utils.logging import log_performance

logger = logging.getLogger(__name__)

DEFAULT_MAX_LEVEL = 10_000

# Hook for adding constraints on top of the model: (starts, sizes) -> constraints
ExtraConstraints = Callable[
    [Sequence[kiwi.Variable], Sequence[kiwi.Variable]], Iterable[kiwi.Constraint]
]

# Errors the solver can raise while the model is being built or solved.
# TypeError/ValueError cover non-linear or malformed expressions.
_SOLVER_ERRORS: tuple[type[Exception], ...] = (
    kiwi.UnsatisfiableConstraint,
    kiwi.DuplicateConstraint,
    kiwi.UnknownConstraint,
    kiwi.BadRequiredStrength,
    TypeError,
    ValueError,
)


class LayoutFailure(Exception):
    """Raised internally when a solved model cannot be turned into bands."""


class ConstraintLayoutEngine:
    """Lays out events by solving a linear constraint system.

    Failures never escape :meth:`solve`; they come back as a failed
    ``StageResult`` so the caller can decide what to do next.

    Args:
        max_level: Top of the continuous level axis. Also reported as the
            result's ``max_level``, so rings are always drawn as fractions
            of ``max_level + 1``.
        equal_size_strength: Strength of the "overlapping events have the
            same thickness" preference, relative to ``kiwisolver.strength.weak``.
        extra_constraints: Optional callable returning additional
            constraints over the start and size variables.

    Example:
        >>> engine = ConstraintLayoutEngine()
        >>> result = engine.solve(clipped_events)
        >>> if result.success:
        ...     layout = result.output
    """

    def __init__(
        self,
        max_level: int = DEFAULT_MAX_LEVEL,
        equal_size_strength: float = 0.5,
        extra_constraints: ExtraConstraints | None = None,
    ) -> None:
        if max_level < 1:
            raise ValueError(f"max_level must be positive, got {max_level}")
        self.max_level = max_level
        self.equal_size_strength = equal_size_strength
        self.extra_constraints = extra_constraints

    @property
    def name(self) -> str:
        return "constraint_layout"

    @log_performance
    def solve(self, events: Sequence[ClippedEvent]) -> StageResult[LayoutResult]:
        """Solve the layout for ``events``.

        Args:
            events: Clipped events, already in display order.

        Returns:
            Success with the layout, or failure describing why the solver
            could not produce one.
        """
        n = len(events)
        logger.debug(f"Running constraint layout with {n} events")

        if n == 0:
            return success_result(
                LayoutResult(max_level=self.max_level, engine=LayoutEngineKind.CONSTRAINT),
                stage_name=self.name,
            )

        pairs = list(overlapping_pairs(events))
        try:
            starts, sizes = self._solve_model(n, pairs)
            bands = self._to_bands(starts, sizes, pairs)
        except _SOLVER_ERRORS as e:
            return exception_result(e, stage_name=self.name, metadata={"events": n})
        except LayoutFailure as e:
            return failure_result(
                str(e),
                stage_name=self.name,
                metadata={"events": n},
                error_type=type(e).__name__,
            )

        leveled = tuple(
            LeveledEvent.from_clipped(event, lo, hi)
            for event, (lo, hi) in zip(events, bands, strict=True)
        )
        logger.debug("Constraint layout succeeded")
        return success_result(
            LayoutResult(
                events=leveled,
                max_level=self.max_level,
                engine=LayoutEngineKind.CONSTRAINT,
            ),
            stage_name=self.name,
            metadata={"events": n, "overlapping_pairs": len(pairs)},
        )

    def _solve_model(
        self, n: int, pairs: Sequence[tuple[int, int]]
    ) -> tuple[list[float], list[float]]:
        top = float(self.max_level)
        solver = kiwi.Solver()
        starts = [kiwi.Variable(f"start{i}") for i in range(n)]
        sizes = [kiwi.Variable(f"size{i}") for i in range(n)]

        for start, size in zip(starts, sizes, strict=True):
            solver.addConstraint(start >= 0)
            solver.addConstraint(start <= top)
            solver.addConstraint(size >= 0)
            solver.addConstraint(size <= top)
            solver.addConstraint(start + size <= top)

        # unsatisfiable by design: keeps the solver away from all-zero sizes
        total_size = sum(sizes)
        solver.addConstraint((total_size >= top * n) | kiwi.strength.weak)

        equal_strength = kiwi.strength.weak * self.equal_size_strength
        for i, j in pairs:
            solver.addConstraint(starts[i] + sizes[i] <= starts[j])
            solver.addConstraint((sizes[i] == sizes[j]) | equal_strength)

        if self.extra_constraints is not None:
            for constraint in self.extra_constraints(starts, sizes):
                solver.addConstraint(constraint)

        solver.updateVariables()
        return [v.value() for v in starts], [v.value() for v in sizes]

    def _to_bands(
        self,
        starts: Sequence[float],
        sizes: Sequence[float],
        pairs: Sequence[tuple[int, int]],
    ) -> list[tuple[int, int]]:
        """Round the continuous solution to inclusive integer bands.

        The continuous band ``[start, start + size)`` becomes levels
        ``round(start)`` through ``round(start + size) - 1``. Rounding is
        monotonic, so ``start_i + size_i <= start_j`` keeps the inclusive
        ranges of overlapping events apart unless a band collapsed to zero
        thickness.
        """
        bands: list[tuple[int, int]] = []
        for start, size in zip(starts, sizes, strict=True):
            lo = min(max(round(start), 0), self.max_level)
            hi = min(max(round(start + size) - 1, lo), self.max_level)
            bands.append((lo, hi))

        for i, j in pairs:
            (lo_i, hi_i), (lo_j, hi_j) = bands[i], bands[j]
            if lo_i <= hi_j and lo_j <= hi_i:
                raise LayoutFailure(
                    f"degenerate solution: events {i} and {j} share levels "
                    f"[{lo_i},{hi_i}] / [{lo_j},{hi_j}]"
                )
        return bands


__all__ = [
    "DEFAULT_MAX_LEVEL",
    "ConstraintLayoutEngine",
    "ExtraConstraints",
    "LayoutFailure",
]
