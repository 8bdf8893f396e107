"""Result types for layout stages.

Provides immutable result types with success/failure semantics so that
recoverable failures (a solver giving up, a calendar source erroring)
travel as values instead of exceptions.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

TOutput = TypeVar("TOutput")


class StageResult(BaseModel, Generic[TOutput]):
    """Result from a single stage execution.

    Never raises exceptions - errors are captured in the result.

    Attributes:
        success: Whether the stage executed successfully
        output: Stage output (if success=True)
        error: Error message (if success=False)
        error_type: Exception class name behind the failure, if any
        stage_name: Name of stage that produced result
        metadata: Optional metadata (timing, counts, etc.)

    Example:
        >>> result = success_result(layout, stage_name="constraint_layout")
        >>> if result.success:
        ...     print(result.output.max_level)
        >>>
        >>> result = failure_result("infeasible", stage_name="constraint_layout")
        >>> if not result.success:
        ...     print(f"Error: {result.error}")
    """

    success: bool = Field(description="Whether stage executed successfully")
    stage_name: str = Field(description="Name of stage that produced result")
    output: TOutput | None = Field(default=None, description="Stage output (if success)")
    error: str | None = Field(default=None, description="Error message (if failure)")
    error_type: str | None = Field(default=None, description="Exception class name")
    metadata: dict[str, Any] = Field(
        default_factory=dict, description="Optional metadata (timing, counts, etc.)"
    )

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)


# Helper functions to create results (avoids Pydantic classmethod issues)


def success_result(
    output: TOutput,
    stage_name: str = "unknown",
    metadata: dict[str, Any] | None = None,
) -> StageResult[TOutput]:
    """Create success result.

    Args:
        output: Stage output
        stage_name: Name of stage
        metadata: Optional metadata

    Returns:
        StageResult with success=True
    """
    return StageResult(
        success=True,
        output=output,
        stage_name=stage_name,
        metadata=metadata or {},
    )


def failure_result(
    error: str,
    stage_name: str = "unknown",
    metadata: dict[str, Any] | None = None,
    error_type: str | None = None,
) -> StageResult[Any]:
    """Create failure result.

    Args:
        error: Error message
        stage_name: Name of stage
        metadata: Optional metadata
        error_type: Exception class name, when the failure came from one

    Returns:
        StageResult with success=False
    """
    return StageResult(
        success=False,
        error=error,
        error_type=error_type,
        stage_name=stage_name,
        metadata=metadata or {},
    )


def exception_result(
    exc: BaseException,
    stage_name: str = "unknown",
    metadata: dict[str, Any] | None = None,
) -> StageResult[Any]:
    """Create failure result from a caught exception."""
    return failure_result(
        str(exc) or type(exc).__name__,
        stage_name=stage_name,
        metadata=metadata,
        error_type=type(exc).__name__,
    )


__all__ = [
    "StageResult",
    "exception_result",
    "failure_result",
    "success_result",
]
