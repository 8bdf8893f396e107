"""Pipeline context for shared state across layout stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from calface.core.config.models import AppConfig
    from calface.core.timing.clock import ClockReading


@dataclass
class PipelineContext:
    """Shared context across the stages of one refresh cycle.

    A new context is created per cycle, so nothing in it outlives the
    computation that filled it.

    Attributes:
        config: Application configuration
        reading: Clock reading the whole cycle works against
        state: Mutable state dictionary for sharing data between stages
        metrics: Mutable metrics dictionary (timing, counts, etc.)

    Example:
        >>> context = PipelineContext(config=AppConfig(), reading=clock.read())
        >>> context.set_state("window", window)
        >>> context.add_metric("visible_events", 4)
    """

    config: AppConfig
    reading: ClockReading

    state: dict[str, Any] = field(default_factory=dict)
    metrics: dict[str, Any] = field(default_factory=dict)

    def add_metric(self, key: str, value: Any) -> None:
        """Add or update metric.

        Args:
            key: Metric key
            value: Metric value
        """
        self.metrics[key] = value

    def get_state(self, key: str, default: Any = None) -> Any:
        """Get state value with optional default.

        Args:
            key: State key
            default: Default value if key not found

        Returns:
            State value or default
        """
        return self.state.get(key, default)

    def set_state(self, key: str, value: Any) -> None:
        """Set state value.

        Args:
            key: State key
            value: State value
        """
        self.state[key] = value
