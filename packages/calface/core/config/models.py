"""Configuration models for calface."""

from __future__ import annotations

from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from calface.core.layout.constraint import DEFAULT_MAX_LEVEL
from calface.core.layout.orchestrator import SolverFailurePolicy


class ConfigBase(BaseModel):
    """Base class for calface configurations.

    Provides common functionality for loading from files with defaults.
    Subclasses must implement default_path() to specify their default location.
    """

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    @classmethod
    def default_path(cls) -> Path:
        """Return the default config file path for this config type.

        Returns:
            Path to the default config file
        """
        raise NotImplementedError(f"{cls.__name__} must implement default_path()")

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> Self:
        """Load config from path, falling back to defaults when the file is absent.

        Args:
            path: Path to config file, or None to use default

        Returns:
            Loaded config instance

        Raises:
            ValueError: If the file exists but cannot be parsed
            ValidationError: If config is invalid
        """
        from calface.core.config.loader import load_config

        if path is None:
            path = cls.default_path()
        if not Path(path).exists():
            return cls()
        return cls.model_validate(load_config(path))


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    filename: str | None = Field(default=None, description="Log file (stdout when unset)")
    structured: bool = Field(default=False, description="Emit JSON log records")


class LayoutConfig(BaseModel):
    """Layout engine configuration."""

    max_level: int = Field(
        default=DEFAULT_MAX_LEVEL,
        ge=1,
        description="Top of the constraint engine's continuous level axis",
    )
    equal_size_strength: float = Field(
        default=0.5,
        gt=0.0,
        description="Weight of the equal-thickness preference, relative to a weak constraint",
    )
    on_solver_failure: SolverFailurePolicy = Field(
        default=SolverFailurePolicy.GREEDY,
        description="'greedy' falls back to the greedy engine; 'empty' hides all events",
    )


class RefreshConfig(BaseModel):
    """Refresh scheduling configuration."""

    check_interval_s: float = Field(
        default=60.0,
        gt=0.0,
        description="How often to check whether the local hour has changed",
    )


class DialConfig(BaseModel):
    """Calendar ring geometry, as fractions of the dial radius."""

    ring_min_radius: float = Field(default=0.2, ge=0.0, le=1.0)
    ring_max_radius: float = Field(default=0.9, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_ring(self) -> DialConfig:
        if self.ring_max_radius <= self.ring_min_radius:
            raise ValueError("ring_max_radius must be greater than ring_min_radius")
        return self

    @property
    def ring_width(self) -> float:
        """Radial width of the calendar ring."""
        return self.ring_max_radius - self.ring_min_radius


class AppConfig(ConfigBase):
    """Application-level configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    refresh: RefreshConfig = Field(default_factory=RefreshConfig)
    dial: DialConfig = Field(default_factory=DialConfig)

    @classmethod
    def default_path(cls) -> Path:
        return Path("calface.yaml")


__all__ = [
    "AppConfig",
    "ConfigBase",
    "DialConfig",
    "LayoutConfig",
    "LoggingConfig",
    "RefreshConfig",
]
