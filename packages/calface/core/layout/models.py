"""Event models for the dial layout engine.

Every stage of the layout produces a fresh set of frozen models:
raw calendar events are clipped into the display window and then
annotated with level bands. Nothing here is mutated after creation,
so a published ``LayoutResult`` can be read from any thread.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from calface.core.timing.constants import HOUR_MS, WINDOW_MS


class LayoutEngineKind(str, Enum):
    """Which engine produced a layout."""

    NONE = "none"
    GREEDY = "greedy"
    CONSTRAINT = "constraint"


class RawEvent(BaseModel):
    """A calendar event as delivered by the calendar source.

    Attributes:
        start_ms: Start instant in UTC milliseconds.
        end_ms: End instant in UTC milliseconds.
        color: Opaque 32-bit ARGB display color.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    start_ms: int = Field(description="Start instant (UTC ms)")
    end_ms: int = Field(description="End instant (UTC ms)")
    color: int = Field(default=0, description="32-bit ARGB display color")

    @property
    def duration_ms(self) -> int:
        """Event duration in milliseconds (negative for malformed input)."""
        return self.end_ms - self.start_ms


class ClippedEvent(RawEvent):
    """A raw event intersected with the display window.

    After clipping, times are expressed in the local timebase, which is
    what the dial's angle math expects.
    """


class LeveledEvent(ClippedEvent):
    """A clipped event with its radial band assigned.

    Attributes:
        min_level: Lowest level occupied by the band (outermost ring).
        max_level: Highest level occupied by the band, inclusive.
    """

    min_level: int = Field(ge=0, description="Lowest occupied level")
    max_level: int = Field(ge=0, description="Highest occupied level (inclusive)")

    @model_validator(mode="after")
    def _check_band(self) -> LeveledEvent:
        if self.max_level < self.min_level:
            raise ValueError(
                f"max_level ({self.max_level}) must be >= min_level ({self.min_level})"
            )
        return self

    @classmethod
    def from_clipped(cls, event: ClippedEvent, min_level: int, max_level: int) -> LeveledEvent:
        """Attach a band to a clipped event."""
        return cls(
            start_ms=event.start_ms,
            end_ms=event.end_ms,
            color=event.color,
            min_level=min_level,
            max_level=max_level,
        )

    def shares_level_with(self, other: LeveledEvent) -> bool:
        """Whether the inclusive level ranges of two bands intersect."""
        return self.min_level <= other.max_level and other.min_level <= self.max_level


class DisplayWindow(BaseModel):
    """The rolling twelve-hour span shown on the dial.

    ``start_ms`` and ``end_ms`` are absolute (UTC) instants so they can be
    compared directly against raw events; ``utc_offset_ms`` is what gets
    added to move a clipped event into local time.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    start_ms: int
    end_ms: int
    utc_offset_ms: int = 0

    @model_validator(mode="after")
    def _check_width(self) -> DisplayWindow:
        if self.end_ms - self.start_ms != WINDOW_MS:
            raise ValueError(
                f"display window must be exactly {WINDOW_MS} ms wide, "
                f"got {self.end_ms - self.start_ms}"
            )
        return self

    @property
    def local_start_ms(self) -> int:
        """Window start in the local timebase."""
        return self.start_ms + self.utc_offset_ms


class LayoutResult(BaseModel):
    """Immutable snapshot handed to the renderer.

    Attributes:
        events: Leveled events, in layout input order.
        max_level: Denominator bound for level-to-radius mapping. Every
            event's ``max_level`` is at most this value.
        engine: Engine that produced the bands.
        window: Display window the events were clipped to, if any.
        generation: Publication counter assigned by the store.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    events: tuple[LeveledEvent, ...] = ()
    max_level: int = Field(default=0, ge=0)
    engine: LayoutEngineKind = LayoutEngineKind.NONE
    window: DisplayWindow | None = None
    generation: int = Field(default=0, ge=0)

    @classmethod
    def empty(cls, window: DisplayWindow | None = None) -> LayoutResult:
        """A result with no visible events."""
        return cls(window=window)


__all__ = [
    "HOUR_MS",
    "WINDOW_MS",
    "ClippedEvent",
    "DisplayWindow",
    "LayoutEngineKind",
    "LayoutResult",
    "LeveledEvent",
    "RawEvent",
]
