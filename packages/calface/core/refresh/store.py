"""Holder for the layout snapshot the renderer reads."""

from __future__ import annotations

import logging

from calface.core.layout.models import LayoutResult

logger = logging.getLogger(__name__)


class LayoutStore:
    """The single shared reference to the current layout.

    Writers replace the whole ``LayoutResult`` with one attribute
    assignment; readers take the reference and use it. Results are frozen
    and never shared between generations, so no lock is needed and a
    reader can never see a half-updated layout. Writers are serialized by
    the refresh scheduler.
    """

    def __init__(self, initial: LayoutResult | None = None) -> None:
        self._current = initial or LayoutResult.empty()
        self._generation = self._current.generation

    @property
    def current(self) -> LayoutResult:
        """The most recently published layout."""
        return self._current

    @property
    def generation(self) -> int:
        """Number of the most recent publication."""
        return self._generation

    def publish(self, result: LayoutResult) -> LayoutResult:
        """Replace the current layout.

        Args:
            result: Freshly computed layout.

        Returns:
            The published snapshot, stamped with its generation number.
        """
        generation = self._generation + 1
        snapshot = result.model_copy(update={"generation": generation})
        self._generation = generation
        self._current = snapshot
        logger.debug(
            f"Published layout generation {generation}: "
            f"{len(snapshot.events)} events, max_level={snapshot.max_level}"
        )
        return snapshot


__all__ = [
    "LayoutStore",
]
