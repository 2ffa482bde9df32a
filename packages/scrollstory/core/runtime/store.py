"""Visual state store.

Holds the last visibility decision for every section, keyed by section id,
plus the trailing element's state. The scroll controller is the only
writer; renderers read snapshots or subscribe to batched updates.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from scrollstory.core.scene.vocabulary import CardPhase, VisibilityState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CardVisual:
    """Reveal state of one sequenced card."""

    phase: CardPhase = CardPhase.PENDING
    revealed_at: float | None = None
    exit_at: float | None = None

    @property
    def triggered(self) -> bool:
        return self.phase is not CardPhase.PENDING


@dataclass(frozen=True)
class SectionVisual:
    """Visual state of one section after a tick.

    Attributes:
        section_id: Owning section.
        state: Visibility state.
        opacity: Opacity in [0, 1].
        displayed: False when the section is off-screen and not painted.
        sequence_armed: Sticky flag set once the section reaches full
            opacity; cleared when opacity drops below the reset point.
        cards: Per-card reveal state, in card order.
    """

    section_id: str
    state: VisibilityState = VisibilityState.HIDDEN
    opacity: float = 0.0
    displayed: bool = False
    sequence_armed: bool = False
    cards: tuple[CardVisual, ...] = ()

    @property
    def next_exit_at(self) -> float | None:
        """Earliest pending card exit, or None when no revealed card is waiting.

        Exits are applied on the next tick at or after this time, so a host
        that stops scrolling must schedule one (see ``ScrollController.refresh``).
        """
        pending = [
            c.exit_at for c in self.cards if c.phase is CardPhase.REVEALED and c.exit_at is not None
        ]
        return min(pending, default=None)


@dataclass(frozen=True)
class TrailingVisual:
    """State of the element that follows the scroll story."""

    opacity: float = 0.0
    interactive: bool = False


StoreListener = Callable[["VisualStateStore"], None]


class VisualStateStore:
    """Section visuals keyed by section id.

    Example:
        >>> store = VisualStateStore()
        >>> store.get("intro").state
        <VisibilityState.HIDDEN: 'hidden'>
    """

    def __init__(self) -> None:
        self._sections: dict[str, SectionVisual] = {}
        self._trailing = TrailingVisual()
        self._revision = 0
        self._listeners: list[StoreListener] = []

    def get(self, section_id: str) -> SectionVisual:
        """Current visual of a section (hidden default if never written)."""
        visual = self._sections.get(section_id)
        if visual is None:
            return SectionVisual(section_id=section_id)
        return visual

    @property
    def trailing(self) -> TrailingVisual:
        return self._trailing

    @property
    def revision(self) -> int:
        """Number of batched writes so far."""
        return self._revision

    @property
    def section_ids(self) -> list[str]:
        return list(self._sections)

    def snapshot(self) -> dict[str, SectionVisual]:
        return dict(self._sections)

    def write(
        self,
        visuals: Mapping[str, SectionVisual],
        trailing: TrailingVisual | None = None,
    ) -> None:
        """Apply one tick's decisions in a single batch.

        Args:
            visuals: New visuals keyed by section id
            trailing: New trailing element state (unchanged if None)
        """
        self._sections.update(visuals)
        if trailing is not None:
            self._trailing = trailing
        self._revision += 1
        for listener in self._listeners:
            listener(self)

    def subscribe(self, listener: StoreListener) -> None:
        """Call ``listener`` after every batched write."""
        self._listeners.append(listener)

    def clear(self) -> None:
        self._sections.clear()
        self._trailing = TrailingVisual()
        self._revision += 1

    def __contains__(self, section_id: object) -> bool:
        return section_id in self._sections

    def __len__(self) -> int:
        return len(self._sections)


__all__ = [
    "CardVisual",
    "SectionVisual",
    "StoreListener",
    "TrailingVisual",
    "VisualStateStore",
]
