"""Scroll visibility controller.

Turns a scroll offset into per-section opacity, display and card-sequence
decisions and writes them to the visual state store in one batch. Each
tick reads every section rectangle first, computes every decision, then
writes; nothing is written while geometry is still being read.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping

from scrollstory.core.geometry.bounds import Viewport
from scrollstory.core.runtime.store import (
    CardVisual,
    SectionVisual,
    TrailingVisual,
    VisualStateStore,
)
from scrollstory.core.runtime.visibility import (
    SectionGeometry,
    advance_cards,
    compute_section_visibility,
    scroll_progress,
    trailing_visual,
)
from scrollstory.core.scene.models import Scene
from scrollstory.core.scene.vocabulary import CardPhase
from scrollstory.core.timing.calculus import (
    CardThreshold,
    FadeZones,
    calculate_card_threshold,
    prepare_scene,
    resolve_section_zones,
)
from scrollstory.core.timing.constants import DEFAULT_TIMING, TimingConstants

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class ScrollLayout:
    """Document positions of the stacked sections for one viewport.

    Sections are laid out top to bottom starting at ``offset_px``; each is
    ``height_vh`` viewport heights tall.

    Args:
        scene: Scene whose sections all carry ``scroll.height_vh``
        viewport: Current viewport
        offset_px: Document y of the first section's top edge
    """

    def __init__(self, scene: Scene, viewport: Viewport, offset_px: float = 0.0) -> None:
        self.viewport = viewport
        self.offset_px = offset_px
        self._spans: dict[str, tuple[float, float]] = {}

        cursor = offset_px
        for section in scene.sections:
            height_vh = section.scroll.height_vh
            if height_vh is None:
                raise ValueError(
                    f"Section '{section.id}' has no scroll height; run prepare_scene first"
                )
            height_px = viewport.height * height_vh / 100
            self._spans[section.id] = (cursor, cursor + height_px)
            cursor += height_px
        self._end = cursor

    @property
    def total_height(self) -> float:
        """Document y of the last section's bottom edge."""
        return self._end

    def span(self, section_id: str) -> tuple[float, float]:
        """(top, bottom) document positions of a section."""
        return self._spans[section_id]

    def geometry_at(self, scroll_y: float) -> dict[str, SectionGeometry]:
        """Section rectangles relative to the viewport at a scroll offset."""
        return {
            section_id: SectionGeometry(top=top - scroll_y, bottom=bottom - scroll_y)
            for section_id, (top, bottom) in self._spans.items()
        }

    def __len__(self) -> int:
        return len(self._spans)


class ScrollController:
    """Per-tick visibility controller for a scene.

    The scene is prepared on construction (computed heights written back),
    zones and card thresholds are resolved per viewport, and every
    ``update`` writes one batch to the store.

    Args:
        scene: Validated scene
        viewport: Current viewport
        store: State store to write to (a fresh one if omitted)
        default_fade_zone: Fade zone for sections declaring none
        constants: Timing constants
        card_exit_delay_s: Time from a card's reveal to its exit transition
        trailing_transition: Fade-in distance of the trailing element, as a
            fraction of viewport height
        reset_opacity: Opacity below which card sequences reset
        offset_px: Document y of the first section
        clock: Monotonic time source in seconds

    Example:
        >>> controller = ScrollController(scene, Viewport())
        >>> controller.update(0.0)
        >>> controller.store.get("intro").opacity
        1.0
    """

    def __init__(
        self,
        scene: Scene,
        viewport: Viewport,
        store: VisualStateStore | None = None,
        *,
        default_fade_zone: float | None = None,
        constants: TimingConstants | None = None,
        card_exit_delay_s: float = 4.6,
        trailing_transition: float = 0.3,
        reset_opacity: float = 0.5,
        offset_px: float = 0.0,
        clock: Clock = time.monotonic,
    ) -> None:
        self.constants = constants or DEFAULT_TIMING
        self.default_fade_zone = default_fade_zone
        self.card_exit_delay_s = card_exit_delay_s
        self.trailing_transition = trailing_transition
        self.reset_opacity = reset_opacity
        self.offset_px = offset_px
        self.scene = prepare_scene(scene, self.constants, default_fade_zone)
        self.store = store if store is not None else VisualStateStore()
        self._clock = clock

        self._zones: dict[str, FadeZones] = {}
        self._thresholds: dict[str, list[CardThreshold]] = {}
        self._last_geometries: dict[str, SectionGeometry] | None = None
        self.resize(viewport)

    @property
    def layout(self) -> ScrollLayout:
        return self._layout

    def resize(self, viewport: Viewport) -> None:
        """Recompute zones, thresholds and layout for a new viewport."""
        self.viewport = viewport
        height = viewport.height
        for section in self.scene.sections:
            self._zones[section.id] = resolve_section_zones(
                section, height, self.default_fade_zone, self.constants
            )
            self._thresholds[section.id] = [
                calculate_card_threshold(height, idx, self.constants)
                for idx in range(section.card_count)
            ]
        self._layout = ScrollLayout(self.scene, viewport, self.offset_px)
        logger.debug(
            "Layout for %.0fx%.0f: %d sections, %.0fpx total",
            viewport.width,
            viewport.height,
            len(self._layout),
            self._layout.total_height,
        )

    def zones_for(self, section_id: str) -> FadeZones:
        """Hold/fade zones of a section in px."""
        return self._zones[section_id]

    def thresholds_for(self, section_id: str) -> list[CardThreshold]:
        """Card reveal thresholds of a section in px."""
        return list(self._thresholds[section_id])

    def update(self, scroll_y: float) -> None:
        """Run one tick at a scroll offset."""
        self.update_geometry(self._layout.geometry_at(scroll_y))

    @property
    def next_deadline(self) -> float | None:
        """Earliest pending card exit across the scene, in clock seconds.

        Card exits are only applied by a tick. A host whose reader has stopped
        scrolling should schedule a timer for this time and call ``refresh``.
        """
        deadlines = [
            self.store.get(s.id).next_exit_at for s in self.scene.sections if s.card_count
        ]
        return min((d for d in deadlines if d is not None), default=None)

    def refresh(self, now: float | None = None) -> None:
        """Re-run the last tick at a later time, without new geometry.

        Does nothing before the first tick.
        """
        if self._last_geometries is None:
            return
        self.update_geometry(self._last_geometries, now)

    def update_geometry(
        self,
        geometries: Mapping[str, SectionGeometry],
        now: float | None = None,
    ) -> None:
        """Run one tick from measured section rectangles.

        Args:
            geometries: Section rectangles relative to the viewport, keyed by id
            now: Current time in seconds (the controller clock if None)

        Raises:
            ValueError: If a section's rectangle is missing
        """
        missing = [s.id for s in self.scene.sections if s.id not in geometries]
        if missing:
            raise ValueError(f"Missing geometry for sections: {', '.join(missing)}")
        self._last_geometries = dict(geometries)

        now = self._clock() if now is None else now
        viewport_height = self.viewport.height
        previous = {s.id: self.store.get(s.id) for s in self.scene.sections}

        visuals: dict[str, SectionVisual] = {}
        for section in self.scene.sections:
            geometry = geometries[section.id]
            decision = compute_section_visibility(
                geometry, viewport_height, self._zones[section.id]
            )

            armed = False
            cards: tuple[CardVisual, ...] = ()
            if section.card_count:
                armed, cards = advance_cards(
                    previous[section.id],
                    decision.opacity,
                    scroll_progress(geometry),
                    self._thresholds[section.id],
                    now,
                    self.card_exit_delay_s,
                    self.reset_opacity,
                )

            visuals[section.id] = SectionVisual(
                section_id=section.id,
                state=decision.state,
                opacity=decision.opacity,
                displayed=decision.displayed,
                sequence_armed=armed,
                cards=cards,
            )
            self._log_transitions(previous[section.id], visuals[section.id])

        last = self.scene.sections[-1]
        trailing = trailing_visual(
            geometries[last.id].bottom, viewport_height, self.trailing_transition
        )
        self._log_trailing(self.store.trailing, trailing)

        self.store.write(visuals, trailing)

    def _log_transitions(self, before: SectionVisual, after: SectionVisual) -> None:
        if before.state is not after.state:
            logger.debug(
                "Section '%s': %s -> %s (opacity %.3f)",
                after.section_id,
                before.state.value,
                after.state.value,
                after.opacity,
            )
        for idx, card in enumerate(after.cards):
            old_phase = before.cards[idx].phase if idx < len(before.cards) else CardPhase.PENDING
            if card.phase is not old_phase:
                logger.debug(
                    "Section '%s' card %d: %s -> %s",
                    after.section_id,
                    idx,
                    old_phase.value,
                    card.phase.value,
                )

    def _log_trailing(self, before: TrailingVisual, after: TrailingVisual) -> None:
        if before.interactive != after.interactive:
            logger.debug("Trailing element interactive=%s", after.interactive)


__all__ = [
    "Clock",
    "ScrollController",
    "ScrollLayout",
]
