"""Pure visibility math for one scroll tick.

Opacity is a function of the distance between a section's center and the
viewport center only, so replaying a scroll position always yields the same
result. The one exception is the card sequence, whose sticky flags are
passed in and returned explicitly.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from scrollstory.core.runtime.store import CardVisual, SectionVisual, TrailingVisual
from scrollstory.core.scene.vocabulary import CardPhase, VisibilityState
from scrollstory.core.timing.calculus import CardThreshold, FadeZones
from scrollstory.core.utils.math import clamp

# Fraction of the viewport height the trailing element waits for
TRAILING_ANCHOR = 0.5


@dataclass(frozen=True)
class SectionGeometry:
    """Section rectangle relative to the viewport top, in px."""

    top: float
    bottom: float

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> float:
        return self.top + self.height / 2

    def is_offscreen(self, viewport_height: float) -> bool:
        return self.bottom < 0 or self.top > viewport_height


@dataclass(frozen=True)
class VisibilityDecision:
    """Visibility of a section for one tick."""

    state: VisibilityState
    opacity: float
    displayed: bool
    distance: float


def compute_opacity(distance: float, zones: FadeZones) -> float:
    """Map distance from the viewport center to opacity.

    1 inside the hold zone, linear fall-off across the fade span, 0 beyond
    the fade zone. ``FadeZones`` guarantees a positive fade span.

    Args:
        distance: |section center - viewport center| in px
        zones: Hold/fade zones in px

    Returns:
        Opacity in [0, 1]
    """
    if distance < zones.hold_zone:
        return 1.0
    if distance < zones.fade_zone:
        return clamp(1.0 - (distance - zones.hold_zone) / zones.fade_span, 0.0, 1.0)
    return 0.0


def classify(distance: float, zones: FadeZones, approaching: bool) -> VisibilityState:
    """Visibility state for a distance; ``approaching`` picks fading in vs out."""
    if distance < zones.hold_zone:
        return VisibilityState.HELD
    if distance < zones.fade_zone:
        return VisibilityState.FADING_IN if approaching else VisibilityState.FADING_OUT
    return VisibilityState.HIDDEN


def compute_section_visibility(
    geometry: SectionGeometry,
    viewport_height: float,
    zones: FadeZones,
) -> VisibilityDecision:
    """Decide a section's visibility for the current geometry.

    Sections entirely above or below the viewport are hidden and not
    displayed at all.

    Args:
        geometry: Section rectangle relative to the viewport
        viewport_height: Viewport height in px
        zones: Section's hold/fade zones in px

    Returns:
        VisibilityDecision
    """
    viewport_center = viewport_height / 2
    distance = abs(geometry.center - viewport_center)

    if geometry.is_offscreen(viewport_height):
        return VisibilityDecision(VisibilityState.HIDDEN, 0.0, False, distance)

    approaching = geometry.center > viewport_center
    return VisibilityDecision(
        state=classify(distance, zones, approaching),
        opacity=compute_opacity(distance, zones),
        displayed=True,
        distance=distance,
    )


def scroll_progress(geometry: SectionGeometry) -> float:
    """Pixels the section's top edge has travelled above the viewport top."""
    return max(0.0, -geometry.top)


def advance_cards(
    previous: SectionVisual,
    opacity: float,
    progress: float,
    thresholds: Sequence[CardThreshold],
    now: float,
    exit_delay_s: float,
    reset_opacity: float = 0.5,
) -> tuple[bool, tuple[CardVisual, ...]]:
    """Step a section's card sequence by one tick.

    The sequence arms the first time the section reaches full opacity. While
    armed, each pending card whose threshold has been crossed is revealed
    exactly once and gets its exit scheduled ``exit_delay_s`` later. Falling
    below ``reset_opacity`` disarms the sequence and resets every card.

    Args:
        previous: Section visual from the previous tick
        opacity: Section opacity this tick
        progress: Scroll progress into the section in px
        thresholds: Reveal thresholds, one per card
        now: Current time in seconds
        exit_delay_s: Delay between a card's reveal and its exit
        reset_opacity: Opacity below which the sequence resets

    Returns:
        (sequence_armed, cards)
    """
    if opacity < reset_opacity:
        return False, tuple(CardVisual() for _ in thresholds)

    cards = list(previous.cards) if len(previous.cards) == len(thresholds) else [
        CardVisual() for _ in thresholds
    ]
    armed = previous.sequence_armed or opacity >= 1.0

    if armed:
        for idx, threshold in enumerate(thresholds):
            if cards[idx].phase is CardPhase.PENDING and progress >= threshold.threshold:
                cards[idx] = CardVisual(
                    phase=CardPhase.REVEALED,
                    revealed_at=now,
                    exit_at=now + exit_delay_s,
                )

    for idx, card in enumerate(cards):
        if card.phase is CardPhase.REVEALED and card.exit_at is not None and now >= card.exit_at:
            cards[idx] = replace(card, phase=CardPhase.EXITING)

    return armed, tuple(cards)


def trailing_visual(
    last_section_bottom: float,
    viewport_height: float,
    transition_fraction: float = 0.3,
) -> TrailingVisual:
    """State of the element after the story.

    Stays hidden until the last section's bottom edge rises past the
    viewport midpoint, then fades in linearly over ``transition_fraction``
    viewport heights. It accepts interaction once more than half visible.

    Args:
        last_section_bottom: Bottom edge of the last section relative to the viewport top
        viewport_height: Viewport height in px
        transition_fraction: Fade-in distance as a fraction of viewport height

    Returns:
        TrailingVisual
    """
    anchor = viewport_height * TRAILING_ANCHOR
    if last_section_bottom >= anchor:
        return TrailingVisual()

    opacity = min(1.0, (anchor - last_section_bottom) / (viewport_height * transition_fraction))
    return TrailingVisual(opacity=opacity, interactive=opacity > 0.5)


__all__ = [
    "SectionGeometry",
    "VisibilityDecision",
    "advance_cards",
    "classify",
    "compute_opacity",
    "compute_section_visibility",
    "scroll_progress",
    "trailing_visual",
]
