"""Timing calculus.

Turns the timing constants and a section's content into scroll geometry:
how tall the section must be, where its hold and fade zones end, and where
each sequenced card is revealed. All zone computation goes through
``section_zones_vh`` so the hold < fade ordering is checked in one place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from scrollstory.core.scene.models import Scene, Section
from scrollstory.core.timing.constants import DEFAULT_TIMING, TimingConstants
from scrollstory.core.utils.math import ceil_clean, round_half_up

logger = logging.getLogger(__name__)


class ZoneOrderingError(ValueError):
    """Raised when a hold zone is not strictly inside its fade zone."""


class ScrollHeightError(ValueError):
    """Raised when a declared scroll height is shorter than its visible range."""


@dataclass(frozen=True)
class FadeZones:
    """Hold and fade distances from the viewport center.

    Units are whatever the caller used (viewport heights or pixels).

    Raises:
        ZoneOrderingError: If hold_zone >= fade_zone or either is negative
    """

    hold_zone: float
    fade_zone: float

    def __post_init__(self) -> None:
        if self.hold_zone < 0:
            raise ZoneOrderingError(f"hold_zone must be >= 0, got {self.hold_zone}")
        if self.hold_zone >= self.fade_zone:
            raise ZoneOrderingError(
                f"hold_zone ({self.hold_zone}) must be less than fade_zone ({self.fade_zone})"
            )

    @property
    def fade_span(self) -> float:
        return self.fade_zone - self.hold_zone

    def scaled(self, factor: float) -> FadeZones:
        return FadeZones(self.hold_zone * factor, self.fade_zone * factor)


@dataclass(frozen=True)
class CardThreshold:
    """Reveal point of one card, in whole pixels of scroll progress."""

    threshold: int
    fade_distance: int


def _card_hold_vh(card_count: int, constants: TimingConstants) -> float:
    return constants.panel_reading_hold + constants.card_step * card_count


def calculate_section_height(
    card_count: int = 0,
    is_last_section: bool = False,
    fade_zone: float | None = None,
    constants: TimingConstants | None = None,
) -> int:
    """Scroll height a section needs, in whole vh.

    Plain sections use height = 2 * fade_zone + grey space + hold time, where
    hold time is the reading hold (plus the extra terminal hold for the last
    section).

    Sections with cards fade over the card zones instead of the declared
    fraction, and their hold zone already spans the reading hold and every
    card. They get their whole visible range (2 * card fade zone) plus grey
    space, so a neighbouring panel is never visible at the same time.

    Args:
        card_count: Number of sequenced cards
        is_last_section: Whether this is the final section
        fade_zone: Fade zone in viewport heights (defaults to the constants')
        constants: Timing constants

    Returns:
        Section height in vh (e.g. 335 for 335vh)
    """
    c = constants or DEFAULT_TIMING
    if card_count < 0:
        raise ValueError(f"card_count must be >= 0, got {card_count}")
    fade_zone = c.default_fade_zone if fade_zone is None else fade_zone

    extra_hold = c.last_panel_extra_hold if is_last_section else 0.0
    hold_time = _card_hold_vh(card_count, c) + extra_hold
    total = 2 * fade_zone + c.grey_space_between + hold_time

    effective_fade = fade_zone
    if card_count > 0:
        effective_fade = _card_hold_vh(card_count, c) + c.panel_fade_out
        total = max(total, 2 * effective_fade + c.grey_space_between + extra_hold)

    return max(ceil_clean(total * 100), minimum_section_height(effective_fade))


def minimum_section_height(fade_zone: float) -> int:
    """Smallest height (vh) that keeps a section's visible range inside its own span.

    A section is visible while its center is within ``fade_zone`` of the
    viewport center. With height >= 2 * fade_zone, two stacked sections can
    never both be visible, and the fade reaches zero before the section's
    far edge leaves the viewport and it is culled.

    Args:
        fade_zone: Fade zone in viewport heights

    Returns:
        Minimum height in vh (at least 1)
    """
    return max(1, ceil_clean(2 * fade_zone * 100))


def calculate_card_threshold(
    viewport_height: float,
    card_index: int,
    constants: TimingConstants | None = None,
) -> CardThreshold:
    """Scroll progress at which a card is revealed.

    The first card appears after the reading hold; every later card adds one
    card step, so thresholds are evenly spaced and strictly increasing.

    Args:
        viewport_height: Viewport height in px
        card_index: 0-based card index
        constants: Timing constants

    Returns:
        CardThreshold in whole px
    """
    c = constants or DEFAULT_TIMING
    if card_index < 0:
        raise ValueError(f"card_index must be >= 0, got {card_index}")

    pixel_threshold = viewport_height * c.panel_reading_hold
    if card_index > 0:
        pixel_threshold += viewport_height * (c.card_step * card_index)

    return CardThreshold(
        threshold=round_half_up(pixel_threshold),
        fade_distance=round_half_up(viewport_height * c.card_fade_distance),
    )


def calculate_fade_zones(
    viewport_height: float,
    card_count: int,
    constants: TimingConstants | None = None,
) -> FadeZones:
    """Hold and fade zones (px) of a section with sequenced cards.

    The hold zone covers reading plus every card's reveal; the fade zone adds
    the same panel fade-out distance for every section so grey space stays
    even across the page.

    Args:
        viewport_height: Viewport height in px (> 0)
        card_count: Number of cards (>= 0)
        constants: Timing constants

    Returns:
        FadeZones in px, fade_zone > hold_zone
    """
    c = constants or DEFAULT_TIMING
    if viewport_height <= 0:
        raise ValueError(f"viewport_height must be > 0, got {viewport_height}")
    if card_count < 0:
        raise ValueError(f"card_count must be >= 0, got {card_count}")

    hold_vh = _card_hold_vh(card_count, c)
    fade_vh = hold_vh + c.panel_fade_out
    return FadeZones(hold_zone=viewport_height * hold_vh, fade_zone=viewport_height * fade_vh)


def section_zones_vh(
    section: Section,
    default_fade_zone: float | None = None,
    constants: TimingConstants | None = None,
) -> FadeZones:
    """Zones of a section in viewport heights.

    Sections with cards use the card calculus. Other sections use their own
    hold/fade fractions, falling back to the constants' default hold zone and
    to ``default_fade_zone``.

    Raises:
        ZoneOrderingError: If the resolved hold zone is not below the fade zone
    """
    c = constants or DEFAULT_TIMING
    if section.card_count > 0:
        hold_vh = _card_hold_vh(section.card_count, c)
        return FadeZones(hold_vh, hold_vh + c.panel_fade_out)

    scroll = section.scroll
    hold = scroll.hold_zone if scroll.hold_zone is not None else c.default_hold_zone
    if scroll.fade_zone is not None:
        fade = scroll.fade_zone
    elif default_fade_zone is not None:
        fade = default_fade_zone
    else:
        fade = c.default_fade_zone

    try:
        return FadeZones(hold, fade)
    except ZoneOrderingError as e:
        raise ZoneOrderingError(f"Section '{section.id}': {e}") from e


def resolve_section_zones(
    section: Section,
    viewport_height: float,
    default_fade_zone: float | None = None,
    constants: TimingConstants | None = None,
) -> FadeZones:
    """Zones of a section in px for the current viewport."""
    if section.card_count > 0:
        return calculate_fade_zones(viewport_height, section.card_count, constants)
    return section_zones_vh(section, default_fade_zone, constants).scaled(viewport_height)


def prepare_scene(
    scene: Scene,
    constants: TimingConstants | None = None,
    default_fade_zone: float | None = None,
) -> Scene:
    """Write computed scroll heights back into every section.

    Declared heights are kept but must cover the visible range (2 * fade zone).

    Args:
        scene: Validated scene
        constants: Timing constants
        default_fade_zone: Fade zone for sections that declare none

    Returns:
        New Scene whose sections all carry ``scroll.height_vh``

    Raises:
        ZoneOrderingError: If any section's zones are inverted
        ScrollHeightError: If a declared height is too short
    """
    c = constants or DEFAULT_TIMING
    last_idx = len(scene.sections) - 1
    prepared: list[Section] = []

    for idx, section in enumerate(scene.sections):
        zones = section_zones_vh(section, default_fade_zone, c)
        minimum = minimum_section_height(zones.fade_zone)

        height = section.scroll.height_vh
        if height is None:
            fade = section.scroll.fade_zone
            if fade is None:
                fade = default_fade_zone if default_fade_zone is not None else c.default_fade_zone
            height = calculate_section_height(section.card_count, idx == last_idx, fade, c)
        elif height < minimum:
            raise ScrollHeightError(
                f"Section '{section.id}': height {height}vh is too short for its fade range "
                f"(needs at least {minimum}vh for fade zone {zones.fade_zone:g})"
            )

        logger.debug(
            "Section '%s': height=%dvh hold=%.3fvh fade=%.3fvh",
            section.id,
            height,
            zones.hold_zone,
            zones.fade_zone,
        )
        scroll = section.scroll.model_copy(update={"height_vh": height})
        prepared.append(section.model_copy(update={"scroll": scroll}))

    return scene.model_copy(update={"sections": prepared})


__all__ = [
    "CardThreshold",
    "FadeZones",
    "ScrollHeightError",
    "ZoneOrderingError",
    "calculate_card_threshold",
    "calculate_fade_zones",
    "calculate_section_height",
    "minimum_section_height",
    "prepare_scene",
    "resolve_section_zones",
    "section_zones_vh",
]
