"""Timing domain - scroll distances, zones and card reveal points."""

from scrollstory.core.timing.calculus import (
    CardThreshold,
    FadeZones,
    ScrollHeightError,
    ZoneOrderingError,
    calculate_card_threshold,
    calculate_fade_zones,
    calculate_section_height,
    minimum_section_height,
    prepare_scene,
    resolve_section_zones,
    section_zones_vh,
)
from scrollstory.core.timing.constants import DEFAULT_TIMING, TimingConstants

__all__ = [
    "DEFAULT_TIMING",
    "CardThreshold",
    "FadeZones",
    "ScrollHeightError",
    "TimingConstants",
    "ZoneOrderingError",
    "calculate_card_threshold",
    "calculate_fade_zones",
    "calculate_section_height",
    "minimum_section_height",
    "prepare_scene",
    "resolve_section_zones",
    "section_zones_vh",
]
