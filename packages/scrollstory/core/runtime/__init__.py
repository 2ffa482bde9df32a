"""Runtime domain - per-tick visibility decisions and their state store."""

from scrollstory.core.runtime.controller import Clock, ScrollController, ScrollLayout
from scrollstory.core.runtime.events import ScrollEvents, setup_scroll_behavior
from scrollstory.core.runtime.simulation import ScrollSample, simulate_scroll
from scrollstory.core.runtime.store import (
    CardVisual,
    SectionVisual,
    StoreListener,
    TrailingVisual,
    VisualStateStore,
)
from scrollstory.core.runtime.visibility import (
    SectionGeometry,
    VisibilityDecision,
    advance_cards,
    classify,
    compute_opacity,
    compute_section_visibility,
    scroll_progress,
    trailing_visual,
)

__all__ = [
    "CardVisual",
    "Clock",
    "ScrollController",
    "ScrollEvents",
    "ScrollLayout",
    "ScrollSample",
    "SectionGeometry",
    "SectionVisual",
    "StoreListener",
    "TrailingVisual",
    "VisibilityDecision",
    "VisualStateStore",
    "advance_cards",
    "classify",
    "compute_opacity",
    "compute_section_visibility",
    "scroll_progress",
    "simulate_scroll",
    "trailing_visual",
]
