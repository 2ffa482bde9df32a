"""Scene vocabulary - controlled enums and depth constants.

Depth convention shared with renderers: the focal zone always paints at
FOCAL_DEPTH and every decorative layer stays within
[MIN_LAYER_DEPTH, MAX_LAYER_DEPTH]. Changing the ceiling means changing the
schema validator as well.
"""

from enum import Enum

FOCAL_DEPTH = 100
MAX_LAYER_DEPTH = 50
MIN_LAYER_DEPTH = 0


class LayerType(str, Enum):
    """Kind of decorative layer.

    Attributes:
        BACKGROUND: Full-viewport color fill.
        IMAGE: Positioned image.
        CUSTOM: Widget drawn by a registered custom renderer.
    """

    BACKGROUND = "background"
    IMAGE = "image"
    CUSTOM = "custom"


class FocalAlign(str, Enum):
    """Text alignment of the focal text."""

    CENTER = "center"
    LEFT = "left"
    RIGHT = "right"


class VisibilityState(str, Enum):
    """Per-tick visibility of a section.

    Attributes:
        HIDDEN: Opacity 0 (off-screen sections are also not painted).
        FADING_IN: Approaching the viewport center, opacity rising.
        HELD: Inside the hold zone, opacity 1.
        FADING_OUT: Leaving the viewport center, opacity falling.
    """

    HIDDEN = "hidden"
    FADING_IN = "fading_in"
    HELD = "held"
    FADING_OUT = "fading_out"


class CardPhase(str, Enum):
    """Phase of a sequenced card's one-shot reveal.

    Attributes:
        PENDING: Not yet triggered in the current pass.
        REVEALED: Reveal animation triggered.
        EXITING: Exit transition started after the animation delay.
    """

    PENDING = "pending"
    REVEALED = "revealed"
    EXITING = "exiting"


__all__ = [
    "FOCAL_DEPTH",
    "MAX_LAYER_DEPTH",
    "MIN_LAYER_DEPTH",
    "CardPhase",
    "FocalAlign",
    "LayerType",
    "VisibilityState",
]
