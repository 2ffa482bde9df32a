"""Viewport geometry: CSS length resolution and bounding boxes.

Everything here is an estimate. Text is never laid out; the focal box is
derived from line count and a font size sampled at the current viewport
width, so callers must treat overlap results as best-effort.
"""

from __future__ import annotations

import logging
import re

from pydantic import BaseModel, ConfigDict, Field

from scrollstory.core.scene.models import FocalConfig, ImageLayer

logger = logging.getLogger(__name__)

_LENGTH = re.compile(r"^\s*(-?\d+(?:\.\d+)?|-?\.\d+)\s*(%|px|vh|vw|rem|em)?\s*$", re.IGNORECASE)
_CLAMP = re.compile(r"clamp\(\s*[^,]+,\s*([^,]+?)\s*,", re.IGNORECASE)

# Image layers without a declared dimension are assumed to be this big
DEFAULT_IMAGE_PX = 100.0


class Viewport(BaseModel):
    """Viewport dimensions in device pixels."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    width: float = Field(default=1440.0, gt=0.0)
    height: float = Field(default=900.0, gt=0.0)

    @property
    def center_x(self) -> float:
        return self.width / 2

    @property
    def center_y(self) -> float:
        return self.height / 2


class FocalMetrics(BaseModel):
    """Layout constants used to estimate the focal text box.

    Attributes:
        max_width: Maximum width of the focal text block in px.
        padding: Padding around the focal text block in px.
        line_height: Line height as a multiple of font size.
        default_font_size: Font-size expression used when a section has none.
        fallback_font_px: Font size assumed when the expression cannot be parsed.
        root_font_px: Pixel size of 1rem.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_width: float = Field(default=1000.0, gt=0.0)
    padding: float = Field(default=40.0, ge=0.0)
    line_height: float = Field(default=1.2, gt=0.0)
    default_font_size: str = "clamp(2.5rem, 6vw, 5rem)"
    fallback_font_px: float = Field(default=80.0, gt=0.0)
    root_font_px: float = Field(default=16.0, gt=0.0)


class BoundingBox(BaseModel):
    """Axis-aligned rectangle in device pixels."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    top: float
    left: float
    bottom: float
    right: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def overlaps(self, other: BoundingBox) -> bool:
        """Whether the two boxes intersect (touching edges count)."""
        return not (
            self.right < other.left
            or self.left > other.right
            or self.bottom < other.top
            or self.top > other.bottom
        )

    def describe(self) -> str:
        return (
            f"{{top: {round(self.top)}, left: {round(self.left)}, "
            f"bottom: {round(self.bottom)}, right: {round(self.right)}}}"
        )


def resolve_length(
    value: str | float | None,
    axis_px: float,
    viewport: Viewport,
    root_font_px: float = 16.0,
) -> float | None:
    """Resolve a CSS length to pixels.

    Args:
        value: CSS length ("40%", "120px", "25vw", "5vh", "2rem") or a number
        axis_px: Size of the axis percentages refer to
        viewport: Current viewport
        root_font_px: Pixel size of 1rem/1em

    Returns:
        Pixels, or None for empty, ``auto`` or unparseable values
    """
    if value is None:
        return None
    if isinstance(value, int | float):
        return float(value)

    match = _LENGTH.match(value)
    if match is None:
        if value.strip().lower() != "auto":
            logger.debug("Unparseable CSS length %r", value)
        return None

    number = float(match.group(1))
    unit = (match.group(2) or "px").lower()

    if unit == "%":
        return number / 100 * axis_px
    if unit == "vh":
        return number / 100 * viewport.height
    if unit == "vw":
        return number / 100 * viewport.width
    if unit in ("rem", "em"):
        return number * root_font_px
    return number


def estimate_font_px(expr: str | None, viewport: Viewport, metrics: FocalMetrics) -> float:
    """Estimate the rendered font size of a CSS font-size expression.

    ``clamp(min, preferred, max)`` is evaluated through its preferred term
    only; the bounds are ignored.

    Args:
        expr: Font-size expression (None uses the metrics default)
        viewport: Current viewport
        metrics: Focal layout constants

    Returns:
        Estimated font size in px
    """
    expr = expr or metrics.default_font_size

    clamp_match = _CLAMP.search(expr)
    term = clamp_match.group(1) if clamp_match else expr

    px = resolve_length(term, viewport.width, viewport, metrics.root_font_px)
    if px is None or px <= 0:
        return metrics.fallback_font_px
    return px


def focal_bounds(
    focal: FocalConfig,
    viewport: Viewport,
    metrics: FocalMetrics | None = None,
) -> BoundingBox:
    """Estimate the box occupied by a section's focal text.

    The focal container is fixed and centered horizontally, at most
    ``max_width + 2 * padding`` wide. Its vertical center is ``focal.top``
    (resolved against the viewport height) or the viewport center.

    Args:
        focal: Focal text configuration
        viewport: Current viewport
        metrics: Focal layout constants

    Returns:
        Estimated focal BoundingBox
    """
    metrics = metrics or FocalMetrics()

    font_px = estimate_font_px(focal.font_size, viewport, metrics)
    text_height = focal.line_count * font_px * metrics.line_height

    width = min(metrics.max_width + metrics.padding * 2, viewport.width)
    height = text_height + metrics.padding * 2

    center_y = resolve_length(focal.top, viewport.height, viewport, metrics.root_font_px)
    if center_y is None:
        center_y = viewport.center_y

    return BoundingBox(
        top=center_y - height / 2,
        left=viewport.center_x - width / 2,
        bottom=center_y + height / 2,
        right=viewport.center_x + width / 2,
    )


def image_bounds(layer: ImageLayer, viewport: Viewport) -> BoundingBox | None:
    """Resolve an image layer's declared position into a box.

    ``bottom``/``right`` offsets are measured from the far viewport edge and
    win over ``top``/``left`` when both are given. A dimension declared as
    ``auto`` takes the other dimension (square assumption).

    Args:
        layer: Image layer
        viewport: Current viewport

    Returns:
        BoundingBox, or None when the layer lacks a vertical or horizontal anchor
    """
    if layer.position is None:
        return None

    pos = layer.position
    top = resolve_length(pos.top, viewport.height, viewport)
    bottom = resolve_length(pos.bottom, viewport.height, viewport)
    left = resolve_length(pos.left, viewport.width, viewport)
    right = resolve_length(pos.right, viewport.width, viewport)

    width, height = _image_size(layer, viewport)

    box_top: float | None = None
    box_left: float | None = None

    if top is not None:
        box_top = top
    if bottom is not None:
        box_top = viewport.height - bottom - height
    if left is not None:
        box_left = left
    if right is not None:
        box_left = viewport.width - right - width

    if box_top is None or box_left is None:
        return None

    # Renderers translate a 50% offset by half the element size
    if is_centering_offset(pos.top) and bottom is None:
        box_top -= height / 2
    if is_centering_offset(pos.left) and right is None:
        box_left -= width / 2

    return BoundingBox(
        top=box_top,
        left=box_left,
        bottom=box_top + height,
        right=box_left + width,
    )


def is_centering_offset(value: str | None) -> bool:
    """Whether an edge offset centers the element on that axis."""
    return value is not None and value.strip() == "50%"


def _image_size(layer: ImageLayer, viewport: Viewport) -> tuple[float, float]:
    size = layer.size
    width = resolve_length(size.width, viewport.width, viewport) if size else None
    height = resolve_length(size.height, viewport.height, viewport) if size else None

    width_auto = size is not None and (size.width or "").strip().lower() == "auto"
    height_auto = size is not None and (size.height or "").strip().lower() == "auto"

    if width is None and height is not None and width_auto:
        width = height
    if height is None and width is not None and height_auto:
        height = width

    return (
        width if width is not None else DEFAULT_IMAGE_PX,
        height if height is not None else DEFAULT_IMAGE_PX,
    )


__all__ = [
    "DEFAULT_IMAGE_PX",
    "BoundingBox",
    "FocalMetrics",
    "Viewport",
    "estimate_font_px",
    "focal_bounds",
    "image_bounds",
    "is_centering_offset",
    "resolve_length",
]
