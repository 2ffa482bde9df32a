"""Geometry domain - viewport layout estimates and focal overlap checks."""

# positioning first: the scene validator imports it while this package is loading
from scrollstory.core.geometry.positioning import (
    POSITION_PRESETS,
    circular_positions,
    column_layout,
    get_position,
    scattered_positions,
)
from scrollstory.core.geometry.bounds import (  # noqa: I001
    BoundingBox,
    FocalMetrics,
    Viewport,
    estimate_font_px,
    focal_bounds,
    image_bounds,
    resolve_length,
)
from scrollstory.core.geometry.overlap import (
    OverlapReport,
    validate_all_sections,
    validate_focal_overlap,
)

__all__ = [
    "POSITION_PRESETS",
    "BoundingBox",
    "FocalMetrics",
    "OverlapReport",
    "Viewport",
    "circular_positions",
    "column_layout",
    "estimate_font_px",
    "focal_bounds",
    "get_position",
    "image_bounds",
    "resolve_length",
    "scattered_positions",
    "validate_all_sections",
    "validate_focal_overlap",
]
