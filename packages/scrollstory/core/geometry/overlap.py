"""Focal zone overlap detection.

Advisory, author-time check: reports image layers whose estimated box
intersects the estimated focal text box, and flags every custom layer for
manual review. Nothing here ever blocks rendering.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from scrollstory.core.geometry.bounds import (
    FocalMetrics,
    Viewport,
    focal_bounds,
    image_bounds,
)
from scrollstory.core.scene.models import CustomLayer, ImageLayer, Scene, Section

logger = logging.getLogger(__name__)


class OverlapReport(BaseModel):
    """Outcome of an overlap check. ``valid`` is False when any warning exists."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    valid: bool
    warnings: list[str] = Field(default_factory=list)


def validate_focal_overlap(
    section: Section,
    viewport: Viewport | None = None,
    metrics: FocalMetrics | None = None,
) -> OverlapReport:
    """Check one section's layers against its focal text box.

    Only image layers with an explicit position are measured. Custom layers
    cannot be measured and always produce a warning.

    Args:
        section: Section to check
        viewport: Viewport to evaluate at (default 1440x900)
        metrics: Focal layout constants

    Returns:
        OverlapReport with one warning per suspect layer
    """
    viewport = viewport or Viewport()
    focal_box = focal_bounds(section.focal, viewport, metrics)
    warnings: list[str] = []

    for idx, layer in enumerate(section.layers):
        if isinstance(layer, ImageLayer) and layer.position is not None:
            box = image_bounds(layer, viewport)
            if box is not None and focal_box.overlaps(box):
                warnings.append(
                    f"Layer {idx} (image: {layer.src}) may overlap focal text. "
                    f"Focal bounds: {focal_box.describe()}. "
                    f"Image bounds: {box.describe()}"
                )
        elif isinstance(layer, CustomLayer):
            warnings.append(
                f"Layer {idx} (custom: {layer.renderer}) cannot be validated automatically. "
                f"Ensure the custom renderer respects focal zone bounds."
            )

    return OverlapReport(valid=not warnings, warnings=warnings)


def validate_all_sections(
    scene: Scene,
    viewport: Viewport | None = None,
    metrics: FocalMetrics | None = None,
) -> OverlapReport:
    """Run the overlap check over every section of a scene.

    Args:
        scene: Scene to check
        viewport: Viewport to evaluate at
        metrics: Focal layout constants

    Returns:
        OverlapReport whose warnings are prefixed with section index and id
    """
    all_warnings: list[str] = []

    for idx, section in enumerate(scene.sections):
        report = validate_focal_overlap(section, viewport, metrics)
        all_warnings.extend(f"Section {idx} ({section.id}): {w}" for w in report.warnings)

    if all_warnings:
        logger.debug("Overlap check produced %d warning(s)", len(all_warnings))

    return OverlapReport(valid=not all_warnings, warnings=all_warnings)


__all__ = [
    "OverlapReport",
    "validate_all_sections",
    "validate_focal_overlap",
]
