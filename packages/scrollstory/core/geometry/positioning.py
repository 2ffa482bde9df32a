"""Positioning helpers for layout patterns that keep clear of the focal zone.

Presets are plain edge-offset mappings (``top``/``right``/``bottom``/``left``)
that image layers can reference by name instead of spelling out offsets.
"""

from __future__ import annotations

import math
from typing import Literal

import numpy as np

POSITION_PRESETS: dict[str, dict[str, str]] = {
    # Corners
    "top-left": {"top": "5vh", "left": "5vw"},
    "top-right": {"top": "5vh", "right": "5vw"},
    "bottom-left": {"bottom": "5vh", "left": "5vw"},
    "bottom-right": {"bottom": "5vh", "right": "5vw"},
    # Edge centers
    "top-center": {"top": "5vh", "left": "50%"},
    "bottom-center": {"bottom": "5vh", "left": "50%"},
    "left-center": {"top": "50%", "left": "5vw"},
    "right-center": {"top": "50%", "right": "5vw"},
    # No focal overlap on desktop viewports
    "left-top-safe": {"top": "10vh", "left": "5vw"},
    "left-bottom-safe": {"bottom": "10vh", "left": "5vw"},
    "right-top-safe": {"top": "10vh", "right": "5vw"},
    "right-bottom-safe": {"bottom": "10vh", "right": "5vw"},
}


def get_position(name: str) -> dict[str, str]:
    """Get a copy of a named position preset.

    Args:
        name: Preset name (e.g. "top-left")

    Returns:
        Edge-offset mapping

    Raises:
        KeyError: If the preset does not exist
    """
    try:
        return dict(POSITION_PRESETS[name])
    except KeyError:
        raise KeyError(
            f"Unknown position preset '{name}'. Available: {', '.join(sorted(POSITION_PRESETS))}"
        ) from None


def column_layout(
    side: Literal["left", "right"],
    *,
    width: str = "15vw",
    gap: str = "3vh",
    padding: str = "3vw",
) -> dict[str, str]:
    """Style mapping for a column pinned to one side of the viewport.

    Args:
        side: Which viewport edge the column hugs
        width: Maximum column width
        gap: Gap between stacked items
        padding: Distance from the viewport edges

    Returns:
        CSS property mapping (camelCase keys)
    """
    style = {
        "display": "flex",
        "flexDirection": "column",
        "justifyContent": "space-between",
        "gap": gap,
        "maxWidth": width,
        "position": "absolute",
        "top": padding,
        "bottom": padding,
    }
    if side == "left":
        style["alignItems"] = "flex-start"
        style["left"] = padding
    else:
        style["alignItems"] = "flex-end"
        style["right"] = padding
    return style


def scattered_positions(
    count: int,
    *,
    avoid_center: bool = True,
    exclusion_radius: float = 0.3,
    seed: int | None = None,
) -> list[dict[str, str]]:
    """Random percentage positions, optionally kept out of the center square.

    A point is rejected when both its horizontal and vertical distance from
    the center are below ``exclusion_radius / 2``.

    Args:
        count: Number of positions
        avoid_center: Reject points inside the central exclusion square
        exclusion_radius: Side of the exclusion square as a viewport fraction
        seed: Seed for reproducible layouts

    Returns:
        List of {"left": "x%", "top": "y%"} mappings
    """
    if not 0.0 <= exclusion_radius < 2.0:
        raise ValueError(f"exclusion_radius must be in [0, 2), got {exclusion_radius}")

    rng = np.random.default_rng(seed)
    half = exclusion_radius / 2
    positions: list[dict[str, str]] = []

    while len(positions) < count:
        left, top = rng.random(2)
        if avoid_center and abs(left - 0.5) < half and abs(top - 0.5) < half:
            continue
        positions.append({"left": f"{left * 100:.3f}%", "top": f"{top * 100:.3f}%"})

    return positions


def circular_positions(
    count: int,
    *,
    center_x: str = "50%",
    center_y: str = "50%",
    radius: str = "30vw",
    start_angle: float = 0.0,
) -> list[dict[str, str]]:
    """Positions evenly spaced on a circle, as CSS calc() expressions.

    Args:
        count: Number of positions
        center_x: Horizontal center
        center_y: Vertical center
        radius: Circle radius
        start_angle: Angle of the first position in degrees

    Returns:
        List of {"left": ..., "top": ...} mappings
    """
    if count <= 0:
        return []
    step = 360.0 / count
    positions = []
    for i in range(count):
        angle = math.radians(start_angle + i * step)
        positions.append(
            {
                "left": f"calc({center_x} + {math.cos(angle):.4f} * {radius})",
                "top": f"calc({center_y} + {math.sin(angle):.4f} * {radius})",
            }
        )
    return positions


__all__ = [
    "POSITION_PRESETS",
    "circular_positions",
    "column_layout",
    "get_position",
    "scattered_positions",
]
