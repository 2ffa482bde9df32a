"""Shared utilities for scrollstory."""

from scrollstory.core.utils.math import ceil_clean, clamp, lerp, round_half_up, sample_range

__all__ = [
    "ceil_clean",
    "clamp",
    "lerp",
    "round_half_up",
    "sample_range",
]
