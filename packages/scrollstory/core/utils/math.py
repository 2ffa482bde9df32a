"""Math utilities for common operations."""

from __future__ import annotations

import math
from typing import TypeVar

import numpy as np

Number = TypeVar("Number", int, float, np.number)


def clamp(value: Number, min_val: Number, max_val: Number) -> Number:
    """Clamp value to range [min_val, max_val].

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def lerp(a: Number, b: Number, t: float) -> float:
    """Linear interpolation between a and b.

    Args:
        a: Start value
        b: End value
        t: Interpolation factor [0, 1]

    Returns:
        Interpolated value
    """
    return float(a) + (float(b) - float(a)) * t


def round_half_up(x: float) -> int:
    """Round to the nearest integer, with halves rounded up.

    Python's round() uses banker's rounding; pixel thresholds are defined
    with the half-up convention so 0.5 always rounds to 1.
    """
    return int(math.floor(x + 0.5))


def ceil_clean(x: float, decimals: int = 6) -> int:
    """Ceiling that ignores float noise below ``decimals`` places.

    ``3.35 * 100`` evaluates to ``335.00000000000006``; a plain ceil would
    yield 336.
    """
    return int(math.ceil(round(x, decimals)))


def sample_range(start: float, stop: float, samples: int) -> list[float]:
    """Evenly spaced samples over [start, stop], inclusive.

    Args:
        start: First sample
        stop: Last sample
        samples: Number of samples (>= 2)

    Returns:
        List of floats
    """
    if samples < 2:
        raise ValueError(f"samples must be >= 2, got {samples}")
    return [float(v) for v in np.linspace(start, stop, samples)]
