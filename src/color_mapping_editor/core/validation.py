"""Input coercion for color-map edits.

Data problems never raise here: each helper logs a warning and hands
back the nearest usable value (or None when the edit must be rejected).
"""

from __future__ import annotations

import logging
import math
from typing import Any

from ..defaults import DEFAULT_INTERPOLATION, DEFAULT_START_RANGE, DEFAULT_END_RANGE

logger = logging.getLogger(__name__)

INTERPOLATION_METHODS = ("RGB", "HSV", "LAB")


def coerce_position(value: Any, low: float, high: float) -> float | None:
    """Clamp a position into [low, high].

    Returns None (and warns) for NaN or non-numeric input; infinities
    clamp to the nearest bound.
    """
    try:
        position = float(value)
    except (TypeError, ValueError):
        logger.warning("Rejecting non-numeric position %r", value)
        return None
    if math.isnan(position):
        logger.warning("Rejecting NaN position")
        return None
    if position < low or position > high:
        logger.warning(
            "Position %r outside [%r, %r]; clamping", position, low, high
        )
    return max(low, min(high, position))


def coerce_bin_count(value: Any) -> int:
    """Bin counts are integers >= 0; anything else is clamped with a warning."""
    try:
        count = float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid bin count %r; using 0", value)
        return 0
    if not math.isfinite(count):
        logger.warning("Invalid bin count %r; using 0", value)
        return 0
    if count < 0:
        logger.warning("Negative bin count %r; clamping to 0", value)
        return 0
    if count != int(count):
        logger.warning("Non-integer bin count %r; truncating", value)
    return int(count)


def coerce_interpolation_method(value: Any, default: str = DEFAULT_INTERPOLATION) -> str:
    """Map 'rgb' / 'RGB' / InterpolationMethod.RGB to 'RGB'; unknown → default."""
    name = getattr(value, "value", value)
    if isinstance(name, str) and name.upper() in INTERPOLATION_METHODS:
        return name.upper()
    if value is not None:
        logger.warning(
            "Unknown interpolation method %r; using %s. Choose one of %s.",
            value, default, ", ".join(INTERPOLATION_METHODS),
        )
    return default


def is_interpolation_method(value: Any) -> bool:
    name = getattr(value, "value", value)
    return isinstance(name, str) and name.upper() in INTERPOLATION_METHODS


def coerce_range(start: Any, end: Any) -> tuple[float, float]:
    """Return a finite (start, end) pair with start <= end.

    None or non-finite bounds fall back to the defaults; an inverted
    range is swapped.
    """
    bounds = []
    for value, default in ((start, DEFAULT_START_RANGE), (end, DEFAULT_END_RANGE)):
        try:
            bound = float(value) if value is not None else default
        except (TypeError, ValueError):
            bound = float("nan")
        if not math.isfinite(bound):
            logger.warning("Invalid range bound %r; using %r", value, default)
            bound = default
        bounds.append(bound)
    lo, hi = bounds
    if lo > hi:
        logger.warning("startRange %r > endRange %r; swapping", lo, hi)
        lo, hi = hi, lo
    return lo, hi


def validate_colormap_name(name: str) -> str:
    """Validate that a matplotlib colormap name exists."""
    import matplotlib

    if name not in matplotlib.colormaps:
        raise ValueError(
            f"Unknown colormap '{name}'. Use a matplotlib colormap name "
            f"like 'viridis', 'plasma', 'RdBu_r', etc."
        )
    return name
