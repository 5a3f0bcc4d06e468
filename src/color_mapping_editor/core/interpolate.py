"""Gradient interpolation: the color of a ColorMap at any domain position."""

from __future__ import annotations

import logging

import numpy as np
from coloraide import Color as CAColor

from .color import Color, INVALID_COLOR, color_from_input
from .colormap import ColorMap, InterpolationMethod

logger = logging.getLogger(__name__)

# InterpolationMethod → coloraide space name
MIX_SPACES = {
    InterpolationMethod.RGB: "srgb",
    InterpolationMethod.HSV: "hsv",
    InterpolationMethod.LAB: "lab",
}


def mix_colors(
    a: Color,
    b: Color,
    t: float,
    method: InterpolationMethod = InterpolationMethod.RGB,
) -> Color:
    """Blend ``a`` → ``b`` at fraction ``t`` in the method's color space.

    HSV blends hue along the shorter arc. ``t`` is clamped to [0, 1] and
    the endpoints come back unchanged.
    """
    t = max(0.0, min(1.0, float(t)))
    if t == 0.0:
        return a
    if t == 1.0:
        return b
    space = MIX_SPACES[InterpolationMethod(method)]
    mixed = CAColor(a.hex).mix(b.hex, t, space=space, hue="shorter")
    return color_from_input(mixed.convert("srgb").to_string(hex=True, alpha=False))


def _bracket(color_map: ColorMap, position: float) -> tuple[int, int]:
    """Indices of the first adjacent pair with a.position <= position <= b.position.

    Positions before the first or after the last point use the boundary pair.
    """
    points = color_map.control_points
    for i in range(len(points) - 1):
        if points[i].position <= position <= points[i + 1].position:
            return i, i + 1
    if position < points[0].position:
        return 0, 1
    return len(points) - 2, len(points) - 1


def color_at(color_map: ColorMap, position: float) -> Color:
    """Color of the gradient at ``position`` (domain units).

    The position is clamped to [start_range, end_range]; a collapsed
    domain maps every position to its single point. A one-point map
    returns that point's color everywhere. An empty map is a caller
    error: INVALID_COLOR is returned and a warning logged.
    """
    points = color_map.control_points
    if not points:
        logger.warning("color_at called on a color map without control points")
        return INVALID_COLOR
    if len(points) == 1:
        return points[0].color

    # same as clamping the normalized fraction to [0, 1]
    u = min(color_map.end_range, max(color_map.start_range, position))

    left, right = _bracket(color_map, u)
    a, b = points[left], points[right]
    width = b.position - a.position
    local_t = (u - a.position) / (width if width != 0 else 1.0)
    return mix_colors(a.color, b.color, local_t, color_map.interpolation_method)


def sample_colors(color_map: ColorMap, n: int) -> list[Color]:
    """``n`` colors evenly spaced across the full domain, ends included."""
    if n <= 0:
        return []
    if n == 1:
        return [color_at(color_map, color_map.start_range)]
    positions = np.linspace(color_map.start_range, color_map.end_range, n)
    return [color_at(color_map, float(p)) for p in positions]
