"""ColorMap: ordered control points, an interpolation method and a domain."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .color import Color, color_from_input
from .validation import (
    coerce_interpolation_method,
    coerce_range,
)
from ..defaults import DEFAULT_START_RANGE, DEFAULT_END_RANGE

logger = logging.getLogger(__name__)


class InterpolationMethod(str, Enum):
    """Color space in which two neighboring control points are blended."""

    RGB = "RGB"
    HSV = "HSV"
    LAB = "LAB"


@dataclass(frozen=True)
class ControlPoint:
    """One gradient stop; position is in the owning map's domain units."""

    color: Color
    position: float

    def to_dict(self) -> dict:
        return {"color": self.color.hex, "position": self.position}


@dataclass(frozen=True)
class ColorMap:
    """Immutable color map snapshot.

    Edits return new snapshots (see ``editor.control_points``). Points are
    kept in ascending position order; ties only exist mid-gesture.
    """

    control_points: tuple[ControlPoint, ...] = field(default_factory=tuple)
    interpolation_method: InterpolationMethod = InterpolationMethod.LAB
    start_range: float = DEFAULT_START_RANGE
    end_range: float = DEFAULT_END_RANGE

    @property
    def positions(self) -> list[float]:
        return [cp.position for cp in self.control_points]

    @property
    def span(self) -> float:
        """Domain width, 1 for a collapsed domain."""
        width = self.end_range - self.start_range
        return width if width != 0 else 1.0

    def normalize(self, position: float) -> float:
        """Domain position → unclamped gradient fraction."""
        return (position - self.start_range) / self.span

    def denormalize(self, t: float) -> float:
        """Gradient fraction → domain position."""
        return self.start_range + t * (self.end_range - self.start_range)

    def with_points(self, control_points) -> ColorMap:
        return replace(self, control_points=tuple(control_points))


def color_map_from_serializable(data: Mapping[str, Any]) -> ColorMap:
    """Build a ColorMap from its string-keyed transport form.

    Expected shape::

        {
            "controlPoints": [{"color": "#0000ff", "position": 0.0}, ...],
            "interpolationMethod": "RGB" | "HSV" | "LAB",
            "startRange": 0.0,   # optional
            "endRange": 1.0,     # optional
        }

    Invalid colors become INVALID_COLOR (with a warning). Points with a
    non-finite position are dropped. Points are stably sorted by position.
    """
    if not isinstance(data, Mapping):
        raise TypeError(
            f"Expected a mapping with 'controlPoints', got {type(data).__name__}."
        )

    start, end = coerce_range(
        data.get("startRange", DEFAULT_START_RANGE),
        data.get("endRange", DEFAULT_END_RANGE),
    )
    method = InterpolationMethod(
        coerce_interpolation_method(data.get("interpolationMethod"))
    )

    points = []
    for raw in data.get("controlPoints") or []:
        if not isinstance(raw, Mapping):
            logger.warning("Skipping malformed control point %r", raw)
            continue
        color = color_from_input(raw.get("color"))
        try:
            position = float(raw.get("position"))
        except (TypeError, ValueError):
            position = float("nan")
        if not math.isfinite(position):
            logger.warning("Dropping control point with position %r", raw.get("position"))
            continue
        points.append(ControlPoint(color=color, position=position))

    points.sort(key=lambda cp: cp.position)
    return ColorMap(
        control_points=tuple(points),
        interpolation_method=method,
        start_range=start,
        end_range=end,
    )


def color_map_to_serializable(color_map: ColorMap) -> dict:
    """Reduce a ColorMap to its transport form (colors as hex strings)."""
    return {
        "controlPoints": [cp.to_dict() for cp in color_map.control_points],
        "interpolationMethod": color_map.interpolation_method.value,
        "startRange": color_map.start_range,
        "endRange": color_map.end_range,
    }
