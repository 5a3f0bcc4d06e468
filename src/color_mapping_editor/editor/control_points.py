"""Control-point edits: insert, remove, move (drag) and consolidate.

Every operation takes a ColorMap snapshot and returns a snapshot. When an
edit is rejected or changes nothing the input object itself is returned,
so ``new is old`` tells callers nothing happened. Rejections are logged,
never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

import numpy as np

from ..core.color import Color, ColorInput, color_from_input, is_invalid
from ..core.colormap import ColorMap, ControlPoint, InterpolationMethod
from ..core.interpolate import color_at
from ..core.validation import (
    coerce_interpolation_method,
    coerce_position,
    is_interpolation_method,
)

logger = logging.getLogger(__name__)

MIN_CONTROL_POINTS = 2


def _in_range(color_map: ColorMap, index: int) -> bool:
    return isinstance(index, (int, np.integer)) and 0 <= index < len(color_map.control_points)


def insert_control_point(color_map: ColorMap, position: float) -> ColorMap:
    """Add a point at ``position`` colored by the current gradient there.

    The point goes before the first point whose position exceeds it (after
    any points it ties with); existing points keep their relative order.
    """
    pos = coerce_position(position, color_map.start_range, color_map.end_range)
    if pos is None:
        return color_map
    color = color_at(color_map, pos)
    points = color_map.control_points
    idx = int(np.searchsorted(color_map.positions, pos, side="right")) if points else 0
    new_point = ControlPoint(color=color, position=pos)
    return color_map.with_points(points[:idx] + (new_point,) + points[idx:])


def remove_control_point(color_map: ColorMap, index: int) -> ColorMap:
    """Remove the point at ``index``; a map never drops below two points."""
    if not _in_range(color_map, index):
        logger.warning("No control point at index %r; nothing removed", index)
        return color_map
    if len(color_map.control_points) <= MIN_CONTROL_POINTS:
        logger.warning(
            "Refusing to remove control point %d: a color map keeps at least %d",
            index, MIN_CONTROL_POINTS,
        )
        return color_map
    points = color_map.control_points
    return color_map.with_points(points[:index] + points[index + 1:])


@dataclass(frozen=True)
class DragState:
    """Pointer-down snapshot for one drag gesture.

    anchor_position : position of the grabbed point when the gesture began
    tied_indices : every index sharing that exact position (grabbed one included)
    point_count : number of control points when the gesture began
    """

    index: int
    anchor_position: float
    tied_indices: tuple[int, ...]
    point_count: int

    def matches(self, color_map: ColorMap) -> bool:
        """True while the snapshot still describes ``color_map``.

        Only moves keep a snapshot valid: the point count is unchanged and
        at most one tied point (the one being dragged) has left the anchor.
        """
        points = color_map.control_points
        if len(points) != self.point_count:
            return False
        if not all(_in_range(color_map, i) for i in self.tied_indices):
            return False
        off_anchor = [
            i for i in self.tied_indices if points[i].position != self.anchor_position
        ]
        return len(off_anchor) <= 1 and all(
            i in (min(self.tied_indices), max(self.tied_indices)) for i in off_anchor
        )


def begin_drag(color_map: ColorMap, index: int) -> DragState | None:
    """Snapshot the grabbed point and every point tied with it."""
    if not _in_range(color_map, index):
        logger.warning("Cannot drag: no control point at index %r", index)
        return None
    anchor = color_map.control_points[index].position
    tied = tuple(
        i for i, cp in enumerate(color_map.control_points) if cp.position == anchor
    )
    return DragState(
        index=index,
        anchor_position=anchor,
        tied_indices=tied,
        point_count=len(color_map.control_points),
    )


def move_control_point(
    color_map: ColorMap,
    index: int,
    new_position: float,
    drag: DragState | None = None,
) -> ColorMap:
    """Move a point without letting it cross its neighbors.

    When several points share the grabbed position, the one with the
    highest index moves right and the one with the lowest index moves left;
    the others stay pinned at the shared position until consolidation.
    Pass the gesture's ``drag`` snapshot so successive moves pick the
    representative against the pointer-down position.
    """
    if not _in_range(color_map, index):
        logger.warning("Cannot move: no control point at index %r", index)
        return color_map
    start, end = color_map.start_range, color_map.end_range
    pos = coerce_position(new_position, start, end)
    if pos is None:
        return color_map
    if drag is None or not drag.matches(color_map):
        drag = begin_drag(color_map, index)

    anchor = drag.anchor_position
    moving = max(drag.tied_indices) if pos > anchor else min(drag.tied_indices)

    points = list(color_map.control_points)
    for i in drag.tied_indices:
        if i != moving and points[i].position != anchor:
            points[i] = replace(points[i], position=anchor)

    lower = points[moving - 1].position if moving > 0 else start
    upper = points[moving + 1].position if moving < len(points) - 1 else end
    pos = max(lower, min(upper, pos))
    if pos != points[moving].position:
        points[moving] = replace(points[moving], position=pos)

    if tuple(points) == color_map.control_points:
        return color_map
    return color_map.with_points(points)


def consolidate(color_map: ColorMap) -> ColorMap:
    """Resolve ties left behind by an edit gesture.

    Positions are clamped into the domain and stably sorted. A run of
    equal positions at ``start_range`` keeps only its last point and one
    at ``end_range`` only its first. An interior point is dropped when
    both neighbors share its position, so interior runs shrink to a pair
    (a hard color step) and an existing pair is left alone. Idempotent.
    """
    start, end = color_map.start_range, color_map.end_range
    points = []
    for cp in color_map.control_points:
        clamped = max(start, min(end, cp.position))
        points.append(replace(cp, position=clamped) if clamped != cp.position else cp)
    points.sort(key=lambda cp: cp.position)

    kept = []
    for i, cp in enumerate(points):
        pos = cp.position
        prev_pos = points[i - 1].position if i > 0 else None
        next_pos = points[i + 1].position if i < len(points) - 1 else None
        if pos == start and next_pos == start:
            continue
        if pos == end and prev_pos == end and start != end:
            continue
        if pos != start and pos != end and prev_pos == pos and next_pos == pos:
            continue
        kept.append(cp)

    if tuple(kept) == color_map.control_points:
        return color_map
    return color_map.with_points(kept)


def set_interpolation_method(
    color_map: ColorMap, method: InterpolationMethod | str
) -> ColorMap:
    """Switch the blending space; unknown methods are ignored with a warning."""
    if not is_interpolation_method(method):
        logger.warning("Unknown interpolation method %r; keeping %s",
                       method, color_map.interpolation_method.value)
        return color_map
    new_method = InterpolationMethod(coerce_interpolation_method(method))
    if new_method == color_map.interpolation_method:
        return color_map
    return replace(color_map, interpolation_method=new_method)


def set_control_point_color(
    color_map: ColorMap, index: int, color: ColorInput
) -> ColorMap:
    """Recolor one point; unparseable colors leave the map unchanged."""
    if not _in_range(color_map, index):
        logger.warning("Cannot recolor: no control point at index %r", index)
        return color_map
    new_color = color if isinstance(color, Color) else color_from_input(color)
    if is_invalid(new_color):
        return color_map
    points = list(color_map.control_points)
    if points[index].color == new_color:
        return color_map
    points[index] = replace(points[index], color=new_color)
    return color_map.with_points(points)
