"""ColorMapEditorSession: reactive state for one interactive color-map editor."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any, Callable

import param

from ..core.color import Color, ColorInput
from ..core.colormap import (
    ColorMap,
    InterpolationMethod,
    color_map_from_serializable,
    color_map_to_serializable,
)
from ..core.interpolate import color_at
from ..core.lut import ColorLookupTable, discretize
from ..core.color_scale import ColorScale
from ..core.validation import coerce_bin_count
from ..defaults import (
    DEFAULT_BINS,
    DEFAULT_COLOR_MAP,
    DEFAULT_DISCRETE,
    DRAG_THROTTLE_SECONDS,
)
from .control_points import (
    DragState,
    begin_drag,
    consolidate,
    insert_control_point,
    move_control_point,
    remove_control_point,
    set_control_point_color,
    set_interpolation_method,
)

logger = logging.getLogger(__name__)

SessionCallback = Callable[[ColorMap], Any]


class ColorMapEditorSession(param.Parameterized):
    """Owns the ColorMap of one editor and applies edits to it.

    UI adapters translate input events into the methods below and re-render
    from ``color_map`` / ``lookup_table()``. Each accepted edit replaces
    ``color_map`` with a new snapshot and notifies subscribers; rejected
    edits leave it untouched.

    Usage::

        session = ColorMapEditorSession({"controlPoints": [...], "interpolationMethod": "RGB"})
        handle = session.subscribe(lambda cm: print(color_map_to_serializable(cm)))
        session.insert(0.5)
        session.begin_drag(1)
        session.drag_to(0.7)
        session.end_drag()
        session.unsubscribe(handle)
    """

    color_map = param.ClassSelector(class_=ColorMap, doc="Current color map snapshot")

    # --- Discretization ---
    discrete = param.Boolean(default=DEFAULT_DISCRETE)
    bins = param.Integer(default=DEFAULT_BINS, bounds=(0, None))

    # --- Interaction ---
    throttle_interval = param.Number(
        default=DRAG_THROTTLE_SECONDS, bounds=(0, None),
        doc="Minimum seconds between two applied drag moves",
    )

    def __init__(self, color_map: ColorMap | Mapping | None = None, **params) -> None:
        params["color_map"] = self._coerce_color_map(
            DEFAULT_COLOR_MAP if color_map is None else color_map
        )
        if "bins" in params:
            params["bins"] = coerce_bin_count(params["bins"])
        super().__init__(**params)
        self._drag: DragState | None = None
        self._last_move_time: float | None = None

    @staticmethod
    def _coerce_color_map(value: ColorMap | Mapping) -> ColorMap:
        if isinstance(value, ColorMap):
            return value
        if isinstance(value, Mapping):
            return color_map_from_serializable(value)
        raise TypeError(
            f"Expected a ColorMap or its serializable dict, got {type(value).__name__}."
        )

    def _commit(self, new_map: ColorMap) -> ColorMap:
        if new_map is not self.color_map:
            self.color_map = new_map
        return self.color_map

    # --- Subscriptions ---

    def subscribe(self, callback: SessionCallback) -> param.parameterized.Watcher:
        """Register ``fn(color_map)`` for color map / discretization changes.

        The callback receives the current ColorMap snapshot; read
        ``discrete`` and ``bins`` from the session. Returns the handle to
        pass to :meth:`unsubscribe`.
        """
        return self.param.watch(
            lambda event: callback(self.color_map), ["color_map", "discrete", "bins"]
        )

    def unsubscribe(self, handle: param.parameterized.Watcher) -> None:
        self.param.unwatch(handle)

    # --- Edits ---

    def load(self, color_map: ColorMap | Mapping) -> ColorMap:
        """Replace the whole color map (ends any gesture first)."""
        self._end_gesture()
        return self._commit(self._coerce_color_map(color_map))

    def insert(self, position: float) -> ColorMap:
        """Add a point; ends any gesture first since indices shift."""
        self._end_gesture()
        return self._commit(insert_control_point(self.color_map, position))

    def remove(self, index: int) -> ColorMap:
        self._end_gesture()
        return self._commit(remove_control_point(self.color_map, index))

    def set_color(self, index: int, color: ColorInput | Color) -> ColorMap:
        return self._commit(set_control_point_color(self.color_map, index, color))

    def set_interpolation_method(self, method: InterpolationMethod | str) -> ColorMap:
        return self._commit(set_interpolation_method(self.color_map, method))

    def consolidate(self) -> ColorMap:
        self._end_gesture()
        return self._commit(consolidate(self.color_map))

    def set_bins(self, bins: int) -> int:
        self.bins = coerce_bin_count(bins)
        return self.bins

    def set_discrete(self, discrete: bool) -> None:
        self.discrete = bool(discrete)

    # --- Drag gestures ---

    @property
    def is_dragging(self) -> bool:
        return self._drag is not None

    @property
    def drag_state(self) -> DragState | None:
        return self._drag

    def begin_drag(self, index: int) -> bool:
        """Pointer-down on a control point. Returns False if there is none."""
        self._end_gesture()
        self._drag = begin_drag(self.color_map, index)
        self._last_move_time = None
        return self._drag is not None

    def drag_to(self, position: float, timestamp: float | None = None) -> bool:
        """Pointer-move during a gesture.

        Moves closer together than ``throttle_interval`` seconds are
        dropped. Returns True if the move was evaluated.
        """
        if self._drag is None:
            logger.warning("drag_to(%r) without an active drag gesture", position)
            return False
        if not self._drag.matches(self.color_map):
            logger.warning("Color map changed under the drag gesture; ending it")
            self._end_gesture()
            return False
        now = time.monotonic() if timestamp is None else timestamp
        if (
            self._last_move_time is not None
            and now - self._last_move_time < self.throttle_interval
        ):
            logger.debug("Throttled drag move to %r", position)
            return False
        self._last_move_time = now
        self._commit(
            move_control_point(self.color_map, self._drag.index, position, self._drag)
        )
        return True

    def end_drag(self) -> ColorMap:
        """Pointer-up: finish the gesture and consolidate ties."""
        return self._end_gesture()

    def cancel_drag(self) -> ColorMap:
        """Focus loss or any other aborted gesture; still consolidates."""
        return self._end_gesture()

    def _end_gesture(self) -> ColorMap:
        drag, self._drag = self._drag, None
        self._last_move_time = None
        if drag is None:
            return self.color_map
        return self._commit(consolidate(self.color_map))

    # --- Read-only views ---

    def color_at(self, position: float) -> Color:
        return color_at(self.color_map, position)

    def lookup_table(self) -> ColorLookupTable:
        """Discrete bins when ``discrete`` is set, otherwise an empty table."""
        if not self.discrete:
            return ColorLookupTable()
        return discretize(self.color_map, self.bins)

    def color_scale(self, **kwargs) -> ColorScale:
        """ColorScale of the current map, stepped when discrete."""
        bins = self.bins if self.discrete else None
        return ColorScale(self.color_map, bins=bins, **kwargs)

    def to_serializable(self) -> dict:
        return color_map_to_serializable(self.color_map)

    def __repr__(self) -> str:
        return (
            f"ColorMapEditorSession(points={len(self.color_map.control_points)}, "
            f"method={self.color_map.interpolation_method.value}, "
            f"discrete={self.discrete}, bins={self.bins})"
        )
