"""Interactive editing of color-map control points and picker colors."""

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
from .picker import ColorPickerState
from .session import ColorMapEditorSession

__all__ = [
    "DragState",
    "begin_drag",
    "consolidate",
    "insert_control_point",
    "move_control_point",
    "remove_control_point",
    "set_control_point_color",
    "set_interpolation_method",
    "ColorPickerState",
    "ColorMapEditorSession",
]
