"""color-mapping-editor: color pickers and color-map gradient editing for visualization front-ends."""

import logging

from ._version import __version__
from .core.color import Color, RGB, HSV, INVALID_COLOR, color_from_input, color_from_hex, is_dark
from .core.colormap import (
    ColorMap,
    ControlPoint,
    InterpolationMethod,
    color_map_from_serializable,
    color_map_to_serializable,
)
from .core.interpolate import color_at, mix_colors
from .core.lut import ColorLookupEntry, ColorLookupTable, discretize
from .core.color_scale import ColorScale, color_map_from_matplotlib
from .editor import (
    ColorMapEditorSession,
    ColorPickerState,
    consolidate,
    insert_control_point,
    move_control_point,
    remove_control_point,
    set_control_point_color,
    set_interpolation_method,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())


def editor(color_map=None, **kwargs):
    """Create a Jupyter color map editor widget.

    Parameters
    ----------
    color_map : ColorMap or dict, optional
        Initial color map, as a ColorMap or its serializable dict.
        Defaults to green → yellow → red.
    **kwargs
        Forwarded to ColorMapEditorWidget (width, strip_height,
        show_stop_numbers, control_point_size, show_ruler, ...).
    """
    from .widget.editor_widget import ColorMapEditorWidget

    return ColorMapEditorWidget(color_map, **kwargs)


__all__ = [
    "__version__",
    "Color",
    "RGB",
    "HSV",
    "INVALID_COLOR",
    "color_from_input",
    "color_from_hex",
    "is_dark",
    "ColorMap",
    "ControlPoint",
    "InterpolationMethod",
    "color_map_from_serializable",
    "color_map_to_serializable",
    "color_at",
    "mix_colors",
    "ColorLookupEntry",
    "ColorLookupTable",
    "discretize",
    "ColorScale",
    "color_map_from_matplotlib",
    "ColorMapEditorSession",
    "ColorPickerState",
    "consolidate",
    "insert_control_point",
    "move_control_point",
    "remove_control_point",
    "set_control_point_color",
    "set_interpolation_method",
    "editor",
]
