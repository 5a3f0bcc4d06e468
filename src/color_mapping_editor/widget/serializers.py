"""Serializers: convert editor state to JS-transferable formats."""

from __future__ import annotations

import json
import logging
from typing import Any

from ..core.colormap import ColorMap, color_map_to_serializable
from ..core.interpolate import sample_colors
from ..core.lut import ColorLookupTable
from ..defaults import DEFAULT_GRADIENT_SAMPLES

logger = logging.getLogger(__name__)


def serialize_color_map(color_map: ColorMap) -> str:
    """Serialize a color map as JSON, plus per-point render hints.

    ``points`` repeats the control points with their gradient fraction
    and ``isDark`` so the front-end can place markers and pick a
    contrasting stroke without color math of its own.
    """
    data = color_map_to_serializable(color_map)
    data["points"] = [
        {
            "index": i,
            "position": cp.position,
            "fraction": min(1.0, max(0.0, color_map.normalize(cp.position))),
            "color": cp.color.hex,
            "isDark": cp.color.is_dark,
        }
        for i, cp in enumerate(color_map.control_points)
    ]
    return json.dumps(data)


def serialize_lookup_table(table: ColorLookupTable) -> str:
    """Serialize discrete bins as a JSON list."""
    return json.dumps(table.to_list())


def serialize_config(
    width: int,
    strip_height: int,
    control_point_size: int,
    show_stop_numbers: bool = False,
    **extra: Any,
) -> str:
    """Serialize rendering config as JSON string."""
    config = {
        "width": width,
        "stripHeight": strip_height,
        "controlPointSize": control_point_size,
        "showStopNumbers": show_stop_numbers,
        **extra,
    }
    return json.dumps(config)


def css_gradient(
    color_map: ColorMap,
    samples: int = DEFAULT_GRADIENT_SAMPLES,
    table: ColorLookupTable | None = None,
) -> str:
    """CSS ``linear-gradient`` that reproduces the map left to right.

    Continuous maps are sampled through the interpolator (so every
    interpolation method renders exactly); a non-empty ``table`` renders
    as hard-edged bins.
    """
    if not color_map.control_points:
        return ""
    stops = []
    if table is not None and table.entry_count:
        for entry in table:
            lo = 100.0 * color_map.normalize(entry.lower_bound)
            hi = 100.0 * color_map.normalize(entry.upper_bound)
            stops.append(f"{entry.color.hex} {lo:.4g}%")
            stops.append(f"{entry.color.hex} {hi:.4g}%")
    else:
        colors = sample_colors(color_map, max(2, samples))
        last = len(colors) - 1
        for i, color in enumerate(colors):
            stops.append(f"{color.hex} {100.0 * i / last:.4g}%")
    return f"linear-gradient(to right, {', '.join(stops)})"


def parse_command(command_json: str) -> dict | None:
    """Decode one JS → Python edit command; malformed input gives None."""
    try:
        command = json.loads(command_json)
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed editor command %r", command_json)
        return None
    if not isinstance(command, dict) or "type" not in command:
        logger.warning("Ignoring editor command without a type: %r", command)
        return None
    return command
