"""Color: immutable value type with consistent hex / RGB / HSV views."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, NamedTuple, Union

from coloraide import Color as CAColor

logger = logging.getLogger(__name__)

DARK_LUMINANCE_THRESHOLD = 0.5

_BARE_HEX = re.compile(r"^(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


class RGB(NamedTuple):
    r: int
    g: int
    b: int


class HSV(NamedTuple):
    h: float
    s: float
    v: float


@dataclass(frozen=True)
class Color:
    """A color with hex, RGB and HSV views that always agree.

    Build instances with :func:`color_from_input` (or :func:`color_from_hex`);
    the hex string is the canonical form and the other fields derive from it.

    rgb : channels in [0, 255]
    hsv : h in [0, 360), s and v in [0, 1]
    hex : ``#rrggbb``, lowercase
    is_dark : relative luminance below 0.5
    """

    rgb: RGB
    hsv: HSV
    hex: str
    is_dark: bool

    def to_dict(self) -> dict:
        return {
            "rgb": self.rgb._asdict(),
            "hsv": self.hsv._asdict(),
            "hex": self.hex,
            "isDark": self.is_dark,
        }


INVALID_COLOR = Color(
    rgb=RGB(0, 0, 0),
    hsv=HSV(0.0, 0.0, 0.0),
    hex="#000000",
    is_dark=False,
)

ColorInput = Union[str, Mapping[str, Any], Color]


def _parse(value: Any) -> CAColor | None:
    """Turn a supported input into a coloraide color, or None."""
    if isinstance(value, Color):
        return CAColor(value.hex)
    if isinstance(value, str):
        text = value.strip()
        if _BARE_HEX.match(text):
            text = "#" + text
        try:
            return CAColor(text)
        except ValueError:
            return None
    if isinstance(value, Mapping):
        try:
            if {"r", "g", "b"} <= value.keys():
                channels = [float(value[k]) for k in ("r", "g", "b")]
                if not all(math.isfinite(c) for c in channels):
                    return None
                return CAColor(
                    "srgb", [max(0.0, min(255.0, c)) / 255.0 for c in channels]
                )
            if {"h", "s", "v"} <= value.keys():
                h, s, v = (float(value[k]) for k in ("h", "s", "v"))
                if not all(math.isfinite(c) for c in (h, s, v)):
                    return None
                return CAColor(
                    "hsv", [h % 360.0, max(0.0, min(1.0, s)), max(0.0, min(1.0, v))]
                )
        except (TypeError, ValueError):
            return None
    return None


def _hsv_hints(value: Any) -> tuple[float | None, float | None]:
    """Hue/saturation carried by an HSV mapping input, if any."""
    if isinstance(value, Mapping) and {"h", "s", "v"} <= value.keys():
        try:
            return float(value["h"]) % 360.0, max(0.0, min(1.0, float(value["s"])))
        except (TypeError, ValueError):
            return None, None
    return None, None


def color_from_input(
    value: ColorInput,
    hue_fallback: float | None = None,
    saturation_fallback: float | None = None,
) -> Color:
    """Build a Color from a CSS color string, an RGB mapping or an HSV mapping.

    Strings may be any CSS color (``#f00``, ``ff0000``, ``red``,
    ``rgb(255 0 0)``...). RGB mappings take ``r, g, b`` in 0-255, HSV
    mappings take ``h`` in degrees and ``s, v`` in 0-1. Alpha is dropped.

    Hue is undefined when saturation or value is zero, and saturation is
    undefined when value is zero. In those cases the fallbacks are used
    (an HSV input supplies its own), otherwise 0.

    Unparseable input returns :data:`INVALID_COLOR` and logs a warning.
    """
    parsed = _parse(value)
    if parsed is None:
        logger.warning("Invalid color: %r", value)
        return INVALID_COLOR

    hex_str = parsed.convert("srgb").to_string(hex=True, alpha=False).lower()
    rgb = RGB(int(hex_str[1:3], 16), int(hex_str[3:5], 16), int(hex_str[5:7], 16))

    canonical = CAColor(hex_str)
    h, s, v = canonical.convert("hsv").coords()
    hint_h, hint_s = _hsv_hints(value)
    if hue_fallback is None:
        hue_fallback = hint_h if hint_h is not None else 0.0
    if saturation_fallback is None:
        saturation_fallback = hint_s if hint_s is not None else 0.0

    if math.isnan(v):
        v = 0.0
    if v == 0.0 or math.isnan(s):
        s = saturation_fallback
    if s == 0.0 or v == 0.0 or math.isnan(h):
        h = hue_fallback
    hsv = HSV(float(h) % 360.0, float(s), float(v))

    return Color(
        rgb=rgb,
        hsv=hsv,
        hex=hex_str,
        is_dark=canonical.luminance() < DARK_LUMINANCE_THRESHOLD,
    )


def color_from_hex(value: str) -> Color:
    """Parse a color string; see :func:`color_from_input`."""
    return color_from_input(value)


def is_dark(color: Color) -> bool:
    """True when a light stroke/text color is needed for contrast."""
    return color.is_dark


def is_invalid(color: Color) -> bool:
    return color == INVALID_COLOR


def normalize_hex(value: str) -> str:
    """Canonical ``#rrggbb`` form of a color string (``#000000`` if invalid)."""
    return color_from_input(value).hex
