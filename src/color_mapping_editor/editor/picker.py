"""ColorPickerState: HSV color picker model with hue/saturation pinning."""

from __future__ import annotations

import logging
from typing import Any, Callable

import param

from ..core.color import HSV, RGB, Color, ColorInput, color_from_input, is_invalid
from ..defaults import (
    DEFAULT_PICKER_COLOR,
    PICKER_FALLBACK_HUE,
    PICKER_FALLBACK_SATURATION,
)

logger = logging.getLogger(__name__)

PickerCallback = Callable[[Color], Any]


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


class ColorPickerState(param.Parameterized):
    """The picker keeps HSV as its internal representation.

    Hue is undefined for grays and both hue and saturation are undefined
    for black. Instead of resetting, the picker keeps the last defined
    values (``backup_hue`` / ``backup_saturation``), so dragging value down
    to black and back up returns to the same hue.

    Scales follow the picker's input fields: ``set_hsv`` / ``hsv`` use
    0-360 and 0-100, the ``_normalized`` variants use 0-1 throughout.
    """

    color = param.ClassSelector(class_=Color, doc="Current color")

    def __init__(self, initial_color: ColorInput = DEFAULT_PICKER_COLOR, **params) -> None:
        start = color_from_input(
            initial_color,
            hue_fallback=PICKER_FALLBACK_HUE,
            saturation_fallback=PICKER_FALLBACK_SATURATION,
        )
        if is_invalid(start):
            start = color_from_input(DEFAULT_PICKER_COLOR)
        params["color"] = start
        super().__init__(**params)
        self._h, self._s, self._v = start.hsv
        self._backup_hue = self._h
        self._backup_saturation = self._s

    # --- Subscriptions ---

    def subscribe(self, callback: PickerCallback) -> param.parameterized.Watcher:
        """Register ``fn(color)``; returns the handle for :meth:`unsubscribe`."""
        return self.param.watch(lambda event: callback(event.new), ["color"])

    def unsubscribe(self, handle: param.parameterized.Watcher) -> None:
        self.param.unwatch(handle)

    # --- Setters ---

    def _apply(self, h: float, s: float, v: float) -> None:
        self._h, self._s, self._v = h % 360.0, _clamp(s, 0.0, 1.0), _clamp(v, 0.0, 1.0)
        new_color = color_from_input({"h": self._h, "s": self._s, "v": self._v})
        if new_color != self.color:
            self.color = new_color

    def _apply_parsed(self, value: Any) -> None:
        parsed = color_from_input(
            value,
            hue_fallback=self._backup_hue,
            saturation_fallback=self._backup_saturation,
        )
        if is_invalid(parsed):
            return
        r, g, b = parsed.rgb
        if max(r, g, b) > 0:
            self._backup_saturation = parsed.hsv.s
            if max(r, g, b) != min(r, g, b):
                self._backup_hue = parsed.hsv.h
        self._h, self._s, self._v = parsed.hsv
        if parsed != self.color:
            self.color = parsed

    def set_hex(self, value: str) -> None:
        """Any CSS color string; invalid strings are ignored with a warning."""
        self._apply_parsed(value)

    def set_rgb(self, r: float, g: float, b: float) -> None:
        """Channels in 0-255."""
        self._apply_parsed({"r": round(r), "g": round(g), "b": round(b)})

    def set_rgb_normalized(self, r: float, g: float, b: float) -> None:
        self.set_rgb(r * 255, g * 255, b * 255)

    def set_hsv(self, h: float, s: float, v: float) -> None:
        """h in 0-360, s and v in 0-100."""
        self.set_hsv_normalized(h / 360.0, s / 100.0, v / 100.0)

    def set_hsv_normalized(self, h: float, s: float, v: float) -> None:
        self._backup_hue = (h * 360.0) % 360.0
        self._backup_saturation = _clamp(s, 0.0, 1.0)
        self._apply(h * 360.0, s, v)

    def set_hue(self, h: float) -> None:
        """Hue slider, degrees."""
        self._backup_hue = _clamp(h, 0.0, 360.0) % 360.0
        self._apply(self._backup_hue, self._s, self._v)

    def set_saturation_value(self, s: float, v: float) -> None:
        """Saturation/value area, both 0-1."""
        self._backup_saturation = _clamp(s, 0.0, 1.0)
        self._apply(self._h, self._backup_saturation, v)

    # --- Getters ---

    @property
    def hex(self) -> str:
        return self.color.hex

    @property
    def rgb(self) -> RGB:
        return self.color.rgb

    @property
    def rgb_normalized(self) -> tuple[float, float, float]:
        r, g, b = self.color.rgb
        return r / 255.0, g / 255.0, b / 255.0

    @property
    def hsv(self) -> HSV:
        """h in 0-360, s and v in 0-100."""
        return HSV(self._h, self._s * 100.0, self._v * 100.0)

    @property
    def hsv_normalized(self) -> HSV:
        return HSV(self._h / 360.0, self._s, self._v)

    @property
    def backup_hue(self) -> float:
        return self._backup_hue

    @property
    def backup_saturation(self) -> float:
        return self._backup_saturation

    def __repr__(self) -> str:
        return f"ColorPickerState(hex={self.hex!r}, hsv={tuple(round(c, 3) for c in self.hsv)})"
