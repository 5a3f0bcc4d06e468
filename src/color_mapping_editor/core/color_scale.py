"""ColorScale: ColorMap → 256-entry RGBA lookup table for value mapping."""

from __future__ import annotations

import numpy as np

from .color import color_from_input
from .colormap import ColorMap, ControlPoint, InterpolationMethod
from .interpolate import color_at
from .lut import discretize
from .validation import validate_colormap_name
from ..defaults import LUT_SIZE


class ColorScale:
    """Maps scalar values to colors via a 256-entry RGBA lookup table.

    The LUT is pre-computed from a ColorMap (optionally stepped into
    ``bins`` flat bins) and transferred to JS as 1024 bytes
    (256 entries x 4 bytes RGBA).
    """

    __slots__ = ("_lut", "_vmin", "_vmax", "_color_map", "_bins", "_nan_color")

    LUT_SIZE = LUT_SIZE

    def __init__(
        self,
        color_map: ColorMap,
        vmin: float | None = None,
        vmax: float | None = None,
        bins: int | None = None,
        nan_color: tuple[int, int, int, int] = (200, 200, 200, 255),
    ) -> None:
        if not isinstance(color_map, ColorMap):
            raise TypeError(
                f"Expected a ColorMap, got {type(color_map).__name__}. "
                "Build one with color_map_from_serializable()."
            )
        self._color_map = color_map
        self._vmin = float(color_map.start_range if vmin is None else vmin)
        self._vmax = float(color_map.end_range if vmax is None else vmax)
        self._bins = bins
        self._nan_color = nan_color
        self._lut = self._build_lut()

    def _build_lut(self) -> np.ndarray:
        """Build a (256, 4) uint8 RGBA lookup table from the color map."""
        cm = self._color_map
        positions = np.linspace(cm.start_range, cm.end_range, self.LUT_SIZE)
        lut = np.empty((self.LUT_SIZE, 4), dtype=np.uint8)
        lut[:, 3] = 255
        if self._bins:
            table = discretize(cm, self._bins)
            for i, pos in enumerate(positions):
                lut[i, :3] = table.lookup(float(pos)).color.rgb
        else:
            for i, pos in enumerate(positions):
                lut[i, :3] = color_at(cm, float(pos)).rgb
        return lut

    @property
    def lut(self) -> np.ndarray:
        """(256, 4) uint8 RGBA lookup table."""
        return self._lut

    @property
    def vmin(self) -> float:
        return self._vmin

    @property
    def vmax(self) -> float:
        return self._vmax

    @property
    def color_map(self) -> ColorMap:
        return self._color_map

    @property
    def bins(self) -> int | None:
        return self._bins

    def to_bytes(self) -> bytes:
        """Serialize LUT as 1024 bytes (256 * 4 RGBA) for JS transfer."""
        return self._lut.tobytes()

    def value_to_index(self, value: float) -> int:
        """Map a scalar value to a LUT index [0, 255]."""
        if self._vmax == self._vmin:
            return 127
        normalized = (value - self._vmin) / (self._vmax - self._vmin)
        clamped = max(0.0, min(1.0, normalized))
        return int(clamped * 255)

    def map_values(self, values) -> np.ndarray:
        """Map an array of scalars to (..., 4) uint8 RGBA; NaN → nan_color."""
        arr = np.asarray(values, dtype=np.float64)
        if self._vmax == self._vmin:
            idx = np.full(arr.shape, 127, dtype=np.intp)
        else:
            normalized = (arr - self._vmin) / (self._vmax - self._vmin)
            idx = (np.clip(np.nan_to_num(normalized), 0.0, 1.0) * 255).astype(np.intp)
        out = self._lut[idx]
        out[np.isnan(arr)] = self._nan_color
        return out

    @property
    def nan_color(self) -> tuple[int, int, int, int]:
        return self._nan_color

    def to_matplotlib(self, name: str = "color_map_editor"):
        """The LUT as a matplotlib ListedColormap."""
        from matplotlib.colors import ListedColormap

        return ListedColormap(self._lut[:, :3] / 255.0, name=name)

    @classmethod
    def from_matplotlib(
        cls,
        cmap_name: str = "viridis",
        n_stops: int = 9,
        vmin: float = 0.0,
        vmax: float = 1.0,
        **kwargs,
    ) -> ColorScale:
        """ColorScale over a ColorMap sampled from a matplotlib colormap."""
        color_map = color_map_from_matplotlib(
            cmap_name, n_stops=n_stops, start_range=vmin, end_range=vmax
        )
        return cls(color_map, vmin=vmin, vmax=vmax, **kwargs)


def color_map_from_matplotlib(
    cmap_name: str,
    n_stops: int = 9,
    start_range: float = 0.0,
    end_range: float = 1.0,
    interpolation_method: InterpolationMethod = InterpolationMethod.RGB,
) -> ColorMap:
    """Sample ``n_stops`` evenly spaced control points from a matplotlib colormap."""
    import matplotlib
    from matplotlib.colors import to_hex

    validate_colormap_name(cmap_name)
    cmap = matplotlib.colormaps[cmap_name]
    n_stops = max(2, int(n_stops))
    fractions = np.linspace(0.0, 1.0, n_stops)
    rgba = cmap(fractions)  # (n, 4) float in [0, 1]
    width = end_range - start_range
    points = tuple(
        ControlPoint(
            color=color_from_input(to_hex(rgba[i], keep_alpha=False)),
            position=end_range if i == n_stops - 1 else start_range + float(f) * width,
        )
        for i, f in enumerate(fractions)
    )
    return ColorMap(
        control_points=points,
        interpolation_method=interpolation_method,
        start_range=start_range,
        end_range=end_range,
    )
