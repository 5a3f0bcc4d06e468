"""Discrete lookup tables: a ColorMap cut into equal-width flat-colored bins."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from .color import Color
from .colormap import ColorMap
from .interpolate import color_at
from .validation import coerce_bin_count


@dataclass(frozen=True)
class ColorLookupEntry:
    """One bin: [lower_bound, upper_bound), the last bin closed on the right."""

    color: Color
    lower_bound: float
    center: float
    upper_bound: float

    def to_dict(self) -> dict:
        return {
            "color": self.color.hex,
            "lowerBound": self.lower_bound,
            "center": self.center,
            "upperBound": self.upper_bound,
        }


@dataclass(frozen=True)
class ColorLookupTable:
    """Contiguous bins covering [start_range, end_range] with no gaps."""

    entries: tuple[ColorLookupEntry, ...] = field(default_factory=tuple)

    @property
    def entry_count(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __getitem__(self, index: int) -> ColorLookupEntry:
        return self.entries[index]

    @property
    def bounds(self) -> np.ndarray:
        """(n + 1,) bin edges."""
        if not self.entries:
            return np.empty(0, dtype=np.float64)
        edges = [e.lower_bound for e in self.entries] + [self.entries[-1].upper_bound]
        return np.asarray(edges, dtype=np.float64)

    def lookup(self, value: float) -> ColorLookupEntry | None:
        """Entry whose bin holds ``value``; values outside the domain clamp."""
        if not self.entries:
            return None
        edges = self.bounds
        idx = int(np.searchsorted(edges, value, side="right")) - 1
        idx = max(0, min(self.entry_count - 1, idx))
        return self.entries[idx]

    def to_rgba_array(self) -> np.ndarray:
        """(n, 4) uint8 RGBA array of the bin colors."""
        lut = np.empty((self.entry_count, 4), dtype=np.uint8)
        for i, entry in enumerate(self.entries):
            lut[i] = (*entry.color.rgb, 255)
        return lut

    def to_rgba_bytes(self) -> bytes:
        """Bin colors as n * 4 bytes RGBA for JS transfer."""
        return self.to_rgba_array().tobytes()

    def to_frame(self) -> pd.DataFrame:
        """One row per bin: bounds, center, hex and RGB channels."""
        return pd.DataFrame(
            {
                "lower_bound": [e.lower_bound for e in self.entries],
                "center": [e.center for e in self.entries],
                "upper_bound": [e.upper_bound for e in self.entries],
                "hex": [e.color.hex for e in self.entries],
                "r": [e.color.rgb.r for e in self.entries],
                "g": [e.color.rgb.g for e in self.entries],
                "b": [e.color.rgb.b for e in self.entries],
            },
            columns=["lower_bound", "center", "upper_bound", "hex", "r", "g", "b"],
        )

    def to_list(self) -> list[dict]:
        return [e.to_dict() for e in self.entries]


def discretize(color_map: ColorMap, bin_count: int) -> ColorLookupTable:
    """Partition the domain into ``bin_count`` equal bins colored at their centers.

    ``bin_count`` of 0 gives an empty table; negative counts clamp to 0
    with a warning.
    """
    n = coerce_bin_count(bin_count)
    if n == 0:
        return ColorLookupTable()

    start, end = color_map.start_range, color_map.end_range
    width = (end - start) / n
    entries = []
    for i in range(n):
        lower = start + i * width
        upper = end if i == n - 1 else start + (i + 1) * width
        center = (lower + upper) / 2.0
        entries.append(
            ColorLookupEntry(
                color=color_at(color_map, center),
                lower_bound=lower,
                center=center,
                upper_bound=upper,
            )
        )
    return ColorLookupTable(entries=tuple(entries))
