"""Display utilities for the editor ruler: shared exponents and tick labels."""

from __future__ import annotations

import math


def common_exponent(
    start: float,
    end: float,
    zero_exponent_range: tuple[int, int] = (-2, 2),
) -> int:
    """Power of ten to factor out of ruler labels for [start, end].

    Returns 0 when the magnitude falls inside ``zero_exponent_range``, so
    everyday ranges are labeled without a multiplier.

    Examples::

        common_exponent(0, 1)       # -> 0
        common_exponent(0, 25000)   # -> 4
        common_exponent(0, 0.0005)  # -> -4
    """
    max_abs = max(abs(start), abs(end))
    if max_abs == 0:
        return 0
    exponent = math.floor(math.log10(max_abs))
    lo, hi = zero_exponent_range
    if lo <= exponent <= hi:
        return 0
    return exponent


def format_smart(value: float) -> str:
    """Label a value with as many decimals as its magnitude needs.

    Examples::

        format_smart(0)       # -> "0"
        format_smart(0.5)     # -> "0.5"
        format_smart(3.0)     # -> "3.0"
        format_smart(250.0)   # -> "250"
        format_smart(0.0042)  # -> "0.004"
    """
    if value == 0:
        return "0"
    exponent = common_exponent(value, value, (0, 0))
    if exponent >= 1:
        return f"{value:.0f}"
    if exponent == 0:
        return f"{value:.1f}"
    return f"{value:.{-exponent}f}"


def ruler_ticks(start: float, end: float, steps: int = 5) -> tuple[list[dict], int]:
    """Evenly spaced ruler ticks over [start, end].

    Returns ``(ticks, exponent)``; each tick is
    ``{"fraction": f, "value": v, "label": str}`` where the label shows
    ``v / 10**exponent``.
    """
    exponent = common_exponent(start, end)
    factor = 10.0 ** exponent
    steps = max(1, int(steps))
    if steps == 1:
        return [{"fraction": 0.0, "value": start, "label": format_smart(start / factor)}], exponent
    step_size = (end - start) / (steps - 1)
    ticks = []
    for i in range(steps):
        value = start + step_size * i
        ticks.append({
            "fraction": i / (steps - 1),
            "value": value,
            "label": format_smart(value / factor),
        })
    return ticks, exponent
