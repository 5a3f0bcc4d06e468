"""Shared test fixtures for color-mapping-editor."""

import pytest

from color_mapping_editor.core.colormap import (
    ColorMap,
    ControlPoint,
    InterpolationMethod,
    color_map_from_serializable,
)
from color_mapping_editor.core.color import color_from_input


def _cm(stops, method="RGB", start=0.0, end=1.0):
    return color_map_from_serializable({
        "controlPoints": [{"position": p, "color": c} for p, c in stops],
        "interpolationMethod": method,
        "startRange": start,
        "endRange": end,
    })


@pytest.fixture
def blue_red_map():
    """Two-stop blue → red map blended in RGB over [0, 1]."""
    return _cm([(0.0, "#0000ff"), (1.0, "#ff0000")])


@pytest.fixture
def three_stop_map():
    """Green → yellow → red over [0, 1]."""
    return _cm([(0.0, "#00ff00"), (0.5, "#ffff00"), (1.0, "#ff0000")])


@pytest.fixture
def four_stop_map():
    """Four distinct stops at 0, 0.3, 0.6, 1."""
    return _cm([
        (0.0, "#000000"),
        (0.3, "#ff0000"),
        (0.6, "#00ff00"),
        (1.0, "#ffffff"),
    ])


@pytest.fixture
def ranged_map():
    """Blue → red over the domain [0, 100]."""
    return _cm([(0.0, "#0000ff"), (100.0, "#ff0000")], start=0.0, end=100.0)


@pytest.fixture
def tied_map():
    """Two points tied at 0.5 with different colors."""
    return ColorMap(
        control_points=(
            ControlPoint(color_from_input("#000000"), 0.0),
            ControlPoint(color_from_input("#ff0000"), 0.5),
            ControlPoint(color_from_input("#0000ff"), 0.5),
            ControlPoint(color_from_input("#ffffff"), 1.0),
        ),
        interpolation_method=InterpolationMethod.RGB,
    )


@pytest.fixture
def make_map():
    """Factory: ``make_map([(position, color), ...], method, start, end)``."""
    return _cm
