"""Central place for color-mapping-editor default settings."""

# Color map domain
DEFAULT_START_RANGE: float = 0.0
DEFAULT_END_RANGE: float = 1.0
DEFAULT_INTERPOLATION: str = "LAB"

DEFAULT_COLOR_MAP: dict = {
    "controlPoints": [
        {"position": 0.0, "color": "green"},
        {"position": 0.5, "color": "yellow"},
        {"position": 1.0, "color": "red"},
    ],
    "interpolationMethod": DEFAULT_INTERPOLATION,
    "startRange": DEFAULT_START_RANGE,
    "endRange": DEFAULT_END_RANGE,
}

# Discretization
DEFAULT_BINS: int = 7
DEFAULT_DISCRETE: bool = False
LUT_SIZE: int = 256  # entries in a ColorScale RGBA table
DEFAULT_GRADIENT_SAMPLES: int = 64  # stops in a sampled CSS gradient

# Interaction
DRAG_THROTTLE_SECONDS: float = 0.016  # ~one move per frame at 60 Hz

# Editor presentation (consumed by the widget adapter)
CONTROL_POINT_SIZE: int = 7
DEFAULT_WIDTH: int = 500
DEFAULT_STRIP_HEIGHT: int = 50
RULER_STEPS: int = 5

# Color picker
DEFAULT_PICKER_COLOR: str = "#ff0000"
PICKER_FALLBACK_HUE: float = 180.0
PICKER_FALLBACK_SATURATION: float = 1.0
