"""ColorMapEditorWidget: anywidget bridge for Jupyter rendering.

Requires the [jupyter] optional extra: pip install color-mapping-editor[jupyter]
"""

from __future__ import annotations

import logging
import pathlib
from collections.abc import Mapping

import anywidget
import traitlets

from ..core.colormap import ColorMap
from ..display_utils import ruler_ticks
from ..defaults import (
    CONTROL_POINT_SIZE,
    DEFAULT_STRIP_HEIGHT,
    DEFAULT_WIDTH,
    RULER_STEPS,
)
from ..editor.session import ColorMapEditorSession
from ..core.validation import INTERPOLATION_METHODS
from .serializers import (
    css_gradient,
    parse_command,
    serialize_color_map,
    serialize_config,
    serialize_lookup_table,
)

logger = logging.getLogger(__name__)

_JS_DIR = pathlib.Path(__file__).parent.parent / "js"


class ColorMapEditorWidget(anywidget.AnyWidget):
    """Jupyter widget for editing a color map.

    The widget only renders and forwards gestures; every edit runs through
    the wrapped :class:`ColorMapEditorSession`.

    Communicates with JS via traitlets:
    - color_map_json: color map + per-point render hints
    - gradient_css: CSS linear-gradient for the strip
    - bins_json: discrete bins (empty list when continuous)
    - config_json: sizes, ruler ticks, editable controls
    - command_json: JS→Python edit commands
    """

    _esm = traitlets.Unicode("").tag(sync=True)
    _css = traitlets.Unicode("").tag(sync=True)

    @staticmethod
    def _build_css() -> str:
        """Build CSS styles for the widget."""
        return """
.cme-root {
  position: relative;
  display: inline-flex;
  flex-direction: column;
  gap: 6px;
  font-family: system-ui, -apple-system, sans-serif;
  font-size: 12px;
  user-select: none;
}
.cme-strip {
  position: relative;
  border: 1px solid rgba(0,0,0,0.15);
  border-radius: 4px;
  cursor: copy;
}
.cme-point {
  position: absolute;
  top: 50%;
  border-radius: 50%;
  transform: translate(-50%, -50%);
  cursor: grab;
  box-sizing: border-box;
}
.cme-point.cme-light { border: 2px solid #000; }
.cme-point.cme-dark { border: 2px solid #fff; }
.cme-point-label {
  position: absolute;
  bottom: 1px;
  transform: translateX(-50%);
  font-size: 10px;
  pointer-events: none;
}
.cme-ruler {
  position: relative;
  height: 24px;
  color: #475569;
}
.cme-tick {
  position: absolute;
  top: 0;
  transform: translateX(-50%);
  text-align: center;
}
.cme-settings {
  display: flex;
  flex-wrap: wrap;
  justify-content: space-between;
  align-items: center;
  gap: 10px;
}
.cme-settings input[type=number] { width: 50px; }
"""

    # Python → JS data
    color_map_json = traitlets.Unicode("{}").tag(sync=True)
    gradient_css = traitlets.Unicode("").tag(sync=True)
    bins_json = traitlets.Unicode("[]").tag(sync=True)
    config_json = traitlets.Unicode("{}").tag(sync=True)

    # JS → Python edits
    command_json = traitlets.Unicode("{}").tag(sync=True)

    def __init__(
        self,
        color_map: ColorMap | Mapping | None = None,
        session: ColorMapEditorSession | None = None,
        show_stop_numbers: bool = False,
        control_point_size: int = CONTROL_POINT_SIZE,
        width: int = DEFAULT_WIDTH,
        strip_height: int = DEFAULT_STRIP_HEIGHT,
        show_ruler: bool = True,
        interpolation_methods_editable: bool = True,
        bin_selector_editable: bool = True,
        **kwargs,
    ) -> None:
        if session is None:
            session = ColorMapEditorSession(color_map)
        elif color_map is not None:
            session.load(color_map)
        self._session = session
        self._view_options = {
            "width": width,
            "strip_height": strip_height,
            "control_point_size": control_point_size,
            "show_stop_numbers": show_stop_numbers,
            "show_ruler": show_ruler,
            "interpolation_methods_editable": interpolation_methods_editable,
            "bin_selector_editable": bin_selector_editable,
        }

        super().__init__(
            _esm=self._build_esm(),
            _css=self._build_css(),
            **self._state_traits(),
            **kwargs,
        )

        self._handle = session.subscribe(self._push_state)
        self.observe(self._on_command, names=["command_json"])
        self._handlers = {
            "insert": self._cmd_insert,
            "remove": lambda cmd: self._session.remove(int(cmd["index"])),
            "drag_start": lambda cmd: self._session.begin_drag(int(cmd["index"])),
            "drag_move": self._cmd_drag_move,
            "drag_end": lambda cmd: self._session.end_drag(),
            "drag_cancel": lambda cmd: self._session.cancel_drag(),
            "set_color": lambda cmd: self._session.set_color(int(cmd["index"]), cmd["color"]),
            "set_method": lambda cmd: self._session.set_interpolation_method(cmd["method"]),
            "set_bins": lambda cmd: self._session.set_bins(cmd["bins"]),
            "set_discrete": lambda cmd: self._session.set_discrete(bool(cmd["discrete"])),
        }

    def _build_esm(self) -> str:
        """Read the JS module that renders the editor."""
        return (_JS_DIR / "editor.js").read_text(encoding="utf-8")

    def _state_traits(self) -> dict:
        session = self._session
        color_map = session.color_map
        table = session.lookup_table()
        opts = self._view_options
        ticks, exponent = ([], 0)
        if opts["show_ruler"]:
            ticks, exponent = ruler_ticks(color_map.start_range, color_map.end_range, RULER_STEPS)
        return {
            "color_map_json": serialize_color_map(color_map),
            "gradient_css": css_gradient(color_map, table=table),
            "bins_json": serialize_lookup_table(table),
            "config_json": serialize_config(
                width=opts["width"],
                strip_height=opts["strip_height"],
                control_point_size=opts["control_point_size"],
                show_stop_numbers=opts["show_stop_numbers"],
                showRuler=opts["show_ruler"],
                rulerTicks=ticks,
                rulerExponent=exponent,
                interpolationMethods=list(INTERPOLATION_METHODS),
                interpolationMethodsEditable=opts["interpolation_methods_editable"],
                binSelectorEditable=opts["bin_selector_editable"],
                discrete=session.discrete,
                bins=session.bins,
            ),
        }

    def _push_state(self, color_map: ColorMap) -> None:
        """Send the session state to JS in a single comm message."""
        with self.hold_sync():
            for name, value in self._state_traits().items():
                setattr(self, name, value)

    # --- JS → Python ---

    def _cmd_insert(self, cmd: dict) -> None:
        color_map = self._session.color_map
        self._session.insert(color_map.denormalize(float(cmd["fraction"])))

    def _cmd_drag_move(self, cmd: dict) -> None:
        color_map = self._session.color_map
        timestamp = cmd.get("timestamp")
        self._session.drag_to(
            color_map.denormalize(float(cmd["fraction"])),
            timestamp=None if timestamp is None else float(timestamp) / 1000.0,
        )

    def _on_command(self, change: dict) -> None:
        """Handle edit commands from JS."""
        cmd = parse_command(change["new"])
        if cmd is None:
            return
        handler = self._handlers.get(cmd["type"])
        if handler is None:
            logger.warning("Unknown editor command %r", cmd["type"])
            return
        try:
            handler(cmd)
        except (KeyError, TypeError, ValueError):
            logger.warning("Malformed %r command: %r", cmd["type"], cmd, exc_info=True)

    # --- Python API ---

    @property
    def session(self) -> ColorMapEditorSession:
        return self._session

    @property
    def color_map(self) -> ColorMap:
        return self._session.color_map

    def on_change(self, callback):
        """Register ``fn(color_map)``; returns a handle for ``session.unsubscribe``."""
        return self._session.subscribe(callback)

    def close(self) -> None:
        self._session.unsubscribe(self._handle)
        super().close()
