"""Tests for ColorPickerState."""

import pytest

from color_mapping_editor.core.color import RGB
from color_mapping_editor.editor.picker import ColorPickerState


@pytest.fixture
def picker():
    return ColorPickerState("#0000ff")


class TestPickerInit:
    def test_default_red(self):
        p = ColorPickerState()
        assert p.hex == "#ff0000"

    def test_invalid_initial_falls_back(self):
        assert ColorPickerState("nope").hex == "#ff0000"

    def test_gray_initial_uses_fallbacks(self):
        p = ColorPickerState("#808080")
        assert p.hsv_normalized.h == pytest.approx(0.5)
        assert p.backup_hue == 180.0


class TestPickerSetters:
    def test_set_hex(self, picker):
        picker.set_hex("#00ff00")
        assert picker.rgb == RGB(0, 255, 0)
        assert picker.hsv.h == pytest.approx(120.0)

    def test_set_hex_invalid_ignored(self, picker):
        picker.set_hex("bogus")
        assert picker.hex == "#0000ff"

    def test_set_rgb(self, picker):
        picker.set_rgb(255, 255, 0)
        assert picker.hex == "#ffff00"

    def test_set_rgb_normalized(self, picker):
        picker.set_rgb_normalized(1.0, 0.0, 1.0)
        assert picker.hex == "#ff00ff"
        assert picker.rgb_normalized == (1.0, 0.0, 1.0)

    def test_set_hsv(self, picker):
        picker.set_hsv(120, 100, 100)
        assert picker.hex == "#00ff00"
        assert picker.hsv.s == pytest.approx(100.0)

    def test_set_hsv_normalized(self, picker):
        picker.set_hsv_normalized(0.5, 1.0, 1.0)
        assert picker.hex == "#00ffff"

    def test_set_hue(self, picker):
        picker.set_hue(0)
        assert picker.hex == "#ff0000"

    def test_set_saturation_value(self, picker):
        picker.set_saturation_value(0.0, 1.0)
        assert picker.hex == "#ffffff"


class TestPickerPinning:
    def test_hue_survives_black(self, picker):
        picker.set_saturation_value(1.0, 0.0)
        assert picker.hex == "#000000"
        assert picker.hsv.h == pytest.approx(240.0)
        picker.set_saturation_value(1.0, 1.0)
        assert picker.hex == "#0000ff"

    def test_hue_survives_gray(self, picker):
        picker.set_saturation_value(0.0, 0.5)
        assert picker.hsv.h == pytest.approx(240.0)
        picker.set_saturation_value(1.0, 1.0)
        assert picker.hex == "#0000ff"

    def test_black_hex_keeps_backups(self, picker):
        picker.set_hex("#000000")
        assert picker.hsv.h == pytest.approx(240.0)
        assert picker.hsv.s == pytest.approx(100.0)
        assert picker.backup_hue == pytest.approx(240.0)

    def test_chromatic_hex_updates_backups(self, picker):
        picker.set_hex("#00ff00")
        picker.set_hex("#808080")
        assert picker.hsv.h == pytest.approx(120.0)
        assert picker.backup_hue == pytest.approx(120.0)


class TestPickerSubscribe:
    def test_subscribe(self, picker):
        seen = []
        handle = picker.subscribe(seen.append)
        picker.set_hex("#ff0000")
        picker.unsubscribe(handle)
        picker.set_hex("#00ff00")
        assert [c.hex for c in seen] == ["#ff0000"]

    def test_no_event_when_unchanged(self, picker):
        seen = []
        picker.subscribe(seen.append)
        picker.set_hex("#0000FF")
        assert seen == []

    def test_repr(self, picker):
        assert "#0000ff" in repr(picker)
