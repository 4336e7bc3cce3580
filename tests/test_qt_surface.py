"""Tests for the QPainter backend (offscreen)."""

from __future__ import annotations

import pytest

from rpb.core.style import StyleParameters
from rpb.render.qt_surface import qcolor_from_hex, render_to_image, save_png
from rpb.utils.errors import RpbIOError, RpbValidationError


def rgba(img, x, y):
    c = img.pixelColor(x, y)
    return (c.red(), c.green(), c.blue(), c.alpha())


class TestColors:
    def test_alpha_is_last(self):
        c = qcolor_from_hex("#ff000080")
        assert (c.red(), c.green(), c.blue(), c.alpha()) == (255, 0, 0, 128)

    def test_short_forms(self):
        c = qcolor_from_hex("#abc")
        assert (c.red(), c.green(), c.blue(), c.alpha()) == (0xAA, 0xBB, 0xCC, 255)
        c = qcolor_from_hex("#abc8")
        assert c.alpha() == 0x88

    def test_named_color(self):
        assert qcolor_from_hex("white").red() == 255

    @pytest.mark.parametrize("bad", ["#zzz", "notacolor", ""])
    def test_invalid(self, bad):
        with pytest.raises(RpbValidationError):
            qcolor_from_hex(bad)


class TestRenderToImage:
    def test_bar_and_background_pixels(self, qapp):
        style = StyleParameters(value=0.5, background_color="#0000ff", color="#00ff00")
        img = render_to_image(100, 20, style)
        assert (img.width(), img.height()) == (100, 20)
        assert rgba(img, 25, 10) == (0, 255, 0, 255)
        assert rgba(img, 75, 10) == (0, 0, 255, 255)

    def test_margins_leave_transparent_frame(self, qapp):
        style = StyleParameters(value=1, margins=5, background_color="#0000ff", color="#00ff00")
        img = render_to_image(100, 20, style)
        assert rgba(img, 2, 2)[3] == 0
        assert rgba(img, 50, 10) == (0, 255, 0, 255)

    def test_border_color_is_stroked(self, qapp):
        style = StyleParameters(
            value=0, border_width=4, border_color="#ff0000", background_color="#0000ff"
        )
        img = render_to_image(100, 20, style, antialias=False)
        assert rgba(img, 1, 10) == (255, 0, 0, 255)
        assert rgba(img, 50, 10) == (0, 0, 255, 255)

    def test_scale(self, qapp):
        img = render_to_image(50, 10, StyleParameters(value=1), scale=2)
        assert (img.width(), img.height()) == (100, 20)

    def test_invalid_color_propagates(self, qapp):
        with pytest.raises(RpbValidationError):
            render_to_image(50, 10, StyleParameters(value=1, color="nope"))

    def test_save_png(self, qapp, tmp_path):
        img = render_to_image(40, 8, StyleParameters(value=0.5))
        out = save_png(img, tmp_path / "sub" / "bar.png")
        assert out.is_file()
        assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_save_png_failure(self, qapp, tmp_path):
        img = render_to_image(40, 8, StyleParameters(value=0.5))
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(RpbIOError):
            save_png(img, blocker / "bar.png")
