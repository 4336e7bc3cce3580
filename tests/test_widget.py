"""Tests for the Qt widget host (offscreen)."""

from __future__ import annotations

from rpb.core.style import StyleParameters
from rpb.ui.progressbar_widget import ProgressBarWidget


def test_ratio_signal_on_value_change(qapp):
    w = ProgressBarWidget(StyleParameters(max_value=4))
    got = []
    w.ratio_changed.connect(got.append)
    w.set_value(1)
    w.bar.set(color="#00ff00")
    assert got == [0.25]


def test_grab_paints_bar(qapp):
    w = ProgressBarWidget(StyleParameters(value=1, color="#00ff00", background_color="#0000ff"))
    w.resize(100, 20)
    img = w.grab().toImage()
    c = img.pixelColor(50, 10)
    assert (c.red(), c.green(), c.blue()) == (0, 255, 0)
