"""Tests for shape tracers."""

from __future__ import annotations

import pytest

from rpb.core.shapes import SHAPE_TRACERS, ShapeKind, ShapeSpec, coerce_shape_kind, trace_shape
from rpb.render.surface import DrawOp, RecordingSurface
from rpb.utils.errors import RpbValidationError


def traced(spec: ShapeSpec, w: float, h: float) -> RecordingSurface:
    s = RecordingSurface()
    trace_shape(s, spec, w, h)
    return s


class TestDispatch:
    def test_every_kind_has_a_tracer(self):
        assert set(SHAPE_TRACERS) == set(ShapeKind)

    def test_coerce_names(self):
        assert coerce_shape_kind(" Rounded_Bar ") is ShapeKind.ROUNDED_BAR
        assert ShapeSpec.coerce(None) == ShapeSpec()
        assert ShapeSpec.coerce(ShapeKind.ELLIPSE).kind is ShapeKind.ELLIPSE

    def test_unknown_shape(self):
        with pytest.raises(RpbValidationError):
            coerce_shape_kind("blob")

    def test_corners_must_have_four_values(self):
        with pytest.raises(RpbValidationError):
            ShapeSpec.coerce({"kind": "partially_rounded_rect", "corners": [True, False]})

    @pytest.mark.parametrize("corners", [5, "tftf", {"a": 1}, True])
    def test_corners_must_be_a_list(self, corners):
        with pytest.raises(RpbValidationError):
            ShapeSpec.coerce({"kind": "partially_rounded_rect", "corners": corners})

    @pytest.mark.parametrize("kind", [k for k in ShapeKind if k is not ShapeKind.SVG_PATH])
    def test_tracers_never_paint(self, kind):
        s = traced(ShapeSpec(kind=kind), 40, 10)
        assert s.ops
        assert not {"fill", "fill_preserve", "stroke", "clip", "set_source"} & set(s.names())

    @pytest.mark.parametrize("kind", [k for k in ShapeKind if k is not ShapeKind.SVG_PATH])
    def test_degenerate_sizes_do_not_raise(self, kind):
        traced(ShapeSpec(kind=kind), 0, 0)
        traced(ShapeSpec(kind=kind), 0, 12)


class TestShapes:
    def test_rectangle(self):
        assert traced(ShapeSpec(), 30, 8).ops == [DrawOp("rectangle", (0.0, 0.0, 30.0, 8.0))]

    def test_rounded_rect_radius_limited_by_box(self):
        s = traced(ShapeSpec(kind=ShapeKind.ROUNDED_RECT, radius=50), 100, 20)
        assert s.ops[0] == DrawOp("move_to", (10.0, 0.0))
        assert s.names().count("curve_to") == 4
        assert s.names()[-1] == "close_path"

    def test_rounded_bar_uses_half_height(self):
        s = traced(ShapeSpec(kind=ShapeKind.ROUNDED_BAR), 100, 16)
        assert s.ops[0] == DrawOp("move_to", (8.0, 0.0))

    def test_partially_rounded_rect(self):
        spec = ShapeSpec(kind=ShapeKind.PARTIALLY_ROUNDED_RECT, radius=5, corners=(False, True, True, False))
        s = traced(spec, 50, 20)
        assert s.ops[0] == DrawOp("move_to", (0.0, 0.0))
        assert s.names().count("curve_to") == 2

    def test_losange(self):
        s = traced(ShapeSpec(kind=ShapeKind.LOSANGE), 20, 10)
        assert s.ops == [
            DrawOp("move_to", (10.0, 0.0)),
            DrawOp("line_to", (20.0, 5.0)),
            DrawOp("line_to", (10.0, 10.0)),
            DrawOp("line_to", (0.0, 5.0)),
            DrawOp("close_path"),
        ]

    def test_octogon_default_corner(self):
        s = traced(ShapeSpec(kind=ShapeKind.OCTOGON), 100, 20)
        # min(10, min(w, h) / 4) = 5
        assert s.ops[0] == DrawOp("move_to", (5.0, 0.0))
        assert s.names().count("line_to") == 7

    def test_ellipse_is_four_curves(self):
        s = traced(ShapeSpec(kind=ShapeKind.ELLIPSE), 40, 20)
        assert s.ops[0] == DrawOp("move_to", (40.0, 10.0))
        assert s.names().count("curve_to") == 4

    def test_svg_path_is_stretched_to_box(self):
        s = traced(ShapeSpec(kind=ShapeKind.SVG_PATH, path_d="M 0 0 L 10 0 L 10 10 Z"), 20, 40)
        assert s.ops[0] == DrawOp("move_to", (0.0, 0.0))
        assert DrawOp("line_to", (20.0, 0.0)) in s.ops
        assert DrawOp("line_to", (20.0, 40.0)) in s.ops
        assert "close_path" in s.names()

    def test_svg_path_requires_data(self):
        with pytest.raises(RpbValidationError):
            ShapeSpec(kind=ShapeKind.SVG_PATH)
        with pytest.raises(RpbValidationError):
            ShapeSpec.coerce("svg_path")
