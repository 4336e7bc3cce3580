# File: rpb/core/shapes.py
# Project: RusticProgressBar (RPB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Shapes cerradas (enum + tabla de dispatch) para fondo y barra.
# Notes:
#   - Un tracer sólo construye el path actual del surface; nunca rellena ni trazea.
#   - Tamaños <= 0 se trazan igual (path degenerado), nunca levantan error.
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Dict, Tuple

from svgelements import Arc, Close, CubicBezier, Line, Move, QuadraticBezier
from svgelements import Path as SvgPath

from rpb.utils.errors import RpbValidationError

# Aproximación de un cuarto de círculo con una cúbica.
_KAPPA = 0.5522847498


class ShapeKind(str, Enum):
    """Tipos de shape soportados.

    - rectangle: caja completa (default)
    - rounded_rect: esquinas redondeadas con `radius`
    - rounded_bar: extremos semicirculares (radius = h/2)
    - partially_rounded_rect: como rounded_rect pero sólo en `corners`
    - octogon: esquinas cortadas a 45°
    - losange: rombo inscripto en la caja
    - ellipse: elipse inscripta en la caja
    - svg_path: path SVG (`path_d`) estirado a la caja
    """

    RECTANGLE = "rectangle"
    ROUNDED_RECT = "rounded_rect"
    ROUNDED_BAR = "rounded_bar"
    PARTIALLY_ROUNDED_RECT = "partially_rounded_rect"
    OCTOGON = "octogon"
    LOSANGE = "losange"
    ELLIPSE = "ellipse"
    SVG_PATH = "svg_path"


# (top_left, top_right, bottom_right, bottom_left)
Corners = Tuple[bool, bool, bool, bool]
ALL_CORNERS: Corners = (True, True, True, True)


@dataclass(frozen=True)
class ShapeSpec:
    kind: ShapeKind = ShapeKind.RECTANGLE
    radius: float | None = None
    path_d: str | None = None
    corners: Corners = ALL_CORNERS

    def __post_init__(self) -> None:
        if self.kind == ShapeKind.SVG_PATH and not self.path_d:
            raise RpbValidationError("shape svg_path requiere path_d")

    @staticmethod
    def coerce(v: Any) -> "ShapeSpec":
        """Acepta None, nombre de kind, ShapeKind, dict (JSON) o ShapeSpec."""
        if isinstance(v, ShapeSpec):
            return v
        if v is None:
            return ShapeSpec()
        if isinstance(v, dict):
            radius = v.get("radius")
            corners = v.get("corners")
            if corners is not None and (not isinstance(corners, (list, tuple)) or len(corners) != 4):
                raise RpbValidationError(f"corners: se esperaban 4 valores, llegó {corners!r}")
            try:
                return ShapeSpec(
                    kind=coerce_shape_kind(v.get("kind")),
                    radius=float(radius) if radius is not None else None,
                    path_d=v.get("path_d"),
                    corners=tuple(bool(c) for c in corners) if corners else ALL_CORNERS,
                )
            except (TypeError, ValueError) as e:
                raise RpbValidationError(f"shape inválida: {v!r}") from e
        return ShapeSpec(kind=coerce_shape_kind(v))


def coerce_shape_kind(v: object) -> ShapeKind:
    if isinstance(v, ShapeKind):
        return v
    s = str(v or "").strip().lower()
    for k in ShapeKind:
        if k.value == s:
            return k
    raise RpbValidationError(f"shape desconocida: {v!r}")


# ------------------------------
# Tracers
# ------------------------------

def _rectangle(surface, width: float, height: float, spec: ShapeSpec) -> None:
    surface.rectangle(0.0, 0.0, width, height)


def _corner_radius(width: float, height: float, radius: float | None, default: float) -> float:
    r = default if radius is None else float(radius)
    return max(0.0, min(r, width / 2.0, height / 2.0))


def _rounded(surface, width: float, height: float, r: float, corners: Corners) -> None:
    tl, tr, br, bl = corners
    k = r * _KAPPA

    surface.move_to(r if tl else 0.0, 0.0)

    if tr:
        surface.line_to(width - r, 0.0)
        surface.curve_to(width - r + k, 0.0, width, r - k, width, r)
    else:
        surface.line_to(width, 0.0)

    if br:
        surface.line_to(width, height - r)
        surface.curve_to(width, height - r + k, width - r + k, height, width - r, height)
    else:
        surface.line_to(width, height)

    if bl:
        surface.line_to(r, height)
        surface.curve_to(r - k, height, 0.0, height - r + k, 0.0, height - r)
    else:
        surface.line_to(0.0, height)

    if tl:
        surface.line_to(0.0, r)
        surface.curve_to(0.0, r - k, r - k, 0.0, r, 0.0)
    else:
        surface.line_to(0.0, 0.0)

    surface.close_path()


def _rounded_rect(surface, width: float, height: float, spec: ShapeSpec) -> None:
    r = _corner_radius(width, height, spec.radius, 10.0)
    _rounded(surface, width, height, r, ALL_CORNERS)


def _rounded_bar(surface, width: float, height: float, spec: ShapeSpec) -> None:
    r = _corner_radius(width, height, height / 2.0, 0.0)
    _rounded(surface, width, height, r, ALL_CORNERS)


def _partially_rounded_rect(surface, width: float, height: float, spec: ShapeSpec) -> None:
    r = _corner_radius(width, height, spec.radius, 10.0)
    _rounded(surface, width, height, r, spec.corners)


def _octogon(surface, width: float, height: float, spec: ShapeSpec) -> None:
    default = min(10.0, min(width, height) / 4.0)
    c = _corner_radius(width, height, spec.radius, default)
    surface.move_to(c, 0.0)
    surface.line_to(width - c, 0.0)
    surface.line_to(width, c)
    surface.line_to(width, height - c)
    surface.line_to(width - c, height)
    surface.line_to(c, height)
    surface.line_to(0.0, height - c)
    surface.line_to(0.0, c)
    surface.close_path()


def _losange(surface, width: float, height: float, spec: ShapeSpec) -> None:
    surface.move_to(width / 2.0, 0.0)
    surface.line_to(width, height / 2.0)
    surface.line_to(width / 2.0, height)
    surface.line_to(0.0, height / 2.0)
    surface.close_path()


def _ellipse(surface, width: float, height: float, spec: ShapeSpec) -> None:
    rx, ry = width / 2.0, height / 2.0
    kx, ky = rx * _KAPPA, ry * _KAPPA
    surface.move_to(width, ry)
    surface.curve_to(width, ry + ky, rx + kx, height, rx, height)
    surface.curve_to(rx - kx, height, 0.0, ry + ky, 0.0, ry)
    surface.curve_to(0.0, ry - ky, rx - kx, 0.0, rx, 0.0)
    surface.curve_to(rx + kx, 0.0, width, ry - ky, width, ry)
    surface.close_path()


@lru_cache(maxsize=64)
def _parse_svg_path(path_d: str) -> Tuple[tuple, Tuple[float, float, float, float] | None]:
    """Parsea `d` con svgelements. Devuelve (segmentos, bbox xyxy)."""
    try:
        sp = SvgPath(path_d)
        sp.approximate_arcs_with_cubics()
    except ValueError as e:
        raise RpbValidationError(f"path SVG inválido: {e}") from e
    return tuple(sp), sp.bbox()


def _svg_path(surface, width: float, height: float, spec: ShapeSpec) -> None:
    if not spec.path_d:
        raise RpbValidationError("shape svg_path requiere path_d")

    segments, bbox = _parse_svg_path(spec.path_d)
    if bbox is None:
        return

    x0, y0, x1, y1 = bbox
    sx = width / (x1 - x0) if x1 > x0 else 0.0
    sy = height / (y1 - y0) if y1 > y0 else 0.0

    def map_pt(pt) -> Tuple[float, float]:
        return (float(pt.x) - x0) * sx, (float(pt.y) - y0) * sy

    current_set = False
    for seg in segments:
        if isinstance(seg, Move):
            surface.move_to(*map_pt(seg.end))
            current_set = True
            continue

        # si no hubo move previo, anclamos en el start
        if not current_set and seg.start is not None:
            surface.move_to(*map_pt(seg.start))
            current_set = True

        if isinstance(seg, Close):
            surface.close_path()
        elif isinstance(seg, Line):
            surface.line_to(*map_pt(seg.end))
        elif isinstance(seg, CubicBezier):
            surface.curve_to(*map_pt(seg.control1), *map_pt(seg.control2), *map_pt(seg.end))
        elif isinstance(seg, QuadraticBezier):
            # Elevación de grado: cuadrática -> cúbica.
            p0x, p0y = map_pt(seg.start)
            qx, qy = map_pt(seg.control)
            ex, ey = map_pt(seg.end)
            surface.curve_to(
                p0x + 2.0 / 3.0 * (qx - p0x), p0y + 2.0 / 3.0 * (qy - p0y),
                ex + 2.0 / 3.0 * (qx - ex), ey + 2.0 / 3.0 * (qy - ey),
                ex, ey,
            )
        elif isinstance(seg, Arc):
            # Arcs que no se aproximaron: sampleo.
            steps = 12
            for i in range(1, steps + 1):
                surface.line_to(*map_pt(seg.point(i / steps)))

    surface.close_path()


ShapeTracer = Callable[[Any, float, float, ShapeSpec], None]

SHAPE_TRACERS: Dict[ShapeKind, ShapeTracer] = {
    ShapeKind.RECTANGLE: _rectangle,
    ShapeKind.ROUNDED_RECT: _rounded_rect,
    ShapeKind.ROUNDED_BAR: _rounded_bar,
    ShapeKind.PARTIALLY_ROUNDED_RECT: _partially_rounded_rect,
    ShapeKind.OCTOGON: _octogon,
    ShapeKind.LOSANGE: _losange,
    ShapeKind.ELLIPSE: _ellipse,
    ShapeKind.SVG_PATH: _svg_path,
}


def trace_shape(surface, spec: ShapeSpec, width: float, height: float) -> None:
    """Traza `spec` con caja (width, height) en el path actual de `surface`."""
    SHAPE_TRACERS[spec.kind](surface, float(width), float(height), spec)
