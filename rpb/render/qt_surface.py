# File: rpb/render/qt_surface.py
# Project: RusticProgressBar (RPB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Backend Qt (QPainter + QPainterPath) del DrawingSurface, y render -> QImage/PNG.
# Notes:
#   - Colores "#rrggbbaa" con alpha AL FINAL (Qt usa #aarrggbb: no pasar directo a QColor).
#   - El path se interpreta con la transformación vigente al momento de fill/stroke/clip.
from __future__ import annotations

import math
from pathlib import Path

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QImage, QPainter, QPainterPath, QPen

from rpb.core.style import StyleParameters, Theme
from rpb.render.progressbar import render
from rpb.render.surface import DrawingSurface
from rpb.utils.errors import RpbIOError, RpbValidationError
from rpb.utils.log import get_logger

log = get_logger(__name__)


def qcolor_from_hex(color: str) -> QColor:
    """Convierte "#rgb", "#rgba", "#rrggbb", "#rrggbbaa" o un nombre Qt a QColor."""
    s = str(color or "").strip()
    if s.startswith("#") and len(s) in (4, 5, 7, 9):
        h = s[1:]
        if len(h) in (3, 4):
            h = "".join(c * 2 for c in h)
        try:
            r = int(h[0:2], 16)
            g = int(h[2:4], 16)
            b = int(h[4:6], 16)
            a = int(h[6:8], 16) if len(h) == 8 else 255
        except ValueError as e:
            raise RpbValidationError(f"color inválido: {color!r}") from e
        return QColor(r, g, b, a)

    c = QColor(s)
    if not c.isValid():
        raise RpbValidationError(f"color inválido: {color!r}")
    return c


class QtSurface(DrawingSurface):
    """DrawingSurface sobre un QPainter ya activo (el caller hace begin/end)."""

    def __init__(self, painter: QPainter, *, antialias: bool = True) -> None:
        self._painter = painter
        self._path = self._new_path()
        self._color = QColor(Qt.black)
        self._line_width = 1.0
        painter.setRenderHint(QPainter.Antialiasing, bool(antialias))

    @staticmethod
    def _new_path() -> QPainterPath:
        path = QPainterPath()
        # Winding como en cairo (QPainterPath usa OddEven por default).
        path.setFillRule(Qt.WindingFill)
        return path

    @property
    def painter(self) -> QPainter:
        return self._painter

    def set_line_width(self, width: float) -> None:
        self._line_width = float(width)

    def translate(self, dx: float, dy: float) -> None:
        self._painter.translate(float(dx), float(dy))

    def rectangle(self, x: float, y: float, width: float, height: float) -> None:
        self._path.addRect(QRectF(float(x), float(y), float(width), float(height)))

    def move_to(self, x: float, y: float) -> None:
        self._path.moveTo(float(x), float(y))

    def line_to(self, x: float, y: float) -> None:
        self._path.lineTo(float(x), float(y))

    def curve_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        self._path.cubicTo(float(x1), float(y1), float(x2), float(y2), float(x3), float(y3))

    def close_path(self) -> None:
        self._path.closeSubpath()

    def set_source(self, color: str) -> None:
        self._color = qcolor_from_hex(color)

    def fill_preserve(self) -> None:
        self._painter.fillPath(self._path, QBrush(self._color))

    def fill(self) -> None:
        self.fill_preserve()
        self._path = self._new_path()

    def stroke(self) -> None:
        pen = QPen(self._color)
        pen.setWidthF(self._line_width)
        pen.setJoinStyle(Qt.MiterJoin)
        self._painter.strokePath(self._path, pen)
        self._path = self._new_path()

    def clip(self) -> None:
        op = Qt.IntersectClip if self._painter.hasClipping() else Qt.ReplaceClip
        self._painter.setClipPath(self._path, op)
        self._path = self._new_path()


def render_to_image(
    width: float,
    height: float,
    style: StyleParameters | None = None,
    theme: Theme | None = None,
    *,
    scale: float = 1.0,
    antialias: bool = True,
) -> QImage:
    """Renderiza la barra en una QImage transparente de (width, height) * scale."""
    w_px = max(1, int(math.ceil(float(width) * scale)))
    h_px = max(1, int(math.ceil(float(height) * scale)))

    img = QImage(w_px, h_px, QImage.Format_ARGB32_Premultiplied)
    img.fill(Qt.transparent)

    p = QPainter(img)
    try:
        if scale != 1.0:
            p.scale(float(scale), float(scale))
        render(QtSurface(p, antialias=antialias), width, height, style, theme)
    finally:
        p.end()
    return img


def save_png(img: QImage, out_png: str | Path) -> Path:
    out = Path(out_png)
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise RpbIOError(f"No se pudo crear {out.parent}: {e}") from e
    if not img.save(str(out), "PNG"):
        raise RpbIOError(f"No se pudo guardar PNG: {out}")
    log.info("PNG guardado: %s (%sx%s)", out, img.width(), img.height())
    return out
