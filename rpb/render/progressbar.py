# File: rpb/render/progressbar.py
# Project: RusticProgressBar (RPB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Geometría + render de la barra de progreso contra un DrawingSurface.
# Notes:
#   - render() es una función pura de sus entradas: mismos args => mismas ops.
#   - Las traslaciones son relativas y acumulativas (orden importa).
#   - ProgressBar es sólo el "dueño" del estilo inmutable + notificación de cambios.
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Callable, List, Tuple

from rpb.core.shapes import trace_shape
from rpb.core.style import ResolvedStyle, StyleParameters, Theme, resolve_style
from rpb.core.version import DEFAULT_BAR_SIZE
from rpb.render.surface import DrawingSurface
from rpb.utils.errors import RpbValidationError
from rpb.utils.log import get_logger

log = get_logger(__name__)


def compute_ratio(value: float, max_value: float) -> float:
    """clamp(value, 0, max_value) / max_value, siempre en [0, 1].

    `max_value <= 0` (o no finito) rompe el contrato: RpbValidationError.
    """
    try:
        mx = float(max_value)
        v = float(value)
    except (TypeError, ValueError) as e:
        raise RpbValidationError(f"value/max_value no numéricos: {value!r}/{max_value!r}") from e
    if not math.isfinite(mx) or mx <= 0.0:
        raise RpbValidationError(f"max_value debe ser > 0 (llegó {max_value!r})")
    v = min(mx, max(0.0, v))
    return v / mx


def fit(width: float, height: float) -> Tuple[float, float]:
    """La barra ocupa exactamente la caja asignada (sin tamaño intrínseco)."""
    return width, height


@dataclass(frozen=True)
class BarLayout:
    """Regiones calculadas, en coordenadas absolutas de la caja (0,0)-(width,height).

    - background_*: caja donde se traza la shape de fondo (ya descontado el
      medio borde, el stroke queda centrado sobre el path).
    - bar_origin / drawn_*: caja de la barra tras paddings y borde de barra.
    - tick_offsets: x de cada tick, relativo a bar_origin.
    """

    ratio: float
    border_width: float
    bar_border_width: float
    clip: bool
    background_origin: Tuple[float, float]
    background_size: Tuple[float, float]
    bar_origin: Tuple[float, float]
    drawn_size: Tuple[float, float]
    bar_length: float
    tick_offsets: Tuple[float, ...]


def _as_extent(v, name: str) -> float:
    try:
        f = float(v)
    except (TypeError, ValueError) as e:
        raise RpbValidationError(f"{name} no numérico: {v!r}") from e
    if not math.isfinite(f):
        raise RpbValidationError(f"{name} debe ser finito (llegó {v!r})")
    return f


def _tick_offsets(r: ResolvedStyle, drawn_w: float, bar_length: float) -> Tuple[float, ...]:
    if not r.ticks:
        return ()
    step = r.ticks_size + r.ticks_gap
    if not math.isfinite(step) or step <= 0.0:
        raise RpbValidationError(f"ticks_size + ticks_gap debe ser > 0 (llegó {step!r})")
    if not math.isfinite(drawn_w):
        raise RpbValidationError(f"ancho de barra no finito: {drawn_w!r}")

    # De derecha a izquierda: offsets drawn_w, drawn_w - step, ... hasta 0 inclusive.
    count = int(drawn_w // step) + 1
    out: List[float] = []
    for i in range(count):
        offset = drawn_w - step * i
        if offset < 0.0:
            break
        if offset <= bar_length:
            out.append(offset)
    return tuple(out)


def _layout(width: float, height: float, r: ResolvedStyle) -> BarLayout:
    ratio = compute_ratio(r.value, r.max_value)
    width = _as_extent(width, "width")
    height = _as_extent(height, "height")

    bw = r.border_width
    m = r.margins
    p = r.paddings

    ox, oy = m.left, m.top
    bg_w = width - m.horizontal
    bg_h = height - m.vertical
    if bw > 0:
        bg_w -= bw
        bg_h -= bw
    bg_w = max(bg_w, 0.0)
    bg_h = max(bg_h, 0.0)
    background_origin = (ox + bw / 2.0, oy + bw / 2.0)

    if r.clip:
        drawn_w = bg_w + bw
        drawn_h = bg_h + bw
        if bw > 0:
            drawn_w -= 2.0 * bw
            drawn_h -= 2.0 * bw
        ox += bw
        oy += bw
    else:
        # Sin clip la barra se ubica sobre la caja completa (ignora margins).
        ox, oy = 0.0, 0.0
        drawn_w, drawn_h = width, height

    ox += p.left
    oy += p.top
    drawn_w = max(drawn_w - p.horizontal, 0.0)
    drawn_h = max(drawn_h - p.vertical, 0.0)

    bar_length = drawn_w * ratio

    bbw = r.bar_border_width
    drawn_w = max(drawn_w - bbw, 0.0)
    drawn_h = max(drawn_h - bbw, 0.0)
    ox += bbw / 2.0
    oy += bbw / 2.0

    return BarLayout(
        ratio=ratio,
        border_width=bw,
        bar_border_width=bbw,
        clip=r.clip,
        background_origin=background_origin,
        background_size=(bg_w, bg_h),
        bar_origin=(ox, oy),
        drawn_size=(drawn_w, drawn_h),
        bar_length=bar_length,
        tick_offsets=_tick_offsets(r, drawn_w, bar_length),
    )


def layout(width: float, height: float, style: StyleParameters | None = None, theme: Theme | None = None) -> BarLayout:
    """Calcula las regiones sin dibujar nada."""
    return _layout(width, height, resolve_style(style, theme))


def _translate(surface: DrawingSurface, dx: float, dy: float) -> None:
    if dx or dy:
        surface.translate(dx, dy)


def render(
    surface: DrawingSurface,
    width: float,
    height: float,
    style: StyleParameters | None = None,
    theme: Theme | None = None,
) -> BarLayout:
    """Dibuja la barra en `surface` sobre la caja (0,0)-(width,height).

    La validación (max_value, tamaño, ticks) ocurre antes de la primera llamada
    al surface. Los errores del surface se propagan sin recuperación. Devuelve
    el BarLayout usado para dibujar.
    """
    r = resolve_style(style, theme)
    lay = _layout(width, height, r)
    log.debug("render %sx%s ratio=%.4f layout=%s", width, height, lay.ratio, lay)

    bw = lay.border_width
    bbw = lay.bar_border_width
    m = r.margins
    bg_w, bg_h = lay.background_size
    drawn_w, drawn_h = lay.drawn_size

    surface.set_line_width(1.0)

    # Fondo (+ borde centrado sobre el path)
    _translate(surface, m.left, m.top)
    if bw > 0:
        _translate(surface, bw / 2.0, bw / 2.0)
        surface.set_line_width(bw)

    trace_shape(surface, r.shape, bg_w, bg_h)
    surface.set_source(r.background_color)
    if bw > 0:
        surface.fill_preserve()
        surface.set_source(r.border_color)
        surface.stroke()
    else:
        surface.fill()

    _translate(surface, -bw / 2.0, -bw / 2.0)

    if r.clip:
        trace_shape(surface, r.shape, bg_w, bg_h)
        surface.clip()
        _translate(surface, bw, bw)
    else:
        _translate(surface, -m.left, -m.top)

    _translate(surface, r.paddings.left, r.paddings.top)
    _translate(surface, bbw / 2.0, bbw / 2.0)

    # Barra
    trace_shape(surface, r.bar_shape, lay.bar_length, drawn_h)
    surface.set_source(r.color)
    if bbw > 0:
        surface.fill_preserve()
        surface.set_source(r.bar_border_color)
        surface.set_line_width(bbw)
        surface.stroke()
    else:
        surface.fill()

    if r.ticks:
        for offset in lay.tick_offsets:
            surface.rectangle(offset, bw, r.ticks_gap, drawn_h)
        surface.set_source(r.ticks_color)
        surface.fill()

    return lay


# ------------------------------
# Dueño del estilo + notificación
# ------------------------------

ChangeListener = Callable[["ProgressBar", Tuple[str, ...]], None]


class ProgressBar:
    """Barra con estilo inmutable; cada cambio notifica a los listeners.

    Los listeners reciben (bar, campos_cambiados). Un cambio que deja el
    estilo igual no notifica.
    """

    def __init__(
        self,
        style: StyleParameters | None = None,
        theme: Theme | None = None,
        *,
        width: float = DEFAULT_BAR_SIZE[0],
        height: float = DEFAULT_BAR_SIZE[1],
    ) -> None:
        style = style or StyleParameters()
        if style.value is None or style.max_value is None:
            style = replace(
                style,
                value=0.0 if style.value is None else style.value,
                max_value=1.0 if style.max_value is None else style.max_value,
            )
        _check_max_value(style.max_value)
        self._style = style
        self._theme = theme
        self.width = float(width)
        self.height = float(height)
        self._listeners: List[ChangeListener] = []

    @property
    def style(self) -> StyleParameters:
        return self._style

    @property
    def theme(self) -> Theme | None:
        return self._theme

    @property
    def value(self) -> float:
        return float(self._style.value)

    @property
    def max_value(self) -> float:
        return float(self._style.max_value)

    @property
    def ratio(self) -> float:
        return compute_ratio(self._style.value, self._style.max_value)

    def subscribe(self, listener: ChangeListener) -> ChangeListener:
        self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: ChangeListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _emit(self, changed: Tuple[str, ...]) -> None:
        for cb in list(self._listeners):
            try:
                cb(self, changed)
            except Exception:
                # Un listener roto no debe cortar al resto.
                log.exception("Listener de ProgressBar falló (%s)", changed)

    def set(self, **changes) -> "ProgressBar":
        """Reemplaza campos del estilo (dataclasses.replace) y notifica."""
        unknown = set(changes) - set(StyleParameters.field_names())
        if unknown:
            raise RpbValidationError(f"campos de estilo desconocidos: {sorted(unknown)}")
        if "max_value" in changes:
            _check_max_value(changes["max_value"])

        old = self._style
        new = replace(old, **changes)
        changed = tuple(k for k in StyleParameters.field_names() if getattr(old, k) != getattr(new, k))
        if not changed:
            return self
        self._style = new
        self._emit(changed)
        return self

    def set_value(self, value: float | None) -> "ProgressBar":
        return self.set(value=0.0 if value is None else float(value))

    def set_max_value(self, max_value: float) -> "ProgressBar":
        return self.set(max_value=max_value)

    def set_theme(self, theme: Theme | None) -> "ProgressBar":
        if theme != self._theme:
            self._theme = theme
            self._emit(("theme",))
        return self

    def fit(self, width: float, height: float) -> Tuple[float, float]:
        return fit(width, height)

    def layout(self, width: float, height: float) -> BarLayout:
        return layout(width, height, self._style, self._theme)

    def draw(self, surface: DrawingSurface, width: float, height: float) -> BarLayout:
        return render(surface, width, height, self._style, self._theme)


def _check_max_value(max_value) -> None:
    # Reusa la validación del ratio (mismo mensaje/tipo de error).
    compute_ratio(0.0, max_value)
