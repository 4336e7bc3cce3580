# File: rpb/core/style.py
# Project: RusticProgressBar (RPB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Modelos de estilo (explícito / tema / resuelto) de la barra de progreso.
# Notes:
#   - Todo es inmutable: un cambio = un objeto nuevo (dataclasses.replace).
#   - Precedencia: explícito > tema > default fijo. Sin tablas globales.
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from rpb.core.shapes import ShapeSpec
from rpb.core.version import (
    DEFAULT_BG,
    DEFAULT_FG,
    DEFAULT_TICKS_COLOR,
    DEFAULT_TICKS_GAP,
    DEFAULT_TICKS_SIZE,
)
from rpb.utils.errors import RpbValidationError

_INSET_SIDES = ("top", "bottom", "left", "right")


@dataclass(frozen=True)
class Insets:
    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0

    @property
    def horizontal(self) -> float:
        return float(self.left + self.right)

    @property
    def vertical(self) -> float:
        return float(self.top + self.bottom)

    @staticmethod
    def uniform(v: float) -> "Insets":
        v = float(v)
        return Insets(top=v, bottom=v, left=v, right=v)

    @staticmethod
    def coerce(v: Any) -> "Insets":
        """Acepta None, un número (uniforme), un mapping parcial o un Insets.

        Los lados que faltan en el mapping valen 0.
        """
        if isinstance(v, Insets):
            return v
        if v is None:
            return Insets()
        if isinstance(v, bool):
            raise RpbValidationError(f"insets inválidos: {v!r}")
        if isinstance(v, (int, float)):
            return Insets.uniform(v)
        if isinstance(v, Mapping):
            unknown = set(v) - set(_INSET_SIDES)
            if unknown:
                raise RpbValidationError(f"insets: lados desconocidos {sorted(unknown)}")
            try:
                return Insets(**{k: float(v.get(k) or 0.0) for k in _INSET_SIDES})
            except (TypeError, ValueError) as e:
                raise RpbValidationError(f"insets inválidos: {v!r}") from e
        raise RpbValidationError(f"insets inválidos: {v!r}")

    def to_dict(self) -> Dict[str, float]:
        return {k: float(getattr(self, k)) for k in _INSET_SIDES}


@dataclass(frozen=True)
class StyleParameters:
    """Valores explícitos por llamada. None = "no seteado" (cae al tema/default)."""

    value: Optional[float] = None
    max_value: Optional[float] = None

    border_width: Optional[float] = None
    border_color: Optional[str] = None
    bar_border_width: Optional[float] = None
    bar_border_color: Optional[str] = None

    background_color: Optional[str] = None
    color: Optional[str] = None

    shape: Optional[ShapeSpec] = None
    bar_shape: Optional[ShapeSpec] = None

    clip: Optional[bool] = None
    margins: Optional[Insets] = None
    paddings: Optional[Insets] = None

    ticks: Optional[bool] = None
    ticks_gap: Optional[float] = None
    ticks_size: Optional[float] = None

    def __post_init__(self) -> None:
        # Normalizamos entradas "cómodas" (números, dicts, nombres de shape).
        if self.margins is not None:
            object.__setattr__(self, "margins", Insets.coerce(self.margins))
        if self.paddings is not None:
            object.__setattr__(self, "paddings", Insets.coerce(self.paddings))
        if self.shape is not None:
            object.__setattr__(self, "shape", ShapeSpec.coerce(self.shape))
        if self.bar_shape is not None:
            object.__setattr__(self, "bar_shape", ShapeSpec.coerce(self.bar_shape))

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))


@dataclass(frozen=True)
class Theme:
    """Defaults a nivel tema. Se pasa explícito a resolve_style()."""

    border_width: Optional[float] = None
    border_color: Optional[str] = None
    bar_border_width: Optional[float] = None
    bar_border_color: Optional[str] = None
    bg: Optional[str] = None
    fg: Optional[str] = None
    shape: Optional[ShapeSpec] = None
    bar_shape: Optional[ShapeSpec] = None
    clip: Optional[bool] = None
    margins: Optional[Insets] = None
    paddings: Optional[Insets] = None

    def __post_init__(self) -> None:
        if self.margins is not None:
            object.__setattr__(self, "margins", Insets.coerce(self.margins))
        if self.paddings is not None:
            object.__setattr__(self, "paddings", Insets.coerce(self.paddings))
        if self.shape is not None:
            object.__setattr__(self, "shape", ShapeSpec.coerce(self.shape))
        if self.bar_shape is not None:
            object.__setattr__(self, "bar_shape", ShapeSpec.coerce(self.bar_shape))

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> "Theme":
        """Crea un Theme desde JSON.

        Acepta claves cortas (`bg`) o con prefijo (`progressbar_bg`).
        Claves desconocidas se ignoran.
        """
        names = {f.name for f in fields(Theme)}
        kwargs: Dict[str, Any] = {}
        for key, value in d.items():
            k = str(key)
            if k.startswith("progressbar_"):
                k = k[len("progressbar_"):]
            if k in names and value is not None:
                kwargs[k] = value
        for k in ("border_width", "bar_border_width"):
            if k in kwargs:
                kwargs[k] = _as_float(kwargs[k], f"theme.{k}")
        if "clip" in kwargs:
            kwargs["clip"] = _as_bool(kwargs["clip"], "theme.clip")
        return Theme(**kwargs)


@dataclass(frozen=True)
class ResolvedStyle:
    """Estilo concreto (sin None) listo para el renderer."""

    value: float
    max_value: float
    border_width: float
    border_color: Optional[str]
    bar_border_width: float
    bar_border_color: Optional[str]
    background_color: str
    color: str
    ticks_color: str
    shape: ShapeSpec
    bar_shape: ShapeSpec
    clip: bool
    margins: Insets
    paddings: Insets
    ticks: bool
    ticks_gap: float
    ticks_size: float


def _first(*values: Any) -> Any:
    for v in values:
        if v is not None:
            return v
    return None


def _as_float(v: Any, name: str) -> float:
    try:
        return float(v)
    except (TypeError, ValueError) as e:
        raise RpbValidationError(f"{name}: se esperaba número, llegó {v!r}") from e


def parse_bool(raw: str) -> bool | None:
    """Booleano desde texto: 1/true/yes/on o 0/false/no/off; otro valor -> None."""
    s = raw.strip().lower()
    if s in ("1", "true", "yes", "on"):
        return True
    if s in ("0", "false", "no", "off"):
        return False
    return None


def _as_bool(v: Any, name: str) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, int) and v in (0, 1):
        return bool(v)
    b = parse_bool(v) if isinstance(v, str) else None
    if b is None:
        raise RpbValidationError(f"{name}: se esperaba booleano, llegó {v!r}")
    return b


def resolve_style(style: StyleParameters | None = None, theme: Theme | None = None) -> ResolvedStyle:
    """Aplica la cadena explícito > tema > default.

    Un borde sin color resuelto queda con ancho 0 (idem borde de barra).
    """
    s = style or StyleParameters()
    t = theme or Theme()

    border_color = _first(s.border_color, t.border_color)
    border_width = _as_float(_first(s.border_width, t.border_width, 0.0), "border_width")
    if border_color is None:
        border_width = 0.0

    bar_border_color = _first(s.bar_border_color, t.bar_border_color)
    # Sin ancho propio, la barra hereda el borde exterior (sin el forzado a 0).
    bar_border_width = _as_float(
        _first(s.bar_border_width, t.bar_border_width, s.border_width, t.border_width, 0.0),
        "bar_border_width",
    )
    if bar_border_color is None:
        bar_border_width = 0.0

    return ResolvedStyle(
        value=_as_float(_first(s.value, 0.0), "value"),
        max_value=_as_float(_first(s.max_value, 1.0), "max_value"),
        border_width=border_width,
        border_color=border_color,
        bar_border_width=bar_border_width,
        bar_border_color=bar_border_color,
        background_color=_first(s.background_color, t.bg, DEFAULT_BG),
        color=_first(s.color, t.fg, DEFAULT_FG),
        # Los ticks usan sólo el fondo explícito, no el del tema.
        ticks_color=_first(s.background_color, DEFAULT_TICKS_COLOR),
        shape=_first(s.shape, t.shape) or ShapeSpec(),
        bar_shape=_first(s.bar_shape, t.bar_shape) or ShapeSpec(),
        clip=s.clip is not False and t.clip is not False,
        margins=_first(s.margins, t.margins) or Insets(),
        paddings=_first(s.paddings, t.paddings) or Insets(),
        ticks=bool(s.ticks),
        ticks_gap=_as_float(_first(s.ticks_gap, DEFAULT_TICKS_GAP), "ticks_gap"),
        ticks_size=_as_float(_first(s.ticks_size, DEFAULT_TICKS_SIZE), "ticks_size"),
    )
