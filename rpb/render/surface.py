"""Drawing-surface contract consumed by the renderer.

The renderer never talks to a concrete backend: it issues path, paint,
clip and translate calls against a `DrawingSurface`. Two implementations
ship with the package:

- `RecordingSurface` (here): stores every call as a `DrawOp`. Used by the
  tests, by `--dump-ops` in the CLI, and handy for debugging geometry.
- `QtSurface` (rpb.render.qt_surface): paints through a QPainter.

Semantics follow the usual vector-graphics model: shapes are traced into a
*current path*; `fill`/`stroke`/`clip` consume it, `fill_preserve` keeps it
for a following stroke. `translate` is relative and cumulative.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple


class DrawingSurface:
    """Contrato mínimo de un surface (los backends lo implementan completo)."""

    def set_line_width(self, width: float) -> None:
        raise NotImplementedError

    def translate(self, dx: float, dy: float) -> None:
        raise NotImplementedError

    def rectangle(self, x: float, y: float, width: float, height: float) -> None:
        raise NotImplementedError

    def move_to(self, x: float, y: float) -> None:
        raise NotImplementedError

    def line_to(self, x: float, y: float) -> None:
        raise NotImplementedError

    def curve_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        raise NotImplementedError

    def close_path(self) -> None:
        raise NotImplementedError

    def set_source(self, color: str) -> None:
        raise NotImplementedError

    def fill(self) -> None:
        raise NotImplementedError

    def fill_preserve(self) -> None:
        raise NotImplementedError

    def stroke(self) -> None:
        raise NotImplementedError

    def clip(self) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class DrawOp:
    name: str
    args: Tuple[Any, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"op": self.name, "args": list(self.args)}


def _norm(a: Any) -> Any:
    # Números siempre como float: secuencias comparables y serializables.
    if isinstance(a, (int, float)) and not isinstance(a, bool):
        return float(a)
    return a


class RecordingSurface(DrawingSurface):
    """Surface que sólo graba las operaciones (sin pixeles)."""

    def __init__(self) -> None:
        self.ops: List[DrawOp] = []
        self.origin: Tuple[float, float] = (0.0, 0.0)

    def _rec(self, name: str, *args: Any) -> None:
        self.ops.append(DrawOp(name, tuple(_norm(a) for a in args)))

    def set_line_width(self, width: float) -> None:
        self._rec("set_line_width", width)

    def translate(self, dx: float, dy: float) -> None:
        self.origin = (self.origin[0] + float(dx), self.origin[1] + float(dy))
        self._rec("translate", dx, dy)

    def rectangle(self, x: float, y: float, width: float, height: float) -> None:
        self._rec("rectangle", x, y, width, height)

    def move_to(self, x: float, y: float) -> None:
        self._rec("move_to", x, y)

    def line_to(self, x: float, y: float) -> None:
        self._rec("line_to", x, y)

    def curve_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        self._rec("curve_to", x1, y1, x2, y2, x3, y3)

    def close_path(self) -> None:
        self._rec("close_path")

    def set_source(self, color: str) -> None:
        self._rec("set_source", color)

    def fill(self) -> None:
        self._rec("fill")

    def fill_preserve(self) -> None:
        self._rec("fill_preserve")

    def stroke(self) -> None:
        self._rec("stroke")

    def clip(self) -> None:
        self._rec("clip")

    # Helpers para tests / debug

    def names(self) -> List[str]:
        return [op.name for op in self.ops]

    def find(self, name: str) -> List[DrawOp]:
        return [op for op in self.ops if op.name == name]

    def to_list(self) -> List[Dict[str, Any]]:
        return [op.to_dict() for op in self.ops]
