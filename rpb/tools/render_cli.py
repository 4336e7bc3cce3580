# File: rpb/tools/render_cli.py
# Project: RusticProgressBar (RPB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Harness CLI: render de la barra -> PNG y/o dump JSON de operaciones (sin UI).
# Notes:
# - Defaults desde env (RPB_CLI_*) y tema desde rpb_settings.json (+ env RPB_*).
# - Qt sólo se importa si se pide PNG (--out).
from __future__ import annotations

import argparse
import datetime
import json
import os
import sys
from pathlib import Path
from typing import Any

from rpb.core.settings import load_theme
from rpb.core.shapes import ShapeSpec, coerce_shape_kind
from rpb.core.style import Insets, StyleParameters
from rpb.core.version import APP_VERSION, DEFAULT_BAR_SIZE
from rpb.render.progressbar import render
from rpb.render.surface import RecordingSurface
from rpb.utils.errors import RpbError, RpbIOError, RpbValidationError
from rpb.utils.log import get_logger, setup_logging

log = get_logger(__name__)


def parse_insets(raw: str | None) -> Insets | None:
    """Parsea insets de la CLI: `N` (uniforme) o `top,right,bottom,left` (orden CSS)."""
    if raw is None or str(raw).strip() == "":
        return None
    parts = [p.strip() for p in str(raw).split(",") if p.strip()]
    try:
        nums = [float(p) for p in parts]
    except ValueError as e:
        raise RpbValidationError(f"insets inválidos: {raw!r}") from e
    if len(nums) == 1:
        return Insets.uniform(nums[0])
    if len(nums) == 4:
        top, right, bottom, left = nums
        return Insets(top=top, bottom=bottom, left=left, right=right)
    raise RpbValidationError(f"insets: se esperaban 1 o 4 valores, llegó {raw!r}")


def _shape(kind: str | None, radius: float | None, path_d: str | None) -> ShapeSpec | None:
    if not kind:
        return None
    return ShapeSpec(kind=coerce_shape_kind(kind), radius=radius, path_d=path_d)


def build_style(args: argparse.Namespace) -> StyleParameters:
    return StyleParameters(
        value=args.value,
        max_value=args.max_value,
        border_width=args.border_width,
        border_color=args.border_color,
        bar_border_width=args.bar_border_width,
        bar_border_color=args.bar_border_color,
        background_color=args.bg,
        color=args.fg,
        shape=_shape(args.shape, args.radius, args.path_d),
        bar_shape=_shape(args.bar_shape, args.radius, args.path_d),
        clip=False if args.no_clip else None,
        margins=parse_insets(args.margins),
        paddings=parse_insets(args.paddings),
        ticks=True if args.ticks else None,
        ticks_gap=args.ticks_gap,
        ticks_size=args.ticks_size,
    )


def _write_json(path: Path, payload: Any) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except OSError as e:
        raise RpbIOError(f"No se pudo escribir {path}: {e}") from e


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="rpb.tools.render_cli",
        description="RPB — Harness CLI: render de barra de progreso -> PNG / JSON de operaciones.",
    )
    ap.add_argument("--width", type=float, default=float(os.environ.get("RPB_CLI_WIDTH", DEFAULT_BAR_SIZE[0])))
    ap.add_argument("--height", type=float, default=float(os.environ.get("RPB_CLI_HEIGHT", DEFAULT_BAR_SIZE[1])))
    ap.add_argument("--scale", type=float, default=float(os.environ.get("RPB_CLI_SCALE", "1")), help="Escala del PNG")
    ap.add_argument("--value", type=float, default=0.0)
    ap.add_argument("--max-value", type=float, default=1.0)

    ap.add_argument("--border-width", type=float, default=None)
    ap.add_argument("--border-color", default=None, help="#rrggbb[aa] o nombre")
    ap.add_argument("--bar-border-width", type=float, default=None)
    ap.add_argument("--bar-border-color", default=None)
    ap.add_argument("--bg", default=None, help="Color de fondo")
    ap.add_argument("--fg", default=None, help="Color de la barra")

    ap.add_argument("--shape", default=None, help="rectangle | rounded_rect | rounded_bar | ...")
    ap.add_argument("--bar-shape", default=None)
    ap.add_argument("--radius", type=float, default=None, help="Radio para shapes redondeadas/octogon")
    ap.add_argument("--path-d", default=None, help="Path SVG para shape svg_path")

    ap.add_argument("--no-clip", action="store_true", help="No recortar la barra al fondo")
    ap.add_argument("--margins", default=None, help='"N" o "top,right,bottom,left"')
    ap.add_argument("--paddings", default=None, help='"N" o "top,right,bottom,left"')

    ap.add_argument("--ticks", action="store_true")
    ap.add_argument("--ticks-gap", type=float, default=None)
    ap.add_argument("--ticks-size", type=float, default=None)

    ap.add_argument("--no-theme", action="store_true", help="Ignora rpb_settings.json y env RPB_*")
    ap.add_argument("--out", default="", help="PNG de salida (opcional)")
    ap.add_argument("--dump-ops", default="", help="JSON con operaciones + layout (opcional)")
    ap.add_argument("--log-dir", default=None, help="Carpeta de rpb.log (default: RPB_LOG_DIR o ./logs)")
    ap.add_argument("--verbose", action="store_true", help="Log en DEBUG (ignora RPB_LOG_LEVEL)")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_dir, verbose=args.verbose)

    try:
        style = build_style(args)
        theme = None if args.no_theme else load_theme()

        rec = RecordingSurface()
        lay = render(rec, args.width, args.height, style, theme)
    except RpbValidationError as e:
        print(f"[RPB] Error de validación: {e}", file=sys.stderr)
        return 2

    print(
        f"[RPB] {args.width:g}x{args.height:g} ratio={lay.ratio:.3f} "
        f"bar={lay.bar_length:g}x{lay.drawn_size[1]:g} ops={len(rec.ops)} ticks={len(lay.tick_offsets)}"
    )

    try:
        if args.dump_ops:
            _write_json(
                Path(args.dump_ops).expanduser(),
                {
                    "tool": "rpb.tools.render_cli",
                    "version": APP_VERSION,
                    "when": datetime.datetime.now().isoformat(timespec="seconds"),
                    "size": [args.width, args.height],
                    "layout": {
                        "ratio": lay.ratio,
                        "background_origin": list(lay.background_origin),
                        "background_size": list(lay.background_size),
                        "bar_origin": list(lay.bar_origin),
                        "drawn_size": list(lay.drawn_size),
                        "bar_length": lay.bar_length,
                        "tick_offsets": list(lay.tick_offsets),
                    },
                    "ops": rec.to_list(),
                },
            )
            print(f"[RPB] Ops -> {args.dump_ops}")

        if args.out:
            # Import perezoso: sin --out no hace falta Qt.
            from rpb.render.qt_surface import render_to_image, save_png

            img = render_to_image(args.width, args.height, style, theme, scale=args.scale)
            save_png(img, Path(args.out).expanduser())
            print(f"[RPB] PNG -> {args.out}")
    except RpbValidationError as e:
        print(f"[RPB] Error de validación: {e}", file=sys.stderr)
        return 2
    except RpbError as e:
        log.error("render_cli falló: %s", e)
        print(f"[RPB] Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
