# File: rpb/core/settings.py
# Project: RusticProgressBar (RPB)
# Version: 0.1.0
# Status: wip
# Date: 2026-10-19
# Purpose: Tema por proyecto (rpb_settings.json) + overrides por variables de entorno.
# Notes: No depende de Qt. Carga tolerante: nunca rompe por un JSON/env inválido.
from __future__ import annotations

import json
import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict

from rpb.core.style import Theme, parse_bool
from rpb.utils.errors import RpbValidationError

log = logging.getLogger(__name__)


# ------------------------------
# Project settings (repo-local)
# ------------------------------
# Archivo esperado: rpb_settings.json en el CWD o en un padre.
PROJECT_SETTINGS_FILENAME = "rpb_settings.json"

# Env var -> campo del Theme. Ganan sobre el JSON.
ENV_THEME_OVERRIDES = {
    "RPB_BG": "bg",
    "RPB_FG": "fg",
    "RPB_BORDER_COLOR": "border_color",
    "RPB_BORDER_WIDTH": "border_width",
    "RPB_CLIP": "clip",
}


def find_project_settings_path(start: Path | None = None) -> Path | None:
    """Busca rpb_settings.json subiendo desde start (o CWD)."""
    start = (start or Path.cwd()).resolve()
    for p in (start, *start.parents):
        candidate = p / PROJECT_SETTINGS_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_project_settings(start: Path | None = None, *, logger: logging.Logger | None = None) -> Dict[str, Any]:
    """Carga el JSON de project settings. Devuelve {} si no existe o es inválido."""
    _log = logger or log
    p = find_project_settings_path(start)
    if not p:
        return {}
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}
    except (OSError, ValueError) as e:
        _log.warning("No se pudo leer %s: %s", p, e)
        return {}


def _env_overrides(theme: Theme, environ: Dict[str, str]) -> Theme:
    changes: Dict[str, Any] = {}
    for key, field_name in ENV_THEME_OVERRIDES.items():
        raw = environ.get(key)
        if raw is None or raw.strip() == "":
            continue
        if field_name == "border_width":
            try:
                changes[field_name] = float(raw)
            except ValueError:
                log.debug("Ignorando %s=%r (no numérico)", key, raw)
        elif field_name == "clip":
            b = parse_bool(raw)
            if b is None:
                log.debug("Ignorando %s=%r (no booleano)", key, raw)
            else:
                changes[field_name] = b
        else:
            changes[field_name] = raw.strip()
    return replace(theme, **changes) if changes else theme


def load_theme(
    start: Path | None = None,
    *,
    environ: Dict[str, str] | None = None,
    logger: logging.Logger | None = None,
) -> Theme:
    """Theme = rpb_settings.json["theme"] + overrides de entorno.

    Claves inválidas del JSON se ignoran (warning); nunca levanta.
    """
    _log = logger or log
    data = load_project_settings(start, logger=_log)

    theme = Theme()
    raw_theme = data.get("theme")
    if isinstance(raw_theme, dict):
        try:
            theme = Theme.from_dict(raw_theme)
        except RpbValidationError as e:
            _log.warning("Tema inválido en %s: %s", PROJECT_SETTINGS_FILENAME, e)
    elif raw_theme is not None:
        _log.warning("Clave 'theme' ignorada (se esperaba objeto): %r", raw_theme)

    theme = _env_overrides(theme, dict(os.environ) if environ is None else environ)
    if theme != Theme():
        _log.info("Tema aplicado: %s", theme)
    return theme
