# File: rpb/utils/log.py
# Project: RusticProgressBar (RPB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Logging del paquete `rpb` (consola + rpb.log) configurable por env.
# Notes:
#   - Los handlers se cuelgan del logger "rpb", no del root: no pisa el logging de la app host.
#   - Env: RPB_LOG_DIR (carpeta del archivo), RPB_LOG_LEVEL (DEBUG/INFO/...). --verbose gana.
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

LOGGER_NAME = "rpb"
LOG_FILENAME = "rpb.log"
DEFAULT_LOG_DIR = "logs"

# Marca de los handlers propios (para reemplazarlos sin duplicar).
_HANDLER_ATTR = "_rpb_handler"

_FMT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_FMT_VERBOSE = "%(asctime)s %(levelname)s %(name)s [%(funcName)s:%(lineno)d]: %(message)s"


def resolve_log_dir(log_dir: str | os.PathLike | None = None, environ: Mapping[str, str] | None = None) -> Path:
    """Carpeta de logs: argumento > RPB_LOG_DIR > ./logs."""
    if log_dir is not None and str(log_dir).strip():
        return Path(log_dir).expanduser()
    env = os.environ if environ is None else environ
    return Path(env.get("RPB_LOG_DIR") or DEFAULT_LOG_DIR).expanduser()


def resolve_log_level(verbose: bool = False, environ: Mapping[str, str] | None = None) -> int:
    """verbose -> DEBUG; si no, RPB_LOG_LEVEL (nombre o número); default INFO."""
    if verbose:
        return logging.DEBUG
    env = os.environ if environ is None else environ
    raw = (env.get("RPB_LOG_LEVEL") or "").strip()
    if not raw:
        return logging.INFO
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else logging.INFO


def reset_logging() -> None:
    """Quita (y cierra) los handlers que instaló setup_logging."""
    logger = logging.getLogger(LOGGER_NAME)
    for h in list(logger.handlers):
        if getattr(h, _HANDLER_ATTR, False):
            logger.removeHandler(h)
            h.close()


def setup_logging(
    log_dir: str | os.PathLike | None = None,
    *,
    verbose: bool = False,
    environ: Mapping[str, str] | None = None,
) -> Path | None:
    """Configura el logger `rpb` en consola + archivo.

    Nota:
        - Llamadas repetidas reemplazan los handlers previos (no duplican).
        - En verbose el formato agrega función y línea.
        - No lanza excepción si no puede escribir el archivo; cae a consola y
          devuelve None. Si pudo, devuelve la ruta de rpb.log.
    """
    level = resolve_log_level(verbose, environ)
    d = resolve_log_dir(log_dir, environ)

    reset_logging()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    fmt = logging.Formatter(
        fmt=_FMT_VERBOSE if level <= logging.DEBUG else _FMT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Consola
    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(fmt)
    setattr(ch, _HANDLER_ATTR, True)
    logger.addHandler(ch)

    # Archivo
    try:
        d.mkdir(parents=True, exist_ok=True)
        path = d / LOG_FILENAME
        fh = logging.FileHandler(path, encoding="utf-8")
    except OSError as e:
        logger.warning("No se pudo inicializar FileHandler en %s: %s", d, e)
        return None
    fh.setLevel(level)
    fh.setFormatter(fmt)
    setattr(fh, _HANDLER_ATTR, True)
    logger.addHandler(fh)
    logger.debug("Logging listo: %s (nivel %s)", path, logging.getLevelName(level))
    return path


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
