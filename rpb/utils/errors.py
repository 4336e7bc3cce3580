# File: rpb/utils/errors.py
# Project: RusticProgressBar (RPB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Errores tipados del proyecto.
# Notes: La geometría degenerada se clampa; sólo los contratos rotos levantan error.
from __future__ import annotations


class RpbError(Exception):
    """Error base del proyecto."""


class RpbValidationError(RpbError):
    """Error de validación (max_value, insets, colores, shapes)."""


class RpbIOError(RpbError):
    """Error de E/S (PNG, dump JSON)."""
