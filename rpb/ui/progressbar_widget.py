# File: rpb/ui/progressbar_widget.py
# Project: RusticProgressBar (RPB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: QWidget que hospeda un ProgressBar y lo repinta en cada cambio.
# Notes: El widget no calcula geometría: sólo conecta el listener y pinta con QtSurface.

from __future__ import annotations

from PySide6.QtCore import QSize, Signal
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import QSizePolicy, QWidget

from rpb.core.style import StyleParameters, Theme
from rpb.render.progressbar import ProgressBar
from rpb.render.qt_surface import QtSurface
from rpb.utils.log import get_logger

log = get_logger(__name__)


class ProgressBarWidget(QWidget):
    """Barra de progreso dibujada sobre todo el rect del widget."""

    ratio_changed = Signal(float)

    def __init__(
        self,
        style: StyleParameters | None = None,
        theme: Theme | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.bar = ProgressBar(style, theme)
        self.bar.subscribe(self._on_bar_changed)
        # Ocupa lo que le den (fit = caja asignada).
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)

    def sizeHint(self) -> QSize:  # pragma: no cover (UI)
        return QSize(int(self.bar.width), int(self.bar.height))

    def set_value(self, value: float | None) -> None:
        self.bar.set_value(value)

    def _on_bar_changed(self, bar: ProgressBar, changed: tuple[str, ...]) -> None:
        log.debug("ProgressBarWidget: cambio %s", changed)
        if "value" in changed or "max_value" in changed:
            self.ratio_changed.emit(bar.ratio)
        self.update()

    def paintEvent(self, event) -> None:  # pragma: no cover (UI)
        p = QPainter(self)
        try:
            self.bar.draw(QtSurface(p), float(self.width()), float(self.height()))
        finally:
            p.end()
