"""Shared fixtures for RPB tests."""

from __future__ import annotations

import os

# Antes de cualquier import de Qt: sin display en CI.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from rpb.render.surface import RecordingSurface


@pytest.fixture
def surface():
    """Provide a fresh RecordingSurface."""
    return RecordingSurface()


@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for widget tests."""
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication(["rpb-tests"])
    yield app


@pytest.fixture
def clean_env(monkeypatch):
    """Remove RPB_* overrides so theme tests are deterministic."""
    for key in list(os.environ):
        if key.startswith("RPB_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def _reset_rpb_logging():
    """Drop handlers installed by setup_logging (CLI tests install them)."""
    yield
    from rpb.utils.log import reset_logging

    reset_logging()
