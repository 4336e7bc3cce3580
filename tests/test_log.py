"""Tests for the rpb logging setup."""

from __future__ import annotations

import logging

from rpb.utils.log import LOG_FILENAME, LOGGER_NAME, resolve_log_dir, resolve_log_level, setup_logging


def own_handlers():
    return [h for h in logging.getLogger(LOGGER_NAME).handlers if getattr(h, "_rpb_handler", False)]


def test_log_dir_from_argument_then_env(tmp_path):
    assert resolve_log_dir(tmp_path / "a", environ={"RPB_LOG_DIR": "ignored"}) == tmp_path / "a"
    assert resolve_log_dir(None, environ={"RPB_LOG_DIR": str(tmp_path / "b")}) == tmp_path / "b"
    assert str(resolve_log_dir(None, environ={})) == "logs"


def test_log_level_from_env_and_verbose():
    assert resolve_log_level(False, environ={}) == logging.INFO
    assert resolve_log_level(False, environ={"RPB_LOG_LEVEL": "warning"}) == logging.WARNING
    assert resolve_log_level(False, environ={"RPB_LOG_LEVEL": "10"}) == logging.DEBUG
    assert resolve_log_level(False, environ={"RPB_LOG_LEVEL": "chatty"}) == logging.INFO
    assert resolve_log_level(True, environ={"RPB_LOG_LEVEL": "ERROR"}) == logging.DEBUG


def test_setup_writes_file_in_env_dir(tmp_path):
    path = setup_logging(environ={"RPB_LOG_DIR": str(tmp_path / "logs")})
    assert path == tmp_path / "logs" / LOG_FILENAME
    logging.getLogger("rpb.test").info("hola")
    for h in own_handlers():
        h.flush()
    assert "hola" in path.read_text(encoding="utf-8")


def test_verbose_enables_debug(tmp_path):
    path = setup_logging(tmp_path, verbose=True, environ={})
    assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG
    logging.getLogger("rpb.test").debug("detalle")
    for h in own_handlers():
        h.flush()
    text = path.read_text(encoding="utf-8")
    assert "detalle" in text
    assert "test_verbose_enables_debug:" in text


def test_repeated_setup_does_not_duplicate_handlers(tmp_path):
    setup_logging(tmp_path / "one", environ={})
    setup_logging(tmp_path / "two", verbose=True, environ={})
    assert len(own_handlers()) == 2
    assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG


def test_unwritable_dir_falls_back_to_console(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    assert setup_logging(blocker / "logs", environ={}) is None
    assert len(own_handlers()) == 1
