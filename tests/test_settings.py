"""Tests for project settings / theme loading."""

from __future__ import annotations

import json

from rpb.core.settings import PROJECT_SETTINGS_FILENAME, find_project_settings_path, load_project_settings, load_theme
from rpb.core.shapes import ShapeKind
from rpb.core.style import Theme


def write_settings(root, data):
    p = root / PROJECT_SETTINGS_FILENAME
    p.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf-8")
    return p


def test_settings_found_from_subdirectory(tmp_path):
    p = write_settings(tmp_path, {"theme": {}})
    sub = tmp_path / "a" / "b"
    sub.mkdir(parents=True)
    assert find_project_settings_path(sub) == p.resolve()


def test_invalid_json_is_empty(tmp_path):
    write_settings(tmp_path, "{not json")
    assert load_project_settings(tmp_path) == {}


def test_theme_from_file(tmp_path):
    write_settings(
        tmp_path,
        {"theme": {"progressbar_bg": "#111111", "border_width": 2, "shape": "rounded_bar"}},
    )
    theme = load_theme(tmp_path, environ={})
    assert theme.bg == "#111111"
    assert theme.border_width == 2.0
    assert theme.shape.kind is ShapeKind.ROUNDED_BAR


def test_env_overrides_win(tmp_path):
    write_settings(tmp_path, {"theme": {"fg": "#111111", "border_width": 2}})
    env = {"RPB_FG": "#222222", "RPB_CLIP": "0", "RPB_BORDER_WIDTH": "abc"}
    theme = load_theme(tmp_path, environ=env)
    assert theme.fg == "#222222"
    assert theme.clip is False
    # Valor inválido ignorado: queda el del JSON.
    assert theme.border_width == 2.0


def test_invalid_theme_is_ignored(tmp_path):
    write_settings(tmp_path, {"theme": {"shape": "blob"}})
    assert load_theme(tmp_path, environ={}) == Theme()


def test_theme_not_an_object(tmp_path):
    write_settings(tmp_path, {"theme": "dark"})
    assert load_theme(tmp_path, environ={}) == Theme()


def test_env_only(tmp_path, clean_env):
    clean_env.setenv("RPB_BG", "#abcdef")
    clean_env.setenv("RPB_CLIP", "maybe")
    theme = load_theme(tmp_path)
    assert theme.bg == "#abcdef"
    assert theme.clip is None


def test_non_list_corners_are_ignored(tmp_path):
    write_settings(tmp_path, {"theme": {"shape": {"kind": "partially_rounded_rect", "corners": 5}}})
    assert load_theme(tmp_path, environ={}) == Theme()


def test_svg_shape_without_path_is_ignored(tmp_path):
    write_settings(tmp_path, {"theme": {"shape": "svg_path"}})
    assert load_theme(tmp_path, environ={}) == Theme()


def test_clip_string_from_file(tmp_path):
    write_settings(tmp_path, {"theme": {"clip": "false"}})
    assert load_theme(tmp_path, environ={}).clip is False
