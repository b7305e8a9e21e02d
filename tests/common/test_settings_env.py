from __future__ import annotations

import logging
from pathlib import Path

import pytest

from common import settings as settings_mod
from common.env import env_bool, env_int, env_str
from common.logging import resolve_level


def test_env_helpers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PMX_T_INT", "7")
    monkeypatch.setenv("PMX_T_BAD", "x")
    monkeypatch.setenv("PMX_T_BOOL", "yes")
    monkeypatch.setenv("PMX_T_STR", "  hi ")
    monkeypatch.setenv("PMX_T_BLANK", "   ")
    assert env_int("PMX_T_INT", 1) == 7
    assert env_int("PMX_T_INT", 1, min_value=10) == 10
    assert env_int("PMX_T_BAD", 3) == 3
    assert env_bool("PMX_T_BOOL") is True
    assert env_bool("PMX_T_MISSING", True) is True
    assert env_str("PMX_T_STR") == "hi"
    assert env_str("PMX_T_BLANK", "d") == "d"


def test_defaults_from_config() -> None:
    s = settings_mod.get()
    assert s.MAX_SAVED_PALETTES >= 1
    assert s.MIN_COUNT <= s.DEFAULT_COUNT <= s.MAX_COUNT


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PMX_STATE_DIR", str(tmp_path))
    monkeypatch.setenv("PMX_MAX_SAVED_PALETTES", "3")
    monkeypatch.setenv("PMX_DARK_MODE", "1")
    try:
        settings_mod.reload_from_env()
        s = settings_mod.get()
        assert s.state_path() == tmp_path
        assert s.MAX_SAVED_PALETTES == 3
        assert s.DARK_MODE is True
    finally:
        monkeypatch.delenv("PMX_STATE_DIR")
        monkeypatch.delenv("PMX_MAX_SAVED_PALETTES")
        monkeypatch.delenv("PMX_DARK_MODE")
        settings_mod.reload_from_env()


def test_resolve_level() -> None:
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level("nonsense") == logging.INFO
    assert resolve_level(logging.ERROR) == logging.ERROR
