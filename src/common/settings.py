"""
どこで: `common.settings`
何を: パレットミキサーの設定値を型付きで一元管理し、起動時に読み込む。
なぜ: `configs/default.yaml` と環境変数の散在参照を解消し、既定値/型の一貫性とテスト容易性を高めるため。

優先順（後勝ち）:
1) `_Settings` のクラス既定値
2) `load_config()` が返す `palette_mixer` セクション（YAML）
3) 環境変数 `PMX_*`
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from util.utils import load_config

from .env import env_bool, env_int, env_str


@dataclass
class _Settings:
    # 永続化
    STATE_DIR: str | None = None
    MAX_SAVED_PALETTES: int = 20

    # 生成
    DEFAULT_COUNT: int = 5
    MIN_COUNT: int = 3
    MAX_COUNT: int = 12
    DEFAULT_RELATION: str = "monochromatic"
    GRADIENT_DIRECTION: str = "to right"

    # 表示設定の既定値
    DARK_MODE: bool = False
    DISPLAY_FORMAT: str = "hex"

    # Misc
    LOG_LEVEL: str = "INFO"

    def state_path(self) -> Path:
        """永続化ディレクトリを返す（未設定時は `<cwd>/data/palettes`）。"""
        if self.STATE_DIR:
            return Path(self.STATE_DIR)
        return Path.cwd() / "data" / "palettes"


_settings = _Settings()


def _section() -> dict[str, Any]:
    cfg = load_config() or {}
    sec = cfg.get("palette_mixer", {}) if isinstance(cfg, dict) else {}
    return sec if isinstance(sec, dict) else {}


def _as_int(value: Any, default: int, *, min_value: int = 0) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return max(min_value, value)


def _as_str(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def reload_from_env() -> None:
    """YAML と環境変数から設定を再読込。

    - YAML 値は型が合わなければ無視してクラス既定値を保つ。
    - 環境変数は `env_int`/`env_bool`/`env_str` を使用。
    """
    base = _Settings()
    sec = _section()

    state_dir = sec.get("state_dir")
    _settings.STATE_DIR = state_dir if isinstance(state_dir, str) and state_dir.strip() else None
    _settings.MAX_SAVED_PALETTES = _as_int(
        sec.get("max_saved_palettes"), base.MAX_SAVED_PALETTES, min_value=1
    )
    _settings.DEFAULT_COUNT = _as_int(sec.get("default_count"), base.DEFAULT_COUNT, min_value=1)
    _settings.MIN_COUNT = _as_int(sec.get("min_count"), base.MIN_COUNT, min_value=1)
    _settings.MAX_COUNT = _as_int(sec.get("max_count"), base.MAX_COUNT, min_value=1)
    if _settings.MAX_COUNT < _settings.MIN_COUNT:
        # 逆転は異常系ガードとして交換する
        _settings.MIN_COUNT, _settings.MAX_COUNT = _settings.MAX_COUNT, _settings.MIN_COUNT
    _settings.DEFAULT_RELATION = _as_str(sec.get("default_relation"), base.DEFAULT_RELATION)
    _settings.GRADIENT_DIRECTION = _as_str(sec.get("gradient_direction"), base.GRADIENT_DIRECTION)
    dark = sec.get("dark_mode")
    _settings.DARK_MODE = dark if isinstance(dark, bool) else base.DARK_MODE
    _settings.DISPLAY_FORMAT = _as_str(sec.get("display_format"), base.DISPLAY_FORMAT)
    _settings.LOG_LEVEL = _as_str(sec.get("log_level"), base.LOG_LEVEL)

    # 環境変数による上書き
    _settings.STATE_DIR = env_str("PMX_STATE_DIR", _settings.STATE_DIR)
    _settings.MAX_SAVED_PALETTES = (
        env_int("PMX_MAX_SAVED_PALETTES", _settings.MAX_SAVED_PALETTES, min_value=1)
        or _settings.MAX_SAVED_PALETTES
    )
    _settings.DEFAULT_COUNT = (
        env_int("PMX_DEFAULT_COUNT", _settings.DEFAULT_COUNT, min_value=1) or _settings.DEFAULT_COUNT
    )
    _settings.DARK_MODE = env_bool("PMX_DARK_MODE", _settings.DARK_MODE)
    _settings.LOG_LEVEL = env_str("PMX_LOG_LEVEL", _settings.LOG_LEVEL) or base.LOG_LEVEL


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
