"""
プロジェクト向けの軽量ロギングユーティリティ。

要点:
- 既定では各モジュールが `logging.getLogger(__name__)` でロガーを取得する。
- ライブラリ層（palette/persistence）はハンドラを設定しない。回復した失敗は WARNING/DEBUG で記録するのみ。
- CLI など最上位の呼び出し側だけが `setup_default_logging()` を 1 度呼ぶ。
"""

from __future__ import annotations

import logging

from common.settings import get as get_settings

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: int | str | None) -> int:
    """レベル指定を `logging` の数値レベルへ解決する。

    - None は設定値 `LOG_LEVEL` を用いる。
    - 不明な文字列は INFO。
    """
    if level is None:
        level = get_settings().LOG_LEVEL
    if isinstance(level, str):
        lvl = getattr(logging, level.upper(), logging.INFO)
        return lvl if isinstance(lvl, int) else logging.INFO
    return int(level)


def setup_default_logging(level: int | str | None = None) -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあれば何もしない（no-op）
    - CLI（`api.cli`）から呼び出す想定
    """
    root = logging.getLogger()
    if root.handlers:
        # Assume the app has configured logging
        return
    logging.basicConfig(level=resolve_level(level), format=_FORMAT)


__all__ = ["resolve_level", "setup_default_logging"]
