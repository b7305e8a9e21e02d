"""
どこで: `persistence.store`。
何を: 保存パレット/表示設定を文字列（JSON シリアライズ済み）として読み書きするキーバリューストア。
なぜ: 永続化先（ファイル/メモリ）を差し替え可能にし、書き込み失敗をアプリ状態から切り離すため。

仕様（要点）:
- `get(key)` は未保存なら None。読み込み失敗も None（フェイルソフト）。
- `set(key, text)` は成否を bool で返す。例外は送出しない。
- `JsonFileStore` の保存先: 既定 `data/palettes/<key>.json`。設定 `palette_mixer.state_dir` で上書き可。
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Protocol

from common.settings import get as get_settings

logger = logging.getLogger(__name__)

# ストレージキー（旧バージョンと同じ名前を維持する）
DARK_MODE_KEY = "appDarkMode_v3"
SAVED_PALETTES_KEY = "appSavedPalettes_v3"
DISPLAY_FORMAT_KEY = "appDisplayFormat_v1"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, text: str) -> bool: ...


def serialize(value: Any) -> Optional[str]:
    """値を JSON 文字列にする（失敗時は None）。"""
    try:
        return json.dumps(value, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError):
        logger.warning("failed to serialize value of type %r", type(value), exc_info=True)
        return None


def save_value(store: KeyValueStore, key: str, value: Any) -> bool:
    """値をシリアライズして保存する。シリアライズ/書き込みどちらの失敗も False。"""
    text = serialize(value)
    if text is None:
        return False
    try:
        return bool(store.set(key, text))
    except Exception:
        logger.warning("failed to write persisted key %s", key, exc_info=True)
        return False


class MemoryStore:
    """プロセス内ストア（テスト/CLI の一時利用向け）。

    `quota` を指定すると、保存後の合計文字数が上限を超える書き込みを拒否する
    （ブラウザのストレージ容量超過と同じ振る舞いを再現するため）。
    """

    def __init__(self, initial: Optional[dict[str, str]] = None, *, quota: Optional[int] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self.quota = quota

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, text: str) -> bool:
        if not isinstance(text, str):
            return False
        if self.quota is not None:
            used = sum(len(v) for k, v in self._data.items() if k != key)
            if used + len(text) > self.quota:
                logger.warning("memory store quota exceeded writing %s", key)
                return False
        self._data[key] = text
        return True

    def keys(self) -> list[str]:
        return list(self._data.keys())


class JsonFileStore:
    """キーごとに 1 ファイル（`<dir>/<key>.json`）で保存するストア。"""

    def __init__(self, directory: Optional[Path | str] = None) -> None:
        self.directory = Path(directory) if directory is not None else get_settings().state_path()

    def path_for(self, key: str) -> Path:
        safe = "".join(ch if ch.isalnum() or ch in "-_." else "_" for ch in key)
        return self.directory / f"{safe}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            if not path.exists():
                return None
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.warning("failed to read %s", path, exc_info=True)
            return None

    def set(self, key: str, text: str) -> bool:
        path = self.path_for(key)
        tmp_name: Optional[str] = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # 途中失敗で既存ファイルを壊さないよう一時ファイル経由で置き換える
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=path.stem, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_name, path)
            tmp_name = None
            return True
        except (OSError, TypeError):
            logger.warning("failed to write %s", path, exc_info=True)
            return False
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass


__all__ = [
    "DARK_MODE_KEY",
    "SAVED_PALETTES_KEY",
    "DISPLAY_FORMAT_KEY",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "serialize",
    "save_value",
]
