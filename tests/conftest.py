"""共通フィクスチャ。

- 乱数シード固定
- 既定の色エンジン/固定シードの ID アロケータ/メモリストア
- 一時ディレクトリを保存先にした設定
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import numpy as np
import pytest

from common import settings as settings_mod
from common.ids import IdAllocator
from palette.engine import DefaultColorEngine
from persistence.store import MemoryStore


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def engine() -> DefaultColorEngine:
    return DefaultColorEngine()


@pytest.fixture()
def ids() -> IdAllocator:
    return IdAllocator(seed=1000)


@pytest.fixture()
def rng() -> np.random.Generator:
    return np.random.default_rng(12345)


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def state_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """`PMX_STATE_DIR` を一時ディレクトリに向けた設定で実行する。"""
    d = tmp_path / "state"
    monkeypatch.setenv("PMX_STATE_DIR", str(d))
    settings_mod.reload_from_env()
    yield d
    monkeypatch.delenv("PMX_STATE_DIR", raising=False)
    settings_mod.reload_from_env()
