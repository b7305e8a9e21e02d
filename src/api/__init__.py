"""
どこで: `api` 入口（高レベル公開 API）。
何を: 作業状態 `Workbench` とコマンドライン入口 `main` を再輸出。
なぜ: 利用者が単一名前空間からミックス→生成→保存→エクスポートまで完結できるようにするため。

Usage:
    from api import Workbench

    wb = Workbench()
    wb.set_relation("triadic")
    wb.save_current()
"""

from .cli import main
from .workbench import Workbench

__all__ = [
    "Workbench",  # 作業状態
    "main",  # CLI
]

__version__ = "2026.10"
