"""
どこで: `common` パッケージ。
何を: palette/persistence/api が共有する軽量基盤（BaseRegistry, IdAllocator など）。
なぜ: API 層から再利用する共通基盤を分離し、依存の向きを単純化するため。
"""

from .base_registry import BaseRegistry
from .ids import IdAllocator, default_allocator

__all__ = [
    "BaseRegistry",
    "IdAllocator",
    "default_allocator",
]
