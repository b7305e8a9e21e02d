"""
どこで: `common.ids`
何を: プロセス内で一意かつ単調増加する整数 ID を払い出すアロケータ。
なぜ: ミックス色（Ingredient）や保存パレットの ID をモジュール状態に頼らず発番し、
      テストでは固定シードのインスタンスを注入できるようにするため。

補足:
- 既定のシードは起動時のミリ秒時刻。`next()` はインクリメントしてから返す。
- 外部から与えられた ID との衝突回避は行わない（`prefer()` は既存 ID を優先するだけ）。
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable


class IdAllocator:
    """単調増加カウンタ。`next()` はスレッド間でも重複しない。"""

    __slots__ = ("_value", "_lock")

    def __init__(
        self,
        seed: int | None = None,
        *,
        clock: Callable[[], int] = time.time_ns,
    ) -> None:
        if seed is None:
            seed = int(clock()) // 1_000_000
        self._value = int(seed)
        self._lock = threading.Lock()

    def next(self) -> int:
        """カウンタを 1 進めて返す。"""
        with self._lock:
            self._value += 1
            return self._value

    def peek(self) -> int:
        """直近に払い出した値（未払い出しならシード）を返す。"""
        with self._lock:
            return self._value

    def prefer(self, candidate: Any) -> int:
        """使える既存 ID があればそれを、無ければ新規 ID を返す。

        - 受理: 正の int、または整数値の float（bool は不可）。
        """
        if isinstance(candidate, bool):
            return self.next()
        if isinstance(candidate, int) and candidate > 0:
            return candidate
        if isinstance(candidate, float) and candidate.is_integer() and candidate > 0:
            return int(candidate)
        return self.next()


_DEFAULT: IdAllocator | None = None
_DEFAULT_LOCK = threading.Lock()


def default_allocator() -> IdAllocator:
    """プロセス共有のアロケータを返す（初回呼び出し時に生成）。"""
    global _DEFAULT
    with _DEFAULT_LOCK:
        if _DEFAULT is None:
            _DEFAULT = IdAllocator()
        return _DEFAULT


__all__ = ["IdAllocator", "default_allocator"]
