"""
共通レジストリ基底クラス。
palette/harmony の関係レシピ（monochromatic/analogous/...）の登録に使用する。
"""

from __future__ import annotations

import re
from typing import Any, Callable


class BaseRegistry:
    """名前 → 登録対象（関数/クラス）の対応表。

    - 文字列キーは正規化されます（大文字小文字・キャメル→スネーク・'-'→'_' を吸収）。
    - デコレータは名前省略可。省略時は関数/クラス名から自動推論します。
    """

    def __init__(self) -> None:
        # 登録対象の型は統一せず Any とする（関数/クラスの双方を許容）。
        self._registry: dict[str, Any] = {}

    # === 内部ユーティリティ ===
    @staticmethod
    def _camel_to_snake(name: str) -> str:
        s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
        s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
        return s2.lower()

    @classmethod
    def normalize_key(cls, name: str) -> str:
        """レジストリキーの正規化（例: "Split-Complementary" -> "split_complementary"）。"""
        if not isinstance(name, str):
            raise TypeError("レジストリキーは str である必要があります")
        name = name.strip()
        if not name:
            raise ValueError("レジストリキーは空であってはなりません")
        name = name.replace("-", "_").replace(" ", "_")
        # 大文字を含む場合のみキャメル→スネーク変換
        if any(c.isupper() for c in name):
            name = cls._camel_to_snake(name)
        return re.sub(r"_+", "_", name.lower())

    def register(self, name: str | None = None) -> Callable[[Any], Any]:
        """関数/クラスをレジストリに登録するデコレータ。"""

        def decorator(obj: Any) -> Any:
            key = self.normalize_key(name) if name else self.normalize_key(obj.__name__)
            if key in self._registry and self._registry[key] is not obj:
                raise ValueError(f"'{key}' は既に登録されています")
            self._registry[key] = obj
            return obj

        return decorator

    def get(self, name: str) -> Any:
        """登録された関数/クラスを取得（未登録は KeyError）。"""
        key = self.normalize_key(name)
        if key not in self._registry:
            raise KeyError(f"'{name}' は登録されていません")
        return self._registry[key]

    def get_or(self, name: object, default: str) -> Any:
        """`name` が未登録/不正なら `default` の登録対象を返す。"""
        try:
            return self.get(name)  # type: ignore[arg-type]
        except (KeyError, TypeError, ValueError):
            return self.get(default)

    def is_registered(self, name: str) -> bool:
        """指定された名前が登録されているかチェック。"""
        try:
            return self.normalize_key(name) in self._registry
        except (TypeError, ValueError):
            return False

    def list_all(self) -> list[str]:
        """登録されているすべてのキーを登録順で取得。"""
        return list(self._registry.keys())

    def __len__(self) -> int:
        return len(self._registry)


__all__ = ["BaseRegistry"]
