"""
どこで: `common` の型定義。
何を: 色空間ごとの 3 成分タプルの軽量エイリアス（組込みジェネリックで記述）。
なぜ: palette/persistence の双方から参照するため、依存の少ない場所に置いて循環を避ける。

成分の単位:
- RGB: 各チャンネル 0..255（float、丸め前）
- HSL: h は度（無彩色は NaN）、s/l は 0..1
- LAB: CIELAB（D65）、L は 0..100
- LCH: L は 0..100、C は非負、h は度（無彩色は NaN）
"""

RGB = tuple[float, float, float]
HSL = tuple[float, float, float]
LAB = tuple[float, float, float]
LCH = tuple[float, float, float]


__all__ = ["RGB", "HSL", "LAB", "LCH"]
