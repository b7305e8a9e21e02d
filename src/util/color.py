"""
どこで: `util.color`。
何を: 色トークン（文字列）の受理仕様とパースを一元化し、RGB(0–255) と HEX の相互変換を提供する。
なぜ: palette エンジン/永続化/CLI 全体で同一の受理仕様とエラーメッセージを提供するため。

受理形式:
- HEX: "#RGB", "#RGBA", "#RRGGBB", "#RRGGBBAA"（先頭 "#" は省略可、大文字/小文字は不問）
- CSS4 の色名（matplotlib の `CSS4_COLORS`、大文字/小文字は不問）
- 関数記法: "rgb(r, g, b)" / "rgba(r, g, b, a)" / "hsl(h, s%, l%)" / "hsla(h, s%, l%, a)"

アルファは検証のみ行い、戻り値には含めない。
"""

from __future__ import annotations

import colorsys
import math
import re
from typing import Sequence

from matplotlib.colors import CSS4_COLORS

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNC_RE = re.compile(r"^(rgba?|hsla?)\((.*)\)$", re.IGNORECASE)
_NUM_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)(%|deg)?$")

# 名前 → "#rrggbb"（小文字）。逆引きは最初に現れた名前を優先する（例: aqua/cyan）。
NAMED_COLORS: dict[str, str] = {name.lower(): value.lower() for name, value in CSS4_COLORS.items()}
_NAME_BY_HEX: dict[str, str] = {}
for _name, _hex in NAMED_COLORS.items():
    _NAME_BY_HEX.setdefault(_hex, _name)


def _clamp255(x: float) -> float:
    return 0.0 if x < 0.0 else 255.0 if x > 255.0 else float(x)


def parse_hex_color_str(s: str) -> tuple[float, float, float]:
    """HEX 文字列から RGB(0–255) を返す。

    受理形式: "#RGB", "#RGBA", "#RRGGBB", "#RRGGBBAA"（"#" は省略可）。
    """
    t = s.strip()
    m = _HEX_RE.match(t)
    if m is None:
        raise ValueError(f"invalid hex color: '{s}' (expected RGB, RGBA, RRGGBB or RRGGBBAA)")
    digits = m.group(1)
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    r = int(digits[0:2], 16)
    g = int(digits[2:4], 16)
    b = int(digits[4:6], 16)
    return (float(r), float(g), float(b))


def _split_args(body: str) -> list[str]:
    body = body.replace("/", " ")
    parts = [p for p in re.split(r"[\s,]+", body.strip()) if p]
    for p in parts:
        if not _NUM_RE.match(p):
            raise ValueError(f"invalid color component: '{p}'")
    return parts


def _channel(part: str) -> float:
    if part.endswith("%"):
        v = float(part[:-1]) * 2.55
    else:
        v = float(part)
    if not 0.0 <= v <= 255.0:
        raise ValueError(f"rgb channel out of range: '{part}'")
    return v


def _percent(part: str) -> float:
    if not part.endswith("%"):
        raise ValueError(f"expected percentage: '{part}'")
    v = float(part[:-1]) / 100.0
    if not 0.0 <= v <= 1.0:
        raise ValueError(f"percentage out of range: '{part}'")
    return v


def _alpha(part: str) -> None:
    v = float(part[:-1]) / 100.0 if part.endswith("%") else float(part)
    if not 0.0 <= v <= 1.0:
        raise ValueError(f"alpha out of range: '{part}'")


def _parse_functional(kind: str, body: str) -> tuple[float, float, float]:
    parts = _split_args(body)
    if len(parts) not in (3, 4):
        raise ValueError(f"{kind}() expects 3 or 4 components")
    if len(parts) == 4:
        _alpha(parts[3])
    if kind.startswith("rgb"):
        return (_channel(parts[0]), _channel(parts[1]), _channel(parts[2]))
    h_txt = parts[0][:-3] if parts[0].endswith("deg") else parts[0]
    if h_txt.endswith("%"):
        raise ValueError(f"invalid hue: '{parts[0]}'")
    h = float(h_txt)
    s = _percent(parts[1])
    lum = _percent(parts[2])
    return hsl_to_rgb(h, s, lum)


def parse_color_token(token: object) -> tuple[float, float, float]:
    """色トークンを RGB(0–255) へパースする。

    - 受理形式はモジュール docstring を参照。
    - 受理できない値は ValueError（str 以外は TypeError）。
    """
    if not isinstance(token, str):
        raise TypeError(f"color token must be str, got {type(token)!r}")
    t = token.strip()
    if not t:
        raise ValueError("empty color token")
    named = NAMED_COLORS.get(t.lower())
    if named is not None:
        return parse_hex_color_str(named)
    m = _FUNC_RE.match(t)
    if m is not None:
        return _parse_functional(m.group(1).lower(), m.group(2))
    return parse_hex_color_str(t)


def is_color_token(token: object) -> bool:
    """パース可能な色トークンなら True。"""
    try:
        parse_color_token(token)
    except (TypeError, ValueError):
        return False
    return True


def rgb_to_hex(rgb: Sequence[float]) -> str:
    """RGB(0–255) を "#rrggbb" に変換する（範囲外はクランプ、チャンネルは四捨五入）。"""
    r, g, b = (int(round(_clamp255(float(v)))) for v in rgb[:3])
    return f"#{r:02x}{g:02x}{b:02x}"


def name_for_hex(hex_str: str) -> str | None:
    """"#rrggbb" に一致する CSS 色名を返す（無ければ None）。"""
    return _NAME_BY_HEX.get(hex_str.lower())


def rgb_to_hsl(rgb: Sequence[float]) -> tuple[float, float, float]:
    """RGB(0–255) を HSL に変換する。h は度、無彩色は NaN。s/l は 0..1。"""
    r, g, b = (_clamp255(float(v)) / 255.0 for v in rgb[:3])
    h, lum, s = colorsys.rgb_to_hls(r, g, b)
    if max(r, g, b) == min(r, g, b):
        return (math.nan, 0.0, lum)
    return (h * 360.0, s, lum)


def hsl_to_rgb(h: float, s: float, lum: float) -> tuple[float, float, float]:
    """HSL（h は度、NaN は 0 扱い）を RGB(0–255) に変換する。"""
    if math.isnan(h):
        h = 0.0
    r, g, b = colorsys.hls_to_rgb((h % 360.0) / 360.0, lum, s)
    return (r * 255.0, g * 255.0, b * 255.0)


__all__ = [
    "NAMED_COLORS",
    "parse_hex_color_str",
    "parse_color_token",
    "is_color_token",
    "rgb_to_hex",
    "name_for_hex",
    "rgb_to_hsl",
    "hsl_to_rgb",
]
