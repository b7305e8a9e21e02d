from __future__ import annotations

"""Color math engine used by the palette mixer.

This module defines the :class:`ColorEngine` protocol (the operations the
generator, mixer and formatter rely on) and a default implementation that
works in sRGB (D65), HSL, CIELAB and CIE LCh. Lightness steps, companding
constants and the LCh hue conventions follow chroma.js so that palettes
match what users of that library expect.

All color-returning operations return canonical ``"#rrggbb"`` tokens.
Operations raise ``ValueError``/``TypeError`` on tokens that do not parse;
callers that must never fail (generator, mixer, formatter) catch these at
their own boundary.
"""

import math
from typing import TYPE_CHECKING, Optional, Protocol, Sequence

import numpy as np

from common.types import HSL, LAB, LCH, RGB
from util.color import (
    hsl_to_rgb,
    is_color_token,
    name_for_hex,
    parse_color_token,
    rgb_to_hex,
    rgb_to_hsl,
)

if TYPE_CHECKING:
    from .scale import ColorScale


# D65 reference white
_XN = 0.950470
_YN = 1.0
_ZN = 1.088830

# CIELAB companding constants
_T0 = 4.0 / 29.0
_T1 = 6.0 / 29.0
_T2 = 3.0 * _T1 * _T1
_T3 = _T1 * _T1 * _T1

# Lightness step used by brighten/darken
KN = 18.0


class ColorEngine(Protocol):
    """Protocol abstracting the color operations used by the palette mixer."""

    def is_valid(self, token: object) -> bool: ...

    def to_rgb(self, token: str) -> RGB: ...

    def to_hex(self, token: str) -> str: ...

    def to_hsl(self, token: str) -> HSL: ...

    def to_lab(self, token: str) -> LAB: ...

    def name_of(self, token: str) -> Optional[str]: ...

    def luminance(self, token: str) -> float: ...

    def brighten(self, token: str, steps: float = 1.0) -> str: ...

    def darken(self, token: str, steps: float = 1.0) -> str: ...

    def with_hue(self, token: str, hue: float) -> str: ...

    def with_hue_offset(self, token: str, degrees: float) -> str: ...

    def scale(self, stops: Sequence[str], mode: str = "lch") -> "ColorScale": ...

    def average(self, tokens: Sequence[str], mode: str = "lab") -> str: ...

    def random(self, rng: np.random.Generator) -> str: ...


class DefaultColorEngine:
    """Default implementation based on CIELAB/LCh (D65) and HSL."""

    def is_valid(self, token: object) -> bool:
        return is_color_token(token)

    def to_rgb(self, token: str) -> RGB:
        """Parse a token into RGB channels in [0, 255]."""
        return parse_color_token(token)

    def to_hex(self, token: str) -> str:
        """Return the canonical lowercase ``#rrggbb`` form of a token."""
        return rgb_to_hex(self.to_rgb(token))

    def to_hsl(self, token: str) -> HSL:
        """Return (h, s, l); h is NaN for achromatic colors."""
        return rgb_to_hsl(self.to_rgb(token))

    def to_lab(self, token: str) -> LAB:
        lab = rgb_to_lab(np.asarray(self.to_rgb(token), dtype=np.float64))
        return (float(lab[0]), float(lab[1]), float(lab[2]))

    def to_lch(self, token: str) -> LCH:
        lch = lab_to_lch(np.asarray(self.to_lab(token), dtype=np.float64))
        return (float(lch[0]), float(lch[1]), float(lch[2]))

    def name_of(self, token: str) -> Optional[str]:
        """Return the CSS name whose value equals the token, if any."""
        return name_for_hex(self.to_hex(token))

    def luminance(self, token: str) -> float:
        """WCAG relative luminance in [0, 1]."""
        rgb = np.asarray(self.to_rgb(token), dtype=np.float64) / 255.0
        lin = np.where(rgb <= 0.03928, rgb / 12.92, ((rgb + 0.055) / 1.055) ** 2.4)
        return float(0.2126 * lin[0] + 0.7152 * lin[1] + 0.0722 * lin[2])

    def brighten(self, token: str, steps: float = 1.0) -> str:
        """Shift CIELAB lightness by ``KN * steps``."""
        lab = rgb_to_lab(np.asarray(self.to_rgb(token), dtype=np.float64))
        lab[0] += KN * float(steps)
        return rgb_to_hex(lab_to_rgb(lab))

    def darken(self, token: str, steps: float = 1.0) -> str:
        return self.brighten(token, -float(steps))

    def with_hue(self, token: str, hue: float) -> str:
        """Replace the HSL hue (degrees) keeping saturation and lightness."""
        _, s, lum = self.to_hsl(token)
        return rgb_to_hex(hsl_to_rgb(float(hue), s, lum))

    def with_hue_offset(self, token: str, degrees: float) -> str:
        """Rotate the HSL hue by ``degrees``. Achromatic colors are unchanged."""
        h, s, lum = self.to_hsl(token)
        if math.isnan(h):
            return self.to_hex(token)
        return rgb_to_hex(hsl_to_rgb(h + float(degrees), s, lum))

    def scale(self, stops: Sequence[str], mode: str = "lch") -> "ColorScale":
        from .scale import ColorScale

        return ColorScale([self.to_rgb(s) for s in stops], mode=mode)

    def average(self, tokens: Sequence[str], mode: str = "lab") -> str:
        """Average colors component-wise in ``mode`` ("lab", "lch" or "rgb")."""
        if not tokens:
            raise ValueError("average() requires at least one color")
        rgb = np.array([self.to_rgb(t) for t in tokens], dtype=np.float64)
        if mode == "rgb":
            return rgb_to_hex(rgb.mean(axis=0))
        lab = rgb_to_lab(rgb)
        if mode == "lab":
            return rgb_to_hex(lab_to_rgb(lab.mean(axis=0)))
        if mode == "lch":
            lch = lab_to_lch(lab)
            hues = lch[:, 2]
            chromatic = ~np.isnan(hues)
            if chromatic.any():
                rad = np.radians(hues[chromatic])
                h = math.degrees(math.atan2(np.sin(rad).mean(), np.cos(rad).mean())) % 360.0
            else:
                h = math.nan
            mean = np.array([lch[:, 0].mean(), lch[:, 1].mean(), h])
            return rgb_to_hex(lab_to_rgb(lch_to_lab(mean)))
        raise ValueError(f"Unsupported average mode: {mode}")

    def random(self, rng: np.random.Generator) -> str:
        """Return a uniformly random opaque color."""
        value = int(rng.integers(0, 0x1000000))
        return f"#{value:06x}"


def _f(t: np.ndarray) -> np.ndarray:
    return np.where(t > _T3, np.cbrt(t), t / _T2 + _T0)


def _f_inv(t: np.ndarray) -> np.ndarray:
    return np.where(t > _T1, t * t * t, _T2 * (t - _T0))


def rgb_to_lab(rgb: np.ndarray) -> np.ndarray:
    """Convert RGB array (..., 3) in [0, 255] to CIELAB (D65)."""
    c = np.asarray(rgb, dtype=np.float64) / 255.0
    lin = np.where(c <= 0.04045, c / 12.92, ((c + 0.055) / 1.055) ** 2.4)
    r, g, b = lin[..., 0], lin[..., 1], lin[..., 2]
    x = (0.4124564 * r + 0.3575761 * g + 0.1804375 * b) / _XN
    y = (0.2126729 * r + 0.7151522 * g + 0.0721750 * b) / _YN
    z = (0.0193339 * r + 0.1191920 * g + 0.9503041 * b) / _ZN
    fx, fy, fz = _f(x), _f(y), _f(z)
    L = np.maximum(0.0, 116.0 * fy - 16.0)
    return np.stack([L, 500.0 * (fx - fy), 200.0 * (fy - fz)], axis=-1)


def lab_to_rgb(lab: np.ndarray) -> np.ndarray:
    """Convert CIELAB array (..., 3) to RGB in [0, 255], clipped to gamut."""
    lab = np.asarray(lab, dtype=np.float64)
    L, a, b = lab[..., 0], lab[..., 1], lab[..., 2]
    fy = (L + 16.0) / 116.0
    fx = fy + a / 500.0
    fz = fy - b / 200.0
    x = _XN * _f_inv(fx)
    y = _YN * _f_inv(fy)
    z = _ZN * _f_inv(fz)

    r = 3.2404542 * x - 1.5371385 * y - 0.4985314 * z
    g = -0.9692660 * x + 1.8760108 * y + 0.0415560 * z
    b_out = 0.0556434 * x - 0.2040259 * y + 1.0572252 * z

    lin = np.stack([r, g, b_out], axis=-1)
    mask = lin <= 0.00304
    srgb = np.where(mask, 12.92 * lin, 1.055 * np.power(np.clip(lin, 0.0, None), 1 / 2.4) - 0.055)
    return np.clip(srgb * 255.0, 0.0, 255.0)


def lab_to_lch(lab: np.ndarray) -> np.ndarray:
    """Convert CIELAB to LCh. Hue is NaN where chroma rounds to zero."""
    lab = np.asarray(lab, dtype=np.float64)
    L, a, b = lab[..., 0], lab[..., 1], lab[..., 2]
    c = np.hypot(a, b)
    h = (np.degrees(np.arctan2(b, a)) + 360.0) % 360.0
    h = np.where(np.round(c * 10000.0) == 0, np.nan, h)
    return np.stack([L, c, h], axis=-1)


def lch_to_lab(lch: np.ndarray) -> np.ndarray:
    """Convert LCh to CIELAB. NaN hue is treated as 0 (chroma is then ~0)."""
    lch = np.asarray(lch, dtype=np.float64)
    L, c, h = lch[..., 0], lch[..., 1], lch[..., 2]
    rad = np.radians(np.nan_to_num(h, nan=0.0))
    return np.stack([L, c * np.cos(rad), c * np.sin(rad)], axis=-1)


__all__ = [
    "KN",
    "ColorEngine",
    "DefaultColorEngine",
    "rgb_to_lab",
    "lab_to_rgb",
    "lab_to_lch",
    "lch_to_lab",
]
