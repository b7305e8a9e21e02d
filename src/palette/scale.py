from __future__ import annotations

"""Multi-stop color scales sampled in a perceptual color space.

A :class:`ColorScale` places its stops evenly on [0, 1] and interpolates
between neighbouring stops in LCh (default), CIELAB or plain RGB. LCh hue
is interpolated along the shorter arc; an achromatic stop (NaN hue) takes
the hue of its chromatic neighbour.
"""

import math
from typing import List, Sequence

import numpy as np

from common.types import RGB
from util.color import rgb_to_hex

from .engine import lab_to_lch, lab_to_rgb, lch_to_lab, rgb_to_lab

_MODES = ("lch", "lab", "rgb")


class ColorScale:
    """Evenly spaced stops, sampled with :meth:`sample`."""

    def __init__(self, stops: Sequence[RGB], mode: str = "lch") -> None:
        if not stops:
            raise ValueError("ColorScale needs at least one stop.")
        if mode not in _MODES:
            raise ValueError(f"Unsupported interpolation mode: {mode}")
        self.mode = mode
        self._rgb = np.asarray(stops, dtype=np.float64).reshape(-1, 3)
        self._lab = rgb_to_lab(self._rgb)
        self._lch = lab_to_lch(self._lab)

    def __len__(self) -> int:
        return int(self._rgb.shape[0])

    def __call__(self, t: float) -> np.ndarray:
        """Return the RGB color at position ``t`` (clamped to [0, 1])."""
        k = len(self)
        if k == 1 or t <= 0.0:
            return self._rgb[0].copy()
        if t >= 1.0:
            return self._rgb[-1].copy()
        pos = t * (k - 1)
        i = min(int(math.floor(pos)), k - 2)
        f = pos - i
        if f <= 0.0:
            return self._rgb[i].copy()
        return self._interpolate(i, f)

    def sample(self, n: int) -> List[str]:
        """Return ``n`` evenly spaced colors as ``#rrggbb`` tokens.

        A single sample is taken at the middle of the scale.
        """
        if n < 1:
            return []
        if n == 1:
            positions = [0.5]
        else:
            positions = np.linspace(0.0, 1.0, n).tolist()
        return [rgb_to_hex(self(t)) for t in positions]

    def _interpolate(self, i: int, f: float) -> np.ndarray:
        if self.mode == "rgb":
            return self._rgb[i] + f * (self._rgb[i + 1] - self._rgb[i])
        if self.mode == "lab":
            return lab_to_rgb(self._lab[i] + f * (self._lab[i + 1] - self._lab[i]))

        L0, C0, h0 = self._lch[i]
        L1, C1, h1 = self._lch[i + 1]
        if not math.isnan(h0) and not math.isnan(h1):
            if h1 > h0 and h1 - h0 > 180.0:
                dh = h1 - (h0 + 360.0)
            elif h1 < h0 and h0 - h1 > 180.0:
                dh = h1 + 360.0 - h0
            else:
                dh = h1 - h0
            h = h0 + f * dh
        elif not math.isnan(h0):
            h = h0
        elif not math.isnan(h1):
            h = h1
        else:
            h = math.nan
        lch = np.array([L0 + f * (L1 - L0), C0 + f * (C1 - C0), h])
        return lab_to_rgb(lch_to_lab(lch))


__all__ = ["ColorScale"]
