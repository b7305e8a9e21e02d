from __future__ import annotations

"""Rendering colors as text (hex, rgb(), hsl() or a CSS name).

Formatting never raises. Missing or invalid input renders as ``"N/A"``;
an unexpected failure on a valid color renders as ``"Error"`` so callers
can tell the two apart. A color without a CSS name renders as its hex
form prefixed with ``"~"``.
"""

import logging
import math
from enum import Enum
from typing import Optional

from .engine import ColorEngine, DefaultColorEngine
from .result import (
    FORMAT_ERROR,
    NOT_AVAILABLE,
    UNNAMED_PREFIX,
    FormatStatus,
    FormattedColor,
)

logger = logging.getLogger(__name__)


class DisplayFormat(str, Enum):
    """Text notations supported by :func:`format_color`."""

    HEX = "hex"
    RGB = "rgb"
    HSL = "hsl"
    NAME = "name"

    @classmethod
    def from_value(cls, value: object) -> "DisplayFormat":
        if isinstance(value, cls):
            return value
        for fmt in cls:
            if fmt.value == value:
                return fmt
        raise ValueError(f"Unknown display format: {value!r}")


def describe_color(
    color: Optional[str],
    mode: DisplayFormat | str = DisplayFormat.HEX,
    engine: Optional[ColorEngine] = None,
) -> FormattedColor:
    """Render ``color`` in ``mode`` together with the outcome status.

    Unknown modes render as hex.
    """
    if engine is None:
        engine = DefaultColorEngine()
    try:
        if not color or not engine.is_valid(color):
            return FormattedColor(NOT_AVAILABLE, FormatStatus.NOT_AVAILABLE)
        fmt = mode.value if isinstance(mode, DisplayFormat) else mode
        if fmt == DisplayFormat.RGB.value:
            r, g, b = (int(round(v)) for v in engine.to_rgb(color))
            return FormattedColor(f"rgb({r}, {g}, {b})")
        if fmt == DisplayFormat.HSL.value:
            h, s, lum = engine.to_hsl(color)
            h_i = 0 if math.isnan(h) else int(round(h))
            s_i = 0 if math.isnan(s) else int(round(s * 100))
            l_i = 0 if math.isnan(lum) else int(round(lum * 100))
            return FormattedColor(f"hsl({h_i}, {s_i}%, {l_i}%)")
        if fmt == DisplayFormat.NAME.value:
            return _describe_name(color, engine)
        return FormattedColor(engine.to_hex(color))
    except Exception:
        logger.debug("failed to format %r as %r", color, mode, exc_info=True)
        return FormattedColor(FORMAT_ERROR, FormatStatus.ERROR)


def _describe_name(color: str, engine: ColorEngine) -> FormattedColor:
    try:
        name = engine.name_of(color)
    except Exception:
        logger.debug("name lookup failed for %r", color, exc_info=True)
        name = None
    if name:
        return FormattedColor(name)
    return FormattedColor(UNNAMED_PREFIX + engine.to_hex(color), FormatStatus.UNNAMED)


def format_color(
    color: Optional[str],
    mode: DisplayFormat | str = DisplayFormat.HEX,
    engine: Optional[ColorEngine] = None,
) -> str:
    """Render ``color`` in ``mode``; see :func:`describe_color`."""
    return describe_color(color, mode, engine).text


__all__ = ["DisplayFormat", "describe_color", "format_color"]
