from __future__ import annotations

"""Mixing ingredient colors into a single base color.

Only valid ingredients take part. Two or more are averaged in CIELAB so
the midpoint of two saturated colors does not turn muddy the way a plain
RGB average does.
"""

import logging
from typing import Optional, Sequence

from .color_types import ColorToken, Ingredient
from .engine import ColorEngine, DefaultColorEngine

logger = logging.getLogger(__name__)

MIX_MODE = "lab"


def mix(
    ingredients: Sequence[Ingredient],
    engine: Optional[ColorEngine] = None,
) -> Optional[ColorToken]:
    """Return the base color for ``ingredients`` or None.

    - no valid ingredient -> None
    - one valid ingredient -> its canonical ``#rrggbb`` form
    - several -> CIELAB average

    The input sequence is not modified. Color math failures yield None.
    """
    if engine is None:
        engine = DefaultColorEngine()

    colors = [item.color for item in ingredients if item.valid]
    if not colors:
        return None
    try:
        if len(colors) == 1:
            return engine.to_hex(colors[0])
        return engine.average(colors, mode=MIX_MODE)
    except Exception:
        logger.warning("failed to mix colors %r", colors, exc_info=True)
        return None


__all__ = ["mix", "MIX_MODE"]
