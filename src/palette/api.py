from __future__ import annotations

"""High-level public API for generating color palettes.

This module provides :func:`generate`, which validates the input, builds
the relation's stops (:mod:`palette.harmony`), samples them through an
LCh scale and sanitizes every sample. It never raises: invalid input and
color-math failures produce an empty :class:`palette.result.PaletteResult`.
"""

import logging
from typing import List, Optional

from .engine import ColorEngine, DefaultColorEngine
from .harmony import RelationType, build_path
from .result import ADAPTER_FAILURE, FALLBACK_COLOR, INVALID_INPUT, PaletteResult

logger = logging.getLogger(__name__)

INTERPOLATION_MODE = "lch"


def generate(
    base_color: object,
    relation: RelationType | str = RelationType.MONOCHROMATIC,
    count: int = 5,
    engine: Optional[ColorEngine] = None,
) -> PaletteResult:
    """Generate a palette of ``count`` colors from a base color.

    Parameters
    ----------
    base_color:
        Color token for the base color.
    relation:
        RelationType (or its value). Unknown values are treated as
        monochromatic.
    count:
        Number of colors to produce; must be at least 1.
    engine:
        Optional ColorEngine. If None, DefaultColorEngine is used.

    Returns
    -------
    PaletteResult
        Exactly ``count`` ``#rrggbb`` tokens, or an empty result with
        ``error`` set. A sample that fails validation is replaced by
        ``#ff0000`` rather than discarding the palette.
    """
    if engine is None:
        engine = DefaultColorEngine()

    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        return PaletteResult.failed(INVALID_INPUT)
    rel = RelationType.parse(relation)
    try:
        if not engine.is_valid(base_color):
            return PaletteResult.failed(INVALID_INPUT)
        base_hex = engine.to_hex(base_color)  # type: ignore[arg-type]
        path = build_path(engine, base_hex, rel, count)
        if path.literal:
            samples: List[str] = list(path.stops)
        else:
            samples = engine.scale(path.stops, mode=INTERPOLATION_MODE).sample(count)
        if path.reverse:
            samples.reverse()
    except Exception:
        logger.warning(
            "failed to generate %s palette for %r", rel.value, base_color, exc_info=True
        )
        return PaletteResult.failed(ADAPTER_FAILURE)

    return PaletteResult(colors=tuple(_sanitize(engine, c) for c in samples))


def _sanitize(engine: ColorEngine, color: str) -> str:
    try:
        return engine.to_hex(color) if engine.is_valid(color) else FALLBACK_COLOR
    except Exception:
        logger.debug("palette sample %r replaced with fallback", color, exc_info=True)
        return FALLBACK_COLOR


__all__ = ["generate", "INTERPOLATION_MODE"]
