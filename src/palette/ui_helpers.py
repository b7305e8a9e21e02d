from __future__ import annotations

"""Helper tables for integrating the palette mixer into external UIs.

This module exposes label/value pairs for relation types, display formats
and gradient directions, so that UI and CLI code share one list of
choices.
"""

from typing import List

from .formatter import DisplayFormat
from .harmony import RelationType

GRADIENT_DIRECTIONS: List[str] = [
    "to right",
    "to bottom",
    "to top left",
    "to bottom right",
    "45deg",
    "135deg",
]

# Label/Enum pairs for UI choices
RELATION_OPTIONS: List[tuple[str, RelationType]] = [
    ("Monochromatic", RelationType.MONOCHROMATIC),
    ("Analogous", RelationType.ANALOGOUS),
    ("Complementary", RelationType.COMPLEMENTARY),
    ("Split Complementary", RelationType.SPLIT_COMPLEMENTARY),
    ("Triadic", RelationType.TRIADIC),
]
# "name" is a detail line only, not a selectable display preference.
DISPLAY_FORMAT_OPTIONS: List[tuple[str, DisplayFormat]] = [
    ("HEX", DisplayFormat.HEX),
    ("RGB", DisplayFormat.RGB),
    ("HSL", DisplayFormat.HSL),
]

DISPLAY_FORMAT_VALUES: frozenset[str] = frozenset(fmt.value for _, fmt in DISPLAY_FORMAT_OPTIONS)


__all__ = [
    "GRADIENT_DIRECTIONS",
    "RELATION_OPTIONS",
    "DISPLAY_FORMAT_OPTIONS",
    "DISPLAY_FORMAT_VALUES",
]
