"""Public entrypoint for the palette mixer's color engine.

This module re-exports the main user-facing types and functions so that
applications can simply import from ``palette`` instead of individual
submodules.
"""

from .api import generate
from .color_types import ColorToken, Ingredient
from .engine import ColorEngine, DefaultColorEngine
from .formatter import DisplayFormat, describe_color, format_color
from .harmony import RelationType
from .mix import mix
from .palette import Palette, gradient_css
from .result import FormatStatus, FormattedColor, PaletteResult
from .ui_helpers import (
    DISPLAY_FORMAT_OPTIONS,
    DISPLAY_FORMAT_VALUES,
    GRADIENT_DIRECTIONS,
    RELATION_OPTIONS,
)

__all__ = [
    "ColorEngine",
    "DefaultColorEngine",
    "ColorToken",
    "Ingredient",
    "RelationType",
    "DisplayFormat",
    "Palette",
    "PaletteResult",
    "FormatStatus",
    "FormattedColor",
    "generate",
    "mix",
    "format_color",
    "describe_color",
    "gradient_css",
    "RELATION_OPTIONS",
    "DISPLAY_FORMAT_OPTIONS",
    "DISPLAY_FORMAT_VALUES",
    "GRADIENT_DIRECTIONS",
]
