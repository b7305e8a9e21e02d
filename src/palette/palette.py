from __future__ import annotations

"""Container type for a generated palette.

This module defines the :class:`Palette` dataclass, which groups the base
color, relation, requested count and the generated colors, and renders
the palette as a CSS linear gradient.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .api import generate
from .engine import ColorEngine
from .harmony import RelationType

DEFAULT_GRADIENT_DIRECTION = "to right"


def gradient_css(colors: Tuple[str, ...] | list[str], direction: str = DEFAULT_GRADIENT_DIRECTION) -> str:
    """Return ``linear-gradient(<direction>, <c1>, <c2>, ...)``."""
    return f"linear-gradient({direction}, {', '.join(colors)})"


@dataclass(frozen=True)
class Palette:
    """Generated color palette.

    Attributes
    ----------
    base_color:
        Canonical base color the palette was generated from.
    relation:
        Hue relation used (e.g. Complementary, Triadic).
    count:
        Requested number of colors; equals ``len(colors)``.
    colors:
        ``#rrggbb`` tokens in generation order.
    """

    base_color: str
    relation: RelationType
    count: int
    colors: Tuple[str, ...]

    @classmethod
    def build(
        cls,
        base_color: Optional[str],
        relation: RelationType | str,
        count: int,
        engine: Optional[ColorEngine] = None,
    ) -> Optional["Palette"]:
        """Generate a palette, or None when nothing usable comes out."""
        if not base_color:
            return None
        result = generate(base_color, relation, count, engine)
        if not result.ok:
            return None
        return cls(
            base_color=base_color,
            relation=RelationType.parse(relation),
            count=count,
            colors=result.colors,
        )

    def gradient_css(self, direction: str = DEFAULT_GRADIENT_DIRECTION) -> str:
        return gradient_css(self.colors, direction)
