from __future__ import annotations

"""Color-theory relations and the stop recipes used to build palettes.

This module defines :class:`RelationType` and, for each relation, a recipe
that turns a base color into the stops of a perceptual scale. Recipes are
kept in a registry keyed by the relation value so the whole table is in
one place. Pure black and pure white bases bypass the relation entirely.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from common.base_registry import BaseRegistry

from .engine import ColorEngine

BLACK = "#000000"
WHITE = "#ffffff"
MID_GRAY = "#888888"

# brighten/darken steps used for the monochromatic and degenerate stops
LIGHTNESS_STEPS = 2.0


class RelationType(str, Enum):
    """Hue relationship between the base color and the rest of the palette."""

    MONOCHROMATIC = "monochromatic"
    ANALOGOUS = "analogous"
    COMPLEMENTARY = "complementary"
    SPLIT_COMPLEMENTARY = "split-complementary"
    TRIADIC = "triadic"

    @classmethod
    def from_value(cls, value: object) -> "RelationType":
        """Strict lookup; raises ValueError for unknown values."""
        if isinstance(value, cls):
            return value
        for rel in cls:
            if rel.value == value:
                return rel
        raise ValueError(f"Unknown relation type: {value!r}")

    @classmethod
    def parse(cls, value: object, default: Optional["RelationType"] = None) -> "RelationType":
        """Lenient lookup; unknown values fall back to ``default`` (monochromatic)."""
        try:
            return cls.from_value(value)
        except ValueError:
            return default if default is not None else cls.MONOCHROMATIC


@dataclass(frozen=True)
class HarmonyPath:
    """Stops for one palette.

    Attributes
    ----------
    stops:
        Colors placed evenly along the scale.
    literal:
        If True the stops *are* the palette and no sampling happens.
    reverse:
        If True the sampled colors are emitted in reverse order.
    """

    stops: Tuple[str, ...]
    literal: bool = False
    reverse: bool = False


Recipe = Callable[[ColorEngine, str, int], HarmonyPath]

RECIPES = BaseRegistry()


@RECIPES.register(RelationType.MONOCHROMATIC.value)
def _monochromatic(engine: ColorEngine, base: str, count: int) -> HarmonyPath:
    return HarmonyPath(
        stops=(
            engine.darken(base, LIGHTNESS_STEPS),
            base,
            engine.brighten(base, LIGHTNESS_STEPS),
        )
    )


@RECIPES.register(RelationType.ANALOGOUS.value)
def _analogous(engine: ColorEngine, base: str, count: int) -> HarmonyPath:
    return HarmonyPath(
        stops=(
            engine.with_hue_offset(base, 30.0),
            base,
            engine.with_hue_offset(base, -30.0),
        )
    )


@RECIPES.register(RelationType.COMPLEMENTARY.value)
def _complementary(engine: ColorEngine, base: str, count: int) -> HarmonyPath:
    h, _, _ = engine.to_hsl(base)
    complement = engine.with_hue(base, (h + 180.0) % 360.0 if not math.isnan(h) else h)
    if count <= 2:
        return HarmonyPath(stops=(base, complement)[:count], literal=True)
    return HarmonyPath(stops=(base, complement))


@RECIPES.register(RelationType.TRIADIC.value)
def _triadic(engine: ColorEngine, base: str, count: int) -> HarmonyPath:
    return HarmonyPath(
        stops=(
            base,
            engine.with_hue_offset(base, 120.0),
            engine.with_hue_offset(base, -120.0),
            base,
        )
    )


@RECIPES.register(RelationType.SPLIT_COMPLEMENTARY.value)
def _split_complementary(engine: ColorEngine, base: str, count: int) -> HarmonyPath:
    return HarmonyPath(
        stops=(
            base,
            engine.with_hue_offset(base, 150.0),
            engine.with_hue_offset(base, -150.0),
            base,
        )
    )


def degenerate_path(engine: ColorEngine, base: str) -> Optional[HarmonyPath]:
    """Stops for zero- or full-luminance bases, or None for any other color."""
    lum = engine.luminance(base)
    if lum <= 0.0:
        return HarmonyPath(stops=(BLACK, engine.brighten(base, LIGHTNESS_STEPS), MID_GRAY))
    if math.isclose(lum, 1.0):
        # White runs gray -> white and is then emitted reversed.
        return HarmonyPath(
            stops=(MID_GRAY, engine.darken(base, LIGHTNESS_STEPS), WHITE),
            reverse=True,
        )
    return None


def build_path(
    engine: ColorEngine,
    base: str,
    relation: RelationType | str,
    count: int,
) -> HarmonyPath:
    """Return the stops for ``base`` under ``relation``.

    Luminance extremes take priority over the relation; unknown relations
    use the monochromatic recipe.
    """
    path = degenerate_path(engine, base)
    if path is not None:
        return path
    key = relation.value if isinstance(relation, RelationType) else relation
    recipe: Recipe = RECIPES.get_or(key, RelationType.MONOCHROMATIC.value)
    return recipe(engine, base, count)


__all__ = [
    "RelationType",
    "HarmonyPath",
    "RECIPES",
    "degenerate_path",
    "build_path",
]
