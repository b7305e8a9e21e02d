from __future__ import annotations

"""Core value types used by the palette mixer.

Color tokens are plain strings; their validity is decided by a
:class:`palette.engine.ColorEngine`. :class:`Ingredient` is one
user-supplied color taking part in the mix.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from common.ids import IdAllocator, default_allocator

from .engine import ColorEngine, DefaultColorEngine

ColorToken = str

PLACEHOLDER_COLOR: ColorToken = "#ffffff"


@dataclass(frozen=True)
class Ingredient:
    """One input color of the mix.

    Attributes
    ----------
    id:
        Process-unique identifier (see :class:`common.ids.IdAllocator`).
    color:
        Color token as entered; not canonicalised.
    valid:
        Whether ``color`` parses. Kept consistent with ``color`` by
        :meth:`create` and :meth:`with_color`.
    locked:
        Locked ingredients are skipped by randomization.
    """

    id: int
    color: ColorToken
    valid: bool
    locked: bool = False

    @classmethod
    def create(
        cls,
        color: ColorToken,
        ids: Optional[IdAllocator] = None,
        engine: Optional[ColorEngine] = None,
        *,
        locked: bool = False,
    ) -> "Ingredient":
        """Create an ingredient with a fresh id and computed validity."""
        if ids is None:
            ids = default_allocator()
        if engine is None:
            engine = DefaultColorEngine()
        return cls(id=ids.next(), color=color, valid=engine.is_valid(color), locked=locked)

    def with_color(self, color: ColorToken, engine: Optional[ColorEngine] = None) -> "Ingredient":
        """Return a copy holding ``color`` with ``valid`` recomputed."""
        if engine is None:
            engine = DefaultColorEngine()
        return replace(self, color=color, valid=engine.is_valid(color))

    def revalidated(self, engine: Optional[ColorEngine] = None) -> "Ingredient":
        return self.with_color(self.color, engine)

    def toggled(self) -> "Ingredient":
        return replace(self, locked=not self.locked)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "color": self.color, "valid": self.valid, "locked": self.locked}


__all__ = ["ColorToken", "PLACEHOLDER_COLOR", "Ingredient"]
