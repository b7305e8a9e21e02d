from __future__ import annotations

"""Saved palette snapshots and the bounded, newest-first collection.

A :class:`SavedPalette` freezes one generation result together with the
ingredients it came from. Only the name can change afterwards (a renamed
copy replaces the record). :class:`SavedPaletteCollection` keeps records
ordered newest-first by id and never holds more than its capacity.
"""

import bisect
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from common.settings import get as get_settings
from palette.color_types import Ingredient
from palette.harmony import RelationType


@dataclass(frozen=True)
class SavedPalette:
    """Snapshot of a generated palette.

    Attributes
    ----------
    id:
        Creation time in milliseconds; unique within a collection.
    name:
        User-editable display name.
    ingredients:
        Input colors of the mix at save time.
    base_color:
        Mixed base color (None only for repaired legacy data).
    palette:
        Generated ``#rrggbb`` tokens.
    relation, count, gradient_direction:
        Generation settings at save time. ``count`` equals ``len(palette)``
        for records saved from live state; a record repaired from stored
        data keeps its stored or default count even when its palette was
        dropped.
    """

    id: int
    name: str
    ingredients: Tuple[Ingredient, ...]
    base_color: Optional[str]
    palette: Tuple[str, ...]
    relation: RelationType
    count: int
    gradient_direction: str

    def renamed(self, name: str) -> "SavedPalette":
        return replace(self, name=name)

    def ingredient_colors(self) -> List[str]:
        return [item.color for item in self.ingredients]

    def same_content(self, other: "SavedPalette") -> bool:
        """True when both records would render the same palette from the same inputs."""
        return (
            self.palette == other.palette
            and self.relation == other.relation
            and self.count == other.count
            and self.gradient_direction == other.gradient_direction
            and self.ingredient_colors() == other.ingredient_colors()
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "ingredients": [item.to_dict() for item in self.ingredients],
            "baseColor": self.base_color,
            "palette": list(self.palette),
            "relationType": self.relation.value,
            "count": self.count,
            "gradientDirection": self.gradient_direction,
        }


def next_record_id(existing: Iterable[int], now_ms: int) -> int:
    """Return ``now_ms`` unless an existing id is at or past it."""
    latest = max(existing, default=None)
    if latest is not None and latest >= now_ms:
        return latest + 1
    return now_ms


class SavedPaletteCollection:
    """Bounded collection of saved palettes, newest (highest id) first."""

    def __init__(self, records: Iterable[SavedPalette] = (), capacity: Optional[int] = None) -> None:
        if capacity is None:
            capacity = get_settings().MAX_SAVED_PALETTES
        if capacity < 1:
            raise ValueError("capacity must be positive.")
        self.capacity = int(capacity)
        seen: set[int] = set()
        unique: List[SavedPalette] = []
        for rec in records:
            if rec.id in seen:
                continue
            seen.add(rec.id)
            unique.append(rec)
        unique.sort(key=lambda r: r.id, reverse=True)
        self._records: List[SavedPalette] = unique[: self.capacity]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SavedPalette]:
        return iter(self._records)

    def __getitem__(self, index: int) -> SavedPalette:
        return self._records[index]

    @property
    def records(self) -> Tuple[SavedPalette, ...]:
        return tuple(self._records)

    @property
    def is_full(self) -> bool:
        return len(self._records) >= self.capacity

    def ids(self) -> List[int]:
        return [r.id for r in self._records]

    def get(self, record_id: int) -> Optional[SavedPalette]:
        for rec in self._records:
            if rec.id == record_id:
                return rec
        return None

    def find_equivalent(self, record: SavedPalette) -> Optional[SavedPalette]:
        for rec in self._records:
            if rec.same_content(record):
                return rec
        return None

    def add(self, record: SavedPalette) -> Optional[SavedPalette]:
        """Insert ``record`` in id order and return the evicted record, if any.

        Raises ValueError if the id is already present.
        """
        if self.get(record.id) is not None:
            raise ValueError(f"duplicate saved palette id: {record.id}")
        # _records is sorted by descending id; bisect on negated ids.
        keys = [-r.id for r in self._records]
        self._records.insert(bisect.bisect_left(keys, -record.id), record)
        if len(self._records) > self.capacity:
            return self._records.pop()
        return None

    def remove(self, record_id: int) -> bool:
        before = len(self._records)
        self._records = [r for r in self._records if r.id != record_id]
        return len(self._records) != before

    def rename(self, record_id: int, name: str) -> Optional[SavedPalette]:
        """Rename a record; returns the renamed record or None if the id is unknown."""
        for i, rec in enumerate(self._records):
            if rec.id == record_id:
                self._records[i] = rec.renamed(name)
                return self._records[i]
        return None

    def to_list(self) -> List[Dict[str, Any]]:
        return [r.to_dict() for r in self._records]


__all__ = ["SavedPalette", "SavedPaletteCollection", "next_record_id"]
