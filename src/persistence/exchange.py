from __future__ import annotations

"""Palette documents exchanged as JSON files.

:func:`export_document` describes a generated palette in the portable
format (camelCase keys plus a ready-made ``gradientCSS``). Reading goes the
other way through :func:`parse_import_document`, which either returns a
:class:`persistence.records.SavedPalette` with fresh ids or raises
:class:`ImportRejected`. Unlike the normalizer, an import is all or
nothing: a required field that is missing or of the wrong type rejects the
whole document. Optional fields (palette entries, relation value, gradient
direction) are then coerced with the normalizer's ``RECORD_POLICY`` so a
stored and an imported record accept the same values. Ingredients are
rebuilt here because an import never keeps the document's ids.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from common.ids import IdAllocator, default_allocator
from palette.color_types import PLACEHOLDER_COLOR, Ingredient
from palette.engine import ColorEngine, DefaultColorEngine
from palette.harmony import RelationType
from palette.palette import DEFAULT_GRADIENT_DIRECTION, gradient_css

from .normalizer import coerce_field
from .records import SavedPalette, next_record_id

logger = logging.getLogger(__name__)

RELATION_KEYS = ("relationType", "type", "paletteType")
COUNT_KEYS = ("count", "colorCount")
INGREDIENT_KEYS = ("ingredients", "mixColors", "ingredientColors")
BASE_COLOR_KEYS = ("baseColor", "mixedColor")


class ImportRejected(ValueError):
    """Raised when an import document cannot be used; ``reason`` is user-facing."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


def export_document(
    base_color: str,
    relation: RelationType | str,
    count: int,
    palette: Sequence[str],
    ingredient_colors: Sequence[str],
    gradient_direction: str = DEFAULT_GRADIENT_DIRECTION,
) -> Dict[str, Any]:
    """Return the export mapping for one palette."""
    rel = RelationType.parse(relation)
    colors = list(palette)
    return {
        "name": f"{rel.value}_{base_color.lstrip('#')}",
        "ingredientColors": list(ingredient_colors),
        "baseColor": base_color,
        "relationType": rel.value,
        "count": count,
        "palette": colors,
        "gradientDirection": gradient_direction,
        "gradientCSS": gradient_css(colors, gradient_direction),
    }


def export_filename(doc: Mapping[str, Any]) -> str:
    """Suggested file name, ``palette_<relation>_<hex>.json``."""
    base = str(doc.get("baseColor") or "").lstrip("#")
    return f"palette_{doc.get('relationType')}_{base}.json"


def write_export(doc: Mapping[str, Any], path: Path | str) -> Path:
    """Write ``doc`` as indented UTF-8 JSON and return the path written."""
    p = Path(path)
    if p.parent and not p.parent.exists():
        p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(dict(doc), indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    logger.info("exported palette to %s", p)
    return p


def _first_present(doc: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if key in doc and doc[key] is not None:
            return doc[key]
    return None


def _require_count(value: Any) -> int:
    if isinstance(value, bool):
        raise ImportRejected("count must be a number")
    if isinstance(value, int) and value >= 1:
        return value
    if isinstance(value, float) and value.is_integer() and value >= 1:
        return int(value)
    raise ImportRejected("count must be a whole number of at least 1")


def _ingredient_from(entry: Any, ids: IdAllocator, engine: ColorEngine) -> Ingredient:
    if isinstance(entry, Mapping):
        color = entry.get("color")
    else:
        color = entry
    if not isinstance(color, str) or not color.strip():
        color = PLACEHOLDER_COLOR
    # ids are never taken from the document
    return Ingredient.create(color, ids, engine)


def parse_import_document(
    source: Mapping[str, Any] | str | bytes,
    ids: Optional[IdAllocator] = None,
    engine: Optional[ColorEngine] = None,
    *,
    now: Optional[datetime] = None,
    existing_ids: Sequence[int] = (),
) -> SavedPalette:
    """Validate an import document and turn it into a SavedPalette.

    Raises
    ------
    ImportRejected
        If the text is not JSON, the top level is not an object, or one of
        palette / relation / count / ingredients is missing or ill-typed.
    """
    ids = ids or default_allocator()
    engine = engine or DefaultColorEngine()
    now = now or datetime.now()

    if isinstance(source, (str, bytes)):
        try:
            doc = json.loads(source)
        except Exception as e:
            raise ImportRejected("could not parse JSON") from e
    else:
        doc = source
    if not isinstance(doc, Mapping):
        raise ImportRejected("invalid JSON structure")

    palette = doc.get("palette")
    if not isinstance(palette, list):
        raise ImportRejected("palette must be a list")
    relation = _first_present(doc, RELATION_KEYS)
    if not isinstance(relation, str) or not relation.strip():
        raise ImportRejected("missing palette relation")
    count_raw = _first_present(doc, COUNT_KEYS)
    if count_raw is None:
        raise ImportRejected("missing color count")
    count = _require_count(count_raw)
    ingredients_raw = _first_present(doc, INGREDIENT_KEYS)
    if not isinstance(ingredients_raw, list):
        raise ImportRejected("ingredients must be a list")

    name = doc.get("name")
    if not isinstance(name, str) or not name.strip():
        name = f"Imported {now.strftime('%H:%M:%S')}"
    base_color = _first_present(doc, BASE_COLOR_KEYS)
    if not isinstance(base_color, str) or not engine.is_valid(base_color):
        base_color = None
    direction = coerce_field("gradient_direction", doc.get("gradientDirection"), ids, engine)

    record_id = next_record_id(existing_ids, int(now.timestamp() * 1000))
    return SavedPalette(
        id=record_id,
        name=name.strip(),
        ingredients=tuple(_ingredient_from(e, ids, engine) for e in ingredients_raw),
        base_color=base_color,
        palette=coerce_field("palette", palette, ids, engine),
        relation=coerce_field("relation", relation.strip(), ids, engine),
        count=count,
        gradient_direction=direction,
    )


__all__ = [
    "ImportRejected",
    "export_document",
    "export_filename",
    "write_export",
    "parse_import_document",
]
