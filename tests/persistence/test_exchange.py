from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pytest

from palette.harmony import RelationType
from persistence.exchange import (
    ImportRejected,
    export_document,
    export_filename,
    parse_import_document,
    write_export,
)

NOW = datetime(2026, 10, 19, 14, 5, 9)


def _doc() -> dict:
    return export_document(
        "#b04a97",
        RelationType.SPLIT_COMPLEMENTARY,
        3,
        ["#111111", "#222222", "#333333"],
        ["#e11d48", "#2563eb"],
        "45deg",
    )


def test_export_document_shape() -> None:
    doc = _doc()
    assert doc == {
        "name": "split-complementary_b04a97",
        "ingredientColors": ["#e11d48", "#2563eb"],
        "baseColor": "#b04a97",
        "relationType": "split-complementary",
        "count": 3,
        "palette": ["#111111", "#222222", "#333333"],
        "gradientDirection": "45deg",
        "gradientCSS": "linear-gradient(45deg, #111111, #222222, #333333)",
    }
    assert export_filename(doc) == "palette_split-complementary_b04a97.json"


@pytest.mark.integration
def test_write_export_is_indented_utf8(tmp_path: Path) -> None:
    path = write_export(_doc(), tmp_path / "out" / "p.json")
    text = path.read_text(encoding="utf-8")
    assert text.startswith("{\n  ")
    assert json.loads(text)["count"] == 3


def test_exported_document_imports_back(ids, engine) -> None:
    rec = parse_import_document(_doc(), ids, engine, now=NOW)
    assert rec.name == "split-complementary_b04a97"
    assert rec.relation is RelationType.SPLIT_COMPLEMENTARY
    assert rec.count == 3
    assert rec.ingredient_colors() == ["#e11d48", "#2563eb"]
    assert rec.gradient_direction == "45deg"
    assert rec.id == int(NOW.timestamp() * 1000)


def test_import_assigns_fresh_ingredient_ids(ids, engine) -> None:
    doc = {
        "palette": ["#ff0000"],
        "type": "triadic",
        "count": 1,
        "mixColors": [{"id": 7, "color": "#ff0000"}, "#00ff00", {"color": None}],
    }
    rec = parse_import_document(json.dumps(doc), ids, engine, now=NOW)
    assert [i.id for i in rec.ingredients] == [1001, 1002, 1003]
    assert rec.ingredient_colors() == ["#ff0000", "#00ff00", "#ffffff"]
    assert rec.name == "Imported 14:05:09"
    assert rec.gradient_direction == "to right"


def test_import_accepts_alias_keys(ids, engine) -> None:
    doc = {"palette": [], "paletteType": "analogous", "colorCount": 4.0, "ingredientColors": []}
    rec = parse_import_document(doc, ids, engine, now=NOW)
    assert rec.relation is RelationType.ANALOGOUS
    assert rec.count == 4


def test_import_coerces_optional_fields_like_stored_records(ids, engine) -> None:
    doc = {
        "palette": ["#111111", 3, None, "#222222"],
        "relationType": "triadic",
        "count": 2,
        "ingredients": [],
        "gradientDirection": "   ",
    }
    rec = parse_import_document(doc, ids, engine, now=NOW)
    assert rec.palette == ("#111111", "#222222")
    assert rec.gradient_direction == "to right"


def test_import_unknown_relation_falls_back(ids, engine) -> None:
    doc = {"palette": [], "relationType": "hexadic", "count": 3, "ingredients": []}
    assert parse_import_document(doc, ids, engine, now=NOW).relation is RelationType.MONOCHROMATIC


def test_import_id_stays_unique(ids, engine) -> None:
    now_ms = int(NOW.timestamp() * 1000)
    rec = parse_import_document(_doc(), ids, engine, now=NOW, existing_ids=[now_ms])
    assert rec.id == now_ms + 1


@pytest.mark.parametrize(
    "source",
    [
        "{not json",
        "[]",
        {"relationType": "triadic", "count": 3, "ingredients": []},
        {"palette": "x", "relationType": "triadic", "count": 3, "ingredients": []},
        {"palette": [], "count": 3, "ingredients": []},
        {"palette": [], "relationType": "  ", "count": 3, "ingredients": []},
        {"palette": [], "relationType": "triadic", "ingredients": []},
        {"palette": [], "relationType": "triadic", "count": 0, "ingredients": []},
        {"palette": [], "relationType": "triadic", "count": True, "ingredients": []},
        {"palette": [], "relationType": "triadic", "count": 2.5, "ingredients": []},
        {"palette": [], "relationType": "triadic", "count": 3},
        {"palette": [], "relationType": "triadic", "count": 3, "ingredients": "red"},
    ],
)
def test_import_rejects_whole_document(source, ids, engine) -> None:
    with pytest.raises(ImportRejected) as info:
        parse_import_document(source, ids, engine, now=NOW)
    assert info.value.reason
    assert isinstance(info.value, ValueError)
