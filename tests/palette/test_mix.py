from __future__ import annotations

import logging

import pytest

from common.ids import IdAllocator
from palette.color_types import Ingredient
from palette.engine import DefaultColorEngine
from palette.mix import mix


def _items(ids: IdAllocator, engine: DefaultColorEngine, *colors: str) -> list[Ingredient]:
    return [Ingredient.create(c, ids, engine) for c in colors]


def test_no_valid_ingredient_gives_none(ids, engine) -> None:
    assert mix([], engine) is None
    assert mix(_items(ids, engine, "nope", "#12"), engine) is None


def test_single_valid_ingredient_is_canonicalized(ids, engine) -> None:
    assert mix(_items(ids, engine, "Red"), engine) == "#ff0000"
    assert mix(_items(ids, engine, "bogus", "#ABC"), engine) == "#aabbcc"


# What this tests
# - rose #e11d48 + blue #2563eb averaged in CIELAB lands on the purple #b04a97
def test_two_colors_average_in_lab(ids, engine) -> None:
    base = mix(_items(ids, engine, "#e11d48", "#2563eb"), engine)
    assert base is not None
    assert base == "#b04a97"
    assert base != engine.average(["#e11d48", "#2563eb"], mode="rgb")


def test_single_base_mixes_to_itself(ids, engine) -> None:
    assert mix(_items(ids, engine, "#e11d48"), engine) == "#e11d48"


def test_order_does_not_matter(ids, engine) -> None:
    a = mix(_items(ids, engine, "#e11d48", "#2563eb", "#16a34a"), engine)
    b = mix(_items(ids, engine, "#16a34a", "#e11d48", "#2563eb"), engine)
    assert a == b


def test_invalid_ingredients_are_ignored(ids, engine) -> None:
    with_invalid = mix(_items(ids, engine, "#e11d48", "oops", "#2563eb"), engine)
    without = mix(_items(ids, engine, "#e11d48", "#2563eb"), engine)
    assert with_invalid == without


def test_input_is_not_mutated(ids, engine) -> None:
    items = _items(ids, engine, "#e11d48", "#2563eb")
    before = list(items)
    mix(items, engine)
    assert items == before


class _FailingAverage(DefaultColorEngine):
    def average(self, tokens, mode="lab"):
        raise RuntimeError("boom")


def test_adapter_failure_gives_none(ids, caplog: pytest.LogCaptureFixture) -> None:
    engine = _FailingAverage()
    with caplog.at_level(logging.WARNING, logger="palette.mix"):
        assert mix(_items(ids, engine, "#e11d48", "#2563eb"), engine) is None
    assert caplog.records
