import re

import pytest

hypothesis = pytest.importorskip("hypothesis", reason="hypothesis is a dev optional dependency")
from hypothesis import given, settings, strategies as st  # type: ignore

from palette import RelationType, format_color, generate
from palette.color_types import Ingredient
from palette.mix import mix

HEX_RE = re.compile(r"^#[0-9a-f]{6}$")

hex_colors = st.integers(0, 0xFFFFFF).map(lambda v: f"#{v:06x}")


@settings(max_examples=60, deadline=None)
@given(base=hex_colors, relation=st.sampled_from(list(RelationType)), count=st.integers(1, 12))
def test_generate_length_and_shape(base, relation, count):
    result = generate(base, relation, count)
    assert len(result) == count
    assert all(HEX_RE.match(c) for c in result)
    assert result.colors == generate(base, relation, count).colors


@settings(max_examples=60, deadline=None)
@given(colors=st.lists(hex_colors, min_size=1, max_size=5))
def test_mix_of_valid_colors_is_canonical(colors):
    items = [Ingredient(id=i + 1, color=c, valid=True) for i, c in enumerate(colors)]
    base = mix(items)
    assert base is not None and HEX_RE.match(base)


@settings(max_examples=60, deadline=None)
@given(token=st.one_of(st.none(), st.text(max_size=12), hex_colors), mode=st.sampled_from(["hex", "rgb", "hsl", "name", "x"]))
def test_format_never_raises(token, mode):
    assert isinstance(format_color(token, mode), str)
