from __future__ import annotations

import math

import pytest

from util.color import (
    is_color_token,
    name_for_hex,
    parse_color_token,
    parse_hex_color_str,
    rgb_to_hex,
    rgb_to_hsl,
)


def test_parse_hex_color_valid_variants() -> None:
    assert parse_hex_color_str("#112233") == (17.0, 34.0, 51.0)
    assert parse_hex_color_str("112233CC") == (17.0, 34.0, 51.0)
    assert parse_hex_color_str("#abc") == (170.0, 187.0, 204.0)
    assert parse_hex_color_str("#ABCD") == (170.0, 187.0, 204.0)


def test_parse_hex_color_invalid() -> None:
    with pytest.raises(ValueError):
        parse_hex_color_str("#12345")
    with pytest.raises(ValueError):
        parse_hex_color_str("not-a-color")
    with pytest.raises(ValueError):
        parse_hex_color_str("#gggggg")


def test_parse_named_and_functional_tokens() -> None:
    assert parse_color_token("red") == (255.0, 0.0, 0.0)
    assert parse_color_token("  RebeccaPurple ") == (102.0, 51.0, 153.0)
    assert parse_color_token("rgb(10, 20, 30)") == (10.0, 20.0, 30.0)
    assert parse_color_token("rgba(10 20 30 / 0.5)") == (10.0, 20.0, 30.0)
    r, g, b = parse_color_token("hsl(120, 100%, 50%)")
    assert (round(r), round(g), round(b)) == (0, 255, 0)


@pytest.mark.parametrize(
    "token",
    [None, 42, "", "   ", "rgb(300, 0, 0)", "hsl(0, 50, 50)", "rgba(1,2,3,4)", "#12", "reddish"],
)
def test_is_color_token_rejects(token) -> None:
    assert not is_color_token(token)


def test_parse_color_token_type_error() -> None:
    with pytest.raises(TypeError):
        parse_color_token(123)


def test_rgb_to_hex_clamps_and_rounds() -> None:
    assert rgb_to_hex((255.4, -3.0, 300.0)) == "#ff00ff"
    assert rgb_to_hex((0.6, 15.5, 16.49)) == "#011010"


def test_name_for_hex_prefers_first_alias() -> None:
    assert name_for_hex("#FF0000") == "red"
    assert name_for_hex("#00ffff") == "aqua"
    assert name_for_hex("#e11d48") is None


def test_rgb_to_hsl_achromatic_hue_is_nan() -> None:
    h, s, lum = rgb_to_hsl((128.0, 128.0, 128.0))
    assert math.isnan(h)
    assert s == 0.0
    assert lum == pytest.approx(128 / 255)
