from __future__ import annotations

import math
import re

import numpy as np
import pytest

from palette.engine import DefaultColorEngine, lab_to_lch, lab_to_rgb, rgb_to_lab

HEX_RE = re.compile(r"^#[0-9a-f]{6}$")


def test_to_hex_is_canonical(engine: DefaultColorEngine) -> None:
    assert engine.to_hex("#ABC") == "#aabbcc"
    assert engine.to_hex("Red") == "#ff0000"
    assert engine.to_hex("rgb(1, 2, 3)") == "#010203"


def test_invalid_tokens_raise(engine: DefaultColorEngine) -> None:
    assert not engine.is_valid("nope")
    with pytest.raises(ValueError):
        engine.to_hex("nope")
    with pytest.raises(TypeError):
        engine.to_rgb(None)  # type: ignore[arg-type]


def test_lab_of_white_and_black(engine: DefaultColorEngine) -> None:
    L, a, b = engine.to_lab("#ffffff")
    assert L == pytest.approx(100.0, abs=1e-3)
    assert abs(a) < 1e-3 and abs(b) < 1e-3
    assert engine.to_lab("#000000") == pytest.approx((0.0, 0.0, 0.0), abs=1e-9)


def test_lab_roundtrip_array() -> None:
    rgb = np.array([[225.0, 29.0, 72.0], [37.0, 99.0, 235.0]])
    back = lab_to_rgb(rgb_to_lab(rgb))
    np.testing.assert_allclose(back, rgb, atol=1e-3)


def test_lch_hue_nan_for_gray() -> None:
    lch = lab_to_lch(rgb_to_lab(np.array([136.0, 136.0, 136.0])))
    assert math.isnan(lch[2])
    assert lch[1] < 1e-3


def test_brighten_and_darken_extremes(engine: DefaultColorEngine) -> None:
    # L* 0 -> 36 and 100 -> 64
    assert engine.brighten("#000000", 2) == "#555555"
    assert engine.darken("#ffffff", 2) == "#9b9b9b"
    assert engine.darken("#000000", 2) == "#000000"


def test_luminance_bounds(engine: DefaultColorEngine) -> None:
    assert engine.luminance("#000000") == 0.0
    assert engine.luminance("#ffffff") == pytest.approx(1.0)
    assert 0.0 < engine.luminance("#e11d48") < 1.0


def test_hue_rotation(engine: DefaultColorEngine) -> None:
    assert engine.with_hue_offset("#ff0000", 120) == "#00ff00"
    assert engine.with_hue_offset("#ff0000", -120) == "#0000ff"
    assert engine.with_hue("#ff0000", 240) == "#0000ff"
    # achromatic colors have no hue to rotate
    assert engine.with_hue_offset("#808080", 90) == "#808080"


def test_average_modes(engine: DefaultColorEngine) -> None:
    assert engine.average(["#000000", "#ffffff"], mode="rgb") == "#808080"
    assert engine.average(["#e11d48"], mode="lab") == "#e11d48"
    assert engine.average(["#ff0000", "#ff0000"], mode="lch") == "#ff0000"
    with pytest.raises(ValueError):
        engine.average([], mode="lab")
    with pytest.raises(ValueError):
        engine.average(["#ff0000"], mode="hsv")


def test_random_colors_are_canonical(engine: DefaultColorEngine) -> None:
    rng = np.random.default_rng(0)
    colors = [engine.random(rng) for _ in range(50)]
    assert all(HEX_RE.match(c) for c in colors)
    assert len(set(colors)) > 1


def test_name_of(engine: DefaultColorEngine) -> None:
    assert engine.name_of("#ff0000") == "red"
    assert engine.name_of("rgb(255, 255, 255)") == "white"
    assert engine.name_of("#e11d48") is None


def test_scale_sampling(engine: DefaultColorEngine) -> None:
    sc = engine.scale(["#000000", "#ffffff"], mode="rgb")
    assert sc.sample(0) == []
    assert sc.sample(1) == ["#808080"]
    assert sc.sample(3) == ["#000000", "#808080", "#ffffff"]
    with pytest.raises(ValueError):
        engine.scale(["#000000"], mode="hsv")
