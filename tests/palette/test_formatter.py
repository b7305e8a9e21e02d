from __future__ import annotations

import pytest

from palette.engine import DefaultColorEngine
from palette.formatter import DisplayFormat, describe_color, format_color
from palette.result import FormatStatus


@pytest.mark.parametrize(
    "mode, expected",
    [
        ("hex", "#ff0000"),
        ("rgb", "rgb(255, 0, 0)"),
        ("hsl", "hsl(0, 100%, 50%)"),
        ("name", "red"),
        (DisplayFormat.RGB, "rgb(255, 0, 0)"),
    ],
)
def test_format_red(mode, expected) -> None:
    assert format_color("#FF0000", mode) == expected


def test_gray_hsl_has_zero_hue() -> None:
    assert format_color("#808080", "hsl") == "hsl(0, 0%, 50%)"


def test_unnamed_color_uses_tilde_prefix() -> None:
    described = describe_color("#e11d48", DisplayFormat.NAME)
    assert described.text == "~#e11d48"
    assert described.status is FormatStatus.UNNAMED
    assert described.usable


@pytest.mark.parametrize("color", [None, "", "not-a-color"])
def test_missing_or_invalid_is_not_available(color) -> None:
    described = describe_color(color, "rgb")
    assert described.text == "N/A"
    assert described.status is FormatStatus.NOT_AVAILABLE
    assert not described.usable


def test_unknown_mode_renders_hex() -> None:
    assert format_color("rgb(1, 2, 3)", "cmyk") == "#010203"


class _ExplodingEngine(DefaultColorEngine):
    def to_rgb(self, token):
        raise RuntimeError("adapter exploded")

    def is_valid(self, token):
        return True


def test_adapter_failure_is_error() -> None:
    described = describe_color("#ff0000", "rgb", _ExplodingEngine())
    assert described.text == "Error"
    assert described.status is FormatStatus.ERROR
    assert str(described) == "Error"


def test_display_format_from_value() -> None:
    assert DisplayFormat.from_value("hsl") is DisplayFormat.HSL
    with pytest.raises(ValueError):
        DisplayFormat.from_value("cmyk")


@pytest.mark.parametrize("color", ["#e11d48", "teal", "rgb(1, 2, 3)", "hsl(200, 50%, 40%)"])
def test_hex_output_is_a_valid_token(color, engine: DefaultColorEngine) -> None:
    assert engine.is_valid(format_color(color, "hex", engine))


def test_alpha_is_dropped_from_hex_output() -> None:
    assert format_color("#e11d4880", "hex") == "#e11d48"
    assert format_color("rgba(225, 29, 72, 0.5)", "rgb") == "rgb(225, 29, 72)"
