import pytest

from color_utils import (
    alpha_from_argb,
    argb_from_hex,
    argb_from_linrgb,
    argb_from_rgb,
    argb_from_rgb_float,
    circular_hue_distance,
    delinearized,
    hex_from_argb,
    linearized,
    rgb_from_argb,
    round_half_up,
    sanitize_degrees,
    with_alpha,
)


def test_pack_and_unpack():
    argb = argb_from_rgb(0x67, 0x50, 0xA4)
    assert argb == 0xFF6750A4
    assert rgb_from_argb(argb) == (0x67, 0x50, 0xA4)
    assert alpha_from_argb(argb) == 0xFF


def test_with_alpha_keeps_channels():
    assert with_alpha(0xFF6750A4, 0x80) == 0x806750A4


@pytest.mark.parametrize("text, expected", [
    ("#6750A4", 0xFF6750A4),
    ("6750a4", 0xFF6750A4),
    ("#fff", 0xFFFFFFFF),
    ("#806750A4", 0x806750A4),
    ("  #000000 ", 0xFF000000),
])
def test_argb_from_hex(text, expected):
    assert argb_from_hex(text) == expected


@pytest.mark.parametrize("text", ["", "#12345", "#gggggg", "not a color"])
def test_argb_from_hex_rejects_garbage(text):
    with pytest.raises(ValueError):
        argb_from_hex(text)


def test_hex_from_argb():
    assert hex_from_argb(0xFF6750A4) == "#6750a4"
    assert hex_from_argb(0x806750A4, include_alpha=True) == "#806750a4"


def test_rgb_float_triple():
    assert argb_from_rgb_float((1.0, 0.0, 0.0)) == 0xFFFF0000
    assert argb_from_rgb_float((0.5, 0.5, 0.5)) == 0xFF808080
    assert argb_from_rgb_float((2.0, -1.0, 0.0)) == 0xFFFF0000


def test_gamma_round_trip_every_channel_value():
    for component in range(256):
        assert delinearized(linearized(component)) == component


def test_linear_extremes():
    assert linearized(0) == 0.0
    assert linearized(255) == pytest.approx(100.0)
    assert argb_from_linrgb([100.0, 100.0, 100.0]) == 0xFFFFFFFF
    assert argb_from_linrgb([-3.0, 0.0, 150.0]) == 0xFF0000FF


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.4999) == 0


@pytest.mark.parametrize("degrees, expected", [
    (0.0, 0.0),
    (360.0, 0.0),
    (-30.0, 330.0),
    (725.0, 5.0),
    (-1e-20, 0.0),
])
def test_sanitize_degrees(degrees, expected):
    assert sanitize_degrees(degrees) == pytest.approx(expected)


def test_circular_hue_distance():
    assert circular_hue_distance(10.0, 350.0) == pytest.approx(20.0)
    assert circular_hue_distance(0.0, 180.0) == pytest.approx(180.0)
