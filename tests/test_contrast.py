import pytest

from contrast import (
    darker,
    darker_unsafe,
    lighter,
    lighter_unsafe,
    ratio_of_argbs,
    ratio_of_tones,
    wcag_level,
)


def test_black_on_white_is_maximum():
    assert ratio_of_tones(0.0, 100.0) == pytest.approx(21.0)
    assert ratio_of_argbs(0xFF000000, 0xFFFFFFFF) == pytest.approx(21.0)


def test_ratio_is_symmetric_and_one_for_same_tone():
    assert ratio_of_tones(30.0, 70.0) == pytest.approx(ratio_of_tones(70.0, 30.0))
    assert ratio_of_tones(42.0, 42.0) == pytest.approx(1.0)


def test_out_of_range_tones_are_clamped():
    assert ratio_of_tones(-20.0, 140.0) == pytest.approx(21.0)


@pytest.mark.parametrize("tone", [0.0, 20.0, 40.0, 45.0])
def test_lighter_reaches_ratio(tone):
    result = lighter(tone, 4.5)
    assert result > tone
    assert ratio_of_tones(tone, result) >= 4.5


@pytest.mark.parametrize("tone", [100.0, 80.0, 60.0, 50.0])
def test_darker_reaches_ratio(tone):
    result = darker(tone, 4.5)
    assert result < tone
    assert ratio_of_tones(tone, result) >= 4.5


def test_unreachable_ratios():
    assert lighter(90.0, 21.0) == -1.0
    assert darker(10.0, 21.0) == -1.0
    assert lighter(-5.0, 3.0) == -1.0
    # White over tone 50 only reaches about 4.48
    assert lighter(50.0, 4.5) == -1.0
    assert lighter_unsafe(90.0, 21.0) == 100.0
    assert darker_unsafe(10.0, 21.0) == 0.0


@pytest.mark.parametrize("ratio, level", [
    (21.0, "AAA"),
    (7.0, "AAA"),
    (4.5, "AA"),
    (3.2, "AA-large"),
    (1.5, "fail"),
])
def test_wcag_level(ratio, level):
    assert wcag_level(ratio) == level
