import pytest

from color_utils import rgb_from_argb
from hct import Hct
from tonal_palette import COMMON_TONES, TonalPalette


def test_repeated_lookups_are_identical_and_match_uncached():
    palette = TonalPalette(210.0, 36.0)
    for tone in range(101):
        first = palette.tone(tone)
        assert palette.tone(tone) == first
        assert first == Hct(210.0, 36.0, tone).to_argb()


def test_cache_only_grows_on_first_request():
    palette = TonalPalette(120.0, 20.0)
    assert palette.cached_tones == ()
    palette.tone(40)
    palette.tone(40)
    palette.tone(95)
    assert palette.cached_tones == (40, 95)


def test_fractional_and_out_of_range_tones():
    palette = TonalPalette(300.0, 40.0)
    assert palette.tone(97.5) == Hct(300.0, 40.0, 97.5).to_argb()
    assert palette.tone(150) == palette.tone(100) == 0xFFFFFFFF
    assert palette.tone(-10) == palette.tone(0) == 0xFF000000


def test_from_argb_uses_seed_hue_and_chroma():
    seed = Hct.from_argb(0xFF6750A4)
    palette = TonalPalette.from_argb(0xFF6750A4)
    assert palette.hue == pytest.approx(seed.hue)
    assert palette.chroma == pytest.approx(seed.chroma)
    assert palette == TonalPalette.from_hct(seed)


def test_key_is_sanitized():
    palette = TonalPalette(400.0, -3.0)
    assert palette.hue == pytest.approx(40.0)
    assert palette.chroma == 0.0


def test_key_chroma_is_not_gamut_clamped():
    palette = TonalPalette(27.0, 200.0)
    assert palette.chroma == 200.0
    assert palette.tone(60) == Hct(27.0, 200.0, 60.0).to_argb()


def test_tones_maps_common_tones():
    palette = TonalPalette(25.0, 84.0)
    tones = palette.tones()
    assert tuple(tones) == COMMON_TONES
    assert tones[0] == 0xFF000000
    assert tones[100] == 0xFFFFFFFF


def test_get_hct_reports_produced_color():
    palette = TonalPalette(150.0, 30.0)
    hct = palette.get_hct(60)
    assert hct.tone == pytest.approx(60.0, abs=0.5)
    assert hct.to_argb() == palette.tone(60)


def test_copy_does_not_share_cache():
    palette = TonalPalette(90.0, 50.0)
    palette.tone(50)
    clone = palette.copy()
    clone.tone(10)
    assert clone == palette
    assert palette.cached_tones == (50,)
    assert clone.cached_tones == (10, 50)


def test_zero_chroma_palette_is_grey():
    palette = TonalPalette(0.0, 0.0)
    for tone in COMMON_TONES:
        r, g, b = rgb_from_argb(palette.tone(tone))
        assert r == g == b
