import numpy as np
import pytest

from cam16 import (
    DEFAULT_VIEWING_CONDITIONS,
    Cam16,
    ViewingConditions,
    argb_to_tone,
    argb_to_xyz,
    rgb_array_to_xyz,
    tone_to_y,
    xyz_array_to_cam16,
    xyz_to_cam16,
    y_array_to_tone,
    y_to_tone,
)


def test_white_maps_to_d65():
    x, y, z = argb_to_xyz(0xFFFFFFFF)
    assert x == pytest.approx(95.047, abs=1e-3)
    assert y == pytest.approx(100.0, abs=1e-3)
    assert z == pytest.approx(108.883, abs=1e-3)


def test_black_maps_to_origin():
    assert argb_to_xyz(0xFF000000) == (0.0, 0.0, 0.0)


def test_tone_is_inverse_of_y():
    for tone in np.linspace(0.0, 100.0, 401):
        assert y_to_tone(tone_to_y(tone)) == pytest.approx(tone, abs=1e-9)


def test_tone_curve_knee_is_continuous():
    # Y at the knee is 100 * 216/24389; both branches meet at L* = 8
    knee_y = 100.0 * 216.0 / 24389.0
    assert y_to_tone(knee_y) == pytest.approx(8.0)
    assert y_to_tone(knee_y * 1.0001) == pytest.approx(8.0, abs=1e-3)


@pytest.mark.parametrize("argb, tone", [
    (0xFF000000, 0.0),
    (0xFFFFFFFF, 100.0),
    (0xFFFF0000, 53.233),
    (0xFF00FF00, 87.737),
    (0xFF0000FF, 32.303),
])
def test_known_tones(argb, tone):
    assert argb_to_tone(argb) == pytest.approx(tone, abs=0.02)


def test_default_viewing_conditions():
    vc = DEFAULT_VIEWING_CONDITIONS
    assert vc.n == pytest.approx(0.1842, abs=1e-3)
    assert vc.c == pytest.approx(0.69)
    assert vc.nc == pytest.approx(1.0)
    assert vc.nbb == vc.ncb
    assert vc.fl == pytest.approx(0.3884, abs=1e-3)
    assert vc == ViewingConditions.make()


@pytest.mark.parametrize("argb, hue, chroma, j", [
    (0xFFFF0000, 27.408, 113.357, 46.445),
    (0xFF00FF00, 142.139, 108.410, 79.332),
    (0xFF0000FF, 282.788, 87.230, 25.466),
])
def test_primaries_match_reference_correlates(argb, hue, chroma, j):
    cam = Cam16.from_argb(argb)
    assert cam.hue == pytest.approx(hue, abs=0.01)
    assert cam.chroma == pytest.approx(chroma, abs=0.01)
    assert cam.j == pytest.approx(j, abs=0.01)


def test_black_has_no_appearance():
    cam = xyz_to_cam16(0.0, 0.0, 0.0)
    assert cam.hue == 0.0
    assert cam.chroma == 0.0
    assert cam.j == 0.0


def test_white_is_nearly_achromatic():
    cam = Cam16.from_argb(0xFFFFFFFF)
    assert cam.j == pytest.approx(100.0, abs=1e-6)
    assert cam.chroma < 3.0


def test_distance_is_zero_for_same_color_and_symmetric():
    a = Cam16.from_argb(0xFF6750A4)
    b = Cam16.from_argb(0xFF958DA5)
    assert a.distance(a) == 0.0
    assert a.distance(b) == pytest.approx(b.distance(a))
    assert a.distance(b) > 0.0


def test_vectorized_matches_scalar():
    colors = [0xFFFF0000, 0xFF00FF00, 0xFF0000FF, 0xFF6750A4, 0xFF958DA5, 0xFF625B71]
    rgb = np.array([[(c >> 16) & 0xFF, (c >> 8) & 0xFF, c & 0xFF] for c in colors])
    xyz = rgb_array_to_xyz(rgb)
    hue, chroma, j = xyz_array_to_cam16(xyz)
    tones = y_array_to_tone(xyz[:, 1])
    for i, argb in enumerate(colors):
        cam = Cam16.from_argb(argb)
        assert xyz[i] == pytest.approx(argb_to_xyz(argb))
        assert hue[i] == pytest.approx(cam.hue)
        assert chroma[i] == pytest.approx(cam.chroma)
        assert j[i] == pytest.approx(cam.j)
        assert tones[i] == pytest.approx(argb_to_tone(argb))
