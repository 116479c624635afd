import numpy as np
import pytest
from PIL import Image

import extract_colors
from color_utils import circular_hue_distance, rgb_from_argb
from extract_colors import (
    FALLBACK_SEED,
    extract_seed,
    extract_seed_candidates,
    load_pixels,
    quantize_pixels,
    score_colors,
    visualize_candidates,
)


@pytest.fixture
def red_blue_image(tmp_path):
    """100x10 image, left 70% red and right 30% blue."""
    img = Image.new('RGB', (100, 10), (255, 0, 0))
    img.paste((0, 0, 255), (70, 0, 100, 10))
    path = tmp_path / "red_blue.png"
    img.save(path)
    return path


@pytest.fixture
def grey_image(tmp_path):
    path = tmp_path / "grey.png"
    Image.new('RGB', (32, 32), (128, 128, 128)).save(path)
    return path


def test_load_pixels_shape(red_blue_image):
    pixels = load_pixels(str(red_blue_image))
    assert pixels.shape == (1000, 3)
    assert pixels.dtype == np.uint8


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_pixels(str(tmp_path / "nope.png"))


def test_oversize_image_is_rejected_and_closed(red_blue_image, monkeypatch):
    opened = []
    real_open = Image.open

    def recording_open(path):
        img = real_open(path)
        opened.append(img)
        return img

    monkeypatch.setattr(extract_colors.Image, 'open', recording_open)
    monkeypatch.setattr(extract_colors, 'MAX_IMAGE_DIMENSION', 50)
    with pytest.raises(ValueError, match="exceed maximum"):
        load_pixels(str(red_blue_image))
    assert getattr(opened[0], 'fp', None) is None


def test_load_non_image(tmp_path):
    path = tmp_path / "notes.png"
    path.write_text("not an image")
    with pytest.raises(ValueError):
        load_pixels(str(path))


def test_quantize_counts_bins():
    pixels = np.array([[255, 0, 0], [250, 3, 1], [0, 0, 255]], dtype=np.uint8)
    colors, counts = quantize_pixels(pixels)
    assert counts.sum() == 3
    assert sorted(counts.tolist()) == [1, 2]
    assert [4, 4, 252] in colors.tolist()


def test_dominant_hue_wins(red_blue_image):
    candidates = extract_seed_candidates(str(red_blue_image))
    assert len(candidates) == 2
    first, second = candidates
    assert circular_hue_distance(first.hue, 27.4) < 5.0
    assert circular_hue_distance(second.hue, 282.8) < 5.0
    assert first.score > second.score
    assert first.coverage == pytest.approx(0.7)

    r, g, b = rgb_from_argb(extract_seed(str(red_blue_image)))
    assert r > 200 and g < 16 and b < 16


def test_grey_image_falls_back(grey_image):
    assert extract_seed_candidates(str(grey_image)) == []
    assert extract_seed(str(grey_image)) == FALLBACK_SEED


def test_score_colors_empty():
    assert score_colors(np.empty((0, 3), dtype=np.int32), np.empty(0, dtype=np.int64)) == []


def test_candidates_are_spread_in_hue():
    colors = np.array([[255, 0, 0], [250, 10, 10], [0, 0, 255]])
    counts = np.array([50, 40, 10])
    candidates = score_colors(colors, counts)
    hues = [c.hue for c in candidates]
    for i, a in enumerate(hues):
        for b in hues[i + 1:]:
            assert circular_hue_distance(a, b) >= 15.0


def test_max_colors_limits_result(red_blue_image):
    assert len(extract_seed_candidates(str(red_blue_image), max_colors=1)) == 1


def test_visualize_candidates(red_blue_image, tmp_path):
    candidates = extract_seed_candidates(str(red_blue_image))
    out = tmp_path / "swatches.png"
    visualize_candidates(candidates, str(out))
    with Image.open(out) as img:
        assert img.width == len(candidates) * 90 + 10
