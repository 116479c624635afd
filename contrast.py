"""
WCAG 2 contrast ratios expressed on the tone axis.

Because tone is L*, a ratio between two tones depends only on their
luminance, so contrast can be checked or targeted without knowing hue or
chroma.
"""

from cam16 import argb_to_xyz, tone_to_y, y_to_tone
from color_utils import clamp


MIN_RATIO = 1.0
MAX_RATIO = 21.0
AA_RATIO = 4.5  # WCAG AA for body text
AAA_RATIO = 7.0
AA_LARGE_RATIO = 3.0

# Tones returned by lighter()/darker() are nudged past the exact answer so
# that quantizing to 8-bit channels does not fall short of the ratio.
TONE_MARGIN = 0.4
RATIO_SLACK = 0.04


def ratio_of_ys(y1: float, y2: float) -> float:
    """Contrast ratio of two luminances on a 0-100 scale."""
    lighter_y = max(y1, y2)
    darker_y = min(y1, y2)
    return (lighter_y + 5.0) / (darker_y + 5.0)


def ratio_of_tones(tone_a: float, tone_b: float) -> float:
    tone_a = clamp(tone_a, 0.0, 100.0)
    tone_b = clamp(tone_b, 0.0, 100.0)
    return ratio_of_ys(tone_to_y(tone_a), tone_to_y(tone_b))


def ratio_of_argbs(argb_a: int, argb_b: int) -> float:
    return ratio_of_ys(argb_to_xyz(argb_a)[1], argb_to_xyz(argb_b)[1])


def wcag_level(ratio: float) -> str:
    """Classify a contrast ratio: 'AAA', 'AA', 'AA-large' or 'fail'."""
    if ratio >= AAA_RATIO:
        return "AAA"
    elif ratio >= AA_RATIO:
        return "AA"
    elif ratio >= AA_LARGE_RATIO:
        return "AA-large"
    return "fail"


def lighter(tone: float, ratio: float) -> float:
    """
    Lowest tone at or above `tone` reaching the ratio.

    Returns:
        The tone, or -1.0 if no tone up to 100 is light enough
    """
    if tone < 0.0 or tone > 100.0:
        return -1.0

    dark_y = tone_to_y(tone)
    light_y = ratio * (dark_y + 5.0) - 5.0
    real_contrast = ratio_of_ys(light_y, dark_y)
    if real_contrast < ratio and abs(real_contrast - ratio) > RATIO_SLACK:
        return -1.0

    result = y_to_tone(light_y) + TONE_MARGIN
    if result < 0.0 or result > 100.0:
        return -1.0
    return result


def darker(tone: float, ratio: float) -> float:
    """
    Highest tone at or below `tone` reaching the ratio.

    Returns:
        The tone, or -1.0 if no tone down to 0 is dark enough
    """
    if tone < 0.0 or tone > 100.0:
        return -1.0

    light_y = tone_to_y(tone)
    dark_y = (light_y + 5.0) / ratio - 5.0
    real_contrast = ratio_of_ys(light_y, dark_y)
    if real_contrast < ratio and abs(real_contrast - ratio) > RATIO_SLACK:
        return -1.0

    result = y_to_tone(dark_y) - TONE_MARGIN
    if result < 0.0 or result > 100.0:
        return -1.0
    return result


def lighter_unsafe(tone: float, ratio: float) -> float:
    """lighter(), falling back to white when the ratio is out of reach."""
    result = lighter(tone, ratio)
    return 100.0 if result < 0.0 else result


def darker_unsafe(tone: float, ratio: float) -> float:
    """darker(), falling back to black when the ratio is out of reach."""
    result = darker(tone, ratio)
    return 0.0 if result < 0.0 else result
