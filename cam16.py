"""
CAM16 color appearance engine.

Forward transform from sRGB through CIE XYZ (D65) to the CAM16 correlates
(hue, chroma, lightness J and friends), plus the CIE L* "tone" scale that HCT
uses in place of J. Viewing conditions are a fixed sRGB-under-average-surround
preset. There is no closed-form CAM16 -> sRGB path here; the inverse lives in
hct.py as a gamut-constrained search.
"""

import math
from dataclasses import dataclass

import numpy as np

from color_utils import (
    blue_from_argb,
    green_from_argb,
    lerp,
    linearized,
    linearized_array,
    red_from_argb,
    sanitize_degrees,
)


# =============================================================================
# Constants
# =============================================================================

# Linear sRGB (0-100) to XYZ under D65; the Y row is the Rec. 709 luminance
SRGB_TO_XYZ = np.array([
    [0.41233895, 0.35762064, 0.18051042],
    [0.2126, 0.7152, 0.0722],
    [0.01932141, 0.11916382, 0.95034478],
])
XYZ_TO_SRGB = np.linalg.inv(SRGB_TO_XYZ)

WHITE_POINT_D65 = (95.047, 100.0, 108.883)

# CAT16 chromatic adaptation matrix
XYZ_TO_CAM16RGB = np.array([
    [0.401288, 0.650173, -0.051461],
    [-0.250268, 1.204414, 0.045854],
    [-0.002079, 0.048952, 0.953127],
])
CAM16RGB_TO_XYZ = np.linalg.inv(XYZ_TO_CAM16RGB)

LSTAR_EPSILON = 216.0 / 24389.0  # ~0.008856, knee of the L* curve
LSTAR_KAPPA = 24389.0 / 27.0  # ~903.3, slope of the linear segment

SURROUND_AVERAGE = 2.0
DEFAULT_BACKGROUND_LSTAR = 50.0


# =============================================================================
# Tone (CIE L*)
# =============================================================================

def y_to_tone(y: float) -> float:
    """CIE L* (0-100) from relative luminance Y on a 0-100 scale."""
    y_normalized = y / 100.0
    if y_normalized <= LSTAR_EPSILON:
        return LSTAR_KAPPA * y_normalized
    return 116.0 * y_normalized ** (1.0 / 3.0) - 16.0


def tone_to_y(tone: float) -> float:
    """Exact inverse of y_to_tone()."""
    ft = (tone + 16.0) / 116.0
    ft3 = ft * ft * ft
    if ft3 > LSTAR_EPSILON:
        return ft3 * 100.0
    return tone / LSTAR_KAPPA * 100.0


def y_array_to_tone(y: np.ndarray) -> np.ndarray:
    """Vectorized y_to_tone()."""
    y_normalized = np.asarray(y, dtype=np.float64) / 100.0
    return np.where(
        y_normalized <= LSTAR_EPSILON,
        LSTAR_KAPPA * y_normalized,
        116.0 * np.cbrt(y_normalized) - 16.0,
    )


# =============================================================================
# sRGB <-> XYZ
# =============================================================================

def argb_to_xyz(argb: int) -> tuple[float, float, float]:
    """Linearize the RGB channels of argb and project onto XYZ (0-100)."""
    r = linearized(red_from_argb(argb))
    g = linearized(green_from_argb(argb))
    b = linearized(blue_from_argb(argb))
    m = SRGB_TO_XYZ
    return (
        m[0, 0] * r + m[0, 1] * g + m[0, 2] * b,
        m[1, 0] * r + m[1, 1] * g + m[1, 2] * b,
        m[2, 0] * r + m[2, 1] * g + m[2, 2] * b,
    )


def argb_to_tone(argb: int) -> float:
    """Tone of a packed color; only the Y row of the matrix is needed."""
    r = linearized(red_from_argb(argb))
    g = linearized(green_from_argb(argb))
    b = linearized(blue_from_argb(argb))
    return y_to_tone(0.2126 * r + 0.7152 * g + 0.0722 * b)


def rgb_array_to_xyz(rgb: np.ndarray) -> np.ndarray:
    """Convert an (n, 3) array of 0-255 RGB to XYZ (0-100)."""
    return linearized_array(rgb) @ SRGB_TO_XYZ.T


# =============================================================================
# Viewing Conditions
# =============================================================================

@dataclass(frozen=True)
class ViewingConditions:
    """Precomputed environment-dependent CAM16 parameters."""
    n: float  # Background luminance relative to white
    aw: float  # Achromatic response of the white point
    nbb: float  # Background induction factor
    ncb: float  # Chromatic induction factor
    c: float  # Surround exponential non-linearity
    nc: float  # Chromatic induction of the surround
    rgb_d: tuple  # Per-channel degree-of-adaptation gains
    fl: float  # Luminance-level adaptation factor
    fl_root: float  # fl ** 0.25
    z: float  # Base exponent of the lightness non-linearity

    @classmethod
    def make(
        cls,
        white_point: tuple = WHITE_POINT_D65,
        adapting_luminance: float = -1.0,
        background_lstar: float = DEFAULT_BACKGROUND_LSTAR,
        surround: float = SURROUND_AVERAGE,
        discounting_illuminant: bool = False,
    ) -> 'ViewingConditions':
        """
        Derive viewing conditions from environment parameters.

        Args:
            white_point: XYZ of the adopted white (0-100 scale)
            adapting_luminance: cd/m^2 of the adapting field; a negative value
                selects the conventional 200/pi * Y(L*=50) of a 200 lux room
            background_lstar: L* of the background, floored at 0.1
            surround: 0 dark, 1 dim, 2 average
            discounting_illuminant: assume full adaptation when True
        """
        if adapting_luminance < 0.0:
            adapting_luminance = 200.0 / math.pi * tone_to_y(50.0) / 100.0
        background_lstar = max(0.1, background_lstar)

        rgb_w = XYZ_TO_CAM16RGB @ np.asarray(white_point, dtype=np.float64)

        f = 0.8 + surround / 10.0
        if f >= 0.9:
            c = lerp(0.59, 0.69, (f - 0.9) * 10.0)
        else:
            c = lerp(0.525, 0.59, (f - 0.8) * 10.0)

        if discounting_illuminant:
            d = 1.0
        else:
            d = f * (1.0 - (1.0 / 3.6) * math.exp((-adapting_luminance - 42.0) / 92.0))
        d = min(max(d, 0.0), 1.0)

        rgb_d = tuple(float(d * (100.0 / w) + 1.0 - d) for w in rgb_w)

        k = 1.0 / (5.0 * adapting_luminance + 1.0)
        k4 = k ** 4
        k4f = 1.0 - k4
        fl = k4 * adapting_luminance + 0.1 * k4f * k4f * (5.0 * adapting_luminance) ** (1.0 / 3.0)

        n = tone_to_y(background_lstar) / white_point[1]
        z = 1.48 + math.sqrt(n)
        nbb = 0.725 / n ** 0.2

        rgb_a_factors = [(fl * gain * w / 100.0) ** 0.42 for gain, w in zip(rgb_d, rgb_w)]
        rgb_a = [400.0 * af / (af + 27.13) for af in rgb_a_factors]
        aw = (2.0 * rgb_a[0] + rgb_a[1] + 0.05 * rgb_a[2]) * nbb

        return cls(
            n=n,
            aw=aw,
            nbb=nbb,
            ncb=nbb,
            c=c,
            nc=f,
            rgb_d=rgb_d,
            fl=fl,
            fl_root=fl ** 0.25,
            z=z,
        )


DEFAULT_VIEWING_CONDITIONS = ViewingConditions.make()


# =============================================================================
# CAM16
# =============================================================================

@dataclass(frozen=True)
class Cam16:
    """CAM16 appearance correlates of a color."""
    hue: float  # Degrees, [0, 360)
    chroma: float
    j: float  # Lightness
    q: float  # Brightness
    m: float  # Colorfulness
    s: float  # Saturation
    jstar: float  # CAM16-UCS J*
    astar: float  # CAM16-UCS a*
    bstar: float  # CAM16-UCS b*

    @classmethod
    def from_argb(cls, argb: int,
                  viewing_conditions: ViewingConditions = DEFAULT_VIEWING_CONDITIONS) -> 'Cam16':
        x, y, z = argb_to_xyz(argb)
        return xyz_to_cam16(x, y, z, viewing_conditions)

    def distance(self, other: 'Cam16') -> float:
        """Perceptual color difference in CAM16-UCS."""
        d_j = self.jstar - other.jstar
        d_a = self.astar - other.astar
        d_b = self.bstar - other.bstar
        d_e_prime = math.sqrt(d_j * d_j + d_a * d_a + d_b * d_b)
        return 1.41 * d_e_prime ** 0.63


def _adapted_response(component: float, fl: float) -> float:
    """Post-adaptation non-linear response compression."""
    af = (fl * abs(component) / 100.0) ** 0.42
    return math.copysign(400.0 * af / (af + 27.13), component)


def xyz_to_cam16(x: float, y: float, z: float,
                 viewing_conditions: ViewingConditions = DEFAULT_VIEWING_CONDITIONS) -> Cam16:
    """
    Compute CAM16 correlates for an XYZ color (0-100 scale).

    Hue is reported as 0 when the opponent channels cancel exactly.
    """
    vc = viewing_conditions
    m = XYZ_TO_CAM16RGB
    r_c = m[0, 0] * x + m[0, 1] * y + m[0, 2] * z
    g_c = m[1, 0] * x + m[1, 1] * y + m[1, 2] * z
    b_c = m[2, 0] * x + m[2, 1] * y + m[2, 2] * z

    r_a = _adapted_response(vc.rgb_d[0] * r_c, vc.fl)
    g_a = _adapted_response(vc.rgb_d[1] * g_c, vc.fl)
    b_a = _adapted_response(vc.rgb_d[2] * b_c, vc.fl)

    # Opponent dimensions: redness-greenness and yellowness-blueness
    a = (11.0 * r_a - 12.0 * g_a + b_a) / 11.0
    b = (r_a + g_a - 2.0 * b_a) / 9.0

    u = (20.0 * r_a + 20.0 * g_a + 21.0 * b_a) / 20.0
    p2 = (40.0 * r_a + 20.0 * g_a + b_a) / 20.0

    if a == 0.0 and b == 0.0:
        hue = 0.0
    else:
        hue = sanitize_degrees(math.degrees(math.atan2(b, a)))
    hue_radians = math.radians(hue)

    ac = p2 * vc.nbb
    j = 100.0 * (max(ac, 0.0) / vc.aw) ** (vc.c * vc.z)
    q = 4.0 / vc.c * math.sqrt(j / 100.0) * (vc.aw + 4.0) * vc.fl_root

    hue_prime = hue + 360.0 if hue < 20.14 else hue
    e_hue = 0.25 * (math.cos(math.radians(hue_prime) + 2.0) + 3.8)
    p1 = 50000.0 / 13.0 * e_hue * vc.nc * vc.ncb
    t = p1 * math.hypot(a, b) / (u + 0.305)
    alpha = (1.64 - 0.29 ** vc.n) ** 0.73 * t ** 0.9

    chroma = alpha * math.sqrt(j / 100.0)
    colorfulness = chroma * vc.fl_root
    saturation = 50.0 * math.sqrt(alpha * vc.c / (vc.aw + 4.0))

    jstar = (1.0 + 100.0 * 0.007) * j / (1.0 + 0.007 * j)
    mstar = 1.0 / 0.0228 * math.log1p(0.0228 * colorfulness)

    return Cam16(
        hue=hue,
        chroma=chroma,
        j=j,
        q=q,
        m=colorfulness,
        s=saturation,
        jstar=jstar,
        astar=mstar * math.cos(hue_radians),
        bstar=mstar * math.sin(hue_radians),
    )


def xyz_array_to_cam16(xyz: np.ndarray,
                       viewing_conditions: ViewingConditions = DEFAULT_VIEWING_CONDITIONS
                       ) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Vectorized xyz_to_cam16() for an (n, 3) array.

    Returns:
        Tuple of (hue, chroma, j) arrays
    """
    vc = viewing_conditions
    rgb_c = np.asarray(xyz, dtype=np.float64) @ XYZ_TO_CAM16RGB.T
    rgb_d = rgb_c * np.asarray(vc.rgb_d)

    af = (vc.fl * np.abs(rgb_d) / 100.0) ** 0.42
    rgb_a = np.sign(rgb_d) * 400.0 * af / (af + 27.13)
    r_a, g_a, b_a = rgb_a[:, 0], rgb_a[:, 1], rgb_a[:, 2]

    a = (11.0 * r_a - 12.0 * g_a + b_a) / 11.0
    b = (r_a + g_a - 2.0 * b_a) / 9.0
    u = (20.0 * r_a + 20.0 * g_a + 21.0 * b_a) / 20.0
    p2 = (40.0 * r_a + 20.0 * g_a + b_a) / 20.0

    hue = np.degrees(np.arctan2(b, a)) % 360.0
    hue = np.where(hue >= 360.0, 0.0, hue)

    ac = np.maximum(p2 * vc.nbb, 0.0)
    j = 100.0 * (ac / vc.aw) ** (vc.c * vc.z)

    hue_prime = np.where(hue < 20.14, hue + 360.0, hue)
    e_hue = 0.25 * (np.cos(np.radians(hue_prime) + 2.0) + 3.8)
    p1 = 50000.0 / 13.0 * e_hue * vc.nc * vc.ncb
    t = p1 * np.hypot(a, b) / (u + 0.305)
    alpha = (1.64 - 0.29 ** vc.n) ** 0.73 * t ** 0.9
    chroma = alpha * np.sqrt(j / 100.0)

    return hue, chroma, j
