"""
HCT (Hue, Chroma, Tone) color values and the gamut-constrained solver.

Hue and chroma come from CAM16; tone is CIE L*. Going from HCT back to sRGB
has no closed form, so solve_to_argb() searches for the displayable color:

1. Newton iteration on CAM16 lightness J for the exact (hue, chroma) at the
   target luminance Y. If it lands inside the sRGB cube, that is the answer.
2. Otherwise the chroma is out of gamut. The sRGB cube is cut by the plane of
   constant Y, and the edge of that polygon is bisected for the point whose
   CAM16 hue matches. That point is the most chromatic displayable color of
   the hue at the tone, so the request is clamped to it.

Both stages run a fixed, small number of iterations.
"""

import math

import numpy as np

from cam16 import (
    DEFAULT_VIEWING_CONDITIONS,
    SRGB_TO_XYZ,
    XYZ_TO_CAM16RGB,
    Cam16,
    argb_to_tone,
    tone_to_y,
)
from color_utils import (
    argb_from_linrgb,
    argb_from_rgb,
    clamp,
    delinearized,
    hex_from_argb,
    linearized,
    rgb_from_argb,
    sanitize_degrees,
    true_delinearized,
)


# =============================================================================
# Constants
# =============================================================================

_VC = DEFAULT_VIEWING_CONDITIONS

# Linear RGB (0-100) straight to the adapted, fl-scaled cone responses
SCALED_DISCOUNT_FROM_LINRGB = (
    np.diag(_VC.rgb_d) * (_VC.fl / 100.0) @ XYZ_TO_CAM16RGB @ SRGB_TO_XYZ
).tolist()
LINRGB_FROM_SCALED_DISCOUNT = np.linalg.inv(np.array(SCALED_DISCOUNT_FROM_LINRGB)).tolist()
Y_FROM_LINRGB = SRGB_TO_XYZ[1].tolist()

# Linear values halfway between adjacent 8-bit channel values
CRITICAL_PLANES = [linearized(i + 0.5) for i in range(255)]

MIN_CHROMA = 0.0001  # Below this every request is a grey
MIN_TONE = 0.0001
MAX_TONE = 99.9999
NEWTON_ROUNDS = 5  # Newton iterations on J
NEWTON_Y_TOLERANCE = 0.002
GAMUT_SLACK = 100.01  # Linear RGB overshoot tolerated on the Newton path
PLANE_BISECTIONS = 8  # 2**8 > 255 critical planes per axis
MAX_CHROMA_PROBE = 1000.0  # Beyond any sRGB chroma; forces the boundary search


# =============================================================================
# Solver helpers
# =============================================================================

def _matmul(matrix: list, vector) -> list:
    return [
        matrix[0][0] * vector[0] + matrix[0][1] * vector[1] + matrix[0][2] * vector[2],
        matrix[1][0] * vector[0] + matrix[1][1] * vector[1] + matrix[1][2] * vector[2],
        matrix[2][0] * vector[0] + matrix[2][1] * vector[1] + matrix[2][2] * vector[2],
    ]


def _sanitize_radians(angle: float) -> float:
    return (angle + math.pi * 8.0) % (math.pi * 2.0)


def _chromatic_adaptation(component: float) -> float:
    af = abs(component) ** 0.42
    return math.copysign(400.0 * af / (af + 27.13), component)


def _inverse_chromatic_adaptation(adapted: float) -> float:
    adapted_abs = abs(adapted)
    base = max(0.0, 27.13 * adapted_abs / (400.0 - adapted_abs))
    return math.copysign(base ** (1.0 / 0.42), adapted)


def _hue_of(linrgb) -> float:
    """CAM16 hue in radians of a linear RGB point."""
    scaled_discount = _matmul(SCALED_DISCOUNT_FROM_LINRGB, linrgb)
    r_a = _chromatic_adaptation(scaled_discount[0])
    g_a = _chromatic_adaptation(scaled_discount[1])
    b_a = _chromatic_adaptation(scaled_discount[2])
    a = (11.0 * r_a - 12.0 * g_a + b_a) / 11.0
    b = (r_a + g_a - 2.0 * b_a) / 9.0
    return math.atan2(b, a)


def _are_in_cyclic_order(a: float, b: float, c: float) -> bool:
    return _sanitize_radians(b - a) < _sanitize_radians(c - a)


def _set_coordinate(source: list, coordinate: float, target: list, axis: int) -> list:
    """Point on the segment source->target whose axis value is coordinate."""
    t = (coordinate - source[axis]) / (target[axis] - source[axis])
    return [s + (e - s) * t for s, e in zip(source, target)]


def _is_bounded(x: float) -> bool:
    return 0.0 <= x <= 100.0


def _nth_vertex(y: float, n: int):
    """
    Intersection of the Y plane with the n-th of the 12 cube edges.

    Returns None when the plane misses that edge.
    """
    k_r, k_g, k_b = Y_FROM_LINRGB
    coord_a = 0.0 if n % 4 <= 1 else 100.0
    coord_b = 0.0 if n % 2 == 0 else 100.0
    if n < 4:
        g, b = coord_a, coord_b
        r = (y - g * k_g - b * k_b) / k_r
        return [r, g, b] if _is_bounded(r) else None
    if n < 8:
        b, r = coord_a, coord_b
        g = (y - r * k_r - b * k_b) / k_g
        return [r, g, b] if _is_bounded(g) else None
    r, g = coord_a, coord_b
    b = (y - r * k_r - g * k_g) / k_b
    return [r, g, b] if _is_bounded(b) else None


def _bisect_to_segment(y: float, target_hue: float) -> tuple[list, list]:
    """Find the polygon edge of the Y slice that the target hue crosses."""
    left = right = None
    left_hue = right_hue = 0.0
    uncut = True
    for n in range(12):
        mid = _nth_vertex(y, n)
        if mid is None:
            continue
        mid_hue = _hue_of(mid)
        if left is None:
            left = right = mid
            left_hue = right_hue = mid_hue
            continue
        if uncut or _are_in_cyclic_order(left_hue, mid_hue, right_hue):
            uncut = False
            if _are_in_cyclic_order(left_hue, target_hue, mid_hue):
                right, right_hue = mid, mid_hue
            else:
                left, left_hue = mid, mid_hue
    return left, right


def _bisect_to_limit(y: float, target_hue: float) -> list:
    """Most chromatic in-gamut linear RGB at luminance y and the target hue."""
    left, right = _bisect_to_segment(y, target_hue)
    left_hue = _hue_of(left)
    for axis in range(3):
        if left[axis] == right[axis]:
            continue
        if left[axis] < right[axis]:
            l_plane = math.floor(true_delinearized(left[axis]) - 0.5)
            r_plane = math.ceil(true_delinearized(right[axis]) - 0.5)
        else:
            l_plane = math.ceil(true_delinearized(left[axis]) - 0.5)
            r_plane = math.floor(true_delinearized(right[axis]) - 0.5)
        for _ in range(PLANE_BISECTIONS):
            if abs(r_plane - l_plane) <= 1:
                break
            m_plane = (l_plane + r_plane) // 2
            mid = _set_coordinate(left, CRITICAL_PLANES[m_plane], right, axis)
            mid_hue = _hue_of(mid)
            if _are_in_cyclic_order(left_hue, target_hue, mid_hue):
                right, r_plane = mid, m_plane
            else:
                left, left_hue, l_plane = mid, mid_hue, m_plane
    return [(a + b) / 2.0 for a, b in zip(left, right)]


def _find_result_by_j(hue_radians: float, chroma: float, y: float):
    """
    Newton iteration on J for the exact hue and chroma.

    Returns the ARGB result, or None when the color is outside sRGB or the
    iteration does not settle.
    """
    vc = _VC
    # Initial estimate of J
    j = math.sqrt(y) * 11.0
    t_inner_coeff = 1.0 / (1.64 - 0.29 ** vc.n) ** 0.73
    e_hue = 0.25 * (math.cos(hue_radians + 2.0) + 3.8)
    p1 = e_hue * (50000.0 / 13.0) * vc.nc * vc.ncb
    h_sin = math.sin(hue_radians)
    h_cos = math.cos(hue_radians)

    for iteration in range(NEWTON_ROUNDS):
        j_normalized = j / 100.0
        alpha = 0.0 if chroma == 0.0 or j == 0.0 else chroma / math.sqrt(j_normalized)
        t = (alpha * t_inner_coeff) ** (1.0 / 0.9)
        ac = vc.aw * j_normalized ** (1.0 / vc.c / vc.z)
        p2 = ac / vc.nbb
        gamma = 23.0 * (p2 + 0.305) * t / (23.0 * p1 + 11.0 * t * h_cos + 108.0 * t * h_sin)
        a = gamma * h_cos
        b = gamma * h_sin
        r_a = (460.0 * p2 + 451.0 * a + 288.0 * b) / 1403.0
        g_a = (460.0 * p2 - 891.0 * a - 261.0 * b) / 1403.0
        b_a = (460.0 * p2 - 220.0 * a - 6300.0 * b) / 1403.0
        scaled = [
            _inverse_chromatic_adaptation(r_a),
            _inverse_chromatic_adaptation(g_a),
            _inverse_chromatic_adaptation(b_a),
        ]
        linrgb = _matmul(LINRGB_FROM_SCALED_DISCOUNT, scaled)
        if min(linrgb) < 0.0:
            return None
        fnj = sum(k * c for k, c in zip(Y_FROM_LINRGB, linrgb))
        if fnj <= 0.0:
            return None
        if iteration == NEWTON_ROUNDS - 1 or abs(fnj - y) < NEWTON_Y_TOLERANCE:
            if max(linrgb) > GAMUT_SLACK:
                return None
            return argb_from_linrgb(linrgb)
        # 2 * fn(j) / j approximates fn'(j)
        j = j - (fnj - y) * j / (2.0 * fnj)
    return None


def grey_from_tone(tone: float) -> int:
    """The achromatic ARGB color at a tone."""
    component = delinearized(tone_to_y(tone))
    return argb_from_rgb(component, component, component)


def solve_to_argb(hue: float, chroma: float, tone: float) -> int:
    """
    Closest displayable color to the requested HCT triple.

    Out-of-range input is clamped (tone to [0, 100], chroma to >= 0, hue
    wrapped). Chroma beyond what sRGB can show at this hue and tone is reduced
    to the maximum that can be shown. Always returns an opaque color.
    """
    tone = clamp(tone, 0.0, 100.0)
    if chroma < MIN_CHROMA or tone < MIN_TONE or tone > MAX_TONE:
        return grey_from_tone(tone)

    hue_radians = math.radians(sanitize_degrees(hue))
    y = tone_to_y(tone)
    exact = _find_result_by_j(hue_radians, chroma, y)
    if exact is not None:
        return exact
    return argb_from_linrgb(_bisect_to_limit(y, hue_radians))


# =============================================================================
# HCT value type
# =============================================================================

class Hct:
    """
    Immutable (hue, chroma, tone) color that is always displayable.

    Hct(hue, chroma, tone) sanitizes the request (hue wrapped, chroma floored
    at 0, tone clamped to [0, 100]), solves it once, and stores the correlates
    of the color it resolved to. A chroma beyond what sRGB can show is clamped
    silently, so Hct(27, 250, 60).chroma is the gamut limit, not 250.
    Neutral greys (R = G = B) sit on the achromatic axis: hue 0, chroma 0.
    """

    def __init__(self, hue: float, chroma: float, tone: float):
        self._set_argb(solve_to_argb(hue, chroma, tone))

    def _set_argb(self, argb: int):
        r, g, b = rgb_from_argb(argb)
        self._argb = argb_from_rgb(r, g, b)
        self._tone = argb_to_tone(self._argb)
        if r == g == b:
            self._hue = 0.0
            self._chroma = 0.0
        else:
            cam = Cam16.from_argb(self._argb)
            self._hue = cam.hue
            self._chroma = cam.chroma

    @classmethod
    def from_argb(cls, argb: int) -> 'Hct':
        """HCT of a packed color. Alpha is ignored."""
        hct = cls.__new__(cls)
        hct._set_argb(argb)
        return hct

    @property
    def hue(self) -> float:
        return self._hue

    @property
    def chroma(self) -> float:
        return self._chroma

    @property
    def tone(self) -> float:
        return self._tone

    def to_argb(self) -> int:
        """The resolved color. Always opaque; a source color's alpha is not kept."""
        return self._argb

    def to_hex(self) -> str:
        return hex_from_argb(self._argb)

    def with_hue(self, hue: float) -> 'Hct':
        return Hct(hue, self._chroma, self._tone)

    def with_chroma(self, chroma: float) -> 'Hct':
        return Hct(self._hue, chroma, self._tone)

    def with_tone(self, tone: float) -> 'Hct':
        return Hct(self._hue, self._chroma, tone)

    def isclose(self, other: 'Hct', tolerance: float = 1e-6) -> bool:
        hue_delta = abs(self._hue - other._hue)
        hue_delta = min(hue_delta, 360.0 - hue_delta)
        return (
            hue_delta <= tolerance
            and abs(self._chroma - other._chroma) <= tolerance
            and abs(self._tone - other._tone) <= tolerance
        )

    def __eq__(self, other):
        if not isinstance(other, Hct):
            return NotImplemented
        return (self._hue, self._chroma, self._tone) == (other._hue, other._chroma, other._tone)

    def __hash__(self):
        return hash((self._hue, self._chroma, self._tone))

    def __repr__(self):
        return f"Hct(hue={self._hue:.2f}, chroma={self._chroma:.2f}, tone={self._tone:.2f})"


def max_chroma(hue: float, tone: float) -> float:
    """Highest chroma sRGB can display at this hue and tone."""
    return Hct(hue, MAX_CHROMA_PROBE, tone).chroma
