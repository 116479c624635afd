"""
ARGB packing, hex formatting and sRGB transfer functions.

Colors travel through the toolkit as packed 32-bit integers laid out as
0xAARRGGBB. Linear RGB components are expressed on a 0-100 scale, matching
the XYZ scale used by the CAM16 engine.
"""

import math
import string

import numpy as np


# =============================================================================
# Constants
# =============================================================================

SRGB_GAMMA_THRESHOLD = 0.04045  # Encoded value below which sRGB is linear
LINEAR_GAMMA_THRESHOLD = 0.0031308  # Same knee on the linear side
OPAQUE_ALPHA = 0xFF


# =============================================================================
# Packing
# =============================================================================

def argb_from_rgb(red: int, green: int, blue: int, alpha: int = OPAQUE_ALPHA) -> int:
    """Pack 8-bit channels into an ARGB integer."""
    return ((alpha & 0xFF) << 24) | ((red & 0xFF) << 16) | ((green & 0xFF) << 8) | (blue & 0xFF)


def alpha_from_argb(argb: int) -> int:
    return (argb >> 24) & 0xFF


def red_from_argb(argb: int) -> int:
    return (argb >> 16) & 0xFF


def green_from_argb(argb: int) -> int:
    return (argb >> 8) & 0xFF


def blue_from_argb(argb: int) -> int:
    return argb & 0xFF


def rgb_from_argb(argb: int) -> tuple[int, int, int]:
    """Unpack an ARGB integer into an (r, g, b) tuple, dropping alpha."""
    return red_from_argb(argb), green_from_argb(argb), blue_from_argb(argb)


def is_opaque(argb: int) -> bool:
    return alpha_from_argb(argb) == OPAQUE_ALPHA


def with_alpha(argb: int, alpha: int) -> int:
    """Replace the alpha byte, keeping the color channels untouched."""
    return ((alpha & 0xFF) << 24) | (argb & 0x00FFFFFF)


def argb_from_rgb_float(rgb: tuple[float, float, float]) -> int:
    """Pack a normalized (0.0-1.0) RGB triple, as used by rendering hosts."""
    channels = [round_half_up(clamp(c, 0.0, 1.0) * 255.0) for c in rgb]
    return argb_from_rgb(*channels)


def rgb_float_from_argb(argb: int) -> tuple[float, float, float]:
    r, g, b = rgb_from_argb(argb)
    return r / 255.0, g / 255.0, b / 255.0


# =============================================================================
# Hex
# =============================================================================

def argb_from_hex(hex_color: str) -> int:
    """
    Parse '#RGB', '#RRGGBB' or '#AARRGGBB' (leading '#' optional).

    Raises:
        ValueError: If hex_color is not a valid hex color
    """
    text = hex_color.strip().lstrip('#')

    if len(text) == 3:
        text = ''.join(ch * 2 for ch in text)
    if len(text) == 6:
        text = 'ff' + text
    if len(text) != 8 or any(ch not in string.hexdigits for ch in text):
        raise ValueError(f"Invalid hex color: {hex_color!r}")

    return int(text, 16)


def hex_from_argb(argb: int, include_alpha: bool = False) -> str:
    """Format as '#rrggbb', or '#aarrggbb' when include_alpha is set."""
    if include_alpha:
        return f"#{argb & 0xFFFFFFFF:08x}"
    return f"#{argb & 0x00FFFFFF:06x}"


# =============================================================================
# Numeric helpers
# =============================================================================

def clamp(value: float, low: float, high: float) -> float:
    return low if value < low else high if value > high else value


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives; Python's round() is banker's."""
    return int(math.floor(value + 0.5))


def sanitize_degrees(degrees: float) -> float:
    """Wrap an angle into [0, 360)."""
    degrees = degrees % 360.0
    # -1e-20 % 360.0 rounds up to 360.0
    return 0.0 if degrees >= 360.0 else degrees


def circular_hue_distance(hue1: float, hue2: float) -> float:
    """Compute minimum angular distance between two hues (0-180)."""
    diff = abs(hue1 - hue2) % 360.0
    return min(diff, 360.0 - diff)


def lerp(start: float, stop: float, amount: float) -> float:
    return (1.0 - amount) * start + amount * stop


# =============================================================================
# sRGB transfer functions
# =============================================================================

def linearized(component: int) -> float:
    """Inverse sRGB gamma: 8-bit channel to linear light on a 0-100 scale."""
    normalized = component / 255.0
    if normalized <= SRGB_GAMMA_THRESHOLD:
        return normalized / 12.92 * 100.0
    return ((normalized + 0.055) / 1.055) ** 2.4 * 100.0


def true_delinearized(component: float) -> float:
    """sRGB gamma without rounding: linear 0-100 to encoded 0-255."""
    normalized = component / 100.0
    if normalized <= LINEAR_GAMMA_THRESHOLD:
        encoded = normalized * 12.92
    else:
        encoded = 1.055 * normalized ** (1.0 / 2.4) - 0.055
    return encoded * 255.0


def delinearized(component: float) -> int:
    """sRGB gamma: linear 0-100 to the nearest 8-bit channel value."""
    return int(clamp(round_half_up(true_delinearized(component)), 0, 255))


def argb_from_linrgb(linrgb) -> int:
    """Pack a linear RGB triple (0-100 scale) into an opaque ARGB integer."""
    return argb_from_rgb(
        delinearized(linrgb[0]),
        delinearized(linrgb[1]),
        delinearized(linrgb[2]),
    )


def linearized_array(rgb: np.ndarray) -> np.ndarray:
    """Vectorized linearized() over an (n, 3) array of 0-255 channels."""
    rgb_norm = rgb.astype(np.float64) / 255.0
    mask = rgb_norm > SRGB_GAMMA_THRESHOLD
    return np.where(mask, ((rgb_norm + 0.055) / 1.055) ** 2.4, rgb_norm / 12.92) * 100.0
