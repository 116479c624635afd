"""
Material Design 3 color schemes derived from a single seed color.

A seed is read as HCT, six tonal palettes are keyed off its hue and chroma,
and every named color role picks one tone of one palette. The role -> tone
assignment for both modes lives in ROLE_TONES and is resolved by a single
routine, resolve_roles().
"""

from dataclasses import dataclass
from enum import Enum

from color_utils import argb_from_hex, argb_from_rgb_float, hex_from_argb
from hct import Hct
from tonal_palette import TonalPalette


# =============================================================================
# Palette Policy
# =============================================================================

ACHROMATIC_SEED_CHROMA = 5.0  # Seeds below this chroma yield a monochrome scheme
PRIMARY_MIN_CHROMA = 48.0
SECONDARY_MIN_CHROMA = 16.0
SECONDARY_CHROMA_RATIO = 1 / 3
TERTIARY_HUE_SHIFT = 60.0
TERTIARY_CHROMA = 24.0
NEUTRAL_CHROMA = 4.0
NEUTRAL_VARIANT_CHROMA = 8.0
ERROR_HUE = 25.0
ERROR_CHROMA = 84.0


class ThemeMode(Enum):
    LIGHT = 'light'
    DARK = 'dark'


@dataclass(frozen=True)
class CorePalettes:
    """The six palettes a scheme is resolved from."""
    primary: TonalPalette
    secondary: TonalPalette
    tertiary: TonalPalette
    neutral: TonalPalette
    neutral_variant: TonalPalette
    error: TonalPalette

    @classmethod
    def from_seed(cls, seed: Hct) -> 'CorePalettes':
        """
        Key the palettes off a seed color.

        Colorful seeds keep their hue with primary chroma floored so that even
        a dull seed gives a vivid accent. Near-grey seeds have no meaningful
        hue, so every palette except error becomes a pure grey ramp.
        """
        hue = seed.hue
        chroma = seed.chroma
        error = TonalPalette(ERROR_HUE, ERROR_CHROMA)

        if chroma < ACHROMATIC_SEED_CHROMA:
            grey = TonalPalette(hue, 0.0)
            return cls(
                primary=grey,
                secondary=grey.copy(),
                tertiary=grey.copy(),
                neutral=grey.copy(),
                neutral_variant=grey.copy(),
                error=error,
            )

        return cls(
            primary=TonalPalette(hue, max(chroma, PRIMARY_MIN_CHROMA)),
            secondary=TonalPalette(hue, max(chroma * SECONDARY_CHROMA_RATIO, SECONDARY_MIN_CHROMA)),
            tertiary=TonalPalette(hue + TERTIARY_HUE_SHIFT, TERTIARY_CHROMA),
            neutral=TonalPalette(hue, NEUTRAL_CHROMA),
            neutral_variant=TonalPalette(hue, NEUTRAL_VARIANT_CHROMA),
            error=error,
        )

    @classmethod
    def from_argb(cls, argb: int) -> 'CorePalettes':
        return cls.from_seed(Hct.from_argb(argb))


# =============================================================================
# Role -> Tone Table
# =============================================================================

# role: (palette, light tone, dark tone)
ROLE_TONES = {
    'primary': ('primary', 40, 80),
    'on_primary': ('primary', 100, 20),
    'primary_container': ('primary', 90, 30),
    'on_primary_container': ('primary', 10, 90),
    'inverse_primary': ('primary', 80, 40),
    'surface_tint': ('primary', 40, 80),

    'secondary': ('secondary', 40, 80),
    'on_secondary': ('secondary', 100, 20),
    'secondary_container': ('secondary', 90, 30),
    'on_secondary_container': ('secondary', 10, 90),

    'tertiary': ('tertiary', 40, 80),
    'on_tertiary': ('tertiary', 100, 20),
    'tertiary_container': ('tertiary', 90, 30),
    'on_tertiary_container': ('tertiary', 10, 90),

    'error': ('error', 40, 80),
    'on_error': ('error', 100, 20),
    'error_container': ('error', 90, 30),
    'on_error_container': ('error', 10, 90),

    # Fixed roles keep the same tone in both modes
    'primary_fixed': ('primary', 90, 90),
    'primary_fixed_dim': ('primary', 80, 80),
    'on_primary_fixed': ('primary', 10, 10),
    'on_primary_fixed_variant': ('primary', 30, 30),
    'secondary_fixed': ('secondary', 90, 90),
    'secondary_fixed_dim': ('secondary', 80, 80),
    'on_secondary_fixed': ('secondary', 10, 10),
    'on_secondary_fixed_variant': ('secondary', 30, 30),
    'tertiary_fixed': ('tertiary', 90, 90),
    'tertiary_fixed_dim': ('tertiary', 80, 80),
    'on_tertiary_fixed': ('tertiary', 10, 10),
    'on_tertiary_fixed_variant': ('tertiary', 30, 30),

    'background': ('neutral', 98, 6),
    'on_background': ('neutral', 10, 90),
    'surface': ('neutral', 98, 6),
    'on_surface': ('neutral', 10, 90),
    'surface_dim': ('neutral', 87, 6),
    'surface_bright': ('neutral', 98, 24),
    'surface_container_lowest': ('neutral', 100, 4),
    'surface_container_low': ('neutral', 96, 10),
    'surface_container': ('neutral', 94, 12),
    'surface_container_high': ('neutral', 92, 17),
    'surface_container_highest': ('neutral', 90, 22),
    'inverse_surface': ('neutral', 20, 90),
    'inverse_on_surface': ('neutral', 95, 20),
    'shadow': ('neutral', 0, 0),
    'scrim': ('neutral', 0, 0),

    'surface_variant': ('neutral_variant', 90, 30),
    'on_surface_variant': ('neutral_variant', 30, 80),
    'outline': ('neutral_variant', 50, 60),
    'outline_variant': ('neutral_variant', 80, 30),
}

ROLE_NAMES = tuple(ROLE_TONES)


def role_tone(role: str, mode: ThemeMode) -> tuple[str, int]:
    """(palette name, tone) a role uses in a mode."""
    palette_name, light_tone, dark_tone = ROLE_TONES[role]
    return palette_name, light_tone if mode is ThemeMode.LIGHT else dark_tone


def resolve_roles(palettes: CorePalettes, mode: ThemeMode) -> dict:
    """Look up every role in ROLE_TONES against the palettes."""
    resolved = {}
    for role in ROLE_NAMES:
        palette_name, tone = role_tone(role, mode)
        resolved[role] = getattr(palettes, palette_name).tone(tone)
    return resolved


# =============================================================================
# Scheme
# =============================================================================

@dataclass(frozen=True)
class MaterialColorScheme:
    """
    Resolved ARGB color of every Material 3 role for one mode.

    Holds plain integers only; the palettes used to derive it are dropped.
    Switching modes means building a new scheme.
    """
    mode: ThemeMode

    primary: int
    on_primary: int
    primary_container: int
    on_primary_container: int
    inverse_primary: int
    surface_tint: int

    secondary: int
    on_secondary: int
    secondary_container: int
    on_secondary_container: int

    tertiary: int
    on_tertiary: int
    tertiary_container: int
    on_tertiary_container: int

    error: int
    on_error: int
    error_container: int
    on_error_container: int

    primary_fixed: int
    primary_fixed_dim: int
    on_primary_fixed: int
    on_primary_fixed_variant: int
    secondary_fixed: int
    secondary_fixed_dim: int
    on_secondary_fixed: int
    on_secondary_fixed_variant: int
    tertiary_fixed: int
    tertiary_fixed_dim: int
    on_tertiary_fixed: int
    on_tertiary_fixed_variant: int

    background: int
    on_background: int
    surface: int
    on_surface: int
    surface_dim: int
    surface_bright: int
    surface_container_lowest: int
    surface_container_low: int
    surface_container: int
    surface_container_high: int
    surface_container_highest: int
    inverse_surface: int
    inverse_on_surface: int
    shadow: int
    scrim: int

    surface_variant: int
    on_surface_variant: int
    outline: int
    outline_variant: int

    @classmethod
    def from_argb(cls, seed: int, mode: ThemeMode = ThemeMode.LIGHT) -> 'MaterialColorScheme':
        palettes = CorePalettes.from_argb(seed)
        return cls(mode=mode, **resolve_roles(palettes, mode))

    @classmethod
    def light_from_argb(cls, seed: int) -> 'MaterialColorScheme':
        return cls.from_argb(seed, ThemeMode.LIGHT)

    @classmethod
    def dark_from_argb(cls, seed: int) -> 'MaterialColorScheme':
        return cls.from_argb(seed, ThemeMode.DARK)

    @classmethod
    def from_rgb(cls, rgb: tuple[float, float, float],
                 mode: ThemeMode = ThemeMode.LIGHT) -> 'MaterialColorScheme':
        """Build from a normalized (0.0-1.0) RGB seed."""
        return cls.from_argb(argb_from_rgb_float(rgb), mode)

    @classmethod
    def from_hex(cls, hex_color: str, mode: ThemeMode = ThemeMode.LIGHT) -> 'MaterialColorScheme':
        """
        Raises:
            ValueError: If hex_color is not a valid hex color
        """
        return cls.from_argb(argb_from_hex(hex_color), mode)

    @property
    def is_dark(self) -> bool:
        return self.mode is ThemeMode.DARK

    def roles(self) -> dict:
        """Role name -> ARGB, in ROLE_TONES order."""
        return {role: getattr(self, role) for role in ROLE_NAMES}

    def to_hex_dict(self) -> dict:
        return {role: hex_from_argb(argb) for role, argb in self.roles().items()}
