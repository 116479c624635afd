"""
Tonal palettes: one hue and chroma, every tone from black to white.
"""

from hct import Hct, solve_to_argb
from color_utils import clamp, sanitize_degrees


# Tones Material Design publishes for each palette
COMMON_TONES = (0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 95, 99, 100)


class TonalPalette:
    """
    Colors of a fixed (hue, chroma) at any tone in [0, 100].

    Each tone is solved on first request and memoized for the life of the
    instance, so repeated lookups skip the gamut search. The cache only ever
    grows and a key always maps to the same color. Instances are not safe to
    share between threads without a lock around tone().
    """

    def __init__(self, hue: float, chroma: float):
        self._hue = sanitize_degrees(float(hue))
        self._chroma = max(0.0, float(chroma))
        self._cache: dict[float, int] = {}

    @classmethod
    def from_argb(cls, argb: int) -> 'TonalPalette':
        """Palette through the hue and chroma of a seed color."""
        return cls.from_hct(Hct.from_argb(argb))

    @classmethod
    def from_hct(cls, hct: Hct) -> 'TonalPalette':
        return cls(hct.hue, hct.chroma)

    @property
    def hue(self) -> float:
        return self._hue

    @property
    def chroma(self) -> float:
        return self._chroma

    @property
    def cached_tones(self) -> tuple:
        """Tones solved so far, in ascending order."""
        return tuple(sorted(self._cache))

    def tone(self, tone: float) -> int:
        """ARGB at the given tone; out-of-range tones are clamped."""
        tone = clamp(tone, 0, 100)
        argb = self._cache.get(tone)
        if argb is None:
            argb = solve_to_argb(self._hue, self._chroma, tone)
            self._cache[tone] = argb
        return argb

    def tones(self, tones=COMMON_TONES) -> dict:
        """Map each requested tone to its ARGB."""
        return {t: self.tone(t) for t in tones}

    def get_hct(self, tone: float) -> Hct:
        """HCT of the color actually produced at a tone."""
        return Hct.from_argb(self.tone(tone))

    def copy(self) -> 'TonalPalette':
        """Independent palette with the same key and a copy of the cache."""
        other = TonalPalette(self._hue, self._chroma)
        other._cache = dict(self._cache)
        return other

    def __eq__(self, other):
        if not isinstance(other, TonalPalette):
            return NotImplemented
        return (self._hue, self._chroma) == (other._hue, other._chroma)

    def __hash__(self):
        return hash((self._hue, self._chroma))

    def __repr__(self):
        return f"TonalPalette(hue={self._hue:.2f}, chroma={self._chroma:.2f}, cached={len(self._cache)})"
