#!/usr/bin/env python3
"""Time the color pipeline and profile scheme generation."""

import argparse
import cProfile
import io
import pstats
import time

from hct import Hct
from scheme import MaterialColorScheme
from tonal_palette import COMMON_TONES, TonalPalette

REFERENCE_COLORS = [
    0xFFFF0000,  # Red
    0xFF00FF00,  # Green
    0xFF0000FF,  # Blue
    0xFF6750A4,  # MD3 primary
    0xFF958DA5,  # MD3 secondary
    0xFF625B71,  # MD3 tertiary
]
SEED_COLORS = [0xFFFF0000, 0xFF00FF00, 0xFF0000FF, 0xFF6750A4, 0xFFFFEB3B]


def time_call(fn, repeat: int) -> float:
    """Mean seconds per call over repeat runs."""
    start = time.perf_counter()
    for _ in range(repeat):
        fn()
    return (time.perf_counter() - start) / repeat


def hct_to_argb_batch(size: int):
    hues = [(i * 3.6) % 360.0 for i in range(size)]
    return lambda: [Hct(h, 50.0, 50.0).to_argb() for h in hues]


def cached_tone_access():
    palette = TonalPalette(210.0, 36.0)
    for tone in range(101):
        palette.tone(tone)
    return lambda: [palette.tone(tone) for tone in range(101)]


def benchmarks() -> dict:
    """Benchmark name -> zero-argument callable."""
    suite = {
        'hct_to_argb_single': lambda: Hct(210.0, 50.0, 50.0).to_argb(),
        'argb_to_hct_single': lambda: Hct.from_argb(0xFF6750A4),
        'argb_to_hct_batch': lambda: [Hct.from_argb(c) for c in REFERENCE_COLORS],
        'palette_from_hue_chroma': lambda: TonalPalette(210.0, 36.0),
        'palette_from_argb': lambda: TonalPalette.from_argb(0xFF6750A4),
        'palette_common_tones_cold': lambda: TonalPalette(210.0, 36.0).tones(COMMON_TONES),
        'palette_cached_tones': cached_tone_access(),
        'light_scheme_from_argb': lambda: MaterialColorScheme.light_from_argb(0xFF6750A4),
        'dark_scheme_from_argb': lambda: MaterialColorScheme.dark_from_argb(0xFF6750A4),
        'schemes_from_multiple_seeds': lambda: [MaterialColorScheme.light_from_argb(c) for c in SEED_COLORS],
    }
    for size in (10, 50, 100, 256):
        suite[f'hct_to_argb_batch_{size}'] = hct_to_argb_batch(size)
    return suite


def detailed_profile(seed: int):
    """cProfile a light + dark scheme build."""
    print(f"\n{'='*60}")
    print(f"Detailed profile of scheme generation for #{seed & 0xFFFFFF:06x}")
    print(f"{'='*60}")

    profiler = cProfile.Profile()
    profiler.enable()
    MaterialColorScheme.light_from_argb(seed)
    MaterialColorScheme.dark_from_argb(seed)
    profiler.disable()

    stream = io.StringIO()
    stats = pstats.Stats(profiler, stream=stream)
    stats.sort_stats('cumulative')
    stats.print_stats(20)  # Top 20 functions

    print(stream.getvalue())


def main():
    parser = argparse.ArgumentParser(description='Time HCT, palette and scheme operations.')
    parser.add_argument('--repeat', '-r', type=int, default=50, help='Runs per benchmark')
    parser.add_argument('--profile', '-p', action='store_true', help='Also print a cProfile listing')
    args = parser.parse_args()

    print(f"{'Benchmark':<32} {'per call':>12}")
    print("-" * 46)
    for name, fn in benchmarks().items():
        seconds = time_call(fn, args.repeat)
        print(f"{name:<32} {seconds * 1e6:>9.1f} us")

    if args.profile:
        detailed_profile(0xFF6750A4)


if __name__ == "__main__":
    main()
