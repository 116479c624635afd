#!/usr/bin/env python3
"""
Pick scheme seed colors from an image.

Pixels are quantized per channel and counted, every distinct bin is converted
to HCT in one vectorized pass, and bins are scored: a hue that covers more of
the image scores higher, and chroma above the Material primary target is
rewarded. Near-grey bins never become seeds.
"""

from dataclasses import dataclass

import numpy as np
from PIL import Image

from cam16 import rgb_array_to_xyz, xyz_array_to_cam16, y_array_to_tone
from color_utils import argb_from_rgb, circular_hue_distance, hex_from_argb


# =============================================================================
# Constants
# =============================================================================

# Image size limits (security: prevent decompression bombs)
MAX_IMAGE_PIXELS = 50_000_000  # 50 megapixels
MAX_IMAGE_DIMENSION = 10_000  # 10k pixels per side
DOWNSCALE_SIZE = 128  # Longest side when downscaling before quantization

QUANTIZE_BITS = 5  # Bits kept per channel (32 levels)

# Scoring
CUTOFF_CHROMA = 5.0  # Bins below this chroma are treated as grey
CUTOFF_COVERAGE = 0.01  # Minimum pooled hue coverage for a candidate
HUE_WINDOW = 15  # Degrees either side pooled into a hue's coverage
TARGET_CHROMA = 48.0
WEIGHT_COVERAGE = 0.7
WEIGHT_CHROMA_ABOVE = 0.3
WEIGHT_CHROMA_BELOW = 0.1
MIN_HUE_DIFFERENCE = 15.0  # Candidates must differ by at least this much hue

FALLBACK_SEED = 0xFF4285F4  # Used when an image has no chromatic content


@dataclass
class SeedCandidate:
    """A scored seed color."""
    argb: int
    hue: float
    chroma: float
    tone: float
    coverage: float  # Fraction of pixels within HUE_WINDOW of this hue
    score: float

    @property
    def hex(self) -> str:
        return hex_from_argb(self.argb)


# =============================================================================
# Image Loading
# =============================================================================

def load_pixels(image_path: str, downscale: bool = True) -> np.ndarray:
    """
    Load an image as an (n, 3) uint8 RGB array.

    Raises:
        FileNotFoundError: If image file doesn't exist
        ValueError: If file is not a valid image or exceeds size limits
    """
    try:
        img = Image.open(image_path)
    except FileNotFoundError:
        raise FileNotFoundError(f"Image not found: {image_path}")
    except Exception as e:
        raise ValueError(f"Could not open image: {e}") from e

    with img:
        width, height = img.size
        if width > MAX_IMAGE_DIMENSION or height > MAX_IMAGE_DIMENSION:
            raise ValueError(
                f"Image dimensions {width}x{height} exceed maximum "
                f"{MAX_IMAGE_DIMENSION}x{MAX_IMAGE_DIMENSION}"
            )
        if width * height > MAX_IMAGE_PIXELS:
            raise ValueError(
                f"Image has {width * height:,} pixels, exceeding maximum {MAX_IMAGE_PIXELS:,}"
            )
        img = img.convert('RGB')

    if downscale:
        img.thumbnail((DOWNSCALE_SIZE, DOWNSCALE_SIZE))
    return np.array(img).reshape(-1, 3)


# =============================================================================
# Quantization and Scoring
# =============================================================================

def quantize_pixels(pixels: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    Bin pixels by their top QUANTIZE_BITS per channel.

    Returns:
        colors: (m, 3) array of bin-centre RGB values
        counts: (m,) pixel count per bin
    """
    shift = 8 - QUANTIZE_BITS
    binned = pixels.astype(np.int32) >> shift
    unique_bins, counts = np.unique(binned, axis=0, return_counts=True)
    centers = (unique_bins << shift) + (1 << (shift - 1))
    return centers, counts


def score_colors(colors: np.ndarray, counts: np.ndarray, max_colors: int = 4) -> list[SeedCandidate]:
    """
    Rank colors as scheme seeds.

    Args:
        colors: (m, 3) array of RGB values 0-255
        counts: (m,) pixel counts for each color
        max_colors: Maximum number of candidates to return

    Returns:
        Candidates sorted by score descending, hues at least
        MIN_HUE_DIFFERENCE apart. Empty if nothing is chromatic enough.
    """
    if len(colors) == 0:
        return []

    xyz = rgb_array_to_xyz(colors)
    hue, chroma, _ = xyz_array_to_cam16(xyz)
    tone = y_array_to_tone(xyz[:, 1])

    # Pixel share of each integer hue, then pooled over neighbouring hues
    weights = counts.astype(np.float64) / counts.sum()
    hue_bins = np.floor(hue).astype(np.int64) % 360
    hue_share = np.bincount(hue_bins, weights=weights, minlength=360)
    pooled = sum(np.roll(hue_share, k) for k in range(-HUE_WINDOW, HUE_WINDOW + 1))
    coverage = pooled[hue_bins]

    chroma_weight = np.where(chroma < TARGET_CHROMA, WEIGHT_CHROMA_BELOW, WEIGHT_CHROMA_ABOVE)
    scores = coverage * 100.0 * WEIGHT_COVERAGE + (chroma - TARGET_CHROMA) * chroma_weight

    eligible = np.nonzero((chroma >= CUTOFF_CHROMA) & (coverage > CUTOFF_COVERAGE))[0]
    ranked = eligible[np.argsort(-scores[eligible], kind='stable')]

    chosen: list[SeedCandidate] = []
    for i in ranked:
        if any(circular_hue_distance(hue[i], c.hue) < MIN_HUE_DIFFERENCE for c in chosen):
            continue
        r, g, b = (int(v) for v in colors[i])
        chosen.append(SeedCandidate(
            argb=argb_from_rgb(r, g, b),
            hue=float(hue[i]),
            chroma=float(chroma[i]),
            tone=float(tone[i]),
            coverage=float(coverage[i]),
            score=float(scores[i]),
        ))
        if len(chosen) >= max_colors:
            break

    return chosen


def extract_seed_candidates(image_path: str, max_colors: int = 4,
                            downscale: bool = True) -> list[SeedCandidate]:
    """Load, quantize and score an image."""
    pixels = load_pixels(image_path, downscale=downscale)
    colors, counts = quantize_pixels(pixels)
    return score_colors(colors, counts, max_colors)


def extract_seed(image_path: str, downscale: bool = True) -> int:
    """Best seed ARGB for an image, or FALLBACK_SEED for a grey image."""
    candidates = extract_seed_candidates(image_path, max_colors=1, downscale=downscale)
    return candidates[0].argb if candidates else FALLBACK_SEED


# =============================================================================
# Visualization
# =============================================================================

def visualize_candidates(candidates: list[SeedCandidate], output_path: str) -> None:
    """Save a swatch strip of the candidates with their coverage."""
    from PIL import ImageDraw

    swatch_size = 80
    padding = 10
    text_height = 25
    count = max(len(candidates), 1)

    img_width = count * (swatch_size + padding) + padding
    img_height = swatch_size + text_height + 2 * padding

    img = Image.new('RGB', (img_width, img_height), (240, 240, 240))
    draw = ImageDraw.Draw(img)

    for i, candidate in enumerate(candidates):
        x = padding + i * (swatch_size + padding)
        draw.rectangle([x, padding, x + swatch_size, padding + swatch_size], fill=candidate.hex)

        text = f"{candidate.coverage * 100:.1f}%"
        bbox = draw.textbbox((0, 0), text)
        text_x = x + (swatch_size - (bbox[2] - bbox[0])) // 2
        draw.text((text_x, padding + swatch_size + 4), text, fill=(0, 0, 0))

    img.save(output_path)


if __name__ == '__main__':
    import argparse
    import sys

    parser = argparse.ArgumentParser(description='Rank seed colors found in an image.')
    parser.add_argument('--input', '-i', required=True, help='Path to the image file')
    parser.add_argument('--count', '-n', type=int, default=4, help='Maximum candidates')
    parser.add_argument('--swatches', '-s', help='Write a PNG swatch strip to this path')
    parser.add_argument('--no-downscale', action='store_true',
                        help='Quantize at full resolution instead of downscaling')
    args = parser.parse_args()

    try:
        found = extract_seed_candidates(args.input, args.count, downscale=not args.no_downscale)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not found:
        print(f"No chromatic colors; fallback seed {hex_from_argb(FALLBACK_SEED)}")
    for rank, c in enumerate(found, 1):
        print(f"{rank}. {c.hex}  hue {c.hue:6.1f}  chroma {c.chroma:5.1f}  "
              f"tone {c.tone:5.1f}  coverage {c.coverage * 100:5.1f}%  score {c.score:6.1f}")

    if args.swatches:
        visualize_candidates(found, args.swatches)
        print(f"Saved swatches to {args.swatches}")
