#!/usr/bin/env python3
"""Generate Material color schemes from a seed color or an image."""

import argparse
import json
import sys
from html import escape
from pathlib import Path

from cam16 import argb_to_tone
from color_utils import argb_from_hex, hex_from_argb
from contrast import ratio_of_argbs, wcag_level
from extract_colors import extract_seed
from hct import Hct
from scheme import ROLE_NAMES, MaterialColorScheme, ThemeMode


# Foreground role to label each background role with in the report
ON_ROLES = {
    'primary': 'on_primary',
    'primary_container': 'on_primary_container',
    'secondary': 'on_secondary',
    'secondary_container': 'on_secondary_container',
    'tertiary': 'on_tertiary',
    'tertiary_container': 'on_tertiary_container',
    'error': 'on_error',
    'error_container': 'on_error_container',
    'background': 'on_background',
    'surface': 'on_surface',
    'surface_variant': 'on_surface_variant',
    'inverse_surface': 'inverse_on_surface',
}


def build_schemes(seed: int, mode: str) -> list[MaterialColorScheme]:
    modes = [ThemeMode.LIGHT, ThemeMode.DARK] if mode == 'both' else [ThemeMode(mode)]
    return [MaterialColorScheme.from_argb(seed, m) for m in modes]


def render_text(seed: int, schemes: list[MaterialColorScheme]) -> str:
    """Role table with one hex column per scheme."""
    hct = Hct.from_argb(seed)
    lines = [
        f"Seed {hex_from_argb(seed)}  hue {hct.hue:.1f}  chroma {hct.chroma:.1f}  tone {hct.tone:.1f}",
        "",
        f"{'Role':<28}" + "".join(f"{s.mode.value:>10}" for s in schemes),
        "-" * (28 + 10 * len(schemes)),
    ]
    for role in ROLE_NAMES:
        cells = "".join(f"{hex_from_argb(getattr(s, role)):>10}" for s in schemes)
        lines.append(f"{role:<28}{cells}")

    lines.append("")
    for s in schemes:
        ratio = ratio_of_argbs(s.primary, s.on_primary)
        lines.append(f"{s.mode.value}: on_primary / primary contrast {ratio:.2f} ({wcag_level(ratio)})")
    return "\n".join(lines)


def render_json(seed: int, schemes: list[MaterialColorScheme]) -> str:
    payload = {
        'seed': hex_from_argb(seed),
        'schemes': {s.mode.value: s.to_hex_dict() for s in schemes},
    }
    return json.dumps(payload, indent=2)


def text_color_for_background(argb: int) -> str:
    """Return black or white text color based on background tone."""
    return "#000" if argb_to_tone(argb) > 50 else "#fff"


def render_html(seed: int, schemes: list[MaterialColorScheme], source: str) -> str:
    """Static swatch report, one card grid per scheme."""
    css = """
        * { box-sizing: border-box; margin: 0; padding: 0; }
        body {
            font-family: system-ui, -apple-system, sans-serif;
            background: #f5f5f5;
            color: #333;
            line-height: 1.5;
            padding: 2rem;
            max-width: 1100px;
            margin: 0 auto;
        }
        h1 { font-size: 1.5rem; margin-bottom: 0.5rem; }
        h2 { font-size: 1.2rem; margin: 2rem 0 1rem; border-bottom: 1px solid #ddd; padding-bottom: 0.5rem; }
        .meta { color: #666; font-size: 0.9rem; margin-bottom: 1rem; }
        .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(160px, 1fr)); gap: 0.75rem; }
        .swatch {
            border-radius: 8px;
            padding: 0.75rem;
            min-height: 80px;
            font-size: 0.75rem;
            box-shadow: 0 1px 3px rgba(0,0,0,0.08);
        }
        .swatch .role { font-weight: 600; }
        .swatch .hex { font-family: monospace; }
    """

    sections = []
    for s in schemes:
        cards = []
        for role in ROLE_NAMES:
            bg = getattr(s, role)
            on_role = ON_ROLES.get(role)
            fg = hex_from_argb(getattr(s, on_role)) if on_role else text_color_for_background(bg)
            cards.append(
                f'<div class="swatch" style="background:{hex_from_argb(bg)};color:{fg}">'
                f'<div class="role">{role}</div><div class="hex">{hex_from_argb(bg)}</div></div>'
            )
        sections.append(f'<h2>{s.mode.value.title()}</h2>\n<div class="grid">\n' + "\n".join(cards) + '\n</div>')

    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Scheme for {escape(source)}</title>
<style>{css}</style>
</head>
<body>
<h1>Material scheme</h1>
<p class="meta">Seed {hex_from_argb(seed)} from {escape(source)}</p>
{"".join(sections)}
</body>
</html>
"""


def main():
    parser = argparse.ArgumentParser(
        description='Generate Material Design 3 color schemes from a seed color.'
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--seed', '-s', help='Seed color as hex, e.g. #6750A4')
    source.add_argument('--image', '-i', help='Pick the seed from an image')
    parser.add_argument(
        '--mode', '-m',
        choices=['light', 'dark', 'both'],
        default='both',
        help='Which scheme(s) to generate'
    )
    parser.add_argument('--json', action='store_true', help='Print JSON instead of a table')
    parser.add_argument(
        '--output', '-o',
        nargs='?',
        const=True,
        default=None,
        help='Write HTML report. Optionally specify path, otherwise scheme.html.'
    )

    args = parser.parse_args()

    try:
        if args.seed:
            seed = argb_from_hex(args.seed)
            label = args.seed
        else:
            seed = extract_seed(args.image)
            label = args.image
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    schemes = build_schemes(seed, args.mode)
    print(render_json(seed, schemes) if args.json else render_text(seed, schemes))

    if args.output:
        output_path = Path('scheme.html') if args.output is True else Path(args.output)
        try:
            output_path.write_text(render_html(seed, schemes, label))
            print(f"\nWrote: {output_path}", file=sys.stderr if args.json else sys.stdout)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            sys.exit(1)


if __name__ == '__main__':
    main()
