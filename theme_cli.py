#!/usr/bin/env python3
"""
Command line front end: quantize pixels, rank theme colors, build schemes.

Examples:
    python theme_cli.py quantize pixels.txt --max-colors 64
    python theme_cli.py score ff0000:120 00ff00:40 4285f4
    python theme_cli.py scheme 6750a4 --dark --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import numpy as np

from color_math import argb_from_hex, hex_from_argb
from quantize import quantize
from scheme import Scheme
from score import DEFAULT_DESIRED, score

logger = logging.getLogger(__name__)


DEFAULT_MAX_COLORS = 128


def parse_weighted_color(text: str) -> tuple:
    """Parse HEX or HEX:COUNT into (argb, count)."""
    hex_part, _, count_part = text.partition(':')
    count = int(count_part) if count_part else 1
    if count < 0:
        raise ValueError(f"Population must not be negative: {text!r}")
    return argb_from_hex(hex_part), count


def load_pixels(path: Path) -> list:
    """
    Read ARGB pixels from a .npy integer array or a text file of hex colors.

    Text files hold one color per line; blank lines and lines starting with
    '#' followed by a space are skipped.
    """
    if path.suffix.lower() == '.npy':
        array = np.load(path)
        if not np.issubdtype(array.dtype, np.integer):
            raise ValueError(f"Expected an integer array in {path}, got {array.dtype}")
        return [int(p) for p in array.ravel()]

    pixels = []
    with open(path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith('# '):
                continue
            pixels.append(argb_from_hex(line))
    return pixels


def cmd_quantize(args) -> None:
    pixels = load_pixels(Path(args.pixels_file))
    logger.info("Quantizing %d pixels to at most %d colors", len(pixels), args.max_colors)
    result = quantize(pixels, args.max_colors)
    ranked = sorted(result.color_to_count.items(), key=lambda item: item[1], reverse=True)
    for argb, count in ranked:
        print(f"{hex_from_argb(argb)}  {count}")


def cmd_score(args) -> None:
    colors_to_population = {}
    for text in args.colors:
        argb, count = parse_weighted_color(text)
        colors_to_population[argb] = colors_to_population.get(argb, 0) + count
    for argb in score(colors_to_population, desired=args.desired, filter=not args.no_filter):
        print(hex_from_argb(argb))


def cmd_scheme(args) -> None:
    seed = argb_from_hex(args.seed)
    if args.content:
        scheme = Scheme.dark_content(seed) if args.dark else Scheme.light_content(seed)
    else:
        scheme = Scheme.dark(seed) if args.dark else Scheme.light(seed)

    roles = scheme.to_dict(as_hex=True)
    if args.json:
        print(json.dumps(roles, indent=2))
        return
    width = max(len(role) for role in roles)
    for role, value in roles.items():
        print(f"{role:<{width}}  {value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Extract theme colors from pixels and build Material color schemes.'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log algorithm progress at DEBUG level'
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    quantize_parser = subparsers.add_parser('quantize', help='Reduce pixels to representative colors')
    quantize_parser.add_argument(
        'pixels_file',
        help='Text file with one hex color per line, or a .npy array of ARGB ints'
    )
    quantize_parser.add_argument(
        '--max-colors', '-n',
        type=int,
        default=DEFAULT_MAX_COLORS,
        help=f'Upper bound on colors returned (default: {DEFAULT_MAX_COLORS})'
    )
    quantize_parser.set_defaults(func=cmd_quantize)

    score_parser = subparsers.add_parser('score', help='Rank colors for use as a theme source')
    score_parser.add_argument(
        'colors',
        nargs='+',
        metavar='HEX[:COUNT]',
        help='Colors with optional population, e.g. ff0000:120'
    )
    score_parser.add_argument(
        '--desired',
        type=int,
        default=DEFAULT_DESIRED,
        help=f'Maximum colors to return (default: {DEFAULT_DESIRED})'
    )
    score_parser.add_argument(
        '--no-filter',
        action='store_true',
        help='Keep grayish, dark and rare colors'
    )
    score_parser.set_defaults(func=cmd_score)

    scheme_parser = subparsers.add_parser('scheme', help='Build a color scheme from a seed color')
    scheme_parser.add_argument('seed', help='Seed color as hex')
    scheme_parser.add_argument('--dark', action='store_true', help='Dark scheme')
    scheme_parser.add_argument(
        '--content',
        action='store_true',
        help="Keep the seed's own chroma instead of the vivid default"
    )
    scheme_parser.add_argument('--json', action='store_true', help='Print roles as JSON')
    scheme_parser.set_defaults(func=cmd_scheme)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s — %(message)s",
    )

    try:
        args.func(args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == '__main__':
    main()
