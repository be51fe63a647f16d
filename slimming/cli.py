"""
Command-line entry point: narrow an image file by K columns.

    python -m slimming input.pnm output.pnm 40
"""

import argparse
import logging
import sys

from .carving import reduce_width
from .errors import CarvingError
from .io import load_image, save_image

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='slimming',
        description='Reduce image width by removing low-energy vertical grooves')
    parser.add_argument('input', help='Input image path (PNM, PNG, ...)')
    parser.add_argument('output', help='Output image path')
    parser.add_argument('k', type=int, help='Number of columns to remove')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log every removed groove')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        image = load_image(args.input)
        logger.info("Loaded %s: %dx%d", args.input, image.width, image.height)
        carved = reduce_width(image, args.k)
        save_image(carved, args.output)
    except (CarvingError, ValueError, OSError) as exc:
        print(f"slimming: {exc}", file=sys.stderr)
        return 1

    print(f"Saved: {args.output} ({carved.width}x{carved.height})")
    return 0
