"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
dctphash command-line interface.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from ..models import ColorSpace, TransformMethod


def _add_transform_options(parser: argparse.ArgumentParser) -> None:
    """Options shared by every command that computes fingerprints."""
    group = parser.add_argument_group('transform options (default: user config)')
    group.add_argument(
        '--transform-size',
        type=int,
        default=None,
        help='DCT size N (power of two, 8-64)'
    )
    group.add_argument(
        '--fingerprint-size',
        type=int,
        default=None,
        help='Side of the low-frequency block (fingerprint_size^2 <= 64)'
    )
    group.add_argument(
        '--colorspace',
        choices=[c.value for c in ColorSpace],
        default=None,
        help='RGB to grayscale reduction'
    )
    group.add_argument(
        '--method',
        choices=[m.value for m in TransformMethod],
        default=None,
        dest='transform_method',
        help='DCT strategy'
    )


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='dctphash',
        description='Compute and compare DCT perceptual fingerprints of images',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s compare a.jpg b.jpg
      Print both fingerprints and their Hamming distance

  %(prog)s compare a.jpg b.jpg --threshold 10 --method aan
      Looser similarity judgment, AAN transform

  %(prog)s hash photos/*.png --workers 8
      Fingerprint many files in parallel

  %(prog)s config --init
      Write an example configuration file
        """
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    subparsers = parser.add_subparsers(dest='command', metavar='command')
    subparsers.required = True

    compare = subparsers.add_parser('compare', help='Compare two images')
    compare.add_argument('image_a', type=Path, help='First image')
    compare.add_argument('image_b', type=Path, help='Second image')
    compare.add_argument(
        '-t', '--threshold',
        type=int,
        default=None,
        help='Maximum distance reported as similar (0-64, lower=stricter)'
    )
    _add_transform_options(compare)

    hash_cmd = subparsers.add_parser('hash', help='Fingerprint one or more images')
    hash_cmd.add_argument('images', type=Path, nargs='+', help='Images to fingerprint')
    hash_cmd.add_argument(
        '-w', '--workers',
        type=int,
        default=None,
        help='Number of parallel workers'
    )
    hash_cmd.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress bars (useful for piping output)'
    )
    _add_transform_options(hash_cmd)

    config_cmd = subparsers.add_parser('config', help='Show or create the user configuration')
    config_cmd.add_argument(
        '-i', '--init',
        action='store_true',
        help='Create an example configuration file'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: List of argument strings (default: sys.argv)

    Returns:
        Parsed arguments as Namespace object

    Examples:
        >>> args = parse_arguments(['compare', 'a.png', 'b.png', '--threshold', '8'])
        >>> args.threshold
        8
    """
    parser = create_parser()
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
]
