"""
Report formatting and display for the CLI interface.

Provides functions to print fingerprints and comparison results in a
human-readable format.
"""

from __future__ import annotations

from ..models import FingerprintResult
from ..utils.formatters import format_fingerprint


def print_comparison(
    path_a: str,
    path_b: str,
    hash_a: int,
    hash_b: int,
    distance: int,
    threshold: int,
) -> None:
    """
    Print two fingerprints, their distance and the similarity verdict.

    Args:
        path_a: First image path
        path_b: Second image path
        hash_a: Fingerprint of the first image
        hash_b: Fingerprint of the second image
        distance: Hamming distance between them
        threshold: Maximum distance reported as similar
    """
    print(f"Hash A: {hash_a} (0x{format_fingerprint(hash_a)})  {path_a}")
    print(f"Hash B: {hash_b} (0x{format_fingerprint(hash_b)})  {path_b}")
    print(f"Hamming distance: {distance}")
    verdict = "similar" if distance <= threshold else "different"
    print(f"Hashes are {verdict} (threshold {threshold})")


def print_hash_results(results: list[FingerprintResult]) -> None:
    """Print one 'hex  path' line per result, or an error line."""
    for result in results:
        if result.ok:
            print(f"{result.hex}  {result.path}")
        else:
            print(f"{'ERROR':<16}  {result.path}: {result.error}")


def print_config(config, transform_config_text: str) -> None:
    """
    Print the effective user configuration.

    Args:
        config: UserConfig instance
        transform_config_text: Description of the resolved TransformConfig
            (or the reason it is invalid)
    """
    print(f"Configuration file: {config.config_file_path}")
    if config.config_file_path.exists():
        print("Status: found")
    else:
        print("Status: not found (using defaults)")
        print("\nRun 'dctphash config --init' to create one.")

    print("\nCurrent settings:")
    print(f"  transform_size: {config.transform_size}")
    print(f"  fingerprint_size: {config.fingerprint_size}")
    print(f"  colorspace: {config.colorspace}")
    print(f"  transform_method: {config.transform_method}")
    print(f"  similarity_threshold: {config.similarity_threshold}")
    print(f"  default_workers: {config.default_workers}")
    pixels = config.max_image_pixels
    print(f"  max_image_pixels: {pixels:,}" if isinstance(pixels, int) else f"  max_image_pixels: {pixels!r}")
    print(f"\nTransform: {transform_config_text}")


__all__ = [
    'print_comparison',
    'print_hash_results',
    'print_config',
]
