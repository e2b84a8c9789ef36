"""
Hashing package for dctphash.

Implements the fingerprint pipeline: preprocessing, 2D DCT, bit
extraction and comparison, plus file loading and batch processing.

Public API:
- resample_to_grayscale: Reduce an image to an NxN grayscale matrix
- dct2d: Two-dimensional DCT with selectable strategy
- extract_fingerprint: Threshold DCT coefficients into 64 bits
- compute_fingerprint: Full image -> fingerprint pipeline
- hamming_distance: Bit distance between two fingerprints
- load_image: Decode an image file into an OwnedImage
- fingerprint_files_parallel: Fingerprint many files in parallel
- has_heif_support: Check if HEIC/HEIF support is available
"""

from __future__ import annotations

from .preprocess import rgb_to_grayscale, resample_to_grayscale
from .transform import (
    CosineTableCache,
    get_cosine_cache,
    clear_cosine_cache,
    select_method,
    dct2d,
)
from .fingerprint import (
    extract_fingerprint,
    fingerprint_matrix,
    compute_fingerprint,
    hamming_distance,
    is_similar,
    to_imagehash,
    from_imagehash,
)
from .loader import ImageLoadError, load_image
from .parallel import fingerprint_file, fingerprint_files_parallel

# Import dependencies for has_heif_support function
from .dependencies import HAS_HEIF_SUPPORT


def has_heif_support() -> bool:
    """Check if HEIC/HEIF support is available."""
    return HAS_HEIF_SUPPORT


# Public API exports
__all__ = [
    # Preprocessing
    'rgb_to_grayscale',
    'resample_to_grayscale',
    # Transform
    'CosineTableCache',
    'get_cosine_cache',
    'clear_cosine_cache',
    'select_method',
    'dct2d',
    # Fingerprints
    'extract_fingerprint',
    'fingerprint_matrix',
    'compute_fingerprint',
    'hamming_distance',
    'is_similar',
    'to_imagehash',
    'from_imagehash',
    # Files
    'ImageLoadError',
    'load_image',
    'fingerprint_file',
    'fingerprint_files_parallel',
    # Feature detection
    'has_heif_support',
]
