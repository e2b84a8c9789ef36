"""
Fingerprint module for the hashing package.

Provides the complete image -> 64-bit fingerprint pipeline, the bit
extraction step on its own, and Hamming-distance comparison.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from ..config import DEFAULT_SIMILARITY_THRESHOLD, FINGERPRINT_BITS, FINGERPRINT_MASK
from ..errors import DomainError, InvalidArgumentError, NullPointerError
from ..models import ImageBuffer, TransformConfig
from ..utils.validators import validate_config
from .dependencies import imagehash
from .preprocess import resample_to_grayscale
from .transform import CosineTableCache, dct2d

logger = logging.getLogger(__name__)

# Grid shape used when exchanging fingerprints with imagehash
_IMAGEHASH_SIDE = 8


def extract_fingerprint(coefficients: np.ndarray, fingerprint_size: int) -> int:
    """
    Threshold the low-frequency block of a coefficient matrix into bits.

    The top-left fingerprint_size x fingerprint_size block is read in
    row-major order, skipping the DC term at (0, 0). Bit k is set when
    the k-th visited coefficient is strictly greater than the mean of all
    visited coefficients.

    Args:
        coefficients: DCT coefficient matrix
        fingerprint_size: Side of the block to threshold

    Returns:
        Fingerprint as an unsigned integer below 2**64

    Raises:
        NullPointerError: If coefficients is None
        InvalidArgumentError: If the block does not fit the matrix or 64 bits
        DomainError: If the block holds no coefficient besides the DC term
    """
    if coefficients is None:
        raise NullPointerError("Coefficient matrix is required")

    coefficients = np.asarray(coefficients, dtype=np.float64)
    if coefficients.ndim != 2 or min(coefficients.shape) < fingerprint_size:
        raise InvalidArgumentError(
            f"Cannot take a {fingerprint_size}x{fingerprint_size} block from shape {coefficients.shape}"
        )

    retained = coefficients[:fingerprint_size, :fingerprint_size].ravel()[1:]
    if retained.size == 0:
        raise DomainError("No coefficients left to average after excluding the DC term")
    if retained.size > FINGERPRINT_BITS:
        raise InvalidArgumentError(f"{retained.size} bits do not fit a {FINGERPRINT_BITS}-bit fingerprint")

    mean = retained.mean()
    fingerprint = 0
    for bit, above in enumerate(retained > mean):
        if above:
            fingerprint |= 1 << bit
    return fingerprint


def fingerprint_matrix(
    grayscale: np.ndarray,
    config: TransformConfig,
    cache: Optional[CosineTableCache] = None,
) -> int:
    """
    Fingerprint a grayscale matrix that is already transform_size square.

    Args:
        grayscale: (transform_size, transform_size) intensity matrix
        config: Transform configuration
        cache: Optional caller-owned cosine table cache

    Returns:
        64-bit fingerprint
    """
    validate_config(config)
    if grayscale is None:
        raise NullPointerError("Grayscale matrix is required")

    size = config.transform_size
    shape = np.shape(grayscale)
    if shape != (size, size):
        raise InvalidArgumentError(f"Expected a {size}x{size} matrix, got shape {shape}")

    coefficients = dct2d(grayscale, config.transform_method, cache=cache)
    return extract_fingerprint(coefficients, config.fingerprint_size)


def compute_fingerprint(
    image: ImageBuffer,
    config: TransformConfig,
    cache: Optional[CosineTableCache] = None,
) -> int:
    """
    Compute the perceptual fingerprint of an image.

    Pipeline: validate config -> resample to grayscale -> 2D DCT ->
    threshold the low-frequency block.

    Args:
        image: Decoded image buffer
        config: Transform configuration (validated before any work)
        cache: Optional caller-owned cosine table cache

    Returns:
        64-bit fingerprint

    Raises:
        NullPointerError: If image or config is missing
        InvalidArgumentError: If the configuration is out of range
        UnsupportedOperationError: If the method cannot run at the size
        MemoryAllocationError: If working matrices cannot be allocated
        DomainError: If the fingerprint block is empty
    """
    if image is None:
        raise NullPointerError("Image is required")
    validate_config(config)

    grayscale = resample_to_grayscale(image, config)
    coefficients = dct2d(grayscale, config.transform_method, cache=cache)
    fingerprint = extract_fingerprint(coefficients, config.fingerprint_size)
    logger.debug(f"Fingerprint {fingerprint:016x} for {image.width}x{image.height} image")
    return fingerprint


def _check_fingerprint(value, name: str) -> int:
    if value is None:
        raise NullPointerError(f"Fingerprint {name} is required")
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidArgumentError(f"Fingerprint {name} must be an integer, got {type(value).__name__}")
    value = int(value)
    if not 0 <= value <= FINGERPRINT_MASK:
        raise InvalidArgumentError(f"Fingerprint {name} out of 64-bit range: {value}")
    return value


def hamming_distance(hash_a: int, hash_b: int) -> int:
    """
    Count the bit positions where two fingerprints differ.

    Examples:
        >>> hamming_distance(0x1234567890ABCDEF, 0x1234567890ABCDEF)
        0
        >>> hamming_distance(0b1010, 0b0110)
        2
    """
    a = _check_fingerprint(hash_a, 'a')
    b = _check_fingerprint(hash_b, 'b')
    return bin(a ^ b).count('1')


def is_similar(hash_a: int, hash_b: int, threshold: int = DEFAULT_SIMILARITY_THRESHOLD) -> bool:
    """True if the fingerprints are within threshold bits of each other."""
    return hamming_distance(hash_a, hash_b) <= threshold


def to_imagehash(fingerprint: int) -> 'imagehash.ImageHash':
    """
    Wrap a fingerprint as an imagehash.ImageHash on an 8x8 grid.

    Bit k lands at flat index k, so subtracting two wrapped fingerprints
    gives the same result as hamming_distance.
    """
    value = _check_fingerprint(fingerprint, 'value')
    bits = np.array([(value >> k) & 1 for k in range(FINGERPRINT_BITS)], dtype=bool)
    return imagehash.ImageHash(bits.reshape(_IMAGEHASH_SIDE, _IMAGEHASH_SIDE))


def from_imagehash(image_hash: 'imagehash.ImageHash') -> int:
    """Inverse of to_imagehash."""
    if image_hash is None:
        raise NullPointerError("ImageHash is required")
    bits = np.asarray(image_hash.hash, dtype=bool).ravel()
    if bits.size != FINGERPRINT_BITS:
        raise InvalidArgumentError(f"ImageHash holds {bits.size} bits, expected {FINGERPRINT_BITS}")
    value = 0
    for k, bit in enumerate(bits):
        if bit:
            value |= 1 << k
    return value


__all__ = [
    'extract_fingerprint',
    'fingerprint_matrix',
    'compute_fingerprint',
    'hamming_distance',
    'is_similar',
    'to_imagehash',
    'from_imagehash',
]
