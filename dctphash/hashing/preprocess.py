"""
Preprocessing module for the hashing package.

Reduces an arbitrary-resolution color image to the fixed NxN grayscale
matrix consumed by the transform stage.
"""

from __future__ import annotations

import logging

import numpy as np

from ..config import LUMA_WEIGHTS
from ..errors import InvalidArgumentError, MemoryAllocationError, NullPointerError
from ..models import ColorSpace, ImageBuffer, TransformConfig

logger = logging.getLogger(__name__)


def rgb_to_grayscale(r, g, b, colorspace: ColorSpace):
    """
    Reduce RGB intensities to grayscale with the given colorspace weights.

    Works on scalars and on numpy arrays of equal shape.

    Examples:
        >>> rgb_to_grayscale(30.0, 60.0, 90.0, ColorSpace.AVERAGE)
        60.0
    """
    colorspace = ColorSpace.parse(colorspace)
    if colorspace is ColorSpace.AVERAGE:
        return (r + g + b) / 3.0
    wr, wg, wb = LUMA_WEIGHTS[colorspace.value]
    return wr * r + wg * g + wb * b


def _sample_axis(source_dim: int, dest_dim: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Map destination sample positions onto one source axis.

    Returns:
        Tuple of (lower index, upper index, fractional offset), one entry
        per destination position. Indices are clamped to the last source
        index, so a source dimension of 1 collapses to a single sample.
    """
    ratio = (source_dim - 1) / (dest_dim - 1) if source_dim > 1 and dest_dim > 1 else 0.0
    coords = np.arange(dest_dim, dtype=np.float64) * ratio
    lower = np.minimum(coords.astype(np.intp), source_dim - 1)
    upper = np.minimum(lower + 1, source_dim - 1)
    frac = coords - lower
    return lower, upper, frac


def resample_to_grayscale(image: ImageBuffer, config: TransformConfig) -> np.ndarray:
    """
    Resample an image to a transform_size x transform_size grayscale matrix.

    Each destination cell is bilinearly interpolated from the four nearest
    source pixels, per channel, then reduced to one intensity with the
    configured colorspace. The configuration must already be validated.

    Args:
        image: Source image buffer (3 or 4 channels, only RGB is read)
        config: Validated transform configuration

    Returns:
        float64 array of shape (transform_size, transform_size)

    Raises:
        NullPointerError: If image or config is missing
        InvalidArgumentError: If image is not an ImageBuffer
        MemoryAllocationError: If the working matrices cannot be allocated
    """
    if image is None or config is None:
        raise NullPointerError("Image and configuration are required")
    if not isinstance(image, ImageBuffer):
        raise InvalidArgumentError(f"Expected an ImageBuffer, got {type(image).__name__}")

    size = config.transform_size
    pixels = image.pixels()

    y0, y1, dy = _sample_axis(image.height, size)
    x0, x1, dx = _sample_axis(image.width, size)

    rgb = pixels[:, :, :3]
    try:
        p00 = rgb[y0[:, None], x0[None, :]].astype(np.float64)
        p01 = rgb[y0[:, None], x1[None, :]].astype(np.float64)
        p10 = rgb[y1[:, None], x0[None, :]].astype(np.float64)
        p11 = rgb[y1[:, None], x1[None, :]].astype(np.float64)
        # Row offsets vary down axis 0, column offsets across axis 1
        dy = dy[:, None, None]
        dx = dx[None, :, None]
        interpolated = (
            (1.0 - dx) * (1.0 - dy) * p00
            + dx * (1.0 - dy) * p01
            + (1.0 - dx) * dy * p10
            + dx * dy * p11
        )
    except MemoryError as e:
        raise MemoryAllocationError(f"Cannot allocate {size}x{size} grayscale matrix: {e}") from e

    gray = rgb_to_grayscale(
        interpolated[:, :, 0],
        interpolated[:, :, 1],
        interpolated[:, :, 2],
        config.colorspace,
    )
    logger.debug(
        f"Resampled {image.width}x{image.height} image to {size}x{size} "
        f"({ColorSpace.parse(config.colorspace).value})"
    )
    return np.ascontiguousarray(gray, dtype=np.float64)


__all__ = ['rgb_to_grayscale', 'resample_to_grayscale']
