"""
Image loading module for the hashing package.

Decodes image files from disk into owned RGB image buffers. File formats
are Pillow's concern; the fingerprint pipeline only ever sees pixels.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import numpy as np

from ..errors import InvalidArgumentError
from ..models import OwnedImage, create_image
from ..user_config import get_user_config
from .dependencies import Image, HAS_HEIF_SUPPORT, _logger


class ImageLoadError(OSError):
    """An image file could not be read or decoded."""


def load_image(filepath: str | Path, max_image_pixels: Optional[int] = None) -> OwnedImage:
    """
    Decode an image file into an RGB OwnedImage.

    Args:
        filepath: Path to the image file
        max_image_pixels: Decompression bomb limit (user config default if None)

    Returns:
        OwnedImage with 3 channels

    Raises:
        ImageLoadError: If the file is missing, unreadable or not an image
        InvalidArgumentError: If the pixel limit is not an integer
    """
    filepath = str(filepath)

    if not os.path.exists(filepath):
        raise ImageLoadError(f"File not found: {filepath}")

    ext = os.path.splitext(filepath)[1].lower()
    if ext in {'.heic', '.heif'} and not HAS_HEIF_SUPPORT:
        raise ImageLoadError("HEIC/HEIF support not installed (pip install pillow-heif)")

    if max_image_pixels is None:
        max_image_pixels = get_user_config().max_image_pixels
    try:
        Image.MAX_IMAGE_PIXELS = int(max_image_pixels)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"max_image_pixels must be an integer, got {max_image_pixels!r}") from e

    try:
        with Image.open(filepath) as img:
            # Force load to detect truncated images early
            img.load()
            if img.mode != 'RGB':
                img = img.convert('RGB')
            pixels = np.asarray(img, dtype=np.uint8)
    except Image.UnidentifiedImageError as e:
        raise ImageLoadError(f"Not a valid image file: {e}") from e
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageLoadError(f"Failed to open image {filepath}: {e}") from e

    height, width = pixels.shape[:2]
    _logger.debug(f"Loaded {filepath} ({width}x{height})")
    return create_image(pixels, width, height, channels=3, copy_data=True)


__all__ = ['ImageLoadError', 'load_image']
