"""
Data models for dctphash.

Contains the transform configuration value object, the image buffer
types (borrowed view vs owned copy) and per-file fingerprint results.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import numpy as np

from .config import (
    DEFAULT_COLORSPACE,
    DEFAULT_FINGERPRINT_SIZE,
    DEFAULT_TRANSFORM_METHOD,
    DEFAULT_TRANSFORM_SIZE,
    SUPPORTED_CHANNELS,
)
from .errors import InvalidArgumentError, NullPointerError


class ColorSpace(str, Enum):
    """
    Reduction of an RGB triple to one grayscale intensity.

    Attributes:
        AVERAGE: Unweighted (R+G+B)/3
        BT601: ITU-R BT.601 luma (SDTV)
        BT709: ITU-R BT.709 luma (HDTV)
        BT2100: ITU-R BT.2100 luma (HDR)
    """
    AVERAGE = 'average'
    BT601 = 'bt601'
    BT709 = 'bt709'
    BT2100 = 'bt2100'

    @classmethod
    def parse(cls, value: Any) -> 'ColorSpace':
        """Convert a member or its string name, raising InvalidArgumentError otherwise."""
        try:
            return cls(str(value).lower() if not isinstance(value, cls) else value)
        except ValueError:
            choices = ', '.join(m.value for m in cls)
            raise InvalidArgumentError(f"Unknown colorspace {value!r} (expected one of: {choices})")


class TransformMethod(str, Enum):
    """
    DCT computation strategy.

    Attributes:
        AUTO: Butterfly at size 8, cached lookup otherwise
        NAIVE: Direct separable evaluation of the cosine sums
        BUTTERFLY: Closed-form 8-point butterfly (size 8 only)
        LOOKUP: Separable matrix product with a cached cosine table
        AAN: Arai-Agui-Nakajima kernel with even/odd recursion (8/16/32/64)
    """
    AUTO = 'auto'
    NAIVE = 'naive'
    BUTTERFLY = 'butterfly'
    LOOKUP = 'lookup'
    AAN = 'aan'

    @classmethod
    def parse(cls, value: Any) -> 'TransformMethod':
        """Convert a member or its string name, raising InvalidArgumentError otherwise."""
        try:
            return cls(str(value).lower() if not isinstance(value, cls) else value)
        except ValueError:
            choices = ', '.join(m.value for m in cls)
            raise InvalidArgumentError(f"Unknown transform method {value!r} (expected one of: {choices})")


@dataclass(frozen=True)
class TransformConfig:
    """
    Immutable parameters of the fingerprint pipeline.

    A TransformConfig may hold invalid values; it is checked by
    utils.validators.validate_config before any computation runs.

    Attributes:
        transform_size: N of the NxN DCT (power of two in [8, 64])
        fingerprint_size: Side of the low-frequency block that is thresholded
        colorspace: RGB to grayscale reduction
        transform_method: DCT strategy
        use_high_precision: Advisory hint, never changes output bits
        enable_simd: Advisory hint, never changes output bits
    """
    transform_size: int = DEFAULT_TRANSFORM_SIZE
    fingerprint_size: int = DEFAULT_FINGERPRINT_SIZE
    colorspace: ColorSpace = ColorSpace(DEFAULT_COLORSPACE)
    transform_method: TransformMethod = TransformMethod(DEFAULT_TRANSFORM_METHOD)
    use_high_precision: bool = False
    enable_simd: bool = True

    def replace(self, **changes) -> 'TransformConfig':
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'transform_size': self.transform_size,
            'fingerprint_size': self.fingerprint_size,
            'colorspace': ColorSpace.parse(self.colorspace).value,
            'transform_method': TransformMethod.parse(self.transform_method).value,
            'use_high_precision': self.use_high_precision,
            'enable_simd': self.enable_simd,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'TransformConfig':
        """Create TransformConfig from dictionary, filling gaps with defaults."""
        defaults = cls()
        try:
            return cls(
                transform_size=int(data.get('transform_size', defaults.transform_size)),
                fingerprint_size=int(data.get('fingerprint_size', defaults.fingerprint_size)),
                colorspace=ColorSpace.parse(data.get('colorspace', defaults.colorspace)),
                transform_method=TransformMethod.parse(data.get('transform_method', defaults.transform_method)),
                use_high_precision=bool(data.get('use_high_precision', defaults.use_high_precision)),
                enable_simd=bool(data.get('enable_simd', defaults.enable_simd)),
            )
        except (TypeError, ValueError) as e:
            if isinstance(e, InvalidArgumentError):
                raise
            raise InvalidArgumentError(f"Invalid configuration value: {e}") from e


def default_config() -> TransformConfig:
    """Return the default configuration (32x32 DCT, 8x8 fingerprint, BT.709, auto)."""
    return TransformConfig()


def _as_byte_view(data: Any):
    """Return a flat, read-only-capable uint8 view over a buffer without copying."""
    if isinstance(data, np.ndarray):
        if data.dtype != np.uint8:
            raise InvalidArgumentError(f"Pixel array must be uint8, got {data.dtype}")
        return np.ascontiguousarray(data).reshape(-1)
    try:
        view = memoryview(data)
    except TypeError:
        raise InvalidArgumentError(f"Pixel data must support the buffer protocol, got {type(data).__name__}")
    if not view.c_contiguous:
        raise InvalidArgumentError("Pixel data must be a C-contiguous buffer")
    if view.format != 'B' or view.ndim != 1:
        try:
            view = view.cast('B')
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Pixel data cannot be viewed as bytes: {e}") from e
    return view


@dataclass
class ImageBuffer:
    """
    Rectangular 8-bit pixel grid in row-major order.

    Use create_image() rather than instantiating directly. Only the first
    three channels of each pixel are read.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        channels: Bytes per pixel (3 for RGB, 4 for RGBA)
    """
    width: int
    height: int
    channels: int
    _data: Any = dataclasses.field(default=None, repr=False, compare=False)

    owns_memory = False

    @property
    def byte_length(self) -> int:
        """Number of bytes the pixel grid occupies."""
        return self.width * self.height * self.channels

    def pixels(self) -> np.ndarray:
        """
        Return the pixel grid as a read-only (height, width, channels) uint8 array.

        Raises:
            NullPointerError: If the buffer has been released
        """
        if self._data is None:
            raise NullPointerError("Image data has been released")
        arr = np.frombuffer(self._data, dtype=np.uint8, count=self.byte_length)
        arr = arr.reshape(self.height, self.width, self.channels)
        arr.flags.writeable = False
        return arr

    def release(self) -> None:
        """
        Drop this buffer's reference to the pixel data.

        An OwnedImage frees its private copy; a BorrowedImage only detaches
        from the caller's storage, which is left untouched.
        """
        self._data = None


@dataclass
class BorrowedImage(ImageBuffer):
    """View over caller-owned pixel data; the caller keeps it alive and unmodified."""

    owns_memory = False


@dataclass
class OwnedImage(ImageBuffer):
    """Private immutable copy of the pixel data."""

    owns_memory = True


def create_image(
    data: Any,
    width: int,
    height: int,
    channels: int = 3,
    copy_data: bool = False,
) -> ImageBuffer:
    """
    Wrap decoded pixel data in an image buffer.

    Args:
        data: Row-major 8-bit pixels (bytes, bytearray, memoryview or uint8 array)
        width: Image width in pixels
        height: Image height in pixels
        channels: 3 (RGB) or 4 (RGBA)
        copy_data: Take a private copy (OwnedImage) instead of borrowing

    Returns:
        OwnedImage if copy_data else BorrowedImage

    Raises:
        NullPointerError: If data is None
        InvalidArgumentError: If dimensions, channels or buffer length are invalid
    """
    if data is None:
        raise NullPointerError("Image data is required")

    for name, value in (('width', width), ('height', height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
            raise InvalidArgumentError(f"Image {name} must be a positive integer, got {value!r}")

    if channels not in SUPPORTED_CHANNELS:
        raise InvalidArgumentError(f"Image channels must be 3 or 4, got {channels!r}")

    view = _as_byte_view(data)
    required = int(width) * int(height) * int(channels)
    available = view.size if isinstance(view, np.ndarray) else view.nbytes
    if available < required:
        raise InvalidArgumentError(
            f"Pixel buffer too short: {available} bytes for {width}x{height}x{channels} ({required} needed)"
        )

    if copy_data:
        return OwnedImage(int(width), int(height), int(channels), _data=view.tobytes()[:required])
    return BorrowedImage(int(width), int(height), int(channels), _data=view)


@dataclass
class FingerprintResult:
    """
    Outcome of fingerprinting one image file.

    Attributes:
        path: Path of the source file
        fingerprint: 64-bit fingerprint, or None if the file failed
        width: Decoded image width in pixels
        height: Decoded image height in pixels
        error: Error message if fingerprinting failed
    """
    path: str
    fingerprint: Optional[int] = None
    width: int = 0
    height: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True if a fingerprint was produced."""
        return self.error is None and self.fingerprint is not None

    @property
    def hex(self) -> str:
        """Fingerprint as 16 hex digits, or empty string on failure."""
        if self.fingerprint is None:
            return ""
        return f"{self.fingerprint:016x}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'path': self.path,
            'fingerprint': self.fingerprint,
            'hex': self.hex,
            'width': self.width,
            'height': self.height,
            'error': self.error,
        }


__all__ = [
    'ColorSpace',
    'TransformMethod',
    'TransformConfig',
    'default_config',
    'ImageBuffer',
    'BorrowedImage',
    'OwnedImage',
    'create_image',
    'FingerprintResult',
]
