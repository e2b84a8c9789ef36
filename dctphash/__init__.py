"""
dctphash
========
DCT-based perceptual fingerprints for near-duplicate image detection.

Features:
- 64-bit fingerprints from a low-frequency DCT block
- Four interchangeable DCT strategies (naive, butterfly, lookup, AAN)
- Selectable luma weighting (average, BT.601, BT.709, BT.2100)
- Hamming-distance comparison
- Thread-safe cosine table cache
- Parallel batch fingerprinting and a small CLI
"""

__version__ = "1.0.0"

from .errors import (
    ErrorCode,
    error_string,
    PhashError,
    NullPointerError,
    InvalidArgumentError,
    MemoryAllocationError,
    UnsupportedOperationError,
    DomainError,
)
from .models import (
    ColorSpace,
    TransformMethod,
    TransformConfig,
    default_config,
    ImageBuffer,
    BorrowedImage,
    OwnedImage,
    create_image,
    FingerprintResult,
)
from .utils.validators import validate_config, is_valid_config
from .utils.formatters import format_fingerprint, parse_fingerprint
from .hashing import (
    resample_to_grayscale,
    dct2d,
    CosineTableCache,
    clear_cosine_cache,
    extract_fingerprint,
    fingerprint_matrix,
    compute_fingerprint,
    hamming_distance,
    is_similar,
    to_imagehash,
    from_imagehash,
    load_image,
    ImageLoadError,
    fingerprint_files_parallel,
)
from .user_config import get_user_config

__all__ = [
    "ErrorCode",
    "error_string",
    "PhashError",
    "NullPointerError",
    "InvalidArgumentError",
    "MemoryAllocationError",
    "UnsupportedOperationError",
    "DomainError",
    "ColorSpace",
    "TransformMethod",
    "TransformConfig",
    "default_config",
    "ImageBuffer",
    "BorrowedImage",
    "OwnedImage",
    "create_image",
    "FingerprintResult",
    "validate_config",
    "is_valid_config",
    "format_fingerprint",
    "parse_fingerprint",
    "resample_to_grayscale",
    "dct2d",
    "CosineTableCache",
    "clear_cosine_cache",
    "extract_fingerprint",
    "fingerprint_matrix",
    "compute_fingerprint",
    "hamming_distance",
    "is_similar",
    "to_imagehash",
    "from_imagehash",
    "load_image",
    "ImageLoadError",
    "fingerprint_files_parallel",
    "get_user_config",
]
