"""
Input validation for dctphash.

Provides the transform configuration checks that gate the fingerprint
pipeline, plus the threshold and file checks used by the CLI.
"""

from __future__ import annotations

import os
from typing import Any

from ..config import (
    AAN_SIZES,
    BUTTERFLY_SIZE,
    FINGERPRINT_BITS,
    MAX_TRANSFORM_SIZE,
    MAX_WORKERS,
    MIN_TRANSFORM_SIZE,
)
from ..errors import InvalidArgumentError, NullPointerError, PhashError, UnsupportedOperationError
from ..models import ColorSpace, TransformConfig, TransformMethod


def is_power_of_two(value: int) -> bool:
    """
    Check whether a positive integer is a power of two.

    Examples:
        >>> is_power_of_two(32)
        True
        >>> is_power_of_two(24)
        False
    """
    return value > 0 and (value & (value - 1)) == 0


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(config: TransformConfig) -> None:
    """
    Validate a transform configuration before any computation begins.

    Checks, in order:
    1. transform_size is a power of two in [8, 64]
    2. fingerprint_size is in [1, transform_size] and its square fits in 64 bits
    3. colorspace and transform_method are known members
    4. the butterfly strategy is only used at size 8
    5. the AAN strategy is only used at sizes 8, 16, 32 or 64

    Args:
        config: Configuration to check (never modified)

    Raises:
        NullPointerError: If config is None
        InvalidArgumentError: If a field is outside its allowed domain
        UnsupportedOperationError: If the method cannot run at the size
    """
    if config is None:
        raise NullPointerError("Transform configuration is required")

    size = config.transform_size
    if not _is_int(size) or not MIN_TRANSFORM_SIZE <= size <= MAX_TRANSFORM_SIZE or not is_power_of_two(size):
        raise InvalidArgumentError(
            f"transform_size must be a power of two between {MIN_TRANSFORM_SIZE} and "
            f"{MAX_TRANSFORM_SIZE}, got {size!r}"
        )

    fp_size = config.fingerprint_size
    if not _is_int(fp_size) or not 1 <= fp_size <= size:
        raise InvalidArgumentError(f"fingerprint_size must be between 1 and {size}, got {fp_size!r}")
    if fp_size * fp_size > FINGERPRINT_BITS:
        raise InvalidArgumentError(
            f"fingerprint_size {fp_size} needs {fp_size * fp_size} bits, "
            f"more than the {FINGERPRINT_BITS}-bit fingerprint"
        )

    if not isinstance(config.colorspace, ColorSpace):
        raise InvalidArgumentError(f"Unknown colorspace {config.colorspace!r}")
    if not isinstance(config.transform_method, TransformMethod):
        raise InvalidArgumentError(f"Unknown transform method {config.transform_method!r}")

    if config.transform_method is TransformMethod.BUTTERFLY and size != BUTTERFLY_SIZE:
        raise UnsupportedOperationError(
            f"Butterfly transform only supports transform_size={BUTTERFLY_SIZE}, got {size}"
        )

    if config.transform_method is TransformMethod.AAN and size not in AAN_SIZES:
        raise UnsupportedOperationError(
            f"AAN transform only supports transform_size in {sorted(AAN_SIZES)}, got {size}"
        )


def is_valid_config(config: TransformConfig) -> bool:
    """Return True if validate_config accepts the configuration."""
    try:
        validate_config(config)
    except PhashError:
        return False
    return True


def validate_threshold(threshold: Any) -> tuple[bool, str]:
    """
    Validate that a similarity threshold is within acceptable range.

    Args:
        threshold: Threshold value to validate (0-64 for 64-bit fingerprints)

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_threshold(5)
        (True, '')
        >>> validate_threshold(100)
        (False, 'Threshold must be between 0 and 64')
    """
    try:
        threshold = int(threshold)
        if not 0 <= threshold <= FINGERPRINT_BITS:
            return False, f"Threshold must be between 0 and {FINGERPRINT_BITS}"
        return True, ""
    except (ValueError, TypeError):
        return False, "Threshold must be an integer"


def validate_workers(workers: Any) -> tuple[bool, str]:
    """
    Validate a worker thread count.

    Args:
        workers: Worker count (CLI flag or DCTPHASH_WORKERS value)

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_workers(8)
        (True, '')
        >>> validate_workers('many')
        (False, 'Workers must be an integer')
    """
    try:
        workers = int(workers)
    except (ValueError, TypeError):
        return False, "Workers must be an integer"
    if not 1 <= workers <= MAX_WORKERS:
        return False, f"Workers must be between 1 and {MAX_WORKERS}"
    return True, ""


def validate_file_accessible(filepath: str) -> tuple[bool, str]:
    """
    Validate that a file exists and is readable.

    Args:
        filepath: Path to validate

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_file_accessible('/nonexistent/file.jpg')
        (False, 'File does not exist')
    """
    if not os.path.exists(filepath):
        return False, "File does not exist"

    if not os.path.isfile(filepath):
        return False, "Path is not a file"

    if not os.access(filepath, os.R_OK):
        return False, "File is not readable (permission denied)"

    return True, ""


__all__ = [
    'is_power_of_two',
    'validate_config',
    'is_valid_config',
    'validate_threshold',
    'validate_workers',
    'validate_file_accessible',
]
