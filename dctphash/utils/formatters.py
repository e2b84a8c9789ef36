"""
Formatting utilities for dctphash.

Provides hexadecimal rendering and parsing of 64-bit fingerprints.
"""

from __future__ import annotations

from ..config import FINGERPRINT_MASK
from ..errors import InvalidArgumentError, NullPointerError


def format_fingerprint(fingerprint: int) -> str:
    """
    Format a fingerprint as 16 lowercase hex digits.

    Examples:
        >>> format_fingerprint(0x1234567890ABCDEF)
        '1234567890abcdef'
        >>> format_fingerprint(0)
        '0000000000000000'
    """
    if fingerprint is None:
        raise NullPointerError("Fingerprint is required")
    if not 0 <= fingerprint <= FINGERPRINT_MASK:
        raise InvalidArgumentError(f"Fingerprint out of 64-bit range: {fingerprint!r}")
    return f"{fingerprint:016x}"


def parse_fingerprint(text: str) -> int:
    """
    Parse a hex fingerprint, with or without a 0x prefix.

    Examples:
        >>> parse_fingerprint('0x00000000000000ff')
        255
    """
    if text is None:
        raise NullPointerError("Fingerprint text is required")
    cleaned = text.strip().lower()
    if cleaned.startswith('0x'):
        cleaned = cleaned[2:]
    if not cleaned or len(cleaned) > 16:
        raise InvalidArgumentError(f"Fingerprint must be 1-16 hex digits, got {text!r}")
    try:
        return int(cleaned, 16)
    except ValueError:
        raise InvalidArgumentError(f"Fingerprint is not hexadecimal: {text!r}")


__all__ = ['format_fingerprint', 'parse_fingerprint']
