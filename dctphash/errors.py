"""
Error taxonomy for dctphash.

Every failure the fingerprint pipeline can report maps to one ErrorCode.
Each code has a dedicated exception class so callers can catch a single
kind, or PhashError for all of them. The classes also derive from the
closest builtin exception so generic handlers keep working.
"""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Numeric error codes, stable across releases."""
    OK = 0
    NULL_POINTER = 1
    INVALID_ARGUMENT = 2
    MEMORY_ALLOCATION = 3
    UNSUPPORTED_OPERATION = 4
    DOMAIN = 5


_ERROR_STRINGS = {
    ErrorCode.OK: "Success",
    ErrorCode.NULL_POINTER: "Null pointer encountered",
    ErrorCode.INVALID_ARGUMENT: "Invalid argument value",
    ErrorCode.MEMORY_ALLOCATION: "Memory allocation failed",
    ErrorCode.UNSUPPORTED_OPERATION: "Unsupported operation",
    ErrorCode.DOMAIN: "Domain error in mathematical function",
}


def error_string(code) -> str:
    """
    Return the human-readable message for an error code.

    Args:
        code: ErrorCode member or its integer value

    Returns:
        Message string, or "Unknown error" for values outside the taxonomy

    Examples:
        >>> error_string(ErrorCode.OK)
        'Success'
        >>> error_string(42)
        'Unknown error'
    """
    try:
        return _ERROR_STRINGS[ErrorCode(code)]
    except (ValueError, TypeError):
        return "Unknown error"


class PhashError(Exception):
    """Base class for all fingerprint pipeline errors."""

    code = ErrorCode.OK

    def __init__(self, message: str = ""):
        super().__init__(message or error_string(self.code))
        self.message = message or error_string(self.code)


class NullPointerError(PhashError, TypeError):
    """A required input (image data, configuration) is missing."""
    code = ErrorCode.NULL_POINTER


class InvalidArgumentError(PhashError, ValueError):
    """A configuration field or argument is outside its allowed domain."""
    code = ErrorCode.INVALID_ARGUMENT


class MemoryAllocationError(PhashError, MemoryError):
    """Working storage for a matrix could not be obtained."""
    code = ErrorCode.MEMORY_ALLOCATION


class UnsupportedOperationError(PhashError, ValueError):
    """The requested transform method cannot run at the requested size."""
    code = ErrorCode.UNSUPPORTED_OPERATION


class DomainError(PhashError, ArithmeticError):
    """A mathematical precondition failed at runtime."""
    code = ErrorCode.DOMAIN


__all__ = [
    'ErrorCode',
    'error_string',
    'PhashError',
    'NullPointerError',
    'InvalidArgumentError',
    'MemoryAllocationError',
    'UnsupportedOperationError',
    'DomainError',
]
