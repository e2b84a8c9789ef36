"""
Utilities package for dctphash.

Provides:
- formatters: Hex rendering and parsing of fingerprints
- validators: Configuration checks and CLI input validation
"""

from __future__ import annotations

# Import submodules for convenient access
from . import formatters
from . import validators

# Export commonly used functions
from .formatters import format_fingerprint, parse_fingerprint
from .validators import (
    is_power_of_two,
    validate_config,
    is_valid_config,
    validate_threshold,
    validate_workers,
    validate_file_accessible,
)

__all__ = [
    # Submodules
    'formatters',
    'validators',
    # Formatters
    'format_fingerprint',
    'parse_fingerprint',
    # Validators
    'is_power_of_two',
    'validate_config',
    'is_valid_config',
    'validate_threshold',
    'validate_workers',
    'validate_file_accessible',
]
