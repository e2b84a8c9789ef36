"""
Unit tests for fingerprint formatting and the package surface.
"""

import pytest

import dctphash
from dctphash.errors import InvalidArgumentError, NullPointerError
from dctphash.utils.formatters import format_fingerprint, parse_fingerprint


class TestFormatFingerprint:
    """Test format_fingerprint function."""

    def test_padded_lowercase(self):
        assert format_fingerprint(0x1234567890ABCDEF) == "1234567890abcdef"
        assert format_fingerprint(0) == "0" * 16
        assert format_fingerprint(0xFF) == "00000000000000ff"

    def test_out_of_range(self):
        with pytest.raises(InvalidArgumentError):
            format_fingerprint(1 << 64)
        with pytest.raises(InvalidArgumentError):
            format_fingerprint(-1)

    def test_none(self):
        with pytest.raises(NullPointerError):
            format_fingerprint(None)


class TestParseFingerprint:
    """Test parse_fingerprint function."""

    @pytest.mark.parametrize("text,expected", [
        ("1234567890abcdef", 0x1234567890ABCDEF),
        ("0x1234567890ABCDEF", 0x1234567890ABCDEF),
        ("  ff\n", 255),
        ("0", 0),
    ])
    def test_valid(self, text, expected):
        assert parse_fingerprint(text) == expected

    @pytest.mark.parametrize("text", ["", "0x", "xyz", "1" * 17])
    def test_invalid(self, text):
        with pytest.raises(InvalidArgumentError):
            parse_fingerprint(text)

    def test_inverse_of_format(self):
        assert parse_fingerprint(format_fingerprint(0xDEADBEEF)) == 0xDEADBEEF


class TestPackage:
    """Test the top-level package exports."""

    def test_version(self):
        assert dctphash.__version__ == "1.0.0"

    def test_exports_resolve(self):
        for name in dctphash.__all__:
            assert hasattr(dctphash, name), name

    def test_heif_flag_is_bool(self):
        from dctphash.hashing import has_heif_support

        assert isinstance(has_heif_support(), bool)
