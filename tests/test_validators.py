"""
Unit tests for configuration and input validation.
"""

import pytest

from dctphash.errors import InvalidArgumentError, NullPointerError, UnsupportedOperationError
from dctphash.models import ColorSpace, TransformConfig, TransformMethod, default_config
from dctphash.utils.validators import (
    is_power_of_two,
    is_valid_config,
    validate_config,
    validate_file_accessible,
    validate_threshold,
    validate_workers,
)


class TestIsPowerOfTwo:
    """Test is_power_of_two helper."""

    @pytest.mark.parametrize("value", [1, 2, 8, 32, 64, 1024])
    def test_powers(self, value):
        assert is_power_of_two(value)

    @pytest.mark.parametrize("value", [0, -8, 3, 12, 63, 96])
    def test_non_powers(self, value):
        assert not is_power_of_two(value)


class TestValidateConfig:
    """Test validate_config function."""

    def test_default_is_valid(self):
        """The default configuration must always validate."""
        validate_config(default_config())
        assert is_valid_config(default_config())

    def test_default_values(self):
        config = default_config()
        assert config.transform_size == 32
        assert config.fingerprint_size == 8
        assert config.colorspace is ColorSpace.BT709
        assert config.transform_method is TransformMethod.AUTO

    def test_transform_size_sweep(self):
        """Sizes 1-128 validate exactly when they are powers of two in [8, 64]."""
        for size in range(1, 129):
            config = TransformConfig(transform_size=size, fingerprint_size=1)
            expected = size in (8, 16, 32, 64)
            assert is_valid_config(config) == expected, size

    def test_invalid_size_raises_invalid_argument(self):
        with pytest.raises(InvalidArgumentError):
            validate_config(TransformConfig(transform_size=24))

    def test_fingerprint_budget(self):
        """A 9x9 block needs 81 bits and cannot fit a 64-bit fingerprint."""
        with pytest.raises(InvalidArgumentError):
            validate_config(TransformConfig(transform_size=32, fingerprint_size=9))

    def test_fingerprint_larger_than_transform(self):
        with pytest.raises(InvalidArgumentError):
            validate_config(TransformConfig(transform_size=8, fingerprint_size=9))

    def test_fingerprint_size_zero(self):
        with pytest.raises(InvalidArgumentError):
            validate_config(TransformConfig(fingerprint_size=0))

    def test_fingerprint_size_one_is_valid(self):
        validate_config(TransformConfig(fingerprint_size=1))

    def test_non_integer_size(self):
        with pytest.raises(InvalidArgumentError):
            validate_config(TransformConfig(transform_size=32.0))

    def test_butterfly_requires_size_eight(self):
        validate_config(TransformConfig(transform_size=8, transform_method=TransformMethod.BUTTERFLY))
        with pytest.raises(UnsupportedOperationError):
            validate_config(TransformConfig(transform_size=16, transform_method=TransformMethod.BUTTERFLY))

    @pytest.mark.parametrize("size", [8, 16, 32, 64])
    def test_aan_sizes(self, size):
        validate_config(TransformConfig(transform_size=size, transform_method=TransformMethod.AAN))

    @pytest.mark.parametrize("method", list(TransformMethod))
    def test_every_method_at_size_eight(self, method):
        validate_config(TransformConfig(transform_size=8, transform_method=method))

    def test_size_checked_before_method(self):
        """An out-of-range size is reported even when the method is also incompatible."""
        config = TransformConfig(transform_size=12, transform_method=TransformMethod.BUTTERFLY)
        with pytest.raises(InvalidArgumentError):
            validate_config(config)

    def test_unknown_colorspace(self):
        with pytest.raises(InvalidArgumentError):
            validate_config(TransformConfig(colorspace='sepia'))

    def test_unknown_method(self):
        with pytest.raises(InvalidArgumentError):
            validate_config(TransformConfig(transform_method='fft'))

    def test_none_config(self):
        with pytest.raises(NullPointerError):
            validate_config(None)

    def test_does_not_modify_input(self):
        config = TransformConfig(transform_size=16, fingerprint_size=4)
        snapshot = config.to_dict()
        validate_config(config)
        assert config.to_dict() == snapshot


class TestValidateThreshold:
    """Test validate_threshold function."""

    def test_valid(self):
        assert validate_threshold(5) == (True, "")
        assert validate_threshold(0) == (True, "")
        assert validate_threshold(64) == (True, "")

    def test_out_of_range(self):
        is_valid, error = validate_threshold(65)
        assert not is_valid
        assert "between 0 and 64" in error

    def test_not_integer(self):
        assert validate_threshold("abc") == (False, "Threshold must be an integer")


class TestValidateWorkers:
    """Test validate_workers function."""

    def test_valid(self):
        assert validate_workers(1) == (True, "")
        assert validate_workers("8") == (True, "")
        assert validate_workers(32) == (True, "")

    @pytest.mark.parametrize("workers", [0, -1, 33])
    def test_out_of_range(self, workers):
        is_valid, error = validate_workers(workers)
        assert not is_valid
        assert "between 1 and 32" in error

    @pytest.mark.parametrize("workers", ["many", None, [4]])
    def test_not_integer(self, workers):
        assert validate_workers(workers) == (False, "Workers must be an integer")


class TestValidateFileAccessible:
    """Test validate_file_accessible function."""

    def test_existing_file(self, sample_images):
        assert validate_file_accessible(sample_images['red']) == (True, "")

    def test_missing_file(self):
        assert validate_file_accessible('/nonexistent/file.jpg') == (False, "File does not exist")

    def test_directory(self, temp_dir):
        assert validate_file_accessible(str(temp_dir)) == (False, "Path is not a file")
