"""
Unit tests for image loading and batch fingerprinting.
"""

import pytest
from PIL import Image

from dctphash.errors import InvalidArgumentError, UnsupportedOperationError
from dctphash.hashing import (
    ImageLoadError,
    compute_fingerprint,
    fingerprint_file,
    fingerprint_files_parallel,
    hamming_distance,
    load_image,
)
from dctphash.models import OwnedImage, TransformConfig, TransformMethod, default_config


class TestLoadImage:
    """Test load_image function."""

    def test_load_png(self, sample_images, textured_pixels):
        img = load_image(sample_images['identical1'])
        assert isinstance(img, OwnedImage)
        assert (img.width, img.height, img.channels) == (48, 40, 3)
        assert (img.pixels() == textured_pixels).all()

    def test_rgba_converted_to_rgb(self, sample_images):
        img = load_image(sample_images['textured_rgba'])
        assert img.channels == 3

    def test_accepts_path_objects(self, sample_images):
        from pathlib import Path

        img = load_image(Path(sample_images['red']))
        assert (img.width, img.height) == (100, 100)
        assert tuple(img.pixels()[50, 50]) == (255, 0, 0)

    def test_missing_file(self, temp_dir):
        with pytest.raises(ImageLoadError, match="not found"):
            load_image(temp_dir / "nonexistent.png")

    def test_corrupted_file(self, sample_images):
        with pytest.raises(ImageLoadError):
            load_image(sample_images['corrupted'])

    def test_truncated_file(self, temp_dir, sample_images):
        data = open(sample_images['identical1'], 'rb').read()
        truncated = temp_dir / "truncated.png"
        truncated.write_bytes(data[:len(data) // 2])
        with pytest.raises(ImageLoadError):
            load_image(truncated)

    def test_pixel_limit(self, sample_images):
        with pytest.raises(ImageLoadError):
            load_image(sample_images['red'], max_image_pixels=100)

    def test_non_numeric_pixel_limit(self, sample_images):
        with pytest.raises(InvalidArgumentError):
            load_image(sample_images['red'], max_image_pixels="lots")

    def test_load_error_is_os_error(self):
        assert issubclass(ImageLoadError, OSError)


class TestFileFingerprints:
    """End-to-end checks on image files."""

    def test_identical_files(self, sample_images):
        config = default_config()
        a = compute_fingerprint(load_image(sample_images['identical1']), config)
        b = compute_fingerprint(load_image(sample_images['identical2']), config)
        assert hamming_distance(a, b) == 0

    def test_rgba_file_matches_rgb_file(self, sample_images):
        config = default_config()
        a = compute_fingerprint(load_image(sample_images['identical1']), config)
        b = compute_fingerprint(load_image(sample_images['textured_rgba']), config)
        assert a == b

    def test_unique_file_differs(self, sample_images):
        config = default_config()
        a = compute_fingerprint(load_image(sample_images['identical1']), config)
        b = compute_fingerprint(load_image(sample_images['unique']), config)
        assert hamming_distance(a, b) > 5

    def test_resized_copy_is_close(self, temp_dir, sample_images):
        resized = temp_dir / "resized.png"
        Image.open(sample_images['identical1']).resize((96, 80), Image.NEAREST).save(resized)
        config = default_config()
        a = compute_fingerprint(load_image(sample_images['identical1']), config)
        b = compute_fingerprint(load_image(resized), config)
        assert hamming_distance(a, b) <= 16


class TestFingerprintFile:
    """Test fingerprint_file function."""

    def test_success(self, sample_images):
        result = fingerprint_file(sample_images['identical1'], default_config())
        assert result.ok
        assert result.error is None
        assert (result.width, result.height) == (48, 40)
        assert len(result.hex) == 16

    def test_error_recorded(self, sample_images):
        result = fingerprint_file(sample_images['corrupted'], default_config())
        assert not result.ok
        assert result.fingerprint is None
        assert result.error

    def test_pipeline_error_recorded(self, sample_images):
        result = fingerprint_file(sample_images['red'], TransformConfig(fingerprint_size=1))
        assert not result.ok
        assert (result.width, result.height) == (100, 100)


class TestFingerprintFilesParallel:
    """Test fingerprint_files_parallel function."""

    def test_results_in_input_order(self, sample_images):
        paths = [
            sample_images['red'],
            sample_images['identical1'],
            sample_images['corrupted'],
            sample_images['unique'],
        ]
        results = fingerprint_files_parallel(paths, default_config(), max_workers=3, show_progress=False)
        assert [r.path for r in results] == paths
        assert [r.ok for r in results] == [True, True, False, True]

    def test_matches_sequential(self, sample_images):
        config = default_config()
        paths = [sample_images[k] for k in ('identical1', 'identical2', 'textured_rgba', 'unique', 'red')]
        results = fingerprint_files_parallel(paths, config, max_workers=4, show_progress=False)
        for path, result in zip(paths, results):
            assert result.fingerprint == compute_fingerprint(load_image(path), config)

    def test_progress_callback(self, sample_images):
        calls = []
        paths = [sample_images['identical1'], sample_images['unique'], sample_images['red']]
        fingerprint_files_parallel(
            paths,
            default_config(),
            max_workers=2,
            progress_callback=lambda current, total: calls.append((current, total)),
            show_progress=False,
        )
        assert calls
        assert calls[-1] == (3, 3)

    def test_empty_list(self):
        assert fingerprint_files_parallel([], default_config(), show_progress=False) == []

    def test_invalid_config_raises(self, sample_images):
        with pytest.raises(InvalidArgumentError):
            fingerprint_files_parallel([sample_images['red']], TransformConfig(transform_size=12))

    def test_unsupported_config_raises(self, sample_images):
        config = TransformConfig(transform_size=32, transform_method=TransformMethod.BUTTERFLY)
        with pytest.raises(UnsupportedOperationError):
            fingerprint_files_parallel([sample_images['red']], config)

    def test_shared_cache(self, sample_images, fresh_cache):
        config = TransformConfig(transform_size=16, transform_method=TransformMethod.LOOKUP)
        paths = [sample_images['identical1'], sample_images['unique']] * 4
        results = fingerprint_files_parallel(
            paths, config, max_workers=4, show_progress=False, cache=fresh_cache
        )
        assert all(r.ok for r in results)
        assert fresh_cache.sizes == [16]
        assert results[0].fingerprint == results[2].fingerprint
