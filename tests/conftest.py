"""
Pytest configuration and shared fixtures for test suite.
"""

import pytest
import tempfile
import shutil
from pathlib import Path

import numpy as np
from PIL import Image


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolated_user_config(monkeypatch, temp_dir):
    """Point the user config at an empty directory and clear DCTPHASH_* overrides."""
    from dctphash.user_config import get_user_config

    for name in (
        'DCTPHASH_TRANSFORM_SIZE', 'DCTPHASH_FINGERPRINT_SIZE', 'DCTPHASH_COLORSPACE',
        'DCTPHASH_TRANSFORM_METHOD', 'DCTPHASH_THRESHOLD', 'DCTPHASH_WORKERS',
        'DCTPHASH_MAX_PIXELS',
    ):
        monkeypatch.delenv(name, raising=False)
    config_dir = temp_dir / "config"
    monkeypatch.setenv('DCTPHASH_CONFIG_DIR', str(config_dir))

    config = get_user_config()
    config.reload()
    yield config_dir
    config.reload()


@pytest.fixture
def rng():
    """Deterministic random generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def textured_pixels(rng):
    """A 48x40 RGB image with blocky random texture (uint8, row-major)."""
    blocks = rng.integers(0, 256, size=(5, 6, 3), dtype=np.uint8)
    return np.kron(blocks, np.ones((8, 8, 1), dtype=np.uint8))


@pytest.fixture
def sample_images(temp_dir, textured_pixels):
    """
    Create a set of sample images for testing.

    Returns:
        dict with paths to:
        - identical1.png, identical2.png (same pixels, separate files)
        - textured_rgba.png (same pixels with an alpha channel)
        - unique.png (a different texture)
        - red.png (uniform red square)
        - corrupted.txt (not an image)
    """
    images = {}

    textured = Image.fromarray(textured_pixels, 'RGB')
    path1 = temp_dir / "identical1.png"
    textured.save(path1, 'PNG')
    images['identical1'] = str(path1)

    path2 = temp_dir / "identical2.png"
    textured.save(path2, 'PNG', optimize=True, compress_level=9)
    images['identical2'] = str(path2)

    path3 = temp_dir / "textured_rgba.png"
    textured.convert('RGBA').save(path3, 'PNG')
    images['textured_rgba'] = str(path3)

    # Different texture: transpose the blocks and invert
    other = 255 - np.ascontiguousarray(textured_pixels[::-1, ::-1])
    path4 = temp_dir / "unique.png"
    Image.fromarray(other, 'RGB').save(path4, 'PNG')
    images['unique'] = str(path4)

    path5 = temp_dir / "red.png"
    Image.new('RGB', (100, 100), color='red').save(path5, 'PNG')
    images['red'] = str(path5)

    path6 = temp_dir / "corrupted.txt"
    path6.write_text("not an image")
    images['corrupted'] = str(path6)

    return images


@pytest.fixture
def fresh_cache():
    """A private cosine table cache."""
    from dctphash.hashing.transform import CosineTableCache

    return CosineTableCache()


def reference_dct(matrix):
    """Textbook 2D DCT-II with 0.25 * a(u) * a(v) scaling, for cross-checks."""
    matrix = np.asarray(matrix, dtype=np.float64)
    n = matrix.shape[0]
    out = np.zeros((n, n))
    idx = np.arange(n)
    for v in range(n):
        for u in range(n):
            cos_x = np.cos((2 * idx + 1) * u * np.pi / (2 * n))
            cos_y = np.cos((2 * idx + 1) * v * np.pi / (2 * n))
            au = np.sqrt(0.5) if u == 0 else 1.0
            av = np.sqrt(0.5) if v == 0 else 1.0
            out[v, u] = 0.25 * au * av * np.sum(matrix * cos_y[:, None] * cos_x[None, :])
    return out


@pytest.fixture
def reference():
    """The textbook DCT as a fixture."""
    return reference_dct
