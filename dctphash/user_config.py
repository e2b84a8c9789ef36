"""
User settings for dctphash.

Each setting is resolved from the first source that defines it:

1. Keyword overrides passed to UserConfig.transform_config (CLI flags)
2. DCTPHASH_* environment variables
3. The JSON file in the config directory (~/.dctphash/config.json,
   or $DCTPHASH_CONFIG_DIR/config.json)
4. The constants in config.py

Example config.json:
{
    "transform_size": 32,
    "fingerprint_size": 8,
    "colorspace": "bt709",
    "transform_method": "auto",
    "similarity_threshold": 5,
    "default_workers": 4,
    "max_image_pixels": 500000000
}
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from .config import (
    DEFAULT_COLORSPACE,
    DEFAULT_FINGERPRINT_SIZE,
    DEFAULT_MAX_IMAGE_PIXELS,
    DEFAULT_SIMILARITY_THRESHOLD,
    DEFAULT_TRANSFORM_METHOD,
    DEFAULT_TRANSFORM_SIZE,
    DEFAULT_WORKERS,
)
from .models import TransformConfig
from .utils.validators import validate_config

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = 'DCTPHASH_CONFIG_DIR'
CONFIG_FILE_NAME = 'config.json'

# key -> (environment variable, built-in default)
SETTINGS: dict[str, tuple[str, Any]] = {
    'transform_size': ('DCTPHASH_TRANSFORM_SIZE', DEFAULT_TRANSFORM_SIZE),
    'fingerprint_size': ('DCTPHASH_FINGERPRINT_SIZE', DEFAULT_FINGERPRINT_SIZE),
    'colorspace': ('DCTPHASH_COLORSPACE', DEFAULT_COLORSPACE),
    'transform_method': ('DCTPHASH_TRANSFORM_METHOD', DEFAULT_TRANSFORM_METHOD),
    'similarity_threshold': ('DCTPHASH_THRESHOLD', DEFAULT_SIMILARITY_THRESHOLD),
    'default_workers': ('DCTPHASH_WORKERS', DEFAULT_WORKERS),
    'max_image_pixels': ('DCTPHASH_MAX_PIXELS', DEFAULT_MAX_IMAGE_PIXELS),
}

TRANSFORM_KEYS = ('transform_size', 'fingerprint_size', 'colorspace', 'transform_method')


def _parse_env(raw: str) -> Any:
    """Numbers and JSON literals are decoded; bare words stay strings."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _setting(key: str, doc: str) -> property:
    return property(lambda self: self.get(key), doc=doc)


class UserConfig:
    """
    Process-wide view of the user's settings.

    The file is read once on first access and cached until reload().
    Environment variables are read on every lookup.
    """

    _instance: Optional['UserConfig'] = None
    _file_data: Optional[dict] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def config_dir(self) -> Path:
        override = os.getenv(CONFIG_DIR_ENV)
        return Path(override) if override else Path.home() / '.dctphash'

    @property
    def config_file_path(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    def _read_file(self) -> dict:
        path = self.config_file_path
        if not path.is_file():
            return {}

        try:
            data = json.loads(path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable config file {path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring config file {path}: expected a JSON object")
            return {}

        logger.debug(f"Read settings from {path}")
        return data

    @property
    def file_data(self) -> dict:
        """Settings from the config file (cached)."""
        if self._file_data is None:
            self._file_data = self._read_file()
        return self._file_data

    def reload(self):
        """Forget the cached file contents."""
        self._file_data = None

    def get(self, key: str, default: Any = None) -> Any:
        """
        Resolve one setting from the environment, the file, then defaults.

        Args:
            key: Setting name (a key of SETTINGS, or any file key)
            default: Fallback for keys without a built-in default

        Returns:
            The resolved value
        """
        env_var, builtin = SETTINGS.get(key, (None, default))
        if env_var is not None:
            raw = os.getenv(env_var)
            if raw is not None:
                return _parse_env(raw)
        return self.file_data.get(key, builtin)

    transform_size = _setting('transform_size', "N of the NxN DCT.")
    fingerprint_size = _setting('fingerprint_size', "Side of the thresholded low-frequency block.")
    colorspace = _setting('colorspace', "Grayscale weighting (average, bt601, bt709, bt2100).")
    transform_method = _setting('transform_method', "DCT strategy (auto, naive, butterfly, lookup, aan).")
    similarity_threshold = _setting('similarity_threshold', "Largest Hamming distance reported as similar.")
    default_workers = _setting('default_workers', "Thread count for batch fingerprinting.")
    max_image_pixels = _setting('max_image_pixels', "Decompression bomb limit passed to Pillow.")

    def transform_config(self, **overrides) -> TransformConfig:
        """
        Build and validate the effective TransformConfig.

        Args:
            **overrides: Values that win over every other source; None
                means "not given"

        Returns:
            Validated TransformConfig

        Raises:
            PhashError: If the resolved values are invalid
        """
        values = {key: self.get(key) for key in TRANSFORM_KEYS}
        values.update((k, v) for k, v in overrides.items() if v is not None)
        config = TransformConfig.from_dict(values)
        validate_config(config)
        return config

    def create_example_config(self) -> bool:
        """Write a config file holding every built-in default."""
        example = {"_comment": "dctphash user configuration"}
        example.update((key, builtin) for key, (_, builtin) in SETTINGS.items())

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            self.config_file_path.write_text(json.dumps(example, indent=2), encoding='utf-8')
        except OSError as e:
            logger.error(f"Could not write {self.config_file_path}: {e}")
            return False

        logger.info(f"Wrote example config to {self.config_file_path}")
        return True


_user_config = UserConfig()


def get_user_config() -> UserConfig:
    """Return the shared UserConfig."""
    return _user_config
