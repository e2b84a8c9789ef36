"""
Third-party imports shared by the hashing modules.

Pillow and imagehash are required. pillow-heif adds HEIC/HEIF decoding
when present and tqdm draws progress bars for batch runs; both degrade to
flags when missing.
"""

from __future__ import annotations

import logging
import warnings
from typing import Optional, Any

_logger = logging.getLogger(__name__)

try:
    from PIL import Image
    import imagehash
except ImportError as e:
    raise ImportError(
        f"dctphash needs Pillow and imagehash ({e}).\n"
        "Install with: pip install Pillow imagehash"
    ) from e


def _register_heif() -> bool:
    """Install the pillow-heif opener into Pillow, if available."""
    try:
        from pillow_heif import register_heif_opener
    except ImportError:
        _logger.warning("pillow-heif not installed - .heic/.heif files will be rejected")
        return False
    register_heif_opener()
    _logger.debug("Registered pillow-heif opener")
    return True


def _find_tqdm() -> Optional[Any]:
    try:
        from tqdm import tqdm
    except ImportError:
        return None
    return tqdm


HAS_HEIF_SUPPORT = _register_heif()

# load_image sets Image.MAX_IMAGE_PIXELS per call; past 2x the limit Pillow
# raises, below that the warning is noise
warnings.filterwarnings("ignore", category=Image.DecompressionBombWarning)

_tqdm_class: Optional[Any] = _find_tqdm()
HAS_TQDM = _tqdm_class is not None


__all__ = [
    'Image',
    'imagehash',
    'HAS_HEIF_SUPPORT',
    'HAS_TQDM',
    '_tqdm_class',
    '_logger',
]
