"""
Configuration constants for dctphash.

This module contains all built-in settings including:
- Transform and fingerprint size bounds
- Default transform configuration values
- Luma weights for each supported colorspace reduction
"""

# Transform size bounds (N of the NxN DCT, power of two)
MIN_TRANSFORM_SIZE = 8
MAX_TRANSFORM_SIZE = 64

# Width of a fingerprint word; fingerprint_size**2 must fit in it
FINGERPRINT_BITS = 64
FINGERPRINT_MASK = (1 << FINGERPRINT_BITS) - 1

# Sizes accepted by the Arai-Agui-Nakajima strategy
AAN_SIZES = frozenset({8, 16, 32, 64})

# Size handled by the closed-form butterfly strategy
BUTTERFLY_SIZE = 8

# Default transform configuration
DEFAULT_TRANSFORM_SIZE = 32
DEFAULT_FINGERPRINT_SIZE = 8
DEFAULT_COLORSPACE = 'bt709'
DEFAULT_TRANSFORM_METHOD = 'auto'

# Default similarity threshold for comparing fingerprints
# Lower = stricter matching (0-64 range)
DEFAULT_SIMILARITY_THRESHOLD = 5

# Default number of parallel workers for batch fingerprinting
DEFAULT_WORKERS = 4
MAX_WORKERS = 32

# Decompression bomb limit passed to Pillow when loading files
DEFAULT_MAX_IMAGE_PIXELS = 500_000_000

# (R, G, B) weights per colorspace; 'average' is computed as (R+G+B)/3
LUMA_WEIGHTS = {
    'bt601': (0.299, 0.587, 0.114),
    'bt709': (0.2126, 0.7152, 0.0722),
    'bt2100': (0.2627, 0.6780, 0.0593),
}

# Channel counts accepted for image buffers (only RGB is read)
SUPPORTED_CHANNELS = (3, 4)
