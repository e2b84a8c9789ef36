"""
Allow running the package with: python -m dctphash

Examples:
    python -m dctphash compare a.jpg b.jpg
    python -m dctphash hash photos/*.png
    python -m dctphash config --init
"""

import sys

from .cli import main


if __name__ == '__main__':
    sys.exit(main())
