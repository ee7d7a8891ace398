"""Entry point for running beadtree directly.

Usage:
    python -m beadtree
"""

import sys

from beadtree.cli import main

if __name__ == "__main__":
    sys.exit(main())
