"""
Entry point for running loon as a module.

Allows running the encoder via:
    python -m loon data.json
"""

import sys

from loon.cli import main

if __name__ == "__main__":
    sys.exit(main())
