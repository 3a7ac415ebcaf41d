"""Process Entry Point - Root Module.

Runs the bushfire monitor. It imports from the src package.
"""

import sys

from src.main import main

__all__ = [
    "main",
]


if __name__ == "__main__":
    sys.exit(main())
