"""Entry point for python -m ethvanity."""

import sys

from ethvanity.cli import main

if __name__ == "__main__":
    sys.exit(main())
