"""Main entry point for csvseal."""

import sys

from csvseal.cli import main


if __name__ == "__main__":
    sys.exit(main())
