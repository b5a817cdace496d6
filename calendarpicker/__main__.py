"""Entry point for `python -m calendarpicker`."""

import sys

from calendarpicker.cli import main

if __name__ == "__main__":
    sys.exit(main())
