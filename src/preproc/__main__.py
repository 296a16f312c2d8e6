"""Allow running preproc as ``python -m preproc``."""

import sys

from preproc.cli import main

if __name__ == "__main__":
    sys.exit(main())
