"""Package entry point for ``python -m transcript_transform``.

WHY: Users run the tool as ``python -m transcript_transform transform
input.csv`` when the console script is not on PATH.

HOW: Delegates to the CLI's main() and exits with its return code.
"""

import sys

from transcript_transform.cli import main

if __name__ == "__main__":
    sys.exit(main())
