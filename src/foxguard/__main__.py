"""Allow ``python -m foxguard``."""

import sys

from foxguard.cli import main

if __name__ == "__main__":
	sys.exit(main())
