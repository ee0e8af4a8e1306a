"""Entry point for ``python -m honeybear``."""
import sys

from honeybear.cli import main

if __name__ == "__main__":
    sys.exit(main())
