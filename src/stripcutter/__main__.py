"""Entry point for ``python -m stripcutter``."""

import sys

from .cli import main

sys.exit(main())
