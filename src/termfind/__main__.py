"""Allow ``python -m termfind``."""

import sys

from .cli import main

sys.exit(main())
