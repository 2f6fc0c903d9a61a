"""Allow ``python -m heightfield``."""

import sys

from .cli import main

sys.exit(main())
