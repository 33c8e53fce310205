"""Allow running the package with ``python -m spheretrace``."""

import sys

from spheretrace.cli import main

sys.exit(main())
