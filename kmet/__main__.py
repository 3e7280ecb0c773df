"""Allow ``python -m kmet``."""

import sys

from kmet.cli import main

sys.exit(main())
