"""Allow ``python -m book2tei``."""

import sys

from book2tei.cli import main

sys.exit(main())
