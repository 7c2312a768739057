"""Allow ``python -m npm_report``."""

import sys

from npm_report.cli import main

sys.exit(main())
