"""Allow ``python -m tasktimer``."""

import sys

from tasktimer.cli.app import main

sys.exit(main())
