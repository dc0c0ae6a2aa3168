"""Allow ``python -m dojochess``."""

import sys

from dojochess.cli import main

sys.exit(main())
