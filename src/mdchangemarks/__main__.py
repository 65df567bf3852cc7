"""Allow ``python -m mdchangemarks`` as an alias for the ``mdchangemarks`` command."""

import sys

from mdchangemarks.cli import main

sys.exit(main())
