"""Allow ``python -m denmon``."""

from __future__ import annotations

import sys

from denmon.cli import main

sys.exit(main())
