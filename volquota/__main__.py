"""Allow running as python -m volquota."""

import sys

from volquota.cli import main

sys.exit(main())
