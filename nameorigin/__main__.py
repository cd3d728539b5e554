"""Allow running as: python -m nameorigin"""

import sys

from nameorigin.cli import main

sys.exit(main())
