"""Allow ``python -m word_conquest``."""

import sys

from .cli import main

sys.exit(main())
