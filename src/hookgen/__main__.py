"""
Entry point for module execution (``python -m hookgen``).

This module delegates execution to the CLI handler in ``hookgen.cli.__main__``.
"""

import sys
from hookgen.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
