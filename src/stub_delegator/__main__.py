"""
Entry point for module execution (``python -m stub_delegator``).

This module delegates execution to the CLI handler in ``stub_delegator.cli.__main__``.
"""

import sys
from stub_delegator.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
