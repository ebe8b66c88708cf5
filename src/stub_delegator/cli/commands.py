"""
CLI Command Handlers Facade.

Re-exports the handlers from `stub_delegator.cli.handlers` so the dispatcher
and tests have a single patch target.
"""

from stub_delegator.cli.handlers.generate import handle_generate, handle_generate_all
from stub_delegator.cli.handlers.scan import handle_scan

__all__ = [
  "handle_generate",
  "handle_generate_all",
  "handle_scan",
]
