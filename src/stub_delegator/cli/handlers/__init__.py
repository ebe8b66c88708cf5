from .generate import handle_generate, handle_generate_all
from .scan import handle_scan

__all__ = [
  "handle_generate",
  "handle_generate_all",
  "handle_scan",
]
