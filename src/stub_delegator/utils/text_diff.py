"""
Unified diff rendering for dry runs.
"""

import difflib

from rich.syntax import Syntax


def unified_diff(before: str, after: str, label: str) -> str:
  """
  Returns a unified diff of two versions of one file.

  Args:
      before: Original text.
      after: Edited text.
      label: File name shown in the diff headers.

  Returns:
      str: The diff, or an empty string if the texts are equal.
  """
  lines = difflib.unified_diff(
    before.splitlines(keepends=True),
    after.splitlines(keepends=True),
    fromfile=f"a/{label}",
    tofile=f"b/{label}",
  )
  return "".join(lines)


def render_diff(diff_text: str) -> Syntax:
  """Wraps diff text for coloured console output."""
  return Syntax(diff_text, "diff", theme="ansi_dark", background_color="default")
