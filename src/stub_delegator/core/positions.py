"""
Conversions between character offsets and 1-based line/column pairs.
"""

from typing import Optional, Tuple


def line_col(text: str, offset: int) -> Tuple[int, int]:
  """
  Maps a character offset to a 1-based (line, column) pair.

  Args:
      text: The full buffer text.
      offset: Offset into ``text`` (clamped to its bounds).

  Returns:
      Tuple[int, int]: Line and column, both starting at 1.
  """
  offset = max(0, min(offset, len(text)))
  line = text.count("\n", 0, offset) + 1
  line_start = text.rfind("\n", 0, offset) + 1
  return line, offset - line_start + 1


def offset_from_line(text: str, line: int, column: Optional[int] = None) -> int:
  """
  Maps a 1-based line (and optional column) to a character offset.

  When ``column`` is omitted, the offset of the first non-whitespace character
  on the line is returned, which is where a declaration starts.

  Args:
      text: The full buffer text.
      line: 1-based line number.
      column: 1-based column number, or None.

  Returns:
      int: The character offset.

  Raises:
      ValueError: If the line or column lies outside the text.
  """
  lines = text.splitlines(keepends=True)
  if line < 1 or line > max(len(lines), 1):
    raise ValueError(f"Line {line} is out of range (text has {len(lines)} lines).")

  start = sum(len(chunk) for chunk in lines[: line - 1])
  content = lines[line - 1].rstrip("\r\n") if lines else ""

  if column is None:
    return start + (len(content) - len(content.lstrip()))

  if column < 1 or column > len(content) + 1:
    raise ValueError(f"Column {column} is out of range for line {line} ({len(content)} characters).")
  return start + column - 1
