"""
Exception hierarchy for stub generation.

Parse errors are raised before any text is touched. Rewrite errors may be
raised after the primary buffer has already been edited; that edit is not
rolled back.
"""

from typing import Optional


class StubDelegatorError(Exception):
  """Base class for all generator failures."""


class ParseError(StubDelegatorError):
  """
  The cursor position does not begin a recognizable stub declaration.

  Attributes:
      position: Character offset at which matching failed.
      line: 1-based line of ``position`` (if known).
      column: 1-based column of ``position`` (if known).
  """

  def __init__(self, message: str, position: int, line: Optional[int] = None, column: Optional[int] = None):
    self.position = position
    self.line = line
    self.column = column
    if line is not None and column is not None:
      message = f"{message} (line {line}, col {column})"
    super().__init__(message)


class NotAFunctionHeader(ParseError):
  """Text at the cursor is not ``[unsafe ]fn name(&self``."""


class UnexpectedBody(ParseError):
  """The header matched but the body is not ``unimplemented!("...");``."""


class RewriteError(StubDelegatorError):
  """The companion file could not be updated."""


class EnumTargetNotFound(RewriteError):
  """The companion text has no ``pub enum <Name> { ... }`` block."""


class PersistFailed(RewriteError):
  """Saving the companion file failed."""
