"""
Dual-File Rewriter.

Turns a parsed stub into two edits:

1. The placeholder body in the primary buffer becomes a delegating call,
   ``simple!(self.<name>(<arg>, ...))``.
2. A variant carrying the same fields is inserted into ``pub enum Call`` of
   the companion file, on its own line just before the closing brace, and the
   companion file is saved.

The edits are applied in that order and are not transactional: if locating
the enum or saving the companion fails, the primary edit stays applied.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from stub_delegator.core.buffers import SecondaryFile, TextBuffer
from stub_delegator.core.errors import EnumTargetNotFound, PersistFailed
from stub_delegator.core.grammar import build_pattern
from stub_delegator.core.signature import FunctionSignature, ParsedStub, SourceRegion
from stub_delegator.enums import GenerationState

logger = logging.getLogger(__name__)

StateObserver = Callable[[GenerationState], None]


@dataclass(frozen=True)
class RewriteOutcome:
  """
  Record of both edits.

  Attributes:
      call_text: Text that replaced the placeholder.
      variant_text: Line inserted into the enum (including indentation and newline).
      primary_region: Where the call text now sits in the primary buffer.
      secondary_region: Where the variant now sits in the companion file.
  """

  call_text: str
  variant_text: str
  primary_region: SourceRegion
  secondary_region: SourceRegion


def render_call(signature: FunctionSignature, macro_name: str = "simple") -> str:
  """
  Builds the delegating call expression.

  Example:
      ``simple!(self.compute(width, label))``
  """
  args = ", ".join(signature.argument_names)
  return f"{macro_name}!(self.{signature.name}({args}))"


def render_variant(signature: FunctionSignature) -> str:
  """
  Builds the enum variant line.

  The brace form is used even without fields, giving ``    name {  },``.

  Example:
      ``    compute { width: u32, label: &str },\\n``
  """
  fields = ", ".join(f"{arg.name}: {arg.type_text}" for arg in signature.arguments)
  return f"    {signature.name} {{ {fields} }},\n"


def _enum_marker(enum_name: str):
  return build_pattern(r"\bpub", "<ws+>", r"enum", "<ws+>", re.escape(enum_name), r"\b")


def locate_enum_insertion(text: str, enum_name: str = "Call") -> int:
  """
  Finds where a new variant of ``pub enum <enum_name>`` should be inserted.

  The first declaration is used. Its closing brace is found by balancing
  braces from the opening one; the insertion point is the start of the line
  holding that closing brace. If the closing brace sits on the same line as
  the opening one, the brace offset itself is returned.

  Args:
      text: Companion file text.
      enum_name: Name of the target enum.

  Returns:
      int: Insertion offset.

  Raises:
      EnumTargetNotFound: If the declaration or its braces are missing.
  """
  marker = _enum_marker(enum_name).search(text)
  if not marker:
    raise EnumTargetNotFound(f"No 'pub enum {enum_name}' declaration found in companion file")

  open_brace = text.find("{", marker.end())
  if open_brace == -1:
    raise EnumTargetNotFound(f"'pub enum {enum_name}' has no opening brace")

  depth = 0
  close_brace = -1
  for index in range(open_brace, len(text)):
    char = text[index]
    if char == "{":
      depth += 1
    elif char == "}":
      depth -= 1
      if depth == 0:
        close_brace = index
        break

  if close_brace == -1:
    raise EnumTargetNotFound(f"'pub enum {enum_name}' is missing its closing brace")

  line_start = text.rfind("\n", 0, close_brace) + 1
  if line_start <= open_brace:
    return close_brace
  return line_start


def rewrite(
  parsed: ParsedStub,
  primary: TextBuffer,
  secondary: SecondaryFile,
  macro_name: str = "simple",
  enum_name: str = "Call",
  observer: Optional[StateObserver] = None,
) -> RewriteOutcome:
  """
  Applies the placeholder replacement and the enum variant insertion.

  Args:
      parsed: Result of ``parse_signature`` on ``primary.text``.
      primary: Buffer holding the stub; edited in place, never saved here.
      secondary: Companion file; edited and saved.
      macro_name: Macro used for the delegating call.
      enum_name: Enum receiving the new variant.
      observer: Optional callback notified of each state reached.

  Returns:
      RewriteOutcome: Description of both edits.

  Raises:
      EnumTargetNotFound: Companion is unreadable or has no usable enum (primary already edited).
      PersistFailed: Saving the companion failed (both texts already edited).
  """
  notify = observer or (lambda state: None)
  signature = parsed.signature

  call_text = render_call(signature, macro_name)
  span = parsed.stub_span
  primary.replace_region(span.start, span.end, call_text)
  primary_region = SourceRegion(span.start, span.start + len(call_text))
  logger.debug("Replaced placeholder of '%s' at %d..%d", signature.name, span.start, span.end)
  notify(GenerationState.PRIMARY_EDITED)

  try:
    companion_text = secondary.text
  except (OSError, UnicodeDecodeError) as e:
    raise EnumTargetNotFound(f"Could not read companion file: {e}") from e

  offset = locate_enum_insertion(companion_text, enum_name)
  notify(GenerationState.SECONDARY_LOCATED)

  variant_text = render_variant(signature)
  if offset > 0 and companion_text[offset - 1] != "\n":
    variant_text = "\n" + variant_text
  secondary.insert(offset, variant_text)
  secondary_region = SourceRegion(offset, offset + len(variant_text))
  notify(GenerationState.SECONDARY_EDITED)

  try:
    secondary.save()
  except OSError as e:
    raise PersistFailed(f"Could not save companion file: {e}") from e
  notify(GenerationState.PERSISTED)

  return RewriteOutcome(
    call_text=call_text,
    variant_text=variant_text,
    primary_region=primary_region,
    secondary_region=secondary_region,
  )
