"""
Stub Signature Parser.

Recognizes a method declaration whose body is a placeholder, starting at a
caller-supplied offset::

    [unsafe ]fn <name>(&self[, <arg>: <type>]*[,]) [-> <type>] {
        unimplemented!("<message>");

Parsing is split into three anchored steps, each a pure function of
``(text, position)`` returning ``(consumed_length, value)`` or None:

1. ``match_header``: keyword, function name and the ``&self`` receiver.
2. ``match_argument``: one ``, name: type`` pair (applied repeatedly).
3. ``match_tail``: closing parenthesis, optional return type, opening brace
   and the placeholder call, whose span is reported separately.

``parse_signature`` composes the steps and raises a precise error for the
step that failed. Nothing is returned unless all steps succeed.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from stub_delegator.core.errors import NotAFunctionHeader, UnexpectedBody
from stub_delegator.core.grammar import build_pattern
from stub_delegator.core.positions import line_col

HEADER_PATTERN = build_pattern(
  r"(?:unsafe",
  "<ws+>",
  r")?fn",
  "<ws+>",
  r"(?P<name>",
  "<ident>",
  r")\(&(?:mut",
  "<ws+>",
  r")?self(?!\w)",
)

ARGUMENT_PATTERN = build_pattern(
  r",",
  "<ws*>",
  r"(?P<name>",
  "<ident>",
  r"):",
  "<ws*>",
  r"(?P<type>",
  "<type>",
  r")",
  "<ws*>",
)

TAIL_PATTERN = build_pattern(
  r",?",
  "<ws*>",
  r"\)",
  "<ws*>",
  r"(?:->",
  "<ws*>",
  "<type>",
  "<ws*>",
  r")?\{",
  "<ws*>",
  r"(?P<stub>unimplemented!\(",
  "<ws*>",
  "<string>",
  "<ws*>",
  r"\)",
  "<ws*>",
  r";)",
)


@dataclass(frozen=True)
class Argument:
  """
  One declared parameter.

  Attributes:
      name: Parameter identifier.
      type_text: Raw type token, e.g. ``&mut Vec<u8>``. Never parsed further.
  """

  name: str
  type_text: str


@dataclass(frozen=True)
class FunctionSignature:
  """Function name plus its arguments in declaration order (receiver excluded)."""

  name: str
  arguments: Tuple[Argument, ...] = ()

  @property
  def argument_names(self) -> List[str]:
    return [arg.name for arg in self.arguments]


@dataclass(frozen=True)
class SourceRegion:
  """Half-open ``[start, end)`` character range in one specific text."""

  start: int
  end: int

  def __len__(self) -> int:
    return self.end - self.start

  def slice(self, text: str) -> str:
    return text[self.start : self.end]


@dataclass(frozen=True)
class ParsedStub:
  """
  Result of a successful parse.

  Attributes:
      signature: The extracted name and arguments.
      stub_span: Region covering ``unimplemented!("...");``; the only text replaced later.
      header_start: Offset at which the declaration begins.
  """

  signature: FunctionSignature
  stub_span: SourceRegion
  header_start: int


def match_header(text: str, position: int) -> Optional[Tuple[int, str]]:
  """Matches the declaration header. Returns ``(consumed, function_name)``."""
  match = HEADER_PATTERN.match(text, position)
  if not match:
    return None
  return match.end() - position, match.group("name")


def match_argument(text: str, position: int) -> Optional[Tuple[int, Argument]]:
  """Matches a single ``, name: type`` pair. Returns ``(consumed, Argument)``."""
  match = ARGUMENT_PATTERN.match(text, position)
  if not match:
    return None
  return match.end() - position, Argument(name=match.group("name"), type_text=match.group("type"))


def match_tail(text: str, position: int) -> Optional[Tuple[int, SourceRegion]]:
  """Matches the signature tail and placeholder body. Returns ``(consumed, stub_span)``."""
  match = TAIL_PATTERN.match(text, position)
  if not match:
    return None
  return match.end() - position, SourceRegion(match.start("stub"), match.end("stub"))


def match_arguments(text: str, position: int) -> Tuple[int, Tuple[Argument, ...]]:
  """
  Applies ``match_argument`` until it stops matching.

  Returns:
      Tuple[int, Tuple[Argument, ...]]: Total consumed length and the arguments in order.
  """
  consumed = 0
  arguments: List[Argument] = []
  while True:
    step = match_argument(text, position + consumed)
    if step is None:
      break
    length, argument = step
    arguments.append(argument)
    consumed += length
  return consumed, tuple(arguments)


def parse_signature(text: str, position: int) -> ParsedStub:
  """
  Parses a stub declaration beginning exactly at ``position``.

  Args:
      text: The whole primary buffer text.
      position: Offset of the ``fn`` (or ``unsafe``) keyword.

  Returns:
      ParsedStub: Signature and placeholder span.

  Raises:
      NotAFunctionHeader: If the header or receiver does not match.
      UnexpectedBody: If the header matched but the body is not the placeholder.
  """
  header = match_header(text, position)
  if header is None:
    line, column = line_col(text, position)
    raise NotAFunctionHeader("Expected '[unsafe ]fn <name>(&self' at cursor", position, line, column)
  header_length, name = header

  cursor = position + header_length
  args_length, arguments = match_arguments(text, cursor)
  cursor += args_length

  tail = match_tail(text, cursor)
  if tail is None:
    line, column = line_col(text, cursor)
    raise UnexpectedBody(
      f"Function '{name}' does not end in an 'unimplemented!(\"...\");' placeholder body",
      cursor,
      line,
      column,
    )
  _, stub_span = tail

  return ParsedStub(
    signature=FunctionSignature(name=name, arguments=arguments),
    stub_span=stub_span,
    header_start=position,
  )
