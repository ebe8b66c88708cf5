"""
Stub Scanner.

Finds every method declaration in a file and reports whether its body is
still the ``unimplemented!("...")`` placeholder. Used by the ``scan`` command
and by batch generation.

Declarations inside comments, string literals and character literals are
ignored.
"""

import bisect
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from stub_delegator.core.errors import NotAFunctionHeader, UnexpectedBody
from stub_delegator.core.grammar import build_pattern
from stub_delegator.core.positions import line_col
from stub_delegator.core.signature import ParsedStub, match_header, parse_signature
from stub_delegator.enums import StubStatus

# Start of "fn" or "unsafe fn" as a whole word.
DECLARATION_START = build_pattern(r"\b(?:unsafe", "<ws+>", r")?fn\b")

# Openers of regions that cannot hold code. Block comments nest, so their end
# is found by counting rather than by the pattern.
_LINE_COMMENT = re.compile(r"//[^\n]*")
_STRING = re.compile(r'b?"(?:\\.|[^"\\])*"?', re.DOTALL)
_RAW_STRING_OPEN = re.compile(r'b?r(#*)"')
_CHAR = re.compile(r"b?'(?:\\(?:x[0-9a-fA-F]{2}|u\{[0-9a-fA-F]{1,6}\}|.)|[^\\'\n])'")
_BLOCK_TOKEN = re.compile(r"/\*|\*/")
_OPENER = re.compile(r"""//|/\*|(?<!\w)b?r(?=#*")|(?<!\w)b(?=["'])|["']""")


def _region_end(text: str, start: int) -> Optional[int]:
  """Returns the end of the comment or literal opening at ``start``, or None for a lifetime."""
  if text.startswith("//", start):
    return _LINE_COMMENT.match(text, start).end()
  if text.startswith("/*", start):
    depth = 0
    for token in _BLOCK_TOKEN.finditer(text, start):
      depth += 1 if token.group() == "/*" else -1
      if depth == 0:
        return token.end()
    return len(text)
  raw = _RAW_STRING_OPEN.match(text, start)
  if raw:
    closing = '"' + raw.group(1)
    close = text.find(closing, raw.end())
    return len(text) if close == -1 else close + len(closing)
  for pattern in (_STRING, _CHAR):
    literal = pattern.match(text, start)
    if literal:
      return literal.end()
  return None


def opaque_regions(text: str) -> List[Tuple[int, int]]:
  """
  Lists the ``(start, end)`` spans of comments, string and character literals.

  Spans are sorted and never overlap. An unterminated comment or string runs
  to the end of the text.
  """
  regions: List[Tuple[int, int]] = []
  pos = 0
  while True:
    opener = _OPENER.search(text, pos)
    if not opener:
      return regions
    start = opener.start()
    end = _region_end(text, start)
    if end is None:
      pos = start + 1
      continue
    regions.append((start, end))
    pos = end


@dataclass(frozen=True)
class StubCandidate:
  """
  A method header found in the text.

  Attributes:
      position: Offset of the declaration keyword.
      line: 1-based line of ``position``.
      name: Method name.
      status: Whether the body is the placeholder.
      parsed: Full parse result when ``status`` is ``STUB``.
  """

  position: int
  line: int
  name: str
  status: StubStatus
  parsed: Optional[ParsedStub] = None

  @property
  def argument_count(self) -> Optional[int]:
    if self.parsed is None:
      return None
    return len(self.parsed.signature.arguments)


def scan_stubs(text: str) -> List[StubCandidate]:
  """
  Lists every ``&self`` method header in ``text`` in source order.

  Declarations without a ``&self`` receiver are skipped, as are declarations
  inside comments and literals.
  """
  regions = opaque_regions(text)
  starts = [start for start, _ in regions]

  def is_opaque(offset: int) -> bool:
    index = bisect.bisect_right(starts, offset) - 1
    return index >= 0 and offset < regions[index][1]

  candidates: List[StubCandidate] = []
  for match in DECLARATION_START.finditer(text):
    position = match.start()
    if is_opaque(position):
      # "unsafe" may sit in a comment right before a real "fn".
      position = match.end() - len("fn")
      if is_opaque(position):
        continue
    line, _ = line_col(text, position)
    try:
      parsed = parse_signature(text, position)
    except NotAFunctionHeader:
      continue
    except UnexpectedBody:
      header = match_header(text, position)
      name = header[1] if header else ""
      candidates.append(StubCandidate(position=position, line=line, name=name, status=StubStatus.IMPLEMENTED))
      continue
    candidates.append(
      StubCandidate(
        position=position,
        line=line,
        name=parsed.signature.name,
        status=StubStatus.STUB,
        parsed=parsed,
      )
    )
  return candidates


def find_stubs(text: str) -> List[StubCandidate]:
  """Returns only the candidates whose body is still the placeholder."""
  return [c for c in scan_stubs(text) if c.status == StubStatus.STUB]
