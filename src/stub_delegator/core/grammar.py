"""
Lexical Fragment Registry.

Defines the fixed vocabulary of named regular-expression fragments used to
recognize stub declarations, and a small builder that splices them into
composite patterns.

Fragments are referenced in a composite by wrapping their name in angle
brackets, e.g. ``build_pattern(r"fn", "<ws+>", r"(?P<name>", "<ident>", r")")``.
Any part that is not a fragment reference is treated as literal regex text.

Registered fragments:

- ``ws*``: optional whitespace (including newlines).
- ``ws+``: mandatory whitespace.
- ``ident``: identifier token (alphanumerics and underscore).
- ``type``: opaque type token. An optional ``&mut `` marker followed by
  alphanumerics, ``_``, ``&``, ``<``, ``>``, ``[`` and ``]``.
- ``string``: double-quoted literal with backslash escapes.
"""

import re
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

FRAGMENTS: Mapping[str, str] = MappingProxyType(
  {
    "ws*": r"\s*",
    "ws+": r"\s+",
    "ident": r"\w+",
    "type": r"(?:&mut\s+)?[\w&<>\[\]]+",
    "string": r'"(?:[^"\\]|\\.)*"',
  }
)


def fragment(name: str) -> str:
  """
  Looks up a single fragment by its symbolic name.

  Args:
      name: Registered fragment name (e.g. ``"ident"``).

  Returns:
      str: The regex source of the fragment, wrapped in a non-capturing group.

  Raises:
      KeyError: If no fragment is registered under ``name``.
  """
  if name not in FRAGMENTS:
    raise KeyError(f"Unknown grammar fragment: '{name}'. Known fragments: {sorted(FRAGMENTS)}")
  return f"(?:{FRAGMENTS[name]})"


def expand(part: str) -> str:
  """Resolves ``<name>`` references to fragment source; other text passes through."""
  if len(part) > 2 and part.startswith("<") and part.endswith(">") and part[1:-1] in FRAGMENTS:
    return fragment(part[1:-1])
  return part


@lru_cache(maxsize=None)
def build_pattern(*parts: str, flags: int = 0) -> "re.Pattern[str]":
  """
  Concatenates fragments and literal regex text into a compiled pattern.

  Compiled patterns are cached, so composites built at import time and
  composites rebuilt on demand share the same object.

  Args:
      *parts: Fragment references (``"<ws*>"``) or literal regex text.
      flags: Standard ``re`` flags.

  Returns:
      Pattern: The compiled composite.
  """
  return re.compile("".join(expand(p) for p in parts), flags)
