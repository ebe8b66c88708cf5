"""
Tests for the Lexical Fragment Registry.

Verifies:
1. Each fragment matches exactly the lexical class it names.
2. Composite patterns are built from fragment references and literal text.
3. The registry is read-only and composites are compiled once.
"""

import re

import pytest

from stub_delegator.core.grammar import FRAGMENTS, build_pattern, expand, fragment


def full(name: str, text: str) -> bool:
  return re.fullmatch(fragment(name), text) is not None


def test_registered_fragment_names():
  assert set(FRAGMENTS) == {"ws*", "ws+", "ident", "type", "string"}


def test_whitespace_fragments():
  assert full("ws*", "")
  assert full("ws*", " \n\t ")
  assert not full("ws+", "")
  assert full("ws+", "\n    ")


def test_ident_fragment():
  assert full("ident", "buffer_data_untyped")
  assert full("ident", "x2")
  assert not full("ident", "a-b")
  assert not full("ident", "")


@pytest.mark.parametrize(
  "type_text",
  ["u32", "&str", "&[u8]", "Option<BufToGl>", "&mut Vec<u8>", "&mut [f32]", "[u8]", "Vec<Vec<u8>>"],
)
def test_type_fragment_accepts_opaque_tokens(type_text):
  assert full("type", type_text)


def test_type_fragment_rejects_separators():
  """Commas and spaces (other than after &mut) end a type token."""
  assert not full("type", "HashMap<K, V>")
  assert not full("type", "&'static str")


def test_string_fragment_handles_escapes():
  assert full("string", '"todo"')
  assert full("string", '""')
  assert full("string", r'"say \"hi\""')
  assert not full("string", '"unterminated')
  assert not full("string", '"a" "b"')


def test_unknown_fragment_raises():
  with pytest.raises(KeyError, match="Unknown grammar fragment"):
    fragment("number")


def test_registry_is_read_only():
  with pytest.raises(TypeError):
    FRAGMENTS["ident"] = r"[a-z]+"  # type: ignore[index]


def test_expand_passes_literal_text_through():
  assert expand("<ident>") == r"(?:\w+)"
  assert expand(r"(?P<name>") == r"(?P<name>"
  assert expand("<unknown>") == "<unknown>"


def test_build_pattern_composes_and_caches():
  pattern = build_pattern(r"fn", "<ws+>", r"(?P<name>", "<ident>", r")")
  match = pattern.match("fn   compute(")
  assert match is not None
  assert match.group("name") == "compute"
  assert build_pattern(r"fn", "<ws+>", r"(?P<name>", "<ident>", r")") is pattern
