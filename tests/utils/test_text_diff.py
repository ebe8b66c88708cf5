"""
Tests for dry-run diff rendering.
"""

from rich.syntax import Syntax

from stub_delegator.utils.text_diff import render_diff, unified_diff


def test_unified_diff_shows_changed_line():
  diff = unified_diff("a\nb\n", "a\nc\n", "call.rs")

  assert diff.startswith("--- a/call.rs\n+++ b/call.rs\n")
  assert "-b\n" in diff
  assert "+c\n" in diff


def test_identical_texts_give_empty_diff():
  assert unified_diff("same\n", "same\n", "x.rs") == ""


def test_render_diff_returns_syntax():
  assert isinstance(render_diff("+x\n"), Syntax)
