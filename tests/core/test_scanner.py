"""
Tests for the Stub Scanner.
"""

from stub_delegator.core.scanner import find_stubs, opaque_regions, scan_stubs
from stub_delegator.enums import StubStatus


def test_scan_classifies_methods(recorder_source):
  candidates = scan_stubs(recorder_source)

  assert [(c.name, c.line, c.status) for c in candidates] == [
    ("active_texture", 2, StubStatus.IMPLEMENTED),
    ("compute", 6, StubStatus.STUB),
    ("get_error", 8, StubStatus.STUB),
    ("buffer_data_untyped", 12, StubStatus.STUB),
  ]
  assert [c.argument_count for c in candidates] == [None, 2, 0, 3]


def test_scan_position_points_at_keyword(recorder_source):
  unsafe_stub = scan_stubs(recorder_source)[2]
  assert recorder_source[unsafe_stub.position :].startswith("unsafe fn get_error")


def test_scan_skips_free_functions_and_embedded_fn():
  text = 'fn helper(x: u32) {}\nfn my_fn(&self) {}\nlet a = some_fn(&self);\nfn s(&self) { unimplemented!(""); }\n'

  candidates = scan_stubs(text)

  assert [(c.name, c.status) for c in candidates] == [("my_fn", StubStatus.IMPLEMENTED), ("s", StubStatus.STUB)]


def test_find_stubs_only_returns_placeholders(recorder_source):
  assert [c.name for c in find_stubs(recorder_source)] == ["compute", "get_error", "buffer_data_untyped"]


def test_scan_empty_text():
  assert scan_stubs("") == []


def test_scan_ignores_declarations_in_comments_and_literals():
  text = (
    '// fn old(&self) { unimplemented!("x"); }\n'
    '/* fn older(&self) { unimplemented!("x"); }\n'
    '   /* nested */ fn oldest(&self) { unimplemented!("x"); } */\n'
    'const DOC: &str = "fn quoted(&self) { unimplemented!(\\"x\\"); }";\n'
    'const RAW: &str = r#"fn raw(&self) { unimplemented!("x"); }"#;\n'
    "const Q: char = '\"';\n"
    'fn real(&self) { unimplemented!("x"); }\n'
  )

  candidates = scan_stubs(text)

  assert [(c.name, c.line) for c in candidates] == [("real", 7)]


def test_scan_keeps_fn_after_unsafe_in_comment():
  text = '// unsafe\nfn real(&self) { unimplemented!("x"); }\n'

  [candidate] = scan_stubs(text)

  assert candidate.name == "real"
  assert text[candidate.position :].startswith("fn real")


def test_opaque_regions_skip_lifetimes():
  text = "fn f<'a>(&'a self) -> char { 'x' } // done"

  regions = opaque_regions(text)

  assert [text[start:end] for start, end in regions] == ["'x'", "// done"]


def test_opaque_regions_unterminated_comment_runs_to_end():
  text = "fn f(&self) {} /* open"

  assert opaque_regions(text) == [(15, len(text))]
