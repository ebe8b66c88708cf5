"""
Tests for the top-level `generate` helper.
"""

import pytest

import stub_delegator as sd


def test_generate_compute_example(call_source):
  src = 'fn compute(&self, width: u32, label: &str) { unimplemented!("todo"); }'

  new_src, new_calls = sd.generate(src, 0, call_source)

  assert new_src == "fn compute(&self, width: u32, label: &str) { simple!(self.compute(width, label)) }"
  assert "    compute { width: u32, label: &str },\n}\n" in new_calls


def test_generate_raises_specific_error(call_source):
  with pytest.raises(sd.NotAFunctionHeader):
    sd.generate('fn compute(width: u32) { unimplemented!("todo"); }', 0, call_source)


def test_generate_uses_config():
  config = sd.GeneratorConfig(enum_name="Command", macro_name="recorded")

  new_src, new_calls = sd.generate('fn f(&self) { unimplemented!(""); }', 0, "pub enum Command {\n}\n", config)

  assert new_src == "fn f(&self) { recorded!(self.f()) }"
  assert new_calls == "pub enum Command {\n    f {  },\n}\n"
