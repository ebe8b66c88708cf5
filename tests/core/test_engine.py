"""
Tests for the Generation Engine.

Verifies that:
1.  A successful run walks every state and reports the generated texts.
2.  Parse failures end in ``aborted`` with neither buffer touched.
3.  Rewrite failures keep the state reached and flag the primary as modified.
4.  Batch mode converts every stub in source order.
"""

from stub_delegator.config import GeneratorConfig
from stub_delegator.core.buffers import InMemoryBuffer
from stub_delegator.core.engine import StubGenerator
from stub_delegator.core.tracer import TraceEventType
from stub_delegator.enums import GenerationState


def _states(result):
  return [e["metadata"]["to"] for e in result.trace_events if e["type"] == TraceEventType.STATE_CHANGE]


def test_successful_run_walks_all_states(recorder_source, call_source):
  primary = InMemoryBuffer(recorder_source)
  companion = InMemoryBuffer(call_source)

  result = StubGenerator().run(primary, recorder_source.index("fn compute"), companion)

  assert result.success
  assert result.state == GenerationState.PERSISTED
  assert result.function_name == "compute"
  assert result.call_text == "simple!(self.compute(width, label))"
  assert result.variant_text == "    compute { width: u32, label: &str },\n"
  assert _states(result) == [
    "header_matched",
    "body_validated",
    "primary_edited",
    "secondary_located",
    "secondary_edited",
    "persisted",
  ]
  assert "fn compute(&self, width: u32, label: &str) { simple!(self.compute(width, label)) }" in primary.text
  assert companion.save_count == 1


def test_trace_records_both_edits(recorder_source, call_source):
  result = StubGenerator().run(
    InMemoryBuffer(recorder_source), recorder_source.index("fn compute"), InMemoryBuffer(call_source)
  )

  edits = [e["metadata"] for e in result.trace_events if e["type"] == TraceEventType.TEXT_EDIT]
  assert [e["target"] for e in edits] == ["primary", "secondary"]
  assert edits[0]["before"] == 'unimplemented!("todo");'
  assert edits[0]["after"] == "simple!(self.compute(width, label))"


def test_missing_receiver_aborts_without_edits(call_source):
  source = 'fn compute(width: u32) { unimplemented!("todo"); }'
  primary = InMemoryBuffer(source)
  companion = InMemoryBuffer(call_source)

  result = StubGenerator().run(primary, 0, companion)

  assert not result.success
  assert result.state == GenerationState.ABORTED
  assert result.error_kind == "NotAFunctionHeader"
  assert not result.primary_modified
  assert primary.text == source
  assert companion.text == call_source
  assert companion.save_count == 0


def test_todo_body_aborts_without_edits(call_source):
  source = "fn compute(&self, width: u32) { todo!() }"
  primary = InMemoryBuffer(source)
  companion = InMemoryBuffer(call_source)

  result = StubGenerator().run(primary, 0, companion)

  assert result.error_kind == "UnexpectedBody"
  assert result.state == GenerationState.ABORTED
  assert _states(result) == ["header_matched", "aborted"]
  assert primary.text == source
  assert companion.text == call_source


def test_missing_enum_leaves_primary_edited():
  source = 'fn foo(&self) { unimplemented!("x"); }'
  primary = InMemoryBuffer(source)

  result = StubGenerator().run(primary, 0, InMemoryBuffer("// no enum here\n"))

  assert not result.success
  assert result.error_kind == "EnumTargetNotFound"
  assert result.state == GenerationState.PRIMARY_EDITED
  assert result.primary_modified
  assert primary.text == "fn foo(&self) { simple!(self.foo()) }"


def test_config_names_are_used():
  source = 'fn foo(&self, a: u8) { unimplemented!("x"); }'
  primary = InMemoryBuffer(source)
  companion = InMemoryBuffer("pub enum Command {\n}\n")
  config = GeneratorConfig(enum_name="Command", macro_name="recorded")

  result = StubGenerator(config).run(primary, 0, companion)

  assert result.success
  assert primary.text == "fn foo(&self, a: u8) { recorded!(self.foo(a)) }"
  assert companion.text == "pub enum Command {\n    foo { a: u8 },\n}\n"


def test_run_all_converts_every_stub_in_order(recorder_source, call_source):
  primary = InMemoryBuffer(recorder_source)
  companion = InMemoryBuffer(call_source)

  results = StubGenerator().run_all(primary, companion)

  assert [r.function_name for r in results] == ["compute", "get_error", "buffer_data_untyped"]
  assert all(r.success for r in results)
  assert "unimplemented!" not in primary.text
  assert "simple!(self.get_error())" in primary.text
  assert "simple!(self.buffer_data_untyped(target, size_data, usage))" in primary.text
  assert (
    "    compute { width: u32, label: &str },\n"
    "    get_error {  },\n"
    "    buffer_data_untyped { target: GLenum, size_data: &[u8], usage: GLenum },\n"
    "}\n"
  ) in companion.text


def test_run_all_stops_on_first_failure(recorder_source):
  results = StubGenerator().run_all(InMemoryBuffer(recorder_source), InMemoryBuffer("no enum"))

  assert len(results) == 1
  assert results[0].function_name == "compute"
  assert results[0].error_kind == "EnumTargetNotFound"


def test_run_all_without_stubs():
  assert StubGenerator().run_all(InMemoryBuffer("fn f(x: u32) {}"), InMemoryBuffer("")) == []


def test_run_all_skips_commented_out_stub(call_source):
  source = '// fn old(&self) { unimplemented!("x"); }\nfn real(&self) { unimplemented!("x"); }\n'
  primary = InMemoryBuffer(source)
  companion = InMemoryBuffer(call_source)

  results = StubGenerator().run_all(primary, companion)

  assert [r.function_name for r in results] == ["real"]
  assert primary.text.startswith('// fn old(&self) { unimplemented!("x"); }\n')
  assert "simple!(self.real())" in primary.text
  assert "old {" not in companion.text
  assert "    real {  },\n" in companion.text


def test_trace_is_per_run(recorder_source, call_source):
  generator = StubGenerator()
  primary = InMemoryBuffer(recorder_source)
  companion = InMemoryBuffer(call_source)

  first = generator.run(primary, primary.text.index("fn compute"), companion)
  second = generator.run(primary, primary.text.index("unsafe fn get_error"), companion)

  assert _states(first)[0] == "header_matched"
  assert _states(second)[0] == "header_matched"
  assert len(generator.tracer) == len(first.trace_events) + len(second.trace_events)
