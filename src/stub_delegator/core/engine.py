"""
Generation Engine.

Orchestrates a single generator invocation:

1. Parse the stub declaration at the cursor (no edits on failure).
2. Replace the placeholder body in the primary buffer.
3. Insert the matching variant into the companion enum and save it.

Every state change is recorded in a ``TraceLogger`` and the outcome is
returned as a ``GenerationResult`` rather than raised, so callers (CLI,
editor glue, batch mode) can report failures uniformly.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from stub_delegator.config import GeneratorConfig
from stub_delegator.core.buffers import SecondaryFile, TextBuffer
from stub_delegator.core.errors import ParseError, StubDelegatorError, UnexpectedBody
from stub_delegator.core.rewriter import rewrite
from stub_delegator.core.scanner import find_stubs
from stub_delegator.core.signature import parse_signature
from stub_delegator.core.tracer import TraceLogger
from stub_delegator.enums import GenerationState

logger = logging.getLogger(__name__)


class GenerationResult(BaseModel):
  """
  Outcome of one generator invocation.
  """

  success: bool = Field(default=True, description="True if both edits were applied and the companion saved.")
  state: GenerationState = Field(default=GenerationState.IDLE, description="Last state reached.")
  function_name: Optional[str] = Field(default=None, description="Name of the parsed method, if the header matched.")
  call_text: Optional[str] = Field(default=None, description="Generated delegating call.")
  variant_text: Optional[str] = Field(default=None, description="Generated enum variant line.")
  errors: List[str] = Field(default_factory=list, description="Error messages encountered.")
  error_kind: Optional[str] = Field(default=None, description="Exception class name of the failure.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def has_errors(self) -> bool:
    return len(self.errors) > 0

  @property
  def primary_modified(self) -> bool:
    """True once the placeholder has been replaced, even if a later step failed."""
    return self.state not in (
      GenerationState.IDLE,
      GenerationState.HEADER_MATCHED,
      GenerationState.BODY_VALIDATED,
      GenerationState.ABORTED,
    )


class StubGenerator:
  """
  Runs the parse-then-rewrite pipeline against injected buffers.
  """

  def __init__(self, config: Optional[GeneratorConfig] = None, tracer: Optional[TraceLogger] = None) -> None:
    self.config = config or GeneratorConfig()
    self.tracer = tracer or TraceLogger()

  def run(self, primary: TextBuffer, position: int, secondary: SecondaryFile) -> GenerationResult:
    """
    Generates the delegating body and enum variant for the stub at ``position``.

    Args:
        primary: Buffer containing the stub declaration.
        position: Offset where the declaration starts.
        secondary: Companion file holding the target enum.

    Returns:
        GenerationResult: Final state, generated texts, and any error.
    """
    first_event = len(self.tracer)
    self.tracer.reset_state()
    result = GenerationResult()

    try:
      parsed = parse_signature(primary.text, position)
    except ParseError as e:
      if isinstance(e, UnexpectedBody):
        self.tracer.transition(GenerationState.HEADER_MATCHED)
      self.tracer.log_failure(e)
      self.tracer.transition(GenerationState.ABORTED, type(e).__name__)
      logger.debug("Parse failed at %d: %s", position, e)
      return self._failed(result, e, first_event)

    signature = parsed.signature
    result.function_name = signature.name
    self.tracer.transition(GenerationState.HEADER_MATCHED, signature.name)
    self.tracer.transition(
      GenerationState.BODY_VALIDATED,
      f"{len(signature.arguments)} argument(s)",
    )

    stub_text = parsed.stub_span.slice(primary.text)

    try:
      outcome = rewrite(
        parsed,
        primary,
        secondary,
        macro_name=self.config.macro_name,
        enum_name=self.config.enum_name,
        observer=self.tracer.transition,
      )
    except StubDelegatorError as e:
      self.tracer.log_failure(e)
      logger.debug("Rewrite of '%s' stopped in state %s: %s", signature.name, self.tracer.state.value, e)
      return self._failed(result, e, first_event)

    self.tracer.log_edit(
      "primary",
      outcome.primary_region.start,
      outcome.primary_region.end,
      stub_text,
      outcome.call_text,
    )
    self.tracer.log_edit(
      "secondary",
      outcome.secondary_region.start,
      outcome.secondary_region.end,
      "",
      outcome.variant_text,
    )

    result.call_text = outcome.call_text
    result.variant_text = outcome.variant_text
    result.state = self.tracer.state
    result.trace_events = self.tracer.export(first_event)
    logger.debug("Generated '%s' with %d argument(s)", signature.name, len(signature.arguments))
    return result

  def run_all(self, primary: TextBuffer, secondary: SecondaryFile) -> List[GenerationResult]:
    """
    Applies ``run`` to every stub in the primary buffer, in source order.

    Processing stops at the first failing stub; its result is the last entry.

    Returns:
        List[GenerationResult]: One result per attempted stub.
    """
    results: List[GenerationResult] = []
    while True:
      stubs = find_stubs(primary.text)
      if not stubs:
        break
      result = self.run(primary, stubs[0].position, secondary)
      results.append(result)
      if not result.success:
        break
    return results

  def _failed(self, result: GenerationResult, error: Exception, first_event: int) -> GenerationResult:
    result.success = False
    result.state = self.tracer.state
    result.errors.append(str(error))
    result.error_kind = type(error).__name__
    result.trace_events = self.tracer.export(first_event)
    return result
