"""
stub-delegator Package.

Turns placeholder methods of a Rust GL recorder into recorded, delegating
calls. For a stub such as::

    fn compute(&self, width: u32, label: &str) {
        unimplemented!("todo");
    }

the body becomes ``simple!(self.compute(width, label))`` and the companion
``call.rs`` gains ``compute { width: u32, label: &str },`` inside
``pub enum Call``.

Usage
-----

Simple String Conversion
^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import stub_delegator as sd
    new_src, new_calls = sd.generate(src, src.index("fn compute"), calls)

Buffer-based Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from pathlib import Path
    from stub_delegator import StubGenerator, FileBuffer, InMemoryBuffer

    primary = InMemoryBuffer(src)
    companion = FileBuffer(Path("src/call.rs"))
    res = StubGenerator().run(primary, position, companion)

    if not res.success:
        print(f"Errors: {res.errors}")
"""

from typing import Optional, Tuple

from stub_delegator.config import GeneratorConfig
from stub_delegator.core.buffers import FileBuffer, InMemoryBuffer, SecondaryFile, TextBuffer
from stub_delegator.core.engine import GenerationResult, StubGenerator
from stub_delegator.core.errors import (
  EnumTargetNotFound,
  NotAFunctionHeader,
  ParseError,
  PersistFailed,
  RewriteError,
  StubDelegatorError,
  UnexpectedBody,
)
from stub_delegator.core.rewriter import rewrite
from stub_delegator.core.signature import Argument, FunctionSignature, ParsedStub, SourceRegion, parse_signature

__version__ = "0.1.0"


def generate(
  text: str,
  position: int,
  companion_text: str,
  config: Optional[GeneratorConfig] = None,
) -> Tuple[str, str]:
  """
  Runs the generator on in-memory texts.

  Args:
      text: Source containing the stub.
      position: Offset where the stub declaration starts.
      companion_text: Source containing the target enum.
      config: Optional settings (enum and macro names).

  Returns:
      Tuple[str, str]: The rewritten source and the rewritten companion.

  Raises:
      StubDelegatorError: The specific parse or rewrite failure.
  """
  cfg = config or GeneratorConfig()
  parsed = parse_signature(text, position)
  primary = InMemoryBuffer(text)
  companion = InMemoryBuffer(companion_text)
  rewrite(parsed, primary, companion, macro_name=cfg.macro_name, enum_name=cfg.enum_name)
  return primary.text, companion.text


__all__ = [
  "Argument",
  "EnumTargetNotFound",
  "FileBuffer",
  "FunctionSignature",
  "GenerationResult",
  "GeneratorConfig",
  "InMemoryBuffer",
  "NotAFunctionHeader",
  "ParseError",
  "ParsedStub",
  "PersistFailed",
  "RewriteError",
  "SecondaryFile",
  "SourceRegion",
  "StubDelegatorError",
  "StubGenerator",
  "TextBuffer",
  "UnexpectedBody",
  "generate",
  "parse_signature",
  "rewrite",
  "__version__",
]
