"""
Generate Command Handlers.

Implements ``stub-delegator generate`` (one stub at a cursor position) and
``stub-delegator generate-all`` (every stub in a file). They orchestrate:
1. Configuration loading (pyproject.toml + CLI overrides).
2. Cursor resolution from ``--line/--column`` or ``--offset``.
3. The generation engine.
4. Output writing, dry-run diffs and trace dumps.
"""

import json
from pathlib import Path
from typing import List, Optional, Tuple

from rich.table import Table

from stub_delegator.config import GeneratorConfig
from stub_delegator.core.buffers import FileBuffer, InMemoryBuffer
from stub_delegator.core.engine import GenerationResult, StubGenerator
from stub_delegator.core.positions import offset_from_line
from stub_delegator.utils.console import console, log_error, log_info, log_success, log_warning
from stub_delegator.utils.text_diff import render_diff, unified_diff


def handle_generate(
  input_path: Path,
  line: Optional[int],
  column: Optional[int],
  offset: Optional[int],
  companion: Optional[Path],
  dry_run: bool,
  json_trace_path: Optional[Path] = None,
  enum_name: Optional[str] = None,
  macro_name: Optional[str] = None,
) -> int:
  """
  Handles the 'generate' command execution.

  The companion file is saved by the engine as soon as its variant has been
  inserted. The edited source file is written afterwards, and only if the
  whole run succeeded.

  Args:
      input_path: Rust file containing the stub.
      line: 1-based line of the declaration.
      column: 1-based column of the declaration (default: first non-blank).
      offset: Character offset of the declaration (alternative to ``line``).
      companion: Explicit companion file path (default: from config).
      dry_run: If True, print diffs instead of writing.
      json_trace_path: Optional path to dump the execution trace JSON.
      enum_name: Override for the target enum.
      macro_name: Override for the delegation macro.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  setup = _prepare(input_path, companion, enum_name, macro_name)
  if setup is None:
    return 1
  config, companion_path = setup

  primary = FileBuffer(input_path)
  try:
    original = primary.text
    companion_original = companion_path.read_text(encoding="utf-8")
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Could not read input: {e}")
    return 1

  try:
    position = offset if offset is not None else offset_from_line(original, line or 1, column)
  except ValueError as e:
    log_error(str(e))
    return 1

  if not 0 <= position <= len(original):
    log_error(f"Offset {position} is outside {input_path} ({len(original)} characters).")
    return 1

  secondary = InMemoryBuffer(companion_original, name=str(companion_path)) if dry_run else FileBuffer(companion_path)
  result = StubGenerator(config).run(primary, position, secondary)

  if json_trace_path:
    _write_trace(json_trace_path, result.trace_events)

  if not result.success:
    _report_failure(input_path, result)
    return 1

  if dry_run:
    _print_diffs(input_path, original, primary.text, companion_path, companion_original, secondary.text)
    return 0

  try:
    primary.save()
  except OSError as e:
    log_error(f"Companion updated but {input_path} could not be saved: {e}")
    return 1

  log_success(f"Generated [code]{result.function_name}[/code] in [path]{input_path}[/path] and [path]{companion_path}[/path]")
  return 0


def handle_generate_all(
  input_path: Path,
  companion: Optional[Path],
  dry_run: bool,
  enum_name: Optional[str] = None,
  macro_name: Optional[str] = None,
) -> int:
  """
  Handles the 'generate-all' command execution.

  All edits are staged on in-memory copies of both files. The files are
  written (companion first) only when every stub was converted.

  Args:
      input_path: Rust file containing the stubs.
      companion: Explicit companion file path (default: from config).
      dry_run: If True, print diffs instead of writing.
      enum_name: Override for the target enum.
      macro_name: Override for the delegation macro.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  setup = _prepare(input_path, companion, enum_name, macro_name)
  if setup is None:
    return 1
  config, companion_path = setup

  try:
    original = input_path.read_text(encoding="utf-8")
    companion_original = companion_path.read_text(encoding="utf-8")
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Could not read input: {e}")
    return 1

  primary = InMemoryBuffer(original, name=str(input_path))
  secondary = InMemoryBuffer(companion_original, name=str(companion_path))
  results = StubGenerator(config).run_all(primary, secondary)

  if not results:
    log_warning(f"No stubs found in {input_path}")
    return 0

  _print_batch_summary(results)

  if not all(r.success for r in results):
    log_error("Nothing was written because at least one stub failed.")
    return 1

  if dry_run:
    _print_diffs(input_path, original, primary.text, companion_path, companion_original, secondary.text)
    return 0

  try:
    companion_path.write_text(secondary.text, encoding="utf-8")
    input_path.write_text(primary.text, encoding="utf-8")
  except OSError as e:
    log_error(f"Failed to write results: {e}")
    return 1

  log_success(f"Generated {len(results)} method(s) in [path]{input_path}[/path]")
  return 0


def _prepare(
  input_path: Path,
  companion: Optional[Path],
  enum_name: Optional[str],
  macro_name: Optional[str],
) -> Optional[Tuple[GeneratorConfig, Path]]:
  """Loads configuration and resolves the companion path, logging any problem."""
  if not input_path.is_file():
    log_error(f"Input not found: {input_path}")
    return None

  try:
    config = GeneratorConfig.load(enum_name=enum_name, macro_name=macro_name, search_path=input_path.parent)
  except ValueError as e:
    log_error(f"Invalid configuration: {e}")
    return None

  companion_path = companion or config.companion_path(input_path)
  if not companion_path.is_file():
    log_error(f"Companion file not found: {companion_path}")
    return None

  return config, companion_path


def _report_failure(input_path: Path, result: GenerationResult) -> None:
  for error in result.errors:
    log_error(f"{result.error_kind}: {error}")
  if result.primary_modified:
    log_warning(f"{input_path} was left unchanged on disk; the companion file may already be modified.")


def _write_trace(path: Path, events: List[dict]) -> None:
  try:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wt", encoding="utf-8") as f:
      json.dump(events, f, indent=2)
    log_info(f"Trace saved to [path]{path}[/path]")
  except OSError as e:
    log_error(f"Failed to write trace: {e}")


def _print_diffs(
  input_path: Path,
  before: str,
  after: str,
  companion_path: Path,
  companion_before: str,
  companion_after: str,
) -> None:
  for label, old, new in (
    (input_path.name, before, after),
    (companion_path.name, companion_before, companion_after),
  ):
    diff_text = unified_diff(old, new, label)
    if diff_text:
      console.print(render_diff(diff_text))


def _print_batch_summary(results: List[GenerationResult]) -> None:
  """
  Renders a summary table of batch results to the console.

  Args:
      results: One result per attempted stub.
  """
  table = Table(title="Generation Report")
  table.add_column("Method", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for res in results:
    status = "✅ Generated" if res.success else "❌ Failed"
    issues = "; ".join(res.errors)
    table.add_row(res.function_name or "?", status, issues)

  console.print(table)
