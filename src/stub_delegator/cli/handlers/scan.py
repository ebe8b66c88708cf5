"""
Scan Command Handler.

Lists the ``&self`` methods of a file and whether each one is still a
placeholder stub.
"""

from pathlib import Path

from rich.table import Table

from stub_delegator.core.scanner import scan_stubs
from stub_delegator.enums import StubStatus
from stub_delegator.utils.console import console, log_error, log_info


def handle_scan(input_path: Path) -> int:
  """
  Handles the 'scan' command execution.

  Args:
      input_path: Rust file to inspect.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  try:
    text = input_path.read_text(encoding="utf-8")
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Could not read {input_path}: {e}")
    return 1

  candidates = scan_stubs(text)
  if not candidates:
    log_info(f"No methods found in [path]{input_path}[/path]")
    return 0

  table = Table(title=f"Methods in {input_path.name}")
  table.add_column("Line", justify="right")
  table.add_column("Method", style="cyan")
  table.add_column("Args", justify="right")
  table.add_column("Status", justify="center")

  for c in candidates:
    args = str(c.argument_count) if c.argument_count is not None else "-"
    status = "🧩 Stub" if c.status == StubStatus.STUB else "Implemented"
    table.add_row(str(c.line), c.name, args, status)

  console.print(table)
  stubs = sum(1 for c in candidates if c.status == StubStatus.STUB)
  console.print(f"\n[bold]Summary:[/bold] {stubs} stub(s), {len(candidates) - stubs} implemented.")
  return 0
