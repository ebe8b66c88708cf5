"""
Main Entry Point for stub-delegator CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `stub_delegator.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from stub_delegator.cli import commands
from stub_delegator.utils.console import set_verbose
from stub_delegator import __version__


def _add_override_flags(cmd: argparse.ArgumentParser) -> None:
  cmd.add_argument(
    "--companion",
    type=Path,
    default=None,
    help="File holding the target enum (default: 'call.rs' next to the input, or from toml)",
  )
  cmd.add_argument("--enum", dest="enum_name", default=None, help="Target enum name (default: Call)")
  cmd.add_argument("--macro", dest="macro_name", default=None, help="Delegation macro name (default: simple)")
  cmd.add_argument("--dry-run", action="store_true", help="Print diffs without writing to disk")


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="stub-delegator: Recorder stub generator")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: GENERATE ---
  cmd_gen = subparsers.add_parser("generate", help="Convert the stub method at a cursor position")
  cmd_gen.add_argument("path", type=Path, help="Rust source file containing the stub")
  cursor = cmd_gen.add_mutually_exclusive_group(required=True)
  cursor.add_argument("--line", type=int, help="1-based line of the declaration")
  cursor.add_argument("--offset", type=int, help="Character offset of the declaration")
  cmd_gen.add_argument("--column", type=int, default=None, help="1-based column (default: first non-blank)")
  cmd_gen.add_argument(
    "--json-trace", type=Path, default=None, help="Dump full execution trace (state changes, edits) to a JSON file."
  )
  _add_override_flags(cmd_gen)

  # --- Command: GENERATE-ALL ---
  cmd_all = subparsers.add_parser("generate-all", help="Convert every stub method in a file")
  cmd_all.add_argument("path", type=Path, help="Rust source file containing the stubs")
  _add_override_flags(cmd_all)

  # --- Command: SCAN ---
  cmd_scan = subparsers.add_parser("scan", help="List methods and their stub status")
  cmd_scan.add_argument("path", type=Path, help="Rust source file to inspect")

  args = parser.parse_args(argv)
  set_verbose(args.verbose)

  if args.command == "generate":
    if args.column is not None and args.line is None:
      parser.error("--column requires --line")
    return commands.handle_generate(
      args.path,
      args.line,
      args.column,
      args.offset,
      args.companion,
      args.dry_run,
      args.json_trace,
      args.enum_name,
      args.macro_name,
    )

  elif args.command == "generate-all":
    return commands.handle_generate_all(args.path, args.companion, args.dry_run, args.enum_name, args.macro_name)

  elif args.command == "scan":
    return commands.handle_scan(args.path)

  return 0


if __name__ == "__main__":
  sys.exit(main())
