"""
Main Entry Point for the hookgen CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `hookgen.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from hookgen import __version__
from hookgen.cli import commands
from hookgen.config import parse_cli_key_values
from hookgen.utils.console import log_error


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="hookgen: @Testable test hook generator for Swift")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: EXPAND ---
  cmd_exp = subparsers.add_parser("expand", help="Expand @Testable types in a Swift file or JSON declaration")
  cmd_exp.add_argument("path", type=Path, help="Input .swift file or .json declaration")
  cmd_exp.add_argument("--out", type=Path, help="Output file (default: print to stdout)")
  cmd_exp.add_argument(
    "--strict",
    action="store_true",
    default=None,
    help="Treat warnings as errors (Overrides config)",
  )
  cmd_exp.add_argument(
    "--config",
    nargs="*",
    help="Configuration overrides in key=value format (e.g. modifier_matching=substring indent_width=2)",
  )

  # --- Command: INSPECT ---
  cmd_ins = subparsers.add_parser("inspect", help="Show how members of @Testable types are classified")
  cmd_ins.add_argument("path", type=Path, help="Input .swift file or .json declaration")
  cmd_ins.add_argument(
    "--config",
    nargs="*",
    help="Configuration overrides in key=value format",
  )

  args = parser.parse_args(argv)

  try:
    settings = parse_cli_key_values(args.config)
  except ValueError as e:
    log_error(str(e))
    return 2

  if args.command == "expand":
    return commands.handle_expand(args.path, args.out, args.strict, settings)

  elif args.command == "inspect":
    return commands.handle_inspect(args.path, settings)

  return 0


if __name__ == "__main__":
  sys.exit(main())
