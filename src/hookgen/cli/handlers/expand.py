"""
Expand Command Handler.

This module implements the logic for the `hookgen expand` command:
1. Configuration loading (``[tool.hookgen]`` plus CLI overrides).
2. Expansion of a Swift file, or of a JSON declaration.
3. Diagnostic reporting and output writing.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from rich.markup import escape

from hookgen.compiler.schema import load_declaration
from hookgen.config import RuntimeConfig
from hookgen.core.diagnostics import Diagnostic, Severity
from hookgen.core.engine import ExpansionEngine
from hookgen.utils.console import log_diagnostic, log_error, log_info, log_success

JSON_SUFFIX = ".json"


def load_runtime_config(
  input_path: Path,
  strict: Optional[bool],
  settings: Dict[str, Any],
) -> Optional[RuntimeConfig]:
  """
  Resolves the configuration for an input file, logging validation failures.

  Returns:
      The configuration, or None if it is invalid.
  """
  try:
    return RuntimeConfig.load(strict_mode=strict, overrides=settings, search_path=input_path.parent)
  except ValidationError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return None


def handle_expand(
  input_path: Path,
  output_path: Optional[Path],
  strict: Optional[bool],
  settings: Dict[str, Any],
) -> int:
  """
  Handles the 'expand' command execution.

  Swift input is expanded in place (attributes removed, extensions appended).
  JSON input produces the generated extension only.

  Args:
      input_path: The ``.swift`` or ``.json`` file.
      output_path: Where to write the result. Printed to stdout if omitted.
      strict: If True, warnings fail the expansion.
      settings: ``key=value`` overrides for `RuntimeConfig`.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.is_file():
    log_error(f"Input not found: {input_path}")
    return 1

  config = load_runtime_config(input_path, strict, settings)
  if config is None:
    return 1

  if input_path.suffix == JSON_SUFFIX:
    try:
      declaration = load_declaration(input_path)
    except ValidationError as e:
      log_error(f"Invalid declaration in {input_path}: {escape(str(e))}")
      return 1
    record = ExpansionEngine(config).expand_declaration(declaration)
    code = "\n\n".join(record.extensions)
    if code:
      code += "\n"
    diagnostics = record.diagnostics
    expanded = 1 if record.success else 0
  else:
    source = input_path.read_text(encoding="utf-8")
    result = ExpansionEngine(config).run(source)
    code = result.code
    diagnostics = result.diagnostics
    expanded = sum(1 for r in result.expansions if r.success)
    if not result.expansions and result.success:
      log_info(f"No annotated types found in [path]{input_path}[/path]")

  for diag in diagnostics:
    log_diagnostic(diag, input_path)

  if _has_errors(diagnostics):
    log_error(f"Expansion failed for {input_path}")
    return 1

  if output_path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(code, encoding="utf-8")
    log_success(f"Expanded {expanded} type(s): [path]{input_path}[/path] -> [path]{output_path}[/path]")
  else:
    print(code, end="")

  return 0


def _has_errors(diagnostics: List[Diagnostic]) -> bool:
  return any(d.severity == Severity.ERROR for d in diagnostics)
