"""
Inspect Command Handler.

Prints one table per annotated type, listing every member with the bucket it
is classified into (or the reason it is skipped).
"""

from pathlib import Path
from typing import Any, Dict, List

from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from hookgen.cli.handlers.expand import JSON_SUFFIX, load_runtime_config
from hookgen.compiler.frontends.swift import DeclarationLowerer, SwiftParser, SwiftSyntaxError
from hookgen.compiler.model import ClassificationResult, TypeDeclaration
from hookgen.compiler.schema import load_declaration
from hookgen.config import RuntimeConfig
from hookgen.core.engine import find_annotated_types
from hookgen.core.scanner import DeclarationScanner, matcher_from_config
from hookgen.utils.console import console, log_error, log_info


def handle_inspect(input_path: Path, settings: Dict[str, Any]) -> int:
  """
  Handles the 'inspect' command.

  Args:
      input_path: The ``.swift`` or ``.json`` file.
      settings: ``key=value`` overrides for `RuntimeConfig`.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.is_file():
    log_error(f"Input not found: {input_path}")
    return 1

  config = load_runtime_config(input_path, None, settings)
  if config is None:
    return 1

  try:
    declarations = _load_declarations(input_path)
  except (SwiftSyntaxError, ValidationError) as e:
    log_error(f"Could not read {input_path}: {escape(str(e))}")
    return 1

  if not declarations:
    log_info(f"No annotated types found in [path]{input_path}[/path]")
    return 0

  for declaration in declarations:
    console.print(_render_classification(declaration, config))

  return 0


def _load_declarations(input_path: Path) -> List[TypeDeclaration]:
  if input_path.suffix == JSON_SUFFIX:
    return [load_declaration(input_path)]

  nodes = SwiftParser(input_path.read_text(encoding="utf-8")).parse()
  lowerer = DeclarationLowerer()
  return [lowerer.lower(t.node, t.qualified_name) for t in find_annotated_types(nodes)]


def _render_classification(declaration: TypeDeclaration, config: RuntimeConfig) -> Table:
  result = DeclarationScanner(matcher_from_config(config)).scan(declaration.members)

  table = Table(title=f"{declaration.kind} {declaration.name}")
  table.add_column("Member", style="cyan")
  table.add_column("Kind")
  table.add_column("Modifiers")
  table.add_column("Forwarded As", style="green")
  table.add_column("Reason", style="yellow")

  for bucket, members in _buckets(result):
    for member in members:
      table.add_row(member.name, member.kind, " ".join(member.modifiers), bucket, "")

  for skipped in result.skipped:
    member = skipped.member
    table.add_row(member.name or "-", member.kind, " ".join(member.modifiers), "-", skipped.reason)

  return table


def _buckets(result: ClassificationResult):
  return [
    ("instance property", result.instance_properties),
    ("instance function", result.instance_functions),
    ("static property", result.static_properties),
    ("static function", result.static_functions),
  ]
