"""
Tests for the Console and Logging Utilities.
"""

from pathlib import Path

from hookgen.compiler.model import SourcePosition
from hookgen.core.diagnostics import Diagnostic, Severity
from hookgen.utils.console import get_console, log_diagnostic, log_success, log_warning


def test_logging_routes_to_recorded_console(recorded_console):
  log_success("done")
  log_warning("careful")

  text = recorded_console.export_text()
  assert "done" in text
  assert "careful" in text
  assert get_console() is recorded_console


def test_log_diagnostic_includes_path_and_position(recorded_console):
  diag = Diagnostic.at(Severity.WARNING, "Property 'x' has no type annotation", SourcePosition(3, 5))
  log_diagnostic(diag, Path("Sources/Model.swift"))

  text = recorded_console.export_text()
  assert "Sources/Model.swift:3:5: warning: Property 'x' has no type annotation" in text


def test_log_diagnostic_escapes_markup(recorded_console):
  log_diagnostic(Diagnostic.at(Severity.ERROR, "bad [bold]type[/bold]"))
  assert "error: bad [bold]type[/bold]" in recorded_console.export_text()
