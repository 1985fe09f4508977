"""
Diagnostics and Expansion Context.

Every expansion gets a fresh `ExpansionContext` that collects the diagnostics
it raises. Diagnostics are always tied to a source position when one is known
(the member, or the ``@Testable`` attribute for whole-expansion failures).
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from hookgen.compiler.model import SourcePosition
from hookgen.config import RuntimeConfig


class Severity(str, Enum):
  """Diagnostic severity levels."""

  ERROR = "error"
  WARNING = "warning"
  NOTE = "note"


class Diagnostic(BaseModel):
  """
  A compiler-style message.
  """

  severity: Severity = Field(..., description="How serious the message is.")
  message: str = Field(..., description="Human readable text.")
  line: Optional[int] = Field(None, description="1-based line in the input.")
  column: Optional[int] = Field(None, description="1-based column in the input.")

  @classmethod
  def at(cls, severity: Severity, message: str, position: Optional[SourcePosition] = None) -> "Diagnostic":
    if position is None:
      return cls(severity=severity, message=message)
    return cls(severity=severity, message=message, line=position.line, column=position.column)

  def __str__(self) -> str:
    if self.line is not None:
      return f"{self.line}:{self.column}: {self.severity.value}: {self.message}"
    return f"{self.severity.value}: {self.message}"


class ExpansionError(Exception):
  """
  Fatal failure of a single expansion. No output is produced for it.
  """

  def __init__(self, diagnostic: Diagnostic) -> None:
    self.diagnostic = diagnostic
    super().__init__(str(diagnostic))


class ExpansionContext:
  """
  Per-expansion diagnostic sink, passed to macros by the engine.

  Attributes:
      config: Active runtime configuration.
      diagnostics: Messages raised so far, in order.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None) -> None:
    self.config = config or RuntimeConfig()
    self.diagnostics: List[Diagnostic] = []

  def diagnose(self, severity: Severity, message: str, position: Optional[SourcePosition] = None) -> Diagnostic:
    """
    Records a diagnostic. In strict mode warnings are promoted to errors.

    Returns:
        Diagnostic: The recorded message.
    """
    if severity == Severity.WARNING and self.config.strict_mode:
      severity = Severity.ERROR
    diagnostic = Diagnostic.at(severity, message, position)
    self.diagnostics.append(diagnostic)
    return diagnostic

  def error(self, message: str, position: Optional[SourcePosition] = None) -> Diagnostic:
    return self.diagnose(Severity.ERROR, message, position)

  def warning(self, message: str, position: Optional[SourcePosition] = None) -> Diagnostic:
    return self.diagnose(Severity.WARNING, message, position)

  def note(self, message: str, position: Optional[SourcePosition] = None) -> Diagnostic:
    return self.diagnose(Severity.NOTE, message, position)

  @property
  def has_errors(self) -> bool:
    return any(d.severity == Severity.ERROR for d in self.diagnostics)
