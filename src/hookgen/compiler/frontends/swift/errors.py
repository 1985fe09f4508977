"""
Frontend Errors.
"""

from typing import Optional


class SwiftSyntaxError(SyntaxError):
  """
  Raised when Swift source text cannot be tokenized or parsed.

  Attributes:
      line: 1-based line of the offending token, if known.
      column: 1-based column of the offending token, if known.
  """

  def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
    self.message = message
    self.line = line
    self.column = column
    location = f" at line {line}, col {column}" if line is not None else ""
    super().__init__(f"{message}{location}")
