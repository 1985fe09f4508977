"""
Expansion Engine.

Drives macro expansion for a whole Swift source file:

1. Parse the file with the Swift frontend.
2. Walk type declarations (descending into member blocks) and collect every
   attribute with a registered macro. Nested types are addressed by their
   qualified name, e.g. ``Outer.Inner``.
3. Lower each annotated declaration and run its macro with a fresh
   `ExpansionContext`. A failing expansion records its diagnostics and the
   remaining expansions still run.
4. Remove the consumed attributes from the source and append the generated
   extensions after the original text, each separated by a blank line.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from pydantic import BaseModel, Field

from hookgen.compiler.frontends.swift import (
  Attribute as AttributeNode,
  DeclarationLowerer,
  DeclNode,
  SwiftParser,
  SwiftSyntaxError,
  TypeDecl,
)
from hookgen.compiler.model import Attribute, SourcePosition, TypeDeclaration
from hookgen.config import RuntimeConfig
from hookgen.core.diagnostics import Diagnostic, ExpansionContext, ExpansionError, Severity
from hookgen.core.macros import get_macro

logger = logging.getLogger(__name__)


class ExpansionRecord(BaseModel):
  """
  Outcome of one macro invocation.
  """

  macro: str = Field(..., description="Attribute name of the macro.")
  type_name: str = Field(..., description="Qualified name of the annotated type.")
  line: Optional[int] = Field(None, description="Line of the attribute.")
  success: bool = Field(True, description="False if the expansion raised.")
  extensions: List[str] = Field(default_factory=list, description="Generated declarations.")
  diagnostics: List[Diagnostic] = Field(default_factory=list)


class ExpansionResult(BaseModel):
  """
  Outcome of expanding one source file.
  """

  code: str = Field("", description="Expanded source. Empty if the input did not parse.")
  expansions: List[ExpansionRecord] = Field(default_factory=list)
  diagnostics: List[Diagnostic] = Field(default_factory=list, description="All diagnostics in order.")

  @property
  def success(self) -> bool:
    return not self.errors

  @property
  def errors(self) -> List[Diagnostic]:
    return [d for d in self.diagnostics if d.severity == Severity.ERROR]

  @property
  def warnings(self) -> List[Diagnostic]:
    return [d for d in self.diagnostics if d.severity == Severity.WARNING]


@dataclass
class AnnotatedType:
  """A type declaration carrying a registered macro attribute."""

  node: TypeDecl
  qualified_name: str
  attribute: AttributeNode


def find_annotated_types(nodes: List[DeclNode], outer: Optional[str] = None) -> Iterator[AnnotatedType]:
  for node in nodes:
    if not isinstance(node, TypeDecl):
      continue
    qualified = f"{outer}.{node.name}" if outer else node.name
    for attribute in node.attributes:
      if get_macro(attribute.name) is not None:
        yield AnnotatedType(node, qualified, attribute)
    yield from find_annotated_types(node.members, qualified)


def _attribute_span(code: str, attribute: AttributeNode) -> Tuple[int, int]:
  """
  Source range to delete for a consumed attribute.

  The whole line goes when the attribute stands alone on it, otherwise the
  attribute and the blanks following it.
  """
  line_start = code.rfind("\n", 0, attribute.start) + 1
  line_end = code.find("\n", attribute.end)
  if line_end == -1:
    line_end = len(code)

  if not code[line_start : attribute.start].strip() and not code[attribute.end : line_end].strip():
    return line_start, min(line_end + 1, len(code))

  end = attribute.end
  while end < len(code) and code[end] in " \t":
    end += 1
  return attribute.start, end


def strip_attributes(code: str, attributes: List[AttributeNode]) -> str:
  """
  Removes attributes from the source text.

  Args:
      code: The original source.
      attributes: Parsed attributes carrying source offsets.

  Returns:
      str: The source without the attributes.
  """
  for attribute in sorted(attributes, key=lambda a: a.start, reverse=True):
    start, end = _attribute_span(code, attribute)
    code = code[:start] + code[end:]
  return code


class ExpansionEngine:
  """
  Expands every registered macro attribute in a Swift source file.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None) -> None:
    self.config = config or RuntimeConfig()
    self.lowerer = DeclarationLowerer()

  def run(self, code: str) -> ExpansionResult:
    """
    Expands a source file.

    Args:
        code: Swift source text.

    Returns:
        ExpansionResult: The expanded code with all diagnostics. If the input
        does not parse, the result has a single error and no code.
    """
    try:
      nodes = SwiftParser(code).parse()
    except SwiftSyntaxError as e:
      logger.debug("Parse failure: %s", e)
      diag = Diagnostic(severity=Severity.ERROR, message=e.message, line=e.line, column=e.column)
      return ExpansionResult(diagnostics=[diag])

    result = ExpansionResult()
    consumed: List[AttributeNode] = []
    extensions: List[str] = []

    for annotated in find_annotated_types(nodes):
      consumed.append(annotated.attribute)
      declaration = self.lowerer.lower(annotated.node, annotated.qualified_name)
      record = self._expand(annotated.attribute, declaration)
      result.expansions.append(record)
      result.diagnostics.extend(record.diagnostics)
      extensions.extend(record.extensions)

    if not consumed:
      result.code = code
      return result

    body = strip_attributes(code, consumed)
    trailing = "\n" if code.endswith("\n") else ""
    result.code = body.rstrip("\n") + "".join(f"\n\n{ext}" for ext in extensions) + trailing
    return result

  def expand_declaration(self, declaration: TypeDeclaration, macro_name: str = "Testable") -> ExpansionRecord:
    """
    Runs one macro on a declaration that did not come from Swift text.

    Args:
        declaration: The language-neutral declaration.
        macro_name: Registered attribute name.

    Returns:
        ExpansionRecord: The generated extensions and diagnostics.

    Raises:
        KeyError: If no macro is registered under `macro_name`.
    """
    if get_macro(macro_name) is None:
      raise KeyError(f"No macro registered for @{macro_name}")
    attribute = next((a for a in declaration.attributes if a.name == macro_name), None)
    if attribute is None:
      attribute = Attribute(macro_name, declaration.position)
    return self._run_macro(attribute, declaration)

  def _expand(self, node: AttributeNode, declaration: TypeDeclaration) -> ExpansionRecord:
    attribute = Attribute(node.name, SourcePosition(node.line, node.column))
    return self._run_macro(attribute, declaration)

  def _run_macro(self, attribute: Attribute, declaration: TypeDeclaration) -> ExpansionRecord:
    macro = get_macro(attribute.name)
    context = ExpansionContext(self.config)
    record = ExpansionRecord(
      macro=attribute.name,
      type_name=declaration.name,
      line=attribute.position.line if attribute.position else None,
    )

    try:
      record.extensions = macro.expansion(attribute, declaration, declaration.name, [], context)
    except ExpansionError as e:
      logger.debug("@%s on %s failed: %s", attribute.name, declaration.name, e)
      record.success = False
      if e.diagnostic not in context.diagnostics:
        context.diagnostics.append(e.diagnostic)

    record.diagnostics = list(context.diagnostics)
    return record


def expand_declaration(declaration: TypeDeclaration, config: Optional[RuntimeConfig] = None) -> ExpansionRecord:
  """
  Expands ``@Testable`` for a language-neutral declaration.

  Args:
      declaration: The type and its members (e.g. loaded from JSON).
      config: Runtime options. Defaults to `RuntimeConfig()`.

  Returns:
      ExpansionRecord: The result of the single expansion.
  """
  return ExpansionEngine(config).expand_declaration(declaration)
