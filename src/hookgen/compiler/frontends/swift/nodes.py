"""
Swift Declaration Syntax Nodes.

Defines the data structures produced by `SwiftParser`. The tree is shallow:
declarations keep their names, modifiers, attributes and the verbatim text of
types, while statement bodies are skipped.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Attribute:
  """
  An attribute such as ``@Testable`` or ``@available(iOS 15, *)``.

  Attributes:
      name: Identifier without the leading ``@``.
      line: 1-based line of the ``@`` token.
      column: 1-based column of the ``@`` token.
      start: Source offset of the ``@`` token.
      end: Source offset just past the attribute (including arguments).
  """

  name: str
  line: int
  column: int
  start: int
  end: int

  def __str__(self) -> str:
    return f"@{self.name}"


@dataclass
class Modifier:
  """
  A declaration modifier, e.g. ``private``, ``static`` or ``private(set)``.
  """

  name: str
  detail: Optional[str] = None

  def __str__(self) -> str:
    if self.detail:
      return f"{self.name}({self.detail})"
    return self.name


@dataclass
class DeclNode:
  """Base class for all declarations."""

  attributes: List[Attribute] = field(default_factory=list)
  modifiers: List[Modifier] = field(default_factory=list)
  line: int = 0
  column: int = 0

  @property
  def modifier_names(self) -> List[str]:
    return [m.name for m in self.modifiers]


@dataclass
class TypeDecl(DeclNode):
  """
  A declaration group: ``class``, ``struct``, ``enum``, ``actor``, ``protocol`` or ``extension``.
  """

  keyword: str = "class"
  name: str = ""
  generic_clause: Optional[str] = None
  inheritance: List[str] = field(default_factory=list)
  members: List[DeclNode] = field(default_factory=list)


@dataclass
class Binding:
  """
  One pattern binding of a ``var``/``let`` declaration.

  Attributes:
      name: Identifier, or the raw pattern text for tuple patterns.
      type_annotation: Verbatim type text after ``:``.
      initializer: Verbatim expression text after ``=``.
      accessors: Accessor kinds of the attached block (``["get"]`` for an
          implicit getter), or None when no block is written.
      is_pattern: True for destructuring patterns like ``(a, b)``.
  """

  name: str
  type_annotation: Optional[str] = None
  initializer: Optional[str] = None
  accessors: Optional[List[str]] = None
  is_pattern: bool = False


@dataclass
class VariableDecl(DeclNode):
  """A ``var`` or ``let`` declaration with one or more bindings."""

  keyword: str = "var"
  bindings: List[Binding] = field(default_factory=list)


@dataclass
class ParameterNode:
  """
  A parameter in a function signature.

  Attributes:
      first_name: External label (``_`` for none).
      second_name: Internal name when written separately.
      type_annotation: Verbatim type text.
      default: Verbatim default value expression.
  """

  first_name: str
  second_name: Optional[str] = None
  type_annotation: str = ""
  default: Optional[str] = None

  @property
  def is_variadic(self) -> bool:
    return self.type_annotation.endswith("...")


@dataclass
class FunctionDecl(DeclNode):
  """A ``func`` declaration."""

  name: str = ""
  generic_clause: Optional[str] = None
  parameters: List[ParameterNode] = field(default_factory=list)
  effects: List[str] = field(default_factory=list)
  return_type: Optional[str] = None
  has_body: bool = False
  is_operator: bool = False


@dataclass
class IfConfigClause:
  """One ``#if``/``#elseif``/``#else`` arm."""

  directive: str
  condition: str = ""
  members: List[DeclNode] = field(default_factory=list)


@dataclass
class IfConfigDecl(DeclNode):
  """A conditional compilation block."""

  clauses: List[IfConfigClause] = field(default_factory=list)


@dataclass
class OtherDecl(DeclNode):
  """
  Any declaration whose internals are not modelled
  (``init``, ``deinit``, ``subscript``, ``typealias``, ``case``, ``import``, ...).
  """

  keyword: str = ""
  name: str = ""
