"""
Declaration Model.

This module defines the language-neutral data structures describing an
annotated type and its members after ingestion from source code (e.g. Swift
text via the frontend) or explicit definition (e.g. JSON via the schema).

It acts as the contract between the Frontend (Ingestion) and the Core
(Classification and Synthesis). None of the core passes depend on parser
node types.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

WILDCARD_LABEL = "_"
"""Marker used in place of an external parameter label when callers pass no label."""


@dataclass(frozen=True)
class SourcePosition:
  """
  Location of a declaration in the original source (1-based).
  """

  line: int
  column: int


@dataclass
class Attribute:
  """
  An attribute attached to a type declaration (e.g. the ``@Testable`` marker).
  """

  name: str
  position: Optional[SourcePosition] = None


@dataclass
class Parameter:
  """
  A single function parameter.

  Attributes:
      label: The external label used by callers (``_`` for none).
      name: The internal name used in the body. Defaults to ``label``.
      type_annotation: The declared type text, verbatim.
  """

  label: str
  name: Optional[str] = None
  type_annotation: str = ""

  def __post_init__(self) -> None:
    if not self.name:
      self.name = self.label

  @property
  def is_unlabeled(self) -> bool:
    return self.label == WILDCARD_LABEL

  @property
  def is_inout(self) -> bool:
    return self.type_annotation.split(" ", 1)[0] == "inout"


@dataclass
class Property:
  """
  A stored or computed property.

  Attributes:
      name: Property identifier.
      type_annotation: Declared type text, or None when the declaration relied on inference.
      has_setter: True for mutable stored variables or when a setter block is written.
      modifiers: Modifier names in declaration order (e.g. ``["private", "static"]``).
      initializer: Raw initializer expression text, if any.
      position: Location of the declaration.
  """

  name: str
  type_annotation: Optional[str] = None
  has_setter: bool = False
  modifiers: List[str] = field(default_factory=list)
  initializer: Optional[str] = None
  position: Optional[SourcePosition] = None

  kind = "property"


@dataclass
class Function:
  """
  A method declaration.

  Attributes:
      name: Function identifier.
      parameters: Ordered parameters.
      return_type: Declared return type text, ``""`` when there is none.
      modifiers: Modifier names in declaration order.
      is_async: True if declared ``async``.
      is_throwing: True if declared ``throws`` or ``rethrows``.
      position: Location of the declaration.
  """

  name: str
  parameters: List[Parameter] = field(default_factory=list)
  return_type: str = ""
  modifiers: List[str] = field(default_factory=list)
  is_async: bool = False
  is_throwing: bool = False
  position: Optional[SourcePosition] = None

  kind = "function"


@dataclass
class UnsupportedMember:
  """
  A member the generator does not forward (initializers, subscripts, nested types, ...).

  Attributes:
      kind: Human readable declaration kind (e.g. "subscript").
      name: Identifier if the declaration has one.
      modifiers: Modifier names in declaration order.
      reason: Why the member cannot be forwarded.
      position: Location of the declaration.
  """

  kind: str
  name: str = ""
  modifiers: List[str] = field(default_factory=list)
  reason: str = "unsupported declaration kind"
  position: Optional[SourcePosition] = None


Member = Union[Property, Function, UnsupportedMember]


@dataclass
class TypeDeclaration:
  """
  The annotated nominal type.

  Attributes:
      name: The (possibly qualified) type name used as extension target.
      kind: Declaration keyword (``class``, ``struct``, ``enum``, ...).
      members: Ordered member list.
      attributes: Attributes attached to the declaration.
      position: Location of the declaration.
  """

  name: str
  kind: str = "class"
  members: List[Member] = field(default_factory=list)
  attributes: List[Attribute] = field(default_factory=list)
  position: Optional[SourcePosition] = None


@dataclass
class SkippedMember:
  """
  Record of a member excluded during classification.

  Attributes:
      member: The excluded member.
      reason: Why it was excluded.
      qualifying: True if the member carried a qualifying visibility modifier,
          i.e. it would have been forwarded had its kind been supported.
  """

  member: Member
  reason: str
  qualifying: bool = False


@dataclass
class ClassificationResult:
  """
  Members selected for forwarding, bucketed by static-ness and kind.

  Each list preserves the original declaration order.
  """

  instance_properties: List[Property] = field(default_factory=list)
  instance_functions: List[Function] = field(default_factory=list)
  static_properties: List[Property] = field(default_factory=list)
  static_functions: List[Function] = field(default_factory=list)
  skipped: List[SkippedMember] = field(default_factory=list)

  @property
  def total(self) -> int:
    return (
      len(self.instance_properties)
      + len(self.instance_functions)
      + len(self.static_properties)
      + len(self.static_functions)
    )
