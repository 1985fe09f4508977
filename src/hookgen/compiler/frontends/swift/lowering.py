"""
Declaration Lowering (Frontend).

Converts Swift syntax nodes produced by `SwiftParser` into the language-neutral
`TypeDeclaration` model consumed by the core passes.

Lowering rules:
- Each binding of a ``var``/``let`` becomes one `Property`. In ``var a, b: Int``
  the trailing annotation applies to the earlier binding as well.
- ``let`` is never settable. A ``var`` is settable when it is stored (no accessor
  block, or only observers) or when it writes a setter.
- Generic functions, operator functions and functions with variadic parameters
  become `UnsupportedMember`, as do tuple patterns, property-wrapped variables,
  nested types, initializers, subscripts and ``#if`` blocks.
"""

from typing import List, Optional

from hookgen.compiler.model import (
  Attribute,
  Function,
  Member,
  Parameter,
  Property,
  SourcePosition,
  TypeDeclaration,
  UnsupportedMember,
)
from hookgen.compiler.frontends.swift.nodes import (
  Binding,
  DeclNode,
  FunctionDecl,
  IfConfigDecl,
  OtherDecl,
  TypeDecl,
  VariableDecl,
)

# Attributes that start with an uppercase letter but are not property wrappers
_BUILTIN_UPPERCASE_ATTRIBUTES = {
  "MainActor",
  "IBOutlet",
  "IBInspectable",
  "IBAction",
  "IBSegueAction",
  "NSManaged",
  "NSCopying",
  "GKInspectable",
  "Sendable",
}

_SETTER_ACCESSORS = {"set", "willSet", "didSet", "_modify", "unsafeMutableAddress", "init"}


def _position(node: DeclNode) -> SourcePosition:
  return SourcePosition(node.line, node.column)


class DeclarationLowerer:
  """
  Builds a `TypeDeclaration` from a parsed `TypeDecl`.
  """

  def lower(self, node: TypeDecl, qualified_name: Optional[str] = None) -> TypeDeclaration:
    """
    Lowers a type declaration and its member list.

    Args:
        node: The parsed declaration group.
        qualified_name: Name to use for the type (e.g. ``Outer.Inner`` for nested types).
            Defaults to the declared name.

    Returns:
        TypeDeclaration: The language-neutral declaration.
    """
    members: List[Member] = []
    for member in node.members:
      members.extend(self.lower_member(member))

    return TypeDeclaration(
      name=qualified_name or node.name,
      kind=node.keyword,
      members=members,
      attributes=[Attribute(a.name, SourcePosition(a.line, a.column)) for a in node.attributes],
      position=_position(node),
    )

  def lower_member(self, node: DeclNode) -> List[Member]:
    """
    Lowers one member declaration.

    Returns:
        A list, since one ``var`` declaration may declare several properties.
    """
    if isinstance(node, VariableDecl):
      return self._lower_variable(node)
    if isinstance(node, FunctionDecl):
      return [self._lower_function(node)]
    if isinstance(node, TypeDecl):
      return [
        UnsupportedMember(
          kind=node.keyword,
          name=node.name,
          modifiers=node.modifier_names,
          reason="nested types are not supported",
          position=_position(node),
        )
      ]
    if isinstance(node, IfConfigDecl):
      return [
        UnsupportedMember(
          kind="#if",
          reason="conditionally compiled members are not forwarded",
          position=_position(node),
        )
      ]
    if isinstance(node, OtherDecl):
      return [
        UnsupportedMember(
          kind=node.keyword,
          name=node.name,
          modifiers=node.modifier_names,
          reason=f"'{node.keyword}' declarations are not supported",
          position=_position(node),
        )
      ]
    return [UnsupportedMember(kind=type(node).__name__, position=_position(node))]

  def _lower_variable(self, node: VariableDecl) -> List[Member]:
    wrappers = [a.name for a in node.attributes if a.name[:1].isupper() and a.name not in _BUILTIN_UPPERCASE_ATTRIBUTES]

    # `var a, b: Int` declares both as Int
    types: List[Optional[str]] = []
    carried: Optional[str] = None
    for binding in reversed(node.bindings):
      if binding.type_annotation:
        carried = binding.type_annotation
        types.append(carried)
      elif binding.initializer is None and binding.accessors is None:
        types.append(carried)
      else:
        carried = None
        types.append(None)
    types.reverse()

    members: List[Member] = []
    for binding, type_annotation in zip(node.bindings, types):
      if binding.is_pattern:
        members.append(
          UnsupportedMember(
            kind=node.keyword,
            name=binding.name,
            modifiers=node.modifier_names,
            reason="destructuring patterns are not supported",
            position=_position(node),
          )
        )
        continue

      if wrappers:
        members.append(
          UnsupportedMember(
            kind=node.keyword,
            name=binding.name,
            modifiers=node.modifier_names,
            reason=f"property wrapper @{wrappers[0]} is not supported",
            position=_position(node),
          )
        )
        continue

      members.append(
        Property(
          name=binding.name,
          type_annotation=type_annotation,
          has_setter=self._has_setter(node.keyword, binding),
          modifiers=node.modifier_names,
          initializer=binding.initializer,
          position=_position(node),
        )
      )
    return members

  @staticmethod
  def _has_setter(keyword: str, binding: Binding) -> bool:
    if keyword == "let":
      return False
    if binding.accessors is None:
      return True
    return any(a in _SETTER_ACCESSORS for a in binding.accessors)

  def _lower_function(self, node: FunctionDecl) -> Member:
    reason = None
    if node.is_operator:
      reason = "operator functions are not supported"
    elif node.generic_clause:
      reason = "generic functions are not supported"
    elif any(p.is_variadic for p in node.parameters):
      reason = "variadic parameters cannot be forwarded"

    if reason:
      return UnsupportedMember(
        kind="func",
        name=node.name,
        modifiers=node.modifier_names,
        reason=reason,
        position=_position(node),
      )

    return Function(
      name=node.name,
      parameters=[Parameter(p.first_name, p.second_name, p.type_annotation) for p in node.parameters],
      return_type=node.return_type or "",
      modifiers=node.modifier_names,
      is_async="async" in node.effects,
      is_throwing="throws" in node.effects or "rethrows" in node.effects,
      position=_position(node),
    )
