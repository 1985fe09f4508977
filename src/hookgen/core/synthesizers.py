"""
Forwarding Member Synthesizers.

Turns classified properties and functions into Swift source fragments for the
``TestHooks`` proxy. Each fragment is a newline separated list of members,
indented relative to column zero; the assembler places it inside the proxy.

The receiver of every forwarding expression is chosen by a `TargetPolicy`:
instance members go through the proxy's stored reference (``target`` unless a
forwarded member already uses that name), static members address the owning
type by name.
"""

import re
from dataclasses import dataclass
from typing import Collection, Iterable, List, Optional, Sequence

from hookgen.compiler.model import WILDCARD_LABEL, Function, Parameter, Property
from hookgen.core.diagnostics import ExpansionContext

TARGET_REFERENCE = "target"
PLACEHOLDER_PREFIX = "arg"

_INT_LITERAL = re.compile(r"^-?(?:0x[0-9a-fA-F_]+|0o[0-7_]+|0b[01_]+|\d[\d_]*)$")
_FLOAT_LITERAL = re.compile(r"^-?\d[\d_]*(?:\.\d[\d_]*)?(?:[eE][-+]?\d+)?$")
_STRING_LITERAL = re.compile(r'^#*"')


@dataclass(frozen=True)
class TargetPolicy:
  """
  Decides the receiver and qualifier of forwarding members.

  Attributes:
      type_name: The owning type, addressed directly for static members.
      is_static: Whether the members being synthesized are type-level.
      reference: Name of the proxy's stored instance.
  """

  type_name: str
  is_static: bool = False
  reference: str = TARGET_REFERENCE

  @property
  def receiver(self) -> str:
    return self.type_name if self.is_static else self.reference

  @property
  def qualifier(self) -> str:
    return "static " if self.is_static else ""

  def receiver_for(self, local_names: Collection[str]) -> str:
    """
    The receiver as written inside a body that declares `local_names`.

    A parameter named like the stored reference shadows it, so the reference
    is qualified with ``self.`` there.
    """
    if not self.is_static and self.reference in {name.strip("`") for name in local_names}:
      return f"self.{self.reference}"
    return self.receiver


def proxy_reference(member_names: Iterable[str]) -> str:
  """
  Picks the name of the proxy's stored instance.

  Args:
      member_names: Names of every forwarded member, which become members of the
          proxy alongside the stored instance.

  Returns:
      str: ``target``, prefixed with underscores until it is not taken.
  """
  taken = {name.strip("`") for name in member_names}
  reference = TARGET_REFERENCE
  while reference in taken:
    reference = f"_{reference}"
  return reference


def infer_literal_type(initializer: Optional[str]) -> Optional[str]:
  """
  Resolves the type of a literal initializer expression.

  Args:
      initializer: Expression text, e.g. ``42``, ``3.14``, ``"abc"``, ``true``.

  Returns:
      The Swift type name (``Int``, ``Double``, ``String``, ``Bool``), or None if
      the expression is not a plain literal.
  """
  if not initializer:
    return None
  text = initializer.strip()
  if text in ("true", "false"):
    return "Bool"
  if _STRING_LITERAL.match(text):
    return "String"
  if _INT_LITERAL.match(text):
    return "Int"
  if _FLOAT_LITERAL.match(text):
    return "Double"
  return None


class PropertySynthesizer:
  """
  Emits computed properties forwarding to the original ones.
  """

  def __init__(
    self,
    policy: TargetPolicy,
    indent: str = "    ",
    placeholder_type: str = "Any",
    infer_literal_types: bool = True,
  ) -> None:
    self.policy = policy
    self.indent = indent
    self.placeholder_type = placeholder_type
    self.infer_literal_types = infer_literal_types

  def synthesize(self, properties: Sequence[Property], context: Optional[ExpansionContext] = None) -> str:
    """
    Renders one forwarding property per input property, in order.

    Args:
        properties: Classified properties of one bucket.
        context: Receives a warning for every property typed with the placeholder.

    Returns:
        str: The fragment; empty if there are no properties.
    """
    return "\n".join(self.render(p, context) for p in properties)

  def resolve_type(self, prop: Property, context: Optional[ExpansionContext] = None) -> str:
    if prop.type_annotation:
      return prop.type_annotation
    if self.infer_literal_types:
      inferred = infer_literal_type(prop.initializer)
      if inferred:
        return inferred
    if context is not None:
      context.warning(
        f"Property '{prop.name}' has no type annotation; forwarding it as '{self.placeholder_type}'",
        prop.position,
      )
    return self.placeholder_type

  def render(self, prop: Property, context: Optional[ExpansionContext] = None) -> str:
    ind = self.indent
    path = f"{self.policy.receiver}.{prop.name}"
    lines = [
      f"{self.policy.qualifier}var {prop.name}: {self.resolve_type(prop, context)} {{",
      f"{ind}get {{",
      f"{ind}{ind}return {path}",
      f"{ind}}}",
    ]
    if prop.has_setter:
      lines += [
        f"{ind}set {{",
        f"{ind}{ind}{path} = newValue",
        f"{ind}}}",
      ]
    lines.append("}")
    return "\n".join(lines)


class FunctionSynthesizer:
  """
  Emits methods forwarding their arguments to the original ones.
  """

  def __init__(self, policy: TargetPolicy, indent: str = "    ", wildcard_call_labels: bool = False) -> None:
    self.policy = policy
    self.indent = indent
    self.wildcard_call_labels = wildcard_call_labels

  def synthesize(self, functions: Sequence[Function]) -> str:
    """
    Renders one forwarding method per input function, in order.

    Returns:
        str: The fragment; empty if there are no functions.
    """
    return "\n".join(self.render(f) for f in functions)

  @staticmethod
  def local_names(fn: Function) -> List[str]:
    """
    The internal parameter names used by the forwarding method.

    A parameter whose internal name is ``_`` cannot be read, so it is bound to
    a placeholder ``arg<index>`` that no other parameter uses.
    """
    taken = {p.name for p in fn.parameters}
    names = []
    for index, param in enumerate(fn.parameters):
      name = param.name
      if name == WILDCARD_LABEL:
        name = f"{PLACEHOLDER_PREFIX}{index}"
        while name in taken:
          name = f"_{name}"
        taken.add(name)
      names.append(name)
    return names

  @staticmethod
  def parameter_declaration(param: Parameter, name: Optional[str] = None) -> str:
    """``label name: Type``, with the name only when it differs from the label."""
    name = name or param.name
    if name != param.label:
      return f"{param.label} {name}: {param.type_annotation}"
    return f"{param.label}: {param.type_annotation}"

  def argument(self, param: Parameter, name: Optional[str] = None) -> str:
    name = name or param.name
    value = f"&{name}" if param.is_inout else name
    if param.is_unlabeled and not self.wildcard_call_labels:
      return value
    return f"{param.label}: {value}"

  def signature(self, fn: Function) -> str:
    params = ", ".join(
      self.parameter_declaration(p, name) for p, name in zip(fn.parameters, self.local_names(fn))
    )
    mutating = "mutating " if not self.policy.is_static and "mutating" in fn.modifiers else ""
    effects = ""
    if fn.is_async:
      effects += " async"
    if fn.is_throwing:
      effects += " throws"
    returns = f" -> {fn.return_type}" if fn.return_type else ""
    return f"{self.policy.qualifier}{mutating}func {fn.name}({params}){effects}{returns}"

  def call(self, fn: Function) -> str:
    names = self.local_names(fn)
    args = ", ".join(self.argument(p, name) for p, name in zip(fn.parameters, names))
    prefix: List[str] = []
    if fn.is_throwing:
      prefix.append("try")
    if fn.is_async:
      prefix.append("await")
    prefix_text = " ".join(prefix + [""])
    return f"{prefix_text}{self.policy.receiver_for(names)}.{fn.name}({args})"

  def render(self, fn: Function) -> str:
    return "\n".join(
      [
        f"{self.signature(fn)} {{",
        f"{self.indent}return {self.call(fn)}",
        "}",
      ]
    )
