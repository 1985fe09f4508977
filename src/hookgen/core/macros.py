"""
Macro Registry and the ``@Testable`` Macro.

The registry maps attribute names to macro implementations, playing the part
of a compiler plugin host: the engine looks up every attribute it finds on a
type declaration and invokes the registered macro's `expansion`.

A macro implements the extension-macro contract::

    expansion(node, declaration, type_name, protocols, context) -> List[str]

returning the generated extension declarations, or raising `ExpansionError`.
"""

import logging
from typing import Callable, Dict, List, Optional, Type

from hookgen.compiler.model import Attribute, TypeDeclaration
from hookgen.config import RuntimeConfig
from hookgen.core.assembler import ExtensionAssembler, SynthesizedFragments
from hookgen.core.diagnostics import ExpansionContext, ExpansionError, Severity
from hookgen.core.scanner import DeclarationScanner, matcher_from_config
from hookgen.core.synthesizers import (
  TARGET_REFERENCE,
  FunctionSynthesizer,
  PropertySynthesizer,
  TargetPolicy,
  proxy_reference,
)

logger = logging.getLogger(__name__)

SUPPORTED_KINDS = ("class", "struct", "enum")


class ExtensionMacro:
  """Abstract base for macros attached to type declarations."""

  @classmethod
  def expansion(
    cls,
    node: Attribute,
    declaration: TypeDeclaration,
    type_name: str,
    protocols: List[str],
    context: ExpansionContext,
  ) -> List[str]:
    raise NotImplementedError


_MACROS: Dict[str, Type[ExtensionMacro]] = {}


def register_macro(name: str) -> Callable[[Type[ExtensionMacro]], Type[ExtensionMacro]]:
  """
  Decorator to register a macro class under an attribute name.

  Args:
      name: Attribute name without ``@`` (e.g. ``"Testable"``).
  """

  def decorator(cls: Type[ExtensionMacro]) -> Type[ExtensionMacro]:
    _MACROS[name] = cls
    return cls

  return decorator


def get_macro(name: str) -> Optional[Type[ExtensionMacro]]:
  """Retrieves the macro registered for an attribute name."""
  return _MACROS.get(name)


def available_macros() -> List[str]:
  """Returns registered attribute names, sorted."""
  return sorted(_MACROS)


@register_macro("Testable")
class TestableMacro(ExtensionMacro):
  """
  Generates a ``testHooks`` proxy exposing the private members of a type.
  """

  # Not a pytest test class despite the name
  __test__ = False

  @classmethod
  def expansion(
    cls,
    node: Attribute,
    declaration: TypeDeclaration,
    type_name: str,
    protocols: List[str],
    context: ExpansionContext,
  ) -> List[str]:
    """
    Expands one annotated declaration.

    Requested `protocols` are ignored; the result is always one plain extension.

    Args:
        node: The ``@Testable`` attribute.
        declaration: The annotated type with its member list.
        type_name: Name of the extended type.
        protocols: Conformances requested by the host (unused).
        context: Collects diagnostics for this expansion.

    Returns:
        List[str]: Exactly one extension declaration.

    Raises:
        ExpansionError: If the declaration kind is unsupported, strict mode turned
            a warning into an error, or the generated code does not parse.
    """
    config = context.config

    if declaration.kind not in SUPPORTED_KINDS:
      diag = context.error(
        f"@{node.name} can only be applied to a class, struct or enum, not '{declaration.kind}'",
        node.position,
      )
      raise ExpansionError(diag)

    classification = DeclarationScanner(matcher_from_config(config)).scan(declaration.members)
    for skipped in classification.skipped:
      member = skipped.member
      label = member.name or member.kind
      if skipped.qualifying:
        context.warning(f"'{label}' is not forwarded: {skipped.reason}", member.position)
      else:
        context.note(f"'{label}' is not forwarded: {skipped.reason}", member.position)

    forwarded = [
      *classification.instance_properties,
      *classification.instance_functions,
      *classification.static_properties,
      *classification.static_functions,
    ]
    reference = proxy_reference(m.name for m in forwarded)
    if reference != TARGET_REFERENCE:
      clashing = next(m for m in forwarded if m.name.strip("`") == TARGET_REFERENCE)
      context.note(
        f"'{clashing.name}' collides with the proxy's stored '{TARGET_REFERENCE}'; "
        f"the proxy stores the instance as '{reference}'",
        clashing.position,
      )

    instance = TargetPolicy(type_name, is_static=False, reference=reference)
    static = TargetPolicy(type_name, is_static=True, reference=reference)
    fragments = SynthesizedFragments(
      instance_properties=cls._properties(instance, config).synthesize(classification.instance_properties, context),
      instance_functions=cls._functions(instance, config).synthesize(classification.instance_functions),
      static_properties=cls._properties(static, config).synthesize(classification.static_properties, context),
      static_functions=cls._functions(static, config).synthesize(classification.static_functions),
    )

    if context.has_errors:
      first = next(d for d in context.diagnostics if d.severity == Severity.ERROR)
      raise ExpansionError(first)

    assembler = ExtensionAssembler(indent=config.indent, build_condition=config.build_condition)
    try:
      extension = assembler.assemble(type_name, fragments, site=node.position, reference=reference)
    except ExpansionError as e:
      context.diagnostics.append(e.diagnostic)
      raise

    logger.debug("Expanded @%s on %s (%d members forwarded)", node.name, type_name, classification.total)
    return [extension]

  @staticmethod
  def _properties(policy: TargetPolicy, config: RuntimeConfig) -> PropertySynthesizer:
    return PropertySynthesizer(
      policy,
      indent=config.indent,
      placeholder_type=config.placeholder_type,
      infer_literal_types=config.infer_literal_types,
    )

  @staticmethod
  def _functions(policy: TargetPolicy, config: RuntimeConfig) -> FunctionSynthesizer:
    return FunctionSynthesizer(policy, indent=config.indent, wildcard_call_labels=config.wildcard_call_labels)
