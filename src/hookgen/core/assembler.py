"""
Extension Assembler.

Combines the synthesized fragments into the generated declaration::

    extension MyClass {
        #if DEBUG
        var testHooks: TestHooks {
            return TestHooks(target: self)
        }
        struct TestHooks {
            private var target: MyClass
            fileprivate init(target: MyClass) {
                self.target = target
            }
            <instance properties>
            <instance functions>
            <static properties>
            <static functions>
        }
        #endif
    }

The assembled text is parsed back with the Swift frontend before it is
returned. If it does not parse as exactly one extension the expansion fails
with an error at the annotation site.
"""

from dataclasses import dataclass
from typing import List, Optional

from hookgen.compiler.frontends.swift import SwiftParser, SwiftSyntaxError, TypeDecl
from hookgen.compiler.model import SourcePosition
from hookgen.core.diagnostics import Diagnostic, ExpansionError, Severity
from hookgen.core.synthesizers import TARGET_REFERENCE

ENTRY_POINT = "testHooks"
PROXY_TYPE = "TestHooks"


@dataclass
class SynthesizedFragments:
  """
  The four fragments, kept in their fixed emission order.
  """

  instance_properties: str = ""
  instance_functions: str = ""
  static_properties: str = ""
  static_functions: str = ""

  def ordered(self) -> List[str]:
    return [
      self.instance_properties,
      self.instance_functions,
      self.static_properties,
      self.static_functions,
    ]


class ExtensionAssembler:
  """
  Builds and validates the gated extension declaration.
  """

  def __init__(self, indent: str = "    ", build_condition: str = "DEBUG") -> None:
    self.indent = indent
    self.build_condition = build_condition

  def assemble(
    self,
    type_name: str,
    fragments: SynthesizedFragments,
    site: Optional[SourcePosition] = None,
    reference: str = TARGET_REFERENCE,
  ) -> str:
    """
    Produces the extension text.

    Args:
        type_name: The extended type.
        fragments: Synthesized members.
        site: Position of the annotation, used for failure diagnostics.
        reference: Name of the proxy's stored instance; must match the
            `TargetPolicy` the fragments were synthesized with.

    Returns:
        str: The generated extension, without a trailing newline.

    Raises:
        ExpansionError: If the generated text does not parse.
    """
    text = self.render(type_name, fragments, reference)
    self.validate(text, site)
    return text

  def render(self, type_name: str, fragments: SynthesizedFragments, reference: str = TARGET_REFERENCE) -> str:
    i1 = self.indent
    i2 = self.indent * 2
    i3 = self.indent * 3

    lines = [
      f"extension {type_name} {{",
      f"{i1}#if {self.build_condition}",
      f"{i1}var {ENTRY_POINT}: {PROXY_TYPE} {{",
      f"{i2}return {PROXY_TYPE}(target: self)",
      f"{i1}}}",
      f"{i1}struct {PROXY_TYPE} {{",
      f"{i2}private var {reference}: {type_name}",
      f"{i2}fileprivate init(target: {type_name}) {{",
      f"{i3}self.{reference} = target",
      f"{i2}}}",
    ]
    for fragment in fragments.ordered():
      if fragment:
        lines.extend(self._indent_block(fragment, i2))
    lines += [
      f"{i1}}}",
      f"{i1}#endif",
      "}",
    ]
    return "\n".join(lines)

  @staticmethod
  def _indent_block(fragment: str, prefix: str) -> List[str]:
    return [f"{prefix}{line}" if line else line for line in fragment.split("\n")]

  def validate(self, text: str, site: Optional[SourcePosition] = None) -> None:
    """
    Parses the generated text and checks it is a single extension.

    Raises:
        ExpansionError: With an error diagnostic located at `site`.
    """
    try:
      nodes = SwiftParser(text).parse()
    except SwiftSyntaxError as e:
      raise ExpansionError(Diagnostic.at(Severity.ERROR, f"Generated extension is not valid Swift: {e}", site)) from e

    if len(nodes) != 1 or not isinstance(nodes[0], TypeDecl) or nodes[0].keyword != "extension":
      raise ExpansionError(
        Diagnostic.at(Severity.ERROR, "Generated code is not a single extension declaration", site)
      )
