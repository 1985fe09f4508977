"""
Tests for Declaration Lowering.

Verifies that parsed Swift nodes become the language-neutral model:
1. Setter detection for stored, computed and observed properties.
2. Type propagation across multiple bindings.
3. Function parameters and effects.
4. Unsupported members carry a reason.
"""

from hookgen.compiler.frontends.swift import DeclarationLowerer, SwiftParser
from hookgen.compiler.model import Function, Property, SourcePosition, UnsupportedMember


def lower(code: str, qualified_name=None):
  node = SwiftParser(code).parse()[0]
  return DeclarationLowerer().lower(node, qualified_name)


def lower_members(body: str):
  return lower(f"class C {{\n{body}\n}}").members


def test_declaration_header():
  decl = lower("@Testable\nstruct Point {\n}")
  assert decl.name == "Point"
  assert decl.kind == "struct"
  assert decl.position == SourcePosition(1, 1)
  assert [a.name for a in decl.attributes] == ["Testable"]
  assert decl.attributes[0].position == SourcePosition(1, 1)


def test_qualified_name_override():
  decl = lower("struct Inner {}", qualified_name="Outer.Inner")
  assert decl.name == "Outer.Inner"


def test_property_setter_detection():
  members = lower_members(
    "private let constant: Int = 0\n"
    "private var stored: Int = 0\n"
    "private var implicit: Int { 0 }\n"
    "private var getOnly: Int {\n get { 0 }\n}\n"
    "private var getSet: Int {\n get { 0 }\n set { }\n}\n"
    "private var observed: Int = 0 {\n didSet { }\n}"
  )
  assert all(isinstance(m, Property) for m in members)
  assert [(m.name, m.has_setter) for m in members] == [
    ("constant", False),
    ("stored", True),
    ("implicit", False),
    ("getOnly", False),
    ("getSet", True),
    ("observed", True),
  ]


def test_property_fields():
  (prop,) = lower_members("private static var counter = 42")
  assert prop.name == "counter"
  assert prop.type_annotation is None
  assert prop.initializer == "42"
  assert prop.modifiers == ["private", "static"]
  assert prop.position == SourcePosition(2, 1)


def test_multiple_bindings_share_trailing_type():
  """
  Scenario: `var a, b: Int, c = "x"`.
  Expectation: `a` picks up `Int` from `b`; `c` keeps no annotation.
  """
  members = lower_members('private var a, b: Int, c = "x"')
  assert [(m.name, m.type_annotation) for m in members] == [("a", "Int"), ("b", "Int"), ("c", None)]
  assert all(m.modifiers == ["private"] for m in members)


def test_function_lowering():
  (fn,) = lower_members("private mutating func update(_ value: inout Int, by step: Int) async throws -> Bool { true }")
  assert isinstance(fn, Function)
  assert fn.name == "update"
  assert fn.return_type == "Bool"
  assert fn.is_async and fn.is_throwing
  assert fn.modifiers == ["private", "mutating"]
  first, second = fn.parameters
  assert (first.label, first.name, first.is_unlabeled, first.is_inout) == ("_", "value", True, True)
  assert (second.label, second.name, second.is_unlabeled) == ("by", "step", False)


def test_function_without_return_type():
  (fn,) = lower_members("private func reset() {}")
  assert fn.return_type == ""
  assert fn.parameters == []


def test_rethrows_counts_as_throwing():
  (fn,) = lower_members("private func run(_ body: () throws -> Void) rethrows { try body() }")
  assert fn.is_throwing is True
  assert fn.is_async is False


def test_unsupported_members():
  members = lower_members(
    "private init() {}\n"
    "private subscript(i: Int) -> Int { i }\n"
    "private struct Nested {}\n"
    "private func generic<T>(_ v: T) -> T { v }\n"
    "private static func + (a: C, b: C) -> C { a }\n"
    "private func log(_ items: Any...) {}\n"
    "private let (x, y) = (1, 2)\n"
    "@Published private var wrapped: Int = 0\n"
    "#if DEBUG\nprivate var debugOnly = 1\n#endif"
  )
  assert all(isinstance(m, UnsupportedMember) for m in members)
  assert [m.kind for m in members] == ["init", "subscript", "struct", "func", "func", "func", "let", "var", "#if"]
  assert members[2].name == "Nested"
  assert "generic" in members[3].reason
  assert "operator" in members[4].reason
  assert "variadic" in members[5].reason
  assert "destructuring" in members[6].reason
  assert "@Published" in members[7].reason
  assert members[0].modifiers == ["private"]


def test_builtin_uppercase_attribute_is_not_a_wrapper():
  (prop,) = lower_members("@IBOutlet private weak var label: UILabel!")
  assert isinstance(prop, Property)
  assert prop.type_annotation == "UILabel!"
  assert prop.modifiers == ["private", "weak"]


def test_backticked_names_are_kept():
  (prop,) = lower_members("private var `default`: Int = 0")
  assert prop.name == "`default`"
