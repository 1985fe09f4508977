"""
Tests for the Property and Function Synthesizers.

Verifies:
1. Getter/setter shape and receiver selection (target vs type name).
2. Type resolution: annotation, literal inference, placeholder with warning.
3. Signature rendering: labels, effects, mutating, return arrow.
4. Call rendering: label omission, wildcard compatibility, inout, try/await.
5. Receiver qualification and placeholder names for unreadable parameters.
"""

import pytest

from hookgen.compiler.model import Function, Parameter, Property, SourcePosition
from hookgen.config import RuntimeConfig
from hookgen.core.diagnostics import ExpansionContext, Severity
from hookgen.core.synthesizers import (
  FunctionSynthesizer,
  PropertySynthesizer,
  TargetPolicy,
  infer_literal_type,
  proxy_reference,
)

INSTANCE = TargetPolicy("MyClass", is_static=False)
STATIC = TargetPolicy("MyClass", is_static=True)


def test_target_policy():
  assert INSTANCE.receiver == "target"
  assert INSTANCE.qualifier == ""
  assert STATIC.receiver == "MyClass"
  assert STATIC.qualifier == "static "


def test_read_only_property():
  out = PropertySynthesizer(INSTANCE).synthesize([Property("someConstant", "Int")])
  assert out == "var someConstant: Int {\n    get {\n        return target.someConstant\n    }\n}"


def test_settable_static_property():
  out = PropertySynthesizer(STATIC, indent="  ").synthesize([Property("counter", "Int", has_setter=True)])
  assert out == (
    "static var counter: Int {\n"
    "  get {\n"
    "    return MyClass.counter\n"
    "  }\n"
    "  set {\n"
    "    MyClass.counter = newValue\n"
    "  }\n"
    "}"
  )


def test_properties_keep_order_and_count():
  props = [Property("b", "Int"), Property("a", "String"), Property("c", "Bool")]
  out = PropertySynthesizer(INSTANCE).synthesize(props)
  names = [line.split(":")[0][4:] for line in out.split("\n") if line.startswith("var ")]
  assert names == ["b", "a", "c"]


def test_empty_input_gives_empty_fragment():
  assert PropertySynthesizer(INSTANCE).synthesize([]) == ""
  assert FunctionSynthesizer(INSTANCE).synthesize([]) == ""


@pytest.mark.parametrize(
  "initializer, expected",
  [
    ("0", "Int"),
    ("-12", "Int"),
    ("0xFF", "Int"),
    ("1_000", "Int"),
    ("3.14", "Double"),
    ("1e10", "Double"),
    ('"text"', "String"),
    ('#"raw"#', "String"),
    ("true", "Bool"),
    ("false", "Bool"),
    ("[1, 2]", None),
    ("Foo()", None),
    (None, None),
  ],
)
def test_infer_literal_type(initializer, expected):
  assert infer_literal_type(initializer) == expected


def test_missing_type_inferred_from_literal():
  ctx = ExpansionContext()
  out = PropertySynthesizer(INSTANCE).synthesize([Property("count", None, initializer="0")], ctx)
  assert out.startswith("var count: Int {")
  assert ctx.diagnostics == []


def test_missing_type_falls_back_to_placeholder_with_warning():
  ctx = ExpansionContext()
  prop = Property("items", None, initializer="makeItems()", position=SourcePosition(3, 5))
  out = PropertySynthesizer(INSTANCE).synthesize([prop], ctx)

  assert out.startswith("var items: Any {")
  (diag,) = ctx.diagnostics
  assert diag.severity == Severity.WARNING
  assert (diag.line, diag.column) == (3, 5)
  assert "items" in diag.message


def test_literal_inference_can_be_disabled():
  synth = PropertySynthesizer(INSTANCE, placeholder_type="Never", infer_literal_types=False)
  assert synth.resolve_type(Property("count", None, initializer="0")) == "Never"


def test_strict_context_turns_placeholder_into_error():
  ctx = ExpansionContext(RuntimeConfig(strict_mode=True))
  PropertySynthesizer(INSTANCE).synthesize([Property("x", None)], ctx)
  assert ctx.has_errors


def test_function_without_params_or_return():
  out = FunctionSynthesizer(INSTANCE).synthesize([Function("someFunction2")])
  assert out == "func someFunction2() {\n    return target.someFunction2()\n}"


def test_labeled_parameters():
  fn = Function(
    "someFunction",
    [Parameter("param1", None, "String"), Parameter("param2", None, "Int")],
    return_type="(() -> Void)?",
  )
  out = FunctionSynthesizer(INSTANCE).render(fn)
  assert out.split("\n")[0] == "func someFunction(param1: String, param2: Int) -> (() -> Void)? {"
  assert out.split("\n")[1] == "    return target.someFunction(param1: param1, param2: param2)"


def test_distinct_external_label():
  fn = Function("anotherFunction", [Parameter("in", "param", "Double")], return_type="Double?")
  synth = FunctionSynthesizer(INSTANCE)
  assert synth.signature(fn) == "func anotherFunction(in param: Double) -> Double?"
  assert synth.call(fn) == "target.anotherFunction(in: param)"


def test_unlabeled_argument_omits_label():
  fn = Function("staticFunctionWithParams", [Parameter("_", "value", "Int"), Parameter("name", None, "String")], "Bool")
  synth = FunctionSynthesizer(STATIC)
  assert synth.signature(fn) == "static func staticFunctionWithParams(_ value: Int, name: String) -> Bool"
  assert synth.call(fn) == "MyClass.staticFunctionWithParams(value, name: name)"


def test_wildcard_call_labels_compatibility():
  fn = Function("anotherFunction2", [Parameter("_", "param", "Double"), Parameter("param2", None, "Int")])
  synth = FunctionSynthesizer(INSTANCE, wildcard_call_labels=True)
  assert synth.call(fn) == "target.anotherFunction2(_: param, param2: param2)"


def test_inout_argument_is_passed_by_reference():
  fn = Function("bump", [Parameter("_", "value", "inout Int"), Parameter("by", "step", "Int")])
  synth = FunctionSynthesizer(INSTANCE)
  assert synth.signature(fn) == "func bump(_ value: inout Int, by step: Int)"
  assert synth.call(fn) == "target.bump(&value, by: step)"


def test_effects_are_reproduced():
  fn = Function("load", [Parameter("from", "url", "URL")], "Data", is_async=True, is_throwing=True)
  out = FunctionSynthesizer(INSTANCE).render(fn)
  assert out.split("\n")[0] == "func load(from url: URL) async throws -> Data {"
  assert out.split("\n")[1] == "    return try await target.load(from: url)"


def test_mutating_kept_for_instance_functions_only():
  fn = Function("reset", modifiers=["private", "mutating"])
  assert FunctionSynthesizer(INSTANCE).signature(fn) == "mutating func reset()"
  assert FunctionSynthesizer(STATIC).signature(fn) == "static func reset()"


def test_parameter_named_like_reference_qualifies_receiver():
  """
  Scenario: A forwarded method has a parameter called `target`.
  Expectation: The call goes through `self.target`, the parameter is passed as is.
  """
  fn = Function("f", [Parameter("target", None, "Int")])
  synth = FunctionSynthesizer(INSTANCE)
  assert synth.signature(fn) == "func f(target: Int)"
  assert synth.call(fn) == "self.target.f(target: target)"
  assert FunctionSynthesizer(STATIC).call(fn) == "MyClass.f(target: target)"


def test_renamed_reference_is_used_as_receiver():
  policy = TargetPolicy("MyClass", reference="_target")
  prop = PropertySynthesizer(policy).render(Property("target", "Int", has_setter=True))
  assert "return _target.target" in prop
  assert "_target.target = newValue" in prop
  assert FunctionSynthesizer(policy).call(Function("f", [Parameter("target", None, "Int")])) == "_target.f(target: target)"


def test_proxy_reference():
  assert proxy_reference(["count", "reset"]) == "target"
  assert proxy_reference(["target"]) == "_target"
  assert proxy_reference(["`target`", "_target"]) == "__target"


def test_wildcard_internal_name_gets_placeholder():
  """
  Scenario: `func f(x _: Int, _ _: String)` has no readable internal names.
  Expectation: The wrapper binds `arg0`/`arg1` and forwards those.
  """
  fn = Function("f", [Parameter("x", "_", "Int"), Parameter("_", "_", "String")])
  synth = FunctionSynthesizer(INSTANCE)
  assert synth.signature(fn) == "func f(x arg0: Int, _ arg1: String)"
  assert synth.call(fn) == "target.f(x: arg0, arg1)"
  assert FunctionSynthesizer(INSTANCE, wildcard_call_labels=True).call(fn) == "target.f(x: arg0, _: arg1)"


def test_placeholder_avoids_existing_names():
  fn = Function("f", [Parameter("_", "_", "inout Int"), Parameter("arg0", None, "Int")])
  synth = FunctionSynthesizer(INSTANCE)
  assert synth.local_names(fn) == ["_arg0", "arg0"]
  assert synth.call(fn) == "target.f(&_arg0, arg0: arg0)"
