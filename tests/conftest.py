"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Recording console fixture for asserting on CLI output.
- Macro registry isolation so tests registering extra macros do not leak.
"""

import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

# Add src to path so we can import 'hookgen' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from hookgen.core.macros import _MACROS  # noqa: E402
from hookgen.utils.console import reset_console, set_console  # noqa: E402

MY_CLASS_SOURCE = """class MyClass {
    private let someConstant: Int = 0
    private var someVariable: Int = 0
    private var someVariableGetOnly: Int { 0 }
    private var somePropertyGetOnlyImplicit: String {
        ""
    }
    private var somePropertyGetOnlyExplicit: String {
        get { "" }
    }
    private var somePropertyGetAndSetExplicit: String {
        get { "" }
        set { }
    }
    private static var staticVariable: Int = 42
    private static let staticConstant: String = "test"
    private static var staticComputedProperty: Double {
        get { 3.14 }
        set { }
    }
    private func someFunction2() {
    }
    private func someFunction(param1: String, param2: Int) -> (() -> Void)? {
        nil
    }
    private func anotherFunction2(_ param: Double, param2: Int) -> [String: String] {
        [:]
    }
    fileprivate func anotherFunction(in param: Double) -> Double? {
        nil
    }
    private static func staticFunction() -> String {
        "static result"
    }
    private static func staticFunctionWithParams(_ value: Int, name: String) -> Bool {
        value > 0
    }
}"""

MY_CLASS_EXTENSION = """extension MyClass {
    #if DEBUG
    var testHooks: TestHooks {
        return TestHooks(target: self)
    }
    struct TestHooks {
        private var target: MyClass
        fileprivate init(target: MyClass) {
            self.target = target
        }
        var someConstant: Int {
            get {
                return target.someConstant
            }
        }
        var someVariable: Int {
            get {
                return target.someVariable
            }
            set {
                target.someVariable = newValue
            }
        }
        var someVariableGetOnly: Int {
            get {
                return target.someVariableGetOnly
            }
        }
        var somePropertyGetOnlyImplicit: String {
            get {
                return target.somePropertyGetOnlyImplicit
            }
        }
        var somePropertyGetOnlyExplicit: String {
            get {
                return target.somePropertyGetOnlyExplicit
            }
        }
        var somePropertyGetAndSetExplicit: String {
            get {
                return target.somePropertyGetAndSetExplicit
            }
            set {
                target.somePropertyGetAndSetExplicit = newValue
            }
        }
        func someFunction2() {
            return target.someFunction2()
        }
        func someFunction(param1: String, param2: Int) -> (() -> Void)? {
            return target.someFunction(param1: param1, param2: param2)
        }
        func anotherFunction2(_ param: Double, param2: Int) -> [String: String] {
            return target.anotherFunction2(_: param, param2: param2)
        }
        func anotherFunction(in param: Double) -> Double? {
            return target.anotherFunction(in: param)
        }
        static var staticVariable: Int {
            get {
                return MyClass.staticVariable
            }
            set {
                MyClass.staticVariable = newValue
            }
        }
        static var staticConstant: String {
            get {
                return MyClass.staticConstant
            }
        }
        static var staticComputedProperty: Double {
            get {
                return MyClass.staticComputedProperty
            }
            set {
                MyClass.staticComputedProperty = newValue
            }
        }
        static func staticFunction() -> String {
            return MyClass.staticFunction()
        }
        static func staticFunctionWithParams(_ value: Int, name: String) -> Bool {
            return MyClass.staticFunctionWithParams(_: value, name: name)
        }
    }
    #endif
}"""


@pytest.fixture
def my_class_source() -> str:
  """The reference class with every supported member shape."""
  return MY_CLASS_SOURCE


@pytest.fixture
def my_class_extension() -> str:
  """Expected extension for `MY_CLASS_SOURCE` with wildcard call labels."""
  return MY_CLASS_EXTENSION


@pytest.fixture
def recorded_console():
  """Routes console output and logging into a recording console."""
  recorder = Console(file=io.StringIO(), record=True, width=400, color_system=None)
  set_console(recorder)
  yield recorder
  reset_console()


@pytest.fixture(autouse=True)
def isolate_macro_registry():
  """
  Ensures that macros registered by a test do not leak into other tests.
  """
  original = _MACROS.copy()
  yield
  _MACROS.clear()
  _MACROS.update(original)
