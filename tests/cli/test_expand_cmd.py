"""
Tests for the `expand` command.

Verifies:
1. Swift files are expanded to stdout or to --out.
2. JSON declarations produce the extension only.
3. Diagnostics are reported and errors give exit code 1.
4. --strict and --config reach the engine.
"""

import json

from hookgen.cli.__main__ import main
from hookgen.cli.handlers.expand import handle_expand

SOURCE = "@Testable\nclass Counter {\n    private var count: Int = 0\n    func visible() {}\n}\n"


def write(tmp_path, name, text):
  path = tmp_path / name
  path.write_text(text, encoding="utf-8")
  return path


def test_expand_prints_to_stdout(tmp_path, capsys, recorded_console):
  path = write(tmp_path, "Counter.swift", SOURCE)

  assert main(["expand", str(path)]) == 0

  out = capsys.readouterr().out
  assert out.startswith("class Counter {\n")
  assert "extension Counter {" in out
  assert out.endswith("}\n")


def test_expand_writes_output_file(tmp_path, recorded_console):
  path = write(tmp_path, "Counter.swift", SOURCE)
  out_path = tmp_path / "gen" / "Counter+Hooks.swift"

  assert handle_expand(path, out_path, None, {}) == 0

  assert out_path.exists()
  assert "var count: Int {" in out_path.read_text(encoding="utf-8")
  log = recorded_console.export_text()
  assert "Expanded 1 type(s)" in log


def test_notes_are_logged(tmp_path, capsys, recorded_console):
  path = write(tmp_path, "Counter.swift", SOURCE)
  main(["expand", str(path)])

  log = recorded_console.export_text()
  assert "4:5: note: 'visible' is not forwarded" in log


def test_missing_input(tmp_path, recorded_console):
  assert handle_expand(tmp_path / "nope.swift", None, None, {}) == 1
  assert "Input not found" in recorded_console.export_text()


def test_parse_error_exits_with_failure(tmp_path, capsys, recorded_console):
  path = write(tmp_path, "Broken.swift", "@Testable\nclass Broken {\n    print(1)\n}\n")

  assert main(["expand", str(path)]) == 1

  assert capsys.readouterr().out == ""
  log = recorded_console.export_text()
  assert "3:5: error:" in log
  assert "Expansion failed" in log


def test_strict_flag_turns_warnings_into_errors(tmp_path, capsys, recorded_console):
  path = write(tmp_path, "Lazy.swift", "@Testable\nclass Lazy {\n    private var items = load()\n}\n")

  assert main(["expand", str(path)]) == 0
  capsys.readouterr()
  assert main(["expand", str(path), "--strict"]) == 1


def test_config_overrides(tmp_path, capsys, recorded_console):
  path = write(tmp_path, "Scale.swift", "@Testable\nstruct Scale {\n    private func apply(_ f: Double) {}\n}\n")

  assert main(["expand", str(path), "--config", "wildcard_call_labels=true", "build_condition=TESTING"]) == 0

  out = capsys.readouterr().out
  assert "#if TESTING" in out
  assert "return target.apply(_: f)" in out


def test_invalid_config_value(tmp_path, recorded_console):
  path = write(tmp_path, "Counter.swift", SOURCE)
  assert main(["expand", str(path), "--config", "indent_width=0"]) == 1
  assert "Invalid configuration" in recorded_console.export_text()


def test_malformed_config_flag(tmp_path, recorded_console):
  path = write(tmp_path, "Counter.swift", SOURCE)
  assert main(["expand", str(path), "--config", "indent_width"]) == 2


def test_json_declaration(tmp_path, capsys, recorded_console):
  decl = {
    "name": "Counter",
    "members": [{"kind": "property", "name": "count", "type": "Int", "modifiers": ["private"]}],
  }
  path = write(tmp_path, "counter.json", json.dumps(decl))

  assert main(["expand", str(path)]) == 0

  out = capsys.readouterr().out
  assert out.startswith("extension Counter {")
  assert "var count: Int {" in out


def test_invalid_json_declaration(tmp_path, recorded_console):
  path = write(tmp_path, "bad.json", json.dumps({"members": []}))
  assert main(["expand", str(path)]) == 1
  assert "Invalid declaration" in recorded_console.export_text()
