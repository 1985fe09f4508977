"""
Tests for the Runtime Configuration Store.

Verifies:
1. Defaults.
2. Loading `[tool.hookgen]` from the nearest pyproject.toml.
3. CLI overrides and strict flag precedence.
4. Validation and key=value parsing.
"""

import pytest
from pydantic import ValidationError

from hookgen.config import RuntimeConfig, parse_cli_key_values


def test_defaults():
  config = RuntimeConfig()
  assert config.modifier_matching == "exact"
  assert config.qualifying_modifiers == ["private", "fileprivate"]
  assert config.static_modifiers == ["static", "class"]
  assert config.wildcard_call_labels is False
  assert config.infer_literal_types is True
  assert config.placeholder_type == "Any"
  assert config.build_condition == "DEBUG"
  assert config.indent == "    "
  assert config.strict_mode is False


def test_load_from_parent_pyproject(tmp_path):
  (tmp_path / "pyproject.toml").write_text(
    '[tool.hookgen]\nmodifier_matching = "substring"\nindent_width = 2\nbuild_condition = "TESTING"\n',
    encoding="utf-8",
  )
  nested = tmp_path / "Sources" / "App"
  nested.mkdir(parents=True)

  config = RuntimeConfig.load(search_path=nested)

  assert config.modifier_matching == "substring"
  assert config.indent == "  "
  assert config.build_condition == "TESTING"


def test_pyproject_without_section(tmp_path):
  (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
  assert RuntimeConfig.load(search_path=tmp_path) == RuntimeConfig()


def test_overrides_win_over_toml(tmp_path):
  (tmp_path / "pyproject.toml").write_text("[tool.hookgen]\nstrict_mode = true\nindent_width = 2\n", encoding="utf-8")

  config = RuntimeConfig.load(strict_mode=False, overrides={"indent_width": 3}, search_path=tmp_path)

  assert config.strict_mode is False
  assert config.indent_width == 3


def test_strict_none_keeps_toml_value(tmp_path):
  (tmp_path / "pyproject.toml").write_text("[tool.hookgen]\nstrict_mode = true\n", encoding="utf-8")
  assert RuntimeConfig.load(strict_mode=None, search_path=tmp_path).strict_mode is True


def test_modifier_lists_accept_strings():
  config = RuntimeConfig(qualifying_modifiers="private, fileprivate", static_modifiers="static")
  assert config.qualifying_modifiers == ["private", "fileprivate"]
  assert config.static_modifiers == ["static"]


@pytest.mark.parametrize(
  "field, value",
  [
    ("indent_width", 0),
    ("modifier_matching", "fuzzy"),
    ("build_condition", "   "),
  ],
)
def test_invalid_values_rejected(field, value):
  with pytest.raises(ValidationError):
    RuntimeConfig(**{field: value})


def test_parse_cli_key_values():
  parsed = parse_cli_key_values(
    ["strict_mode=true", "indent_width=2", "qualifying_modifiers=private,fileprivate", "placeholder_type=Any"]
  )
  assert parsed == {
    "strict_mode": True,
    "indent_width": 2,
    "qualifying_modifiers": ["private", "fileprivate"],
    "placeholder_type": "Any",
  }
  assert parse_cli_key_values(None) == {}


def test_parse_cli_key_values_rejects_missing_equals():
  with pytest.raises(ValueError, match="key=value"):
    parse_cli_key_values(["strict_mode"])
