"""
Runtime Configuration Store.

Settings are read from the ``[tool.hookgen]`` table of the nearest
``pyproject.toml`` and may be overridden from the command line.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib


class RuntimeConfig(BaseModel):
  """
  Configuration container for the expansion engine.
  """

  modifier_matching: Literal["exact", "substring"] = Field(
    "exact",
    description="'exact' compares modifier names against the configured sets. "
    "'substring' reproduces containment matching ('private' in name).",
  )
  qualifying_modifiers: List[str] = Field(
    default_factory=lambda: ["private", "fileprivate"],
    description="Modifiers that select a member for forwarding (exact mode).",
  )
  static_modifiers: List[str] = Field(
    default_factory=lambda: ["static", "class"],
    description="Modifiers that mark a member as type-level (exact mode).",
  )
  wildcard_call_labels: bool = Field(
    False,
    description="If True, unlabeled parameters are forwarded as '_: name' instead of 'name'.",
  )
  infer_literal_types: bool = Field(True, description="Resolve missing property types from literal initializers.")
  placeholder_type: str = Field("Any", description="Type emitted when a property type cannot be resolved.")
  build_condition: str = Field("DEBUG", description="Compilation condition guarding the generated code.")
  indent_width: int = Field(4, description="Spaces per indentation level in generated code.")
  strict_mode: bool = Field(False, description="If True, warnings fail the expansion.")

  @field_validator("qualifying_modifiers", "static_modifiers", mode="before")
  @classmethod
  def split_modifier_list(cls, v: Any) -> Any:
    """Accepts a single name or a comma separated string in place of a list."""
    if isinstance(v, str):
      return [part.strip() for part in v.split(",") if part.strip()]
    return v

  @field_validator("indent_width")
  @classmethod
  def validate_indent(cls, v: int) -> int:
    """
    Ensures indentation is positive.

    Raises:
        ValueError: If the width is not at least 1.
    """
    if v < 1:
      raise ValueError(f"indent_width must be >= 1, got {v}")
    return v

  @field_validator("build_condition", "placeholder_type")
  @classmethod
  def validate_not_blank(cls, v: str) -> str:
    v_clean = v.strip()
    if not v_clean:
      raise ValueError("Value must not be empty")
    return v_clean

  @property
  def indent(self) -> str:
    """One indentation level as a string."""
    return " " * self.indent_width

  @classmethod
  def load(
    cls,
    strict_mode: Optional[bool] = None,
    overrides: Optional[Dict[str, Any]] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        strict_mode (Optional[bool]): Override for strict mode setting.
        overrides (Optional[Dict]): Additional ``key=value`` settings from the CLI.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    merged = {**toml_config, **(overrides or {})}
    if strict_mode is not None:
      merged["strict_mode"] = strict_mode

    return cls.model_validate(merged)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      with open(toml_path, "rb") as f:
        data = tomllib.load(f)

      tool_section = data.get("tool", {})
      return tool_section.get("hookgen", {}), parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, Any]:
  """
  Parses a list of 'key=value' strings into a dictionary.

  Types are inferred (int, bool, comma separated list, or string).

  Args:
      items (Optional[List[str]]): List of raw CLI strings directly from argparse.

  Returns:
      Dict[str, Any]: Parsed dictionary.

  Raises:
      ValueError: If an item has no '='.
  """
  if not items:
    return {}

  config: Dict[str, Any] = {}
  for item in items:
    if "=" not in item:
      raise ValueError(f"Invalid config format: '{item}'. Expected 'key=value'.")

    key, val_str = item.split("=", 1)
    key = key.strip()
    val_str = val_str.strip()

    final_val: Any = val_str

    if val_str.lower() == "true":
      final_val = True
    elif val_str.lower() == "false":
      final_val = False
    elif "," in val_str:
      final_val = [part.strip() for part in val_str.split(",") if part.strip()]
    else:
      try:
        final_val = int(val_str)
      except ValueError:
        pass

    config[key] = final_val

  return config
