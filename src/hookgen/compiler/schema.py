"""
Pydantic Schemas for Declaration Input.

This module defines the JSON structure accepted in place of Swift source text.
It lets callers hand a language-neutral type declaration straight to the core
passes, e.g. from another parser or a build tool.

Example::

    {
      "name": "Counter",
      "kind": "class",
      "members": [
        {"kind": "property", "name": "count", "type": "Int", "has_setter": true, "modifiers": ["private"]},
        {"kind": "function", "name": "reset", "modifiers": ["private"], "parameters": []}
      ]
    }
"""

from pathlib import Path
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hookgen.compiler.model import (
  Function,
  Parameter,
  Property,
  TypeDeclaration,
  UnsupportedMember,
  WILDCARD_LABEL,
)


class ParameterSpec(BaseModel):
  """
  A function parameter.
  """

  model_config = ConfigDict(populate_by_name=True)

  label: str = Field(WILDCARD_LABEL, description="External label; '_' for none.")
  name: Optional[str] = Field(None, description="Internal name. Defaults to the label.")
  type_annotation: str = Field(..., alias="type", description="Declared parameter type.")

  @model_validator(mode="after")
  def require_name_for_wildcard(self) -> "ParameterSpec":
    """An unlabeled parameter needs an internal name to forward."""
    if self.label == WILDCARD_LABEL and not self.name:
      raise ValueError("'name' is required when 'label' is '_'")
    return self

  def to_model(self) -> Parameter:
    return Parameter(self.label, self.name, self.type_annotation)


class PropertySpec(BaseModel):
  """
  A stored or computed property.
  """

  model_config = ConfigDict(populate_by_name=True)

  kind: Literal["property"] = "property"
  name: str
  type_annotation: Optional[str] = Field(None, alias="type", description="Declared type; omitted if inferred.")
  has_setter: bool = Field(False, description="True if the property can be assigned.")
  modifiers: List[str] = Field(default_factory=list)
  initializer: Optional[str] = Field(None, description="Initializer expression text.")

  def to_model(self) -> Property:
    return Property(
      name=self.name,
      type_annotation=self.type_annotation,
      has_setter=self.has_setter,
      modifiers=list(self.modifiers),
      initializer=self.initializer,
    )


class FunctionSpec(BaseModel):
  """
  A method.
  """

  kind: Literal["function"] = "function"
  name: str
  parameters: List[ParameterSpec] = Field(default_factory=list)
  return_type: str = Field("", description="Declared return type; empty when none.")
  modifiers: List[str] = Field(default_factory=list)
  is_async: bool = False
  is_throwing: bool = False

  def to_model(self) -> Function:
    return Function(
      name=self.name,
      parameters=[p.to_model() for p in self.parameters],
      return_type=self.return_type,
      modifiers=list(self.modifiers),
      is_async=self.is_async,
      is_throwing=self.is_throwing,
    )


class UnsupportedSpec(BaseModel):
  """
  Any other member (initializer, subscript, nested type...). Never forwarded.
  """

  kind: Literal["unsupported"] = "unsupported"
  declaration: str = Field(..., description="Declaration keyword, e.g. 'subscript'.")
  name: str = ""
  modifiers: List[str] = Field(default_factory=list)
  reason: str = "unsupported declaration kind"

  def to_model(self) -> UnsupportedMember:
    return UnsupportedMember(
      kind=self.declaration,
      name=self.name,
      modifiers=list(self.modifiers),
      reason=self.reason,
    )


MemberSpec = Annotated[Union[PropertySpec, FunctionSpec, UnsupportedSpec], Field(discriminator="kind")]


class TypeDeclarationSpec(BaseModel):
  """
  A nominal type and its ordered member list.
  """

  name: str = Field(..., description="Type name used as extension target.")
  kind: str = Field("class", description="Declaration keyword (class, struct, enum).")
  members: List[MemberSpec] = Field(default_factory=list)

  def to_model(self) -> TypeDeclaration:
    return TypeDeclaration(
      name=self.name,
      kind=self.kind,
      members=[m.to_model() for m in self.members],
    )


def load_declaration(path: Path) -> TypeDeclaration:
  """
  Reads a JSON declaration file.

  Args:
      path: Location of the JSON document.

  Returns:
      TypeDeclaration: The validated declaration model.

  Raises:
      pydantic.ValidationError: If the document does not match the schema.
  """
  text = path.read_text(encoding="utf-8")
  return TypeDeclarationSpec.model_validate_json(text).to_model()
