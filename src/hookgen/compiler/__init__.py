"""
Compiler Package.

This package defines the language-neutral declaration model, the JSON schema
for supplying declarations directly, and the frontends that ingest source text.
"""

from hookgen.compiler.model import (
  Attribute,
  ClassificationResult,
  Function,
  Member,
  Parameter,
  Property,
  SkippedMember,
  SourcePosition,
  TypeDeclaration,
  UnsupportedMember,
)

__all__ = [
  "Attribute",
  "ClassificationResult",
  "Function",
  "Member",
  "Parameter",
  "Property",
  "SkippedMember",
  "SourcePosition",
  "TypeDeclaration",
  "UnsupportedMember",
]
