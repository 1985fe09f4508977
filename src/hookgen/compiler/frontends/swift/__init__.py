"""
Swift Frontend (Lexer, Parser & Lowering).

Handles the parsing of Swift source text into a declaration tree and the
lowering of that tree into the language-neutral `TypeDeclaration` model.
"""

from hookgen.compiler.frontends.swift.errors import SwiftSyntaxError
from hookgen.compiler.frontends.swift.lowering import DeclarationLowerer
from hookgen.compiler.frontends.swift.nodes import (
  Attribute,
  Binding,
  DeclNode,
  FunctionDecl,
  IfConfigClause,
  IfConfigDecl,
  Modifier,
  OtherDecl,
  ParameterNode,
  TypeDecl,
  VariableDecl,
)
from hookgen.compiler.frontends.swift.parser import SwiftParser
from hookgen.compiler.frontends.swift.tokens import SwiftLexer, Token, TokenType

__all__ = [
  "Attribute",
  "Binding",
  "DeclNode",
  "DeclarationLowerer",
  "FunctionDecl",
  "IfConfigClause",
  "IfConfigDecl",
  "Modifier",
  "OtherDecl",
  "ParameterNode",
  "SwiftLexer",
  "SwiftParser",
  "SwiftSyntaxError",
  "Token",
  "TokenType",
  "TypeDecl",
  "VariableDecl",
]
