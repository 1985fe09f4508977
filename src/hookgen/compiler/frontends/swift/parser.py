"""
Swift Declaration Parser.

This module provides the `SwiftParser`, a recursive descent parser that
converts a stream of tokens (from `SwiftLexer`) into the declaration tree
defined in `nodes.py`.

Capabilities:
- Declaration groups (class, struct, enum, actor, protocol, extension) with member blocks.
- Attributes (with argument lists) and modifiers (including ``private(set)``).
- ``var``/``let`` with multiple bindings, type annotations, initializers and accessor blocks.
- ``func`` signatures: generic clause, labels, types, defaults, effects and return clause.
- ``#if``/``#elseif``/``#else``/``#endif`` blocks.
- Statement bodies are skipped as balanced braces.

Top-level statements that are not declarations (script code) are skipped.
Inside member blocks anything that is not a declaration is a syntax error.
"""

import re
from typing import List, Optional, Set

from hookgen.compiler.frontends.swift.errors import SwiftSyntaxError
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
from hookgen.compiler.frontends.swift.tokens import SwiftLexer, Token, TokenType

TYPE_KEYWORDS = {"class", "struct", "enum", "actor", "protocol", "extension"}

OTHER_KEYWORDS = {
  "init",
  "deinit",
  "subscript",
  "typealias",
  "associatedtype",
  "case",
  "import",
  "operator",
  "precedencegroup",
  "macro",
}

DECL_KEYWORDS = TYPE_KEYWORDS | OTHER_KEYWORDS | {"var", "let", "func"}

MODIFIERS = {
  "private",
  "fileprivate",
  "internal",
  "public",
  "open",
  "package",
  "static",
  "class",
  "final",
  "override",
  "mutating",
  "nonmutating",
  "lazy",
  "weak",
  "unowned",
  "dynamic",
  "required",
  "convenience",
  "optional",
  "indirect",
  "nonisolated",
  "isolated",
  "distributed",
  "prefix",
  "postfix",
  "infix",
  "consuming",
  "borrowing",
  "__consuming",
}

ACCESSOR_KEYWORDS = {
  "get",
  "set",
  "willSet",
  "didSet",
  "init",
  "_read",
  "_modify",
  "unsafeAddress",
  "unsafeMutableAddress",
}

EFFECT_KEYWORDS = {"async", "throws", "rethrows", "reasync"}

_OPENERS = {TokenType.LBRACE, TokenType.LPAREN, TokenType.LBRACKET}
_CLOSERS = {TokenType.RBRACE, TokenType.RPAREN, TokenType.RBRACKET}
_WS_RUN = re.compile(r"\s+")


class SwiftParser:
  """
  Recursive descent parser for Swift declarations.
  """

  def __init__(self, code: str):
    """
    Initialize the parser.

    Args:
        code: The raw Swift source string.

    Raises:
        SwiftSyntaxError: If the source cannot be tokenized.
    """
    self.code = code
    self.lexer = SwiftLexer()
    self.tokens = list(self.lexer.tokenize(code))
    self.pos = 0

  def parse(self) -> List[DeclNode]:
    """
    Parses the entire source file.

    Returns:
        Top-level declarations in source order.
    """
    nodes = []
    while not self._is_eof():
      if self._match(TokenType.SEMICOLON):
        self._consume()
        continue
      if self._match(TokenType.RBRACE):
        tok = self._consume()
        raise SwiftSyntaxError("Unbalanced '}'", tok.line, tok.column)
      node = self._parse_declaration(strict=False)
      if node is not None:
        nodes.append(node)
    return nodes

  # --- Token Helpers ---

  def _peek(self, offset: int = 0) -> Optional[Token]:
    """Looks ahead at the pending token."""
    if self.pos + offset < len(self.tokens):
      return self.tokens[self.pos + offset]
    return None

  def _consume(self, kind: Optional[TokenType] = None, value: Optional[str] = None) -> Token:
    """
    Consumes the current token.

    Args:
        kind: If provided, enforces that the current token matches this type.
        value: If provided, enforces that the current token has this text.

    Raises:
        SwiftSyntaxError: If end of file or mismatch.
    """
    token = self._peek()
    if not token:
      last = self.tokens[-1] if self.tokens else None
      raise SwiftSyntaxError(
        "Unexpected end of file",
        last.line if last else None,
        last.column if last else None,
      )

    if kind and token.kind != kind:
      raise SwiftSyntaxError(f"Expected {kind.name}, got '{token.value}'", token.line, token.column)
    if value is not None and token.value != value:
      raise SwiftSyntaxError(f"Expected '{value}', got '{token.value}'", token.line, token.column)

    self.pos += 1
    return token

  def _is_eof(self) -> bool:
    return self.pos >= len(self.tokens)

  def _match(self, kind: TokenType, value: Optional[str] = None, offset: int = 0) -> bool:
    """Checks if the token at `offset` matches kind (and value)."""
    token = self._peek(offset)
    if token is None or token.kind != kind:
      return False
    return value is None or token.value == value

  def _match_identifier(self, values: Set[str], offset: int = 0) -> bool:
    token = self._peek(offset)
    return token is not None and token.kind == TokenType.IDENTIFIER and token.value in values

  def _starts_declaration(self, token: Token) -> bool:
    if token.kind in (TokenType.ATTRIBUTE, TokenType.DIRECTIVE):
      return True
    return token.kind == TokenType.IDENTIFIER and (token.value in DECL_KEYWORDS or token.value in MODIFIERS)

  def _text(self, first: Token, last: Token) -> str:
    """Source text spanning two tokens, with whitespace runs collapsed."""
    return _WS_RUN.sub(" ", self.code[first.start : last.end])

  def _skip_balanced(self) -> Token:
    """
    Consumes a bracketed group starting at the current opener.

    Returns:
        The matching closing token.
    """
    opener = self._consume()
    closer_kind = {
      TokenType.LBRACE: TokenType.RBRACE,
      TokenType.LPAREN: TokenType.RPAREN,
      TokenType.LBRACKET: TokenType.RBRACKET,
      TokenType.LANGLE: TokenType.RANGLE,
    }[opener.kind]
    depth = 1
    while True:
      token = self._peek()
      if token is None:
        raise SwiftSyntaxError(f"Unclosed '{opener.value}'", opener.line, opener.column)
      self._consume()
      if token.kind == opener.kind:
        depth += 1
      elif token.kind == closer_kind:
        depth -= 1
        if depth == 0:
          return token

  def _skip_to_declaration_end(self) -> None:
    """
    Consumes tokens until the current declaration or statement ends.

    Ends at a top-level ``;`` (consumed), before a closing ``}`` of the
    enclosing block, or before a token on a new line that begins a declaration.
    """
    depth = 0
    consumed = False
    while not self._is_eof():
      token = self._peek()
      if depth == 0:
        if token.kind == TokenType.RBRACE:
          return
        if token.kind == TokenType.SEMICOLON:
          self._consume()
          return
        if consumed and token.newline_before and self._starts_declaration(token):
          return
      if token.kind in _OPENERS:
        depth += 1
      elif token.kind in _CLOSERS:
        depth -= 1
      self._consume()
      consumed = True

  # --- Declarations ---

  def _parse_declaration(self, strict: bool) -> Optional[DeclNode]:
    """
    Parses one declaration (attributes, modifiers and the declaration proper).

    Args:
        strict: If True, tokens that cannot start a declaration raise an error.
            Otherwise they are skipped as script statements.
    """
    first = self._peek()

    if first.kind == TokenType.DIRECTIVE:
      if first.value == "#if":
        return self._parse_if_config(strict)
      return self._parse_directive_decl()

    attributes = self._parse_attributes()
    modifiers = self._parse_modifiers()

    token = self._peek()
    if token is None:
      raise SwiftSyntaxError("Expected declaration after attributes", first.line, first.column)

    keyword = token.value if token.kind == TokenType.IDENTIFIER else ""
    node: Optional[DeclNode] = None

    if keyword in TYPE_KEYWORDS:
      node = self._parse_type_decl()
    elif keyword in ("var", "let"):
      node = self._parse_variable()
    elif keyword == "func":
      node = self._parse_function()
    elif keyword in OTHER_KEYWORDS:
      node = self._parse_other()
    elif strict or attributes or modifiers:
      raise SwiftSyntaxError(f"Expected declaration, got '{token.value}'", token.line, token.column)
    else:
      self._skip_to_declaration_end()
      return None

    node.attributes = attributes
    node.modifiers = modifiers
    node.line = first.line
    node.column = first.column
    return node

  def _parse_attributes(self) -> List[Attribute]:
    attributes = []
    while self._match(TokenType.ATTRIBUTE):
      tok = self._consume()
      end = tok.end
      nxt = self._peek()
      # Arguments must be attached, e.g. @available(iOS 15, *)
      if nxt is not None and nxt.kind == TokenType.LPAREN and nxt.start == tok.end:
        end = self._skip_balanced().end
      attributes.append(Attribute(tok.value[1:], tok.line, tok.column, tok.start, end))
    return attributes

  def _parse_modifiers(self) -> List[Modifier]:
    modifiers = []
    while self._match_identifier(MODIFIERS):
      tok = self._peek()
      nxt = self._peek(1)
      # 'class' is a modifier only when another modifier or a member keyword follows
      if tok.value == "class":
        if nxt is None or nxt.kind != TokenType.IDENTIFIER:
          break
        if nxt.value not in MODIFIERS and nxt.value not in ("var", "let", "func", "subscript"):
          break
      self._consume()
      detail = None
      if (
        self._match(TokenType.LPAREN)
        and self._match(TokenType.IDENTIFIER, offset=1)
        and self._match(TokenType.RPAREN, offset=2)
      ):
        self._consume()
        detail = self._consume().value
        self._consume()
      modifiers.append(Modifier(tok.value, detail))
    return modifiers

  def _parse_type_decl(self) -> TypeDecl:
    keyword = self._consume(TokenType.IDENTIFIER).value
    node = TypeDecl(keyword=keyword)

    if keyword == "extension":
      node.name = self._parse_type_text(stop_words={"where"})
    else:
      node.name = self._consume(TokenType.IDENTIFIER).value
      if self._match(TokenType.LANGLE):
        start = self._peek()
        end = self._skip_balanced()
        node.generic_clause = self._text(start, end)

    if self._match(TokenType.COLON):
      self._consume()
      while True:
        node.inheritance.append(self._parse_type_text(stop_words={"where"}))
        if not self._match(TokenType.COMMA):
          break
        self._consume()

    if self._match_identifier({"where"}):
      while not self._is_eof() and not self._match(TokenType.LBRACE):
        self._consume()

    node.members = self._parse_member_block()
    return node

  def _parse_member_block(self) -> List[DeclNode]:
    self._consume(TokenType.LBRACE)
    members = []
    while not self._match(TokenType.RBRACE):
      if self._is_eof():
        raise SwiftSyntaxError("Unexpected end of file in member block")
      if self._match(TokenType.SEMICOLON):
        self._consume()
        continue
      members.append(self._parse_declaration(strict=True))
    self._consume(TokenType.RBRACE)
    return members

  def _parse_variable(self) -> VariableDecl:
    keyword = self._consume(TokenType.IDENTIFIER).value
    node = VariableDecl(keyword=keyword)

    while True:
      node.bindings.append(self._parse_binding())
      if not self._match(TokenType.COMMA):
        break
      self._consume()

    return node

  def _parse_binding(self) -> Binding:
    token = self._peek()
    if token is not None and token.kind == TokenType.LPAREN:
      end = self._skip_balanced()
      binding = Binding(name=self._text(token, end), is_pattern=True)
    else:
      binding = Binding(name=self._consume(TokenType.IDENTIFIER).value)

    if self._match(TokenType.COLON):
      self._consume()
      binding.type_annotation = self._parse_type_text()

    if self._match(TokenType.OPERATOR, "="):
      self._consume()
      binding.initializer = self._parse_expression()

    if self._match(TokenType.LBRACE):
      binding.accessors = self._parse_accessor_block()

    return binding

  def _parse_accessor_block(self) -> List[str]:
    """
    Parses ``{ ... }`` after a binding.

    Returns:
        The accessor kinds written in the block, or ``["get"]`` for an implicit getter.
    """
    if not self._looks_like_accessor_list():
      self._skip_balanced()
      return ["get"]

    self._consume(TokenType.LBRACE)
    accessors = []
    while not self._match(TokenType.RBRACE):
      self._parse_attributes()
      while self._match_identifier({"mutating", "nonmutating", "__consuming"}):
        self._consume()
      tok = self._consume(TokenType.IDENTIFIER)
      if tok.value not in ACCESSOR_KEYWORDS:
        raise SwiftSyntaxError(f"Expected accessor, got '{tok.value}'", tok.line, tok.column)
      accessors.append(tok.value)
      if self._match(TokenType.LPAREN):
        self._skip_balanced()
      while self._match_identifier(EFFECT_KEYWORDS):
        self._consume()
        if self._match(TokenType.LPAREN):
          self._skip_balanced()
      if self._match(TokenType.LBRACE):
        self._skip_balanced()
    self._consume(TokenType.RBRACE)
    return accessors

  def _looks_like_accessor_list(self) -> bool:
    offset = 1
    while self._match(TokenType.ATTRIBUTE, offset=offset) or self._match_identifier(
      {"mutating", "nonmutating", "__consuming"}, offset=offset
    ):
      offset += 1
    if not self._match_identifier(ACCESSOR_KEYWORDS, offset=offset):
      return False
    # `get` used as an expression (e.g. `{ get() }`) is not an accessor
    nxt = self._peek(offset + 1)
    if nxt is None:
      return True
    if nxt.kind == TokenType.LPAREN:
      return self._peek(offset).value != "get"
    return nxt.kind in (TokenType.LBRACE, TokenType.RBRACE, TokenType.IDENTIFIER)

  def _parse_function(self) -> FunctionDecl:
    self._consume(TokenType.IDENTIFIER, "func")
    node = FunctionDecl()

    if self._match(TokenType.IDENTIFIER):
      node.name = self._consume().value
    else:
      node.name = self._parse_operator_name()
      node.is_operator = True

    if self._match(TokenType.LANGLE):
      start = self._peek()
      end = self._skip_balanced()
      node.generic_clause = self._text(start, end)

    node.parameters = self._parse_parameter_clause()

    while self._match_identifier(EFFECT_KEYWORDS):
      node.effects.append(self._consume().value)
      if self._match(TokenType.LPAREN):
        self._skip_balanced()

    if self._match(TokenType.ARROW):
      self._consume()
      node.return_type = self._parse_type_text(stop_words={"where"})

    if self._match_identifier({"where"}):
      while not self._is_eof() and not self._match(TokenType.LBRACE) and not self._match(TokenType.RBRACE):
        self._consume()

    if self._match(TokenType.LBRACE):
      self._skip_balanced()
      node.has_body = True

    return node

  def _parse_operator_name(self) -> str:
    first = self._peek()
    if first is None or first.kind not in (
      TokenType.OPERATOR,
      TokenType.LANGLE,
      TokenType.RANGLE,
      TokenType.DOT,
      TokenType.ELLIPSIS,
    ):
      tok = first or self.tokens[-1]
      raise SwiftSyntaxError("Expected function name", tok.line, tok.column)
    last = self._consume()
    while True:
      nxt = self._peek()
      if nxt is None or nxt.start != last.end or nxt.kind not in (
        TokenType.OPERATOR,
        TokenType.RANGLE,
        TokenType.DOT,
        TokenType.ELLIPSIS,
      ):
        break
      last = self._consume()
    return self.code[first.start : last.end]

  def _parse_parameter_clause(self) -> List[ParameterNode]:
    self._consume(TokenType.LPAREN)
    params = []
    while not self._match(TokenType.RPAREN):
      self._parse_attributes()
      first = self._consume(TokenType.IDENTIFIER).value
      param = ParameterNode(first_name=first)
      if self._match(TokenType.IDENTIFIER):
        param.second_name = self._consume().value
      self._consume(TokenType.COLON)
      param.type_annotation = self._parse_type_text()
      if self._match(TokenType.OPERATOR, "="):
        self._consume()
        param.default = self._parse_expression()
      params.append(param)
      if not self._match(TokenType.COMMA):
        break
      self._consume()
    self._consume(TokenType.RPAREN)
    return params

  def _parse_other(self) -> OtherDecl:
    keyword = self._consume(TokenType.IDENTIFIER).value
    node = OtherDecl(keyword=keyword)
    if keyword not in ("init", "deinit", "subscript") and self._match(TokenType.IDENTIFIER):
      node.name = self._peek().value
    self._skip_to_declaration_end()
    return node

  def _parse_directive_decl(self) -> OtherDecl:
    """Parses freestanding directives like ``#warning("...")`` or ``#sourceLocation(...)``."""
    tok = self._consume(TokenType.DIRECTIVE)
    if tok.value in ("#elseif", "#else", "#endif"):
      raise SwiftSyntaxError(f"Unexpected '{tok.value}'", tok.line, tok.column)
    if self._match(TokenType.LPAREN):
      self._skip_balanced()
    return OtherDecl(keyword=tok.value, line=tok.line, column=tok.column)

  def _parse_if_config(self, strict: bool) -> IfConfigDecl:
    first = self._peek()
    node = IfConfigDecl(line=first.line, column=first.column)

    while True:
      directive = self._consume(TokenType.DIRECTIVE)
      if directive.value == "#endif":
        break
      if directive.value not in ("#if", "#elseif", "#else"):
        raise SwiftSyntaxError(f"Unexpected '{directive.value}'", directive.line, directive.column)

      clause = IfConfigClause(directive=directive.value)
      if directive.value != "#else":
        clause.condition = self._parse_condition(directive)

      while True:
        token = self._peek()
        if token is None:
          raise SwiftSyntaxError("Unterminated '#if'", first.line, first.column)
        if token.kind == TokenType.DIRECTIVE and token.value in ("#elseif", "#else", "#endif"):
          break
        if token.kind == TokenType.SEMICOLON:
          self._consume()
          continue
        if token.kind == TokenType.RBRACE:
          raise SwiftSyntaxError("Unterminated '#if'", first.line, first.column)
        member = self._parse_declaration(strict=strict)
        if member is not None:
          clause.members.append(member)

      node.clauses.append(clause)

    return node

  def _parse_condition(self, directive: Token) -> str:
    """Consumes the rest of the directive's line as its condition."""
    first = self._peek()
    last = None
    while not self._is_eof():
      token = self._peek()
      if last is not None and token.newline_before:
        break
      if last is None and token.newline_before:
        raise SwiftSyntaxError(f"Expected condition after '{directive.value}'", directive.line, directive.column)
      last = self._consume()
    if last is None:
      raise SwiftSyntaxError(f"Expected condition after '{directive.value}'", directive.line, directive.column)
    return self._text(first, last)

  # --- Types & Expressions ---

  def _parse_type_text(self, stop_words: Optional[Set[str]] = None) -> str:
    """
    Consumes a type and returns its verbatim text.

    Stops at a top-level ``,``, ``;``, ``=``, ``{`` or closing bracket, at any of
    `stop_words`, or at a line break that does not continue the type.
    """
    stop_words = stop_words or set()
    first = self._peek()
    last: Optional[Token] = None
    depth = 0

    while not self._is_eof():
      token = self._peek()
      if depth == 0:
        if token.kind in (
          TokenType.COMMA,
          TokenType.COLON,
          TokenType.SEMICOLON,
          TokenType.LBRACE,
          TokenType.RBRACE,
          TokenType.RPAREN,
          TokenType.RBRACKET,
          TokenType.RANGLE,
        ):
          break
        if token.kind == TokenType.OPERATOR and token.value.startswith("="):
          break
        if token.kind == TokenType.IDENTIFIER and token.value in stop_words:
          break
        if (
          last is not None
          and token.newline_before
          and last.kind not in (TokenType.ARROW, TokenType.DOT)
          and token.kind not in (TokenType.ARROW, TokenType.DOT)
        ):
          break
      if token.kind in (TokenType.LPAREN, TokenType.LBRACKET, TokenType.LANGLE):
        depth += 1
      elif token.kind in (TokenType.RPAREN, TokenType.RBRACKET, TokenType.RANGLE):
        depth -= 1
      last = self._consume()

    if last is None:
      tok = first or (self.tokens[-1] if self.tokens else None)
      raise SwiftSyntaxError("Expected type", tok.line if tok else None, tok.column if tok else None)
    return self._text(first, last)

  def _parse_expression(self) -> str:
    """
    Consumes an initializer or default value expression and returns its text.

    A ``{`` that opens a ``willSet``/``didSet`` block ends the expression; any
    other brace (closures) is part of it.
    """
    first = self._peek()
    last: Optional[Token] = None
    depth = 0

    while not self._is_eof():
      token = self._peek()
      if depth == 0:
        if token.kind in (TokenType.COMMA, TokenType.SEMICOLON) or token.kind in _CLOSERS:
          break
        if last is not None and token.newline_before and self._starts_declaration(token):
          break
        if token.kind == TokenType.LBRACE and self._match_identifier({"willSet", "didSet"}, offset=1):
          break
      if token.kind in _OPENERS:
        depth += 1
      elif token.kind in _CLOSERS:
        depth -= 1
      last = self._consume()

    if last is None:
      tok = first or (self.tokens[-1] if self.tokens else None)
      raise SwiftSyntaxError("Expected expression", tok.line if tok else None, tok.column if tok else None)
    return self._text(first, last)
