"""
Swift Tokenizer Definition.

Provides a Regex-based Lexer (`SwiftLexer`) that decomposes Swift source text
into a stream of typed `Token` objects. Only the lexical structure needed to
recognise declarations is modelled: identifiers, attributes (`@objc`),
compiler directives (`#if`), literals, operators and punctuation.

Comments are consumed but not emitted. Each token records whether a line
break preceded it, which the parser uses to end initializer expressions
and type annotations.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Generator

from hookgen.compiler.frontends.swift.errors import SwiftSyntaxError


class TokenType(Enum):
  """Enumeration of Swift token types."""

  # Structural
  LBRACE = auto()  # {
  RBRACE = auto()  # }
  LPAREN = auto()  # (
  RPAREN = auto()  # )
  LBRACKET = auto()  # [
  RBRACKET = auto()  # ]
  LANGLE = auto()  # <
  RANGLE = auto()  # >
  COMMA = auto()  # ,
  COLON = auto()  # :
  SEMICOLON = auto()  # ;
  DOT = auto()  # .
  ARROW = auto()  # ->
  ELLIPSIS = auto()  # ... or ..<

  # Names
  ATTRIBUTE = auto()  # @objc, @MainActor
  DIRECTIVE = auto()  # #if, #endif, #selector
  IDENTIFIER = auto()  # foo, `default`, $0

  # Literals & Operators
  STRING = auto()
  NUMBER = auto()
  OPERATOR = auto()  # =, ?, !, ==, &&, ...


_PUNCTUATION = {
  "{": TokenType.LBRACE,
  "}": TokenType.RBRACE,
  "(": TokenType.LPAREN,
  ")": TokenType.RPAREN,
  "[": TokenType.LBRACKET,
  "]": TokenType.RBRACKET,
  "<": TokenType.LANGLE,
  ">": TokenType.RANGLE,
  ",": TokenType.COMMA,
  ":": TokenType.COLON,
  ";": TokenType.SEMICOLON,
  ".": TokenType.DOT,
}


@dataclass
class Token:
  """
  Represents a lexical unit.

  Attributes:
      kind: The type of token.
      value: The raw string value.
      line: Line number in source (1-based).
      column: Column number in source (1-based).
      start: Offset of the first character in the source.
      end: Offset one past the last character in the source.
      newline_before: True if a line break separates this token from the previous one.
  """

  kind: TokenType
  value: str
  line: int
  column: int
  start: int
  end: int
  newline_before: bool = False


class SwiftLexer:
  """
  Regex-based Lexer for Swift declarations.
  """

  # Compiled Regex Patterns (Order matters for priority).
  # String literals are scanned by `_scan_string`, since interpolations nest.
  PATTERNS = [
    (TokenType.ATTRIBUTE, r"@[^\W\d]\w*"),
    (TokenType.DIRECTIVE, r"#[^\W\d]\w*"),
    (TokenType.IDENTIFIER, r"`[^`\n]+`"),
    (TokenType.IDENTIFIER, r"\$\w+"),
    (TokenType.IDENTIFIER, r"[^\W\d]\w*"),
    (TokenType.NUMBER, r"0[xob][0-9a-fA-F_]+"),
    (TokenType.NUMBER, r"\d[\d_]*(?:\.\d[\d_]*)?(?:[eE][-+]?\d+)?"),
    (TokenType.ARROW, r"->"),
    (TokenType.ELLIPSIS, r"\.\.[.<]"),
    (TokenType.OPERATOR, r"[/=\-+!*%&|^~?\\]+"),
  ]

  _WHITESPACE = re.compile(r"\s+")
  _STRING_START = re.compile(r'#*"')

  def __init__(self) -> None:
    """Initializes the lexer with compiled patterns."""
    self.regex_pairs = [(kind, re.compile(pattern)) for kind, pattern in self.PATTERNS]

  def tokenize(self, text: str) -> Generator[Token, None, None]:
    """
    Tokenizes the input string.

    Args:
        text: Raw Swift source code.

    Yields:
        Token objects.

    Raises:
        SwiftSyntaxError: If an unrecognized character or an unterminated comment is encountered.
    """
    pos = 0
    line_num = 1
    line_start = 0
    length = len(text)
    saw_newline = False

    while pos < length:
      match_ws = self._WHITESPACE.match(text, pos)
      if match_ws:
        ws_str = match_ws.group(0)
        newlines = ws_str.count("\n")
        if newlines > 0:
          saw_newline = True
          line_num += newlines
          line_start = pos + ws_str.rfind("\n") + 1
        pos = match_ws.end()
        continue

      # Line comment
      if text.startswith("//", pos):
        end = text.find("\n", pos)
        pos = length if end == -1 else end
        continue

      # Block comments nest in Swift
      if text.startswith("/*", pos):
        end = self._skip_block_comment(text, pos, line_num, pos - line_start + 1)
        chunk = text[pos:end]
        newlines = chunk.count("\n")
        if newlines:
          saw_newline = True
          line_num += newlines
          line_start = pos + chunk.rfind("\n") + 1
        pos = end
        continue

      column = pos - line_start + 1
      char = text[pos]

      if char in _PUNCTUATION and not text.startswith("...", pos) and not text.startswith("..<", pos):
        yield Token(_PUNCTUATION[char], char, line_num, column, pos, pos + 1, saw_newline)
        saw_newline = False
        pos += 1
        continue

      kind = None
      end = pos
      if self._STRING_START.match(text, pos):
        kind = TokenType.STRING
        end = self._scan_string(text, pos, line_num, column)
      else:
        for candidate, regex in self.regex_pairs:
          match = regex.match(text, pos)
          if match:
            kind = candidate
            end = match.end()
            break

      if kind is None:
        snippet = text[pos : min(pos + 10, length)]
        raise SwiftSyntaxError(f"Illegal character '{snippet}...'", line_num, column)

      val = text[pos:end]
      yield Token(kind, val, line_num, column, pos, end, saw_newline)
      saw_newline = False

      # Multi-line strings advance the line counter
      newlines = val.count("\n")
      if newlines:
        line_num += newlines
        line_start = pos + val.rfind("\n") + 1

      pos = end

  @classmethod
  def _scan_string(cls, text: str, pos: int, line: int, column: int) -> int:
    """
    Returns the offset just past the string literal starting at `pos`.

    Handles raw delimiters (``#"..."#``), multi-line literals and escapes.
    Interpolations (``\\(...)``) are skipped with a parenthesis depth counter,
    so string literals nested inside them may contain any character.
    """
    length = len(text)
    hashes = 0
    while text[pos] == "#":
      hashes += 1
      pos += 1
    multiline = text.startswith('"""', pos)
    quote = '"""' if multiline else '"'
    closer = quote + "#" * hashes
    escape = "\\" + "#" * hashes
    pos += len(quote)

    while pos < length:
      if text.startswith(closer, pos):
        return pos + len(closer)
      if text.startswith(escape, pos):
        pos += len(escape)
        if text.startswith("(", pos):
          pos = cls._skip_interpolation(text, pos, line, column)
        else:
          pos += 1
        continue
      if text[pos] == "\n" and not multiline:
        break
      pos += 1
    raise SwiftSyntaxError("Unterminated string literal", line, column)

  @classmethod
  def _skip_interpolation(cls, text: str, pos: int, line: int, column: int) -> int:
    """Returns the offset just past the parenthesized interpolation starting at `pos`."""
    depth = 0
    length = len(text)
    while pos < length:
      if cls._STRING_START.match(text, pos):
        pos = cls._scan_string(text, pos, line, column)
        continue
      char = text[pos]
      if char == "(":
        depth += 1
      elif char == ")":
        depth -= 1
        if depth == 0:
          return pos + 1
      pos += 1
    raise SwiftSyntaxError("Unterminated string interpolation", line, column)

  @staticmethod
  def _skip_block_comment(text: str, pos: int, line: int, column: int) -> int:
    """Returns the offset just past the (possibly nested) block comment starting at `pos`."""
    depth = 0
    length = len(text)
    while pos < length:
      if text.startswith("/*", pos):
        depth += 1
        pos += 2
      elif text.startswith("*/", pos):
        depth -= 1
        pos += 2
        if depth == 0:
          return pos
      else:
        pos += 1
    raise SwiftSyntaxError("Unterminated block comment", line, column)
