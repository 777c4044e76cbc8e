"""
Token vocabulary for the Mazgamet programming language.

Classes:
    TokenKind: Closed enumeration of every lexical category the scanner can emit.
    Token: A single lexical unit with its kind, literal text, and source location.

Functions:
    lookup_ident(text): Map identifier text to a keyword kind or to IDENT.

The keyword table (`KEYWORDS`) is the single source of truth for reserved words.
Only the lexer consults it; the parser works purely on token kinds.

Example:
    >>> lookup_ident("let")
    <TokenKind.LET: 'LET'>
    >>> Token.from_char(TokenKind.PLUS, "+")
    Token(PLUS, +)

Exports:
    - TokenKind
    - Token
    - KEYWORDS
    - lookup_ident
"""

from enum import Enum
from typing import Any


class TokenKind(str, Enum):
    """Every token kind the Mazgamet lexer can produce.

    The value of each member is the text used when a kind is printed in
    diagnostics, e.g. ``expected next token to be =, got INT instead``.
    """

    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Identifiers and literals
    IDENT = "IDENT"
    INT = "INT"

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"

    LT = "<"
    GT = ">"

    EQ = "=="
    NOT_EQ = "!="

    # Delimiters
    COMMA = ","
    SEMICOLON = ";"

    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    # Keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self) -> str:
        return self.value


KEYWORDS: dict[str, TokenKind] = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
}


def lookup_ident(text: str) -> TokenKind:
    """Returns the keyword kind for `text`, or IDENT when it is not reserved.

    Args:
        text (str): Identifier text read by the lexer.

    Returns:
        TokenKind: The matching keyword kind, or ``TokenKind.IDENT``.
    """
    return KEYWORDS.get(text, TokenKind.IDENT)


class Token:
    """Represents a single lexical token in the Mazgamet language.

    Attributes:
        kind (TokenKind): The token's kind.
        literal (str): The exact source text matched (empty for EOF).
        line (int): The 1-based line number where the token starts, 0 if unknown.
        col (int): The 1-based column number where the token starts, 0 if unknown.
    """

    __slots__ = ("kind", "literal", "line", "col")

    def __init__(self, kind: TokenKind, literal: str, line: int = 0, col: int = 0):
        """Initializes a new Token instance.

        Args:
            kind (TokenKind): The token's kind.
            literal (str): The literal text of the token.
            line (int, optional): The line number (default is 0).
            col (int, optional): The column number (default is 0).
        """
        self.kind = kind
        self.literal = literal
        self.line = line
        self.col = col

    @classmethod
    def from_char(cls, kind: TokenKind, ch: str, line: int = 0, col: int = 0) -> "Token":
        """Builds a token whose literal is the single character `ch`.

        Raises:
            ValueError: If `ch` is not exactly one character long.
        """
        if len(ch) != 1:
            raise ValueError(f"Expected a single character literal, got {ch!r}")
        return cls(kind, ch, line, col)

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.literal})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.kind == other.kind
            and self.literal == other.literal
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.literal, self.line, self.col))


__all__ = ["KEYWORDS", "Token", "TokenKind", "lookup_ident"]
