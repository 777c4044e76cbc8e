"""
Lexical analyzer for the Mazgamet programming language.

Converts raw source bytes into tokens, one token per call to `Lexer.next_token()`.

Classes:
    Lexer: Byte-oriented scanner with one byte of lookahead.

Functions:
    tokenize(source): Scan a whole source text into a list of tokens ending in EOF.

Features:
    - Skips whitespace (space, tab, newline, carriage return)
    - Single-byte punctuation and operators: ; ( ) , + - / * < > { }
    - Two-byte operators == and != with fallback to = and !
    - Identifiers (letters and underscores) checked against the keyword table
    - Integer literals (digit runs, kept as text)
    - Any other byte becomes an ILLEGAL token; nothing is raised

Scanning is byte-oriented: source text is treated as an ASCII superset and each
byte of a multi-byte character is reported as its own ILLEGAL token.

Example:
    >>> lexer = Lexer("let x = 5;")
    >>> lexer.next_token()
    Token(LET, let)

Exports:
    - Lexer
    - tokenize
"""

import logging
from collections.abc import Callable

from mazgamet.mazgamet_log import trace
from mazgamet.mazgamet_token import Token, TokenKind, lookup_ident

logger = logging.getLogger("mazgamet.lexer")

WHITESPACE = frozenset(b" \t\n\r")

SINGLE_BYTE_TOKENS: dict[int, TokenKind] = {
    ord(";"): TokenKind.SEMICOLON,
    ord("("): TokenKind.LPAREN,
    ord(")"): TokenKind.RPAREN,
    ord(","): TokenKind.COMMA,
    ord("+"): TokenKind.PLUS,
    ord("-"): TokenKind.MINUS,
    ord("/"): TokenKind.SLASH,
    ord("*"): TokenKind.ASTERISK,
    ord("<"): TokenKind.LT,
    ord(">"): TokenKind.GT,
    ord("{"): TokenKind.LBRACE,
    ord("}"): TokenKind.RBRACE,
}

# first byte -> (kind alone, kind when followed by "=")
TWO_BYTE_TOKENS: dict[int, tuple[TokenKind, TokenKind]] = {
    ord("="): (TokenKind.ASSIGN, TokenKind.EQ),
    ord("!"): (TokenKind.BANG, TokenKind.NOT_EQ),
}


def is_letter(ch: int) -> bool:
    return ord("a") <= ch <= ord("z") or ord("A") <= ch <= ord("Z") or ch == ord("_")


def is_digit(ch: int) -> bool:
    return ord("0") <= ch <= ord("9")


class Lexer:
    """Lexical analyzer for the Mazgamet language.

    The lexer owns an immutable byte buffer and walks it once, front to back.
    Once a token is returned the bytes behind it are never looked at again.
    After the input is exhausted every call returns an EOF token with an
    empty literal.

    Attributes:
        input (bytes): The source being scanned.
        position (int): Index of the current byte.
        read_position (int): Index of the next byte to read; always position + 1.
        ch (int | None): The current byte, or None at end of input.
        line (int): 1-based line of the current byte.
        col (int): 1-based column of the current byte.
    """

    def __init__(self, source: str | bytes) -> None:
        """Initializes the lexer and reads the first byte.

        Args:
            source (str | bytes): Source text. Strings are encoded as UTF-8.
        """
        self.input: bytes = (
            source.encode("utf-8") if isinstance(source, str) else bytes(source)
        )
        self.position = 0
        self.read_position = 0
        self.ch: int | None = None
        self.line = 1
        self.col = 0
        self.read_char()
        logger.debug("Created lexer over %d bytes", len(self.input))

    def read_char(self) -> None:
        """Advances one byte, updating the current byte and its location."""
        if self.ch == ord("\n"):
            self.line += 1
            self.col = 1
        else:
            self.col += 1

        if self.read_position >= len(self.input):
            self.ch = None
            trace(logger, "read_char: EOF at position %d", self.read_position)
        else:
            self.ch = self.input[self.read_position]
            trace(
                logger, "read_char: %r at position %d", chr(self.ch), self.read_position
            )
        self.position = self.read_position
        self.read_position += 1

    def peek_char(self) -> int | None:
        """Returns the byte after the current one without consuming it."""
        if self.read_position >= len(self.input):
            return None
        return self.input[self.read_position]

    def skip_whitespace(self) -> None:
        start = self.position
        while self.ch is not None and self.ch in WHITESPACE:
            self.read_char()
        if start != self.position:
            trace(logger, "Skipped whitespace from %d to %d", start, self.position)

    def read_while(self, predicate: Callable[[int], bool]) -> str:
        """Consumes bytes while `predicate` holds and returns them as text."""
        start = self.position
        while self.ch is not None and predicate(self.ch):
            self.read_char()
        return self.input[start : self.position].decode("ascii")

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the input.

        Returns:
            Token: The next token. ILLEGAL for an unrecognised byte, EOF
            (repeatedly) once the input is exhausted.
        """
        self.skip_whitespace()
        line, col = self.line, self.col
        ch = self.ch

        if ch is None:
            token = Token(TokenKind.EOF, "", line, col)
        elif ch in TWO_BYTE_TOKENS:
            single, double = TWO_BYTE_TOKENS[ch]
            if self.peek_char() == ord("="):
                self.read_char()
                self.read_char()
                token = Token(double, double.value, line, col)
            else:
                self.read_char()
                token = Token.from_char(single, chr(ch), line, col)
        elif ch in SINGLE_BYTE_TOKENS:
            self.read_char()
            token = Token.from_char(SINGLE_BYTE_TOKENS[ch], chr(ch), line, col)
        elif is_letter(ch):
            literal = self.read_while(is_letter)
            token = Token(lookup_ident(literal), literal, line, col)
        elif is_digit(ch):
            literal = self.read_while(is_digit)
            token = Token(TokenKind.INT, literal, line, col)
        else:
            self.read_char()
            # latin-1 keeps one character per byte
            token = Token(TokenKind.ILLEGAL, bytes([ch]).decode("latin-1"), line, col)

        logger.debug(
            "Returning token %s %r at %d:%d", token.kind.name, token.literal, line, col
        )
        return token


def tokenize(source: str | bytes) -> list[Token]:
    """Scans `source` completely.

    Returns:
        list[Token]: Every token in order, ending with exactly one EOF token.
    """
    lexer = Lexer(source)
    tokens = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.kind == TokenKind.EOF:
            break
    return tokens


__all__ = ["Lexer", "tokenize"]
