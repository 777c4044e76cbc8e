"""
Mazgamet Language Parser

Parses the Mazgamet token stream into a `Program` syntax tree using top-down
operator precedence (Pratt) parsing.

Supported Constructs
--------------------
- Statements:
    * `let <ident> = <initializer>;` (initializer skipped, see below)
    * `return <value>;` (value skipped, see below)
    * Bare expressions, optionally terminated by `;`

- Expressions:
    * Identifiers, integer literals, `true` / `false`
    * Prefix operators: `!x`, `-x`
    * Binary operators: `+ - * / < > == !=`
    * Grouping: `(a + b) * c`
    * Conditionals: `if (cond) { ... } else { ... }`
    * Function literals: `fn(x, y) { x + y; }`
    * Calls: `add(1, 2 * 3)`

Let initializers and return values are not parsed structurally yet: the parser
steps over them up to the terminating semicolon and builds the statement
without a value.

Parser Behavior
---------------
- Pulls tokens from the lexer one at a time, keeping `current_token` and one
  token of lookahead in `peek_token`.
- Never raises on bad input. Syntax errors are appended to `errors` and the
  offending statement is dropped; parsing continues with the next token so a
  single pass reports as many problems as possible.
- Expressions nested deeper than `MAX_NESTING` and blocks missing their
  closing `}` are reported as errors like any other.
- Prefix and infix parse functions are registered per token kind when the
  parser is built and never change afterwards.

Entry Points
------------
- `Parser(lexer).parse_program()`: Parse a whole source text.
- `parse(source)`: Convenience returning the program and its error list.
"""

import logging
from collections.abc import Callable
from enum import IntEnum

from mazgamet.mazgamet_ast import (
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from mazgamet.mazgamet_lexer import Lexer
from mazgamet.mazgamet_token import Token, TokenKind

logger = logging.getLogger("mazgamet.parser")

PrefixParseFn = Callable[[], Expression | None]
InfixParseFn = Callable[[Expression], Expression | None]


class Precedence(IntEnum):
    """Binding power of operators, weakest first."""

    LOWEST = 1
    EQUALS = 2  # ==
    LESSGREATER = 3  # > or <
    SUM = 4  # +
    PRODUCT = 5  # *
    PREFIX = 6  # -X or !X
    CALL = 7  # myFunction(X)


PRECEDENCES: dict[TokenKind, Precedence] = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
}

# Deepest expression nesting, blocks included. One level costs at most five
# interpreter frames.
MAX_NESTING = 128


class Parser:
    """
    Mazgamet Parser Class

    Turns the token stream of a `Lexer` into a `Program`. The parser exclusively
    owns its lexer; run independent parses with independent parsers.

    Attributes
    ----------
    lexer : Lexer
        The token source.
    current_token : Token
        The token under examination.
    peek_token : Token
        The token after `current_token`.
    errors : list[str]
        Syntax errors recorded so far, in the order they were found.

    Methods
    -------
    parse_program() -> Program
        Parse statements until end of input.
    parse_statement() -> Statement | None
        Parse the statement starting at `current_token`.
    parse_expression(precedence) -> Expression | None
        Pratt loop: parse an expression whose operators bind tighter than `precedence`.
    expect_peek(kind) -> bool
        Advance if the next token has `kind`, otherwise record an error.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self._errors: list[str] = []
        self.nesting = 0
        self.current_token = Token(TokenKind.EOF, "")
        self.peek_token = Token(TokenKind.EOF, "")

        self.prefix_parse_fns: dict[TokenKind, PrefixParseFn] = {
            TokenKind.IDENT: self.parse_identifier,
            TokenKind.INT: self.parse_integer_literal,
            TokenKind.TRUE: self.parse_boolean,
            TokenKind.FALSE: self.parse_boolean,
            TokenKind.BANG: self.parse_prefix_expression,
            TokenKind.MINUS: self.parse_prefix_expression,
            TokenKind.LPAREN: self.parse_grouped_expression,
            TokenKind.IF: self.parse_if_expression,
            TokenKind.FUNCTION: self.parse_function_literal,
        }

        self.infix_parse_fns: dict[TokenKind, InfixParseFn] = {
            kind: self.parse_infix_expression
            for kind in (
                TokenKind.PLUS,
                TokenKind.MINUS,
                TokenKind.SLASH,
                TokenKind.ASTERISK,
                TokenKind.EQ,
                TokenKind.NOT_EQ,
                TokenKind.LT,
                TokenKind.GT,
            )
        }
        self.infix_parse_fns[TokenKind.LPAREN] = self.parse_call_expression

        # Fill current_token and peek_token
        self.advance()
        self.advance()

    @property
    def errors(self) -> list[str]:
        return self._errors

    # Token cursor

    def advance(self) -> None:
        self.current_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def current_token_is(self, kind: TokenKind) -> bool:
        return self.current_token.kind == kind

    def peek_token_is(self, kind: TokenKind) -> bool:
        return self.peek_token.kind == kind

    def expect_peek(self, kind: TokenKind) -> bool:
        """Advances onto the next token only if it has the expected kind.

        Args:
            kind (TokenKind): The kind required at `peek_token`.

        Returns:
            bool: True after advancing; False (cursor untouched, error recorded)
            on a mismatch.
        """
        if self.peek_token_is(kind):
            self.advance()
            return True
        self.peek_error(kind)
        return False

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.kind, Precedence.LOWEST)

    def current_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.current_token.kind, Precedence.LOWEST)

    # Errors

    def record_error(self, message: str) -> None:
        logger.debug("Recording error: %s", message)
        self._errors.append(message)

    def peek_error(self, kind: TokenKind) -> None:
        self.record_error(
            f"expected next token to be {kind}, got {self.peek_token.kind} instead"
        )

    def no_prefix_parse_fn_error(self, kind: TokenKind) -> None:
        self.record_error(f"no prefix parse function for {kind} found")

    # Statements

    def parse_program(self) -> Program:
        """Parse every statement up to end of input.

        A statement that fails to parse adds its errors to `errors` and is left
        out of the program; parsing resumes after the token that stopped it.
        """
        statements: list[Statement] = []
        while not self.current_token_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                logger.debug("Parsed statement: %s", stmt.render())
                statements.append(stmt)
            self.advance()
        return Program(tuple(statements))

    def parse_statement(self) -> Statement | None:
        kind = self.current_token.kind
        if kind == TokenKind.LET:
            return self.parse_let_statement()
        if kind == TokenKind.RETURN:
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement | None:
        token = self.current_token

        if not self.expect_peek(TokenKind.IDENT):
            return None

        name = Identifier(self.current_token, self.current_token.literal)

        if not self.expect_peek(TokenKind.ASSIGN):
            return None

        # The initializer is stepped over unparsed; the node keeps value=None.
        self.skip_to_semicolon()

        return LetStatement(token, name=name)

    def parse_return_statement(self) -> ReturnStatement:
        token = self.current_token
        self.skip_to_semicolon()
        return ReturnStatement(token)

    def skip_to_semicolon(self) -> None:
        """Steps over the rest of a statement, onto its terminating semicolon.

        Semicolons nested in parentheses or braces (a function literal body, say)
        do not end the statement. Without a terminator the cursor stops on the
        last token before EOF, or before a `}` / `)` that closes an enclosing
        block, so the caller's block parsing still sees it.
        """
        depth = 0
        while not self.peek_token_is(TokenKind.EOF):
            kind = self.peek_token.kind
            if depth == 0:
                if kind == TokenKind.SEMICOLON:
                    self.advance()
                    return
                if kind in (TokenKind.RPAREN, TokenKind.RBRACE):
                    return
            if kind in (TokenKind.LPAREN, TokenKind.LBRACE):
                depth += 1
            elif kind in (TokenKind.RPAREN, TokenKind.RBRACE):
                depth -= 1
            self.advance()

    def parse_expression_statement(self) -> ExpressionStatement | None:
        token = self.current_token
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.advance()

        return ExpressionStatement(token, expression)

    def parse_block_statement(self) -> BlockStatement | None:
        """Parse `{ ... }` starting on the `{`; ends on the `}`.

        Returns None, with an error recorded, when input runs out before the
        closing brace.
        """
        token = self.current_token
        statements: list[Statement] = []
        self.advance()

        while not self.current_token_is(TokenKind.RBRACE) and not self.current_token_is(
            TokenKind.EOF
        ):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.advance()

        if self.current_token_is(TokenKind.EOF):
            self.record_error(
                f"expected next token to be {TokenKind.RBRACE}, got {TokenKind.EOF} instead"
            )
            return None

        return BlockStatement(token, tuple(statements))

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Expression | None:
        """Parse an expression whose operators bind tighter than `precedence`.

        Leaves `current_token` on the last token of the expression. Gives up
        with an error once nesting passes `MAX_NESTING`.
        """
        if self.nesting >= MAX_NESTING:
            self.record_error("expression nested too deeply")
            return None

        prefix = self.prefix_parse_fns.get(self.current_token.kind)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.current_token.kind)
            return None

        self.nesting += 1
        try:
            left = prefix()

            while (
                left is not None
                and not self.peek_token_is(TokenKind.SEMICOLON)
                and precedence < self.peek_precedence()
            ):
                infix = self.infix_parse_fns.get(self.peek_token.kind)
                if infix is None:
                    return left
                self.advance()
                left = infix(left)

            return left
        finally:
            self.nesting -= 1

    def parse_identifier(self) -> Expression:
        return Identifier(self.current_token, self.current_token.literal)

    def parse_integer_literal(self) -> Expression | None:
        token = self.current_token
        try:
            value = int(token.literal)
        except ValueError:
            self.record_error(f"could not parse {token.literal!r} as integer")
            return None
        return IntegerLiteral(token, value)

    def parse_boolean(self) -> Expression:
        return BooleanLiteral(self.current_token, self.current_token_is(TokenKind.TRUE))

    def parse_prefix_expression(self) -> Expression | None:
        token = self.current_token
        self.advance()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left: Expression) -> Expression | None:
        token = self.current_token
        precedence = self.current_precedence()
        self.advance()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self) -> Expression | None:
        self.advance()
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return expression

    def parse_if_expression(self) -> Expression | None:
        token = self.current_token

        if not self.expect_peek(TokenKind.LPAREN):
            return None
        self.advance()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None
        if not self.expect_peek(TokenKind.RPAREN):
            return None
        if not self.expect_peek(TokenKind.LBRACE):
            return None
        consequence = self.parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self.peek_token_is(TokenKind.ELSE):
            self.advance()
            if not self.expect_peek(TokenKind.LBRACE):
                return None
            alternative = self.parse_block_statement()
            if alternative is None:
                return None

        return IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self) -> Expression | None:
        token = self.current_token

        if not self.expect_peek(TokenKind.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None
        if not self.expect_peek(TokenKind.LBRACE):
            return None
        body = self.parse_block_statement()
        if body is None:
            return None

        return FunctionLiteral(token, parameters, body)

    def parse_function_parameters(self) -> tuple[Identifier, ...] | None:
        """Parse `(a, b, c)` starting on the `(`; ends on the `)`."""
        if self.peek_token_is(TokenKind.RPAREN):
            self.advance()
            return ()

        if not self.expect_peek(TokenKind.IDENT):
            return None
        params = [Identifier(self.current_token, self.current_token.literal)]

        while self.peek_token_is(TokenKind.COMMA):
            self.advance()
            if not self.expect_peek(TokenKind.IDENT):
                return None
            params.append(Identifier(self.current_token, self.current_token.literal))

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return tuple(params)

    def parse_call_expression(self, function: Expression) -> Expression | None:
        token = self.current_token
        arguments = self.parse_call_arguments()
        if arguments is None:
            return None
        return CallExpression(token, function, arguments)

    def parse_call_arguments(self) -> tuple[Expression, ...] | None:
        if self.peek_token_is(TokenKind.RPAREN):
            self.advance()
            return ()

        self.advance()
        arg = self.parse_expression(Precedence.LOWEST)
        if arg is None:
            return None
        args = [arg]

        while self.peek_token_is(TokenKind.COMMA):
            self.advance()
            self.advance()
            arg = self.parse_expression(Precedence.LOWEST)
            if arg is None:
                return None
            args.append(arg)

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return tuple(args)


def parse(source: str | bytes) -> tuple[Program, list[str]]:
    """Parse `source` with a fresh lexer and parser.

    Returns:
        tuple[Program, list[str]]: The program and the syntax errors found.
    """
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors


__all__ = ["MAX_NESTING", "PRECEDENCES", "Parser", "Precedence", "parse"]
