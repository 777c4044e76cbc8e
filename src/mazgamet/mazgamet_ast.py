"""
Defines the abstract syntax tree (AST) node structure for the Mazgamet programming language.

Classes:
    Node:
        Base of every tree node. Reports the literal of the token that introduced it,
        renders itself as canonical source-like text, and serializes to a plain dict.

    Statement / Expression:
        Disjoint marker bases. A node is exactly one of the two.

    Program, LetStatement, ReturnStatement, ExpressionStatement, BlockStatement:
        Statement nodes.

    Identifier, IntegerLiteral, BooleanLiteral, PrefixExpression, InfixExpression,
    IfExpression, FunctionLiteral, CallExpression:
        Expression nodes.

    ASTDict:
        TypedDict shape produced by `Node.to_dict()`, suitable for JSON output or debugging.

Every node is a frozen dataclass: the parser gathers a node's parts first and
builds the node once, so a tree is never mutated after construction. Tree walkers
recover concrete fields with `isinstance` checks or `match` statements over this
closed set of classes.

Rendering is used for tests and debugging, not persistence:
    >>> str(program)
    'let x = ;(a + (b * c))'
"""

from dataclasses import dataclass, fields
from typing import Any, TypedDict

from mazgamet.mazgamet_token import Token


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of a Node used for serialization.

    Fields:
        kind (str): The node class name (e.g., "LetStatement", "Identifier").
        token (str): Literal of the token that introduced the node.
        Remaining keys are the node's own fields, with child nodes serialized
        recursively and lists of nodes as lists of dicts.
    """

    kind: str
    token: str


@dataclass(frozen=True)
class Node:
    """Base class for every node in a Mazgamet syntax tree."""

    token: Token

    def token_literal(self) -> str:
        return self.token.literal

    def render(self) -> str:
        """Canonical source-like text of the node.

        Abstract: every concrete node class overrides this.

        Raises:
            NotImplementedError: When called on a class that does not override it.
        """
        raise NotImplementedError(f"{type(self).__name__} does not render")

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> ASTDict:
        """Converts the node (and all descendants) into nested dictionaries."""
        out: dict[str, Any] = {"kind": type(self).__name__, "token": self.token_literal()}
        for f in fields(self):
            if f.name == "token":
                continue
            out[f.name] = _serialize(getattr(self, f.name))
        return out  # type: ignore[return-value]


def _serialize(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    return value


class Statement(Node):
    """A node that can stand alone as a program element."""


class Expression(Node):
    """A node that yields a value."""


@dataclass(frozen=True)
class Program:
    """Root of a parsed source text. Owns every top-level statement, in order."""

    statements: tuple[Statement, ...] = ()

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def render(self) -> str:
        return "".join(stmt.render() for stmt in self.statements)

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> ASTDict:
        return {  # type: ignore[typeddict-unknown-key]
            "kind": "Program",
            "token": self.token_literal(),
            "statements": [stmt.to_dict() for stmt in self.statements],
        }


# Expressions


@dataclass(frozen=True)
class Identifier(Expression):
    value: str

    def render(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int

    def render(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    value: bool

    def render(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class PrefixExpression(Expression):
    """`<operator><right>`, e.g. `!ok` or `-5`."""

    operator: str
    right: Expression

    def render(self) -> str:
        return f"({self.operator}{self.right.render()})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    """A binary operation. Rendering parenthesizes every level to expose grouping."""

    left: Expression
    operator: str
    right: Expression

    def render(self) -> str:
        return f"({self.left.render()} {self.operator} {self.right.render()})"


@dataclass(frozen=True)
class IfExpression(Expression):
    condition: Expression
    consequence: "BlockStatement"
    alternative: "BlockStatement | None" = None

    def render(self) -> str:
        out = f"if{self.condition.render()} {self.consequence.render()}"
        if self.alternative is not None:
            out += f"else {self.alternative.render()}"
        return out


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    parameters: tuple[Identifier, ...]
    body: "BlockStatement"

    def render(self) -> str:
        params = ", ".join(p.render() for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body.render()}"


@dataclass(frozen=True)
class CallExpression(Expression):
    """`function(arguments...)`; `token` is the opening parenthesis."""

    function: Expression
    arguments: tuple[Expression, ...] = ()

    def render(self) -> str:
        args = ", ".join(a.render() for a in self.arguments)
        return f"{self.function.render()}({args})"


# Statements


@dataclass(frozen=True)
class LetStatement(Statement):
    """`let <name> = <value>;`

    `name` is only absent in partially recovered input; a tree produced from
    well-formed source always carries it.
    """

    name: Identifier | None = None
    value: Expression | None = None

    def render(self) -> str:
        if self.name is None:
            return "let _ = _;"
        value = self.value.render() if self.value is not None else ""
        return f"{self.token_literal()} {self.name.render()} = {value};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    return_value: Expression | None = None

    def render(self) -> str:
        if self.return_value is None:
            return f"{self.token_literal()} ...;"
        return f"{self.token_literal()} {self.return_value.render()};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    """A bare expression used as a statement, e.g. `x + 10;`."""

    expression: Expression | None = None

    def render(self) -> str:
        if self.expression is None:
            return ""
        return self.expression.render()


@dataclass(frozen=True)
class BlockStatement(Statement):
    """Brace-delimited statement list; `token` is the `{`."""

    statements: tuple[Statement, ...] = ()

    def render(self) -> str:
        return "".join(stmt.render() for stmt in self.statements)


__all__ = [
    "ASTDict",
    "BlockStatement",
    "BooleanLiteral",
    "CallExpression",
    "Expression",
    "ExpressionStatement",
    "FunctionLiteral",
    "Identifier",
    "IfExpression",
    "InfixExpression",
    "IntegerLiteral",
    "LetStatement",
    "Node",
    "PrefixExpression",
    "Program",
    "ReturnStatement",
    "Statement",
]
