"""Abstract Syntax Tree (AST) definitions for the Monkey language.

The parser builds these nodes and the evaluator walks them. Each node
keeps the token it was built from (for ``token_literal`` and
diagnostics) but the token never takes part in equality, so two trees
parsed from differently parenthesized source compare equal when they
have the same structure.

``str(node)`` produces a canonical, fully parenthesized re-serialization
of the node that parses back to an equal tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .token import Token


@dataclass
class Node:
    """Base class for all AST nodes."""

    def token_literal(self) -> str:
        return self.token.literal


class Statement(Node):
    pass


class Expression(Node):
    pass


def join_statements(statements: List[Statement]) -> str:
    """Render a statement sequence so that it re-parses statement by statement."""
    parts: List[str] = []
    last = len(statements) - 1
    for i, stmt in enumerate(statements):
        text = str(stmt)
        # expression statements carry no terminator of their own
        if isinstance(stmt, ExpressionStatement) and i < last:
            text += ';'
        parts.append(text)
    return ' '.join(parts)


@dataclass
class Program(Node):
    statements: List[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ''

    def __str__(self) -> str:
        return join_statements(self.statements)


# Expressions

@dataclass
class Identifier(Expression):
    token: Token = field(compare=False, repr=False)
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class IntegerLiteral(Expression):
    token: Token = field(compare=False, repr=False)
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class BooleanLiteral(Expression):
    token: Token = field(compare=False, repr=False)
    value: bool

    def __str__(self) -> str:
        return 'true' if self.value else 'false'


@dataclass
class StringLiteral(Expression):
    token: Token = field(compare=False, repr=False)
    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass
class ArrayLiteral(Expression):
    token: Token = field(compare=False, repr=False)
    elements: List[Expression]

    def __str__(self) -> str:
        return '[' + ', '.join(str(e) for e in self.elements) + ']'


@dataclass
class HashLiteral(Expression):
    token: Token = field(compare=False, repr=False)
    pairs: List[Tuple[Expression, Expression]]  # declaration order

    def __str__(self) -> str:
        entries = ', '.join(f"{key}: {value}" for key, value in self.pairs)
        return '{' + entries + '}'


@dataclass
class PrefixExpression(Expression):
    token: Token = field(compare=False, repr=False)
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass
class InfixExpression(Expression):
    token: Token = field(compare=False, repr=False)
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class IfExpression(Expression):
    token: Token = field(compare=False, repr=False)
    condition: Expression
    consequence: 'BlockStatement'
    alternative: Optional['BlockStatement'] = None

    def __str__(self) -> str:
        out = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out


@dataclass
class FunctionLiteral(Expression):
    token: Token = field(compare=False, repr=False)
    parameters: List[Identifier]
    body: 'BlockStatement'

    def __str__(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


@dataclass
class CallExpression(Expression):
    token: Token = field(compare=False, repr=False)  # the '(' token
    function: Expression  # Identifier or FunctionLiteral, or any callee expression
    arguments: List[Expression]

    def __str__(self) -> str:
        args = ', '.join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


@dataclass
class IndexExpression(Expression):
    token: Token = field(compare=False, repr=False)  # the '[' token
    left: Expression
    index: Expression

    def __str__(self) -> str:
        return f"({self.left}[{self.index}])"


# Statements

@dataclass
class LetStatement(Statement):
    token: Token = field(compare=False, repr=False)
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass
class ReturnStatement(Statement):
    token: Token = field(compare=False, repr=False)
    return_value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.return_value};"


@dataclass
class ExpressionStatement(Statement):
    token: Token = field(compare=False, repr=False)  # first token of the expression
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass
class BlockStatement(Statement):
    token: Token = field(compare=False, repr=False)  # the '{' token
    statements: List[Statement]

    def __str__(self) -> str:
        if not self.statements:
            return '{ }'
        return '{ ' + join_statements(self.statements) + ' }'
