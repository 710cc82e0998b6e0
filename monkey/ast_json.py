"""JSON serialization/deserialization for the Monkey AST.

This module converts between Monkey AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Tokens are rebuilt from
the node contents when loading, except for an expression statement's first
token, which is stored so that `token_literal()` survives the round trip.
"""

from __future__ import annotations

from typing import Any, Dict

from . import token as tok
from .ast import (
    Program,
    LetStatement,
    ReturnStatement,
    ExpressionStatement,
    BlockStatement,
    Identifier,
    IntegerLiteral,
    BooleanLiteral,
    StringLiteral,
    ArrayLiteral,
    HashLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    CallExpression,
    IndexExpression,
)
from .object import INT64_MAX, INT64_MIN
from .token import Token, lookup_ident


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, Program):
        return {"type": "Program", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, LetStatement):
        return {"type": "LetStatement", "name": node.name.value, "value": ast_to_obj(node.value)}
    if isinstance(node, ReturnStatement):
        return {"type": "ReturnStatement", "value": ast_to_obj(node.return_value)}
    if isinstance(node, ExpressionStatement):
        return {
            "type": "ExpressionStatement",
            # the statement keeps the first token of its source text
            "token": [node.token.type, node.token.literal],
            "expression": ast_to_obj(node.expression),
        }
    if isinstance(node, BlockStatement):
        return {"type": "BlockStatement", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "value": node.value}
    if isinstance(node, IntegerLiteral):
        return {"type": "IntegerLiteral", "value": node.value}
    if isinstance(node, BooleanLiteral):
        return {"type": "BooleanLiteral", "value": node.value}
    if isinstance(node, StringLiteral):
        return {"type": "StringLiteral", "value": node.value}
    if isinstance(node, ArrayLiteral):
        return {"type": "ArrayLiteral", "elements": [ast_to_obj(e) for e in node.elements]}
    if isinstance(node, HashLiteral):
        return {"type": "HashLiteral", "pairs": [[ast_to_obj(k), ast_to_obj(v)] for (k, v) in node.pairs]}
    if isinstance(node, PrefixExpression):
        return {"type": "PrefixExpression", "operator": node.operator, "right": ast_to_obj(node.right)}
    if isinstance(node, InfixExpression):
        return {
            "type": "InfixExpression",
            "operator": node.operator,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, IfExpression):
        return {
            "type": "IfExpression",
            "condition": ast_to_obj(node.condition),
            "consequence": ast_to_obj(node.consequence),
            "alternative": ast_to_obj(node.alternative),
        }
    if isinstance(node, FunctionLiteral):
        return {
            "type": "FunctionLiteral",
            "parameters": [p.value for p in node.parameters],
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, CallExpression):
        return {
            "type": "CallExpression",
            "function": ast_to_obj(node.function),
            "arguments": [ast_to_obj(a) for a in node.arguments],
        }
    if isinstance(node, IndexExpression):
        return {"type": "IndexExpression", "left": ast_to_obj(node.left), "index": ast_to_obj(node.index)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def _ident(name: str) -> Identifier:
    return Identifier(Token(tok.IDENT, name), name)


def _leftmost_token(expression) -> Token:
    while True:
        if isinstance(expression, (InfixExpression, IndexExpression)):
            expression = expression.left
        elif isinstance(expression, CallExpression):
            expression = expression.function
        else:
            return expression.token


def _block(obj: Dict[str, Any]) -> BlockStatement:
    return BlockStatement(Token(tok.LBRACE, '{'), [ast_from_obj(s) for s in obj["statements"]])


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "LetStatement":
        return LetStatement(Token(tok.LET, 'let'), _ident(obj["name"]), ast_from_obj(obj["value"]))
    if t == "ReturnStatement":
        return ReturnStatement(Token(tok.RETURN, 'return'), ast_from_obj(obj["value"]))
    if t == "ExpressionStatement":
        expression = ast_from_obj(obj["expression"])
        token = obj.get("token")
        first = Token(token[0], token[1]) if token else _leftmost_token(expression)
        return ExpressionStatement(first, expression)
    if t == "BlockStatement":
        return _block(obj)
    if t == "Identifier":
        return _ident(obj["value"])
    if t == "IntegerLiteral":
        value = int(obj["value"])
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError(f"integer literal out of range: {value}")
        return IntegerLiteral(Token(tok.INT, str(value)), value)
    if t == "BooleanLiteral":
        literal = 'true' if obj["value"] else 'false'
        return BooleanLiteral(Token(lookup_ident(literal), literal), bool(obj["value"]))
    if t == "StringLiteral":
        return StringLiteral(Token(tok.STRING, obj["value"]), obj["value"])
    if t == "ArrayLiteral":
        return ArrayLiteral(Token(tok.LBRACKET, '['), [ast_from_obj(e) for e in obj["elements"]])
    if t == "HashLiteral":
        return HashLiteral(
            Token(tok.LBRACE, '{'),
            [(ast_from_obj(k), ast_from_obj(v)) for (k, v) in obj["pairs"]],
        )
    if t == "PrefixExpression":
        # operator kinds are spelled as their literal text
        return PrefixExpression(Token(obj["operator"], obj["operator"]), obj["operator"], ast_from_obj(obj["right"]))
    if t == "InfixExpression":
        return InfixExpression(
            Token(obj["operator"], obj["operator"]),
            ast_from_obj(obj["left"]),
            obj["operator"],
            ast_from_obj(obj["right"]),
        )
    if t == "IfExpression":
        alternative = obj.get("alternative")
        return IfExpression(
            Token(tok.IF, 'if'),
            ast_from_obj(obj["condition"]),
            _block(obj["consequence"]),
            _block(alternative) if alternative is not None else None,
        )
    if t == "FunctionLiteral":
        return FunctionLiteral(
            Token(tok.FUNCTION, 'fn'),
            [_ident(name) for name in obj["parameters"]],
            _block(obj["body"]),
        )
    if t == "CallExpression":
        return CallExpression(
            Token(tok.LPAREN, '('),
            ast_from_obj(obj["function"]),
            [ast_from_obj(a) for a in obj["arguments"]],
        )
    if t == "IndexExpression":
        return IndexExpression(Token(tok.LBRACKET, '['), ast_from_obj(obj["left"]), ast_from_obj(obj["index"]))

    raise ValueError(f"Unknown AST node type: {t}")
