"""Tree-walking evaluator for the Monkey language.

:class:`Evaluator` walks a parsed :class:`Program` against an
:class:`Environment` and produces a runtime :class:`Object`. Failures are
not raised: they are :class:`Error` values. ``return`` is modelled the
same way, as a :class:`ReturnValue` wrapper. Both are *signals* and every
composite rule hands a signal from a sub-evaluation straight back to its
caller without doing any further work. A function call is the boundary
where a ``ReturnValue`` is unwrapped.

Evaluation is plain recursion. Every Monkey call costs about a dozen Python
frames, so the interpreter raises the host recursion limit to
:data:`RECURSION_LIMIT`; a program that still runs out of frames gets a
``stack overflow`` error value instead of a host exception.
"""

from __future__ import annotations

import sys
from typing import List, Optional, TextIO, Union

from .ast import (
    Node, Program, LetStatement, ReturnStatement, ExpressionStatement,
    BlockStatement, Identifier, IntegerLiteral, BooleanLiteral,
    StringLiteral, ArrayLiteral, HashLiteral, PrefixExpression,
    InfixExpression, IfExpression, FunctionLiteral, CallExpression,
    IndexExpression, Statement,
)
from .builtins import BUILTINS, wrong_arguments
from .environment import Environment
from .errors import ParseError
from .object import (
    NULL, TRUE, FALSE, Object, Integer, Boolean, Null, String, Array,
    Hash, HashPair, Hashable, Function, Builtin, ReturnValue, Error,
    native_bool_to_boolean, is_signal, wrap_int64,
)
from .parser import parse_program

RECURSION_LIMIT = 10_000


def new_error(message: str) -> Error:
    return Error(message)


def is_truthy(obj: Object) -> bool:
    # only false and null are falsy; 0, "" and [] are all truthy
    if isinstance(obj, Null):
        return False
    if isinstance(obj, Boolean):
        return obj.value
    return True


class Evaluator:
    """Evaluates Monkey AST nodes.

    ``debug_level`` enables tracing into ``debug_file``: 1 reports errors
    reaching the top of a program, 2 adds ``let`` bindings and function
    calls, 3 adds ``if`` conditions and builtin calls.
    """
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.debug_level = debug_level
        self.debug_fp: Optional[TextIO] = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Object:
        if env is None:
            env = Environment()
        try:
            return self.evaluate(program, env)
        except RecursionError:
            if self.debug_level >= 1:
                self.debug("error: stack overflow")
            return new_error("stack overflow")

    def evaluate(self, node: Node, env: Environment) -> Object:
        # Statements
        if isinstance(node, Program):
            return self.eval_program(node, env)
        if isinstance(node, BlockStatement):
            return self.eval_block_statement(node.statements, env)
        if isinstance(node, ExpressionStatement):
            return self.evaluate(node.expression, env)
        if isinstance(node, ReturnStatement):
            value = self.evaluate(node.return_value, env)
            if is_signal(value):
                return value
            return ReturnValue(value)
        if isinstance(node, LetStatement):
            value = self.evaluate(node.value, env)
            if is_signal(value):
                return value
            env.set(node.name.value, value)
            if self.debug_level >= 2:
                self.debug(f"let {node.name.value} = {value.inspect()}")
            return NULL

        # Literals
        if isinstance(node, IntegerLiteral):
            return Integer(node.value)
        if isinstance(node, BooleanLiteral):
            return native_bool_to_boolean(node.value)
        if isinstance(node, StringLiteral):
            return String(node.value)
        if isinstance(node, ArrayLiteral):
            elements = self.eval_expressions(node.elements, env)
            if isinstance(elements, Object):
                return elements
            return Array(elements)
        if isinstance(node, HashLiteral):
            return self.eval_hash_literal(node, env)
        if isinstance(node, FunctionLiteral):
            return Function(node.parameters, node.body, env)

        # Operators and control flow
        if isinstance(node, PrefixExpression):
            right = self.evaluate(node.right, env)
            if is_signal(right):
                return right
            return self.eval_prefix_expression(node.operator, right)
        if isinstance(node, InfixExpression):
            left = self.evaluate(node.left, env)
            if is_signal(left):
                return left
            right = self.evaluate(node.right, env)
            if is_signal(right):
                return right
            return self.eval_infix_expression(node.operator, left, right)
        if isinstance(node, IfExpression):
            return self.eval_if_expression(node, env)
        if isinstance(node, Identifier):
            return self.eval_identifier(node, env)
        if isinstance(node, CallExpression):
            function = self.evaluate(node.function, env)
            if is_signal(function):
                return function
            args = self.eval_expressions(node.arguments, env)
            if isinstance(args, Object):
                return args
            return self.apply_function(function, args)
        if isinstance(node, IndexExpression):
            left = self.evaluate(node.left, env)
            if is_signal(left):
                return left
            index = self.evaluate(node.index, env)
            if is_signal(index):
                return index
            return self.eval_index_expression(left, index)
        raise TypeError(f"evaluate: unexpected node type {type(node).__name__}")

    def eval_program(self, program: Program, env: Environment) -> Object:
        result: Object = NULL
        for stmt in program.statements:
            result = self.evaluate(stmt, env)
            if isinstance(result, ReturnValue):
                return result.value
            if isinstance(result, Error):
                if self.debug_level >= 1:
                    self.debug(f"error: {result.message}")
                return result
        return result

    def eval_block_statement(self, statements: List[Statement], env: Environment) -> Object:
        result: Object = NULL
        for stmt in statements:
            result = self.evaluate(stmt, env)
            # leave ReturnValue wrapped so it keeps unwinding to the call
            if is_signal(result):
                return result
        return result

    def eval_expressions(self, exprs: List[Node], env: Environment) -> Union[List[Object], Object]:
        """Evaluate left to right; a signal is returned in place of the list."""
        results: List[Object] = []
        for expr in exprs:
            value = self.evaluate(expr, env)
            if is_signal(value):
                return value
            results.append(value)
        return results

    def eval_identifier(self, node: Identifier, env: Environment) -> Object:
        value = env.get(node.value)
        if value is not None:
            return value
        builtin = BUILTINS.get(node.value)
        if builtin is not None:
            return builtin
        return new_error(f"identifier not found: {node.value}")

    def eval_prefix_expression(self, operator: str, right: Object) -> Object:
        if operator == '!':
            return FALSE if is_truthy(right) else TRUE
        if operator == '-':
            if not isinstance(right, Integer):
                return new_error(f"unknown operator: -{right.type()}")
            return Integer(wrap_int64(-right.value))
        return new_error(f"unknown operator: {operator}{right.type()}")

    def eval_infix_expression(self, operator: str, left: Object, right: Object) -> Object:
        if isinstance(left, Integer) and isinstance(right, Integer):
            return self.eval_integer_infix_expression(operator, left, right)
        if isinstance(left, String) and isinstance(right, String):
            return self.eval_string_infix_expression(operator, left, right)
        if operator in ('==', '!=') and isinstance(left, (Boolean, Null)) and isinstance(right, (Boolean, Null)):
            equal = left == right
            return native_bool_to_boolean(equal if operator == '==' else not equal)
        if left.type() != right.type():
            return new_error(f"type mismatch: {left.type()} {operator} {right.type()}")
        return new_error(f"unknown operator: {left.type()} {operator} {right.type()}")

    def eval_integer_infix_expression(self, operator: str, left: Integer, right: Integer) -> Object:
        a, b = left.value, right.value
        if operator == '+':
            return Integer(wrap_int64(a + b))
        if operator == '-':
            return Integer(wrap_int64(a - b))
        if operator == '*':
            return Integer(wrap_int64(a * b))
        if operator == '/':
            if b == 0:
                return new_error("division by zero")
            # truncate toward zero
            quotient = abs(a) // abs(b)
            if (a < 0) != (b < 0):
                quotient = -quotient
            return Integer(wrap_int64(quotient))
        if operator == '<':
            return native_bool_to_boolean(a < b)
        if operator == '>':
            return native_bool_to_boolean(a > b)
        if operator == '==':
            return native_bool_to_boolean(a == b)
        if operator == '!=':
            return native_bool_to_boolean(a != b)
        return new_error(f"unknown operator: {left.type()} {operator} {right.type()}")

    def eval_string_infix_expression(self, operator: str, left: String, right: String) -> Object:
        if operator == '+':
            return String(left.value + right.value)
        if operator == '==':
            return native_bool_to_boolean(left.value == right.value)
        if operator == '!=':
            return native_bool_to_boolean(left.value != right.value)
        return new_error(f"unknown operator: {left.type()} {operator} {right.type()}")

    def eval_if_expression(self, node: IfExpression, env: Environment) -> Object:
        condition = self.evaluate(node.condition, env)
        if is_signal(condition):
            return condition
        truthy = is_truthy(condition)
        if self.debug_level >= 3:
            self.debug(f"if condition {condition.inspect()} -> {truthy}")
        if truthy:
            return self.evaluate(node.consequence, env)
        if node.alternative is not None:
            return self.evaluate(node.alternative, env)
        return NULL

    def eval_hash_literal(self, node: HashLiteral, env: Environment) -> Object:
        pairs = {}
        for key_node, value_node in node.pairs:
            key = self.evaluate(key_node, env)
            if is_signal(key):
                return key
            if not isinstance(key, Hashable):
                return new_error(f"unusable as hash key: {key.type()}")
            value = self.evaluate(value_node, env)
            if is_signal(value):
                return value
            pairs[key.hash_key()] = HashPair(key, value)
        return Hash(pairs)

    def eval_index_expression(self, left: Object, index: Object) -> Object:
        if isinstance(left, Array) and isinstance(index, Integer):
            # out of range is null, not an error
            if 0 <= index.value < len(left.elements):
                return left.elements[index.value]
            return NULL
        if isinstance(left, Hash):
            if not isinstance(index, Hashable):
                return new_error(f"unusable as hash key: {index.type()}")
            pair = left.pairs.get(index.hash_key())
            if pair is None:
                return NULL
            return pair.value
        return new_error(f"index operator not supported: {left.type()}")

    def apply_function(self, fn: Object, args: List[Object]) -> Object:
        if isinstance(fn, Function):
            if len(args) != len(fn.parameters):
                return wrong_arguments(len(args), len(fn.parameters))
            call_env = Environment.enclosed(fn.env)
            for param, arg in zip(fn.parameters, args):
                call_env.set(param.value, arg)
            if self.debug_level >= 2:
                rendered = ', '.join(a.inspect() for a in args)
                self.debug(f"call fn({', '.join(p.value for p in fn.parameters)}) with ({rendered})")
            result = self.evaluate(fn.body, call_env)
            # return stops at the call boundary
            if isinstance(result, ReturnValue):
                return result.value
            return result
        if isinstance(fn, Builtin):
            if self.debug_level >= 3:
                self.debug(f"builtin {fn.name}({', '.join(a.inspect() for a in args)})")
            return fn.fn(args)
        return new_error(f"not a function: {fn.type()}")


def run_program(source: str, env: Optional[Environment] = None, debug_level: int = 0) -> Object:
    """Convenience function to parse and evaluate Monkey source in one step.

    Raises :class:`ParseError` if the source does not parse. Evaluation
    errors are returned as :class:`Error` values.
    """
    program, errors = parse_program(source)
    if errors:
        raise ParseError(errors)
    evaluator = Evaluator(debug_level=debug_level)
    try:
        return evaluator.run(program, env)
    finally:
        evaluator.close()
