"""Parser for the Monkey language.

A Pratt (top-down operator precedence) parser. Every token kind that can
start an expression has a *prefix* handler and every token kind that can
continue one has an *infix* handler together with a binding precedence.
``parse_expression`` parses a prefix expression and then keeps folding
the running result into infix handlers while the next token binds more
tightly than the caller's precedence, which gives both operator
precedence and left associativity.

Parsing is best effort. Malformed constructs record a diagnostic in
``Parser.errors`` and yield ``None`` for that subtree; the parser then
carries on with the next statement, so a single run may report several
independent problems.

The :func:`parse_program` function is the convenience entry point that
lexes and parses a source string in one call.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Dict, List, Optional, Tuple

from . import token as tok
from .ast import (
    Program, Statement, Expression, LetStatement, ReturnStatement,
    ExpressionStatement, BlockStatement, Identifier, IntegerLiteral,
    BooleanLiteral, StringLiteral, ArrayLiteral, HashLiteral,
    PrefixExpression, InfixExpression, IfExpression, FunctionLiteral,
    CallExpression, IndexExpression,
)
from .lexer import Lexer
from .object import INT64_MAX
from .token import Token


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # ==
    LESSGREATER = 3  # > or <
    SUM = 4          # +
    PRODUCT = 5      # *
    PREFIX = 6       # -x or !x
    CALL = 7         # f(x) and a[i]


PRECEDENCES: Dict[str, Precedence] = {
    tok.EQ: Precedence.EQUALS,
    tok.NOT_EQ: Precedence.EQUALS,
    tok.LT: Precedence.LESSGREATER,
    tok.GT: Precedence.LESSGREATER,
    tok.PLUS: Precedence.SUM,
    tok.MINUS: Precedence.SUM,
    tok.SLASH: Precedence.PRODUCT,
    tok.ASTERISK: Precedence.PRODUCT,
    tok.LPAREN: Precedence.CALL,
    tok.LBRACKET: Precedence.CALL,
}

PrefixParseFn = Callable[[], Optional[Expression]]
InfixParseFn = Callable[[Expression], Optional[Expression]]


class Parser:
    """Builds a :class:`Program` from the tokens of a :class:`Lexer`."""

    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.errors: List[str] = []
        self.cur_token: Token = Token(tok.EOF, '')
        self.peek_token: Token = Token(tok.EOF, '')

        self.prefix_parse_fns: Dict[str, PrefixParseFn] = {}
        self.register_prefix(tok.IDENT, self.parse_identifier)
        self.register_prefix(tok.INT, self.parse_integer_literal)
        self.register_prefix(tok.STRING, self.parse_string_literal)
        self.register_prefix(tok.TRUE, self.parse_boolean)
        self.register_prefix(tok.FALSE, self.parse_boolean)
        self.register_prefix(tok.BANG, self.parse_prefix_expression)
        self.register_prefix(tok.MINUS, self.parse_prefix_expression)
        self.register_prefix(tok.LPAREN, self.parse_grouped_expression)
        self.register_prefix(tok.IF, self.parse_if_expression)
        self.register_prefix(tok.FUNCTION, self.parse_function_literal)
        self.register_prefix(tok.LBRACKET, self.parse_array_literal)
        self.register_prefix(tok.LBRACE, self.parse_hash_literal)

        self.infix_parse_fns: Dict[str, InfixParseFn] = {}
        for operator in (tok.PLUS, tok.MINUS, tok.SLASH, tok.ASTERISK,
                         tok.EQ, tok.NOT_EQ, tok.LT, tok.GT):
            self.register_infix(operator, self.parse_infix_expression)
        self.register_infix(tok.LPAREN, self.parse_call_expression)
        self.register_infix(tok.LBRACKET, self.parse_index_expression)

        # read two tokens so cur_token and peek_token are both set
        self.next_token()
        self.next_token()

    def register_prefix(self, token_type: str, fn: PrefixParseFn):
        self.prefix_parse_fns[token_type] = fn

    def register_infix(self, token_type: str, fn: InfixParseFn):
        self.infix_parse_fns[token_type] = fn

    # Token cursor

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, token_type: str) -> bool:
        return self.cur_token.type == token_type

    def peek_token_is(self, token_type: str) -> bool:
        return self.peek_token.type == token_type

    def expect_peek(self, token_type: str) -> bool:
        """Advance if the next token has the given type, else record an error."""
        if self.peek_token_is(token_type):
            self.next_token()
            return True
        self.peek_error(token_type)
        return False

    def peek_error(self, token_type: str):
        self.errors.append(
            f"expected next token to be {token_type}, got {self.peek_token.type} instead"
        )

    def no_prefix_parse_fn_error(self, token_type: str):
        self.errors.append(f"no prefix parse function for {token_type} found")

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    # Statements

    def parse_program(self) -> Program:
        program = Program()
        while not self.cur_token_is(tok.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            self.next_token()
        return program

    def parse_statement(self) -> Optional[Statement]:
        if self.cur_token_is(tok.LET):
            return self.parse_let_statement()
        if self.cur_token_is(tok.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> Optional[LetStatement]:
        let_token = self.cur_token
        if not self.expect_peek(tok.IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)
        if not self.expect_peek(tok.ASSIGN):
            return None
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        if not self.expect_peek(tok.SEMICOLON):
            return None
        return LetStatement(let_token, name, value)

    def parse_return_statement(self) -> Optional[ReturnStatement]:
        return_token = self.cur_token
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        if not self.expect_peek(tok.SEMICOLON):
            return None
        return ReturnStatement(return_token, value)

    def parse_expression_statement(self) -> Optional[ExpressionStatement]:
        first = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)
        # the terminating semicolon is optional
        if self.peek_token_is(tok.SEMICOLON):
            self.next_token()
        if expression is None:
            return None
        return ExpressionStatement(first, expression)

    def parse_block_statement(self) -> Optional[BlockStatement]:
        block = BlockStatement(self.cur_token, [])
        self.next_token()
        while not self.cur_token_is(tok.RBRACE) and not self.cur_token_is(tok.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            self.next_token()
        if self.cur_token_is(tok.EOF):
            self.errors.append(f"expected next token to be {tok.RBRACE}, got {tok.EOF} instead")
            return None
        return block

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.type)
            return None
        left = prefix()

        while left is not None and not self.peek_token_is(tok.SEMICOLON) \
                and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)
        return left

    def parse_identifier(self) -> Expression:
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> Optional[Expression]:
        literal = self.cur_token.literal
        value = int(literal)
        if value > INT64_MAX:
            self.errors.append(f'could not parse "{literal}" as integer')
            return None
        return IntegerLiteral(self.cur_token, value)

    def parse_string_literal(self) -> Expression:
        return StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_boolean(self) -> Expression:
        return BooleanLiteral(self.cur_token, self.cur_token_is(tok.TRUE))

    def parse_prefix_expression(self) -> Optional[Expression]:
        prefix_token = self.cur_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(prefix_token, prefix_token.literal, right)

    def parse_infix_expression(self, left: Expression) -> Optional[Expression]:
        operator_token = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(operator_token, left, operator_token.literal, right)

    def parse_grouped_expression(self) -> Optional[Expression]:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        if not self.expect_peek(tok.RPAREN):
            return None
        return expression

    def parse_if_expression(self) -> Optional[Expression]:
        if_token = self.cur_token
        if not self.expect_peek(tok.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None
        if not self.expect_peek(tok.RPAREN):
            return None
        if not self.expect_peek(tok.LBRACE):
            return None
        consequence = self.parse_block_statement()
        if consequence is None:
            return None
        alternative = None
        if self.peek_token_is(tok.ELSE):
            self.next_token()
            if not self.expect_peek(tok.LBRACE):
                return None
            alternative = self.parse_block_statement()
            if alternative is None:
                return None
        return IfExpression(if_token, condition, consequence, alternative)

    def parse_function_literal(self) -> Optional[Expression]:
        fn_token = self.cur_token
        if not self.expect_peek(tok.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None
        if not self.expect_peek(tok.LBRACE):
            return None
        body = self.parse_block_statement()
        if body is None:
            return None
        return FunctionLiteral(fn_token, parameters, body)

    def parse_function_parameters(self) -> Optional[List[Identifier]]:
        identifiers: List[Identifier] = []
        if self.peek_token_is(tok.RPAREN):
            self.next_token()
            return identifiers
        if not self.expect_peek(tok.IDENT):
            return None
        identifiers.append(Identifier(self.cur_token, self.cur_token.literal))
        while self.peek_token_is(tok.COMMA):
            self.next_token()
            if not self.expect_peek(tok.IDENT):
                return None
            identifiers.append(Identifier(self.cur_token, self.cur_token.literal))
        if not self.expect_peek(tok.RPAREN):
            return None
        return identifiers

    def parse_call_expression(self, function: Expression) -> Optional[Expression]:
        call_token = self.cur_token
        arguments = self.parse_expression_list(tok.RPAREN)
        if arguments is None:
            return None
        return CallExpression(call_token, function, arguments)

    def parse_index_expression(self, left: Expression) -> Optional[Expression]:
        index_token = self.cur_token
        self.next_token()
        index = self.parse_expression(Precedence.LOWEST)
        if index is None:
            return None
        if not self.expect_peek(tok.RBRACKET):
            return None
        return IndexExpression(index_token, left, index)

    def parse_array_literal(self) -> Optional[Expression]:
        array_token = self.cur_token
        elements = self.parse_expression_list(tok.RBRACKET)
        if elements is None:
            return None
        return ArrayLiteral(array_token, elements)

    def parse_expression_list(self, end: str) -> Optional[List[Expression]]:
        """Parse comma separated expressions up to and including ``end``."""
        items: List[Expression] = []
        if self.peek_token_is(end):
            self.next_token()
            return items
        self.next_token()
        item = self.parse_expression(Precedence.LOWEST)
        if item is None:
            return None
        items.append(item)
        while self.peek_token_is(tok.COMMA):
            self.next_token()
            self.next_token()
            item = self.parse_expression(Precedence.LOWEST)
            if item is None:
                return None
            items.append(item)
        if not self.expect_peek(end):
            return None
        return items

    def parse_hash_literal(self) -> Optional[Expression]:
        hash_token = self.cur_token
        pairs: List[Tuple[Expression, Expression]] = []
        while not self.peek_token_is(tok.RBRACE):
            self.next_token()
            key = self.parse_expression(Precedence.LOWEST)
            if key is None:
                return None
            if not self.expect_peek(tok.COLON):
                return None
            self.next_token()
            value = self.parse_expression(Precedence.LOWEST)
            if value is None:
                return None
            pairs.append((key, value))
            if not self.peek_token_is(tok.RBRACE) and not self.expect_peek(tok.COMMA):
                return None
        self.next_token()
        return HashLiteral(hash_token, pairs)


def parse_program(source: str) -> Tuple[Program, List[str]]:
    """Lex and parse ``source``, returning the program and any parse errors."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors
