"""Lexer for the Monkey language.

Token shapes are declared once as a lark grammar and scanned with lark's
basic lexer, which yields tokens lazily. The :class:`Lexer` wrapper turns
lark tokens into :class:`monkey.token.Token` values, classifies keywords
and produces a terminal EOF token forever once the input is exhausted.

Lexing never fails: any character that matches no rule becomes an
``ILLEGAL`` token and is left for the parser to reject.
"""

from __future__ import annotations

from typing import Iterator

from lark import Lark

from . import token as tok
from .token import Token, lookup_ident

MONKEY_TOKENS = r"""
    start: (IDENT | INT | STRING
           | EQ | NOT_EQ | ASSIGN | PLUS | MINUS | BANG | ASTERISK | SLASH | LT | GT
           | COMMA | SEMICOLON | COLON
           | LPAREN | RPAREN | LBRACE | RBRACE | LBRACKET | RBRACKET
           | ILLEGAL)*

    IDENT: /[a-zA-Z_]+/
    INT: /[0-9]+/
    STRING: /"[^"]*"?/

    EQ: "=="
    NOT_EQ: "!="
    ASSIGN: "="
    PLUS: "+"
    MINUS: "-"
    BANG: "!"
    ASTERISK: "*"
    SLASH: "/"
    LT: "<"
    GT: ">"

    COMMA: ","
    SEMICOLON: ";"
    COLON: ":"
    LPAREN: "("
    RPAREN: ")"
    LBRACE: "{"
    RBRACE: "}"
    LBRACKET: "["
    RBRACKET: "]"

    // lowest priority: whatever nothing else claims
    ILLEGAL.-1: /./s

    %ignore /[ \t\r\n]+/
"""

# lark terminal name -> Monkey token kind
_TERMINAL_TYPES = {
    'INT': tok.INT,
    'STRING': tok.STRING,
    'EQ': tok.EQ,
    'NOT_EQ': tok.NOT_EQ,
    'ASSIGN': tok.ASSIGN,
    'PLUS': tok.PLUS,
    'MINUS': tok.MINUS,
    'BANG': tok.BANG,
    'ASTERISK': tok.ASTERISK,
    'SLASH': tok.SLASH,
    'LT': tok.LT,
    'GT': tok.GT,
    'COMMA': tok.COMMA,
    'SEMICOLON': tok.SEMICOLON,
    'COLON': tok.COLON,
    'LPAREN': tok.LPAREN,
    'RPAREN': tok.RPAREN,
    'LBRACE': tok.LBRACE,
    'RBRACE': tok.RBRACE,
    'LBRACKET': tok.LBRACKET,
    'RBRACKET': tok.RBRACKET,
    'ILLEGAL': tok.ILLEGAL,
}

# no parser: the grammar is only ever used through Lark.lex
_scanner = Lark(MONKEY_TOKENS, parser=None, lexer='basic')


def _string_contents(text: str) -> str:
    # An unterminated string has no closing quote to strip.
    if len(text) >= 2 and text.endswith('"'):
        return text[1:-1]
    return text[1:]


class Lexer:
    """Pull-based token stream over a piece of Monkey source text."""

    def __init__(self, source: str):
        self.source = source
        self._stream = _scanner.lex(source)
        self._line = 1
        self._column = 1

    def next_token(self) -> Token:
        raw = next(self._stream, None)
        if raw is None:
            return Token(tok.EOF, '', self._line, self._column)
        line = raw.line or 0
        column = raw.column or 0
        value = str(raw)
        self._line = raw.end_line or line
        self._column = raw.end_column or column
        if raw.type == 'IDENT':
            return Token(lookup_ident(value), value, line, column)
        if raw.type == 'STRING':
            return Token(tok.STRING, _string_contents(value), line, column)
        return Token(_TERMINAL_TYPES[raw.type], value, line, column)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type == tok.EOF:
                return


def tokenize(source: str) -> list[Token]:
    """Lex the whole source, returning every token including the final EOF."""
    return list(Lexer(source))
