"""Token definitions for the Monkey language.

Operator and delimiter kinds are spelled exactly as their source text so
that parser diagnostics such as ``expected next token to be )`` read the
same way the program was written.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

ILLEGAL = 'ILLEGAL'
EOF = 'EOF'

# Identifiers and literals
IDENT = 'IDENT'
INT = 'INT'
STRING = 'STRING'

# Operators
ASSIGN = '='
PLUS = '+'
MINUS = '-'
BANG = '!'
ASTERISK = '*'
SLASH = '/'
LT = '<'
GT = '>'
EQ = '=='
NOT_EQ = '!='

# Delimiters
COMMA = ','
SEMICOLON = ';'
COLON = ':'
LPAREN = '('
RPAREN = ')'
LBRACE = '{'
RBRACE = '}'
LBRACKET = '['
RBRACKET = ']'

# Keywords
FUNCTION = 'FUNCTION'
LET = 'LET'
TRUE = 'TRUE'
FALSE = 'FALSE'
IF = 'IF'
ELSE = 'ELSE'
RETURN = 'RETURN'

KEYWORDS: Dict[str, str] = {
    'fn': FUNCTION,
    'let': LET,
    'true': TRUE,
    'false': FALSE,
    'if': IF,
    'else': ELSE,
    'return': RETURN,
}


@dataclass(frozen=True)
class Token:
    type: str
    literal: str
    # position is informational only
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return f"{self.type}({self.literal!r})"


def lookup_ident(ident: str) -> str:
    """Classify identifier-shaped text as a keyword or a plain identifier."""
    return KEYWORDS.get(ident, IDENT)
