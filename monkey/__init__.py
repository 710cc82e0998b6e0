# Monkey language package
# This package provides a lexer, Pratt parser and tree-walking evaluator for Monkey.
from .lexer import Lexer
from .parser import Parser, parse_program
from .environment import Environment
from .evaluator import Evaluator, run_program
from .errors import MonkeyError, ParseError

__all__ = [
    'Lexer',
    'Parser',
    'parse_program',
    'Environment',
    'Evaluator',
    'run_program',
    'MonkeyError',
    'ParseError',
]
