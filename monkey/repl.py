"""Interactive read-eval-print loop for Monkey.

Each line is parsed and evaluated against one long-lived environment, so
bindings made on one line are visible on the next.
"""

import sys
from contextlib import redirect_stdout
from typing import Optional, TextIO

from .ast import LetStatement
from .environment import Environment
from .evaluator import Evaluator
from .parser import parse_program

PROMPT = '>> '


def print_parser_errors(out: TextIO, errors):
    out.write('parser errors:\n')
    for msg in errors:
        out.write(f"\t{msg}\n")


def start(in_stream: Optional[TextIO] = None, out: Optional[TextIO] = None,
          evaluator: Optional[Evaluator] = None) -> Environment:
    """Run the loop until end of input; returns the session environment."""
    in_stream = in_stream or sys.stdin
    out = out or sys.stdout
    evaluator = evaluator or Evaluator()
    env = Environment()
    while True:
        out.write(PROMPT)
        out.flush()
        line = in_stream.readline()
        if not line:
            break
        program, errors = parse_program(line)
        if errors:
            print_parser_errors(out, errors)
            continue
        # puts writes to stdout; point it at this session's stream
        with redirect_stdout(out):
            result = evaluator.run(program, env)
        # a trailing let produces no value worth echoing
        if program.statements and not isinstance(program.statements[-1], LetStatement):
            out.write(result.inspect() + '\n')
    return env
