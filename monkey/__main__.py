"""Command line front end for the Monkey interpreter.

    monkey [-v|-vv|-vvv] [program.monkey]
    monkey [-v...] --emit-ast program.monkey
    monkey [-v...] --ast program.monkey.ast.json

With no program an interactive session is started. Each ``-v`` raises the
evaluator's trace level; the trace is written to ``debug.txt`` in the
working directory.
"""

import argparse
import json
import sys
from pathlib import Path

from . import repl
from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj
from .environment import Environment
from .evaluator import Evaluator
from .object import Error
from .parser import parse_program


def fail(message: str):
    print(message, file=sys.stderr)
    sys.exit(1)


def read_source(path: Path) -> str:
    if not path.exists():
        fail(f"Error: file {path} not found")
    return path.read_text(encoding='utf-8')


def read_program(path: Path) -> Program:
    program, errors = parse_program(read_source(path))
    if errors:
        fail('parser errors:\n' + '\n'.join(f"\t{msg}" for msg in errors))
    return program


def load_ast(path: Path) -> Program:
    try:
        return ast_from_obj(json.loads(read_source(path)))
    except (ValueError, TypeError, KeyError) as e:
        fail(f"Error: invalid AST file {path}: {e}")


def execute(program: Program, debug_level: int) -> None:
    evaluator = Evaluator(debug_level=debug_level)
    try:
        result = evaluator.run(program, Environment())
    except Exception as e:
        fail(f"Runtime error: {e}")
    finally:
        evaluator.close()
    if isinstance(result, Error):
        fail(f"Runtime error: {result.message}")


def emit_ast(path: Path) -> Path:
    program = read_program(path)
    out_path = path.with_name(path.name + '.ast.json')
    out_path.write_text(json.dumps(ast_to_obj(program), ensure_ascii=False, indent=2), encoding='utf-8')
    return out_path


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='monkey', description="Monkey language interpreter")
    parser.add_argument('-v', action='count', default=0, help='raise the debug trace level (repeatable)')
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--emit-ast', metavar='MONKEY_FILE', help='write MONKEY_FILE.ast.json and exit')
    mode.add_argument('--ast', metavar='AST_JSON_FILE', help='run a program from its AST JSON')
    parser.add_argument('program', nargs='?', help='Monkey source file to run')
    args = parser.parse_args(argv)

    if args.emit_ast:
        print(emit_ast(Path(args.emit_ast)))
    elif args.ast:
        execute(load_ast(Path(args.ast)), args.v)
    elif args.program:
        execute(read_program(Path(args.program)), args.v)
    else:
        evaluator = Evaluator(debug_level=args.v)
        try:
            repl.start(evaluator=evaluator)
        finally:
            evaluator.close()


if __name__ == '__main__':
    main()
