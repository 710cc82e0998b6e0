from pathlib import Path

from monkey.environment import Environment
from monkey.evaluator import Evaluator
from monkey.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_1(capsys):
    source = (EXAMPLES / 'program_1.monkey').read_text(encoding='utf-8')
    program, errors = parse_program(source)
    assert errors == []
    Evaluator().run(program, Environment())
    out = capsys.readouterr().out.strip()
    assert out == 'Hello World!!'
