from pathlib import Path

from monkey.environment import Environment
from monkey.evaluator import Evaluator
from monkey.object import Error
from monkey.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_6_error_stops_program(capsys):
    """An error at top level ends the program; later statements never run."""
    source = (EXAMPLES / 'program_6.monkey').read_text(encoding='utf-8')
    program, errors = parse_program(source)
    assert errors == []
    result = Evaluator().run(program, Environment())
    out = capsys.readouterr().out.strip()
    assert out == '6'
    assert isinstance(result, Error)
    assert result.message == 'type mismatch: INTEGER + BOOLEAN'
