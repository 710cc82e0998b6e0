from pathlib import Path

from monkey.environment import Environment
from monkey.evaluator import Evaluator
from monkey.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_5_closures(capsys):
    source = (EXAMPLES / 'program_5.monkey').read_text(encoding='utf-8')
    program, errors = parse_program(source)
    assert errors == []
    env = Environment()
    Evaluator().run(program, env)
    out_lines = capsys.readouterr().out.strip().split('\n')
    # the parameter x shadows the outer binding only inside the call
    assert out_lines == ['Hello, Monkey!', '6', '10']
    assert env.get('x').value == 10
