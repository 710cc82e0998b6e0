import json

import pytest

from monkey.ast_json import ast_from_obj, ast_to_obj
from monkey.evaluator import Evaluator
from monkey.parser import parse_program


SOURCES = [
    'let add = fn(x, y) { return x + y; }; add(1, 2 * 3);',
    'if (!(1 < 2)) { "no" } else { [1, -2, true][0] }',
    'let h = {"a": 1, 2: false}; h["a"];',
    'if (false) { 1 }',
]


@pytest.mark.parametrize('source', SOURCES)
def test_dump_and_load_preserves_the_tree(source):
    program, errors = parse_program(source)
    assert errors == []
    data = json.loads(json.dumps(ast_to_obj(program)))
    loaded = ast_from_obj(data)
    assert loaded == program
    assert str(loaded) == str(program)


def test_dumped_shape():
    program, _ = parse_program('let x = -1;')
    assert ast_to_obj(program) == {
        'type': 'Program',
        'statements': [{
            'type': 'LetStatement',
            'name': 'x',
            'value': {
                'type': 'PrefixExpression',
                'operator': '-',
                'right': {'type': 'IntegerLiteral', 'value': 1},
            },
        }],
    }


def test_loaded_tree_evaluates():
    program, _ = parse_program('let f = fn(n) { if (n < 2) { n } else { f(n - 1) + f(n - 2) } }; f(10)')
    loaded = ast_from_obj(json.loads(json.dumps(ast_to_obj(program))))
    assert Evaluator().run(loaded).value == 55


def test_unknown_node_type_is_rejected():
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'WhileStatement'})
    with pytest.raises(TypeError):
        ast_from_obj(['not', 'a', 'node'])
    with pytest.raises(TypeError):
        ast_to_obj(object())


@pytest.mark.parametrize('value', [2 ** 63, 2 ** 70, -(2 ** 63) - 1])
def test_integer_outside_int64_is_rejected(value):
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'IntegerLiteral', 'value': value})


def test_int64_bounds_load():
    assert ast_from_obj({'type': 'IntegerLiteral', 'value': 2 ** 63 - 1}).value == 2 ** 63 - 1
    assert ast_from_obj({'type': 'IntegerLiteral', 'value': -(2 ** 63)}).value == -(2 ** 63)


def test_expression_statements_keep_their_first_token():
    program, _ = parse_program('a + 1; (b * c) - d; f(1)[0]')
    loaded = ast_from_obj(json.loads(json.dumps(ast_to_obj(program))))
    literals = [s.token_literal() for s in loaded.statements]
    assert literals == [s.token_literal() for s in program.statements]
    assert literals == ['a', '(', 'f']


def test_statement_token_falls_back_to_leftmost_expression():
    data = {
        'type': 'ExpressionStatement',
        'expression': {
            'type': 'InfixExpression',
            'operator': '+',
            'left': {'type': 'Identifier', 'value': 'a'},
            'right': {'type': 'IntegerLiteral', 'value': 1},
        },
    }
    assert ast_from_obj(data).token_literal() == 'a'
