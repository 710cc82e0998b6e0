import io
import json

import pytest

from monkey import repl
from monkey.__main__ import main


def run_repl(text):
    out = io.StringIO()
    env = repl.start(io.StringIO(text), out)
    return out.getvalue(), env


def test_repl_keeps_bindings_between_lines():
    output, env = run_repl('let a = 5;\nlet b = a * 2;\na + b\n')
    assert output == '>> >> >> 15\n>> '
    assert env.get('b').value == 10


def test_repl_echoes_inspected_values():
    output, _ = run_repl('"hi"\n[1, "a"]\nfn(x) { x }\n')
    assert output.split('\n') == [
        '>> hi',
        '>> [1, a]',
        '>> fn(x) {',
        'x',
        '}',
        '>> ',
    ]


def test_repl_reports_parser_errors_and_carries_on():
    output, _ = run_repl('let x 5;\n1 + 1\n')
    assert 'parser errors:\n\texpected next token to be =, got INT instead\n' in output
    assert output.endswith('>> 2\n>> ')


def test_repl_reports_evaluation_errors():
    output, _ = run_repl('-true\n')
    assert output == '>> ERROR: unknown operator: -BOOLEAN\n>> '


def test_repl_blank_line_prints_nothing():
    output, _ = run_repl('\n')
    assert output == '>> >> '


def test_main_runs_a_program_file(tmp_path, capsys):
    source = tmp_path / 'hello.monkey'
    source.write_text('puts("hello " + "there");', encoding='utf-8')
    main([str(source)])
    assert capsys.readouterr().out == 'hello there\n'


def test_main_reports_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / 'missing.monkey')])
    assert excinfo.value.code == 1
    assert 'not found' in capsys.readouterr().err


def test_main_reports_parser_errors(tmp_path, capsys):
    source = tmp_path / 'bad.monkey'
    source.write_text('let = 1;', encoding='utf-8')
    with pytest.raises(SystemExit) as excinfo:
        main([str(source)])
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith('parser errors:\n\texpected next token to be IDENT, got = instead')


def test_main_reports_runtime_errors(tmp_path, capsys):
    source = tmp_path / 'boom.monkey'
    source.write_text('puts(1); 1 / 0; puts(2);', encoding='utf-8')
    with pytest.raises(SystemExit) as excinfo:
        main([str(source)])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == '1\n'
    assert captured.err == 'Runtime error: division by zero\n'


def test_emit_ast_then_run_it(tmp_path, capsys):
    source = tmp_path / 'sum.monkey'
    source.write_text('let add = fn(a, b) { a + b }; puts(add(2, 3));', encoding='utf-8')
    main(['--emit-ast', str(source)])
    ast_path = tmp_path / 'sum.monkey.ast.json'
    assert capsys.readouterr().out == f'{ast_path}\n'
    data = json.loads(ast_path.read_text(encoding='utf-8'))
    assert data['type'] == 'Program'
    assert len(data['statements']) == 2

    main(['--ast', str(ast_path)])
    assert capsys.readouterr().out == '5\n'


def test_verbose_run_writes_debug_file(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = tmp_path / 'trace.monkey'
    source.write_text('let x = 2; puts(x);', encoding='utf-8')
    main(['-vv', str(source)])
    assert capsys.readouterr().out == '2\n'
    assert (tmp_path / 'debug.txt').read_text(encoding='utf-8') == 'let x = 2\n'


def test_repl_survives_a_stack_overflow():
    output, _ = run_repl('let f = fn(n) { f(n + 1) };\nf(0)\n1 + 1\n')
    assert output == '>> >> ERROR: stack overflow\n>> 2\n>> '


def test_repl_puts_writes_to_the_session_stream(capsys):
    output, _ = run_repl('puts(7)\n')
    assert output == '>> 7\nnull\n>> '
    assert capsys.readouterr().out == ''


def test_main_rejects_an_out_of_range_ast_integer(tmp_path, capsys):
    ast_path = tmp_path / 'big.ast.json'
    ast_path.write_text(json.dumps({
        'type': 'Program',
        'statements': [{
            'type': 'ExpressionStatement',
            'expression': {'type': 'IntegerLiteral', 'value': 2 ** 70},
        }],
    }), encoding='utf-8')
    with pytest.raises(SystemExit) as excinfo:
        main(['--ast', str(ast_path)])
    assert excinfo.value.code == 1
    assert 'integer literal out of range' in capsys.readouterr().err
