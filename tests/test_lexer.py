from monkey import token as tok
from monkey.lexer import Lexer, tokenize
from monkey.token import Token, lookup_ident


def test_next_token():
    source = '''let five = 5;
let ten = 10;

let add = fn(x, y) {
  x + y;
};

let result = add(five, ten);
!-/*5;
5 < 10 > 5;

if (5 < 10) {
    return true;
} else {
    return false;
}

10 == 10;
10 != 9;
"foobar"
"foo bar"
[1, 2];
{"foo": "bar"}
'''
    expected = [
        (tok.LET, 'let'), (tok.IDENT, 'five'), (tok.ASSIGN, '='), (tok.INT, '5'), (tok.SEMICOLON, ';'),
        (tok.LET, 'let'), (tok.IDENT, 'ten'), (tok.ASSIGN, '='), (tok.INT, '10'), (tok.SEMICOLON, ';'),
        (tok.LET, 'let'), (tok.IDENT, 'add'), (tok.ASSIGN, '='), (tok.FUNCTION, 'fn'),
        (tok.LPAREN, '('), (tok.IDENT, 'x'), (tok.COMMA, ','), (tok.IDENT, 'y'), (tok.RPAREN, ')'),
        (tok.LBRACE, '{'), (tok.IDENT, 'x'), (tok.PLUS, '+'), (tok.IDENT, 'y'), (tok.SEMICOLON, ';'),
        (tok.RBRACE, '}'), (tok.SEMICOLON, ';'),
        (tok.LET, 'let'), (tok.IDENT, 'result'), (tok.ASSIGN, '='), (tok.IDENT, 'add'),
        (tok.LPAREN, '('), (tok.IDENT, 'five'), (tok.COMMA, ','), (tok.IDENT, 'ten'), (tok.RPAREN, ')'),
        (tok.SEMICOLON, ';'),
        (tok.BANG, '!'), (tok.MINUS, '-'), (tok.SLASH, '/'), (tok.ASTERISK, '*'), (tok.INT, '5'),
        (tok.SEMICOLON, ';'),
        (tok.INT, '5'), (tok.LT, '<'), (tok.INT, '10'), (tok.GT, '>'), (tok.INT, '5'), (tok.SEMICOLON, ';'),
        (tok.IF, 'if'), (tok.LPAREN, '('), (tok.INT, '5'), (tok.LT, '<'), (tok.INT, '10'), (tok.RPAREN, ')'),
        (tok.LBRACE, '{'), (tok.RETURN, 'return'), (tok.TRUE, 'true'), (tok.SEMICOLON, ';'), (tok.RBRACE, '}'),
        (tok.ELSE, 'else'), (tok.LBRACE, '{'), (tok.RETURN, 'return'), (tok.FALSE, 'false'),
        (tok.SEMICOLON, ';'), (tok.RBRACE, '}'),
        (tok.INT, '10'), (tok.EQ, '=='), (tok.INT, '10'), (tok.SEMICOLON, ';'),
        (tok.INT, '10'), (tok.NOT_EQ, '!='), (tok.INT, '9'), (tok.SEMICOLON, ';'),
        (tok.STRING, 'foobar'),
        (tok.STRING, 'foo bar'),
        (tok.LBRACKET, '['), (tok.INT, '1'), (tok.COMMA, ','), (tok.INT, '2'), (tok.RBRACKET, ']'),
        (tok.SEMICOLON, ';'),
        (tok.LBRACE, '{'), (tok.STRING, 'foo'), (tok.COLON, ':'), (tok.STRING, 'bar'), (tok.RBRACE, '}'),
        (tok.EOF, ''),
    ]
    lexer = Lexer(source)
    for expected_type, expected_literal in expected:
        token = lexer.next_token()
        assert (token.type, token.literal) == (expected_type, expected_literal)


def test_eof_repeats_forever():
    lexer = Lexer('x')
    assert lexer.next_token() == Token(tok.IDENT, 'x')
    for _ in range(3):
        assert lexer.next_token().type == tok.EOF


def test_empty_source():
    assert tokenize('') == [Token(tok.EOF, '')]
    assert tokenize(' \t\r\n ') == [Token(tok.EOF, '')]


def test_illegal_characters_never_fail():
    types = [t.type for t in tokenize('a @ 1 # $')]
    assert types == [tok.IDENT, tok.ILLEGAL, tok.INT, tok.ILLEGAL, tok.ILLEGAL, tok.EOF]
    assert tokenize('@')[0].literal == '@'


def test_identifiers_do_not_contain_digits():
    tokens = tokenize('ab1 foo_bar _x')
    assert [(t.type, t.literal) for t in tokens] == [
        (tok.IDENT, 'ab'), (tok.INT, '1'), (tok.IDENT, 'foo_bar'), (tok.IDENT, '_x'), (tok.EOF, ''),
    ]


def test_minus_is_always_its_own_token():
    tokens = tokenize('-5')
    assert [(t.type, t.literal) for t in tokens] == [(tok.MINUS, '-'), (tok.INT, '5'), (tok.EOF, '')]


def test_two_character_operators():
    tokens = tokenize('= == ! != ===')
    assert [t.type for t in tokens] == [
        tok.ASSIGN, tok.EQ, tok.BANG, tok.NOT_EQ, tok.EQ, tok.ASSIGN, tok.EOF,
    ]


def test_unterminated_string_runs_to_end_of_input():
    tokens = tokenize('"abc def')
    assert tokens[0] == Token(tok.STRING, 'abc def')
    assert tokens[1].type == tok.EOF
    assert tokenize('""')[0] == Token(tok.STRING, '')


def test_keywords_are_case_sensitive():
    assert lookup_ident('fn') == tok.FUNCTION
    assert lookup_ident('return') == tok.RETURN
    assert lookup_ident('Fn') == tok.IDENT
    assert lookup_ident('letter') == tok.IDENT


def test_token_positions_do_not_affect_equality():
    tokens = tokenize('let x\n  = 5')
    assign = tokens[2]
    assert assign.type == tok.ASSIGN
    assert (assign.line, assign.column) == (2, 3)
    assert assign == Token(tok.ASSIGN, '=')


def test_iteration_stops_after_eof():
    assert [t.type for t in Lexer('1 + 2')] == [tok.INT, tok.PLUS, tok.INT, tok.EOF]
