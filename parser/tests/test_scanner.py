from parser.reporter import Reporter
from parser.scanner.scanner import Scanner, scan
from parser.scanner.token import Token, TokenKind


def kinds(tokens):
    return [t.kind for t in tokens]


def test_scan_empty_source():
    tokens, reporter = scan("")
    assert tokens == [Token(TokenKind.EOF, "", None, 1)]
    assert not reporter.had_error


def test_scan_single_character_token():
    tokens, _ = scan("(")
    assert tokens == [
        Token(TokenKind.LEFT_PAREN, "(", None, 1),
        Token(TokenKind.EOF, "", None, 1),
    ]


def test_scan_double_character_token():
    tokens, _ = scan(">=")
    assert tokens == [
        Token(TokenKind.GREATER_EQUAL, ">=", None, 1),
        Token(TokenKind.EOF, "", None, 1),
    ]


def test_scan_operators():
    tokens, _ = scan("!*+-/=<> <=\n== // should be ignored: >=")
    assert tokens == [
        Token(TokenKind.BANG, "!", None, 1),
        Token(TokenKind.STAR, "*", None, 1),
        Token(TokenKind.PLUS, "+", None, 1),
        Token(TokenKind.MINUS, "-", None, 1),
        Token(TokenKind.SLASH, "/", None, 1),
        Token(TokenKind.EQUAL, "=", None, 1),
        Token(TokenKind.LESS, "<", None, 1),
        Token(TokenKind.GREATER, ">", None, 1),
        Token(TokenKind.LESS_EQUAL, "<=", None, 1),
        Token(TokenKind.EQUAL_EQUAL, "==", None, 2),
        Token(TokenKind.EOF, "", None, 2),
    ]


def test_scan_comments():
    tokens, reporter = scan("// this is a comment ()")
    assert tokens == [Token(TokenKind.EOF, "", None, 1)]
    assert not reporter.had_error


def test_scan_ignores_unicode_in_comments():
    tokens, reporter = scan("///Unicode:£§᯽☺♣")
    assert tokens == [Token(TokenKind.EOF, "", None, 1)]
    assert not reporter.had_error


def test_scan_multiline_string():
    tokens, _ = scan('"hello\nworld"')
    assert tokens == [
        Token(TokenKind.STRING, '"hello\nworld"', "hello\nworld", 2),
        Token(TokenKind.EOF, "", None, 2),
    ]


def test_scan_unterminated_string():
    tokens, reporter = scan('"abc\n')
    assert tokens == [Token(TokenKind.EOF, "", None, 2)]
    assert reporter.errors == ["[line 2] Error: Unterminated string."]


def test_scan_numbers():
    tokens, _ = scan("1\n2.0\n03\n.0")
    assert tokens == [
        Token(TokenKind.NUMBER, "1", 1.0, 1),
        Token(TokenKind.NUMBER, "2.0", 2.0, 2),
        Token(TokenKind.NUMBER, "03", 3.0, 3),
        Token(TokenKind.DOT, ".", None, 4),
        Token(TokenKind.NUMBER, "0", 0.0, 4),
        Token(TokenKind.EOF, "", None, 4),
    ]


def test_scan_number_leaves_trailing_dot():
    tokens, _ = scan("12.")
    assert tokens == [
        Token(TokenKind.NUMBER, "12", 12.0, 1),
        Token(TokenKind.DOT, ".", None, 1),
        Token(TokenKind.EOF, "", None, 1),
    ]


def test_scan_number_literals_are_floats():
    tokens, _ = scan("7")
    assert isinstance(tokens[0].literal, float)


def test_scan_identifiers():
    tokens, _ = scan("foo bar _hello")
    assert tokens == [
        Token(TokenKind.IDENTIFIER, "foo", None, 1),
        Token(TokenKind.IDENTIFIER, "bar", None, 1),
        Token(TokenKind.IDENTIFIER, "_hello", None, 1),
        Token(TokenKind.EOF, "", None, 1),
    ]


def test_scan_keywords():
    source = "and class else false for fun if nil or print return super this true var while"
    tokens, _ = scan(source)
    assert kinds(tokens) == [
        TokenKind.AND,
        TokenKind.CLASS,
        TokenKind.ELSE,
        TokenKind.FALSE,
        TokenKind.FOR,
        TokenKind.FUN,
        TokenKind.IF,
        TokenKind.NIL,
        TokenKind.OR,
        TokenKind.PRINT,
        TokenKind.RETURN,
        TokenKind.SUPER,
        TokenKind.THIS,
        TokenKind.TRUE,
        TokenKind.VAR,
        TokenKind.WHILE,
        TokenKind.EOF,
    ]
    assert all(t.literal is None for t in tokens)


def test_scan_keyword_prefix_is_identifier():
    tokens, _ = scan("orchid nil_")
    assert kinds(tokens) == [TokenKind.IDENTIFIER, TokenKind.IDENTIFIER, TokenKind.EOF]


def test_scan_unbalanced_parens():
    tokens, _ = scan("(()")
    assert tokens == [
        Token(TokenKind.LEFT_PAREN, "(", None, 1),
        Token(TokenKind.LEFT_PAREN, "(", None, 1),
        Token(TokenKind.RIGHT_PAREN, ")", None, 1),
        Token(TokenKind.EOF, "", None, 1),
    ]


def test_scan_reports_unexpected_characters():
    tokens, reporter = scan(",.$(#")
    assert kinds(tokens) == [
        TokenKind.COMMA,
        TokenKind.DOT,
        TokenKind.LEFT_PAREN,
        TokenKind.EOF,
    ]
    assert reporter.errors == [
        "[line 1] Error: Unexpected character: $",
        "[line 1] Error: Unexpected character: #",
    ]


def test_scan_reports_invalid_codepoint():
    tokens, reporter = scan("1 \udc80")
    assert kinds(tokens) == [TokenKind.NUMBER, TokenKind.EOF]
    assert reporter.errors == ["[line 1] Error: Invalid UTF-8 codepoint at: 2"]


def test_scan_token_count():
    tokens, _ = scan("(1 + 2.5) * 3 >= 4")
    assert len(tokens) == 10
    assert tokens[-1].kind == TokenKind.EOF


def test_scan_eof_on_last_line():
    tokens, _ = scan("1\n2\n\n")
    assert tokens[-1] == Token(TokenKind.EOF, "", None, 4)
    assert [t.kind for t in tokens].count(TokenKind.EOF) == 1


def test_scan_is_repeatable():
    source = '(1 + "two") // three\n!= nil'
    assert scan(source)[0] == scan(source)[0]


def test_scanner_iterates_once():
    scanner = Scanner("1 2")
    assert len(list(scanner)) == 3
    assert list(scanner) == []


def test_scanner_uses_shared_reporter():
    reporter = Reporter()
    reporter.error(7, "earlier")
    Scanner("@", reporter).scan_tokens()
    assert reporter.errors == [
        "[line 7] Error: earlier",
        "[line 1] Error: Unexpected character: @",
    ]


def test_token_rendering():
    tokens, _ = scan('( 1.5 "hi" nil')
    assert [str(t) for t in tokens] == [
        "LEFT_PAREN ( null",
        "NUMBER 1.5 1.5",
        'STRING "hi" hi',
        "NIL nil null",
        "EOF  null",
    ]


def test_scan_reports_invalid_codepoint_in_string():
    tokens, reporter = scan('"a\udcffb" 2')
    assert kinds(tokens) == [TokenKind.NUMBER, TokenKind.EOF]
    assert reporter.errors == ["[line 1] Error: Invalid UTF-8 codepoint at: 2"]


def test_number_rendering_uses_short_exponents():
    tokens, _ = scan("10000000000000000 0.0000001")
    assert [str(t) for t in tokens[:2]] == [
        "NUMBER 10000000000000000 1e16",
        "NUMBER 0.0000001 1e-7",
    ]
