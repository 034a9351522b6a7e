import pytest

from corelang.errors import CoreError, ErrorKind
from corelang.lexer import Lexer, Token, TokenKind


def kinds(source):
    return [token.kind for token in Lexer(source)]


def test_keywords_punctuation_and_operators():
    assert kinds('program int x; begin x := (1 + 2) - 3 * 4 end') == [
        TokenKind.PROGRAM, TokenKind.INT, TokenKind.IDENTIFIER, TokenKind.SEMICOLON,
        TokenKind.BEGIN, TokenKind.IDENTIFIER, TokenKind.ASSIGN, TokenKind.LPAREN,
        TokenKind.INTEGER, TokenKind.PLUS, TokenKind.INTEGER, TokenKind.RPAREN,
        TokenKind.MINUS, TokenKind.INTEGER, TokenKind.STAR, TokenKind.INTEGER,
        TokenKind.END, TokenKind.EOF,
    ]


def test_comparisons_use_longest_match():
    assert kinds('!= = > < >= <=') == [
        TokenKind.NOT_EQUAL, TokenKind.EQUAL, TokenKind.GREATER, TokenKind.LESS,
        TokenKind.GREATER_EQUAL, TokenKind.LESS_EQUAL, TokenKind.EOF,
    ]


def test_keyword_prefix_is_an_identifier():
    tokens = list(Lexer('programs ifx while1 loop'))
    assert [t.kind for t in tokens] == [
        TokenKind.IDENTIFIER, TokenKind.IDENTIFIER, TokenKind.IDENTIFIER, TokenKind.LOOP, TokenKind.EOF,
    ]
    assert tokens[0].lexeme == 'programs'


def test_integer_maximal_munch():
    tokens = list(Lexer('12345abc'))
    assert tokens[0] == Token(TokenKind.INTEGER, '12345', 1)
    assert tokens[1] == Token(TokenKind.IDENTIFIER, 'abc', 1)


def test_line_numbers_and_comments():
    lexer = Lexer('program // header\n  int x\n\nbegin')
    assert lexer.current_line() == 1
    lexer.advance()
    assert lexer.current_token() == Token(TokenKind.INT, 'int', 2)
    lexer.advance()
    lexer.advance()
    assert lexer.current_token().kind is TokenKind.BEGIN
    assert lexer.current_line() == 4


def test_end_of_input_is_permanent():
    lexer = Lexer('x')
    lexer.advance()
    assert lexer.current_token().kind is TokenKind.EOF
    lexer.advance()
    lexer.advance()
    assert lexer.current_token().kind is TokenKind.EOF


def test_unrecognized_character():
    lexer = Lexer('x\n  y # z')
    lexer.advance()
    with pytest.raises(CoreError) as excinfo:
        lexer.advance()
    assert excinfo.value.kind is ErrorKind.LEXICAL
    assert excinfo.value.line == 2


def test_classify():
    assert TokenKind.classify('while') is TokenKind.WHILE
    assert TokenKind.classify(':=') is TokenKind.ASSIGN
    assert TokenKind.classify('42') is TokenKind.INTEGER
    assert TokenKind.classify('count') is TokenKind.IDENTIFIER
    with pytest.raises(CoreError):
        TokenKind.classify('$')
