"""Lexer for the Core language.

The terminals of the language are declared once as a Lark grammar and
tokenized lazily with Lark's basic lexer. Each Lark token is converted
into an immutable `Token` carrying a `TokenKind`, its lexeme and its
source line. After the last token the lexer keeps returning an EOF
token, so the parser never has to deal with running past the input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from lark import Lark, Token as LarkToken
from lark.exceptions import UnexpectedCharacters

from .errors import CoreError, ErrorKind


class TokenKind(Enum):
    # Keywords
    PROGRAM = 'program'
    BEGIN = 'begin'
    END = 'end'
    INT = 'int'
    IF = 'if'
    THEN = 'then'
    ELSE = 'else'
    WHILE = 'while'
    LOOP = 'loop'
    READ = 'read'
    WRITE = 'write'
    NOT = 'not'
    AND = 'and'
    OR = 'or'
    # Punctuation
    SEMICOLON = ';'
    COMMA = ','
    ASSIGN = ':='
    LPAREN = '('
    RPAREN = ')'
    LBRACKET = '['
    RBRACKET = ']'
    # Arithmetic
    PLUS = '+'
    MINUS = '-'
    STAR = '*'
    # Comparisons
    NOT_EQUAL = '!='
    EQUAL = '='
    GREATER = '>'
    LESS = '<'
    GREATER_EQUAL = '>='
    LESS_EQUAL = '<='
    # Tokens with a variable lexeme
    INTEGER = 'INTEGER'
    IDENTIFIER = 'IDENTIFIER'
    EOF = 'EOF'

    @property
    def is_fixed(self) -> bool:
        return self not in (TokenKind.INTEGER, TokenKind.IDENTIFIER, TokenKind.EOF)

    @classmethod
    def classify(cls, lexeme: str) -> 'TokenKind':
        """Return the kind a lexeme would be tokenized as."""
        kind = _FIXED_LEXEMES.get(lexeme)
        if kind is not None:
            return kind
        if _INTEGER_RE.fullmatch(lexeme):
            return cls.INTEGER
        if _IDENTIFIER_RE.fullmatch(lexeme):
            return cls.IDENTIFIER
        raise CoreError(ErrorKind.LEXICAL, f'not a Core token: {lexeme!r}')


_FIXED_LEXEMES = {kind.value: kind for kind in TokenKind if kind.is_fixed}
_INTEGER_RE = re.compile(r'[0-9]+')
_IDENTIFIER_RE = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    line: int

    def __str__(self) -> str:
        if self.kind is TokenKind.EOF:
            return 'end of input'
        return repr(self.lexeme)


def _terminal_grammar() -> str:
    lines = ['start: token*', 'token: ' + ' | '.join(k.name for k in TokenKind if k is not TokenKind.EOF)]
    for kind in TokenKind:
        if kind.is_fixed:
            lines.append(f'{kind.name}: "{kind.value}"')
    lines += [
        f'INTEGER: /{_INTEGER_RE.pattern}/',
        f'IDENTIFIER: /{_IDENTIFIER_RE.pattern}/',
        r'COMMENT: /\/\/[^\n]*/',
        '%import common.WS',
        '%ignore WS',
        '%ignore COMMENT',
    ]
    return '\n'.join(lines) + '\n'


CORE_TERMINALS = _terminal_grammar()

# Only Lark.lex is used; the LALR tables for the token* start rule are never
# parsed against. The rule keeps every terminal in the compiled grammar.
CORE_LEXER = Lark(
    CORE_TERMINALS,
    parser='lalr',
    lexer='basic',
)


class Lexer:
    """Pull-based token stream over a Core source text."""

    def __init__(self, source: str):
        self.source = source
        self._stream: Iterator[LarkToken] = CORE_LEXER.lex(source)
        self._last_line = source.count('\n') + 1
        self._current: Optional[Token] = None
        self.advance()

    def current_token(self) -> Token:
        return self._current

    def current_line(self) -> int:
        return self._current.line

    def advance(self) -> None:
        if self._current is not None and self._current.kind is TokenKind.EOF:
            return
        try:
            raw = next(self._stream)
        except StopIteration:
            self._current = Token(TokenKind.EOF, '', self._last_line)
            return
        except UnexpectedCharacters as e:
            raise CoreError(ErrorKind.LEXICAL, f'unexpected character {e.char!r}', e.line) from None
        self._current = Token(TokenKind[raw.type], str(raw), raw.line)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.current_token()
            yield token
            if token.kind is TokenKind.EOF:
                return
            self.advance()
