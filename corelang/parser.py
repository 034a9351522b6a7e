"""Recursive-descent parser for the Core language.

Every grammar nonterminal has one rule function with the signature
`rule(registry, lexer) -> node`. Rules are registered by name in a
table and call each other through the `ParserRegistry`, so mutually
recursive rules need no forward declarations. Rules keep no state of
their own; the only thing shared across a parse is the registry's
`Environment`, which hands out one identifier slot per name.

Grammar (LL(1), no backtracking):

    program         := 'program' declaration_seq 'begin' statement_seq 'end'
    declaration_seq := declaration (';' declaration)* ';'?
    declaration     := 'int' id_list
    id_list         := id (',' id)*
    statement_seq   := statement (';' statement)*
    statement       := assign | if | loop | in | out
    assign          := id ':=' expression
    if              := 'if' condition 'then' statement_seq ('else' statement_seq)?
    loop            := 'while' condition 'loop' statement_seq
    in              := 'read' id_list
    out             := 'write' id_list
    condition       := and_condition ('or' and_condition)*
    and_condition   := not_condition ('and' not_condition)*
    not_condition   := 'not' not_condition | '[' condition ']' | composite
    composite       := factor comp_op factor
    expression      := term (('+' | '-') term)*
    term            := factor ('*'? factor)*
    factor          := INTEGER | id | '(' expression ')'
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Union

from . import integers
from .ast import (
    Program, DeclarationSequence, Declaration, IdList, Id, StatementSequence,
    Assign, If, Loop, In, Out, Condition, RegularCondition, NegatedCondition,
    AndCondition, OrCondition, Composite, Comparison, Expression, Sign, Term,
    IntegerLiteral, Parenthesized,
)
from .environment import Environment
from .errors import CoreError, ErrorKind
from .lexer import Lexer, Token, TokenKind

Rule = Callable[['ParserRegistry', Lexer], Any]

RULES: Dict[str, Rule] = {}


def rule(name: str) -> Callable[[Rule], Rule]:
    """Register a function as the parser for grammar nonterminal `name`."""
    def register(fn: Rule) -> Rule:
        RULES[name] = fn
        return fn
    return register


class ParserRegistry:
    """Dispatch table of grammar rules plus the slot table for one parse."""

    def __init__(self, environment: Optional[Environment] = None, rules: Optional[Dict[str, Rule]] = None):
        self.environment = environment if environment is not None else Environment()
        self.rules = dict(RULES if rules is None else rules)

    def parse(self, name: str, lexer: Lexer) -> Any:
        return self.rules[name](self, lexer)


###############################################################################
# Shared utilities
###############################################################################

def _matches(token: Token, expected: Union[TokenKind, str]) -> bool:
    if isinstance(expected, TokenKind):
        return token.kind is expected
    return token.kind.is_fixed and token.lexeme == expected


def _describe(expected: Union[TokenKind, str]) -> str:
    if isinstance(expected, TokenKind):
        return expected.name if not expected.is_fixed else repr(expected.value)
    return repr(expected)


def expect(lexer: Lexer, expected: Union[TokenKind, str]) -> Token:
    """Fail unless the current token has the expected kind or lexeme."""
    token = lexer.current_token()
    if not _matches(token, expected):
        raise CoreError(
            ErrorKind.SYNTAX,
            f"expected {_describe(expected)}, got {token}",
            lexer.current_line(),
        )
    return token


def expect_and_consume(lexer: Lexer, expected: Union[TokenKind, str]) -> Token:
    token = expect(lexer, expected)
    lexer.advance()
    return token


def _at(lexer: Lexer, *kinds: TokenKind) -> bool:
    return lexer.current_token().kind in kinds


###############################################################################
# Declarations
###############################################################################

@rule('program')
def parse_program_rule(reg: ParserRegistry, lexer: Lexer) -> Program:
    expect_and_consume(lexer, 'program')
    declarations = reg.parse('declaration_seq', lexer)
    expect_and_consume(lexer, 'begin')
    statements = reg.parse('statement_seq', lexer)
    expect_and_consume(lexer, 'end')
    expect(lexer, TokenKind.EOF)
    return Program(declarations, statements, reg.environment)


@rule('declaration_seq')
def parse_declaration_seq(reg: ParserRegistry, lexer: Lexer) -> DeclarationSequence:
    declarations = [reg.parse('declaration', lexer)]
    while _at(lexer, TokenKind.SEMICOLON):
        lexer.advance()
        # The last declaration may be terminated by ';' before 'begin'.
        if _at(lexer, TokenKind.BEGIN):
            break
        declarations.append(reg.parse('declaration', lexer))
    return DeclarationSequence(declarations)


@rule('declaration')
def parse_declaration(reg: ParserRegistry, lexer: Lexer) -> Declaration:
    expect_and_consume(lexer, 'int')
    return Declaration(reg.parse('id_list', lexer))


@rule('id_list')
def parse_id_list(reg: ParserRegistry, lexer: Lexer) -> IdList:
    ids = [reg.parse('id', lexer)]
    while _at(lexer, TokenKind.COMMA):
        lexer.advance()
        ids.append(reg.parse('id', lexer))
    return IdList(ids)


@rule('id')
def parse_id(reg: ParserRegistry, lexer: Lexer) -> Id:
    token = expect_and_consume(lexer, TokenKind.IDENTIFIER)
    return Id(reg.environment.slot(token.lexeme), token.line)


###############################################################################
# Statements
###############################################################################

_STATEMENT_RULES = {
    TokenKind.IDENTIFIER: 'assign',
    TokenKind.IF: 'if',
    TokenKind.WHILE: 'loop',
    TokenKind.READ: 'in',
    TokenKind.WRITE: 'out',
}


@rule('statement_seq')
def parse_statement_seq(reg: ParserRegistry, lexer: Lexer) -> StatementSequence:
    statements = [reg.parse('statement', lexer)]
    while _at(lexer, TokenKind.SEMICOLON):
        lexer.advance()
        statements.append(reg.parse('statement', lexer))
    return StatementSequence(statements)


@rule('statement')
def parse_statement(reg: ParserRegistry, lexer: Lexer):
    token = lexer.current_token()
    name = _STATEMENT_RULES.get(token.kind)
    if name is None:
        raise CoreError(ErrorKind.SYNTAX, f"expected a statement, got {token}", token.line)
    return reg.parse(name, lexer)


@rule('assign')
def parse_assign(reg: ParserRegistry, lexer: Lexer) -> Assign:
    line = lexer.current_line()
    target = reg.parse('id', lexer)
    expect_and_consume(lexer, ':=')
    return Assign(target, reg.parse('expression', lexer), line)


@rule('if')
def parse_if(reg: ParserRegistry, lexer: Lexer) -> If:
    line = expect_and_consume(lexer, 'if').line
    condition = reg.parse('condition', lexer)
    expect_and_consume(lexer, 'then')
    then_branch = reg.parse('statement_seq', lexer)
    else_branch = None
    if _at(lexer, TokenKind.ELSE):
        lexer.advance()
        else_branch = reg.parse('statement_seq', lexer)
    return If(condition, then_branch, else_branch, line)


@rule('loop')
def parse_loop(reg: ParserRegistry, lexer: Lexer) -> Loop:
    line = expect_and_consume(lexer, 'while').line
    condition = reg.parse('condition', lexer)
    expect_and_consume(lexer, 'loop')
    return Loop(condition, reg.parse('statement_seq', lexer), line)


@rule('in')
def parse_in(reg: ParserRegistry, lexer: Lexer) -> In:
    line = expect_and_consume(lexer, 'read').line
    return In(reg.parse('id_list', lexer), line)


@rule('out')
def parse_out(reg: ParserRegistry, lexer: Lexer) -> Out:
    line = expect_and_consume(lexer, 'write').line
    return Out(reg.parse('id_list', lexer), line)


###############################################################################
# Conditions
###############################################################################

_COMPARISONS = {
    TokenKind.NOT_EQUAL: Comparison.NOT_EQUAL,
    TokenKind.EQUAL: Comparison.EQUAL,
    TokenKind.GREATER: Comparison.GREATER,
    TokenKind.LESS: Comparison.LESS,
    TokenKind.GREATER_EQUAL: Comparison.GREATER_OR_EQUAL,
    TokenKind.LESS_EQUAL: Comparison.LESS_OR_EQUAL,
}


@rule('condition')
def parse_condition(reg: ParserRegistry, lexer: Lexer) -> Condition:
    left = reg.parse('and_condition', lexer)
    while _at(lexer, TokenKind.OR):
        lexer.advance()
        left = OrCondition(left, reg.parse('and_condition', lexer))
    return left


@rule('and_condition')
def parse_and_condition(reg: ParserRegistry, lexer: Lexer) -> Condition:
    left = reg.parse('not_condition', lexer)
    while _at(lexer, TokenKind.AND):
        lexer.advance()
        left = AndCondition(left, reg.parse('not_condition', lexer))
    return left


@rule('not_condition')
def parse_not_condition(reg: ParserRegistry, lexer: Lexer) -> Condition:
    if _at(lexer, TokenKind.NOT):
        lexer.advance()
        return NegatedCondition(reg.parse('not_condition', lexer))
    if _at(lexer, TokenKind.LBRACKET):
        lexer.advance()
        condition = reg.parse('condition', lexer)
        expect_and_consume(lexer, ']')
        return condition
    return RegularCondition(reg.parse('composite', lexer))


@rule('composite')
def parse_composite(reg: ParserRegistry, lexer: Lexer) -> Composite:
    left = reg.parse('factor', lexer)
    token = lexer.current_token()
    comparison = _COMPARISONS.get(token.kind)
    if comparison is None:
        raise CoreError(ErrorKind.SYNTAX, f"expected a comparison operator, got {token}", token.line)
    lexer.advance()
    return Composite(left, comparison, reg.parse('factor', lexer))


###############################################################################
# Arithmetic
###############################################################################

_FACTOR_START = (TokenKind.INTEGER, TokenKind.IDENTIFIER, TokenKind.LPAREN)


@rule('expression')
def parse_expression(reg: ParserRegistry, lexer: Lexer) -> Expression:
    line = lexer.current_line()
    expression = Expression.of(reg.parse('term', lexer), line)
    while _at(lexer, TokenKind.PLUS, TokenKind.MINUS):
        sign = Sign.PLUS if lexer.current_token().kind is TokenKind.PLUS else Sign.MINUS
        lexer.advance()
        expression.extend(sign, reg.parse('term', lexer))
    return expression


@rule('term')
def parse_term(reg: ParserRegistry, lexer: Lexer) -> Term:
    line = lexer.current_line()
    factors = [reg.parse('factor', lexer)]
    while _at(lexer, TokenKind.STAR, *_FACTOR_START):
        if _at(lexer, TokenKind.STAR):
            lexer.advance()
        factors.append(reg.parse('factor', lexer))
    return Term(factors, line)


@rule('factor')
def parse_factor(reg: ParserRegistry, lexer: Lexer):
    token = lexer.current_token()
    if token.kind is TokenKind.INTEGER:
        lexer.advance()
        value = int(token.lexeme)
        if not integers.is_valid_in_range(value):
            raise CoreError(ErrorKind.SYNTAX, f"integer literal {token.lexeme} out of range", token.line)
        return IntegerLiteral(value, token.line)
    if token.kind is TokenKind.IDENTIFIER:
        return reg.parse('id', lexer)
    if token.kind is TokenKind.LPAREN:
        lexer.advance()
        expression = reg.parse('expression', lexer)
        expect_and_consume(lexer, ')')
        return Parenthesized(expression)
    raise CoreError(ErrorKind.SYNTAX, f"expected an integer, identifier or '(', got {token}", token.line)


def parse_program(source: str, environment: Optional[Environment] = None) -> Program:
    """Parse Core source text into an executable Program tree.

    The first lexical or syntax error aborts the parse with a CoreError.
    """
    registry = ParserRegistry(environment)
    return registry.parse('program', Lexer(source))
