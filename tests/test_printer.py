import io

import pytest

from corelang.ast import dump
from corelang.interpreter import parse_program, Interpreter

PROGRAMS = [
    ('program int x; begin x := 3 + 4; write x end', ''),
    ('program int x, y; begin read x; read y; if x > y then write x else write y end', '2 5'),
    ('program int n, r begin read n; r := 1; while n > 1 loop r := r * n; n := n - 1; if n = 1 then write r end', '6'),
    ('program int a; int b begin a := (1 + 2) 3 - 4; b := a; if not [a = 5 or b < 0] and a != 0 then write a else write b end', ''),
    ('program int a begin a := 2; if not a = 1 and [a = 2 or a = 3] or a > 9 then write a end', ''),
    ('program int a begin a := 1; if a = 1 then if a = 2 then write a else a := 5; write a end', ''),
    ('program int a begin a := 3; while a > 0 loop a := a - 1; if a = 2 then write a end', ''),
]


def execute(program, data):
    out = io.StringIO()
    Interpreter(stdin=io.StringIO(data), stdout=out).run(program)
    return out.getvalue()


@pytest.mark.parametrize('source, data', PROGRAMS)
def test_printed_program_reparses_with_same_behaviour(source, data):
    original = parse_program(source)
    printed = dump(original)
    reparsed = parse_program(printed)
    assert execute(reparsed, data) == execute(original, data)
    assert dump(reparsed) == printed


def test_layout():
    program = parse_program('program int x, y; int z begin read x; if x > 0 then y := x x else y := 0 - x; write y end')
    assert dump(program) == (
        'program\n'
        '  int x, y;\n'
        '  int z;\n'
        'begin\n'
        '  read x;\n'
        '  if x > 0 then\n'
        '    y := x * x\n'
        '  else\n'
        '    y := 0 - x;\n'
        '    write y\n'
        'end\n'
    )


def test_nested_conditions_get_brackets():
    program = parse_program('program int a begin a := 1; if not [a = 1 or a = 2] and [a = 3 and a = 4] then write a end')
    assert 'if not [a = 1 or a = 2] and [a = 3 and a = 4] then' in dump(program)


def test_comparison_prints_without_parentheses():
    # A leading '(' would start a parenthesized expression, not a condition.
    program = parse_program('program int a begin a := 1; while a < 3 loop a := a + 1 end')
    assert '  while a < 3 loop\n' in dump(program)
