from pathlib import Path

import pytest

from corelang import CoreError, ErrorKind
from corelang.interpreter import parse_program, Interpreter


def test_program_9_overflow(capsys):
    with open(Path(__file__).parent.parent / 'examples' / 'program_9.core', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    with pytest.raises(CoreError) as excinfo:
        interp.run(ast)
    assert excinfo.value.kind is ErrorKind.OVERFLOW
    assert excinfo.value.line == 6
    assert capsys.readouterr().out == ''
