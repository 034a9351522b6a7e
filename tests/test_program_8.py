import builtins
from pathlib import Path

import pytest

from corelang.interpreter import parse_program, Interpreter


@pytest.mark.parametrize('data, expected', [
    ('3 4', '1'),
    ('0 0', '1'),
    ('-3 -4', '2'),
    ('-3 4', '3'),
    ('3 -4', '3'),
])
def test_program_8_sign_classes(monkeypatch, capsys, data, expected):
    monkeypatch.setattr(builtins, 'input', lambda prompt='': data)
    with open(Path(__file__).parent.parent / 'examples' / 'program_8.core', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    assert capsys.readouterr().out.strip() == expected
