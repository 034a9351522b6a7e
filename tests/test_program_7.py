import builtins
from pathlib import Path

from corelang.interpreter import parse_program, Interpreter


def test_program_7_squares(monkeypatch, capsys):
    """Squares are computed with juxtaposed factors (`i i`)."""
    monkeypatch.setattr(builtins, 'input', lambda prompt='': '4')
    with open(Path(__file__).parent.parent / 'examples' / 'program_7.core', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['1', '4', '9', '16']
