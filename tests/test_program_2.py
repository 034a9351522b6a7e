import builtins
from pathlib import Path

from corelang.interpreter import parse_program, Interpreter


def test_program_2_larger_second(monkeypatch, capsys):
    monkeypatch.setattr(builtins, 'input', lambda prompt='': '2 5')
    with open(Path(__file__).parent.parent / 'examples' / 'program_2.core', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == '5'


def test_program_2_one_value_per_line(monkeypatch, capsys):
    lines = iter(['9', '4'])
    monkeypatch.setattr(builtins, 'input', lambda prompt='': next(lines))
    with open(Path(__file__).parent.parent / 'examples' / 'program_2.core', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == '9'
