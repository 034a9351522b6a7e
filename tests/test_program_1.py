from pathlib import Path

from corelang.interpreter import parse_program, compile_module, Interpreter


def test_program_1(capsys):
    with open(Path(__file__).parent.parent / 'examples' / 'program_1.core', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == '7'


def test_program_1_compile_module(capsys):
    compile_module(str(Path(__file__).parent.parent / 'examples' / 'program_1.core'))
    out = capsys.readouterr().out.strip()
    assert out == '7'
