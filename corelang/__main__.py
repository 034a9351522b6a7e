"""CLI entry point for the Core interpreter.

Usage:
    python -m corelang [-v|-vv|-vvv] <program_file>
    python -m corelang [-v...] --print-ast <program_file>
    python -m corelang [-v...] --data <data_file> <program_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --print-ast   Print the parsed program before executing it
  --data        Read `read` statement input from a file instead of stdin

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import sys
from pathlib import Path

from .ast import dump
from .errors import CoreError
from .interpreter import Interpreter
from .parser import parse_program


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Core language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--print-ast', action='store_true', help='print the parsed program before running it')
    parser.add_argument('--data', metavar='DATA_FILE', help='file holding the integers consumed by read statements')
    parser.add_argument('program', help='Core program file to execute')
    args = parser.parse_args(argv)

    program_file = Path(args.program)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    data_fp = None
    if args.data:
        data_file = Path(args.data)
        if not data_file.exists():
            print(f"Error: file {data_file} not found", file=sys.stderr)
            sys.exit(1)
        data_fp = open(data_file, 'r', encoding='utf-8')
    with open(program_file, 'r', encoding='utf-8') as f:
        source = f.read()
    try:
        ast_program = parse_program(source)
        if args.print_ast:
            sys.stdout.write(dump(ast_program))
        interpreter = Interpreter(debug_level=args.v, stdin=data_fp)
        interpreter.run(ast_program)
    except CoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        if data_fp:
            data_fp.close()


if __name__ == '__main__':
    main()
