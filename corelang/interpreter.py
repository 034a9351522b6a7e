"""Interpreter for the Core language.

Evaluation lives on the AST nodes themselves; the `Interpreter` is the
runtime context they execute against. It owns the console used by
`read` and `write` statements and the debug channel.
"""

from __future__ import annotations

from typing import Optional, TextIO

from .ast import Program
from .console import Console
from .parser import parse_program


class Interpreter:
    """Runs parsed Core programs."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.console = Console(stdin, stdout)
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    # Public API
    def run(self, program: Program) -> None:
        # Slots start fresh so the same tree can be run more than once.
        program.environment.reset()
        try:
            self.debug("run start")
            program.execute(self)
            self.debug("run finished")
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None


def run_program(source: str, debug_level: int = 0,
                stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
    """Convenience function to parse and run a Core program from source string."""
    ast_program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level, stdin=stdin, stdout=stdout)
    interpreter.run(ast_program)


def compile_module(file_path: str, debug_level: int = 0) -> Interpreter:
    """Parse and run a Core file, returning the interpreter instance."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    ast_program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level)
    interpreter.run(ast_program)
    return interpreter
