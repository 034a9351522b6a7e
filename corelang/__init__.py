# Core language package
# This package provides a parser and tree-walking interpreter for Core.
from .errors import CoreError, ErrorKind
from .parser import parse_program
from .interpreter import run_program, compile_module, Interpreter

__all__ = [
    'run_program',
    'compile_module',
    'parse_program',
    'Interpreter',
    'CoreError',
    'ErrorKind',
]
