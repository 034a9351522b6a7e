from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    LEXICAL = 'LexicalError'
    SYNTAX = 'SyntaxError'
    DUPLICATE_DECLARATION = 'DuplicateDeclarationError'
    UNDECLARED = 'UndeclaredError'
    UNSET_VALUE = 'UnsetValueError'
    OVERFLOW = 'OverflowError'
    MALFORMED_INPUT = 'MalformedInputError'


class CoreError(Exception):
    """Exception type used for every lexical, syntactic and runtime failure."""
    def __init__(self, kind: ErrorKind, message: str, line: Optional[int] = None):
        where = f"line {line}: " if line is not None else ''
        super().__init__(f"CoreError: {kind.value}: {where}{message}")
        self.kind = kind
        self.message = message
        self.line = line
