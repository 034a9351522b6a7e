import builtins
import sys
from collections import deque
from typing import Deque, Optional, TextIO

from corelang.errors import CoreError, ErrorKind


class Console:
    """Integer I/O for `read` and `write` statements.

    Input is consumed as whitespace separated tokens, one line at a time.
    Without an explicit stream, lines come from the builtin `input()`.
    """
    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin
        self.stdout = stdout
        self.pending: Deque[str] = deque()

    def _next_line(self) -> Optional[str]:
        if self.stdin is None:
            try:
                return builtins.input()
            except EOFError:
                return None
        line = self.stdin.readline()
        return line if line else None

    def read_token(self, line_no: Optional[int] = None) -> str:
        while not self.pending:
            line = self._next_line()
            if line is None:
                raise CoreError(ErrorKind.MALFORMED_INPUT, 'no more input data', line_no)
            self.pending.extend(line.split())
        return self.pending.popleft()

    def write_int(self, value: int) -> None:
        print(value, file=self.stdout if self.stdout is not None else sys.stdout)
