"""Integer range policy shared by the evaluator and the input reader.

Core integers are signed 32-bit values. Python integers never wrap, so
every arithmetic result is checked explicitly against the range below.
"""

from __future__ import annotations

import re

MIN_INT = -(2 ** 31)
MAX_INT = 2 ** 31 - 1

_INTEGER_TEXT = re.compile(r'[+-]?[0-9]+')


def is_valid_in_range(value: int) -> bool:
    return MIN_INT <= value <= MAX_INT


def is_well_formed_and_in_range(text: str) -> bool:
    """Return True if `text` is an integer literal whose value fits the range.

    An optional leading sign is allowed; surrounding whitespace is not.
    """
    if not isinstance(text, str) or _INTEGER_TEXT.fullmatch(text) is None:
        return False
    return is_valid_in_range(int(text))


def parse(text: str) -> int:
    """Convert pre-validated text to an integer.

    Raises ValueError when the text is not a well formed, in range
    integer; callers are expected to check first.
    """
    if not is_well_formed_and_in_range(text):
        raise ValueError(f'not a valid integer: {text!r}')
    return int(text)
