"""Abstract Syntax Tree (AST) definitions for the Core language.

Nodes are built by the parser already wired to their identifier slots,
so the tree is directly executable: there is no separate resolve pass.
Each node implements only the capabilities its grammar position needs:

* `Printable`   - renders itself as Core source at an indent level
* `Evaluatable` - computes a value (`int` for arithmetic, `bool` for
  conditions) and may read identifier slots
* `Assignable`  - an evaluatable that can also store a value
* `Executable`  - performs a side effect against the running interpreter
"""

from __future__ import annotations

import io
import operator
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Generic, List, Optional, Sequence, TextIO, Tuple, TypeVar, Union

from . import integers
from .environment import Environment, IdSlot
from .errors import CoreError, ErrorKind

if TYPE_CHECKING:
    from .interpreter import Interpreter

T = TypeVar('T')

INDENT = '  '


class Printable(ABC):
    @abstractmethod
    def pretty_print(self, indent: int, out: TextIO) -> None:
        ...


class Evaluatable(Printable, Generic[T]):
    @abstractmethod
    def evaluate(self) -> T:
        ...


class Assignable(Evaluatable[T]):
    @abstractmethod
    def assign(self, value: T) -> None:
        ...


class Executable(Printable):
    @abstractmethod
    def execute(self, interpreter: 'Interpreter') -> None:
        ...


def checked(value: int, line: Optional[int]) -> int:
    """Return `value` if it is a representable Core integer, else fail."""
    if not integers.is_valid_in_range(value):
        raise CoreError(
            ErrorKind.OVERFLOW,
            f'result {value} outside [{integers.MIN_INT}, {integers.MAX_INT}]',
            line,
        )
    return value


def _print_sequence(items: Sequence[Printable], indent: int, out: TextIO, terminated: bool = False) -> None:
    # One item per line, ';' between items (and after the last one if terminated).
    for i, item in enumerate(items):
        buf = io.StringIO()
        item.pretty_print(indent, buf)
        text = buf.getvalue().rstrip('\n')
        out.write(text + (';\n' if terminated or i < len(items) - 1 else '\n'))


###############################################################################
# Factors
###############################################################################

@dataclass
class IntegerLiteral(Evaluatable[int]):
    value: int
    line: Optional[int] = None

    def evaluate(self) -> int:
        return self.value

    def pretty_print(self, indent: int, out: TextIO) -> None:
        out.write(str(self.value))


@dataclass
class Id(Assignable[int]):
    """Reference to a variable; all references to a name share one slot."""
    slot: IdSlot
    line: Optional[int] = None

    @property
    def name(self) -> str:
        return self.slot.name

    def require_declared(self) -> None:
        if not self.slot.declared:
            raise CoreError(ErrorKind.UNDECLARED, f'variable {self.name} is not declared', self.line)

    def declare(self) -> None:
        if self.slot.declared:
            raise CoreError(ErrorKind.DUPLICATE_DECLARATION, f'variable {self.name} already declared', self.line)
        self.slot.declared = True

    def evaluate(self) -> int:
        self.require_declared()
        if not self.slot.is_set:
            raise CoreError(ErrorKind.UNSET_VALUE, f'variable {self.name} has no value', self.line)
        return self.slot.value

    def assign(self, value: int) -> None:
        self.require_declared()
        self.slot.value = value

    def pretty_print(self, indent: int, out: TextIO) -> None:
        out.write(self.name)


@dataclass
class Parenthesized(Evaluatable[int]):
    expression: 'Expression'

    def evaluate(self) -> int:
        return self.expression.evaluate()

    def pretty_print(self, indent: int, out: TextIO) -> None:
        out.write('(')
        self.expression.pretty_print(indent, out)
        out.write(')')


Factor = Union[IntegerLiteral, Id, Parenthesized]


###############################################################################
# Arithmetic
###############################################################################

@dataclass
class Term(Evaluatable[int]):
    """Product of one or more factors."""
    factors: List[Factor]
    line: Optional[int] = None

    def evaluate(self) -> int:
        result = self.factors[0].evaluate()
        for factor in self.factors[1:]:
            result = checked(result * factor.evaluate(), self.line)
        return result

    def pretty_print(self, indent: int, out: TextIO) -> None:
        for i, factor in enumerate(self.factors):
            if i:
                out.write(' * ')
            factor.pretty_print(indent, out)


class Sign(Enum):
    PLUS = '+'
    MINUS = '-'


@dataclass
class Expression(Evaluatable[int]):
    """Left-associative chain of signed terms; the first sign is always PLUS."""
    terms: List[Tuple[Sign, Term]]
    line: Optional[int] = None

    @classmethod
    def of(cls, term: Term, line: Optional[int] = None) -> 'Expression':
        return cls([(Sign.PLUS, term)], line)

    def extend(self, sign: Sign, term: Term) -> 'Expression':
        self.terms.append((sign, term))
        return self

    def evaluate(self) -> int:
        result = 0
        for sign, term in self.terms:
            value = term.evaluate()
            result = checked(result + value if sign is Sign.PLUS else result - value, self.line)
        return result

    def pretty_print(self, indent: int, out: TextIO) -> None:
        for i, (sign, term) in enumerate(self.terms):
            if i:
                out.write(f' {sign.value} ')
            term.pretty_print(indent, out)


###############################################################################
# Conditions
###############################################################################

class Comparison(Enum):
    NOT_EQUAL = ('!=', operator.ne)
    EQUAL = ('=', operator.eq)
    GREATER = ('>', operator.gt)
    LESS = ('<', operator.lt)
    GREATER_OR_EQUAL = ('>=', operator.ge)
    LESS_OR_EQUAL = ('<=', operator.le)

    def __init__(self, symbol: str, fn: Callable[[int, int], bool]):
        self.symbol = symbol
        self.fn = fn


@dataclass
class Composite(Evaluatable[bool]):
    left: Factor
    comparison: Comparison
    right: Factor

    def evaluate(self) -> bool:
        a = self.left.evaluate()
        b = self.right.evaluate()
        return self.comparison.fn(a, b)

    def pretty_print(self, indent: int, out: TextIO) -> None:
        self.left.pretty_print(indent, out)
        out.write(f' {self.comparison.symbol} ')
        self.right.pretty_print(indent, out)


class Condition(Evaluatable[bool]):
    """A boolean condition: regular, negated, conjunction or disjunction."""

    def _print_operand(self, operand: 'Condition', out: TextIO) -> None:
        if isinstance(operand, (AndCondition, OrCondition)):
            out.write('[')
            operand.pretty_print(0, out)
            out.write(']')
        else:
            operand.pretty_print(0, out)


@dataclass
class RegularCondition(Condition):
    composite: Composite

    def evaluate(self) -> bool:
        return self.composite.evaluate()

    def pretty_print(self, indent: int, out: TextIO) -> None:
        self.composite.pretty_print(indent, out)


@dataclass
class NegatedCondition(Condition):
    operand: Condition

    def evaluate(self) -> bool:
        return not self.operand.evaluate()

    def pretty_print(self, indent: int, out: TextIO) -> None:
        out.write('not ')
        self._print_operand(self.operand, out)


@dataclass
class AndCondition(Condition):
    left: Condition
    right: Condition

    def evaluate(self) -> bool:
        # Both sides are always evaluated, left first.
        a = self.left.evaluate()
        b = self.right.evaluate()
        return a and b

    def pretty_print(self, indent: int, out: TextIO) -> None:
        self._print_operand(self.left, out)
        out.write(' and ')
        self._print_operand(self.right, out)


@dataclass
class OrCondition(Condition):
    left: Condition
    right: Condition

    def evaluate(self) -> bool:
        a = self.left.evaluate()
        b = self.right.evaluate()
        return a or b

    def pretty_print(self, indent: int, out: TextIO) -> None:
        self._print_operand(self.left, out)
        out.write(' or ')
        self._print_operand(self.right, out)


###############################################################################
# Declarations
###############################################################################

@dataclass
class IdList(Printable):
    ids: List[Id]

    def __iter__(self):
        return iter(self.ids)

    def pretty_print(self, indent: int, out: TextIO) -> None:
        out.write(', '.join(ident.name for ident in self.ids))


@dataclass
class Declaration(Executable):
    id_list: IdList

    def execute(self, interpreter: 'Interpreter') -> None:
        for ident in self.id_list:
            ident.declare()
            if interpreter.debug_level >= 2:
                interpreter.debug(f"declare {ident.name}")

    def pretty_print(self, indent: int, out: TextIO) -> None:
        out.write(INDENT * indent + 'int ')
        self.id_list.pretty_print(indent, out)
        out.write('\n')


@dataclass
class DeclarationSequence(Executable):
    declarations: List[Declaration]

    def execute(self, interpreter: 'Interpreter') -> None:
        for declaration in self.declarations:
            declaration.execute(interpreter)

    def pretty_print(self, indent: int, out: TextIO) -> None:
        _print_sequence(self.declarations, indent, out, terminated=True)


###############################################################################
# Statements
###############################################################################

@dataclass
class StatementSequence(Executable):
    statements: List['Statement']

    def execute(self, interpreter: 'Interpreter') -> None:
        for statement in self.statements:
            statement.execute(interpreter)

    def pretty_print(self, indent: int, out: TextIO) -> None:
        _print_sequence(self.statements, indent, out)


@dataclass
class Assign(Executable):
    target: Id
    expression: Expression
    line: Optional[int] = None

    def execute(self, interpreter: 'Interpreter') -> None:
        value = self.expression.evaluate()
        self.target.assign(value)
        if interpreter.debug_level >= 2:
            interpreter.debug(f"assign {self.target.name} = {value}")

    def pretty_print(self, indent: int, out: TextIO) -> None:
        out.write(INDENT * indent + f'{self.target.name} := ')
        self.expression.pretty_print(indent, out)
        out.write('\n')


@dataclass
class If(Executable):
    condition: Condition
    then_branch: StatementSequence
    else_branch: Optional[StatementSequence] = None
    line: Optional[int] = None

    def execute(self, interpreter: 'Interpreter') -> None:
        truthy = self.condition.evaluate()
        if interpreter.debug_level >= 3:
            interpreter.debug(f"if condition at line {self.line} -> {truthy}")
        if truthy:
            self.then_branch.execute(interpreter)
        elif self.else_branch is not None:
            self.else_branch.execute(interpreter)

    def pretty_print(self, indent: int, out: TextIO) -> None:
        pad = INDENT * indent
        out.write(pad + 'if ')
        self.condition.pretty_print(indent, out)
        out.write(' then\n')
        self.then_branch.pretty_print(indent + 1, out)
        if self.else_branch is not None:
            out.write(pad + 'else\n')
            self.else_branch.pretty_print(indent + 1, out)


@dataclass
class Loop(Executable):
    condition: Condition
    body: StatementSequence
    line: Optional[int] = None

    def execute(self, interpreter: 'Interpreter') -> None:
        while True:
            truthy = self.condition.evaluate()
            if interpreter.debug_level >= 3:
                interpreter.debug(f"while condition at line {self.line} -> {truthy}")
            if not truthy:
                break
            self.body.execute(interpreter)

    def pretty_print(self, indent: int, out: TextIO) -> None:
        out.write(INDENT * indent + 'while ')
        self.condition.pretty_print(indent, out)
        out.write(' loop\n')
        self.body.pretty_print(indent + 1, out)


@dataclass
class In(Executable):
    id_list: IdList
    line: Optional[int] = None

    def execute(self, interpreter: 'Interpreter') -> None:
        for ident in self.id_list:
            ident.require_declared()
            text = interpreter.console.read_token(self.line)
            if not integers.is_well_formed_and_in_range(text):
                raise CoreError(ErrorKind.MALFORMED_INPUT, f'invalid integer input {text!r} for {ident.name}', self.line)
            ident.assign(integers.parse(text))
            if interpreter.debug_level >= 2:
                interpreter.debug(f"read {ident.name} = {ident.slot.value}")

    def pretty_print(self, indent: int, out: TextIO) -> None:
        out.write(INDENT * indent + 'read ')
        self.id_list.pretty_print(indent, out)
        out.write('\n')


@dataclass
class Out(Executable):
    id_list: IdList
    line: Optional[int] = None

    def execute(self, interpreter: 'Interpreter') -> None:
        for ident in self.id_list:
            value = ident.evaluate()
            interpreter.console.write_int(value)
            if interpreter.debug_level >= 2:
                interpreter.debug(f"write {ident.name} = {value}")

    def pretty_print(self, indent: int, out: TextIO) -> None:
        out.write(INDENT * indent + 'write ')
        self.id_list.pretty_print(indent, out)
        out.write('\n')


Statement = Union[Assign, If, Loop, In, Out]


###############################################################################
# Program
###############################################################################

@dataclass
class Program(Executable):
    declarations: DeclarationSequence
    statements: StatementSequence
    environment: Environment = field(default_factory=Environment, repr=False, compare=False)

    def execute(self, interpreter: 'Interpreter') -> None:
        self.declarations.execute(interpreter)
        self.statements.execute(interpreter)

    def pretty_print(self, indent: int, out: TextIO) -> None:
        pad = INDENT * indent
        out.write(pad + 'program\n')
        self.declarations.pretty_print(indent + 1, out)
        out.write(pad + 'begin\n')
        self.statements.pretty_print(indent + 1, out)
        out.write(pad + 'end\n')


def dump(node: Printable, indent: int = 0) -> str:
    """Render a node (usually a whole Program) as Core source text."""
    buf = io.StringIO()
    node.pretty_print(indent, buf)
    return buf.getvalue()
