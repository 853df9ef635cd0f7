# operators.py

import math
from enum import Enum, IntEnum
from typing import Callable, Dict, List

from exprtree.errors import (
    DivisionByZeroError,
    EvaluationError,
    ModuloByZeroError,
    UnknownOperatorError,
)


class Arity(IntEnum):
    UNARY = 1
    BINARY = 2


class Associativity(Enum):
    LEFT = 'left'
    RIGHT = 'right'


class Operator(Enum):
    """Closed operator table.

    Each member is (symbol, arity, precedence, associativity). A higher
    precedence binds tighter. Unary operators sit above every binary one,
    so ``-2^2`` groups as ``(-2)^2``.
    """

    # unary
    NEG = ('-', Arity.UNARY, 8, Associativity.RIGHT)
    BIT_NOT = ('~', Arity.UNARY, 8, Associativity.RIGHT)
    NOT = ('not', Arity.UNARY, 8, Associativity.RIGHT)
    # power
    POW = ('^', Arity.BINARY, 7, Associativity.RIGHT)
    # multiplicative
    MUL = ('*', Arity.BINARY, 6, Associativity.LEFT)
    DIV = ('/', Arity.BINARY, 6, Associativity.LEFT)
    MOD = ('%', Arity.BINARY, 6, Associativity.LEFT)
    # additive
    ADD = ('+', Arity.BINARY, 5, Associativity.LEFT)
    SUB = ('-', Arity.BINARY, 5, Associativity.LEFT)
    # shift
    SHL = ('<<', Arity.BINARY, 4, Associativity.LEFT)
    SHR = ('>>', Arity.BINARY, 4, Associativity.LEFT)
    # relational
    LT = ('<', Arity.BINARY, 3, Associativity.LEFT)
    GT = ('>', Arity.BINARY, 3, Associativity.LEFT)
    LE = ('<=', Arity.BINARY, 3, Associativity.LEFT)
    GE = ('>=', Arity.BINARY, 3, Associativity.LEFT)
    # equality
    EQ = ('==', Arity.BINARY, 2, Associativity.LEFT)
    NE = ('!=', Arity.BINARY, 2, Associativity.LEFT)
    # bitwise / logical
    BIT_AND = ('&', Arity.BINARY, 1, Associativity.LEFT)
    BIT_OR = ('|', Arity.BINARY, 1, Associativity.LEFT)
    XOR = ('xor', Arity.BINARY, 1, Associativity.LEFT)
    AND = ('&&', Arity.BINARY, 1, Associativity.LEFT)
    OR = ('||', Arity.BINARY, 1, Associativity.LEFT)

    def __init__(self, symbol: str, arity: Arity, precedence: int, associativity: Associativity):
        self.symbol = symbol
        self.arity = arity
        self.precedence = precedence
        self.associativity = associativity

    def __repr__(self) -> str:
        return f"Operator.{self.name}"

    @property
    def is_unary(self) -> bool:
        return self.arity == Arity.UNARY

    @property
    def is_right_associative(self) -> bool:
        return self.associativity == Associativity.RIGHT

    @property
    def word(self) -> str:
        """Spelling used by the pre-order / post-order renderings, where unary minus
        has to be told apart from subtraction without any surrounding context."""
        return 'neg' if self is Operator.NEG else self.symbol

    def apply(self, *operands: float) -> float:
        if len(operands) != self.arity:
            raise EvaluationError(
                f"Operator '{self.symbol}' expects {int(self.arity)} operand(s), got {len(operands)}"
            )
        func = _IMPLEMENTATIONS.get(self)
        if func is None:
            raise UnknownOperatorError(f"Unknown {self.arity.name.lower()} operator '{self.symbol}'")
        return func(*operands)


# ====== 評価関数 ======
def _truth(flag: bool) -> float:
    return 1.0 if flag else 0.0


def _to_int(x: float) -> int:
    # C-style truncation toward zero
    if not math.isfinite(x):
        raise EvaluationError(f"Cannot apply a bitwise operator to {x}")
    return int(x)


def _to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        raise EvaluationError(f"Numeric overflow: integer result has {value.bit_length()} bits") from None


def _divide(a: float, b: float) -> float:
    if b == 0:
        raise DivisionByZeroError
    return a / b


def _modulo(a: float, b: float) -> float:
    if b == 0:
        raise ModuloByZeroError
    if math.isinf(a):
        raise EvaluationError(f"Cannot take {a} modulo {b}")
    return math.fmod(a, b)


def _power(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except ValueError:
        raise EvaluationError(f"Math domain error in {a} ^ {b}") from None
    except OverflowError:
        raise EvaluationError(f"Numeric overflow in {a} ^ {b}") from None


# widest integer a float can hold
FLOAT_MAX_BITS = 1024


def _shift(a: float, b: float, left: bool) -> float:
    value, count = _to_int(a), _to_int(b)
    if count < 0:
        raise EvaluationError(f"Negative shift count {count}")
    if not left:
        if count >= value.bit_length():
            return -1.0 if value < 0 else 0.0
        return float(value >> count)
    if value == 0:
        return 0.0
    if value.bit_length() + count > FLOAT_MAX_BITS:
        raise EvaluationError(f"Numeric overflow in {value} << {count}")
    return _to_float(value << count)


_IMPLEMENTATIONS: Dict[Operator, Callable[..., float]] = {
    Operator.NEG: lambda a: -a,
    Operator.BIT_NOT: lambda a: _to_float(~_to_int(a)),
    Operator.NOT: lambda a: _truth(a == 0),
    Operator.POW: _power,
    Operator.MUL: lambda a, b: a * b,
    Operator.DIV: _divide,
    Operator.MOD: _modulo,
    Operator.ADD: lambda a, b: a + b,
    Operator.SUB: lambda a, b: a - b,
    Operator.SHL: lambda a, b: _shift(a, b, left=True),
    Operator.SHR: lambda a, b: _shift(a, b, left=False),
    Operator.LT: lambda a, b: _truth(a < b),
    Operator.GT: lambda a, b: _truth(a > b),
    Operator.LE: lambda a, b: _truth(a <= b),
    Operator.GE: lambda a, b: _truth(a >= b),
    Operator.EQ: lambda a, b: _truth(a == b),
    Operator.NE: lambda a, b: _truth(a != b),
    Operator.BIT_AND: lambda a, b: _to_float(_to_int(a) & _to_int(b)),
    Operator.BIT_OR: lambda a, b: _to_float(_to_int(a) | _to_int(b)),
    Operator.XOR: lambda a, b: _to_float(_to_int(a) ^ _to_int(b)),
    Operator.AND: lambda a, b: _truth(a != 0 and b != 0),
    Operator.OR: lambda a, b: _truth(a != 0 or b != 0),
}


# ====== 記号の検索 ======
_BINARY_SYMBOLS: Dict[str, Operator] = {op.symbol: op for op in Operator if not op.is_unary}
_BINARY_SYMBOLS.update({'and': Operator.AND, 'or': Operator.OR})

_UNARY_SYMBOLS: Dict[str, Operator] = {op.word: op for op in Operator if op.is_unary}
_UNARY_SYMBOLS.update({'-': Operator.NEG, '!': Operator.NOT})

# longest first so that '<=' wins over '<'
MULTI_CHAR_SYMBOLS = ('==', '!=', '<=', '>=', '&&', '||', '<<', '>>')
SINGLE_CHAR_SYMBOLS = frozenset('+-*/%^<>&|~!')
KEYWORDS = frozenset({'and', 'or', 'not', 'xor'})


def binary_operator(symbol: str) -> Operator:
    try:
        return _BINARY_SYMBOLS[symbol]
    except KeyError:
        raise UnknownOperatorError(f"Unknown binary operator '{symbol}'") from None


def unary_operator(symbol: str) -> Operator:
    try:
        return _UNARY_SYMBOLS[symbol]
    except KeyError:
        raise UnknownOperatorError(f"Unknown unary operator '{symbol}'") from None


def is_unary_symbol(symbol: str) -> bool:
    """True for symbols that can only ever be a prefix operator."""
    return symbol in ('~', '!', 'not')


def operator_table() -> List[dict]:
    return [
        {
            'name': op.name,
            'symbol': op.symbol,
            'arity': int(op.arity),
            'precedence': op.precedence,
            'associativity': op.associativity.value,
        }
        for op in sorted(Operator, key=lambda o: -o.precedence)
    ]
