import enum
import math
from dataclasses import dataclass
from typing import Callable, Optional

from arithcalc.errors import CalculatorError, ErrorKind
from arithcalc.utils import PrintableEnum


@dataclass
class CalcRuntimeError(CalculatorError):
    stage = "Runtime"


class BinaryOperator(PrintableEnum):
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    MOD = enum.auto()
    POW = enum.auto()


class UnaryOperator(PrintableEnum):
    NEG = enum.auto()
    POS = enum.auto()


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and x % 2 == 1


def _fmod(a: float, b: float) -> float:
    try:
        return math.fmod(a, b)
    except ValueError:
        # fmod(inf, b)
        return math.nan


def _pow(a: float, b: float) -> float:
    # math.pow raises where C pow returns inf or nan
    try:
        return math.pow(a, b)
    except OverflowError:
        if a < 0 and _is_odd_integer(b):
            return -math.inf
        return math.inf
    except ValueError:
        if a == 0.0:
            return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
        return math.nan


BINARY_IMPLS: dict[BinaryOperator, Callable[[float, float], float]] = {
    BinaryOperator.ADD: lambda a, b: a + b,
    BinaryOperator.SUB: lambda a, b: a - b,
    BinaryOperator.MUL: lambda a, b: a * b,
    BinaryOperator.DIV: lambda a, b: a / b,
    BinaryOperator.MOD: _fmod,
    BinaryOperator.POW: _pow,
}

UNARY_IMPLS: dict[UnaryOperator, Callable[[float], float]] = {
    UnaryOperator.NEG: lambda a: -a,
    UnaryOperator.POS: lambda a: a,
}

ZERO_DIVISOR_FORBIDDEN = {
    BinaryOperator.DIV: "Division",
    BinaryOperator.MOD: "Modulo",
}


def eval_binary_operation(
    operator: BinaryOperator, a: float, b: float, code: str = "", error_char_idx: Optional[int] = None
) -> float:
    if operator in ZERO_DIVISOR_FORBIDDEN and b == 0:
        raise CalcRuntimeError(
            ErrorKind.DIVISION_BY_ZERO,
            f"{ZERO_DIVISOR_FORBIDDEN[operator]} by zero",
            code=code,
            error_char_idx=error_char_idx,
        )
    return BINARY_IMPLS[operator](a, b)


def eval_unary_operation(operator: UnaryOperator, operand: float) -> float:
    return UNARY_IMPLS[operator](operand)
