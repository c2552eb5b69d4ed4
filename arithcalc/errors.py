import enum
from dataclasses import dataclass
from typing import ClassVar, Optional

from arithcalc.utils import PrintableEnum, render_error_location


class ErrorKind(PrintableEnum):
    EMPTY_INPUT = enum.auto()
    INVALID_VARIABLE_NAME = enum.auto()
    DIVISION_BY_ZERO = enum.auto()
    UNMATCHED_PARENTHESIS = enum.auto()
    INVALID_NUMERIC_LITERAL = enum.auto()
    UNEXPECTED_TOKEN = enum.auto()


@dataclass
class CalculatorError(Exception):
    """Base of every fault an evaluation can end with.

    Subclasses only differ in the stage name shown in the message, callers
    should dispatch on ``kind``.
    """

    kind: ErrorKind
    errmsg: str
    code: str = ""
    error_char_idx: Optional[int] = None

    stage: ClassVar[str] = "Calculator"

    def __str__(self) -> str:
        header = f"[{self.stage} error] {self.errmsg}"
        if self.error_char_idx is None or not self.code:
            return header
        return "\n".join([header, render_error_location(self.code, self.error_char_idx)])
