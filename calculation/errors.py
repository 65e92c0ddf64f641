import enum
from dataclasses import dataclass

from calculation.utils import PrintableEnum


class ErrorKind(PrintableEnum):
    EMPTY_INPUT = enum.auto()
    INVALID_EXPRESSION = enum.auto()
    DIVISION_BY_ZERO = enum.auto()
    MISMATCHED_PARENTHESES = enum.auto()
    INVALID_NUMBER = enum.auto()
    UNEXPECTED_TOKEN = enum.auto()
    NOT_ENOUGH_VALUES = enum.auto()
    INVALID_OPERATOR = enum.auto()
    OPERATOR_AT_END = enum.auto()
    MULTIPLE_DECIMAL_POINTS = enum.auto()


@dataclass
class CalculationError(Exception):
    """Base for every malformed-input failure; front ends dispatch on ``kind``"""

    kind: ErrorKind
    errmsg: str

    def __str__(self) -> str:
        return f"{self.kind}: {self.errmsg}"
