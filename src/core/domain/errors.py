"""
Таксономия ошибок калькулятора

Каждая ошибка ввода или вычисления классифицируется в один из фиксированных
видов с каноническим сообщением для пользователя.
"""

from enum import Enum
from typing import Final


class ErrorKind(str, Enum):
    """Вид ошибки движка"""

    DIVISION_BY_ZERO = "DivisionByZero"
    INVALID_CALCULATION = "InvalidCalculation"
    OVERFLOW = "Overflow"
    NEGATIVE_SQRT = "NegativeSqrt"
    MULTIPLE_DECIMAL_POINTS = "MultipleDecimalPoints"
    CONSECUTIVE_OPERATORS = "ConsecutiveOperators"

    @property
    def message(self) -> str:
        """Каноническое сообщение для отображения."""
        return ERROR_MESSAGES[self]


ERROR_MESSAGES: Final[dict[ErrorKind, str]] = {
    ErrorKind.DIVISION_BY_ZERO: "Cannot divide by zero",
    ErrorKind.INVALID_CALCULATION: "Invalid calculation",
    ErrorKind.OVERFLOW: "Result is too large",
    ErrorKind.NEGATIVE_SQRT: "Cannot calculate square root of a negative number",
    ErrorKind.MULTIPLE_DECIMAL_POINTS: "A number can only have one decimal point",
    ErrorKind.CONSECUTIVE_OPERATORS: "Cannot have multiple operators in sequence",
}


class CalculatorError(Exception):
    """
    Классифицированная ошибка ввода или вычисления.

    Всегда перехватывается внутри движка: буфер сбрасывается в "0",
    ошибка уходит в ErrorReporter. Наружу не пропагирует.
    """

    def __init__(self, kind: ErrorKind, detail: str = ""):
        self.kind = kind
        self.detail = detail
        super().__init__(kind.message if not detail else f"{kind.message}: {detail}")
