"""Evaluator — разбор и вычисление арифметического выражения.

Конвейер:
1. Текстовая проверка деления на ноль ("/0", кроме "/0.<digit>")
2. PercentRewriter ("N%" → "(N/100)*")
3. Токенизация и рекурсивный спуск → дерево выражения
4. Вычисление в double (IEEE-754: x/0 → ±inf, 0/0 → NaN)
5. NaN → InvalidCalculation, ±inf → Overflow, иначе форматирование

Грамматика:
    expression := term (("+" | "-") term)*
    term       := unary (("*" | "/") unary)*
    unary      := ("+" | "-") unary | primary
    primary    := NUMBER | "(" expression ")"

Выражение никогда не исполняется как код: только дерево из Number /
UnaryOp / BinaryOp.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Final, List, Optional, Union

from src.core.domain.errors import CalculatorError, ErrorKind
from src.core.math.number_format import FRACTION_DIGITS_MAX, format_result
from src.core.math.numerical_safeguards import ensure_finite, ieee_divide
from src.engine.percent_rewriter import rewrite_percent

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS / КОНСТАНТЫ
# =============================================================================


class ZeroDivisionCheck(str, Enum):
    """Способ обнаружения деления на ноль.

    TEXTUAL: подстрока "/0" без ".<digit>" следом (быстро, но приближённо:
             "6/02" считается делением на ноль).
    SEMANTIC: знаменатель вычисляется и сравнивается с нулём.
    """

    TEXTUAL = "textual"
    SEMANTIC = "semantic"


_ZERO_DIVISION_RE: Final[re.Pattern[str]] = re.compile(r"/0(?!\.\d)")

# "*" после процента без правого операнда: "50%" → "(50/100)*" → "(50/100)"
_DANGLING_PERCENT_MULTIPLIER_RE: Final[re.Pattern[str]] = re.compile(
    r"(\(\d+(?:\.\d+)?/100\))\*(?=$|[)*/])"
)

_TOKEN_RE: Final[re.Pattern[str]] = re.compile(
    r"\s*(?:(?P<number>\d+\.?\d*|\.\d+)|(?P<op>[+\-*/()]))"
)


def has_textual_zero_division(text: str) -> bool:
    """
    Текстовая эвристика деления на ноль.

    Examples:
        >>> has_textual_zero_division("5/0")
        True
        >>> has_textual_zero_division("6/0.5")
        False
        >>> has_textual_zero_division("6/02")
        True
    """
    return _ZERO_DIVISION_RE.search(text) is not None


# =============================================================================
# ДЕРЕВО ВЫРАЖЕНИЯ
# =============================================================================


@dataclass(frozen=True)
class Number:
    """Числовой литерал."""

    value: float

    def evaluate(self, semantic_zero_division: bool = False) -> float:
        return self.value


@dataclass(frozen=True)
class UnaryOp:
    """Унарный "+" или "-"."""

    op: str
    operand: "Node"

    def evaluate(self, semantic_zero_division: bool = False) -> float:
        value = self.operand.evaluate(semantic_zero_division)
        return -value if self.op == "-" else value


@dataclass(frozen=True)
class BinaryOp:
    """Бинарная операция + - * /."""

    op: str
    left: "Node"
    right: "Node"

    def evaluate(self, semantic_zero_division: bool = False) -> float:
        left = self.left.evaluate(semantic_zero_division)
        right = self.right.evaluate(semantic_zero_division)

        if self.op == "+":
            return left + right
        if self.op == "-":
            return left - right
        if self.op == "*":
            return left * right

        if semantic_zero_division and right == 0.0:
            raise CalculatorError(ErrorKind.DIVISION_BY_ZERO)
        return ieee_divide(left, right)


Node = Union[Number, UnaryOp, BinaryOp]


# =============================================================================
# ТОКЕНИЗАЦИЯ И РАЗБОР
# =============================================================================


def tokenize(text: str) -> List[str]:
    """
    Разбиение текста на числа, операторы и скобки.

    Raises:
        CalculatorError(INVALID_CALCULATION): недопустимый символ
    """
    tokens: List[str] = []
    pos = 0
    text = text.rstrip()

    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise CalculatorError(
                ErrorKind.INVALID_CALCULATION,
                f"unexpected character {text[pos]!r} at {pos}",
            )
        tokens.append(match.group("number") or match.group("op"))
        pos = match.end()

    return tokens


class _Parser:
    """Рекурсивный спуск по списку токенов."""

    def __init__(self, tokens: List[str]):
        self._tokens = tokens
        self._pos = 0

    def _peek(self) -> Optional[str]:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _advance(self) -> str:
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def parse(self) -> Node:
        if not self._tokens:
            raise CalculatorError(ErrorKind.INVALID_CALCULATION, "empty expression")

        node = self._expression()
        if self._peek() is not None:
            raise CalculatorError(
                ErrorKind.INVALID_CALCULATION, f"unexpected token {self._peek()!r}"
            )
        return node

    def _expression(self) -> Node:
        node = self._term()
        while self._peek() in ("+", "-"):
            op = self._advance()
            node = BinaryOp(op, node, self._term())
        return node

    def _term(self) -> Node:
        node = self._unary()
        while self._peek() in ("*", "/"):
            op = self._advance()
            node = BinaryOp(op, node, self._unary())
        return node

    def _unary(self) -> Node:
        if self._peek() in ("+", "-"):
            op = self._advance()
            return UnaryOp(op, self._unary())
        return self._primary()

    def _primary(self) -> Node:
        token = self._peek()
        if token is None:
            raise CalculatorError(ErrorKind.INVALID_CALCULATION, "unexpected end of expression")

        if token == "(":
            self._advance()
            node = self._expression()
            if self._peek() != ")":
                raise CalculatorError(ErrorKind.INVALID_CALCULATION, "unbalanced parentheses")
            self._advance()
            return node

        if token in ("+", "-", "*", "/", ")"):
            raise CalculatorError(ErrorKind.INVALID_CALCULATION, f"unexpected token {token!r}")

        self._advance()
        return Number(float(token))


def parse(text: str) -> Node:
    """
    Разбор текста в дерево выражения.

    Raises:
        CalculatorError(INVALID_CALCULATION): синтаксическая ошибка
    """
    return _Parser(tokenize(text)).parse()


# =============================================================================
# EVALUATOR
# =============================================================================


class Evaluator:
    """Вычисление выражения из буфера калькулятора.

    Stateless относительно буфера: принимает текст, возвращает
    отформатированный результат или бросает CalculatorError.
    """

    def __init__(
        self,
        zero_division_check: ZeroDivisionCheck = ZeroDivisionCheck.TEXTUAL,
        fraction_digits: int = FRACTION_DIGITS_MAX,
    ):
        self.zero_division_check = ZeroDivisionCheck(zero_division_check)
        self.fraction_digits = fraction_digits

    def prepare(self, text: str) -> str:
        """Текстовая проверка деления на ноль + переписывание процентов."""
        if self.zero_division_check == ZeroDivisionCheck.TEXTUAL and has_textual_zero_division(text):
            raise CalculatorError(ErrorKind.DIVISION_BY_ZERO)

        rewritten = rewrite_percent(text)
        return _DANGLING_PERCENT_MULTIPLIER_RE.sub(r"\1", rewritten)

    def compute(self, text: str) -> float:
        """
        Вычисление значения без классификации NaN/Inf.

        Raises:
            CalculatorError: DIVISION_BY_ZERO или INVALID_CALCULATION
        """
        prepared = self.prepare(text)
        semantic = self.zero_division_check == ZeroDivisionCheck.SEMANTIC

        try:
            return parse(prepared).evaluate(semantic)
        except RecursionError:
            raise CalculatorError(ErrorKind.INVALID_CALCULATION, "expression is nested too deeply")

    def evaluate(self, text: str) -> str:
        """
        Полный конвейер вычисления.

        Args:
            text: Содержимое буфера (до переписывания процентов)

        Returns:
            Отформатированный результат

        Raises:
            CalculatorError: любой вид ошибки вычисления
        """
        value = ensure_finite(self.compute(text))
        result = format_result(value, self.fraction_digits)
        logger.debug("Evaluated %r -> %s", text, result)
        return result
