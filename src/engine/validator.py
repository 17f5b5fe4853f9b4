"""Validator — проверка грамматики до изменения буфера.

Порядок правил:
1. "%" — всегда дописывается
2. Буфер "0" и токен не "." → токен заменяет буфер
3. "." при буфере "0" → "0."
4. "." в сегменте, где уже есть точка → MultipleDecimalPoints
5. Оператор/точка после оператора/точки → ConsecutiveOperators
   (минус не проверяется: "5+-3" — унарный минус второго операнда)
6. Иначе — дописать токен

Управляющие токены сюда не попадают: их обрабатывает CalculatorEngine.
"""

import logging
import re
from typing import Final

from src.core.domain.errors import CalculatorError, ErrorKind
from src.core.domain.tokens import (
    BINARY_OPERATORS,
    DECIMAL_POINT,
    MINUS,
    Token,
    TokenKind,
)
from src.engine.input_buffer import DEFAULT_TEXT

logger = logging.getLogger(__name__)


_SEGMENT_SPLIT_RE: Final[re.Pattern[str]] = re.compile(r"[+\-*/]")

# Символы, после которых нельзя ставить оператор
_OPERATOR_TAIL: Final[str] = BINARY_OPERATORS + DECIMAL_POINT


def last_segment(text: str) -> str:
    """
    Последний сегмент буфера (текст после последнего бинарного оператора).

    Examples:
        >>> last_segment("12+3.5")
        '3.5'
        >>> last_segment("7*")
        ''
    """
    return _SEGMENT_SPLIT_RE.split(text)[-1]


def validate_append(buffer_text: str, token: Token) -> str:
    """
    Проверка добавления токена к буферу.

    Args:
        buffer_text: Текущее содержимое буфера
        token: Не-управляющий токен

    Returns:
        Новое содержимое буфера

    Raises:
        CalculatorError(MULTIPLE_DECIMAL_POINTS): вторая точка в сегменте
        CalculatorError(CONSECUTIVE_OPERATORS): оператор после оператора
        ValueError: передан управляющий токен
    """
    if token.is_control:
        raise ValueError(f"Control token {token.text!r} cannot be appended")

    if token.kind == TokenKind.PERCENT:
        return buffer_text + token.text

    if buffer_text == DEFAULT_TEXT and token.kind != TokenKind.DECIMAL_POINT:
        return token.text

    if token.kind == TokenKind.DECIMAL_POINT:
        if buffer_text == DEFAULT_TEXT:
            return DEFAULT_TEXT + DECIMAL_POINT
        if DECIMAL_POINT in last_segment(buffer_text):
            logger.debug("Rejected '.' after segment %r", last_segment(buffer_text))
            raise CalculatorError(ErrorKind.MULTIPLE_DECIMAL_POINTS)

    if (
        buffer_text[-1] in _OPERATOR_TAIL
        and token.is_operator_like
        and token.text != MINUS
    ):
        logger.debug("Rejected %r after %r", token.text, buffer_text[-1])
        raise CalculatorError(ErrorKind.CONSECUTIVE_OPERATORS)

    return buffer_text + token.text
