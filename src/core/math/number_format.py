"""
Number Format — текстовое представление чисел на дисплее

- format_result: результат "=" (целое без точки, иначе ≤ 8 знаков после точки)
- format_shortest: кратчайшее round-trip представление (для √)
- parse_float_prefix: разбор числового префикса строки ("9+7" → 9.0)
"""

import math
import re
from typing import Final

from src.core.math.numerical_safeguards import is_integral, is_valid_float


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Максимум знаков после точки в результате "="
FRACTION_DIGITS_MAX: Final[int] = 8

# Числовой префикс: знак, Infinity или десятичная запись с экспонентой
_FLOAT_PREFIX_RE: Final[re.Pattern[str]] = re.compile(
    r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


def _format_integral(value: float) -> str:
    # int() снимает и "-0", и экспоненциальную запись больших значений
    return str(int(value))


def format_result(value: float, fraction_digits: int = FRACTION_DIGITS_MAX) -> str:
    """
    Форматирование результата вычисления.

    Правила:
    - Целое значение → без десятичной точки
    - Иначе → fixed с fraction_digits знаками, хвостовые нули и точка срезаны

    Args:
        value: Конечный результат вычисления
        fraction_digits: Максимум знаков после точки

    Returns:
        Текст для дисплея

    Raises:
        ValueError: Если value NaN/Inf или fraction_digits < 0

    Examples:
        >>> format_result(8.0)
        '8'
        >>> format_result(0.1 + 0.2)
        '0.3'
        >>> format_result(2 / 3)
        '0.66666667'
    """
    if not is_valid_float(value):
        raise ValueError(f"Cannot format non-finite value {value}")
    if fraction_digits < 0:
        raise ValueError(f"fraction_digits must be non-negative, got {fraction_digits}")

    if is_integral(value):
        return _format_integral(value)

    text = f"{value:.{fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")

    if text == "-0":
        return "0"
    return text


def format_shortest(value: float) -> str:
    """
    Кратчайшее представление, восстанавливающее то же значение.

    Экспоненциальная запись на дисплей не выводится: для очень малых и
    очень больших нецелых значений используется format_result.

    Examples:
        >>> format_shortest(2.0)
        '2'
        >>> format_shortest(2 ** 0.5)
        '1.4142135623730951'
    """
    if not is_valid_float(value):
        raise ValueError(f"Cannot format non-finite value {value}")

    if is_integral(value):
        return _format_integral(value)

    text = repr(float(value))
    if "e" in text or "E" in text:
        return format_result(value)
    return text


# =============================================================================
# РАЗБОР ЧИСЛОВОГО ПРЕФИКСА
# =============================================================================


def parse_float_prefix(text: str) -> float:
    """
    Разбор ведущего числа в строке, хвост игнорируется.

    Разрешительная семантика: "12.5abc" → 12.5, "9+7" → 9.0,
    "-4" → -4.0. Если числового префикса нет — NaN.

    Args:
        text: Произвольная строка (обычно содержимое буфера)

    Returns:
        Значение префикса или NaN

    Examples:
        >>> parse_float_prefix("9+7")
        9.0
        >>> parse_float_prefix("0.")
        0.0
        >>> math.isnan(parse_float_prefix("(4)"))
        True
    """
    match = _FLOAT_PREFIX_RE.match(text)
    if match is None:
        return math.nan

    literal = match.group(1)
    if literal.lstrip("+-") == "Infinity":
        return -math.inf if literal.startswith("-") else math.inf

    return float(literal)
