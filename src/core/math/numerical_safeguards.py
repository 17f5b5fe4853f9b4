"""
Numerical Safeguards — float-примитивы вычислителя

Модуль обеспечивает предсказуемую арифметику двойной точности:
- IEEE-754 деление (x/0 → ±inf, 0/0 → NaN) вместо ZeroDivisionError
- Классификация NaN/Inf результата в ошибки калькулятора
- Проверка целочисленности значения

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление никогда не бросает ZeroDivisionError
2. NaN → InvalidCalculation, ±Inf → Overflow (в ensure_finite)
3. Все операции детерминированы и воспроизводимы
"""

import math

from src.core.domain.errors import CalculatorError, ErrorKind


# =============================================================================
# IEEE-754 ДЕЛЕНИЕ
# =============================================================================


def ieee_divide(numerator: float, denominator: float) -> float:
    """
    Деление с семантикой IEEE-754.

    Python бросает ZeroDivisionError там, где IEEE-754 возвращает
    бесконечность или NaN. Калькулятор классифицирует такие значения позже,
    поэтому здесь они возвращаются как есть.

    Args:
        numerator: Числитель
        denominator: Знаменатель

    Returns:
        numerator / denominator, ±inf или NaN

    Examples:
        >>> ieee_divide(6.0, 2.0)
        3.0
        >>> ieee_divide(1.0, 0.0)
        inf
        >>> ieee_divide(-1.0, 0.0)
        -inf
        >>> math.isnan(ieee_divide(0.0, 0.0))
        True
    """
    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        # Знак нуля в знаменателе учитывается, как в IEEE-754
        sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
        return math.copysign(math.inf, sign)

    return numerator / denominator


# =============================================================================
# NaN/Inf КЛАССИФИКАЦИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Returns:
        True если значение конечное
    """
    return math.isfinite(value)


def ensure_finite(value: float) -> float:
    """
    Проверка результата вычисления.

    Args:
        value: Результат вычисления

    Returns:
        value, если оно конечное

    Raises:
        CalculatorError(INVALID_CALCULATION): value is NaN
        CalculatorError(OVERFLOW): value is ±inf
    """
    if math.isnan(value):
        raise CalculatorError(ErrorKind.INVALID_CALCULATION, "result is not a number")
    if math.isinf(value):
        raise CalculatorError(ErrorKind.OVERFLOW, f"result is {value}")
    return value


def is_integral(value: float) -> bool:
    """
    Проверка, что конечное значение математически целое.

    Examples:
        >>> is_integral(8.0)
        True
        >>> is_integral(0.5)
        False
        >>> is_integral(float('inf'))
        False
    """
    return is_valid_float(value) and float(value).is_integer()
