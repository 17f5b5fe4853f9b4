"""
Core math modules для калькулятора

Float-примитивы и форматирование чисел для дисплея.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    ensure_finite,
    ieee_divide,
    is_integral,
    is_valid_float,
)

# Number Format
from src.core.math.number_format import (
    FRACTION_DIGITS_MAX,
    format_result,
    format_shortest,
    parse_float_prefix,
)

__all__ = [
    # Numerical Safeguards
    "ensure_finite",
    "ieee_divide",
    "is_integral",
    "is_valid_float",
    # Number Format — Constants
    "FRACTION_DIGITS_MAX",
    # Number Format — Functions
    "format_result",
    "format_shortest",
    "parse_float_prefix",
]
