"""PercentRewriter — замена записи "N%" на "(N/100)*" перед разбором."""

import re
from typing import Final


_PERCENT_RE: Final[re.Pattern[str]] = re.compile(r"(\d+(?:\.\d+)?)%")


def rewrite_percent(text: str) -> str:
    """
    Каждое число вида <digits>(.<digits>)?% → (<число>/100)*.

    Один проход слева направо, без валидации: некорректный результат
    обнаружит Evaluator.

    Examples:
        >>> rewrite_percent("50%")
        '(50/100)*'
        >>> rewrite_percent("200*12.5%")
        '200*(12.5/100)*'
    """
    return _PERCENT_RE.sub(r"(\1/100)*", text)
