"""Engine — движок калькулятора.

- InputBuffer: текущее выражение + предыдущее выражение
- Validator: грамматика ввода до изменения буфера
- PercentRewriter: "N%" → "(N/100)*"
- Evaluator: рекурсивный спуск + вычисление в double
- ErrorReporter: таксономия ошибок, поколения уведомлений, таймер показа
- CalculatorEngine: внешний интерфейс (append_token/delete/clear/evaluate/square_root)
"""

from .calculator import CalculatorEngine, EngineConfig
from .error_reporter import DEFAULT_DISPLAY_DURATION_MS, ErrorReporter
from .evaluator import Evaluator, ZeroDivisionCheck, has_textual_zero_division, parse
from .input_buffer import DEFAULT_TEXT, InputBuffer
from .keymap import map_key
from .percent_rewriter import rewrite_percent
from .validator import last_segment, validate_append

__all__ = [
    "CalculatorEngine",
    "EngineConfig",
    "DEFAULT_DISPLAY_DURATION_MS",
    "ErrorReporter",
    "Evaluator",
    "ZeroDivisionCheck",
    "has_textual_zero_division",
    "parse",
    "DEFAULT_TEXT",
    "InputBuffer",
    "map_key",
    "rewrite_percent",
    "last_segment",
    "validate_append",
]
