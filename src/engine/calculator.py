"""Calculator Engine — внешний интерфейс калькулятора.

Операции (каждая возвращает EngineState):
- append_token(token): цифры/операторы через Validator, управляющие
  токены (Clear/Delete/Equals/SquareRoot) через диспетчер
- delete(), clear(), evaluate(), square_root()
- press_key(key): физическая клавиша → токен → append_token

Модель исполнения: одна операция за раз. Lock сериализует вызовы, если
хост многопоточный. Каждая операция над буфером сначала скрывает видимую
ошибку; нераспознанные токены игнорируются без изменений состояния.

Ошибки (CalculatorError) полностью восстанавливаются внутри движка:
буфер → "0", уведомление → ErrorReporter.
"""

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Union

from src.core.domain.engine_state import EngineState
from src.core.domain.errors import CalculatorError, ErrorKind
from src.core.domain.tokens import ControlToken, Token, classify_token
from src.core.math.number_format import FRACTION_DIGITS_MAX, format_shortest, parse_float_prefix
from src.core.math.numerical_safeguards import ensure_finite
from src.engine.error_reporter import DEFAULT_DISPLAY_DURATION_MS, ErrorReporter
from src.engine.evaluator import Evaluator, ZeroDivisionCheck
from src.engine.input_buffer import InputBuffer
from src.engine.keymap import map_key
from src.engine.validator import validate_append

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """Конфигурация движка калькулятора.

    - error_display_duration_ms: время показа уведомления об ошибке
    - fraction_digits: максимум знаков после точки в результате "="
    - zero_division_check: TEXTUAL (эвристика "/0") или SEMANTIC
    """
    error_display_duration_ms: float = DEFAULT_DISPLAY_DURATION_MS
    fraction_digits: int = FRACTION_DIGITS_MAX
    zero_division_check: ZeroDivisionCheck = ZeroDivisionCheck.TEXTUAL

    def __post_init__(self):
        if self.error_display_duration_ms <= 0:
            raise ValueError(
                f"error_display_duration_ms must be positive, got {self.error_display_duration_ms}"
            )
        if self.fraction_digits < 0:
            raise ValueError(f"fraction_digits must be non-negative, got {self.fraction_digits}")


class CalculatorEngine:
    """Калькулятор: буфер ввода + валидатор + вычислитель + уведомления."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Args:
            config: конфигурация движка (default EngineConfig())
            clock: источник времени в секундах для таймера уведомлений
        """
        self.config = config or EngineConfig()

        self._buffer = InputBuffer()
        self._evaluator = Evaluator(
            zero_division_check=self.config.zero_division_check,
            fraction_digits=self.config.fraction_digits,
        )
        self._reporter = ErrorReporter(
            self._buffer,
            display_duration_ms=self.config.error_display_duration_ms,
            clock=clock,
        )
        self._lock = threading.Lock()
        self._closed = False

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Завершение работы: уведомление скрывается, операции запрещены."""
        with self._lock:
            self._reporter.dismiss()
            self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "CalculatorEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Public operations
    # -------------------------------------------------------------------------

    @property
    def state(self) -> EngineState:
        with self._lock:
            return self._snapshot()

    @property
    def error_generation(self) -> int:
        return self._reporter.generation

    def append_token(self, token: Union[str, Token, ControlToken]) -> EngineState:
        """Добавление токена (или выполнение управляющей команды)."""
        with self._lock:
            self._ensure_open()

            parsed = token if isinstance(token, Token) else classify_token(token)
            if parsed is None:
                logger.debug("Ignored unrecognized token %r", token)
                return self._snapshot()

            if parsed.is_control:
                self._dispatch_control(parsed.control)
                return self._snapshot()

            self._reporter.dismiss()
            try:
                new_text = validate_append(self._buffer.text, parsed)
            except CalculatorError as e:
                self._reporter.report(e.kind)
            else:
                self._buffer.set(new_text)
                logger.debug("Appended %r -> %r", parsed.text, new_text)

            return self._snapshot()

    def press_key(self, key: str) -> EngineState:
        """Физическая клавиша (Enter, Backspace, Escape, символы)."""
        token = map_key(key)
        if token is None:
            logger.debug("Ignored key %r", key)
            return self.state
        return self.append_token(token)

    def delete(self) -> EngineState:
        with self._lock:
            self._ensure_open()
            self._dispatch_control(ControlToken.DELETE)
            return self._snapshot()

    def clear(self) -> EngineState:
        with self._lock:
            self._ensure_open()
            self._dispatch_control(ControlToken.CLEAR)
            return self._snapshot()

    def evaluate(self) -> EngineState:
        with self._lock:
            self._ensure_open()
            self._dispatch_control(ControlToken.EQUALS)
            return self._snapshot()

    def square_root(self) -> EngineState:
        with self._lock:
            self._ensure_open()
            self._dispatch_control(ControlToken.SQUARE_ROOT)
            return self._snapshot()

    # -------------------------------------------------------------------------
    # Internals (вызываются под self._lock)
    # -------------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("CalculatorEngine is closed")

    def _snapshot(self) -> EngineState:
        return EngineState(
            display_text=self._buffer.text,
            previous_expression=self._buffer.previous_expression,
            pending_error=self._reporter.visible_error(),
        )

    def _dispatch_control(self, control: ControlToken) -> None:
        self._reporter.dismiss()

        if control == ControlToken.CLEAR:
            self._buffer.clear()
        elif control == ControlToken.DELETE:
            self._buffer.delete_last()
        elif control == ControlToken.EQUALS:
            self._run_evaluation()
        elif control == ControlToken.SQUARE_ROOT:
            self._run_square_root()
        else:
            raise ValueError(f"Unknown control token: {control}")

    def _run_evaluation(self) -> None:
        # "0" на дисплее: вычислять нечего
        if self._buffer.is_default:
            return

        expression = self._buffer.snapshot_previous()
        try:
            result = self._evaluator.evaluate(expression)
        except CalculatorError as e:
            self._reporter.report(e.kind)
            return

        self._buffer.set(result)
        logger.info("%s = %s", expression, result)

    def _run_square_root(self) -> None:
        operand = parse_float_prefix(self._buffer.text)
        try:
            if operand < 0:
                raise CalculatorError(ErrorKind.NEGATIVE_SQRT, f"operand={operand}")
            if math.isnan(operand):
                raise CalculatorError(ErrorKind.INVALID_CALCULATION, "no numeric operand")
            result = format_shortest(ensure_finite(math.sqrt(operand)))
        except CalculatorError as e:
            self._reporter.report(e.kind)
            return

        self._buffer.set(result)
        logger.info("sqrt(%s) = %s", operand, result)
