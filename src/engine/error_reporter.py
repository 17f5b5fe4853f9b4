"""ErrorReporter — классификация ошибок и временное уведомление.

- report(kind): сообщение из таблицы ErrorKind, сброс буфера в "0",
  новое поколение уведомления (dismissal token), взвод таймера показа
- dismiss(): скрыть текущее уведомление (любая новая операция с буфером)
- visible_error(): уведомление, пока не истёк таймер показа

Истечение таймера влияет только на видимость ошибки, но не на буфер.
"""

import logging
import time
from typing import Callable, Final, Optional

from src.core.domain.engine_state import DisplayError
from src.core.domain.errors import ErrorKind
from src.engine.input_buffer import InputBuffer

logger = logging.getLogger(__name__)


DEFAULT_DISPLAY_DURATION_MS: Final[float] = 3000.0


class ErrorReporter:
    """Генератор уведомлений об ошибках с монотонным счётчиком поколений."""

    def __init__(
        self,
        buffer: InputBuffer,
        display_duration_ms: float = DEFAULT_DISPLAY_DURATION_MS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            buffer: буфер, который сбрасывается при каждой ошибке
            display_duration_ms: время показа уведомления
            clock: источник времени в секундах (монотонный)
        """
        if display_duration_ms <= 0:
            raise ValueError(f"display_duration_ms must be positive, got {display_duration_ms}")

        self._buffer = buffer
        self._display_duration_ms = display_duration_ms
        self._clock = clock

        self._generation = 0
        self._current: Optional[DisplayError] = None
        self._armed_at: Optional[float] = None
        self._last_error: Optional[DisplayError] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def last_error(self) -> Optional[DisplayError]:
        """Последняя сообщённая ошибка, даже если уже скрыта."""
        return self._last_error

    def report(self, kind: ErrorKind) -> DisplayError:
        """
        Регистрация ошибки.

        Буфер сбрасывается до выдачи уведомления, поэтому ошибка никогда
        не оставляет промежуточное состояние.
        """
        self._buffer.reset()
        self._generation += 1

        error = DisplayError.for_kind(kind, self._generation)
        self._current = error
        self._last_error = error
        self._armed_at = self._clock()

        logger.warning("%s: %s (token=%d)", kind.value, error.message, error.dismissal_token)
        return error

    def dismiss(self) -> None:
        self._current = None
        self._armed_at = None

    def remaining_ms(self) -> float:
        """Оставшееся время показа (0, если уведомления нет)."""
        if self._current is None or self._armed_at is None:
            return 0.0
        elapsed_ms = (self._clock() - self._armed_at) * 1000.0
        return max(0.0, self._display_duration_ms - elapsed_ms)

    def visible_error(self) -> Optional[DisplayError]:
        """Текущее уведомление или None, если таймер истёк."""
        if self._current is None:
            return None
        if self.remaining_ms() <= 0.0:
            logger.debug("Auto-dismissed error token=%d", self._current.dismissal_token)
            self.dismiss()
            return None
        return self._current
