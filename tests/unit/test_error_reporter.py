"""Тесты для ErrorReporter.

Coverage:
- Таблица сообщений
- Сброс буфера
- Монотонный счётчик поколений (повтор той же ошибки)
- Таймер показа и его сброс
"""

import pytest

from src.core.domain import ERROR_MESSAGES, ErrorKind
from src.engine.error_reporter import DEFAULT_DISPLAY_DURATION_MS, ErrorReporter
from src.engine.input_buffer import InputBuffer


@pytest.fixture
def buffer():
    buf = InputBuffer()
    buf.set("12+3")
    return buf


@pytest.fixture
def reporter(buffer, clock):
    return ErrorReporter(buffer, clock=clock)


class TestMessages:
    """Каноническая таблица сообщений."""

    @pytest.mark.parametrize(
        "kind,message",
        [
            (ErrorKind.DIVISION_BY_ZERO, "Cannot divide by zero"),
            (ErrorKind.INVALID_CALCULATION, "Invalid calculation"),
            (ErrorKind.OVERFLOW, "Result is too large"),
            (ErrorKind.NEGATIVE_SQRT, "Cannot calculate square root of a negative number"),
            (ErrorKind.MULTIPLE_DECIMAL_POINTS, "A number can only have one decimal point"),
            (ErrorKind.CONSECUTIVE_OPERATORS, "Cannot have multiple operators in sequence"),
        ],
    )
    def test_message_table(self, kind, message):
        assert kind.message == message
        assert ERROR_MESSAGES[kind] == message

    def test_every_kind_has_message(self):
        assert set(ERROR_MESSAGES) == set(ErrorKind)


class TestReport:
    """Тесты report()."""

    def test_report_resets_buffer(self, reporter, buffer):
        reporter.report(ErrorKind.OVERFLOW)
        assert buffer.text == "0"

    def test_report_keeps_previous_expression(self, reporter, buffer):
        buffer.snapshot_previous()
        reporter.report(ErrorKind.DIVISION_BY_ZERO)
        assert buffer.previous_expression == "12+3"

    def test_report_returns_display_error(self, reporter):
        error = reporter.report(ErrorKind.DIVISION_BY_ZERO)
        assert error.kind == ErrorKind.DIVISION_BY_ZERO
        assert error.message == "Cannot divide by zero"
        assert error.dismissal_token == 1

    def test_same_error_gets_fresh_token(self, reporter):
        first = reporter.report(ErrorKind.DIVISION_BY_ZERO)
        second = reporter.report(ErrorKind.DIVISION_BY_ZERO)
        assert first.message == second.message
        assert second.dismissal_token > first.dismissal_token
        assert first != second
        assert reporter.generation == 2

    def test_generation_monotonic_across_dismissals(self, reporter):
        tokens = []
        for _ in range(5):
            tokens.append(reporter.report(ErrorKind.OVERFLOW).dismissal_token)
            reporter.dismiss()
        assert tokens == sorted(tokens)
        assert len(set(tokens)) == 5


class TestVisibility:
    """Тесты таймера показа."""

    def test_visible_within_window(self, reporter, clock):
        error = reporter.report(ErrorKind.OVERFLOW)
        clock.advance(2.9)
        assert reporter.visible_error() == error

    def test_auto_dismiss_after_window(self, reporter, clock):
        reporter.report(ErrorKind.OVERFLOW)
        clock.advance(DEFAULT_DISPLAY_DURATION_MS / 1000.0)
        assert reporter.visible_error() is None

    def test_expiry_does_not_touch_buffer(self, reporter, buffer, clock):
        reporter.report(ErrorKind.OVERFLOW)
        buffer.set("7")
        clock.advance(10.0)
        assert reporter.visible_error() is None
        assert buffer.text == "7"

    def test_new_error_rearms_timer(self, reporter, clock):
        reporter.report(ErrorKind.OVERFLOW)
        clock.advance(2.5)
        second = reporter.report(ErrorKind.OVERFLOW)
        clock.advance(2.5)
        assert reporter.visible_error() == second

    def test_remaining_ms(self, reporter, clock):
        assert reporter.remaining_ms() == 0.0
        reporter.report(ErrorKind.OVERFLOW)
        clock.advance(1.0)
        assert reporter.remaining_ms() == pytest.approx(2000.0)

    def test_dismiss_hides_but_keeps_last_error(self, reporter):
        error = reporter.report(ErrorKind.NEGATIVE_SQRT)
        reporter.dismiss()
        assert reporter.visible_error() is None
        assert reporter.last_error == error

    def test_custom_duration(self, buffer, clock):
        reporter = ErrorReporter(buffer, display_duration_ms=500.0, clock=clock)
        reporter.report(ErrorKind.OVERFLOW)
        clock.advance(0.6)
        assert reporter.visible_error() is None

    @pytest.mark.parametrize("duration", [0.0, -1.0])
    def test_invalid_duration(self, buffer, duration):
        with pytest.raises(ValueError, match="display_duration_ms"):
            ErrorReporter(buffer, display_duration_ms=duration)
