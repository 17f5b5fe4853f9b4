"""Тесты для InputBuffer, Validator и PercentRewriter.

Coverage:
- Инвариант непустого буфера
- Порядок правил валидатора
- Исключение для минуса (унарный минус после оператора)
- Переписывание процентов
"""

import pytest

from src.core.domain import CalculatorError, ErrorKind, classify_token
from src.engine.input_buffer import DEFAULT_TEXT, InputBuffer
from src.engine.percent_rewriter import rewrite_percent
from src.engine.validator import last_segment, validate_append


def _append(buffer_text: str, raw: str) -> str:
    return validate_append(buffer_text, classify_token(raw))


def _append_error(buffer_text: str, raw: str) -> ErrorKind:
    with pytest.raises(CalculatorError) as exc_info:
        _append(buffer_text, raw)
    return exc_info.value.kind


# =============================================================================
# INPUT BUFFER
# =============================================================================


class TestInputBuffer:
    """Тесты InputBuffer."""

    def test_initial_state(self):
        buffer = InputBuffer()
        assert buffer.text == DEFAULT_TEXT == "0"
        assert buffer.previous_expression is None
        assert buffer.is_default

    def test_set_replaces_text(self):
        buffer = InputBuffer()
        buffer.set("12+3")
        assert buffer.text == "12+3"
        assert not buffer.is_default

    def test_set_rejects_empty(self):
        buffer = InputBuffer()
        with pytest.raises(ValueError, match="non-empty"):
            buffer.set("")
        assert buffer.text == "0"

    def test_delete_last(self):
        buffer = InputBuffer()
        buffer.set("12")
        buffer.delete_last()
        assert buffer.text == "1"
        buffer.delete_last()
        assert buffer.text == "0"
        buffer.delete_last()
        assert buffer.text == "0"

    def test_snapshot_and_clear(self):
        buffer = InputBuffer()
        buffer.set("5+3")
        assert buffer.snapshot_previous() == "5+3"
        assert buffer.previous_expression == "5+3"

        buffer.reset()
        assert buffer.text == "0"
        assert buffer.previous_expression == "5+3"

        buffer.clear()
        assert buffer.text == "0"
        assert buffer.previous_expression is None


# =============================================================================
# VALIDATOR
# =============================================================================


class TestValidator:
    """Тесты validate_append."""

    def test_leading_zero_replaced_by_digit(self):
        assert _append("0", "5") == "5"

    def test_leading_zero_replaced_by_operator(self):
        assert _append("0", "+") == "+"
        assert _append("0", "-") == "-"

    def test_leading_zero_replaced_by_paren(self):
        assert _append("0", "(") == "("

    def test_decimal_point_on_zero(self):
        assert _append("0", ".") == "0."

    def test_percent_always_appended(self):
        assert _append("0", "%") == "0%"
        assert _append("50", "%") == "50%"
        assert _append("5%", "%") == "5%%"
        assert _append("5+", "%") == "5+%"

    def test_digits_appended(self):
        assert _append("12", "3") == "123"
        assert _append("5+", "3") == "5+3"

    def test_second_decimal_point_in_segment(self):
        assert _append_error("3.5", ".") == ErrorKind.MULTIPLE_DECIMAL_POINTS

    def test_decimal_point_in_new_segment(self):
        assert _append("3.5+2", ".") == "3.5+2."

    def test_decimal_point_after_trailing_point(self):
        assert _append_error("3.", ".") == ErrorKind.MULTIPLE_DECIMAL_POINTS

    @pytest.mark.parametrize("op", ["+", "*", "/"])
    def test_operator_after_operator(self, op):
        assert _append_error("5+", op) == ErrorKind.CONSECUTIVE_OPERATORS

    def test_operator_after_decimal_point(self):
        assert _append_error("5.", "+") == ErrorKind.CONSECUTIVE_OPERATORS

    def test_decimal_point_after_operator(self):
        assert _append_error("5+", ".") == ErrorKind.CONSECUTIVE_OPERATORS

    def test_minus_exempt_after_operator(self):
        assert _append("5+", "-") == "5+-"
        assert _append("5*", "-") == "5*-"
        assert _append("5-", "-") == "5--"

    def test_minus_exempt_after_decimal_point(self):
        assert _append("5.", "-") == "5.-"

    def test_operator_after_percent_allowed(self):
        assert _append("50%", "+") == "50%+"

    def test_control_token_rejected(self):
        with pytest.raises(ValueError, match="Control token"):
            validate_append("5", classify_token("="))

    def test_last_segment(self):
        assert last_segment("12+3.5") == "3.5"
        assert last_segment("7*") == ""
        assert last_segment("42") == "42"
        assert last_segment("1-2/3") == "3"


# =============================================================================
# PERCENT REWRITER
# =============================================================================


class TestPercentRewriter:
    """Тесты rewrite_percent."""

    def test_integer_percent(self):
        assert rewrite_percent("50%") == "(50/100)*"

    def test_decimal_percent(self):
        assert rewrite_percent("12.5%") == "(12.5/100)*"

    def test_percent_inside_expression(self):
        assert rewrite_percent("200+10%") == "200+(10/100)*"
        assert rewrite_percent("10%+20%") == "(10/100)*+(20/100)*"

    def test_no_percent_unchanged(self):
        assert rewrite_percent("5+3") == "5+3"

    def test_double_percent_rewritten_once(self):
        assert rewrite_percent("5%%") == "(5/100)*%"

    def test_percent_without_number_unchanged(self):
        assert rewrite_percent("(5)%") == "(5)%"
