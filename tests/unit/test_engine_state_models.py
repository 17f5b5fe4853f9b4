"""
Tests for EngineState / DisplayError

Покрывает:
- Создание и валидация моделей
- Immutability (frozen=True)
- JSON сериализация/десериализация
- JSON Schema compliance
"""

import pytest
from pydantic import ValidationError

from src.core.contracts import validate_engine_state
from src.core.domain import DisplayError, EngineState, ErrorKind


# =============================================================================
# DISPLAY ERROR
# =============================================================================


def test_display_error_for_kind():
    error = DisplayError.for_kind(ErrorKind.OVERFLOW, 3)
    assert error.kind == ErrorKind.OVERFLOW
    assert error.message == "Result is too large"
    assert error.dismissal_token == 3


def test_display_error_rejects_zero_token():
    with pytest.raises(ValidationError):
        DisplayError.for_kind(ErrorKind.OVERFLOW, 0)


def test_display_error_rejects_unknown_kind():
    with pytest.raises(ValidationError):
        DisplayError(kind="Typo", message="x", dismissal_token=1)


def test_display_error_immutable():
    """Тест immutability DisplayError (frozen=True)."""
    error = DisplayError.for_kind(ErrorKind.OVERFLOW, 1)
    with pytest.raises(ValidationError, match="frozen"):
        error.dismissal_token = 2


def test_display_errors_differ_by_token():
    first = DisplayError.for_kind(ErrorKind.DIVISION_BY_ZERO, 1)
    second = DisplayError.for_kind(ErrorKind.DIVISION_BY_ZERO, 2)
    assert first != second


# =============================================================================
# ENGINE STATE
# =============================================================================


def test_engine_state_defaults():
    state = EngineState(display_text="0")
    assert state.previous_expression is None
    assert state.pending_error is None
    assert not state.has_error


def test_engine_state_rejects_empty_display():
    with pytest.raises(ValidationError):
        EngineState(display_text="")


def test_engine_state_rejects_empty_previous_expression():
    with pytest.raises(ValidationError, match="previous_expression"):
        EngineState(display_text="0", previous_expression="")


def test_engine_state_immutable():
    """Тест immutability EngineState (frozen=True)."""
    state = EngineState(display_text="5")
    with pytest.raises(ValidationError, match="frozen"):
        state.display_text = "6"


def test_engine_state_to_contract():
    state = EngineState(
        display_text="0",
        previous_expression="5/0",
        pending_error=DisplayError.for_kind(ErrorKind.DIVISION_BY_ZERO, 1),
    )
    assert state.has_error

    payload = state.to_contract()
    assert payload == {
        "display_text": "0",
        "previous_expression": "5/0",
        "pending_error": {
            "kind": "DivisionByZero",
            "message": "Cannot divide by zero",
            "dismissal_token": 1,
        },
    }
    validate_engine_state(payload)


def test_engine_state_json_roundtrip():
    state = EngineState(
        display_text="12+3",
        pending_error=DisplayError.for_kind(ErrorKind.CONSECUTIVE_OPERATORS, 4),
    )
    restored = EngineState.model_validate_json(state.model_dump_json())
    assert restored == state
