"""
Domain models and value objects.

Contains the calculator's fundamental entities: Token, ErrorKind,
CalculatorError, DisplayError, EngineState.
"""

from src.core.domain.engine_state import DisplayError, EngineState
from src.core.domain.errors import ERROR_MESSAGES, CalculatorError, ErrorKind
from src.core.domain.tokens import (
    BINARY_OPERATORS,
    DECIMAL_POINT,
    DIGITS,
    MINUS,
    PARENTHESES,
    PERCENT,
    ControlToken,
    Token,
    TokenKind,
    classify_token,
)

__all__ = [
    # Tokens
    "BINARY_OPERATORS",
    "DECIMAL_POINT",
    "DIGITS",
    "MINUS",
    "PARENTHESES",
    "PERCENT",
    "ControlToken",
    "Token",
    "TokenKind",
    "classify_token",
    # Errors
    "ERROR_MESSAGES",
    "CalculatorError",
    "ErrorKind",
    # State
    "DisplayError",
    "EngineState",
]
