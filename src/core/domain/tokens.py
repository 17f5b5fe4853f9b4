"""
Token — атомарная единица ввода калькулятора

Каждое нажатие клавиши превращается в Token до того, как попасть в
Validator или в диспетчер управляющих команд движка.

Виды токенов:
- DIGIT: 0-9
- DECIMAL_POINT: "."
- OPERATOR: + - * /
- PERCENT: "%"
- PAREN: "(" и ")"
- CONTROL: Clear / Delete / Equals / SquareRoot
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional


# =============================================================================
# КОНСТАНТЫ ГРАММАТИКИ
# =============================================================================

DIGITS: Final[str] = "0123456789"
DECIMAL_POINT: Final[str] = "."
PERCENT: Final[str] = "%"
BINARY_OPERATORS: Final[str] = "+-*/"
PARENTHESES: Final[str] = "()"
MINUS: Final[str] = "-"


# =============================================================================
# ENUMS
# =============================================================================


class TokenKind(str, Enum):
    """Вид токена"""

    DIGIT = "digit"
    DECIMAL_POINT = "decimal_point"
    OPERATOR = "operator"
    PERCENT = "percent"
    PAREN = "paren"
    CONTROL = "control"


class ControlToken(str, Enum):
    """Управляющие команды (не попадают в буфер)"""

    CLEAR = "Clear"
    DELETE = "Delete"
    EQUALS = "Equals"
    SQUARE_ROOT = "SquareRoot"


# Все принятые написания управляющих команд (кнопки и имена enum)
_CONTROL_ALIASES: Final[dict[str, ControlToken]] = {
    "C": ControlToken.CLEAR,
    "Clear": ControlToken.CLEAR,
    "DEL": ControlToken.DELETE,
    "Delete": ControlToken.DELETE,
    "=": ControlToken.EQUALS,
    "Enter": ControlToken.EQUALS,
    "Equals": ControlToken.EQUALS,
    "√": ControlToken.SQUARE_ROOT,
    "SquareRoot": ControlToken.SQUARE_ROOT,
}


# =============================================================================
# TOKEN
# =============================================================================


@dataclass(frozen=True)
class Token:
    """Распознанный токен ввода."""

    kind: TokenKind
    text: str
    control: Optional[ControlToken] = None

    @property
    def is_control(self) -> bool:
        return self.kind == TokenKind.CONTROL

    @property
    def is_operator_like(self) -> bool:
        """Оператор или десятичная точка (для проверки соседства операторов)."""
        return self.kind in (TokenKind.OPERATOR, TokenKind.DECIMAL_POINT)


def classify_token(raw: str) -> Optional[Token]:
    """
    Классификация сырого ввода в Token.

    Args:
        raw: Символ кнопки/клавиши или имя управляющей команды

    Returns:
        Token или None, если ввод не распознан (движок его игнорирует)

    Examples:
        >>> classify_token("7").kind
        <TokenKind.DIGIT: 'digit'>
        >>> classify_token("DEL").control
        <ControlToken.DELETE: 'Delete'>
        >>> classify_token("x") is None
        True
    """
    if isinstance(raw, ControlToken):
        return Token(kind=TokenKind.CONTROL, text=raw.value, control=raw)

    if not isinstance(raw, str) or not raw:
        return None

    control = _CONTROL_ALIASES.get(raw)
    if control is not None:
        return Token(kind=TokenKind.CONTROL, text=raw, control=control)

    if len(raw) != 1:
        return None

    if raw in DIGITS:
        return Token(kind=TokenKind.DIGIT, text=raw)
    if raw == DECIMAL_POINT:
        return Token(kind=TokenKind.DECIMAL_POINT, text=raw)
    if raw in BINARY_OPERATORS:
        return Token(kind=TokenKind.OPERATOR, text=raw)
    if raw == PERCENT:
        return Token(kind=TokenKind.PERCENT, text=raw)
    if raw in PARENTHESES:
        return Token(kind=TokenKind.PAREN, text=raw)

    return None
