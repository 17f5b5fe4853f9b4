"""
EngineState — снимок состояния калькулятора для UI

Immutable Pydantic модели, которые движок отдаёт вызывающему слою после
каждой операции. Соответствуют схеме contracts/schema/engine_state.json.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from src.core.domain.errors import ErrorKind


# =============================================================================
# DISPLAY ERROR
# =============================================================================


class DisplayError(BaseModel):
    """
    Ошибка, показываемая пользователю.

    dismissal_token растёт монотонно: повтор той же ошибки получает новый
    токен и отображается как свежее уведомление.
    """

    kind: ErrorKind = Field(..., description="Вид ошибки")
    message: str = Field(..., min_length=1, description="Текст для пользователя")
    dismissal_token: int = Field(..., ge=1, description="Поколение уведомления")

    model_config = {"frozen": True}

    @classmethod
    def for_kind(cls, kind: ErrorKind, dismissal_token: int) -> "DisplayError":
        return cls(kind=kind, message=kind.message, dismissal_token=dismissal_token)


# =============================================================================
# ENGINE STATE
# =============================================================================


class EngineState(BaseModel):
    """
    Полное состояние калькулятора после операции.

    Immutable модель (frozen=True): каждая операция создаёт новый снимок.
    """

    display_text: str = Field(..., min_length=1, description="Текущее выражение/результат")
    previous_expression: Optional[str] = Field(
        None, description="Выражение, отправленное на вычисление последним"
    )
    pending_error: Optional[DisplayError] = Field(
        None, description="Видимая ошибка (если таймер показа не истёк)"
    )

    model_config = {"frozen": True}

    @field_validator("previous_expression")
    @classmethod
    def validate_previous_not_empty(cls, v: Optional[str]) -> Optional[str]:
        """Пустой снимок выражения не имеет смысла — только None."""
        if v is not None and not v:
            raise ValueError("previous_expression must be None or non-empty")
        return v

    @property
    def has_error(self) -> bool:
        return self.pending_error is not None

    def to_contract(self) -> dict[str, Any]:
        """Сериализация в JSON-совместимый dict (engine_state контракт)."""
        return self.model_dump(mode="json")
