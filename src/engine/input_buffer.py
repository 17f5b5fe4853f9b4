"""InputBuffer — текущее выражение и снимок предыдущего выражения.

Инвариант: буфер никогда не пустой, значение по умолчанию "0".
"""

from typing import Final, Optional


DEFAULT_TEXT: Final[str] = "0"


class InputBuffer:
    """Контейнер состояния ввода (без логики грамматики)."""

    def __init__(self):
        self._text = DEFAULT_TEXT
        self._previous_expression: Optional[str] = None

    @property
    def text(self) -> str:
        return self._text

    @property
    def previous_expression(self) -> Optional[str]:
        return self._previous_expression

    @property
    def is_default(self) -> bool:
        return self._text == DEFAULT_TEXT

    def set(self, text: str) -> None:
        """Замена содержимого буфера целиком."""
        if not text:
            raise ValueError("Buffer text must be non-empty")
        self._text = text

    def reset(self) -> None:
        """Сброс текста в значение по умолчанию (снимок не трогается)."""
        self._text = DEFAULT_TEXT

    def clear(self) -> None:
        """Сброс текста и снимка предыдущего выражения."""
        self._text = DEFAULT_TEXT
        self._previous_expression = None

    def delete_last(self) -> None:
        """Удаление последнего символа; пустой буфер заменяется на "0"."""
        if len(self._text) > 1:
            self._text = self._text[:-1]
        else:
            self._text = DEFAULT_TEXT

    def snapshot_previous(self) -> str:
        """Сохранение текущего текста как предыдущего выражения."""
        self._previous_expression = self._text
        return self._text

    def __repr__(self) -> str:
        return f"InputBuffer(text={self._text!r}, previous={self._previous_expression!r})"
