"""Keymap — физические клавиши → токены калькулятора.

Enter и "=" → Equals, Backspace → Delete, Escape → Clear; цифры,
операторы, точка, процент и скобки передаются как есть. Остальные клавиши
игнорируются.
"""

from typing import Final, Optional


_NAMED_KEYS: Final[dict[str, str]] = {
    "Enter": "=",
    "=": "=",
    "Backspace": "DEL",
    "Escape": "C",
}

_PASSTHROUGH_KEYS: Final[str] = "0123456789+-*/.%()"


def map_key(key: str) -> Optional[str]:
    """
    Токен для клавиши.

    Examples:
        >>> map_key("Enter")
        '='
        >>> map_key("7")
        '7'
        >>> map_key("Shift") is None
        True
    """
    if key in _NAMED_KEYS:
        return _NAMED_KEYS[key]
    if len(key) == 1 and key in _PASSTHROUGH_KEYS:
        return key
    return None
