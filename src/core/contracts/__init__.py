"""
Contract Validation Module

Модуль для валидации JSON контрактов, которыми движок калькулятора
обменивается со слоем отображения.
"""

from .validators import (
    ContractValidator,
    EngineStateValidator,
    SchemaLoader,
    validate_engine_state,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "EngineStateValidator",
    # Functions
    "validate_engine_state",
]
