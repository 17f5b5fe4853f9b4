"""Общие фикстуры для тестов движка калькулятора."""

import pytest

from src.engine import CalculatorEngine


class FakeClock:
    """Управляемый монотонный источник времени (секунды)."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(clock):
    with CalculatorEngine(clock=clock) as eng:
        yield eng

