"""
Pytest configuration and shared fixtures.
"""

import pytest
from dataclasses import dataclass
from typing import Any, List, Optional

from weighted_match import ABSTAIN, DistanceCalculator


@dataclass
class ExampleTransaction:
    """Record exposing its fields as attributes."""
    amount: Optional[float] = None
    description: Optional[str] = None
    date: Optional[Any] = None


class CustomCalc:
    """Calculator with a fixed opinion."""

    def calculate(self, first, second, options=None):
        return 0.9


class AbstainCalc:
    """Calculator that never has an opinion."""

    def calculate(self, first, second, options=None):
        return ABSTAIN


class ZeroCalc:
    """Calculator that considers everything identical."""

    def calculate(self, first, second, options=None):
        return 0.0


class NumericCalc:
    """Absolute difference of two numbers scaled by 100."""

    def calculate(self, first, second, options=None):
        return min(abs(first - second) / 100, 1.0)


@pytest.fixture
def examples() -> List[ExampleTransaction]:
    """Seven bank transactions to search."""
    return [
        ExampleTransaction(amount=25.00, date='2015-02-05', description='Audible.com'),
        ExampleTransaction(amount=34.89, date='2015-04-01', description='Questar Gas'),
        ExampleTransaction(amount=1200.00, date='2015-05-04', description='US Bank'),
        ExampleTransaction(amount=560.00, date='2015-06-17', description='Wells Fargo Dealer Services'),
        ExampleTransaction(amount=25.44, date='2015-06-03', description='Walmart'),
        ExampleTransaction(amount=6.55, date='2015-06-01', description='Taco Bell'),
        ExampleTransaction(amount=45.30, date='2015-06-26', description='Shell'),
    ]


@pytest.fixture
def transaction_calculator() -> DistanceCalculator:
    """Description and day-of-month calculator used for searches."""
    return DistanceCalculator({
        'description': {
            'weight': 0.80,
            'calculator': 'levenshtein'
        },
        'date': {
            'weight': 0.90,
            'calculator': 'day_of_month'
        }
    })


class FixedCalc:
    """Calculator returning the distance it was built with."""

    def __init__(self, distance=0.9):
        self.distance = distance

    def calculate(self, first, second, options=None):
        return self.distance
