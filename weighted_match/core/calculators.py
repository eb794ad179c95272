"""Field-level distance calculators."""

from abc import ABC, abstractmethod
from calendar import monthrange
from enum import Enum
from typing import Any, Mapping, Optional, Protocol, Union, runtime_checkable

import Levenshtein as lev

from weighted_match.core.preprocessor import is_null, serial_day, to_date

class Abstain(Enum):
    """Outcome of a calculator that has no opinion on a pair of values."""
    ABSTAIN = "abstain"

    def __repr__(self) -> str:
        return "ABSTAIN"

ABSTAIN = Abstain.ABSTAIN

CalculatorResult = Union[float, Abstain]

@runtime_checkable
class Calculator(Protocol):
    """Protocol every field calculator satisfies."""
    def calculate(
        self,
        value1: Any,
        value2: Any,
        options: Optional[Mapping[str, Any]] = None
    ) -> CalculatorResult:
        """Return a distance in [0, 1] or ABSTAIN."""
        ...

class BaseCalculator(ABC):
    """Base class for built-in calculators with common functionality."""

    @abstractmethod
    def calculate(
        self,
        value1: Any,
        value2: Any,
        options: Optional[Mapping[str, Any]] = None
    ) -> CalculatorResult:
        pass

    @staticmethod
    def _option(options: Optional[Mapping[str, Any]], name: str, default: Any) -> Any:
        if not options:
            return default
        value = options.get(name)
        return default if value is None else value

    @staticmethod
    def _bounded(units_apart: int, threshold: float) -> float:
        """Scale a unit difference against a threshold, saturating at 1."""
        if units_apart >= threshold:
            return 1
        return round(units_apart / threshold, 2)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

class DayOfYear(BaseCalculator):
    """
    Proximity of two dates in days.

    Dates a threshold (default a year) or more apart are maximally distant.
    """

    DAYS_IN_YEAR = 365

    def calculate(self, date1, date2, options=None):
        threshold = self._option(options, 'threshold', self.DAYS_IN_YEAR)
        dayfirst = self._option(options, 'dayfirst', False)
        days_apart = abs(
            serial_day(date1, dayfirst=dayfirst) - serial_day(date2, dayfirst=dayfirst)
        )
        return self._bounded(days_apart, threshold)

class DayOfMonth(BaseCalculator):
    """
    Proximity of the day-of-month of two dates, ignoring month and year.

    The 30th and the 2nd are close: the difference wraps around the end of
    the longer of the two months.
    """

    DAYS_IN_HALF_MONTH = 15

    def calculate(self, date1, date2, options=None):
        threshold = self._option(options, 'threshold', self.DAYS_IN_HALF_MONTH)
        dayfirst = self._option(options, 'dayfirst', False)
        first = to_date(date1, dayfirst=dayfirst)
        second = to_date(date2, dayfirst=dayfirst)

        days_apart = abs(first.day - second.day)
        days_in_month = max(
            monthrange(first.year, first.month)[1],
            monthrange(second.year, second.month)[1]
        )
        days_apart = min(days_apart, days_in_month - days_apart)

        return self._bounded(days_apart, threshold)

class Levenshtein(BaseCalculator):
    """
    Edit distance normalized by the longer of the two strings.

    Abstains when either value is missing.
    """

    def calculate(self, value1, value2, options=None):
        if is_null(value1) or is_null(value2):
            return ABSTAIN

        s1, s2 = str(value1), str(value2)
        if self._option(options, 'ignore_case', False):
            s1, s2 = s1.lower(), s2.lower()

        longest = max(len(s1), len(s2))
        if longest == 0:
            return 0.0

        return lev.distance(s1, s2) / longest
