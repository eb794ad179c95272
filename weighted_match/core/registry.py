"""Registry resolving calculator references to calculator instances."""

from typing import Any, Callable, Dict
import logging

from weighted_match.core.calculators import (
    Calculator,
    DayOfMonth,
    DayOfYear,
    Levenshtein
)
from weighted_match.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CalculatorFactory = Callable[[], Any]

def calculator_type_name(identifier: str) -> str:
    """
    Translate a built-in identifier to its calculator type name.

    `day_of_year` becomes `DayOfYear`; names already in that form are kept.
    """
    return ''.join(
        part[:1].upper() + part[1:]
        for part in identifier.split('_')
        if part
    )

class CalculatorRegistry:
    """Registry of built-in calculator factories keyed by type name."""

    def __init__(self):
        self._factories: Dict[str, CalculatorFactory] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default calculators."""
        self.register('day_of_year', DayOfYear)
        self.register('day_of_month', DayOfMonth)
        self.register('levenshtein', Levenshtein)

    def register(self, name: str, factory: CalculatorFactory) -> None:
        """
        Register a calculator factory.

        Args:
            name: Identifier, either `snake_case` or the type name
            factory: Zero-argument callable returning a calculator
        """
        if not callable(factory):
            raise ConfigurationError(f"Calculator factory for {name} is not callable")
        self._factories[calculator_type_name(name)] = factory

    def __contains__(self, name: str) -> bool:
        return calculator_type_name(name) in self._factories

    @property
    def names(self) -> tuple:
        return tuple(self._factories)

    def resolve(self, reference: Any) -> Calculator:
        """
        Turn a calculator reference into a live calculator.

        Args:
            reference: Built-in identifier, calculator class, zero-argument
                factory or instance

        Returns:
            Calculator: Instance exposing `calculate`

        Raises:
            ConfigurationError: If the reference cannot be resolved
        """
        if isinstance(reference, str):
            calculator = self._create(reference)
        elif isinstance(reference, type):
            calculator = reference()
        elif callable(reference) and not callable(getattr(reference, 'calculate', None)):
            # Zero-argument factory: a function, lambda or functools.partial.
            calculator = reference()
        else:
            calculator = reference

        if not callable(getattr(calculator, 'calculate', None)):
            raise ConfigurationError(
                f"Calculator {reference!r} does not implement calculate()"
            )
        return calculator

    def _create(self, identifier: str) -> Calculator:
        type_name = calculator_type_name(identifier)
        factory = self._factories.get(type_name)
        if factory is None:
            raise ConfigurationError(f"Unable to find calculator {type_name}")

        logger.debug(f"Resolved calculator {identifier!r} to {type_name}")
        return factory()

# Global registry instance
registry = CalculatorRegistry()

def register_calculator(name: str, factory: CalculatorFactory) -> None:
    """
    Register a new calculator type globally.

    Args:
        name: Identifier to register the calculator under
        factory: Zero-argument callable returning a calculator
    """
    registry.register(name, factory)
