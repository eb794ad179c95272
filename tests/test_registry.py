"""
Tests for calculator resolution.
"""

from functools import partial

import pytest

from weighted_match import (
    CalculatorRegistry,
    ConfigurationError,
    DayOfMonth,
    DayOfYear,
    DistanceCalculator,
    Levenshtein,
    register_calculator,
)
from weighted_match.core.registry import calculator_type_name

from conftest import CustomCalc, FixedCalc


class TestCalculatorTypeName:
    """Test identifier to type name translation."""

    @pytest.mark.parametrize("identifier,expected", [
        ('day_of_year', 'DayOfYear'),
        ('day_of_month', 'DayOfMonth'),
        ('levenshtein', 'Levenshtein'),
        ('some_junk', 'SomeJunk'),
        ('DayOfYear', 'DayOfYear'),
    ])
    def test_translation(self, identifier, expected):
        """Snake case identifiers become type names."""
        assert calculator_type_name(identifier) == expected


class TestCalculatorRegistry:
    """Test resolving calculator references."""

    def test_defaults_registered(self):
        """Built-in calculators are available by name."""
        registry = CalculatorRegistry()

        assert registry.names == ('DayOfYear', 'DayOfMonth', 'Levenshtein')
        assert 'day_of_year' in registry
        assert 'DayOfMonth' in registry

    @pytest.mark.parametrize("identifier,expected_type", [
        ('day_of_year', DayOfYear),
        ('day_of_month', DayOfMonth),
        ('levenshtein', Levenshtein),
    ])
    def test_resolve_builtin(self, identifier, expected_type):
        """Identifiers resolve to new built-in instances."""
        assert isinstance(CalculatorRegistry().resolve(identifier), expected_type)

    def test_resolve_class(self):
        """Classes are instantiated without arguments."""
        assert isinstance(CalculatorRegistry().resolve(CustomCalc), CustomCalc)

    def test_resolve_instance(self):
        """Instances are used as they are."""
        calculator = CustomCalc()

        assert CalculatorRegistry().resolve(calculator) is calculator

    def test_resolve_factory(self):
        """Zero-argument factories are called."""
        registry = CalculatorRegistry()

        assert isinstance(registry.resolve(lambda: CustomCalc()), CustomCalc)
        assert registry.resolve(partial(FixedCalc, 0.4)).distance == 0.4

    def test_factory_in_rules(self):
        """Factories work as calculator references in rules."""
        calculator = DistanceCalculator({
            'description': {'weight': 1.0, 'calculator': partial(FixedCalc, 0.25)}
        })

        assert calculator.calculate_distance({'description': 'a'}, {'description': 'b'}) == 0.25

    def test_factory_returning_non_calculator(self):
        """Factories must produce something with calculate()."""
        with pytest.raises(ConfigurationError):
            CalculatorRegistry().resolve(lambda: object())

    def test_unknown_identifier(self):
        """Unknown identifiers name the translated type."""
        with pytest.raises(ConfigurationError, match='Unable to find calculator SomeJunk'):
            CalculatorRegistry().resolve('some_junk')

    def test_object_without_calculate(self):
        """References must end up exposing calculate()."""
        with pytest.raises(ConfigurationError):
            CalculatorRegistry().resolve(object())

    def test_register_factory(self):
        """Registered factories resolve like built-ins."""
        registry = CalculatorRegistry()
        registry.register('always_close', CustomCalc)

        assert isinstance(registry.resolve('always_close'), CustomCalc)
        assert 'always_close' not in CalculatorRegistry()

    def test_register_rejects_non_callable(self):
        """Factories must be callable."""
        with pytest.raises(ConfigurationError):
            CalculatorRegistry().register('broken', 42)

    def test_register_calculator_globally(self):
        """Globally registered calculators are usable in rules."""
        register_calculator('fixed_point_nine', CustomCalc)

        calculator = DistanceCalculator({
            'description': {'weight': 1.0, 'calculator': 'fixed_point_nine'}
        })

        assert calculator.calculate_distance({'description': 'a'}, {'description': 'b'}) == 0.9
