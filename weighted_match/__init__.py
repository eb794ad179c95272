"""
Weighted Match
==============

A pluggable system for measuring how far apart two records are, built from
weighted per-field distance calculators.

Key Features:
- Per-field calculators resolved from built-in names, classes or instances
- Weighted distance with renormalization when a calculator abstains
- Closest-match search with a configurable match threshold
- Row linkage between pandas DataFrames
"""

from weighted_match.core.distance import DistanceCalculator
from weighted_match.core.calculators import (
    ABSTAIN,
    Abstain,
    BaseCalculator,
    Calculator,
    DayOfMonth,
    DayOfYear,
    Levenshtein
)
from weighted_match.core.registry import CalculatorRegistry, register_calculator
from weighted_match.core.matcher import match_dataframes

from weighted_match.config.models import (
    ALL_ABSTAIN_DISTANCE,
    DEFAULT_THRESHOLD,
    FieldConfig,
    MatchResult,
    Rule,
    RuleSet
)
from weighted_match.exceptions import ConfigurationError, MatchingError

__version__ = "1.0.0"
