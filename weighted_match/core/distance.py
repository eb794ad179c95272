"""Weighted multi-field distance between records."""

from typing import Any, Dict, Mapping, Optional, Sequence, Union
import logging

from weighted_match.config.models import (
    ALL_ABSTAIN_DISTANCE,
    DEFAULT_THRESHOLD,
    FieldConfig,
    MatchResult,
    RuleSet
)
from weighted_match.core import search
from weighted_match.core.calculators import ABSTAIN, CalculatorResult
from weighted_match.core.registry import CalculatorRegistry

logger = logging.getLogger(__name__)

class DistanceCalculator:
    """
    Combines per-field calculators into one weighted distance.

    Each field contributes its calculator's distance in proportion to its
    weight. Fields whose calculator abstains are left out and the remaining
    weights are renormalized.
    """

    def __init__(
        self,
        rules: Union[RuleSet, Mapping[str, Union[Mapping[str, Any], FieldConfig]]],
        registry: Optional[CalculatorRegistry] = None
    ):
        """
        Initialize the distance calculator.

        Args:
            rules: Field name to rule mapping, or an already built RuleSet
            registry: Calculator registry (defaults to the global one)

        Raises:
            ConfigurationError: If the rules are invalid
        """
        if isinstance(rules, RuleSet):
            self.rule_set = rules
        else:
            self.rule_set = RuleSet.from_config(rules, registry=registry)

    def field_distances(self, a: Any, b: Any) -> Dict[str, CalculatorResult]:
        """
        Per-field calculator results for a pair of records.

        Args:
            a: First record
            b: Second record

        Returns:
            Dict[str, CalculatorResult]: Field name to distance or ABSTAIN

        Raises:
            ValueError: If a calculator returns a distance outside [0, 1]
        """
        results = {}
        for rule in self.rule_set:
            result = rule.calculator.calculate(
                rule.extract(a),
                rule.extract(b),
                rule.options
            )
            if result is not ABSTAIN:
                result = float(result)
                if not 0.0 <= result <= 1.0:
                    raise ValueError(
                        f"Calculator for field '{rule.field_name}' returned "
                        f"{result}, expected a distance in [0, 1]"
                    )
            results[rule.field_name] = result
        return results

    def calculate_distance(self, a: Any, b: Any) -> float:
        """
        Weighted distance between two records.

        Returns:
            float: 0 for identical records up to 1 for maximally distant ones
        """
        opinions = [
            (self.rule_set[field_name].weight, result)
            for field_name, result in self.field_distances(a, b).items()
            if result is not ABSTAIN
        ]
        total_weight = sum(weight for weight, _ in opinions)

        if total_weight == 0:
            logger.debug(
                f"All calculators abstained, using distance {ALL_ABSTAIN_DISTANCE}"
            )
            return ALL_ABSTAIN_DISTANCE

        # Normalize weights first: a lone remaining field keeps its exact distance.
        return sum((weight / total_weight) * result for weight, result in opinions)

    def is_match(self, a: Any, b: Any, threshold: float = DEFAULT_THRESHOLD) -> bool:
        """Whether two records are within `threshold` of each other."""
        return search.is_match(self.calculate_distance, a, b, threshold)

    def closest_match(
        self,
        item: Any,
        candidates: Sequence[Any],
        threshold: float = DEFAULT_THRESHOLD,
        max_workers: Optional[int] = None
    ) -> Optional[MatchResult]:
        """
        Find the candidate closest to `item` within `threshold`.

        Args:
            item: Record to match
            candidates: Records to search, scanned in order
            threshold: Largest distance still counted as a match
            max_workers: Compute distances on a thread pool of this size

        Returns:
            Optional[MatchResult]: Matched candidate and its distance, or None
        """
        return search.closest_match(
            self.calculate_distance, item, candidates, threshold, max_workers
        )

    def closest_matching_item(
        self,
        item: Any,
        candidates: Sequence[Any],
        threshold: float = DEFAULT_THRESHOLD,
        max_workers: Optional[int] = None
    ) -> Any:
        """Like `closest_match`, returning only the matched candidate."""
        return search.closest_matching_item(
            self.calculate_distance, item, candidates, threshold, max_workers
        )

    def __repr__(self) -> str:
        return f"DistanceCalculator({self.rule_set!r})"
