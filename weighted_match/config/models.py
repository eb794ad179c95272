"""Configuration models for the distance matching system."""

import copy
import math
from dataclasses import dataclass, field
from numbers import Real
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple, Union

import pandas as pd

from weighted_match.exceptions import ConfigurationError

DEFAULT_THRESHOLD = 0.3
ALL_ABSTAIN_DISTANCE = 1.0
DEFAULT_WEIGHT = 1.0

# Keys of a field rule that configure the engine itself; everything else is
# passed through to the calculator as options.
RESERVED_KEYS = ('weight', 'calculator', 'type', 'extractor')

@dataclass(frozen=True)
class FieldConfig:
    """Typed alternative to a plain dict describing one field rule."""
    calculator: Any
    weight: float = DEFAULT_WEIGHT
    options: Mapping[str, Any] = field(default_factory=dict)
    extractor: Optional[Callable[[Any], Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        rule = dict(self.options)
        rule.update(
            weight=self.weight,
            calculator=self.calculator,
            extractor=self.extractor
        )
        return rule

@dataclass(frozen=True)
class Rule:
    """A validated field rule with its calculator already resolved."""
    field_name: str
    weight: float
    calculator: Any
    options: Mapping[str, Any]
    extractor: Optional[Callable[[Any], Any]] = None

    def __post_init__(self):
        if not isinstance(self.options, MappingProxyType):
            object.__setattr__(self, 'options', MappingProxyType(dict(self.options)))

    def __reduce__(self):
        return (
            Rule,
            (self.field_name, self.weight, self.calculator, dict(self.options), self.extractor)
        )

    def extract(self, record: Any) -> Any:
        """Get this rule's field value out of a record."""
        if self.extractor is not None:
            return self.extractor(record)
        return lookup_field(record, self.field_name)

@dataclass(frozen=True)
class MatchResult:
    """Closest candidate found by a search, with its distance."""
    item: Any
    distance: float

def lookup_field(record: Any, field_name: str) -> Any:
    """
    Named-field lookup used when a rule has no extractor.

    Mappings and pandas Series are indexed by key, anything else is read as
    an attribute. Missing fields raise.
    """
    if isinstance(record, (Mapping, pd.Series)):
        return record[field_name]
    return getattr(record, field_name)

class RuleSet:
    """
    Immutable mapping of field name to Rule.

    Build it with `RuleSet.from_config`; the caller's configuration is deep
    copied first, so resolving calculators never touches the original object.
    """

    __slots__ = ('_rules',)

    def __init__(self, rules: Tuple[Rule, ...]):
        if not rules:
            raise ConfigurationError("At least one field rule is required")
        object.__setattr__(
            self,
            '_rules',
            MappingProxyType({rule.field_name: rule for rule in rules})
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("RuleSet is immutable")

    def __reduce__(self):
        return (RuleSet, (tuple(self),))

    @classmethod
    def from_config(
        cls,
        rules: Mapping[str, Union[Mapping[str, Any], FieldConfig]],
        registry: Optional[Any] = None
    ) -> 'RuleSet':
        """
        Validate and resolve caller supplied field rules.

        Args:
            rules: Field name to rule dict (or FieldConfig)
            registry: Calculator registry to resolve references with

        Returns:
            RuleSet: Resolved, immutable rule set

        Raises:
            ConfigurationError: If a weight or calculator is invalid
        """
        if registry is None:
            from weighted_match.core.registry import registry as default_registry
            registry = default_registry

        if not isinstance(rules, Mapping):
            raise ConfigurationError(
                f"Rules must be a mapping of field name to rule, got {type(rules).__name__}"
            )

        owned = copy.deepcopy(dict(rules))
        return cls(tuple(
            _build_rule(field_name, raw, registry)
            for field_name, raw in owned.items()
        ))

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(self._rules)

    @property
    def total_weight(self) -> float:
        return sum(rule.weight for rule in self._rules.values())

    def __getitem__(self, field_name: str) -> Rule:
        return self._rules[field_name]

    def __contains__(self, field_name: object) -> bool:
        return field_name in self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        fields = ', '.join(
            f"{rule.field_name}={rule.weight}" for rule in self._rules.values()
        )
        return f"RuleSet({fields})"

def _build_rule(field_name: str, raw: Any, registry: Any) -> Rule:
    if isinstance(raw, FieldConfig):
        raw = raw.to_dict()
    if not isinstance(raw, Mapping):
        raise ConfigurationError(
            f"Rule for field '{field_name}' must be a mapping, got {type(raw).__name__}"
        )

    weight = _validate_weight(field_name, raw.get('weight', DEFAULT_WEIGHT))

    reference = raw.get('calculator')
    if reference is None:
        reference = raw.get('type')
    if reference is None:
        raise ConfigurationError(f"No calculator configured for field '{field_name}'")

    extractor = raw.get('extractor')
    if extractor is not None and not callable(extractor):
        raise ConfigurationError(f"Extractor for field '{field_name}' is not callable")

    options = {
        key: value for key, value in raw.items()
        if key not in RESERVED_KEYS
    }

    return Rule(
        field_name=field_name,
        weight=weight,
        calculator=registry.resolve(reference),
        options=MappingProxyType(options),
        extractor=extractor
    )

def _validate_weight(field_name: str, weight: Any) -> float:
    if weight is None:
        weight = DEFAULT_WEIGHT
    if isinstance(weight, bool) or not isinstance(weight, Real):
        raise ConfigurationError(
            f"Weight for field '{field_name}' must be a number, got {weight!r}"
        )
    if not math.isfinite(weight):
        raise ConfigurationError(
            f"Weight for field '{field_name}' must be finite, got {weight!r}"
        )
    if not weight > 0:
        raise ConfigurationError(
            f"Weight for field '{field_name}' must be positive, got {weight!r}"
        )
    return float(weight)
