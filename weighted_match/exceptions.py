"""Exceptions raised by the matching engine."""


class MatchingError(Exception):
    """Base class for errors raised by the matching engine."""


class ConfigurationError(MatchingError, ValueError):
    """Raised when field rules cannot be turned into a rule set."""
