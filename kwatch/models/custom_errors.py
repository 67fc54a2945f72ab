from typing import List, Optional


class ConfigError(Exception):
    """Base class for every configuration failure."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.message = message
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)


class ConfigReadError(ConfigError):
    """Configuration source is unset or cannot be read."""


class ConfigParseError(ConfigError):
    """Configuration document is not valid YAML or has the wrong shape."""


class ConfigValidationError(ConfigError):
    """
    Semantic validation failure.

    When raised directly by the loader it aggregates several failures,
    available through ``errors`` in document order.
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        errors: Optional[List["ConfigValidationError"]] = None,
    ):
        self.errors = list(errors or [])
        super().__init__(message, source)


class ConfigConflictError(ConfigValidationError):
    """Mutually exclusive settings were given together."""


class RegexCompileError(ConfigValidationError):
    """A label rule pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str, source: Optional[str] = None):
        self.pattern = pattern
        super().__init__(f"invalid regex {pattern!r}: {reason}", source)


class InvalidRuleError(ConfigValidationError):
    """A label rule is missing its label or its value."""
