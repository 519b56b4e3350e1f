"""Package-specific exception types."""

from __future__ import annotations


class ConfigError(ValueError):
    """Raised when configuration values are invalid.

    Covers unknown style or format tokens, non-positive numeric settings,
    malformed section delimiters and unusable configuration-file tables.

    Examples:
        raise ConfigError("`width` must be a positive integer")
    """


class PatternCompileError(ConfigError):
    """Raised when a ``p<regex>`` numbering style holds an invalid pattern.

    Args:
        pattern: Regular expression text that failed to compile.
        reason: Description reported by the regular expression engine.
        source: Configuration file the pattern came from, if any.
    """

    def __init__(self, pattern: str, reason: str, source: object | None = None):
        self.pattern = pattern
        self.reason = reason
        self.source = source
        message = f"invalid regular expression '{pattern}': {reason}"
        if source is not None:
            message = f"{source}: {message}"
        super().__init__(message)


class InputError(OSError):
    """Raised when the input source cannot be opened or decoded."""


class OutputError(OSError):
    """Raised when writing numbered lines fails for a reason other than a closed pipe."""
