"""
Configuration errors raised while loading and compiling rule sets.

All errors surface at construction time; classification itself never
raises for input that no rule matches.
"""

from typing import Any


class ConfigurationError(ValueError):
    """Base class for unrecoverable rule set configuration errors."""


class RuleSourceError(ConfigurationError):
    """A rule source is unreadable or misses a required section."""

    def __init__(self, message: str, section: str | None = None):
        super().__init__(message)
        self.section = section


class RuleCompilationError(ConfigurationError):
    """A rule descriptor cannot be compiled into a matching rule."""

    def __init__(
        self,
        message: str,
        index: int,
        descriptor: Any = None,
        section: str | None = None,
    ):
        location = f"{section} rule #{index}" if section else f"rule #{index}"
        super().__init__(f"{message} ({location}: {descriptor!r})")
        self.index = index
        self.descriptor = descriptor
        self.section = section
