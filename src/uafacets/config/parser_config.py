"""
Parser Configuration

Controls result caching and which rule set the default parser loads.
Values come from, in increasing precedence: dataclass defaults, a YAML
file, and ``UAFACETS_*`` environment variables.
"""

import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from ..utils.constants import (
    BUNDLED_RULE_FILES,
    MAX_CACHE_SIZE,
    MIN_CACHE_SIZE,
    RULE_SET_MINIMAL,
)

ENV_PREFIX = "UAFACETS_"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class ParserConfig:
    """Settings for building a Parser."""

    cache_enabled: bool = True
    cache_initial_size: int = MIN_CACHE_SIZE
    cache_max_size: int = MAX_CACHE_SIZE
    rule_set: str = RULE_SET_MINIMAL  # 'minimal' or 'full'
    rules_path: str | None = None  # custom YAML rule set, overrides rule_set

    def __post_init__(self):
        """Validate cache bounds and rule set name."""
        if self.cache_max_size < 1:
            raise ValueError(
                f"cache_max_size must be positive, got {self.cache_max_size}"
            )
        if not 0 < self.cache_initial_size <= self.cache_max_size:
            raise ValueError(
                f"cache_initial_size must be between 1 and cache_max_size "
                f"({self.cache_max_size}), got {self.cache_initial_size}"
            )
        if self.rule_set not in BUNDLED_RULE_FILES:
            raise ValueError(
                f"rule_set must be one of {sorted(BUNDLED_RULE_FILES)}, "
                f"got {self.rule_set!r}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParserConfig":
        """Create from dictionary; missing keys keep their defaults."""
        defaults = cls()
        return cls(
            cache_enabled=_as_bool(data.get("cache_enabled", defaults.cache_enabled)),
            cache_initial_size=int(
                data.get("cache_initial_size", defaults.cache_initial_size)
            ),
            cache_max_size=int(data.get("cache_max_size", defaults.cache_max_size)),
            rule_set=str(data.get("rule_set", defaults.rule_set)),
            rules_path=data.get("rules_path", defaults.rules_path) or None,
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ParserConfig":
        """
        Load from a YAML file.

        The settings may sit at the top level or under a ``parser`` key.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Parser config in {path} must be a mapping")
        return cls.from_dict(data.get("parser", data))

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        base: "ParserConfig | None" = None,
    ) -> "ParserConfig":
        """
        Apply ``UAFACETS_*`` environment overrides.

        Args:
            environ: Environment mapping (defaults to os.environ)
            base: Config to override (defaults to dataclass defaults)
        """
        environ = os.environ if environ is None else environ
        data = (base or cls()).to_dict()
        for key in data:
            value = environ.get(ENV_PREFIX + key.upper())
            if value is not None:
                data[key] = value
        return cls.from_dict(data)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_VALUES
    return bool(value)


# Global instance for easy access
_config: ParserConfig | None = None


def get_parser_config() -> ParserConfig:
    """Get the process-wide parser config, built from the environment."""
    global _config
    if _config is None:
        _config = ParserConfig.from_env()
    return _config


def set_parser_config(config: ParserConfig | None) -> None:
    """Replace the process-wide parser config (None resets to environment)."""
    global _config
    _config = config
