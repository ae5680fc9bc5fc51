"""
Rule source: loads the declarative rule set from YAML.

The rule set is a mapping with three required ordered sections
(``user_agent_parsers``, ``os_parsers``, ``device_parsers``) and two
optional family lists used for mobile inference. Loading happens once, at
parser construction; nothing here runs per classification.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Union

import yaml

from ..exceptions import RuleSourceError
from ..logging import log_execution_time, rules_logger
from ..utils.constants import (
    BUNDLED_RULE_FILES,
    DEVICE_SECTION,
    MOBILE_OS_FAMILIES,
    MOBILE_USER_AGENT_FAMILIES,
    OS_SECTION,
    REQUIRED_SECTIONS,
    RULE_SET_MINIMAL,
    USER_AGENT_SECTION,
)
from .descriptor import RuleDescriptor

RULES_DIR = Path(__file__).parent

logger = rules_logger()


@dataclass(frozen=True)
class RuleSource:
    """Parsed, ordered rule descriptors for all three classifiers."""

    user_agent_rules: tuple[RuleDescriptor, ...] = ()
    os_rules: tuple[RuleDescriptor, ...] = ()
    device_rules: tuple[RuleDescriptor, ...] = ()
    mobile_user_agent_families: frozenset[str] = field(default_factory=frozenset)
    mobile_os_families: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleSource":
        """
        Create from an already parsed rule set mapping.

        Raises:
            RuleSourceError: If a required section is missing or not a list
        """
        if not isinstance(data, dict):
            raise RuleSourceError(
                f"Rule set must be a mapping, got {type(data).__name__}"
            )

        for section in REQUIRED_SECTIONS:
            if data.get(section) is None:
                raise RuleSourceError(f"{section} is missing from rule set", section)
            if not isinstance(data[section], list):
                raise RuleSourceError(f"{section} must be a list", section)

        source = cls(
            user_agent_rules=_descriptors(USER_AGENT_SECTION, data),
            os_rules=_descriptors(OS_SECTION, data),
            device_rules=_descriptors(DEVICE_SECTION, data),
            mobile_user_agent_families=_family_set(MOBILE_USER_AGENT_FAMILIES, data),
            mobile_os_families=_family_set(MOBILE_OS_FAMILIES, data),
        )
        logger.info(
            "Rule source loaded",
            user_agent_rules=len(source.user_agent_rules),
            os_rules=len(source.os_rules),
            device_rules=len(source.device_rules),
        )
        return source

    @classmethod
    @log_execution_time(logger)
    def from_yaml(cls, stream: Union[IO, str, bytes]) -> "RuleSource":
        """
        Create from a YAML document (open stream or document text).

        Raises:
            RuleSourceError: If the YAML cannot be parsed or is incomplete
        """
        try:
            data = yaml.safe_load(stream)
        except yaml.YAMLError as e:
            raise RuleSourceError(f"Invalid rule set YAML: {e}") from e

        if not data:
            raise RuleSourceError("Rule set is empty")
        if isinstance(data, str):
            raise RuleSourceError(
                f"Rule set YAML is a plain string ({data!r}), not a mapping; "
                "pass rule files as pathlib.Path"
            )
        return cls.from_dict(data)

    @classmethod
    def from_path(cls, path: Union[str, os.PathLike]) -> "RuleSource":
        """Create from a YAML file on disk."""
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                return cls.from_yaml(f)
        except OSError as e:
            raise RuleSourceError(f"Cannot read rule set {path}: {e}") from e


def _descriptors(section: str, data: dict[str, Any]) -> tuple[RuleDescriptor, ...]:
    descriptors = []
    for index, entry in enumerate(data[section]):
        if not isinstance(entry, dict):
            raise RuleSourceError(
                f"{section} entry #{index} must be a mapping, got {entry!r}",
                section,
            )
        descriptors.append(RuleDescriptor.from_mapping(section, entry))
    return tuple(descriptors)


def _family_set(section: str, data: dict[str, Any]) -> frozenset[str]:
    # Optional section; absent means no family counts as mobile
    families = data.get(section) or []
    if not isinstance(families, list):
        raise RuleSourceError(f"{section} must be a list", section)
    return frozenset(str(family) for family in families)


def bundled_rule_path(rule_set: str = RULE_SET_MINIMAL) -> Path:
    """
    Path of a rule set shipped with the package.

    Args:
        rule_set: 'minimal' (default, faster) or 'full' (regex only)
    """
    try:
        return RULES_DIR / BUNDLED_RULE_FILES[rule_set]
    except KeyError:
        raise RuleSourceError(
            f"Unknown bundled rule set {rule_set!r}, "
            f"expected one of {sorted(BUNDLED_RULE_FILES)}"
        ) from None


def load_bundled_rule_source(rule_set: str = RULE_SET_MINIMAL) -> RuleSource:
    """Load one of the rule sets shipped with the package."""
    return RuleSource.from_path(bundled_rule_path(rule_set))
