"""Rule descriptors and the YAML rule source."""

from .descriptor import RuleDescriptor, RuleKind
from .source import (
    RuleSource,
    bundled_rule_path,
    load_bundled_rule_source,
)

__all__ = [
    "RuleDescriptor",
    "RuleKind",
    "RuleSource",
    "bundled_rule_path",
    "load_bundled_rule_source",
]
