"""Rule-based classifiers for the user agent, OS and device facets."""

from .device_classifier import DeviceClassifier
from .engine import RuleEngine
from .matchers import (
    CompiledRule,
    LiteralRule,
    PatternRule,
    RuleMatch,
    compile_rule,
    compile_rules,
    match_literal,
    match_pattern,
    match_rule,
)
from .os_classifier import OSClassifier
from .user_agent_classifier import UserAgentClassifier

__all__ = [
    "RuleEngine",
    "UserAgentClassifier",
    "OSClassifier",
    "DeviceClassifier",
    "CompiledRule",
    "PatternRule",
    "LiteralRule",
    "RuleMatch",
    "compile_rule",
    "compile_rules",
    "match_rule",
    "match_pattern",
    "match_literal",
]
