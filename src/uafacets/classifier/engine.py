"""Ordered first-match-wins rule engine shared by all classifiers."""

from typing import Iterable, Optional

from ..logging import log_execution_time, rules_logger
from ..rules.descriptor import RuleDescriptor
from .matchers import CompiledRule, RuleMatch, compile_rules, match_rule


class RuleEngine:
    """
    Holds an ordered, immutable list of compiled rules.

    Rules are tried in exactly the order they were supplied and the first
    one that produces a match wins; there is no scoring or specificity.
    Subclasses turn the winning ``RuleMatch`` into their facet type.
    """

    section: str = ""
    expand_templates: bool = False

    def __init__(self, descriptors: Iterable[RuleDescriptor]):
        """
        Compile the rules.

        Args:
            descriptors: Rule descriptors in evaluation order

        Raises:
            RuleCompilationError: If any descriptor cannot be compiled
        """
        self._rules = self._compile(descriptors)

    @log_execution_time()
    def _compile(self, descriptors: Iterable[RuleDescriptor]) -> tuple[CompiledRule, ...]:
        rules = compile_rules(
            descriptors, self.expand_templates, self.section or None
        )
        rules_logger(self.section).info("Rules compiled", count=len(rules))
        return rules

    @property
    def rules(self) -> tuple[CompiledRule, ...]:
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def first_match(self, agent_string: str) -> Optional[RuleMatch]:
        """Return the match of the first rule that applies, or None."""
        for rule in self._rules:
            result = match_rule(rule, agent_string)
            if result is not None:
                return result
        return None
