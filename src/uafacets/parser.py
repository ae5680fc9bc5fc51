"""
Parser facade: runs the three classifiers and the result cache.

Typical use::

    parser = Parser()
    client = parser.classify(request.headers["User-Agent"])
    client.user_agent.family, client.os.family, client.device.is_mobile
"""

import os
from typing import IO, Any, Optional, Union

from .cache.result_cache import ResultCache
from .classifier.device_classifier import DeviceClassifier
from .classifier.os_classifier import OSClassifier
from .classifier.user_agent_classifier import UserAgentClassifier
from .config.parser_config import ParserConfig, get_parser_config
from .logging import parser_logger
from .models.client import Client
from .models.device import Device
from .models.os import OS
from .models.user_agent import UserAgent
from .rules.source import RuleSource, load_bundled_rule_source

RulesInput = Union[RuleSource, dict[str, Any], IO, str, bytes, os.PathLike, None]

logger = parser_logger()


class Parser:
    """
    Classifies raw User-Agent strings into user agent, OS and device facets.

    All rules are compiled in the constructor; afterwards the parser is
    read-only apart from its result cache, which is internally locked, so
    one instance can be shared between threads.
    """

    def __init__(
        self,
        rules: RulesInput = None,
        disable_cache: Optional[bool] = None,
        config: Optional[ParserConfig] = None,
    ):
        """
        Initialize the parser.

        Args:
            rules: Rule set to compile. One of:
                - None: the rule set selected by ``config`` (bundled minimal
                  set by default)
                - RuleSource or dict: an already parsed rule set
                - open stream, str or bytes: a YAML document
                - path-like, or a one-line str naming an existing file:
                  a YAML file
            disable_cache: Recompute every call instead of memoizing.
                Defaults to ``not config.cache_enabled``.
            config: Parser settings (defaults to get_parser_config())

        Raises:
            RuleSourceError: If the rule set is unreadable or incomplete
            RuleCompilationError: If any rule cannot be compiled
        """
        self.config = config or get_parser_config()
        if disable_cache is None:
            disable_cache = not self.config.cache_enabled

        source = self._load_rules(rules)

        self._user_agent_classifier = UserAgentClassifier(source.user_agent_rules)
        self._os_classifier = OSClassifier(source.os_rules)
        self._device_classifier = DeviceClassifier(
            source.device_rules,
            mobile_user_agent_families=source.mobile_user_agent_families,
            mobile_os_families=source.mobile_os_families,
        )

        self._cache: Optional[ResultCache] = None
        if not disable_cache:
            self._cache = ResultCache(
                max_size=self.config.cache_max_size,
                initial_size=self.config.cache_initial_size,
            )

        logger.info(
            "Parser initialized",
            cache_enabled=self._cache is not None,
            user_agent_rules=len(self._user_agent_classifier),
            os_rules=len(self._os_classifier),
            device_rules=len(self._device_classifier),
        )

    def _load_rules(self, rules: RulesInput) -> RuleSource:
        if rules is None:
            if self.config.rules_path:
                return RuleSource.from_path(self.config.rules_path)
            return load_bundled_rule_source(self.config.rule_set)
        if isinstance(rules, RuleSource):
            return rules
        if isinstance(rules, dict):
            return RuleSource.from_dict(rules)
        if isinstance(rules, os.PathLike):
            return RuleSource.from_path(rules)
        if isinstance(rules, str) and "\n" not in rules and os.path.isfile(rules):
            return RuleSource.from_path(rules)
        return RuleSource.from_yaml(rules)

    @property
    def cache(self) -> Optional[ResultCache]:
        """The result cache, or None when caching is disabled."""
        return self._cache

    def classify(self, agent_string: Optional[str]) -> Client:
        """
        Classify a raw User-Agent string.

        Args:
            agent_string: Raw User-Agent header value (may be empty)

        Returns:
            Client with user agent, OS and device facets. Cached results
            are returned as-is.
        """
        if self._cache is not None:
            cached = self._cache.get(agent_string)
            if cached is not None:
                return cached

        user_agent = self._user_agent_classifier.classify(agent_string)
        os_ = self._os_classifier.classify(agent_string)
        # Device inference depends on both families resolved above
        device = self._device_classifier.classify(
            agent_string,
            user_agent_family=user_agent.family,
            os_family=os_.family,
        )
        client = Client(user_agent=user_agent, os=os_, device=device)

        if self._cache is not None:
            self._cache.put(agent_string, client)
        return client

    def classify_user_agent(self, agent_string: Optional[str]) -> UserAgent:
        """Classify only the client facet; bypasses the cache."""
        return self._user_agent_classifier.classify(agent_string)

    def classify_os(self, agent_string: Optional[str]) -> OS:
        """Classify only the OS facet; bypasses the cache."""
        return self._os_classifier.classify(agent_string)

    def classify_device(
        self,
        agent_string: Optional[str],
        user_agent_family: Optional[str] = None,
        os_family: Optional[str] = None,
    ) -> Device:
        """
        Classify only the device facet; bypasses the cache.

        Mobile inference needs the other facets' families; without them
        the device is never reported as mobile.
        """
        return self._device_classifier.classify(
            agent_string,
            user_agent_family=user_agent_family,
            os_family=os_family,
        )


# Global instance for easy access
_parser: Optional[Parser] = None


def get_parser() -> Parser:
    """Get the process-wide parser, built from get_parser_config() on first use."""
    global _parser
    if _parser is None:
        _parser = Parser()
    return _parser


def classify(agent_string: Optional[str]) -> Client:
    """Convenience function: classify with the process-wide parser."""
    return get_parser().classify(agent_string)
