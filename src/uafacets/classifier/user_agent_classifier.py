"""User agent (client) classifier."""

from typing import Optional

from ..models.user_agent import OTHER_USER_AGENT, SPIDER_USER_AGENT, UserAgent
from ..utils.constants import USER_AGENT_SECTION
from .engine import RuleEngine


class UserAgentClassifier(RuleEngine):
    """Resolves the browser or client family and version."""

    section = USER_AGENT_SECTION

    def classify(self, agent_string: Optional[str]) -> UserAgent:
        """
        Classify the client of a raw User-Agent string.

        An empty or missing string is treated as a bot: real browsers
        always send a User-Agent.
        """
        if not agent_string:
            return SPIDER_USER_AGENT

        match = self.first_match(agent_string)
        if match is None:
            return OTHER_USER_AGENT

        return UserAgent(
            family=match.family,
            major=match.v1,
            minor=match.v2,
            patch=match.v3,
        )
