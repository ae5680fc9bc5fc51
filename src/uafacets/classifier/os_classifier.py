"""Operating system classifier."""

from typing import Optional

from ..models.os import OS, OTHER_OS
from ..utils.constants import OS_SECTION
from .engine import RuleEngine


class OSClassifier(RuleEngine):
    """Resolves the operating system family and up to four version parts."""

    section = OS_SECTION

    def classify(self, agent_string: Optional[str]) -> OS:
        if not agent_string:
            return OTHER_OS

        match = self.first_match(agent_string)
        if match is None:
            return OTHER_OS

        return OS(
            family=match.family,
            major=match.v1,
            minor=match.v2,
            patch=match.v3,
            patch_minor=match.v4,
        )
