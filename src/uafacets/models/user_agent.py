"""User agent (client) facet."""

from dataclasses import dataclass, field
from typing import Any, Optional

from ..utils.constants import OTHER, SPIDER, UNKNOWN
from ..utils.version import join_version
from .canonical import parse_fields, render_fields


@dataclass(frozen=True)
class UserAgent:
    """
    Parsed browser or client identity.

    Spiders follow a naming convention inherited from the rule sets: the
    family is the reserved token ``spider`` and the bot's own name sits in
    the major version slot. ``display_family`` undoes that convention.
    """

    family: Optional[str]
    major: Optional[str] = None
    minor: Optional[str] = None
    patch: Optional[str] = None
    is_spider: bool = field(init=False, compare=False)

    def __post_init__(self):
        """Derive the spider flag from the family."""
        is_spider = self.family is not None and self.family.lower() == SPIDER
        object.__setattr__(self, "is_spider", is_spider)

    @property
    def display_family(self) -> str:
        """Family for presentation; the bot name for spiders."""
        if self.is_spider:
            return join_version(self.major, self.minor)
        return self.family or UNKNOWN

    @property
    def full_version(self) -> str:
        """major.minor.patch, empty for spiders."""
        if self.is_spider:
            return ""
        return join_version(self.major, self.minor, self.patch)

    @property
    def short_version(self) -> str:
        """major.minor, empty for spiders."""
        if self.is_spider:
            return ""
        return join_version(self.major, self.minor)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "family": self.family,
            "is_spider": self.is_spider,
            "major": self.major,
            "minor": self.minor,
            "patch": self.patch,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserAgent":
        """Create from dictionary; derived keys are ignored."""
        return cls(
            family=data.get("family"),
            major=data.get("major"),
            minor=data.get("minor"),
            patch=data.get("patch"),
        )

    @classmethod
    def from_string(cls, text: str) -> "UserAgent":
        """Re-parse the canonical string produced by ``str()``."""
        return cls.from_dict(parse_fields(text))

    def __str__(self) -> str:
        return render_fields(list(self.to_dict().items()))


OTHER_USER_AGENT = UserAgent(OTHER)
SPIDER_USER_AGENT = UserAgent(SPIDER)
