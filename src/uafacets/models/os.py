"""Operating system facet."""

from dataclasses import dataclass
from typing import Any, Optional

from ..utils.constants import OTHER, UNKNOWN
from ..utils.version import join_version
from .canonical import parse_fields, render_fields


@dataclass(frozen=True)
class OS:
    """Parsed operating system family and version (up to four components)."""

    family: Optional[str]
    major: Optional[str] = None
    minor: Optional[str] = None
    patch: Optional[str] = None
    patch_minor: Optional[str] = None

    @property
    def display_family(self) -> str:
        return self.family or UNKNOWN

    @property
    def full_version(self) -> str:
        """major.minor.patch.patch_minor, as deep as the components go."""
        return join_version(self.major, self.minor, self.patch, self.patch_minor)

    @property
    def short_version(self) -> str:
        return join_version(self.major, self.minor)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "family": self.family,
            "major": self.major,
            "minor": self.minor,
            "patch": self.patch,
            "patch_minor": self.patch_minor,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OS":
        """Create from dictionary."""
        return cls(
            family=data.get("family"),
            major=data.get("major"),
            minor=data.get("minor"),
            patch=data.get("patch"),
            patch_minor=data.get("patch_minor"),
        )

    @classmethod
    def from_string(cls, text: str) -> "OS":
        """Re-parse the canonical string produced by ``str()``."""
        return cls.from_dict(parse_fields(text))

    def __str__(self) -> str:
        return render_fields(list(self.to_dict().items()))


OTHER_OS = OS(OTHER)
