"""Device facet."""

from dataclasses import dataclass, field
from typing import Any, Optional

from ..utils.constants import OTHER, SPIDER, SPIDER_DEVICE_FAMILY
from .canonical import parse_fields, render_fields


@dataclass(frozen=True)
class Device:
    """
    Parsed device identity.

    ``is_mobile`` is not extracted from the device rules; it is inferred
    from the already resolved user agent and OS families.
    """

    family: Optional[str]
    brand: Optional[str] = None
    model: Optional[str] = None
    is_mobile: bool = False
    is_spider: bool = field(init=False, compare=False)

    def __post_init__(self):
        is_spider = self.family is not None and self.family.lower() == SPIDER
        object.__setattr__(self, "is_spider", is_spider)

    @property
    def display_family(self) -> str:
        return self.family or OTHER

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "family": self.family,
            "brand": self.brand,
            "model": self.model,
            "is_mobile": self.is_mobile,
            "is_spider": self.is_spider,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Device":
        """Create from dictionary; derived keys are ignored."""
        return cls(
            family=data.get("family"),
            brand=data.get("brand"),
            model=data.get("model"),
            is_mobile=bool(data.get("is_mobile", False)),
        )

    @classmethod
    def from_string(cls, text: str) -> "Device":
        """Re-parse the canonical string produced by ``str()``."""
        return cls.from_dict(parse_fields(text))

    def __str__(self) -> str:
        return render_fields(list(self.to_dict().items()))


OTHER_DEVICE = Device(OTHER)
SPIDER_DEVICE = Device(SPIDER_DEVICE_FAMILY)
