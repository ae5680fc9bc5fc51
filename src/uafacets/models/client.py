"""Composite classification result."""

from dataclasses import dataclass
from typing import Any

from .canonical import parse_fields, render_fields
from .device import Device
from .os import OS
from .user_agent import UserAgent


@dataclass(frozen=True)
class Client:
    """
    User agent, OS and device facets for one input string.

    Instances are what the parser caches, so they are immutable and
    always complete.
    """

    user_agent: UserAgent
    os: OS
    device: Device

    @property
    def is_mobile(self) -> bool:
        return self.device.is_mobile

    @property
    def is_spider(self) -> bool:
        """True if either the client or the device was identified as a bot."""
        return self.user_agent.is_spider or self.device.is_spider

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "user_agent": self.user_agent.to_dict(),
            "os": self.os.to_dict(),
            "device": self.device.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Client":
        """Create from the nested dictionary produced by ``to_dict``."""
        return cls(
            user_agent=UserAgent.from_dict(data.get("user_agent", {})),
            os=OS.from_dict(data.get("os", {})),
            device=Device.from_dict(data.get("device", {})),
        )

    @classmethod
    def from_string(cls, text: str) -> "Client":
        """Re-parse the canonical string produced by ``str()``."""
        fields = parse_fields(text)
        return cls(
            user_agent=UserAgent.from_string(fields["user_agent"]),
            os=OS.from_string(fields["os"]),
            device=Device.from_string(fields["device"]),
        )

    def __str__(self) -> str:
        return render_fields([
            ("user_agent", str(self.user_agent)),
            ("os", str(self.os)),
            ("device", str(self.device)),
        ], nested=("user_agent", "os", "device"))
