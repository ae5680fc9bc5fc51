"""uafacets Models and Data Types."""

from .client import Client
from .device import OTHER_DEVICE, SPIDER_DEVICE, Device
from .os import OTHER_OS, OS
from .user_agent import OTHER_USER_AGENT, SPIDER_USER_AGENT, UserAgent

__all__ = [
    "Client",
    "UserAgent",
    "OS",
    "Device",
    "OTHER_USER_AGENT",
    "SPIDER_USER_AGENT",
    "OTHER_OS",
    "OTHER_DEVICE",
    "SPIDER_DEVICE",
]
