"""Device classifier."""

from dataclasses import replace
from typing import Iterable, Optional

from ..models.device import OTHER_DEVICE, SPIDER_DEVICE, Device
from ..rules.descriptor import RuleDescriptor
from ..utils.constants import DEVICE_SECTION, SPIDER
from .engine import RuleEngine


class DeviceClassifier(RuleEngine):
    """
    Resolves device family, brand and model.

    Mobile inference does not look at the device rules at all: a device is
    mobile when the user agent family or the OS family is one of the
    configured mobile families. Both families come from the other
    classifiers and must be passed in by the caller.
    """

    section = DEVICE_SECTION
    expand_templates = True

    def __init__(
        self,
        descriptors: Iterable[RuleDescriptor],
        mobile_user_agent_families: Iterable[str] = (),
        mobile_os_families: Iterable[str] = (),
    ):
        """
        Initialize the classifier.

        Args:
            descriptors: Device rule descriptors in evaluation order
            mobile_user_agent_families: Client families that imply mobile
            mobile_os_families: OS families that imply mobile
        """
        super().__init__(descriptors)
        self.mobile_user_agent_families = frozenset(mobile_user_agent_families)
        self.mobile_os_families = frozenset(mobile_os_families)

    def is_mobile(
        self,
        user_agent_family: Optional[str] = None,
        os_family: Optional[str] = None,
    ) -> bool:
        return (
            user_agent_family in self.mobile_user_agent_families
            or os_family in self.mobile_os_families
        )

    def classify(
        self,
        agent_string: Optional[str],
        user_agent_family: Optional[str] = None,
        os_family: Optional[str] = None,
    ) -> Device:
        """
        Classify the device of a raw User-Agent string.

        Args:
            agent_string: Raw User-Agent string
            user_agent_family: Family resolved by the user agent classifier
            os_family: Family resolved by the OS classifier

        Returns:
            Device facet; a spider client with no device match yields the
            Spider device
        """
        is_mobile = self.is_mobile(user_agent_family, os_family)

        match = self.first_match(agent_string) if agent_string else None
        if match is None:
            if user_agent_family and user_agent_family.lower() == SPIDER:
                device = SPIDER_DEVICE
            else:
                device = OTHER_DEVICE
            return replace(device, is_mobile=True) if is_mobile else device

        return Device(
            family=match.family,
            brand=match.brand,
            model=match.model,
            is_mobile=is_mobile,
        )
