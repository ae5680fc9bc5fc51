"""Version string rendering shared by the facet models."""

from typing import Optional

from .constants import UNKNOWN


def join_version(*components: Optional[str], default: str = UNKNOWN) -> str:
    """
    Join version components with dots, stopping at the first gap.

    Components are consumed from major downwards; the first component that
    is None or empty ends the join, so a missing minor hides any patch.

    Args:
        *components: Version components, most significant first
        default: Value returned when there is no major component

    Returns:
        Dotted version string, or ``default`` if nothing could be joined
    """
    parts = []
    for component in components:
        if not component:
            break
        parts.append(component)
    return ".".join(parts) if parts else default
