"""Rule descriptors: one declarative matching directive, as loaded."""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Optional

from ..utils.constants import SECTION_KEY_MAP


class RuleKind(str, Enum):
    """How a rule finds its match."""
    PATTERN = 'pattern'  # regular expression, first match anywhere
    LITERAL = 'literal'  # case-insensitive substring search


@dataclass(frozen=True)
class RuleDescriptor:
    """
    A rule as supplied by the rule source, before compilation.

    Literal lists stay in their serialized form: ``names`` is pipe
    delimited, ``require`` and ``exclude`` are comma delimited. Replacement
    fields are stored under section-neutral names; ``from_mapping`` maps
    the per-section YAML keys onto them.
    """

    regex: Optional[str] = None
    regex_flag: Optional[str] = None

    names: Optional[str] = None
    require: Optional[str] = None
    exclude: Optional[str] = None
    version_separator: Optional[str] = None

    family_replacement: Optional[str] = None
    v1_replacement: Optional[str] = None
    v2_replacement: Optional[str] = None
    v3_replacement: Optional[str] = None
    v4_replacement: Optional[str] = None
    brand_replacement: Optional[str] = None
    model_replacement: Optional[str] = None

    @property
    def kind(self) -> Optional[RuleKind]:
        """Rule kind, or None for a descriptor that cannot be compiled."""
        if self.regex:
            return RuleKind.PATTERN
        if self.names:
            return RuleKind.LITERAL
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                result[f.name] = value
        return result

    @classmethod
    def from_mapping(cls, section: str, data: dict[str, Any]) -> "RuleDescriptor":
        """
        Create from one entry of a rule source section.

        Args:
            section: Section name, selects the replacement key names
            data: Mapping as parsed from the rule source

        Returns:
            RuleDescriptor with every present value coerced to ``str``
        """
        values: dict[str, Optional[str]] = {
            "regex": _as_str(data.get("regex")),
            "regex_flag": _as_str(data.get("regex_flag")),
            "names": _as_str(data.get("name")),
            "require": _as_str(data.get("require")),
            "exclude": _as_str(data.get("exclude")),
            "version_separator": _as_str(data.get("version_sep")),
        }
        for key, field_name in SECTION_KEY_MAP.get(section, {}).items():
            values[field_name] = _as_str(data.get(key))
        return cls(**values)


def _as_str(value: Any) -> Optional[str]:
    """YAML turns bare versions like ``7`` into ints; rules want strings."""
    if value is None:
        return None
    return str(value)
