"""
Compiled rules and the match functions that evaluate them.

A compiled rule is either a ``PatternRule`` (regular expression, first
match anywhere in the raw string) or a ``LiteralRule`` (case-insensitive
substring search with delimiter-based version slicing). ``match_rule``
dispatches on the variant; a match yields a ``RuleMatch`` holding the raw
fields the classifiers turn into facets, or None when the rule does not
apply.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from ..exceptions import RuleCompilationError
from ..rules.descriptor import RuleDescriptor, RuleKind
from ..utils.constants import (
    DEFAULT_VERSION_SEPARATOR,
    MAX_LITERAL_VERSION_COMPONENTS,
    MAX_TEMPLATE_GROUP,
    SPIDER,
    VERSION_DELIMITERS,
)

_VERSION_END_RE = re.compile("[" + re.escape(VERSION_DELIMITERS) + "]")
_TEMPLATE_GROUP_RE = re.compile(r"\$([1-%d])" % MAX_TEMPLATE_GROUP)


@dataclass(frozen=True)
class RuleMatch:
    """Fields extracted by one successful rule."""

    family: str
    v1: Optional[str] = None
    v2: Optional[str] = None
    v3: Optional[str] = None
    v4: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None


@dataclass(frozen=True)
class PatternRule:
    """
    Regular expression rule.

    With ``expand_templates`` set (device rules) every replacement may
    reference ``$1``..``$9``; otherwise only the family replacement
    substitutes ``$1`` and version replacements are used verbatim.
    """

    pattern: re.Pattern
    family_replacement: Optional[str] = None
    v1_replacement: Optional[str] = None
    v2_replacement: Optional[str] = None
    v3_replacement: Optional[str] = None
    v4_replacement: Optional[str] = None
    brand_replacement: Optional[str] = None
    model_replacement: Optional[str] = None
    expand_templates: bool = False


@dataclass(frozen=True)
class LiteralRule:
    """Substring rule; all literals are stored lowercase."""

    names: tuple[str, ...]
    require: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    family_replacement: Optional[str] = None
    version_separator: str = DEFAULT_VERSION_SEPARATOR


CompiledRule = Union[PatternRule, LiteralRule]


def compile_rule(
    descriptor: RuleDescriptor,
    index: int,
    expand_templates: bool = False,
    section: Optional[str] = None,
) -> CompiledRule:
    """
    Compile one descriptor.

    Args:
        descriptor: Rule as loaded from the rule source
        index: Position of the rule in its section, for error reporting
        expand_templates: Use device-style ``$N`` template expansion
        section: Rule source section, for error reporting

    Raises:
        RuleCompilationError: If the descriptor has neither a usable regex
            nor a usable name list
    """
    kind = descriptor.kind

    if kind is RuleKind.PATTERN:
        flags = re.IGNORECASE if descriptor.regex_flag == "i" else 0
        try:
            pattern = re.compile(descriptor.regex, flags)
        except re.error as e:
            raise RuleCompilationError(
                f"Invalid regex: {e}", index, descriptor, section
            ) from e
        return PatternRule(
            pattern=pattern,
            family_replacement=descriptor.family_replacement,
            v1_replacement=descriptor.v1_replacement,
            v2_replacement=descriptor.v2_replacement,
            v3_replacement=descriptor.v3_replacement,
            v4_replacement=descriptor.v4_replacement,
            brand_replacement=descriptor.brand_replacement,
            model_replacement=descriptor.model_replacement,
            expand_templates=expand_templates,
        )

    if kind is RuleKind.LITERAL:
        names = _split_literals(descriptor.names, "|")
        if not names:
            raise RuleCompilationError(
                "Literal rule has no usable names", index, descriptor, section
            )
        separator = descriptor.version_separator
        return LiteralRule(
            names=names,
            require=_split_literals(descriptor.require, ",", trim=False),
            exclude=_split_literals(descriptor.exclude, ",", trim=False),
            family_replacement=descriptor.family_replacement,
            version_separator=(
                DEFAULT_VERSION_SEPARATOR if separator is None else separator
            ),
        )

    raise RuleCompilationError(
        "Rule is missing regex or names", index, descriptor, section
    )


def compile_rules(
    descriptors: Iterable[RuleDescriptor],
    expand_templates: bool = False,
    section: Optional[str] = None,
) -> tuple[CompiledRule, ...]:
    """Compile descriptors in order; the first bad one aborts compilation."""
    return tuple(
        compile_rule(descriptor, index, expand_templates, section)
        for index, descriptor in enumerate(descriptors)
    )


def match_rule(rule: CompiledRule, agent_string: str) -> Optional[RuleMatch]:
    """Evaluate one compiled rule against a raw agent string."""
    if isinstance(rule, PatternRule):
        return match_pattern(rule, agent_string)
    return match_literal(rule, agent_string)


def match_pattern(rule: PatternRule, agent_string: str) -> Optional[RuleMatch]:
    """
    Evaluate a pattern rule.

    Returns None if the regex does not match, or if it matches but no
    family can be resolved (no replacement and no group 1).
    """
    match = rule.pattern.search(agent_string)
    if match is None:
        return None

    if rule.expand_templates:
        return _device_match(rule, match)

    family = _resolve_family(rule.family_replacement, match)
    if family is None:
        return None

    v1 = _first_set(rule.v1_replacement, _group(match, 2))

    if rule.v2_replacement is not None:
        v2 = rule.v2_replacement
        # Patch is only taken from a group when minor came from one too
        v3 = rule.v3_replacement
    else:
        v2 = _group(match, 3)
        v3 = _first_set(rule.v3_replacement, _group(match, 4))

    v4 = _first_set(rule.v4_replacement, _group(match, 5))

    return RuleMatch(family=family, v1=v1, v2=v2, v3=v3, v4=v4)


def match_literal(rule: LiteralRule, agent_string: str) -> Optional[RuleMatch]:
    """
    Evaluate a literal rule.

    The first configured name found in the lowercased string decides the
    rule; failing its require/exclude checks voids the whole rule rather
    than moving on to the next name.
    """
    if not agent_string:
        return None

    lowered = agent_string.lower()

    for name in rule.names:
        if name not in lowered:
            continue

        if any(required not in lowered for required in rule.require):
            return None
        if any(excluded in lowered for excluded in rule.exclude):
            return None

        family = rule.family_replacement or name

        if family.lower() == SPIDER:
            # A bot's version is the alias it matched on
            return RuleMatch(family=family, v1=name)

        if not rule.version_separator:
            return RuleMatch(family=family)

        components = _literal_version(lowered, name, rule.version_separator)
        return RuleMatch(family, *components)

    return None


def _literal_version(lowered: str, name: str, separator: str) -> list[str]:
    """Slice ``name<separator>1.2.3`` into at most three components."""
    marker = name + separator
    pos = lowered.find(marker)
    if pos < 0:
        return []

    start = pos + len(marker)
    end = _VERSION_END_RE.search(lowered, start)
    version = lowered[start:end.start()] if end else lowered[start:]

    components = version.split(".")[:MAX_LITERAL_VERSION_COMPONENTS]
    return [component.strip() for component in components]


def _device_match(rule: PatternRule, match: re.Match) -> Optional[RuleMatch]:
    if rule.family_replacement is not None:
        family = _expand_template(rule.family_replacement, match)
    else:
        family = _group(match, 1)
    if family is None:
        return None

    brand = None
    if rule.brand_replacement is not None:
        brand = _expand_template(rule.brand_replacement, match)

    if rule.model_replacement is not None:
        model = _expand_template(rule.model_replacement, match)
    else:
        model = _group(match, 1)

    return RuleMatch(family=family, brand=brand, model=model)


def _resolve_family(replacement: Optional[str], match: re.Match) -> Optional[str]:
    if replacement is None:
        return _group(match, 1)

    group_1 = _group(match, 1)
    if "$1" in replacement and group_1 is not None:
        return replacement.replace("$1", group_1, 1)
    return replacement


def _expand_template(template: str, match: re.Match) -> Optional[str]:
    """Substitute ``$N`` with group N (empty if absent); blank result is None."""
    expanded = _TEMPLATE_GROUP_RE.sub(
        lambda m: _group(match, int(m.group(1))) or "", template
    ).strip()
    return expanded or None


def _group(match: re.Match, index: int) -> Optional[str]:
    """Group value, or None if the group does not exist or did not participate."""
    if match.re.groups < index:
        return None
    return match.group(index)


def _first_set(replacement: Optional[str], fallback: Optional[str]) -> Optional[str]:
    return replacement if replacement is not None else fallback


def _split_literals(
    value: Optional[str], delimiter: str, trim: bool = True
) -> tuple[str, ...]:
    # Whitespace is significant in require/exclude literals, e.g. " mobile"
    if value is None:
        return ()
    parts = value.lower().split(delimiter)
    if trim:
        parts = [part.strip() for part in parts]
    return tuple(part for part in parts if part)
