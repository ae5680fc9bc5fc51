"""Canonical string form shared by the facet models.

Facets render as ``{family: "Chrome", major: "120", minor: null}``. Values
are JSON literals, so quotes and braces inside a family survive the round
trip and ``null`` stays distinct from ``""``.
"""

import json
import re
from typing import Any

_NAME_RE = re.compile(r"\s*(\w+): ")
_SCALAR_RE = re.compile(r'null|true|false|"(?:[^"\\]|\\.)*"')
_SEPARATOR = ", "


def render_fields(fields: list[tuple[str, Any]], nested: tuple[str, ...] = ()) -> str:
    """
    Render (name, value) pairs in canonical form, preserving order.

    Fields named in ``nested`` hold already rendered facets and are
    emitted verbatim.
    """
    rendered = []
    for name, value in fields:
        if name in nested:
            rendered.append(f"{name}: {value}")
        else:
            rendered.append(f"{name}: {json.dumps(value)}")
    return "{" + _SEPARATOR.join(rendered) + "}"


def parse_fields(text: str) -> dict[str, Any]:
    """
    Parse a canonical string back into a field mapping.

    Nested facets are returned as their raw canonical strings.

    Raises:
        ValueError: If the text is not in canonical form
    """
    text = text.strip()
    if not (text.startswith("{") and text.endswith("}")):
        raise ValueError(f"Not a canonical facet string: {text!r}")

    body = text[1:-1]
    fields: dict[str, Any] = {}
    pos = 0
    while pos < len(body):
        name_match = _NAME_RE.match(body, pos)
        if name_match is None:
            raise ValueError(f"Expected a field name at offset {pos} in {text!r}")
        name, pos = name_match.group(1), name_match.end()

        if body.startswith("{", pos):
            end = _nested_end(body, pos)
            fields[name] = body[pos:end]
        else:
            value_match = _SCALAR_RE.match(body, pos)
            if value_match is None:
                raise ValueError(f"Invalid value for {name!r} in {text!r}")
            end = value_match.end()
            fields[name] = json.loads(value_match.group())

        if body.startswith(_SEPARATOR, end):
            pos = end + len(_SEPARATOR)
        elif end == len(body):
            pos = end
        else:
            raise ValueError(f"Expected {_SEPARATOR!r} after {name!r} in {text!r}")
    return fields


def _nested_end(body: str, start: int) -> int:
    """Offset just past the brace closing the one at ``start``; braces in strings don't count."""
    depth = 0
    in_string = False
    escaped = False
    for pos in range(start, len(body)):
        char = body[pos]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return pos + 1
    raise ValueError(f"Unterminated nested facet in {body!r}")
