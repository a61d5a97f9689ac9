from __future__ import annotations

import re


_HEADING_PATTERN = re.compile(r"^(\*+)(?:[ \t]+(.*?))?[ \t]*$")
_KEYWORD_PATTERN = re.compile(r"^#\+([A-Za-z_][\w-]*):[ \t]*(.*?)[ \t]*$")
_DRAWER_START_PATTERN = re.compile(r"^[ \t]*:PROPERTIES:[ \t]*$", re.IGNORECASE)
_DRAWER_END_PATTERN = re.compile(r"^[ \t]*:END:[ \t]*$", re.IGNORECASE)
_PROPERTY_PATTERN = re.compile(r"^[ \t]*:([^\s:]+):(?:[ \t]+(.*?))?[ \t]*$")
_LINK_PATTERN = re.compile(r"\[\[([^\]]+)\](?:\[([^\]]*)\])?\]")


class OutlineSyntaxError(ValueError):
    """Raised when outline text cannot be parsed (e.g. an unterminated drawer)."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


def match_heading(line: str) -> tuple[int, str] | None:
    """Return (level, heading text) for a heading line, else None."""
    match = _HEADING_PATTERN.match(line)
    if not match:
        return None
    return len(match.group(1)), match.group(2) or ""


def match_keyword(line: str) -> tuple[str, str] | None:
    match = _KEYWORD_PATTERN.match(line)
    if not match:
        return None
    return match.group(1), match.group(2)


def is_drawer_start(line: str) -> bool:
    return bool(_DRAWER_START_PATTERN.match(line))


def read_property_drawer(lines: list[str], start: int) -> tuple[dict[str, str], int]:
    """
    Parse the property drawer whose `:PROPERTIES:` line is at `start`.

    Returns the properties in file order and the index of the line after `:END:`.
    A repeated key keeps its first position and its last value.
    """
    properties: dict[str, str] = {}
    idx = start + 1
    while idx < len(lines):
        line = lines[idx]
        if _DRAWER_END_PATTERN.match(line):
            return properties, idx + 1
        match = _PROPERTY_PATTERN.match(line)
        if not match:
            raise OutlineSyntaxError(f"Invalid property line: {line!r}", idx + 1)
        properties[match.group(1)] = match.group(2) or ""
        idx += 1
    raise OutlineSyntaxError("Unterminated :PROPERTIES: drawer", start + 1)


def format_heading(level: int, heading: str) -> str:
    stars = "*" * level
    return f"{stars} {heading}" if heading else stars


def format_property_drawer(properties: dict[str, str]) -> list[str]:
    if not properties:
        return []
    lines = [":PROPERTIES:"]
    for key, value in properties.items():
        lines.append(f":{key}: {value}" if value else f":{key}:")
    lines.append(":END:")
    return lines


def format_link(target: str, description: str | None = None) -> str:
    if description:
        return f"[[{target}][{description}]]"
    return f"[[{target}]]"


def strip_links(text: str) -> str:
    """Replace links with their description (or target) for display."""
    return _LINK_PATTERN.sub(lambda m: m.group(2) or m.group(1), text)


__all__ = [
    "OutlineSyntaxError",
    "format_heading",
    "format_link",
    "format_property_drawer",
    "is_drawer_start",
    "match_heading",
    "match_keyword",
    "read_property_drawer",
    "strip_links",
]
