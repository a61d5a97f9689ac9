from __future__ import annotations

import logging

from folionote_core.outline import Section
from folionote_core.view import NotesView

from .errors import UnparsablePageProperty
from .models import Scope


logger = logging.getLogger(__name__)


def page_value(page: int) -> str:
    """Canonical property text for a page number."""
    return str(int(page))


def parse_page(value: str | None, property_key: str) -> int:
    """Parse a page property value; anything but a positive decimal integer is rejected."""
    if value is None:
        raise UnparsablePageProperty(None, property_key)
    text = value.strip()
    if not (text.isascii() and text.isdigit()):
        raise UnparsablePageProperty(value, property_key)
    page = int(text)
    if page < 1:
        raise UnparsablePageProperty(value, property_key)
    return page


def page_of(section: Section, property_key: str) -> int | None:
    try:
        return parse_page(section.get_property(property_key), property_key)
    except UnparsablePageProperty:
        return None


def find_section_by_page(
    scope: Scope,
    property_key: str,
    page: int,
    view: NotesView | None = None,
) -> Section | None:
    """
    Find the first section in `scope` whose `property_key` equals `page`.

    The scan always starts at the beginning of the scope. On a match the view
    is narrowed to the section and its body revealed; on a miss the view is
    left alone and None is returned.
    """
    target = page_value(page)
    match = scope.document.find_forward(
        lambda section: section.get_property(property_key) == target,
        within=scope.anchor,
    )
    if match is None:
        logger.debug("No note with %s=%s", property_key, target)
        return None
    if view is not None:
        view.narrow_to(match)
        view.reveal(match)
    return match


__all__ = [
    "find_section_by_page",
    "page_of",
    "page_value",
    "parse_page",
]
