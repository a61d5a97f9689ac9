from __future__ import annotations

import logging

from folionote_core.outline import Section

from .locator import page_of
from .models import Scope, SortOrder


logger = logging.getLogger(__name__)

_MISSING_PAGE = float("-inf")


def page_sort_key(section: Section, property_key: str) -> float:
    page = page_of(section, property_key)
    return _MISSING_PAGE if page is None else float(page)


def sort_notes(scope: Scope, property_key: str, order: SortOrder = SortOrder.ASCENDING) -> list[Section]:
    """
    Stable sort of the scope anchor's direct children by page number.

    Sections without a usable page sort first in ascending order and last in
    descending order.
    """
    ordered = scope.document.sort_children(
        scope.anchor,
        key=lambda section: page_sort_key(section, property_key),
        reverse=order is SortOrder.DESCENDING,
    )
    logger.debug("Sorted %d note(s) %s", len(ordered), order.value)
    return ordered


__all__ = ["page_sort_key", "sort_notes"]
