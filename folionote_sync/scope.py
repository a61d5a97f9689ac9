from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from folionote_core.outline import OutlineDocument

from .constants import DEFAULT_PAGE_PROPERTY, DOCUMENT_KEY_PROPERTY, MULTI_PAGE_PROPERTY_SUFFIX
from .errors import ScopeNotFound
from .models import Scope


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SingleDocumentMode:
    """The whole notes file belongs to one source document."""

    page_property: str = DEFAULT_PAGE_PROPERTY

    @property
    def document_key(self) -> None:
        return None

    def resolve_scope(self, document: OutlineDocument) -> Scope:
        return Scope(document=document, anchor=document.root)


@dataclass(frozen=True)
class MultiDocumentMode:
    """
    Notes for several source documents, one Root-Section per document.

    Root-Sections carry the document key in their CUSTOM_ID property and
    their page notes use `<key>-page` as page property.
    """

    document_key: str

    @property
    def page_property(self) -> str:
        return f"{self.document_key}{MULTI_PAGE_PROPERTY_SUFFIX}"

    def resolve_scope(self, document: OutlineDocument) -> Scope:
        anchor = document.find_by_property(DOCUMENT_KEY_PROPERTY, self.document_key)
        if anchor is None:
            raise ScopeNotFound(self.document_key)
        return Scope(document=document, anchor=anchor)


Mode = Union[SingleDocumentMode, MultiDocumentMode]


def resolve_scope(mode: Mode, document: OutlineDocument) -> Scope:
    scope = mode.resolve_scope(document)
    logger.debug(
        "Resolved scope for %s: %s",
        mode.document_key or "single document",
        "whole document" if scope.is_whole_document else scope.anchor.heading,
    )
    return scope


def list_document_keys(document: OutlineDocument) -> list[str]:
    """Document keys of all sections carrying a CUSTOM_ID, in document order."""
    keys: list[str] = []
    for section in document.sections():
        key = section.get_property(DOCUMENT_KEY_PROPERTY)
        if key:
            keys.append(key)
    return list(dict.fromkeys(keys))


__all__ = [
    "Mode",
    "MultiDocumentMode",
    "SingleDocumentMode",
    "list_document_keys",
    "resolve_scope",
]
