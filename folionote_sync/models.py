from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from folionote_core.outline import OutlineDocument, Section


class Direction(Enum):
    FORWARD = 1
    BACKWARD = -1


class Focus(Enum):
    VIEWER = "viewer"
    NOTES = "notes"


class SortOrder(Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"

    @classmethod
    def parse(cls, value: object) -> SortOrder:
        text = str(value).strip().lower()
        aliases = {"asc": cls.ASCENDING, "desc": cls.DESCENDING}
        if text in aliases:
            return aliases[text]
        return cls(text)


class SplitOrientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class NavigatorStateKind(Enum):
    IDLE = "idle"
    VIEWING_NOTE = "viewing_note"
    NO_NOTE_FOR_PAGE = "no_note_for_page"


@dataclass(frozen=True)
class NavigatorState:
    kind: NavigatorStateKind
    page: int | None = None

    @classmethod
    def idle(cls) -> NavigatorState:
        return cls(NavigatorStateKind.IDLE)

    @classmethod
    def viewing_note(cls, page: int) -> NavigatorState:
        return cls(NavigatorStateKind.VIEWING_NOTE, page)

    @classmethod
    def no_note_for_page(cls, page: int) -> NavigatorState:
        return cls(NavigatorStateKind.NO_NOTE_FOR_PAGE, page)


@dataclass(frozen=True)
class Scope:
    """The part of a notes document that one source document's notes live in."""

    document: OutlineDocument
    anchor: Section

    @property
    def is_whole_document(self) -> bool:
        return self.anchor is self.document.root

    def sections(self) -> list[Section]:
        return self.document.sections(self.anchor)

    def contains(self, section: Section) -> bool:
        return section is self.anchor or self.anchor.is_ancestor_of(section)


__all__ = [
    "Direction",
    "Focus",
    "NavigatorState",
    "NavigatorStateKind",
    "Scope",
    "SortOrder",
    "SplitOrientation",
]
