from __future__ import annotations

import logging
import weakref

from .org_syntax import OutlineSyntaxError, format_property_drawer
from .outline import OutlineDocument, Section


logger = logging.getLogger(__name__)


class NotesView:
    """
    Visible state of a notes document: narrowing, focus and folding.

    With narrowing disabled, `narrow_to` only moves the focus and the whole
    document stays visible.
    """

    def __init__(self, document: OutlineDocument, *, narrowing: bool = True) -> None:
        self.document = document
        self.narrowing = narrowing
        self.narrowed: Section | None = None
        self.focus: Section | None = None
        self._revealed: weakref.WeakSet[Section] = weakref.WeakSet()
        self._folded_drawers: weakref.WeakSet[Section] = weakref.WeakSet()

    def narrow_to(self, section: Section) -> None:
        if self.narrowing:
            self.narrowed = section
        self.focus = section

    def widen(self) -> None:
        self.narrowed = None

    def reveal(self, section: Section) -> None:
        """Expand the section's own body and property drawer."""
        self._revealed.add(section)

    def fold_drawer(self, section: Section) -> None:
        self._folded_drawers.add(section)

    def is_revealed(self, section: Section) -> bool:
        return section in self._revealed

    def is_drawer_folded(self, section: Section) -> bool:
        return section in self._folded_drawers

    def current_section(self) -> Section | None:
        return self.focus if self.focus is not None else self.narrowed

    def visible_root(self) -> Section:
        return self.narrowed if self.narrowed is not None else self.document.root

    def visible_text(self) -> str:
        lines = self.visible_root().to_lines()
        return "\n".join(lines) + "\n" if lines else ""

    def line_of(self, section: Section) -> int | None:
        """0-based line of `section`'s heading within `visible_text()`."""
        line = 0
        for node in self.visible_root().iter_subtree():
            if node is section:
                return None if node.is_document_root else line
            if not node.is_document_root:
                line += 1 + len(format_property_drawer(node.properties))
            line += len(node.body)
        return None

    def section_at_line(self, line_number: int) -> Section | None:
        """Section whose entry contains the 0-based visible line, None in the preamble."""
        line = 0
        found: Section | None = None
        for node in self.visible_root().iter_subtree():
            if not node.is_document_root:
                if line > line_number:
                    break
                found = node
                line += 1 + len(format_property_drawer(node.properties))
            line += len(node.body)
        return found

    def apply_edit(self, text: str) -> bool:
        """
        Write edited visible text back into the document.

        Returns False (and leaves the document untouched) when the text does not parse.
        """
        if text == self.visible_text():
            return True
        target = self.visible_root()
        stale = list(target.iter_subtree())
        try:
            replaced = self.document.replace_subtree(target, text)
        except OutlineSyntaxError as exc:
            logger.warning("Discarding notes edit that does not parse: %s", exc)
            return False
        for section in stale:
            self._revealed.discard(section)
            self._folded_drawers.discard(section)
        if target is not self.document.root:
            self.narrowed = replaced[0] if self.narrowed is not None else None
            if self.focus is target or (self.focus is not None and target.is_ancestor_of(self.focus)):
                self.focus = replaced[0]
        elif self.focus is not None and self.focus not in self.document.sections():
            self.focus = None
        return True


__all__ = ["NotesView"]
