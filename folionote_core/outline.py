from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator

from .org_syntax import (
    OutlineSyntaxError,
    format_heading,
    format_property_drawer,
    is_drawer_start,
    match_heading,
    match_keyword,
    read_property_drawer,
)
from .text import atomic_write_text, read_text_auto


logger = logging.getLogger(__name__)

SectionPredicate = Callable[["Section"], bool]


@dataclass(eq=False)
class Section:
    """A heading in the outline together with its drawer, body and children."""

    level: int
    heading: str
    properties: dict[str, str] = field(default_factory=dict)
    body: list[str] = field(default_factory=list)
    children: list[Section] = field(default_factory=list)
    parent: Section | None = field(default=None, repr=False)

    @property
    def is_document_root(self) -> bool:
        return self.level == 0

    def get_property(self, key: str, default: str | None = None) -> str | None:
        return self.properties.get(key, default)

    def get_property_inherited(self, key: str, stop: Section | None = None) -> str | None:
        """Look `key` up on this section, then its ancestors up to and including `stop`."""
        node: Section | None = self
        while node is not None and not node.is_document_root:
            value = node.properties.get(key)
            if value is not None:
                return value
            if node is stop:
                break
            node = node.parent
        return None

    def iter_subtree(self) -> Iterator[Section]:
        """Yield this section and all descendants in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def is_ancestor_of(self, other: Section) -> bool:
        node = other.parent
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def to_lines(self) -> list[str]:
        lines: list[str] = []
        for node in self.iter_subtree():
            if node.is_document_root:
                lines.extend(node.body)
                continue
            lines.append(format_heading(node.level, node.heading))
            lines.extend(format_property_drawer(node.properties))
            lines.extend(node.body)
        return lines


def _build_tree(lines: list[str], root: Section) -> Section:
    stack: list[Section] = [root]
    current = root
    idx = 0
    while idx < len(lines):
        line = lines[idx]
        heading = match_heading(line)
        if heading is None:
            current.body.append(line)
            idx += 1
            continue
        level, text = heading
        while stack[-1].level >= level:
            stack.pop()
        parent = stack[-1]
        section = Section(level=level, heading=text, parent=parent)
        parent.children.append(section)
        stack.append(section)
        current = section
        idx += 1
        if idx < len(lines) and is_drawer_start(lines[idx]):
            section.properties, idx = read_property_drawer(lines, idx)
    return root


def _split_lines(text: str) -> list[str]:
    if not text:
        return []
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class OutlineDocument:
    """
    An org-style outline held in memory.

    The virtual `root` section (level 0) owns the preamble as its body and the
    top-level headings as its children. Mutations should go through the
    document methods so that `modified` stays accurate.
    """

    def __init__(self, root: Section | None = None, *, path: Path | None = None) -> None:
        self.root = root if root is not None else Section(level=0, heading="")
        self.path = path
        self.modified = False

    @classmethod
    def parse(cls, text: str, *, path: Path | None = None) -> OutlineDocument:
        root = _build_tree(_split_lines(text), Section(level=0, heading=""))
        return cls(root, path=path)

    @classmethod
    def load(cls, path: Path) -> OutlineDocument:
        path = Path(path)
        if not path.is_file():
            logger.info("Notes file %s does not exist yet; starting empty", path)
            return cls(path=path)
        return cls.parse(read_text_auto(path), path=path)

    def to_text(self) -> str:
        lines = self.root.to_lines()
        return "\n".join(lines) + "\n" if lines else ""

    def save(self, path: Path | None = None) -> Path:
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError("No path to save the outline to.")
        atomic_write_text(target, self.to_text())
        self.path = target
        self.modified = False
        logger.info("Saved notes to %s", target)
        return target

    @property
    def preamble(self) -> list[str]:
        return self.root.body

    def keyword(self, name: str) -> str | None:
        """Return the value of a `#+NAME:` file keyword from the preamble."""
        wanted = name.lower()
        for line in self.root.body:
            found = match_keyword(line)
            if found and found[0].lower() == wanted:
                return found[1]
        return None

    def sections(self, within: Section | None = None) -> list[Section]:
        """Sections in document order, limited to `within`'s subtree if given."""
        anchor = within if within is not None else self.root
        return [node for node in anchor.iter_subtree() if not node.is_document_root]

    def find_forward(
        self,
        predicate: SectionPredicate,
        *,
        within: Section | None = None,
        after: Section | None = None,
        skip_subtree: bool = False,
    ) -> Section | None:
        """
        First section matching `predicate`, scanning forward.

        Starts at the beginning of `within` or, with `after`, right behind it
        (behind its whole subtree when `skip_subtree` is set).
        """
        ordered = self.sections(within)
        start = 0
        if after is not None:
            try:
                start = ordered.index(after) + 1
            except ValueError:
                start = 0
            if skip_subtree:
                while start < len(ordered) and after.is_ancestor_of(ordered[start]):
                    start += 1
        for node in ordered[start:]:
            if predicate(node):
                return node
        return None

    def find_backward(
        self,
        predicate: SectionPredicate,
        *,
        before: Section,
        within: Section | None = None,
    ) -> Section | None:
        """Nearest section matching `predicate` strictly before `before`."""
        ordered = self.sections(within)
        try:
            end = ordered.index(before)
        except ValueError:
            return None
        for node in reversed(ordered[:end]):
            if predicate(node):
                return node
        return None

    def find_by_property(self, key: str, value: str, *, within: Section | None = None) -> Section | None:
        return self.find_forward(lambda node: node.properties.get(key) == value, within=within)

    def insert_section(
        self,
        parent: Section,
        heading: str,
        *,
        properties: dict[str, str] | None = None,
        body: list[str] | None = None,
        index: int | None = None,
    ) -> Section:
        """Create a child of `parent` one level below it; appended unless `index` is given."""
        section = Section(
            level=parent.level + 1,
            heading=heading,
            properties=dict(properties or {}),
            body=list(body or []),
            parent=parent,
        )
        if index is None:
            parent.children.append(section)
        else:
            parent.children.insert(index, section)
        self.modified = True
        return section

    def set_property(self, section: Section, key: str, value: str) -> None:
        if section.is_document_root:
            raise ValueError("The document root cannot carry properties.")
        section.properties[key] = value
        self.modified = True

    def append_body_line(self, section: Section, line: str = "") -> None:
        section.body.append(line)
        self.modified = True

    def sort_children(self, parent: Section, key: Callable[[Section], object], *, reverse: bool = False) -> list[Section]:
        """Stable in-place sort of `parent`'s direct children."""
        ordered = sorted(parent.children, key=key, reverse=reverse)
        if any(a is not b for a, b in zip(ordered, parent.children)):
            parent.children[:] = ordered
            self.modified = True
        return ordered

    def replace_subtree(self, section: Section, text: str) -> list[Section]:
        """
        Replace `section` (or, for the root, the whole document) with parsed text.

        The text must start with a heading unless the whole document is being
        replaced. Returns the new top-level sections. Nothing changes when the
        text fails to parse.
        """
        lines = _split_lines(text)
        if section.is_document_root:
            new_root = _build_tree(lines, Section(level=0, heading=""))
            self.root.body[:] = new_root.body
            self.root.children[:] = new_root.children
            for child in self.root.children:
                child.parent = self.root
            self.modified = True
            return list(self.root.children)

        parent = section.parent
        if parent is None:
            raise ValueError("Section is not attached to a document.")
        fragment = _build_tree(lines, Section(level=0, heading=""))
        if any(line.strip() for line in fragment.body):
            raise OutlineSyntaxError("Edited text must start with a heading.", 1)
        if not fragment.children:
            raise OutlineSyntaxError("Edited text contains no heading.", 1)
        shift = section.level - fragment.children[0].level
        for child in fragment.children:
            if child.level + shift <= parent.level:
                raise OutlineSyntaxError("Edited heading would leave its parent section.")
        for node in fragment.iter_subtree():
            if not node.is_document_root:
                node.level += shift
        index = parent.children.index(section)
        for child in fragment.children:
            child.parent = parent
        parent.children[index : index + 1] = fragment.children
        self.modified = True
        return list(fragment.children)


__all__ = [
    "OutlineDocument",
    "OutlineSyntaxError",
    "Section",
    "SectionPredicate",
]
