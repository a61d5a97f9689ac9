from __future__ import annotations

from pathlib import Path

import pytest

from folionote_core.outline import OutlineDocument
from folionote_core.view import NotesView
from folionote_sync.config import NoterConfig
from folionote_sync.scope import MultiDocumentMode, SingleDocumentMode
from folionote_sync.session import Session


class FakeViewer:
    """In-memory stand-in for a PDF viewer."""

    def __init__(self, page_count: int = 10, current: int = 1) -> None:
        self._page_count = page_count
        self._current = current
        self.calls: list[tuple[str, int | None]] = []
        self.closed = False

    def current_page(self) -> int:
        return self._current

    def page_count(self) -> int:
        return self._page_count

    def go_to_page(self, page: int) -> None:
        if page < 1 or page > self._page_count:
            raise ValueError(page)
        self.calls.append(("go_to_page", page))
        self._current = page

    def next_page(self) -> None:
        self.calls.append(("next_page", None))
        if self._current < self._page_count:
            self._current += 1

    def previous_page(self) -> None:
        self.calls.append(("previous_page", None))
        if self._current > 1:
            self._current -= 1

    def close(self) -> None:
        self.closed = True


def make_session(
    text: str = "",
    *,
    document_key: str | None = None,
    viewer: FakeViewer | None = None,
    config: NoterConfig | None = None,
    notes_path: Path | None = None,
    source_path: Path | None = None,
) -> Session:
    config = config or NoterConfig()
    document = OutlineDocument.parse(text, path=notes_path)
    mode = (
        MultiDocumentMode(document_key)
        if document_key
        else SingleDocumentMode(page_property=config.page_property)
    )
    return Session(
        document=document,
        mode=mode,
        viewer=viewer or FakeViewer(),
        view=NotesView(document, narrowing=not config.disable_narrowing),
        config=config,
        notes_path=notes_path,
        source_path=source_path,
    )


@pytest.fixture
def fake_viewer() -> FakeViewer:
    return FakeViewer(page_count=10, current=1)


SINGLE_NOTES = """#+TITLE: Reading notes
* Notes for page 3
:PROPERTIES:
:page: 3
:END:
third page

* Notes for page 5
:PROPERTIES:
:page: 5
:END:
fifth page
** Detail
more on five

* Notes for page 9
:PROPERTIES:
:page: 9
:END:
ninth page
"""


MULTI_NOTES = """#+TITLE: Library
* Smith 2020
:PROPERTIES:
:CUSTOM_ID: A
:END:
** Notes for page 2
:PROPERTIES:
:A-page: 2
:END:
smith two
* Jones 2021
:PROPERTIES:
:CUSTOM_ID: B
:END:
** Notes for page 4
:PROPERTIES:
:B-page: 4
:END:
jones four
"""
