from __future__ import annotations

from conftest import MULTI_NOTES, SINGLE_NOTES
from folionote_core.outline import OutlineDocument
from folionote_core.view import NotesView
from folionote_sync.config import NoterConfig
from folionote_sync.factory import create_section, note_heading
from folionote_sync.locator import find_section_by_page
from folionote_sync.models import SortOrder
from folionote_sync.scope import MultiDocumentMode, SingleDocumentMode, resolve_scope
from folionote_sync.sorting import sort_notes


def _pages(document: OutlineDocument, key: str = "page") -> list[str | None]:
    return [section.get_property(key) for section in document.root.children]


class TestNoteHeading:
    def test_plain(self) -> None:
        assert note_heading(7, config=NoterConfig()) == "Notes for page 7"

    def test_link_without_source_is_plain(self) -> None:
        config = NoterConfig(use_external_link=True)
        assert note_heading(7, config=config) == "Notes for page 7"

    def test_relative_link(self, tmp_path) -> None:
        config = NoterConfig(use_external_link=True, insert_relative_name=True)
        heading = note_heading(
            3,
            config=config,
            source_path=tmp_path / "pdfs" / "paper.pdf",
            notes_path=tmp_path / "notes" / "paper.org",
        )
        assert heading == "Notes for page [[../pdfs/paper.pdf::3][3]]"

    def test_absolute_link(self, tmp_path) -> None:
        config = NoterConfig(use_external_link=True, insert_relative_name=False)
        source = tmp_path / "paper.pdf"
        heading = note_heading(3, config=config, source_path=source, notes_path=tmp_path / "n.org")
        assert heading == f"Notes for page [[{source.resolve().as_posix()}::3][3]]"


class TestCreateSection:
    def test_created_section_is_found_again(self) -> None:
        document = OutlineDocument.parse(SINGLE_NOTES)
        view = NotesView(document)
        scope = resolve_scope(SingleDocumentMode(), document)

        section = create_section(scope, "page", 4, view=view)

        assert document.root.children[-1] is section
        assert section.body == ["", ""]
        assert view.narrowed is section
        assert view.is_revealed(section)
        assert view.is_drawer_folded(section)
        assert find_section_by_page(scope, "page", 4) is section

    def test_round_trips_through_text(self) -> None:
        document = OutlineDocument.parse("")
        scope = resolve_scope(SingleDocumentMode(), document)
        create_section(scope, "page", 12)

        text = document.to_text()

        assert text == "* Notes for page 12\n:PROPERTIES:\n:page: 12\n:END:\n\n\n"
        reparsed = OutlineDocument.parse(text)
        assert reparsed.root.children[0].properties == {"page": "12"}

    def test_multi_document_level(self) -> None:
        document = OutlineDocument.parse(MULTI_NOTES)
        scope = resolve_scope(MultiDocumentMode("A"), document)

        section = create_section(scope, "A-page", 6)

        assert section.level == 2
        assert section.parent is document.root.children[0]
        assert "** Notes for page 6\n:PROPERTIES:\n:A-page: 6\n:END:\n\n\n* Jones 2021" in document.to_text()


class TestSortNotes:
    def test_ascending_and_descending(self) -> None:
        text = "".join(f"* N{p}\n:PROPERTIES:\n:page: {p}\n:END:\n" for p in (5, 1, 3))
        document = OutlineDocument.parse(text)
        scope = resolve_scope(SingleDocumentMode(), document)

        sort_notes(scope, "page", SortOrder.ASCENDING)
        assert _pages(document) == ["1", "3", "5"]
        assert document.modified

        sort_notes(scope, "page", SortOrder.DESCENDING)
        assert _pages(document) == ["5", "3", "1"]

    def test_missing_pages_first_ascending_last_descending(self) -> None:
        text = "* B\n:PROPERTIES:\n:page: 2\n:END:\n* Intro\n* A\n:PROPERTIES:\n:page: 1\n:END:\n"
        document = OutlineDocument.parse(text)
        scope = resolve_scope(SingleDocumentMode(), document)

        sort_notes(scope, "page")
        assert [s.heading for s in document.root.children] == ["Intro", "A", "B"]

        sort_notes(scope, "page", SortOrder.DESCENDING)
        assert [s.heading for s in document.root.children] == ["B", "A", "Intro"]

    def test_children_move_with_their_parent(self) -> None:
        document = OutlineDocument.parse(SINGLE_NOTES)
        scope = resolve_scope(SingleDocumentMode(), document)

        sort_notes(scope, "page", SortOrder.DESCENDING)

        five = document.root.children[1]
        assert five.get_property("page") == "5"
        assert [c.heading for c in five.children] == ["Detail"]
        assert document.preamble == ["#+TITLE: Reading notes"]

    def test_sorting_stays_inside_scope(self) -> None:
        document = OutlineDocument.parse(MULTI_NOTES)
        smith = document.root.children[0]
        create_section(resolve_scope(MultiDocumentMode("A"), document), "A-page", 1)

        sort_notes(resolve_scope(MultiDocumentMode("A"), document), "A-page")

        assert [c.get_property("A-page") for c in smith.children] == ["1", "2"]
        assert [s.heading for s in document.root.children] == ["Smith 2020", "Jones 2021"]

    def test_sorted_notes_stay_sorted(self) -> None:
        document = OutlineDocument.parse(SINGLE_NOTES)
        scope = resolve_scope(SingleDocumentMode(), document)
        sort_notes(scope, "page")
        assert not document.modified
