"""Tests for folionote_core.outline and folionote_core.org_syntax."""
from __future__ import annotations

import pytest

from conftest import MULTI_NOTES, SINGLE_NOTES
from folionote_core.org_syntax import (
    OutlineSyntaxError,
    format_link,
    match_heading,
    strip_links,
)
from folionote_core.outline import OutlineDocument


class TestHeadingSyntax:
    def test_heading_levels(self) -> None:
        assert match_heading("* Top") == (1, "Top")
        assert match_heading("*** Deep heading  ") == (3, "Deep heading")

    def test_bare_stars_are_empty_heading(self) -> None:
        assert match_heading("**") == (2, "")

    def test_emphasis_is_not_heading(self) -> None:
        assert match_heading("*bold* text") is None
        assert match_heading(" * indented list") is None

    def test_links(self) -> None:
        assert format_link("paper.pdf::7", "7") == "[[paper.pdf::7][7]]"
        assert strip_links("Notes for page [[paper.pdf::7][7]]") == "Notes for page 7"
        assert strip_links("see [[https://example.org]]") == "see https://example.org"


class TestParse:
    def test_round_trip(self) -> None:
        document = OutlineDocument.parse(SINGLE_NOTES)
        assert document.to_text() == SINGLE_NOTES

    def test_multi_round_trip(self) -> None:
        assert OutlineDocument.parse(MULTI_NOTES).to_text() == MULTI_NOTES

    def test_tree_shape(self) -> None:
        document = OutlineDocument.parse(SINGLE_NOTES)
        top = document.root.children
        assert [s.heading for s in top] == [
            "Notes for page 3",
            "Notes for page 5",
            "Notes for page 9",
        ]
        assert [c.heading for c in top[1].children] == ["Detail"]
        assert top[1].children[0].parent is top[1]
        assert top[0].properties == {"page": "3"}
        assert top[0].body == ["third page", ""]

    def test_preamble_keywords(self) -> None:
        document = OutlineDocument.parse("#+TITLE: Notes\n#+folionote_source:  paper.pdf \n* A\n")
        assert document.keyword("FOLIONOTE_SOURCE") == "paper.pdf"
        assert document.keyword("title") == "Notes"
        assert document.keyword("missing") is None

    def test_indented_drawer_and_empty_value(self) -> None:
        text = "* A\n  :PROPERTIES:\n  :page:   12  \n  :flag:\n  :END:\nbody\n"
        section = OutlineDocument.parse(text).root.children[0]
        assert section.properties == {"page": "12", "flag": ""}
        assert section.body == ["body"]

    def test_drawer_must_follow_heading(self) -> None:
        text = "* A\n\n:PROPERTIES:\n:page: 1\n:END:\n"
        section = OutlineDocument.parse(text).root.children[0]
        assert section.properties == {}
        assert ":PROPERTIES:" in section.body

    def test_unterminated_drawer(self) -> None:
        with pytest.raises(OutlineSyntaxError) as excinfo:
            OutlineDocument.parse("* A\n:PROPERTIES:\n:page: 1\n")
        assert excinfo.value.line_number == 2

    def test_invalid_property_line(self) -> None:
        with pytest.raises(OutlineSyntaxError):
            OutlineDocument.parse("* A\n:PROPERTIES:\nnot a property\n:END:\n")

    def test_skipped_levels_attach_to_nearest_parent(self) -> None:
        document = OutlineDocument.parse("* A\n*** C\n** B\n")
        a = document.root.children[0]
        assert [c.heading for c in a.children] == ["C", "B"]

    def test_empty_text(self) -> None:
        document = OutlineDocument.parse("")
        assert document.sections() == []
        assert document.to_text() == ""


class TestSearch:
    def test_sections_in_document_order(self) -> None:
        document = OutlineDocument.parse(SINGLE_NOTES)
        assert [s.heading for s in document.sections()] == [
            "Notes for page 3",
            "Notes for page 5",
            "Detail",
            "Notes for page 9",
        ]

    def test_find_forward_after_skips_subtree(self) -> None:
        document = OutlineDocument.parse(SINGLE_NOTES)
        five = document.root.children[1]
        found = document.find_forward(lambda s: True, after=five, skip_subtree=True)
        assert found is document.root.children[2]
        found = document.find_forward(lambda s: True, after=five)
        assert found is five.children[0]

    def test_find_backward(self) -> None:
        document = OutlineDocument.parse(SINGLE_NOTES)
        nine = document.root.children[2]
        found = document.find_backward(lambda s: "page" in s.properties, before=nine)
        assert found is document.root.children[1]
        first = document.root.children[0]
        assert document.find_backward(lambda s: True, before=first) is None

    def test_find_within(self) -> None:
        document = OutlineDocument.parse(MULTI_NOTES)
        jones = document.root.children[1]
        assert document.find_by_property("A-page", "2", within=jones) is None
        assert document.find_by_property("B-page", "4", within=jones) is jones.children[0]

    def test_inherited_property_stops_at_anchor(self) -> None:
        document = OutlineDocument.parse(SINGLE_NOTES)
        detail = document.root.children[1].children[0]
        assert detail.get_property("page") is None
        assert detail.get_property_inherited("page") == "5"
        assert detail.get_property_inherited("page", stop=detail) is None


class TestMutation:
    def test_insert_section_sets_level_and_modified(self) -> None:
        document = OutlineDocument.parse(MULTI_NOTES)
        smith = document.root.children[0]
        section = document.insert_section(smith, "New", properties={"A-page": "8"})
        assert document.modified
        assert section.level == 2
        assert smith.children[-1] is section
        assert "** New\n:PROPERTIES:\n:A-page: 8\n:END:\n* Jones 2021" in document.to_text()

    def test_sort_children_without_change_keeps_unmodified(self) -> None:
        document = OutlineDocument.parse(SINGLE_NOTES)
        document.sort_children(document.root, key=lambda s: int(s.properties["page"]))
        assert not document.modified

    def test_set_property_on_root_rejected(self) -> None:
        document = OutlineDocument.parse(SINGLE_NOTES)
        with pytest.raises(ValueError):
            document.set_property(document.root, "page", "1")

    def test_replace_subtree_shifts_levels(self) -> None:
        document = OutlineDocument.parse(MULTI_NOTES)
        smith = document.root.children[0]
        note = smith.children[0]
        replaced = document.replace_subtree(note, "* Edited\n:PROPERTIES:\n:A-page: 2\n:END:\nnew body\n")
        assert len(replaced) == 1
        assert replaced[0].level == 2
        assert replaced[0].parent is smith
        assert smith.children == replaced
        assert replaced[0].body == ["new body"]

    def test_replace_subtree_requires_heading(self) -> None:
        document = OutlineDocument.parse(SINGLE_NOTES)
        before = document.to_text()
        with pytest.raises(OutlineSyntaxError):
            document.replace_subtree(document.root.children[0], "just text\n")
        assert document.to_text() == before

    def test_replace_whole_document(self) -> None:
        document = OutlineDocument.parse(SINGLE_NOTES)
        document.replace_subtree(document.root, "#+TITLE: x\n* Only\n")
        assert [s.heading for s in document.sections()] == ["Only"]
        assert document.root.children[0].parent is document.root


class TestFiles:
    def test_load_missing_file_is_empty(self, tmp_path) -> None:
        document = OutlineDocument.load(tmp_path / "notes.org")
        assert document.sections() == []
        assert document.path == tmp_path / "notes.org"

    def test_save_and_load(self, tmp_path) -> None:
        path = tmp_path / "notes.org"
        document = OutlineDocument.parse(SINGLE_NOTES)
        document.insert_section(document.root, "Extra")
        document.save(path)
        assert not document.modified
        assert not (tmp_path / "notes.org.tmp").exists()
        loaded = OutlineDocument.load(path)
        assert loaded.to_text() == document.to_text()

    def test_load_crlf_and_bom(self, tmp_path) -> None:
        path = tmp_path / "notes.org"
        path.write_bytes("\ufeff* A\r\n:PROPERTIES:\r\n:page: 1\r\n:END:\r\n".encode("utf-8"))
        document = OutlineDocument.load(path)
        assert document.root.children[0].properties == {"page": "1"}
        assert document.preamble == []

    def test_save_without_path(self) -> None:
        with pytest.raises(ValueError):
            OutlineDocument.parse("* A\n").save()
