from __future__ import annotations


DEFAULT_PAGE_PROPERTY = "page"
MULTI_PAGE_PROPERTY_SUFFIX = "-page"

# Root-Sections in multi-document notes are keyed by this property.
DOCUMENT_KEY_PROPERTY = "CUSTOM_ID"

SOURCE_KEYWORD = "FOLIONOTE_SOURCE"
SOURCE_PROPERTY = "FOLIONOTE_SOURCE"
DEFAULT_SOURCE_SUFFIX = ".pdf"

NOTE_HEADING_TEMPLATE = "Notes for page {page}"
NEW_NOTE_BODY: tuple[str, ...] = ("", "")

CONFIG_FILENAME = "config.json"
DEFAULT_RENDER_DPI = 130

MESSAGE_FIRST_NOTE = "First note"
MESSAGE_NO_NEXT_NOTES = "No next notes"
MESSAGE_FIRST_PAGE = "First page"
MESSAGE_LAST_PAGE = "Last page"
