from __future__ import annotations

import logging
from pathlib import Path

from folionote_core.org_syntax import format_link
from folionote_core.outline import Section
from folionote_core.paths import link_target
from folionote_core.view import NotesView

from .config import NoterConfig
from .constants import NEW_NOTE_BODY, NOTE_HEADING_TEMPLATE
from .locator import page_value
from .models import Scope


logger = logging.getLogger(__name__)


def note_heading(
    page: int,
    *,
    config: NoterConfig,
    source_path: Path | None = None,
    notes_path: Path | None = None,
) -> str:
    """
    Heading text for a new page note.

    With `use_external_link`, the page number becomes a `<path>::<page>` link
    to the source document.
    """
    number = page_value(page)
    if not config.use_external_link or source_path is None:
        return NOTE_HEADING_TEMPLATE.format(page=number)
    base_dir = Path(notes_path).parent if notes_path is not None else None
    target = link_target(source_path, base_dir, relative=config.insert_relative_name)
    return NOTE_HEADING_TEMPLATE.format(page=format_link(f"{target}::{number}", number))


def create_section(
    scope: Scope,
    property_key: str,
    page: int,
    *,
    view: NotesView | None = None,
    config: NoterConfig | None = None,
    source_path: Path | None = None,
    notes_path: Path | None = None,
) -> Section:
    """
    Append a note section for `page` as the last child of the scope anchor.

    Does not check for an existing note for the same page; callers look one up first.
    """
    config = config or NoterConfig()
    heading = note_heading(page, config=config, source_path=source_path, notes_path=notes_path)
    section = scope.document.insert_section(
        scope.anchor,
        heading,
        properties={property_key: page_value(page)},
        body=list(NEW_NOTE_BODY),
    )
    logger.info("Created note for page %s under %s", page, scope.anchor.heading or "document root")
    if view is not None:
        view.fold_drawer(section)
        view.narrow_to(section)
        view.reveal(section)
    return section


__all__ = ["create_section", "note_heading"]
