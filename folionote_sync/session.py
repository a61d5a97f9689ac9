from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from folionote_core.outline import OutlineDocument
from folionote_core.paths import resolve_against
from folionote_core.view import NotesView

from .config import NoterConfig, load_config
from .constants import DEFAULT_SOURCE_SUFFIX, SOURCE_KEYWORD, SOURCE_PROPERTY
from .errors import ExternalResourceMissing
from .models import Focus, Scope
from .scope import Mode, MultiDocumentMode, SingleDocumentMode
from .sorting import sort_notes
from .viewer import PageViewer, PdfPageCursor


logger = logging.getLogger(__name__)

ViewerFactory = Callable[[Path], PageViewer]


@dataclass(eq=False)
class Session:
    """Everything one notes/source pairing needs; operations on it hold `lock`."""

    document: OutlineDocument
    mode: Mode
    viewer: PageViewer
    view: NotesView
    config: NoterConfig = field(default_factory=NoterConfig)
    notes_path: Path | None = None
    source_path: Path | None = None
    focus: Focus = Focus.VIEWER
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    @property
    def page_property(self) -> str:
        return self.mode.page_property

    def resolve_scope(self) -> Scope:
        return self.mode.resolve_scope(self.document)


def determine_mode(document_key: str | None, config: NoterConfig) -> Mode:
    if document_key:
        return MultiDocumentMode(document_key=document_key)
    return SingleDocumentMode(page_property=config.page_property)


def source_path_candidates(
    document: OutlineDocument,
    mode: Mode,
    notes_path: Path | None,
) -> list[Path]:
    """Places the source document may live at, most specific first."""
    base_dir = notes_path.parent if notes_path is not None else None
    candidates: list[Path] = []
    if isinstance(mode, MultiDocumentMode):
        anchor = mode.resolve_scope(document).anchor
        declared = anchor.get_property(SOURCE_PROPERTY)
        if declared:
            candidates.append(resolve_against(declared, base_dir))
        if base_dir is not None:
            candidates.append((base_dir / f"{mode.document_key}{DEFAULT_SOURCE_SUFFIX}").resolve())
    else:
        declared = document.keyword(SOURCE_KEYWORD)
        if declared:
            candidates.append(resolve_against(declared, base_dir))
        if notes_path is not None:
            candidates.append(notes_path.with_suffix(DEFAULT_SOURCE_SUFFIX).resolve())
    return candidates


def resolve_source_path(
    document: OutlineDocument,
    mode: Mode,
    *,
    notes_path: Path | None = None,
    explicit: str | Path | None = None,
) -> Path:
    if explicit is not None:
        path = Path(explicit).expanduser().resolve()
        if not path.is_file():
            raise ExternalResourceMissing(path)
        return path
    candidates = source_path_candidates(document, mode, notes_path)
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    if candidates:
        raise ExternalResourceMissing(candidates[0])
    raise ExternalResourceMissing(
        None,
        f"No #+{SOURCE_KEYWORD} keyword in the notes and no source document given",
    )


def start_session(
    notes_path: str | Path,
    *,
    document_key: str | None = None,
    source_path: str | Path | None = None,
    config: NoterConfig | None = None,
    viewer_factory: ViewerFactory = PdfPageCursor,
) -> Session:
    """
    Load the notes, locate and open the source document.

    Raises ExternalResourceMissing when the source document cannot be found
    and ScopeNotFound when a multi-document key has no Root-Section.
    """
    config = config or load_config()
    notes = Path(notes_path).expanduser().resolve()
    document = OutlineDocument.load(notes)
    mode = determine_mode(document_key, config)
    resolved_source = resolve_source_path(document, mode, notes_path=notes, explicit=source_path)
    viewer = viewer_factory(resolved_source)
    logger.info("Started session for %s with source %s", notes, resolved_source)
    return Session(
        document=document,
        mode=mode,
        viewer=viewer,
        view=NotesView(document, narrowing=not config.disable_narrowing),
        config=config,
        notes_path=notes,
        source_path=resolved_source,
    )


def end_session(session: Session) -> None:
    """Sort the notes, save them if they changed, widen the view and release the viewer."""
    with session.lock:
        session.view.widen()
        try:
            sort_notes(session.resolve_scope(), session.page_property, session.config.sort_order)
        except Exception:
            logger.exception("Failed to sort notes for %s; keeping current order", session.notes_path)
        try:
            if session.document.modified and session.notes_path is not None:
                session.document.save(session.notes_path)
        finally:
            close = getattr(session.viewer, "close", None)
            if callable(close):
                close()
        logger.info("Ended session for %s", session.notes_path)


__all__ = [
    "Session",
    "ViewerFactory",
    "determine_mode",
    "end_session",
    "resolve_source_path",
    "source_path_candidates",
    "start_session",
]
