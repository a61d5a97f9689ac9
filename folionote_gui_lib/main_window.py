from __future__ import annotations

import logging
from typing import Callable

from PySide6 import QtCore, QtGui, QtWidgets

from folionote_sync.models import Direction, Focus, SplitOrientation
from folionote_sync.navigator import Navigator
from folionote_sync.session import Session, end_session

from .constants import (
    DEFAULT_SPLITTER_RATIO_LEFT,
    DEFAULT_SPLITTER_RATIO_RIGHT,
    MAX_RENDER_DPI,
    MIN_RENDER_DPI,
    SHORTCUT_ADD_NOTE,
    SHORTCUT_SAVE,
    SHORTCUT_SYNC_CURRENT,
    SHORTCUT_SYNC_NEXT,
    SHORTCUT_SYNC_PREVIOUS,
    STATUS_MESSAGE_TIMEOUT_MS,
    _SPLITTER_SIZE_BASIS,
)
from .dialogs import show_error
from .renderer import PdfRenderer
from .widgets import NotesEditor, PdfPageView

logger = logging.getLogger(__name__)


class MainWindow(QtWidgets.QMainWindow):
    """Source document and its notes side by side, driven by a Navigator."""

    def __init__(self, session: Session) -> None:
        super().__init__()
        self._session = session
        self._navigator = Navigator(session, notify=self._show_message)
        self._session_closed = False
        title = session.notes_path.name if session.notes_path else "Folionote"
        self.setWindowTitle(f"Folionote - {title}")

        dpi = max(MIN_RENDER_DPI, min(MAX_RENDER_DPI, session.config.render_dpi))
        self._renderer = PdfRenderer(dpi=dpi)
        if session.source_path is not None:
            self._renderer.open(str(session.source_path))

        self._page_view = PdfPageView()
        self._notes_editor = NotesEditor()
        self._page_label = QtWidgets.QLabel("Page: -/-")
        self.statusBar().addPermanentWidget(self._page_label)

        orientation = (
            QtCore.Qt.Vertical
            if session.config.split_orientation is SplitOrientation.VERTICAL
            else QtCore.Qt.Horizontal
        )
        splitter = QtWidgets.QSplitter(orientation)
        splitter.addWidget(self._page_view)
        splitter.addWidget(self._notes_editor)
        total = DEFAULT_SPLITTER_RATIO_LEFT + DEFAULT_SPLITTER_RATIO_RIGHT
        splitter.setSizes(
            [
                _SPLITTER_SIZE_BASIS * DEFAULT_SPLITTER_RATIO_LEFT // total,
                _SPLITTER_SIZE_BASIS * DEFAULT_SPLITTER_RATIO_RIGHT // total,
            ]
        )
        self.setCentralWidget(splitter)

        self._page_view.next_page_requested.connect(lambda: self._turn_page(Direction.FORWARD))
        self._page_view.previous_page_requested.connect(lambda: self._turn_page(Direction.BACKWARD))
        self._page_view.add_note_requested.connect(self._add_or_open_note)
        self._page_view.quit_requested.connect(self.close)
        self._bind_shortcut(SHORTCUT_ADD_NOTE, self._add_or_open_note)
        self._bind_shortcut(SHORTCUT_SYNC_CURRENT, self._sync_page_from_note)
        self._bind_shortcut(SHORTCUT_SYNC_PREVIOUS, lambda: self._sync_adjacent(Direction.BACKWARD))
        self._bind_shortcut(SHORTCUT_SYNC_NEXT, lambda: self._sync_adjacent(Direction.FORWARD))
        self._bind_shortcut(SHORTCUT_SAVE, self._save_notes)

        add_listener = getattr(session.viewer, "add_listener", None)
        if callable(add_listener):
            add_listener(lambda _page: self._render_current_page())

        self._navigator.sync_current_page()
        self._render_current_page()
        self._refresh_notes()
        self._apply_focus()

    def _bind_shortcut(self, sequence: str, handler: Callable[[], None]) -> None:
        shortcut = QtGui.QShortcut(QtGui.QKeySequence(sequence), self)
        shortcut.setContext(QtCore.Qt.WindowShortcut)
        shortcut.activated.connect(handler)

    def _show_message(self, message: str) -> None:
        self.statusBar().showMessage(message, STATUS_MESSAGE_TIMEOUT_MS)

    def _render_current_page(self) -> None:
        viewer = self._session.viewer
        page = viewer.current_page()
        count = viewer.page_count()
        self._page_label.setText(f"Page: {page}/{count}" if count else "Page: -/-")
        if page < 1:
            self._page_view.clear_page()
            return
        try:
            image = self._renderer.render_page(page - 1)
        except Exception as exc:  # pragma: no cover - GUI runtime path
            logger.warning("Failed to render page %d: %s", page, exc)
            self._show_message(f"Failed to render page {page}")
            return
        self._page_view.show_image(image)

    def _commit_notes_edit(self) -> bool:
        if not self._notes_editor.is_modified():
            return True
        if self._session.view.apply_edit(self._notes_editor.toPlainText()):
            self._notes_editor.document().setModified(False)
            return True
        self._show_message("Notes edit does not parse; fix the outline before navigating")
        return False

    def _refresh_notes(self) -> None:
        view = self._session.view
        focus = view.current_section()
        cursor_line = view.line_of(focus) if focus is not None and view.narrowed is None else None
        self._notes_editor.set_outline_text(view.visible_text(), cursor_line)

    def _apply_focus(self) -> None:
        if self._session.focus is Focus.NOTES:
            self._notes_editor.setFocus()
        else:
            self._page_view.setFocus()

    def _focus_from_cursor(self) -> None:
        if not self._notes_editor.hasFocus():
            return
        line = self._notes_editor.textCursor().blockNumber()
        section = self._session.view.section_at_line(line)
        if section is not None:
            self._session.view.focus = section

    def _run(self, operation: Callable[[], object]) -> None:
        if not self._commit_notes_edit():
            return
        self._focus_from_cursor()
        operation()
        self._refresh_notes()
        self._apply_focus()

    def _turn_page(self, direction: Direction) -> None:
        self._run(lambda: self._navigator.go_to_page(direction))

    def _add_or_open_note(self) -> None:
        self._run(self._navigator.add_or_open_note)

    def _sync_page_from_note(self) -> None:
        self._run(self._navigator.sync_page_from_current_note)

    def _sync_adjacent(self, direction: Direction) -> None:
        if direction is Direction.BACKWARD:
            self._run(self._navigator.sync_to_previous_note)
        else:
            self._run(self._navigator.sync_to_next_note)

    def _save_notes(self) -> None:
        if not self._commit_notes_edit():
            return
        try:
            self._session.document.save(self._session.notes_path)
        except Exception as exc:
            logger.warning("Failed to save notes: %s", exc)
            show_error(self, "Save failed", str(exc))
            return
        self._show_message("Notes saved")

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:  # noqa: N802
        if not self._session_closed:
            if not self._commit_notes_edit():
                answer = QtWidgets.QMessageBox.question(
                    self,
                    "Discard edit?",
                    "The current notes edit does not parse. Close and discard it?",
                )
                if answer != QtWidgets.QMessageBox.Yes:
                    event.ignore()
                    return
            try:
                end_session(self._session)
            except Exception as exc:
                logger.exception("Failed to close the notes session")
                show_error(self, "Closing failed", str(exc))
            finally:
                self._session_closed = True
                self._renderer.close()
        super().closeEvent(event)


__all__ = ["MainWindow"]
