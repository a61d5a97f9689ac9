from __future__ import annotations

from PySide6 import QtCore, QtGui, QtWidgets

from .constants import NOTES_FONT_FAMILY


class PdfPageView(QtWidgets.QGraphicsView):
    """Shows one rendered page; page keys are turned into signals."""

    next_page_requested = QtCore.Signal()
    previous_page_requested = QtCore.Signal()
    add_note_requested = QtCore.Signal()
    quit_requested = QtCore.Signal()

    def __init__(self) -> None:
        super().__init__()
        self.setDragMode(QtWidgets.QGraphicsView.ScrollHandDrag)
        self.setRenderHint(QtGui.QPainter.SmoothPixmapTransform)
        self.setFocusPolicy(QtCore.Qt.StrongFocus)
        self._scene = QtWidgets.QGraphicsScene(self)
        self.setScene(self._scene)
        self._pixmap_item: QtWidgets.QGraphicsPixmapItem | None = None

    def show_image(self, image: QtGui.QImage) -> None:
        pixmap = QtGui.QPixmap.fromImage(image)
        if self._pixmap_item is None:
            self._pixmap_item = self._scene.addPixmap(pixmap)
        else:
            self._pixmap_item.setPixmap(pixmap)
        self._scene.setSceneRect(QtCore.QRectF(pixmap.rect()))
        self.verticalScrollBar().setValue(self.verticalScrollBar().minimum())

    def clear_page(self) -> None:
        self._scene.clear()
        self._pixmap_item = None

    def keyPressEvent(self, event: QtGui.QKeyEvent) -> None:  # noqa: N802
        if event.modifiers() & ~QtCore.Qt.KeypadModifier:
            super().keyPressEvent(event)
            return
        key = event.key()
        if key in (QtCore.Qt.Key_N, QtCore.Qt.Key_PageDown, QtCore.Qt.Key_Space):
            self.next_page_requested.emit()
        elif key in (QtCore.Qt.Key_P, QtCore.Qt.Key_PageUp, QtCore.Qt.Key_Backspace):
            self.previous_page_requested.emit()
        elif key == QtCore.Qt.Key_I:
            self.add_note_requested.emit()
        elif key == QtCore.Qt.Key_Q:
            self.quit_requested.emit()
        else:
            super().keyPressEvent(event)
            return
        event.accept()


class NotesEditor(QtWidgets.QPlainTextEdit):
    """Plain-text editor for the visible part of the notes outline."""

    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        font = QtGui.QFont(NOTES_FONT_FAMILY)
        font.setStyleHint(QtGui.QFont.Monospace)
        self.setFont(font)
        self.setLineWrapMode(QtWidgets.QPlainTextEdit.WidgetWidth)
        self.setTabChangesFocus(False)

    def set_outline_text(self, text: str, cursor_line: int | None = None) -> None:
        self.setPlainText(text)
        self.document().setModified(False)
        cursor = self.textCursor()
        if cursor_line is None:
            cursor.movePosition(QtGui.QTextCursor.End)
        else:
            block = self.document().findBlockByLineNumber(cursor_line)
            cursor.setPosition(block.position())
        self.setTextCursor(cursor)
        self.ensureCursorVisible()

    def is_modified(self) -> bool:
        return self.document().isModified()
