from __future__ import annotations

from pathlib import Path

from PySide6 import QtWidgets


def prompt_for_source_path(
    parent: QtWidgets.QWidget | None,
    notes_path: Path,
    missing: Path | None,
) -> Path | None:
    """Ask the user to pick the source PDF; None when cancelled."""
    if missing is not None:
        detail = f"Could not find the document for these notes:\n{missing}"
    else:
        detail = "These notes do not name a source document."
    answer = QtWidgets.QMessageBox.question(
        parent,
        "Source document missing",
        f"{detail}\n\nChoose the PDF manually?",
    )
    if answer != QtWidgets.QMessageBox.Yes:
        return None
    start_dir = missing.parent if missing is not None and missing.parent.is_dir() else notes_path.parent
    selected, _ = QtWidgets.QFileDialog.getOpenFileName(
        parent,
        "Select source document",
        str(start_dir),
        "PDF files (*.pdf);;All files (*)",
    )
    return Path(selected) if selected else None


def show_error(parent: QtWidgets.QWidget | None, title: str, message: str) -> None:
    QtWidgets.QMessageBox.critical(parent, title, message)


__all__ = ["prompt_for_source_path", "show_error"]
