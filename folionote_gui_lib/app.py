from __future__ import annotations

import logging
import sys
from pathlib import Path

from PySide6 import QtWidgets

from folionote_sync.config import NoterConfig
from folionote_sync.errors import ExternalResourceMissing, FolionoteError
from folionote_sync.session import Session, start_session

from .dialogs import prompt_for_source_path, show_error
from .main_window import MainWindow

logger = logging.getLogger(__name__)


def _open_session(
    notes_path: Path,
    *,
    document_key: str | None,
    source_path: Path | None,
    config: NoterConfig | None,
) -> Session | None:
    while True:
        try:
            return start_session(
                notes_path,
                document_key=document_key,
                source_path=source_path,
                config=config,
            )
        except ExternalResourceMissing as exc:
            logger.warning("%s", exc)
            source_path = prompt_for_source_path(None, notes_path, exc.path)
            if source_path is None:
                return None
        except FolionoteError as exc:
            logger.warning("%s", exc)
            show_error(None, "Cannot open notes", str(exc))
            return None


def main(
    notes_path: str | Path,
    *,
    document_key: str | None = None,
    source_path: str | Path | None = None,
    config: NoterConfig | None = None,
) -> int:
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv)
    session = _open_session(
        Path(notes_path),
        document_key=document_key,
        source_path=Path(source_path) if source_path else None,
        config=config,
    )
    if session is None:
        return 1
    window = MainWindow(session)
    window.resize(1200, 800)
    window.showMaximized()
    return app.exec()
