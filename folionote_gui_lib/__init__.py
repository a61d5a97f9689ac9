from __future__ import annotations

from .app import main
from .main_window import MainWindow
from .renderer import PdfRenderer
from .widgets import NotesEditor, PdfPageView

__all__ = [
    "MainWindow",
    "NotesEditor",
    "PdfPageView",
    "PdfRenderer",
    "main",
]
