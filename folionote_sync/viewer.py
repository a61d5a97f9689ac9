from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Protocol

from folionote_core.pymupdf_compat import open_pdf

from .errors import ExternalResourceMissing


logger = logging.getLogger(__name__)

PageListener = Callable[[int], None]


class PageViewer(Protocol):
    """What the note engine needs from a paginated document viewer. Pages are 1-based."""

    def current_page(self) -> int: ...

    def page_count(self) -> int: ...

    def go_to_page(self, page: int) -> None: ...

    def next_page(self) -> None: ...

    def previous_page(self) -> None: ...


class PdfPageCursor:
    """Page position within a PDF opened with PyMuPDF."""

    def __init__(self, pdf_path: str | Path) -> None:
        self._path = Path(pdf_path)
        try:
            self._doc = open_pdf(self._path)
        except FileNotFoundError as exc:
            raise ExternalResourceMissing(self._path) from exc
        self._page_count = self._doc.page_count
        self._current = 1 if self._page_count else 0
        self._listeners: list[PageListener] = []
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def current_page(self) -> int:
        with self._lock:
            return self._current

    def page_count(self) -> int:
        return self._page_count

    def add_listener(self, listener: PageListener) -> None:
        self._listeners.append(listener)

    def go_to_page(self, page: int) -> None:
        if page < 1 or page > self._page_count:
            raise ValueError(f"Page {page} outside 1..{self._page_count}")
        with self._lock:
            if page == self._current:
                return
            self._current = page
        for listener in list(self._listeners):
            try:
                listener(page)
            except Exception as exc:  # pragma: no cover - listener failures are not ours
                logger.warning("Page listener failed for page %d: %s", page, exc)

    def next_page(self) -> None:
        if self._current < self._page_count:
            self.go_to_page(self._current + 1)

    def previous_page(self) -> None:
        if self._current > 1:
            self.go_to_page(self._current - 1)

    def close(self) -> None:
        with self._lock:
            if self._doc is not None:
                try:
                    self._doc.close()
                finally:
                    self._doc = None
        self._listeners.clear()


__all__ = ["PageListener", "PageViewer", "PdfPageCursor"]
