from __future__ import annotations

import threading
from collections import OrderedDict
from typing import TYPE_CHECKING

from PySide6 import QtGui

from folionote_core.pymupdf_compat import fitz, open_pdf

from .constants import RENDER_CACHE_PAGES

if TYPE_CHECKING:
    import fitz as fitz_typing  # type: ignore[import-not-found]


class PdfRenderer:
    """Renders 0-based PDF pages to QImages, keeping the last few in memory."""

    def __init__(self, dpi: int = 130, cache_size: int = RENDER_CACHE_PAGES) -> None:
        self._dpi = dpi
        self._doc: fitz_typing.Document | None = None
        self._cache: OrderedDict[int, QtGui.QImage] = OrderedDict()
        self._cache_size = max(1, cache_size)
        self._lock = threading.Lock()

    def open(self, pdf_path: str) -> None:
        with self._lock:
            self._doc = open_pdf(pdf_path)
            self._cache.clear()

    def render_page(self, page_index: int) -> QtGui.QImage:
        with self._lock:
            cached = self._cache.get(page_index)
            if cached is not None:
                self._cache.move_to_end(page_index)
                return cached
            if not self._doc:
                raise RuntimeError("PDF not loaded.")

            page = self._doc.load_page(page_index)
            scale = self._dpi / 72.0
            pix = page.get_pixmap(
                matrix=fitz.Matrix(scale, scale),
                colorspace=fitz.csRGB,
                alpha=False,
            )
            image = QtGui.QImage(
                pix.samples,
                pix.width,
                pix.height,
                pix.stride,
                QtGui.QImage.Format_RGB888,
            ).copy()
            self._cache[page_index] = image
            while len(self._cache) > self._cache_size:
                self._cache.popitem(last=False)
            return image

    def close(self) -> None:
        with self._lock:
            if self._doc:
                try:
                    self._doc.close()
                finally:
                    self._doc = None
            self._cache.clear()
