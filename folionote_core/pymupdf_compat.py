from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import fitz  # type: ignore[import-not-found]


def import_pymupdf():
    """
    Import PyMuPDF under its current name, or its legacy `fitz` name.

    The unrelated `fitz` distribution on PyPI shadows the legacy name, so the
    module is checked for PyMuPDF's API before it is accepted.
    """
    try:
        import pymupdf as fitz  # type: ignore[import-not-found]

        return fitz
    except ImportError:
        try:
            import fitz  # type: ignore[import-not-found]

            if not hasattr(fitz, "open") or not hasattr(fitz, "Document"):
                raise ImportError("fitz is not PyMuPDF")
            return fitz
        except Exception as exc:  # pragma: no cover - import guard
            raise RuntimeError(
                "PyMuPDF is not available. Run: pip uninstall fitz; pip install PyMuPDF"
            ) from exc


fitz = import_pymupdf()


def open_pdf(path: Path):
    """Open a PDF with PyMuPDF, raising FileNotFoundError for a missing file."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"PDF not found: {path}")
    return fitz.open(str(path))


__all__ = ["fitz", "import_pymupdf", "open_pdf"]
