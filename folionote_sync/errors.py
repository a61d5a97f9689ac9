from __future__ import annotations

from pathlib import Path

from folionote_core.org_syntax import OutlineSyntaxError


class FolionoteError(Exception):
    """Base class for errors surfaced to the user by a note operation."""


class ScopeNotFound(FolionoteError):
    def __init__(self, document_key: str) -> None:
        super().__init__(f"No notes heading with CUSTOM_ID '{document_key}' for this document")
        self.document_key = document_key


class UnparsablePageProperty(FolionoteError, ValueError):
    def __init__(self, value: str | None, property_key: str) -> None:
        if value is None:
            message = f"No '{property_key}' property on the current note"
        else:
            message = f"Property '{property_key}' is not a page number: {value!r}"
        super().__init__(message)
        self.value = value
        self.property_key = property_key


class ExternalResourceMissing(FolionoteError, FileNotFoundError):
    def __init__(self, path: Path | None, detail: str | None = None) -> None:
        if path is None:
            message = detail or "No source document is associated with these notes"
        else:
            message = f"Source document not found: {path}"
        super().__init__(message)
        self.path = path


__all__ = [
    "ExternalResourceMissing",
    "FolionoteError",
    "OutlineSyntaxError",
    "ScopeNotFound",
    "UnparsablePageProperty",
]
