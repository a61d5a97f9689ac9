from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path


@lru_cache(maxsize=1)
def user_documents_dir() -> Path:
    """
    Best-effort resolution of the user's Documents directory.

    Can be overridden with FOLIONOTE_DOCUMENTS_DIR; falls back to ~/Documents.
    """
    override = os.environ.get("FOLIONOTE_DOCUMENTS_DIR")
    if override:
        return Path(override).expanduser().resolve()
    return (Path.home() / "Documents").resolve()


def folionote_config_dir() -> Path:
    """
    Directory holding the user-level `config.json`.

    Uses `~/Documents/folionote` unless FOLIONOTE_CONFIG_DIR is set.
    """
    override = os.environ.get("FOLIONOTE_CONFIG_DIR")
    if override:
        return Path(override).expanduser().resolve()
    return user_documents_dir() / "folionote"


def resolve_against(path: str | Path, base_dir: Path | None) -> Path:
    """Resolve a possibly relative path written inside a notes file."""
    candidate = Path(path).expanduser()
    if not candidate.is_absolute() and base_dir is not None:
        candidate = base_dir / candidate
    return candidate.resolve()


def link_target(target: Path, base_dir: Path | None, *, relative: bool) -> str:
    """
    Return the path text to embed in a note link.

    Relative links are computed against `base_dir`; when no relative path
    exists (different drives on Windows) the absolute path is used.
    """
    resolved = Path(target).expanduser().resolve()
    if relative and base_dir is not None:
        try:
            return Path(os.path.relpath(resolved, base_dir.resolve())).as_posix()
        except ValueError:
            pass
    return resolved.as_posix()


__all__ = [
    "folionote_config_dir",
    "link_target",
    "resolve_against",
    "user_documents_dir",
]
