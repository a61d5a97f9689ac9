from __future__ import annotations

from pathlib import Path


DEFAULT_CANDIDATE_ENCODINGS: tuple[str, ...] = ("utf-8-sig", "utf-8", "gb18030")


def read_text_auto(path: Path, *, encodings: tuple[str, ...] = DEFAULT_CANDIDATE_ENCODINGS) -> str:
    """Decode a notes file with the first encoding that fits; newlines come back as '\\n'."""
    raw_bytes = path.read_bytes()
    for encoding in encodings:
        try:
            text = raw_bytes.decode(encoding)
            break
        except UnicodeDecodeError:
            continue
    else:
        text = raw_bytes.decode("utf-8", errors="replace")
    return text.lstrip("\ufeff").replace("\r\n", "\n").replace("\r", "\n")


def atomic_write_text(path: Path, text: str, *, newline: str = "\n") -> Path:
    """Write UTF-8 text through a sibling temp file and an atomic replace."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")
    tmp_path.write_text(text, encoding="utf-8", newline=newline)
    tmp_path.replace(path)
    return path


__all__ = [
    "DEFAULT_CANDIDATE_ENCODINGS",
    "atomic_write_text",
    "read_text_auto",
]
