from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path

from folionote_core.paths import folionote_config_dir
from folionote_core.text import atomic_write_text

from .constants import CONFIG_FILENAME, DEFAULT_PAGE_PROPERTY, DEFAULT_RENDER_DPI
from .models import SortOrder, SplitOrientation


logger = logging.getLogger(__name__)


def _parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "yes", "1", "on"}:
        return True
    if isinstance(value, str) and value.strip().lower() in {"false", "no", "0", "off"}:
        return False
    if isinstance(value, int):
        return bool(value)
    raise ValueError(f"Not a boolean: {value!r}")


@dataclass(frozen=True)
class NoterConfig:
    page_property: str = DEFAULT_PAGE_PROPERTY
    use_external_link: bool = False
    insert_relative_name: bool = True
    disable_narrowing: bool = False
    sort_order: SortOrder = SortOrder.ASCENDING
    split_orientation: SplitOrientation = SplitOrientation.HORIZONTAL
    render_dpi: int = DEFAULT_RENDER_DPI

    @classmethod
    def from_dict(cls, data: dict) -> NoterConfig:
        """Build a config from JSON data; invalid entries keep their defaults."""
        config = cls()
        parsers = {
            "page_property": lambda v: str(v).strip() or DEFAULT_PAGE_PROPERTY,
            "use_external_link": _parse_bool,
            "insert_relative_name": _parse_bool,
            "disable_narrowing": _parse_bool,
            "sort_order": SortOrder.parse,
            "split_orientation": lambda v: SplitOrientation(str(v).strip().lower()),
            "render_dpi": int,
        }
        updates: dict[str, object] = {}
        for key, raw in data.items():
            parser = parsers.get(key)
            if parser is None:
                logger.warning("Ignoring unknown config key: %s", key)
                continue
            try:
                updates[key] = parser(raw)
            except Exception as exc:
                logger.warning("Invalid value for config key '%s': %s", key, exc)
        dpi = updates.get("render_dpi")
        if isinstance(dpi, int) and dpi <= 0:
            logger.warning("render_dpi must be positive; using %d", DEFAULT_RENDER_DPI)
            updates.pop("render_dpi")
        return replace(config, **updates)

    def to_dict(self) -> dict[str, object]:
        return {
            "page_property": self.page_property,
            "use_external_link": self.use_external_link,
            "insert_relative_name": self.insert_relative_name,
            "disable_narrowing": self.disable_narrowing,
            "sort_order": self.sort_order.value,
            "split_orientation": self.split_orientation.value,
            "render_dpi": self.render_dpi,
        }


def get_config_path() -> Path:
    return folionote_config_dir() / CONFIG_FILENAME


def load_config(path: Path | None = None) -> NoterConfig:
    """
    Load the user config. Returns defaults if missing/invalid.
    """
    path = path or get_config_path()
    if not path.is_file():
        return NoterConfig()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:
        logger.warning("Failed to load config from %s: %s", path, exc)
        return NoterConfig()
    if not isinstance(raw, dict):
        logger.warning("Config at %s is not a JSON object", path)
        return NoterConfig()
    return NoterConfig.from_dict(raw)


def save_config(config: NoterConfig, path: Path | None = None) -> Path:
    """
    Persist the user config using an atomic replace.
    """
    path = path or get_config_path()
    serialized = json.dumps(config.to_dict(), ensure_ascii=False, indent=2)
    return atomic_write_text(path, serialized + "\n")


__all__ = [
    "NoterConfig",
    "get_config_path",
    "load_config",
    "save_config",
]
