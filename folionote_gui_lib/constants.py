from __future__ import annotations

# Layout defaults
DEFAULT_SPLITTER_RATIO_LEFT = 1
DEFAULT_SPLITTER_RATIO_RIGHT = 1
_SPLITTER_SIZE_BASIS = 1200

MIN_RENDER_DPI = 72
MAX_RENDER_DPI = 600
RENDER_CACHE_PAGES = 8

STATUS_MESSAGE_TIMEOUT_MS = 4000
NOTES_FONT_FAMILY = "monospace"

SHORTCUT_ADD_NOTE = "Ctrl+I"
SHORTCUT_SYNC_CURRENT = "Alt+."
SHORTCUT_SYNC_PREVIOUS = "Alt+P"
SHORTCUT_SYNC_NEXT = "Alt+N"
SHORTCUT_SAVE = "Ctrl+S"
