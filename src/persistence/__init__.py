"""Persistence of saved palettes and display preferences.

Re-exports the record types, the normalizer entry points, the key-value
stores and the JSON import/export helpers.
"""

from .exchange import (
    ImportRejected,
    export_document,
    export_filename,
    parse_import_document,
    write_export,
)
from .normalizer import StateKind, decode_state, load_state, normalize
from .records import SavedPalette, SavedPaletteCollection, next_record_id
from .store import (
    DARK_MODE_KEY,
    DISPLAY_FORMAT_KEY,
    SAVED_PALETTES_KEY,
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    save_value,
)

__all__ = [
    "SavedPalette",
    "SavedPaletteCollection",
    "next_record_id",
    "StateKind",
    "normalize",
    "decode_state",
    "load_state",
    "KeyValueStore",
    "JsonFileStore",
    "MemoryStore",
    "save_value",
    "DARK_MODE_KEY",
    "DISPLAY_FORMAT_KEY",
    "SAVED_PALETTES_KEY",
    "ImportRejected",
    "export_document",
    "export_filename",
    "write_export",
    "parse_import_document",
]
