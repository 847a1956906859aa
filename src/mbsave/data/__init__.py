"""Data layer utilities for reading savegame bytes."""

from .cursor import ByteCursor
from .errors import (
    DecodeError,
    InvalidFormatError,
    MalformedLengthError,
    SaveLoadError,
    TruncatedInputError,
    UnsupportedVersionWarning,
)
from .paths import get_default_savegame_dir, resolve_savegame_path
from .source import load_save_bytes, read_stream

__all__ = [
    "ByteCursor",
    "DecodeError",
    "InvalidFormatError",
    "MalformedLengthError",
    "SaveLoadError",
    "TruncatedInputError",
    "UnsupportedVersionWarning",
    "get_default_savegame_dir",
    "load_save_bytes",
    "read_stream",
    "resolve_savegame_path",
]
