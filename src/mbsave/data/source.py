"""Low-level helpers for acquiring savegame bytes."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

from .errors import SaveLoadError

logger = logging.getLogger(__name__)


def load_save_bytes(path: Path | str) -> bytes:
    """Read a savegame from disk and raise SaveLoadError on failure."""
    save_path = Path(path)
    try:
        with save_path.open("rb") as handle:
            data = read_stream(handle)
    except FileNotFoundError as exc:
        raise SaveLoadError(f"Savegame not found: {save_path}") from exc
    except IsADirectoryError as exc:
        raise SaveLoadError(f"Savegame path is a directory: {save_path}") from exc
    except OSError as exc:
        raise SaveLoadError(f"Unable to read savegame: {save_path}") from exc
    logger.debug("Read %d bytes from %s", len(data), save_path)
    return data


def read_stream(stream: BinaryIO) -> bytes:
    """Drain a binary stream into memory."""
    data = stream.read()
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise SaveLoadError("Savegame stream must be opened in binary mode.")
    return bytes(data)
