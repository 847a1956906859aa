"""Helpers for resolving savegame locations."""
from __future__ import annotations

import os
from pathlib import Path

_WINDOWS_SAVE_DIR = "Mount&Blade Warband Savegames"


def get_default_savegame_dir(base_path: Path | str | None = None) -> Path:
    """Return the directory the game writes savegames to."""
    if base_path is not None:
        return Path(base_path)
    if os.name == "nt":
        return Path.home() / "Documents" / _WINDOWS_SAVE_DIR
    return Path.home() / ".mbwarband" / "Savegames"


def resolve_savegame_path(name: Path | str, savegame_dir: Path | str | None = None) -> Path:
    """Return ``name`` as given if it exists, otherwise look it up in the savegame dir."""
    candidate = Path(name).expanduser()
    if candidate.exists() or candidate.is_absolute():
        return candidate
    return get_default_savegame_dir(savegame_dir) / candidate
