"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

_DEFAULT_INDENT = 2
_DEFAULT_BOUNDARY = "inclusive"
_BOUNDARIES = ("inclusive", "exclusive")


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "mbsave"
        return Path.home() / "mbsave"
    return Path.home() / ".config" / "mbsave"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def default_config() -> Dict[str, Any]:
    return {
        "savegame_dir": None,
        "indent": _DEFAULT_INDENT,
        "extra_map_icon_boundary": _DEFAULT_BOUNDARY,
    }


def _normalize(raw: Dict[str, Any]) -> Dict[str, Any]:
    config = default_config()
    savegame_dir = raw.get("savegame_dir")
    if isinstance(savegame_dir, str) and savegame_dir.strip():
        config["savegame_dir"] = savegame_dir
    indent = raw.get("indent")
    if isinstance(indent, int) and not isinstance(indent, bool) and 0 <= indent <= 8:
        config["indent"] = indent
    boundary = raw.get("extra_map_icon_boundary")
    if boundary in _BOUNDARIES:
        config["extra_map_icon_boundary"] = boundary
    return config


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return default_config()
    except (OSError, ValueError):
        return default_config()
    if not isinstance(raw, dict):
        return default_config()
    return _normalize(raw)
