"""Conversion of decoded records into JSON-ready payloads."""
from __future__ import annotations

import base64
import json
import math
from dataclasses import fields, is_dataclass
from typing import Any, Dict

from mbsave.domain import Game

Payload = Dict[str, Any]


def to_payload(value: Any) -> Any:
    """Return ``value`` as plain dicts, lists and scalars.

    Dataclass fields keep declaration order, which is file order. Fields that
    are None (absent in this format version, or not decoded) are left out so
    they cannot be mistaken for zero. Raw bytes are base64 encoded and
    non-finite floats become None.
    """
    if is_dataclass(value) and not isinstance(value, type):
        payload: Payload = {}
        for item in fields(value):
            field_value = getattr(value, item.name)
            if field_value is None:
                continue
            payload[item.name] = to_payload(field_value)
        return payload
    if isinstance(value, (tuple, list)):
        return [to_payload(item) for item in value]
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def section_names() -> list[str]:
    """Return the Game field names that can be selected for export."""
    return [item.name for item in fields(Game)]


def select_section(game: Game, section: str | None) -> Any:
    """Return the whole game or one of its top-level fields."""
    if section is None:
        return game
    if section not in section_names():
        raise KeyError(section)
    return getattr(game, section)


def dump_json(value: Any, *, indent: int | None = 2) -> str:
    """Render ``value`` as JSON text."""
    return json.dumps(to_payload(value), indent=indent, allow_nan=False)
