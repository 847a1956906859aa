"""Format constants and the version value threaded through every reader."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

MapIconBoundary = Literal["inclusive", "exclusive"]

MAGIC_NUMBER = 0x52445257
NOTE_COUNT = 16
CLASS_NAME_COUNT = 9
RESERVED_INT_COUNT = 6
TROOP_DNA_COUNT = 32

MIN_KNOWN_VERSION = 900
MAX_KNOWN_VERSION = 1174

DIFFICULTY_SETTINGS_VERSION = 1137
EXTRA_MAP_ICON_VERSION = 1137
PARTY_RESERVED_FIELD_VERSION = 1162

_MAP_ICON_BOUNDARIES: tuple[MapIconBoundary, ...] = ("inclusive", "exclusive")


@dataclass(frozen=True, slots=True)
class FormatVersion:
    """Game format version read from the header.

    Field presence in versioned records is a pure function of this value. The
    extra map icon group is ambiguous at exactly 1137: the two known layouts
    disagree, so the boundary is selectable and defaults to inclusive.
    """

    number: int
    extra_map_icon_boundary: MapIconBoundary = "inclusive"

    def __post_init__(self) -> None:
        if self.extra_map_icon_boundary not in _MAP_ICON_BOUNDARIES:
            raise ValueError(
                f"extra_map_icon_boundary must be one of {_MAP_ICON_BOUNDARIES}, "
                f"got {self.extra_map_icon_boundary!r}."
            )

    @property
    def has_difficulty_settings(self) -> bool:
        return self.number >= DIFFICULTY_SETTINGS_VERSION

    @property
    def has_marshall(self) -> bool:
        return 900 <= self.number < 1000 or self.number >= 1020

    @property
    def has_extra_map_icon(self) -> bool:
        if self.extra_map_icon_boundary == "exclusive":
            return self.number > EXTRA_MAP_ICON_VERSION
        return self.number >= EXTRA_MAP_ICON_VERSION

    @property
    def has_party_reserved_field(self) -> bool:
        return self.number >= PARTY_RESERVED_FIELD_VERSION

    @property
    def is_known(self) -> bool:
        """Return True when the field table has been checked against this version."""
        return MIN_KNOWN_VERSION <= self.number <= MAX_KNOWN_VERSION


__all__ = [
    "CLASS_NAME_COUNT",
    "FormatVersion",
    "MAGIC_NUMBER",
    "MAX_KNOWN_VERSION",
    "MIN_KNOWN_VERSION",
    "MapIconBoundary",
    "NOTE_COUNT",
    "RESERVED_INT_COUNT",
    "TROOP_DNA_COUNT",
]
