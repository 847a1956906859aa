"""Fixed and variable shape record data structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Text:
    """Length-prefixed byte string; ``readable`` is None for raw-only fields."""

    num_chars: int
    chars: bytes
    readable: str | None = None

    def __post_init__(self) -> None:
        if len(self.chars) != self.num_chars:
            raise ValueError(
                f"Text declares {self.num_chars} chars but holds {len(self.chars)} bytes."
            )


@dataclass(frozen=True, slots=True)
class Header:
    magic_number: int
    game_version: int
    module_version: int
    savegame_name: Text
    player_name: Text
    player_level: int
    date: float


@dataclass(frozen=True, slots=True)
class Trigger:
    status: int
    check_timer: int
    delay_timer: int
    rearm_timer: int


@dataclass(frozen=True, slots=True)
class SimpleTrigger:
    check_timer: int


@dataclass(frozen=True, slots=True)
class Note:
    text: Text
    value: int
    tableau_material_id: int
    available: bool


@dataclass(frozen=True, slots=True)
class Quest:
    progression: int
    giver_troop_id: int
    number: int
    start_date: float
    title: Text
    text: Text
    giver: Text
    notes: Tuple[Note, ...]
    num_slots: int
    slots: Tuple[int, ...]


@dataclass(frozen=True, slots=True)
class InfoPage:
    notes: Tuple[Note, ...]


@dataclass(frozen=True, slots=True)
class Site:
    num_slots: int
    slots: Tuple[int, ...]


@dataclass(frozen=True, slots=True)
class Faction:
    """Faction state; ``relations`` holds one entry per faction in the save."""

    num_slots: int
    slots: Tuple[int, ...]
    relations: Tuple[float, ...]
    name: Text
    renamed: bool
    color: int
    unused: int
    notes: Tuple[Note, ...]


@dataclass(frozen=True, slots=True)
class MapTrack:
    position_x: float
    position_y: float
    position_z: float
    rotation: float
    age: float
    flags: int


@dataclass(frozen=True, slots=True)
class PartyTemplate:
    num_parties_created: int
    num_parties_destroyed: int
    num_parties_destroyed_by_player: int
    num_slots: int
    slots: Tuple[int, ...]
