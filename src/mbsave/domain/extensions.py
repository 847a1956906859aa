"""Sections stored after the party records, decoded only on request."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .records import Text


@dataclass(frozen=True, slots=True)
class PlayerPartyStack:
    experience: float
    num_upgradeable: int
    troop_dnas: Tuple[int, ...]


@dataclass(frozen=True, slots=True)
class MapEvent:
    unused_0: Text
    type: int
    position_x: float
    position_y: float
    land_position_x: float
    land_position_y: float
    unused_1: float
    unused_2: float
    attacker_party_id: int
    defender_party_id: int
    battle_simulation_timer: int
    next_battle_simulation: float


@dataclass(frozen=True, slots=True)
class MapEventRecord:
    valid: int
    id: int | None = None
    map_event: MapEvent | None = None
