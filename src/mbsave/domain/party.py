"""Party (map entity) data structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .records import Note, Text


@dataclass(frozen=True, slots=True)
class PartyStack:
    """One troop stack inside a party."""

    troop_id: int
    num_troops: int
    num_wounded_troops: int
    flags: int


@dataclass(frozen=True, slots=True)
class Party:
    """A party on the campaign map.

    Fields typed ``X | None`` only exist in some format versions and stay None
    when the save predates them.
    """

    id: Text
    name: Text
    flags: int
    menu_id: int
    party_template_id: int
    faction_id: int
    personality: int
    default_behavior: int
    current_behavior: int
    default_behavior_object_id: int
    current_behavior_object_id: int
    initial_position_x: float
    initial_position_y: float
    target_position_x: float
    target_position_y: float
    position_x: float
    position_y: float
    position_z: float
    num_stacks: int
    stacks: Tuple[PartyStack, ...]
    bearing: float
    renamed: bool
    extra_text: Text
    morale: float
    hunger: float
    unused_1: float
    patrol_radius: float
    initiative: float
    helpfulness: float
    label_visible: int
    bandit_attraction: float
    marshall: int | None
    ignore_player_timer: int
    banner_map_icon_id: int
    extra_map_icon_id: int | None
    extra_map_icon_up_down_distance: float | None
    extra_map_icon_up_down_frequency: float | None
    extra_map_icon_rotate_frequency: float | None
    extra_map_icon_fade_frequency: float | None
    attached_to_party_id: int
    unused_2: int | None
    is_attached: bool
    num_attached_party_ids: int
    attached_party_ids: Tuple[int, ...]
    num_particle_system_ids: int
    particle_system_ids: Tuple[int, ...]
    notes: Tuple[Note, ...]
    num_slots: int
    slots: Tuple[int, ...]


@dataclass(frozen=True, slots=True)
class PartyRecord:
    """Party slot; everything but ``valid`` is absent unless ``valid == 1``."""

    valid: int
    raw_id: int | None = None
    id: int | None = None
    party: Party | None = None

    @property
    def is_valid(self) -> bool:
        return self.valid == 1
