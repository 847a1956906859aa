"""Root aggregate for a decoded savegame."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .extensions import MapEventRecord, PlayerPartyStack
from .party import PartyRecord
from .records import (
    Faction,
    Header,
    InfoPage,
    MapTrack,
    PartyTemplate,
    Quest,
    SimpleTrigger,
    Site,
    Text,
    Trigger,
)


@dataclass(frozen=True, slots=True)
class DifficultySettings:
    """Campaign options stored from format version 1137 on."""

    combat_difficulty: int
    combat_difficulty_friendlies: int
    reduce_combat_ai: int
    reduce_campaign_ai: int
    combat_speed: int


@dataclass(frozen=True, slots=True)
class ExtendedSections:
    """Sections after the party records that the decoder understands."""

    player_party_stack_additional_info: Tuple[PlayerPartyStack, ...]
    num_map_event_records: int
    num_map_events_created: int
    map_event_records: Tuple[MapEventRecord, ...]


@dataclass(frozen=True, slots=True)
class Game:
    """Complete decoded save, fields in file order."""

    header: Header
    game_time: int
    random_seed: int
    save_mode: int
    difficulty: DifficultySettings | None
    date_timer: int
    hour: int
    day: int
    week: int
    month: int
    year: int
    unused_0: int
    global_cloud_amount: float
    global_haze_amount: float
    average_difficulty: float
    average_difficulty_period: float
    unused_1: Text
    unused_2: bool
    tutorial_flags: int
    default_prisoner_price: int
    encountered_party_1_id: int
    encountered_party_2_id: int
    current_menu_id: int
    current_site_id: int
    current_entry_no: int
    current_mission_template_id: int
    party_creation_min_random_value: int
    party_creation_max_random_value: int
    game_log: Text
    unused_3: Tuple[int, ...]
    unused_4: int
    rest_period: float
    rest_time_speed: int
    rest_is_interactive: int
    rest_remain_attackable: int
    class_names: Tuple[Text, ...]
    num_global_variables: int
    global_variables: Tuple[int, ...]
    num_triggers: int
    triggers: Tuple[Trigger, ...]
    num_simple_triggers: int
    simple_triggers: Tuple[SimpleTrigger, ...]
    num_quests: int
    quests: Tuple[Quest, ...]
    num_info_pages: int
    info_pages: Tuple[InfoPage, ...]
    num_sites: int
    sites: Tuple[Site, ...]
    num_factions: int
    factions: Tuple[Faction, ...]
    num_map_tracks: int
    map_tracks: Tuple[MapTrack, ...]
    num_party_templates: int
    party_templates: Tuple[PartyTemplate, ...]
    num_party_records: int
    num_parties_created: int
    party_records: Tuple[PartyRecord, ...]
    extended: ExtendedSections | None = None
    trailing_size: int = 0
