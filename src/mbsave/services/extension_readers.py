"""Readers for the sections that follow the party records."""
from __future__ import annotations

from mbsave.core.types import TROOP_DNA_COUNT
from mbsave.data.cursor import ByteCursor
from mbsave.domain import ExtendedSections, MapEvent, MapEventRecord, PartyRecord, PlayerPartyStack

from .record_readers import read_repeated, read_text

MAP_EVENT_RECORD_MIN_SIZE = 4


def read_player_party_stack(cursor: ByteCursor) -> PlayerPartyStack:
    return PlayerPartyStack(
        experience=cursor.float32("experience"),
        num_upgradeable=cursor.int32("num_upgradeable"),
        troop_dnas=cursor.int32_array(TROOP_DNA_COUNT, "troop_dnas"),
    )


def read_map_event(cursor: ByteCursor) -> MapEvent:
    return MapEvent(
        unused_0=read_text(cursor, "unused_0"),
        type=cursor.int32("type"),
        position_x=cursor.float32("position_x"),
        position_y=cursor.float32("position_y"),
        land_position_x=cursor.float32("land_position_x"),
        land_position_y=cursor.float32("land_position_y"),
        unused_1=cursor.float32("unused_1"),
        unused_2=cursor.float32("unused_2"),
        attacker_party_id=cursor.int32("attacker_party_id"),
        defender_party_id=cursor.int32("defender_party_id"),
        battle_simulation_timer=cursor.int64("battle_simulation_timer"),
        next_battle_simulation=cursor.float32("next_battle_simulation"),
    )


def read_map_event_record(cursor: ByteCursor) -> MapEventRecord:
    valid = cursor.int32("valid")
    if valid != 1:
        return MapEventRecord(valid=valid)
    event_id = cursor.int32("id")
    with cursor.scope("map_event"):
        map_event = read_map_event(cursor)
    return MapEventRecord(valid=valid, id=event_id, map_event=map_event)


def read_extended_sections(
    cursor: ByteCursor, player_party: PartyRecord | None
) -> ExtendedSections:
    """Read the player stack details and the map event records.

    The player party is the first party record; its stack count sizes the
    additional stack info block.
    """
    num_player_stacks = 0
    if player_party is not None and player_party.party is not None:
        num_player_stacks = player_party.party.num_stacks
    player_stacks = read_repeated(
        cursor, "player_party_stack_additional_info", read_player_party_stack, num_player_stacks
    )
    num_map_event_records = cursor.count("num_map_event_records", MAP_EVENT_RECORD_MIN_SIZE)
    num_map_events_created = cursor.int32("num_map_events_created")
    map_event_records = read_repeated(
        cursor, "map_event_records", read_map_event_record, num_map_event_records
    )
    return ExtendedSections(
        player_party_stack_additional_info=player_stacks,
        num_map_event_records=num_map_event_records,
        num_map_events_created=num_map_events_created,
        map_event_records=map_event_records,
    )
