"""Version-dependent reader for party records."""
from __future__ import annotations

from mbsave.core.types import FormatVersion
from mbsave.data.cursor import ByteCursor
from mbsave.domain import Party, PartyRecord

from .record_readers import (
    PARTY_STACK_SIZE,
    read_notes,
    read_party_stack,
    read_sequence,
    read_slots,
    read_text,
)

PARTY_RECORD_MIN_SIZE = 4


def read_party_record(cursor: ByteCursor, version: FormatVersion) -> PartyRecord:
    """Read a party slot; invalid slots stop after the flag."""
    valid = cursor.int32("valid")
    if valid != 1:
        return PartyRecord(valid=valid)
    raw_id = cursor.int32("raw_id")
    party_id = cursor.int32("id")
    with cursor.scope("party"):
        party = read_party(cursor, version)
    return PartyRecord(valid=valid, raw_id=raw_id, id=party_id, party=party)


def read_party(cursor: ByteCursor, version: FormatVersion) -> Party:
    party_id = read_text(cursor, "id")
    name = read_text(cursor, "name")
    flags = cursor.uint64("flags")
    menu_id = cursor.int32("menu_id")
    party_template_id = cursor.int32("party_template_id")
    faction_id = cursor.int32("faction_id")
    personality = cursor.int32("personality")
    default_behavior = cursor.int32("default_behavior")
    current_behavior = cursor.int32("current_behavior")
    default_behavior_object_id = cursor.int32("default_behavior_object_id")
    current_behavior_object_id = cursor.int32("current_behavior_object_id")
    initial_position_x = cursor.float32("initial_position_x")
    initial_position_y = cursor.float32("initial_position_y")
    target_position_x = cursor.float32("target_position_x")
    target_position_y = cursor.float32("target_position_y")
    position_x = cursor.float32("position_x")
    position_y = cursor.float32("position_y")
    position_z = cursor.float32("position_z")
    num_stacks, stacks = read_sequence(cursor, "stacks", read_party_stack, PARTY_STACK_SIZE)
    bearing = cursor.float32("bearing")
    renamed = cursor.boolean("renamed")
    extra_text = read_text(cursor, "extra_text")
    morale = cursor.float32("morale")
    hunger = cursor.float32("hunger")
    unused_1 = cursor.float32("unused_1")
    patrol_radius = cursor.float32("patrol_radius")
    initiative = cursor.float32("initiative")
    helpfulness = cursor.float32("helpfulness")
    label_visible = cursor.int32("label_visible")
    bandit_attraction = cursor.float32("bandit_attraction")

    marshall = cursor.int32("marshall") if version.has_marshall else None

    ignore_player_timer = cursor.int64("ignore_player_timer")
    banner_map_icon_id = cursor.int32("banner_map_icon_id")

    extra_map_icon_id = None
    extra_map_icon_up_down_distance = None
    extra_map_icon_up_down_frequency = None
    extra_map_icon_rotate_frequency = None
    extra_map_icon_fade_frequency = None
    if version.has_extra_map_icon:
        extra_map_icon_id = cursor.int32("extra_map_icon_id")
        extra_map_icon_up_down_distance = cursor.float32("extra_map_icon_up_down_distance")
        extra_map_icon_up_down_frequency = cursor.float32("extra_map_icon_up_down_frequency")
        extra_map_icon_rotate_frequency = cursor.float32("extra_map_icon_rotate_frequency")
        extra_map_icon_fade_frequency = cursor.float32("extra_map_icon_fade_frequency")

    attached_to_party_id = cursor.int32("attached_to_party_id")
    unused_2 = cursor.int32("unused_2") if version.has_party_reserved_field else None

    is_attached = cursor.boolean("is_attached")
    num_attached_party_ids = cursor.count("num_attached_party_ids", 4)
    attached_party_ids = cursor.int32_array(num_attached_party_ids, "attached_party_ids")
    num_particle_system_ids = cursor.count("num_particle_system_ids", 4)
    particle_system_ids = cursor.int32_array(num_particle_system_ids, "particle_system_ids")
    notes = read_notes(cursor)
    num_slots, slots = read_slots(cursor)

    return Party(
        id=party_id,
        name=name,
        flags=flags,
        menu_id=menu_id,
        party_template_id=party_template_id,
        faction_id=faction_id,
        personality=personality,
        default_behavior=default_behavior,
        current_behavior=current_behavior,
        default_behavior_object_id=default_behavior_object_id,
        current_behavior_object_id=current_behavior_object_id,
        initial_position_x=initial_position_x,
        initial_position_y=initial_position_y,
        target_position_x=target_position_x,
        target_position_y=target_position_y,
        position_x=position_x,
        position_y=position_y,
        position_z=position_z,
        num_stacks=num_stacks,
        stacks=stacks,
        bearing=bearing,
        renamed=renamed,
        extra_text=extra_text,
        morale=morale,
        hunger=hunger,
        unused_1=unused_1,
        patrol_radius=patrol_radius,
        initiative=initiative,
        helpfulness=helpfulness,
        label_visible=label_visible,
        bandit_attraction=bandit_attraction,
        marshall=marshall,
        ignore_player_timer=ignore_player_timer,
        banner_map_icon_id=banner_map_icon_id,
        extra_map_icon_id=extra_map_icon_id,
        extra_map_icon_up_down_distance=extra_map_icon_up_down_distance,
        extra_map_icon_up_down_frequency=extra_map_icon_up_down_frequency,
        extra_map_icon_rotate_frequency=extra_map_icon_rotate_frequency,
        extra_map_icon_fade_frequency=extra_map_icon_fade_frequency,
        attached_to_party_id=attached_to_party_id,
        unused_2=unused_2,
        is_attached=is_attached,
        num_attached_party_ids=num_attached_party_ids,
        attached_party_ids=attached_party_ids,
        num_particle_system_ids=num_particle_system_ids,
        particle_system_ids=particle_system_ids,
        notes=notes,
        num_slots=num_slots,
        slots=slots,
    )
