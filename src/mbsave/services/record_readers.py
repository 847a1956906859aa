"""Readers for records whose layout does not depend on the format version."""
from __future__ import annotations

from typing import Callable, Tuple, TypeVar

from mbsave.core.types import NOTE_COUNT
from mbsave.data.cursor import ByteCursor
from mbsave.domain import (
    Faction,
    InfoPage,
    MapTrack,
    Note,
    PartyStack,
    PartyTemplate,
    Quest,
    SimpleTrigger,
    Site,
    Text,
    Trigger,
)

T = TypeVar("T")

TEXT_ENCODING = "latin-1"

# Smallest encoded size of each element, used to reject absurd counts early.
SLOT_SIZE = 8
TEXT_MIN_SIZE = 4
NOTE_MIN_SIZE = TEXT_MIN_SIZE + 4 + 4 + 1
TRIGGER_SIZE = 4 + 8 + 8 + 8
SIMPLE_TRIGGER_SIZE = 8
QUEST_MIN_SIZE = 16 + 3 * TEXT_MIN_SIZE + NOTE_COUNT * NOTE_MIN_SIZE + 4
INFO_PAGE_MIN_SIZE = NOTE_COUNT * NOTE_MIN_SIZE
SITE_MIN_SIZE = 4
FACTION_MIN_SIZE = 4 + TEXT_MIN_SIZE + 1 + 4 + 4 + NOTE_COUNT * NOTE_MIN_SIZE
MAP_TRACK_SIZE = 24
PARTY_TEMPLATE_MIN_SIZE = 16
PARTY_STACK_SIZE = 16


def read_text(cursor: ByteCursor, name: str, *, decode: bool = True) -> Text:
    """Read a length-prefixed string, decoding it unless ``decode`` is False."""
    chars = cursor.length_prefixed(name)
    readable = chars.decode(TEXT_ENCODING) if decode else None
    return Text(num_chars=len(chars), chars=chars, readable=readable)


def read_raw_text(cursor: ByteCursor) -> Text:
    """Read a string kept as bytes only."""
    return read_text(cursor, "", decode=False)


def read_sequence(
    cursor: ByteCursor,
    name: str,
    reader: Callable[[ByteCursor], T],
    element_size: int,
) -> Tuple[int, Tuple[T, ...]]:
    """Read ``num_<name>`` then that many records, each under ``name[i]``."""
    count = cursor.count(f"num_{name}", element_size)
    return count, read_repeated(cursor, name, reader, count)


def read_repeated(
    cursor: ByteCursor, name: str, reader: Callable[[ByteCursor], T], count: int
) -> Tuple[T, ...]:
    """Read ``count`` records with no count prefix."""
    items = []
    for index in range(count):
        with cursor.scope(f"{name}[{index}]"):
            items.append(reader(cursor))
    return tuple(items)


def read_slots(cursor: ByteCursor) -> Tuple[int, Tuple[int, ...]]:
    num_slots = cursor.count("num_slots", SLOT_SIZE)
    return num_slots, cursor.int64_array(num_slots, "slots")


def read_note(cursor: ByteCursor) -> Note:
    return Note(
        text=read_text(cursor, "text"),
        value=cursor.int32("value"),
        tableau_material_id=cursor.int32("tableau_material_id"),
        available=cursor.boolean("available"),
    )


def read_notes(cursor: ByteCursor) -> Tuple[Note, ...]:
    """Read the fixed block of notes every note-bearing record carries."""
    return read_repeated(cursor, "notes", read_note, NOTE_COUNT)


def read_trigger(cursor: ByteCursor) -> Trigger:
    return Trigger(
        status=cursor.int32("status"),
        check_timer=cursor.int64("check_timer"),
        delay_timer=cursor.int64("delay_timer"),
        rearm_timer=cursor.int64("rearm_timer"),
    )


def read_simple_trigger(cursor: ByteCursor) -> SimpleTrigger:
    return SimpleTrigger(check_timer=cursor.int64("check_timer"))


def read_quest(cursor: ByteCursor) -> Quest:
    progression = cursor.int32("progression")
    giver_troop_id = cursor.int32("giver_troop_id")
    number = cursor.int32("number")
    start_date = cursor.float32("start_date")
    title = read_text(cursor, "title")
    text = read_text(cursor, "text")
    giver = read_text(cursor, "giver")
    notes = read_notes(cursor)
    num_slots, slots = read_slots(cursor)
    return Quest(
        progression=progression,
        giver_troop_id=giver_troop_id,
        number=number,
        start_date=start_date,
        title=title,
        text=text,
        giver=giver,
        notes=notes,
        num_slots=num_slots,
        slots=slots,
    )


def read_info_page(cursor: ByteCursor) -> InfoPage:
    return InfoPage(notes=read_notes(cursor))


def read_site(cursor: ByteCursor) -> Site:
    num_slots, slots = read_slots(cursor)
    return Site(num_slots=num_slots, slots=slots)


def read_faction(cursor: ByteCursor, num_factions: int) -> Faction:
    """Read a faction record.

    The relation vector carries no count of its own: its length is the total
    number of factions, which only the caller knows.
    """
    num_slots, slots = read_slots(cursor)
    relations = cursor.float32_array(num_factions, "relations")
    return Faction(
        num_slots=num_slots,
        slots=slots,
        relations=relations,
        name=read_text(cursor, "name"),
        renamed=cursor.boolean("renamed"),
        color=cursor.uint32("color"),
        unused=cursor.int32("unused"),
        notes=read_notes(cursor),
    )


def read_map_track(cursor: ByteCursor) -> MapTrack:
    return MapTrack(
        position_x=cursor.float32("position_x"),
        position_y=cursor.float32("position_y"),
        position_z=cursor.float32("position_z"),
        rotation=cursor.float32("rotation"),
        age=cursor.float32("age"),
        flags=cursor.int32("flags"),
    )


def read_party_template(cursor: ByteCursor) -> PartyTemplate:
    num_parties_created = cursor.int32("num_parties_created")
    num_parties_destroyed = cursor.int32("num_parties_destroyed")
    num_parties_destroyed_by_player = cursor.int32("num_parties_destroyed_by_player")
    num_slots, slots = read_slots(cursor)
    return PartyTemplate(
        num_parties_created=num_parties_created,
        num_parties_destroyed=num_parties_destroyed,
        num_parties_destroyed_by_player=num_parties_destroyed_by_player,
        num_slots=num_slots,
        slots=slots,
    )


def read_party_stack(cursor: ByteCursor) -> PartyStack:
    return PartyStack(
        troop_id=cursor.int32("troop_id"),
        num_troops=cursor.int32("num_troops"),
        num_wounded_troops=cursor.int32("num_wounded_troops"),
        flags=cursor.int32("flags"),
    )
