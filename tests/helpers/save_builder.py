"""Test-only encoder that mirrors the decoder's field order."""
from __future__ import annotations

import struct
from dataclasses import replace
from typing import Iterable, Sequence

from mbsave.core.types import (
    CLASS_NAME_COUNT,
    MAGIC_NUMBER,
    NOTE_COUNT,
    RESERVED_INT_COUNT,
    TROOP_DNA_COUNT,
    FormatVersion,
)
from mbsave.domain import (
    DifficultySettings,
    ExtendedSections,
    Faction,
    Game,
    Header,
    InfoPage,
    MapEvent,
    MapEventRecord,
    MapTrack,
    Note,
    Party,
    PartyRecord,
    PartyStack,
    PartyTemplate,
    PlayerPartyStack,
    Quest,
    SimpleTrigger,
    Site,
    Text,
    Trigger,
)


class SaveWriter:
    """Accumulates little-endian fields in the same order the readers consume them."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def getvalue(self) -> bytes:
        return bytes(self._buffer)

    def int32(self, value: int) -> "SaveWriter":
        self._buffer += struct.pack("<i", value)
        return self

    def int64(self, value: int) -> "SaveWriter":
        self._buffer += struct.pack("<q", value)
        return self

    def uint32(self, value: int) -> "SaveWriter":
        self._buffer += struct.pack("<I", value)
        return self

    def uint64(self, value: int) -> "SaveWriter":
        self._buffer += struct.pack("<Q", value)
        return self

    def float32(self, value: float) -> "SaveWriter":
        self._buffer += struct.pack("<f", value)
        return self

    def boolean(self, value: bool) -> "SaveWriter":
        self._buffer += b"\x01" if value else b"\x00"
        return self

    def raw(self, data: bytes) -> "SaveWriter":
        self._buffer += data
        return self

    def text(self, value: Text) -> "SaveWriter":
        self.int32(value.num_chars)
        self._buffer += value.chars
        return self

    def int32s(self, values: Iterable[int]) -> "SaveWriter":
        for value in values:
            self.int32(value)
        return self

    def int64s(self, values: Iterable[int]) -> "SaveWriter":
        for value in values:
            self.int64(value)
        return self

    def float32s(self, values: Iterable[float]) -> "SaveWriter":
        for value in values:
            self.float32(value)
        return self

    def note(self, note: Note) -> "SaveWriter":
        return self.text(note.text).int32(note.value).int32(note.tableau_material_id).boolean(
            note.available
        )

    def notes(self, notes: Sequence[Note]) -> "SaveWriter":
        assert len(notes) == NOTE_COUNT
        for note in notes:
            self.note(note)
        return self

    def slots(self, num_slots: int, slots: Sequence[int]) -> "SaveWriter":
        return self.int32(num_slots).int64s(slots)

    def header(self, header: Header) -> "SaveWriter":
        self.int32(header.magic_number).int32(header.game_version).int32(header.module_version)
        self.text(header.savegame_name).text(header.player_name)
        return self.int32(header.player_level).float32(header.date)

    def trigger(self, trigger: Trigger) -> "SaveWriter":
        return (
            self.int32(trigger.status)
            .int64(trigger.check_timer)
            .int64(trigger.delay_timer)
            .int64(trigger.rearm_timer)
        )

    def quest(self, quest: Quest) -> "SaveWriter":
        self.int32(quest.progression).int32(quest.giver_troop_id).int32(quest.number)
        self.float32(quest.start_date)
        self.text(quest.title).text(quest.text).text(quest.giver)
        return self.notes(quest.notes).slots(quest.num_slots, quest.slots)

    def faction(self, faction: Faction) -> "SaveWriter":
        self.slots(faction.num_slots, faction.slots).float32s(faction.relations)
        self.text(faction.name).boolean(faction.renamed).uint32(faction.color)
        return self.int32(faction.unused).notes(faction.notes)

    def map_track(self, track: MapTrack) -> "SaveWriter":
        self.float32s(
            [track.position_x, track.position_y, track.position_z, track.rotation, track.age]
        )
        return self.int32(track.flags)

    def party_template(self, template: PartyTemplate) -> "SaveWriter":
        self.int32(template.num_parties_created).int32(template.num_parties_destroyed)
        self.int32(template.num_parties_destroyed_by_player)
        return self.slots(template.num_slots, template.slots)

    def party_stack(self, stack: PartyStack) -> "SaveWriter":
        return self.int32s([stack.troop_id, stack.num_troops, stack.num_wounded_troops, stack.flags])

    def party(self, party: Party, version: FormatVersion) -> "SaveWriter":
        self.text(party.id).text(party.name).uint64(party.flags)
        self.int32s(
            [
                party.menu_id,
                party.party_template_id,
                party.faction_id,
                party.personality,
                party.default_behavior,
                party.current_behavior,
                party.default_behavior_object_id,
                party.current_behavior_object_id,
            ]
        )
        self.float32s(
            [
                party.initial_position_x,
                party.initial_position_y,
                party.target_position_x,
                party.target_position_y,
                party.position_x,
                party.position_y,
                party.position_z,
            ]
        )
        self.int32(party.num_stacks)
        for stack in party.stacks:
            self.party_stack(stack)
        self.float32(party.bearing).boolean(party.renamed).text(party.extra_text)
        self.float32s(
            [
                party.morale,
                party.hunger,
                party.unused_1,
                party.patrol_radius,
                party.initiative,
                party.helpfulness,
            ]
        )
        self.int32(party.label_visible).float32(party.bandit_attraction)
        if version.has_marshall:
            self.int32(party.marshall)
        self.int64(party.ignore_player_timer).int32(party.banner_map_icon_id)
        if version.has_extra_map_icon:
            self.int32(party.extra_map_icon_id)
            self.float32s(
                [
                    party.extra_map_icon_up_down_distance,
                    party.extra_map_icon_up_down_frequency,
                    party.extra_map_icon_rotate_frequency,
                    party.extra_map_icon_fade_frequency,
                ]
            )
        self.int32(party.attached_to_party_id)
        if version.has_party_reserved_field:
            self.int32(party.unused_2)
        self.boolean(party.is_attached)
        self.int32(party.num_attached_party_ids).int32s(party.attached_party_ids)
        self.int32(party.num_particle_system_ids).int32s(party.particle_system_ids)
        return self.notes(party.notes).slots(party.num_slots, party.slots)

    def party_record(self, record: PartyRecord, version: FormatVersion) -> "SaveWriter":
        self.int32(record.valid)
        if record.valid == 1:
            self.int32(record.raw_id).int32(record.id).party(record.party, version)
        return self

    def player_party_stack(self, stack: PlayerPartyStack) -> "SaveWriter":
        return self.float32(stack.experience).int32(stack.num_upgradeable).int32s(stack.troop_dnas)

    def map_event_record(self, record: MapEventRecord) -> "SaveWriter":
        self.int32(record.valid)
        if record.valid != 1:
            return self
        event = record.map_event
        self.int32(record.id).text(event.unused_0).int32(event.type)
        self.float32s(
            [
                event.position_x,
                event.position_y,
                event.land_position_x,
                event.land_position_y,
                event.unused_1,
                event.unused_2,
            ]
        )
        self.int32(event.attacker_party_id).int32(event.defender_party_id)
        return self.int64(event.battle_simulation_timer).float32(event.next_battle_simulation)

    def game(self, game: Game, version: FormatVersion) -> "SaveWriter":
        self.header(game.header)
        self.uint64(game.game_time).int32(game.random_seed).int32(game.save_mode)
        if version.has_difficulty_settings:
            difficulty = game.difficulty
            self.int32s(
                [
                    difficulty.combat_difficulty,
                    difficulty.combat_difficulty_friendlies,
                    difficulty.reduce_combat_ai,
                    difficulty.reduce_campaign_ai,
                    difficulty.combat_speed,
                ]
            )
        self.int64(game.date_timer)
        self.int32s([game.hour, game.day, game.week, game.month, game.year, game.unused_0])
        self.float32s(
            [
                game.global_cloud_amount,
                game.global_haze_amount,
                game.average_difficulty,
                game.average_difficulty_period,
            ]
        )
        self.text(game.unused_1).boolean(game.unused_2)
        self.int32s(
            [
                game.tutorial_flags,
                game.default_prisoner_price,
                game.encountered_party_1_id,
                game.encountered_party_2_id,
                game.current_menu_id,
                game.current_site_id,
                game.current_entry_no,
                game.current_mission_template_id,
                game.party_creation_min_random_value,
                game.party_creation_max_random_value,
            ]
        )
        self.text(game.game_log).int32s(game.unused_3).int64(game.unused_4)
        self.float32(game.rest_period)
        self.int32s([game.rest_time_speed, game.rest_is_interactive, game.rest_remain_attackable])
        for class_name in game.class_names:
            self.text(class_name)
        self.int32(game.num_global_variables).int64s(game.global_variables)
        self.int32(game.num_triggers)
        for trigger in game.triggers:
            self.trigger(trigger)
        self.int32(game.num_simple_triggers)
        for simple_trigger in game.simple_triggers:
            self.int64(simple_trigger.check_timer)
        self.int32(game.num_quests)
        for quest in game.quests:
            self.quest(quest)
        self.int32(game.num_info_pages)
        for page in game.info_pages:
            self.notes(page.notes)
        self.int32(game.num_sites)
        for site in game.sites:
            self.slots(site.num_slots, site.slots)
        self.int32(game.num_factions)
        for faction in game.factions:
            self.faction(faction)
        self.int32(game.num_map_tracks)
        for track in game.map_tracks:
            self.map_track(track)
        self.int32(game.num_party_templates)
        for template in game.party_templates:
            self.party_template(template)
        self.int32(game.num_party_records).int32(game.num_parties_created)
        for record in game.party_records:
            self.party_record(record, version)
        if game.extended is not None:
            for stack in game.extended.player_party_stack_additional_info:
                self.player_party_stack(stack)
            self.int32(game.extended.num_map_event_records)
            self.int32(game.extended.num_map_events_created)
            for event_record in game.extended.map_event_records:
                self.map_event_record(event_record)
        return self


def encode_game(game: Game, *, extra_map_icon_boundary: str = "inclusive") -> bytes:
    version = FormatVersion(game.header.game_version, extra_map_icon_boundary=extra_map_icon_boundary)
    return SaveWriter().game(game, version).getvalue()


def make_text(value: str, *, decode: bool = True) -> Text:
    chars = value.encode("latin-1")
    return Text(num_chars=len(chars), chars=chars, readable=value if decode else None)


def make_note(index: int = 0, text: str = "") -> Note:
    return Note(
        text=make_text(text),
        value=index,
        tableau_material_id=-1,
        available=index % 2 == 0,
    )


def make_notes(prefix: str = "") -> tuple[Note, ...]:
    return tuple(
        make_note(index, f"{prefix}{index}" if prefix else "") for index in range(NOTE_COUNT)
    )


def make_header(version: int = 1162, *, name: str = "Autosave", player: str = "Hero") -> Header:
    return Header(
        magic_number=MAGIC_NUMBER,
        game_version=version,
        module_version=1,
        savegame_name=make_text(name),
        player_name=make_text(player),
        player_level=7,
        date=1.5,
    )


def make_faction(num_factions: int, index: int = 0, slots: Sequence[int] = ()) -> Faction:
    return Faction(
        num_slots=len(slots),
        slots=tuple(slots),
        relations=tuple(0.25 * (index - other) for other in range(num_factions)),
        name=make_text(f"fac_{index}"),
        renamed=False,
        color=0xFFAA0000 + index,
        unused=0,
        notes=make_notes(),
    )


def make_party(
    version: int = 1162,
    *,
    extra_map_icon_boundary: str = "inclusive",
    stacks: Sequence[PartyStack] = (),
    name: str = "Player",
) -> Party:
    format_version = FormatVersion(version, extra_map_icon_boundary=extra_map_icon_boundary)
    has_icon = format_version.has_extra_map_icon
    return Party(
        id=make_text("p_main_party"),
        name=make_text(name),
        flags=0x8000000000000001,
        menu_id=-1,
        party_template_id=0,
        faction_id=2,
        personality=0,
        default_behavior=0,
        current_behavior=1,
        default_behavior_object_id=-1,
        current_behavior_object_id=-1,
        initial_position_x=10.0,
        initial_position_y=-20.5,
        target_position_x=11.0,
        target_position_y=-21.5,
        position_x=12.0,
        position_y=-22.5,
        position_z=0.75,
        num_stacks=len(stacks),
        stacks=tuple(stacks),
        bearing=3.0,
        renamed=False,
        extra_text=make_text(""),
        morale=0.5,
        hunger=0.0,
        unused_1=0.0,
        patrol_radius=4.0,
        initiative=100.0,
        helpfulness=50.0,
        label_visible=1,
        bandit_attraction=1.0,
        marshall=-1 if format_version.has_marshall else None,
        ignore_player_timer=123456789,
        banner_map_icon_id=-1,
        extra_map_icon_id=-1 if has_icon else None,
        extra_map_icon_up_down_distance=0.0 if has_icon else None,
        extra_map_icon_up_down_frequency=0.5 if has_icon else None,
        extra_map_icon_rotate_frequency=0.25 if has_icon else None,
        extra_map_icon_fade_frequency=2.0 if has_icon else None,
        attached_to_party_id=-1,
        unused_2=0 if format_version.has_party_reserved_field else None,
        is_attached=False,
        num_attached_party_ids=2,
        attached_party_ids=(4, 5),
        num_particle_system_ids=1,
        particle_system_ids=(9,),
        notes=make_notes("n"),
        num_slots=3,
        slots=(1, -2, 2**40),
    )


def make_party_record(version: int = 1162, *, valid: bool = True, **party_kwargs) -> PartyRecord:
    if not valid:
        return PartyRecord(valid=0)
    return PartyRecord(valid=1, raw_id=0, id=0, party=make_party(version, **party_kwargs))


def make_game(
    version: int = 1162,
    *,
    num_factions: int = 2,
    party_records: Sequence[PartyRecord] | None = None,
    extended: ExtendedSections | None = None,
    extra_map_icon_boundary: str = "inclusive",
) -> Game:
    """Build a small but fully populated save for ``version``."""
    format_version = FormatVersion(version, extra_map_icon_boundary=extra_map_icon_boundary)
    if party_records is None:
        party_records = (
            make_party_record(
                version,
                extra_map_icon_boundary=extra_map_icon_boundary,
                stacks=(PartyStack(troop_id=0, num_troops=1, num_wounded_troops=0, flags=0),),
            ),
            make_party_record(version, valid=False),
        )
    difficulty = None
    if format_version.has_difficulty_settings:
        difficulty = DifficultySettings(
            combat_difficulty=1,
            combat_difficulty_friendlies=2,
            reduce_combat_ai=0,
            reduce_campaign_ai=1,
            combat_speed=2,
        )
    quest = Quest(
        progression=1,
        giver_troop_id=42,
        number=3,
        start_date=12.5,
        title=make_text("Deliver Wine"),
        text=make_text("Take the wine to the tavern."),
        giver=make_text("Merchant"),
        notes=make_notes("q"),
        num_slots=2,
        slots=(7, 8),
    )
    return Game(
        header=make_header(version),
        game_time=2**33 + 5,
        random_seed=987654,
        save_mode=0,
        difficulty=difficulty,
        date_timer=-12,
        hour=14,
        day=3,
        week=1,
        month=2,
        year=1257,
        unused_0=0,
        global_cloud_amount=0.5,
        global_haze_amount=0.25,
        average_difficulty=1.0,
        average_difficulty_period=24.0,
        unused_1=make_text(""),
        unused_2=False,
        tutorial_flags=3,
        default_prisoner_price=50,
        encountered_party_1_id=-1,
        encountered_party_2_id=-1,
        current_menu_id=5,
        current_site_id=-1,
        current_entry_no=0,
        current_mission_template_id=-1,
        party_creation_min_random_value=0,
        party_creation_max_random_value=100,
        game_log=make_text("Game started."),
        unused_3=(0,) * RESERVED_INT_COUNT,
        unused_4=0,
        rest_period=0.0,
        rest_time_speed=0,
        rest_is_interactive=0,
        rest_remain_attackable=0,
        class_names=tuple(make_text(f"class_{i}", decode=False) for i in range(CLASS_NAME_COUNT)),
        num_global_variables=3,
        global_variables=(0, 1, -1),
        num_triggers=1,
        triggers=(Trigger(status=0, check_timer=10, delay_timer=20, rearm_timer=30),),
        num_simple_triggers=2,
        simple_triggers=(SimpleTrigger(check_timer=100), SimpleTrigger(check_timer=200)),
        num_quests=1,
        quests=(quest,),
        num_info_pages=1,
        info_pages=(InfoPage(notes=make_notes("i")),),
        num_sites=2,
        sites=(Site(num_slots=0, slots=()), Site(num_slots=1, slots=(77,))),
        num_factions=num_factions,
        factions=tuple(make_faction(num_factions, index) for index in range(num_factions)),
        num_map_tracks=1,
        map_tracks=(
            MapTrack(
                position_x=1.0, position_y=2.0, position_z=3.0, rotation=0.5, age=8.0, flags=1
            ),
        ),
        num_party_templates=1,
        party_templates=(
            PartyTemplate(
                num_parties_created=4,
                num_parties_destroyed=1,
                num_parties_destroyed_by_player=1,
                num_slots=0,
                slots=(),
            ),
        ),
        num_party_records=len(party_records),
        num_parties_created=len(party_records),
        party_records=tuple(party_records),
        extended=extended,
    )


def make_extended(num_player_stacks: int = 1) -> ExtendedSections:
    event = MapEvent(
        unused_0=make_text(""),
        type=1,
        position_x=5.0,
        position_y=6.0,
        land_position_x=5.5,
        land_position_y=6.5,
        unused_1=0.0,
        unused_2=0.0,
        attacker_party_id=3,
        defender_party_id=4,
        battle_simulation_timer=99,
        next_battle_simulation=0.5,
    )
    return ExtendedSections(
        player_party_stack_additional_info=tuple(
            PlayerPartyStack(
                experience=10.0,
                num_upgradeable=0,
                troop_dnas=tuple(range(TROOP_DNA_COUNT)),
            )
            for _ in range(num_player_stacks)
        ),
        num_map_event_records=2,
        num_map_events_created=2,
        map_event_records=(
            MapEventRecord(valid=1, id=0, map_event=event),
            MapEventRecord(valid=0),
        ),
    )


def with_header(game: Game, **changes) -> Game:
    return replace(game, header=replace(game.header, **changes))
