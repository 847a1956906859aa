"""Root decoder turning savegame bytes into a Game tree."""
from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from mbsave.core.types import (
    CLASS_NAME_COUNT,
    MAGIC_NUMBER,
    MAX_KNOWN_VERSION,
    MIN_KNOWN_VERSION,
    RESERVED_INT_COUNT,
    FormatVersion,
    MapIconBoundary,
)
from mbsave.data.cursor import ByteCursor
from mbsave.data.errors import InvalidFormatError, UnsupportedVersionWarning
from mbsave.data.source import load_save_bytes, read_stream
from mbsave.domain import DifficultySettings, Game, Header

from .extension_readers import read_extended_sections
from .party_reader import PARTY_RECORD_MIN_SIZE, read_party_record
from .record_readers import (
    FACTION_MIN_SIZE,
    INFO_PAGE_MIN_SIZE,
    MAP_TRACK_SIZE,
    PARTY_TEMPLATE_MIN_SIZE,
    QUEST_MIN_SIZE,
    SIMPLE_TRIGGER_SIZE,
    SITE_MIN_SIZE,
    SLOT_SIZE,
    TRIGGER_SIZE,
    read_faction,
    read_info_page,
    read_map_track,
    read_party_template,
    read_quest,
    read_raw_text,
    read_repeated,
    read_sequence,
    read_simple_trigger,
    read_site,
    read_text,
    read_trigger,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DecodeOptions:
    """Knobs for a single decode pass."""

    extra_map_icon_boundary: MapIconBoundary = "inclusive"
    extended_sections: bool = False


class SaveDecoder:
    """Decodes a savegame in one forward pass.

    Every decode owns its cursor; the decoder itself holds only options, so one
    instance can serve any number of files.
    """

    def __init__(self, options: DecodeOptions | None = None) -> None:
        self._options = options or DecodeOptions()

    @property
    def options(self) -> DecodeOptions:
        return self._options

    def decode_file(self, path: Path | str) -> Game:
        """Read and decode the savegame at ``path``."""
        game = self.decode(load_save_bytes(path))
        logger.info(
            "Decoded %s: version %d, %d factions, %d party records.",
            path,
            game.header.game_version,
            game.num_factions,
            game.num_party_records,
        )
        return game

    def decode_stream(self, stream: BinaryIO) -> Game:
        return self.decode(read_stream(stream))

    def decode(self, data: bytes) -> Game:
        """Decode a complete savegame held in memory."""
        cursor = ByteCursor(data)
        with cursor.scope("header"):
            header = self.read_header(cursor)
        version = FormatVersion(
            header.game_version, extra_map_icon_boundary=self._options.extra_map_icon_boundary
        )
        self._check_version(version)
        return self._read_game(cursor, header, version)

    def read_header(self, cursor: ByteCursor) -> Header:
        """Read the header, stopping right after the magic number if it is wrong."""
        start = cursor.position
        magic_number = cursor.int32("magic_number")
        if magic_number != MAGIC_NUMBER:
            raise InvalidFormatError(
                f"Magic number {magic_number & 0xFFFFFFFF:#010x} is not {MAGIC_NUMBER:#010x}",
                path=cursor.field_path("magic_number"),
                offset=start,
            )
        return Header(
            magic_number=magic_number,
            game_version=cursor.int32("game_version"),
            module_version=cursor.int32("module_version"),
            savegame_name=read_text(cursor, "savegame_name"),
            player_name=read_text(cursor, "player_name"),
            player_level=cursor.int32("player_level"),
            date=cursor.float32("date"),
        )

    def _check_version(self, version: FormatVersion) -> None:
        if version.is_known:
            return
        warnings.warn(
            f"Format version {version.number} is outside the verified range "
            f"{MIN_KNOWN_VERSION}-{MAX_KNOWN_VERSION}; field layout may be wrong.",
            UnsupportedVersionWarning,
            stacklevel=3,
        )

    def _read_game(self, cursor: ByteCursor, header: Header, version: FormatVersion) -> Game:
        game_time = cursor.uint64("game_time")
        random_seed = cursor.int32("random_seed")
        save_mode = cursor.int32("save_mode")
        difficulty = None
        if version.has_difficulty_settings:
            with cursor.scope("difficulty"):
                difficulty = DifficultySettings(
                    combat_difficulty=cursor.int32("combat_difficulty"),
                    combat_difficulty_friendlies=cursor.int32("combat_difficulty_friendlies"),
                    reduce_combat_ai=cursor.int32("reduce_combat_ai"),
                    reduce_campaign_ai=cursor.int32("reduce_campaign_ai"),
                    combat_speed=cursor.int32("combat_speed"),
                )
        date_timer = cursor.int64("date_timer")
        hour = cursor.int32("hour")
        day = cursor.int32("day")
        week = cursor.int32("week")
        month = cursor.int32("month")
        year = cursor.int32("year")
        unused_0 = cursor.int32("unused_0")
        global_cloud_amount = cursor.float32("global_cloud_amount")
        global_haze_amount = cursor.float32("global_haze_amount")
        average_difficulty = cursor.float32("average_difficulty")
        average_difficulty_period = cursor.float32("average_difficulty_period")
        unused_1 = read_text(cursor, "unused_1")
        unused_2 = cursor.boolean("unused_2")
        tutorial_flags = cursor.int32("tutorial_flags")
        default_prisoner_price = cursor.int32("default_prisoner_price")
        encountered_party_1_id = cursor.int32("encountered_party_1_id")
        encountered_party_2_id = cursor.int32("encountered_party_2_id")
        current_menu_id = cursor.int32("current_menu_id")
        current_site_id = cursor.int32("current_site_id")
        current_entry_no = cursor.int32("current_entry_no")
        current_mission_template_id = cursor.int32("current_mission_template_id")
        party_creation_min_random_value = cursor.int32("party_creation_min_random_value")
        party_creation_max_random_value = cursor.int32("party_creation_max_random_value")
        game_log = read_text(cursor, "game_log")
        unused_3 = cursor.int32_array(RESERVED_INT_COUNT, "unused_3")
        unused_4 = cursor.int64("unused_4")
        rest_period = cursor.float32("rest_period")
        rest_time_speed = cursor.int32("rest_time_speed")
        rest_is_interactive = cursor.int32("rest_is_interactive")
        rest_remain_attackable = cursor.int32("rest_remain_attackable")
        class_names = read_repeated(cursor, "class_names", read_raw_text, CLASS_NAME_COUNT)
        logger.debug("Scalar block ends at offset %d", cursor.position)

        num_global_variables = cursor.count("num_global_variables", SLOT_SIZE)
        global_variables = cursor.int64_array(num_global_variables, "global_variables")
        num_triggers, triggers = read_sequence(cursor, "triggers", read_trigger, TRIGGER_SIZE)
        num_simple_triggers, simple_triggers = read_sequence(
            cursor, "simple_triggers", read_simple_trigger, SIMPLE_TRIGGER_SIZE
        )
        num_quests, quests = read_sequence(cursor, "quests", read_quest, QUEST_MIN_SIZE)
        num_info_pages, info_pages = read_sequence(
            cursor, "info_pages", read_info_page, INFO_PAGE_MIN_SIZE
        )
        num_sites, sites = read_sequence(cursor, "sites", read_site, SITE_MIN_SIZE)
        num_factions = cursor.count("num_factions", FACTION_MIN_SIZE)
        factions = read_repeated(
            cursor, "factions", lambda c: read_faction(c, num_factions), num_factions
        )
        num_map_tracks, map_tracks = read_sequence(
            cursor, "map_tracks", read_map_track, MAP_TRACK_SIZE
        )
        num_party_templates, party_templates = read_sequence(
            cursor, "party_templates", read_party_template, PARTY_TEMPLATE_MIN_SIZE
        )
        num_party_records = cursor.count("num_party_records", PARTY_RECORD_MIN_SIZE)
        num_parties_created = cursor.int32("num_parties_created")
        party_records = read_repeated(
            cursor,
            "party_records",
            lambda c: read_party_record(c, version),
            num_party_records,
        )
        logger.debug(
            "Sections: %d quests, %d sites, %d factions, %d party templates, %d party records",
            num_quests,
            num_sites,
            num_factions,
            num_party_templates,
            num_party_records,
        )

        extended = None
        if self._options.extended_sections:
            extended = read_extended_sections(cursor, party_records[0] if party_records else None)
        trailing_size = cursor.remaining
        if trailing_size:
            logger.debug("Leaving %d trailing bytes undecoded", trailing_size)

        return Game(
            header=header,
            game_time=game_time,
            random_seed=random_seed,
            save_mode=save_mode,
            difficulty=difficulty,
            date_timer=date_timer,
            hour=hour,
            day=day,
            week=week,
            month=month,
            year=year,
            unused_0=unused_0,
            global_cloud_amount=global_cloud_amount,
            global_haze_amount=global_haze_amount,
            average_difficulty=average_difficulty,
            average_difficulty_period=average_difficulty_period,
            unused_1=unused_1,
            unused_2=unused_2,
            tutorial_flags=tutorial_flags,
            default_prisoner_price=default_prisoner_price,
            encountered_party_1_id=encountered_party_1_id,
            encountered_party_2_id=encountered_party_2_id,
            current_menu_id=current_menu_id,
            current_site_id=current_site_id,
            current_entry_no=current_entry_no,
            current_mission_template_id=current_mission_template_id,
            party_creation_min_random_value=party_creation_min_random_value,
            party_creation_max_random_value=party_creation_max_random_value,
            game_log=game_log,
            unused_3=unused_3,
            unused_4=unused_4,
            rest_period=rest_period,
            rest_time_speed=rest_time_speed,
            rest_is_interactive=rest_is_interactive,
            rest_remain_attackable=rest_remain_attackable,
            class_names=class_names,
            num_global_variables=num_global_variables,
            global_variables=global_variables,
            num_triggers=num_triggers,
            triggers=triggers,
            num_simple_triggers=num_simple_triggers,
            simple_triggers=simple_triggers,
            num_quests=num_quests,
            quests=quests,
            num_info_pages=num_info_pages,
            info_pages=info_pages,
            num_sites=num_sites,
            sites=sites,
            num_factions=num_factions,
            factions=factions,
            num_map_tracks=num_map_tracks,
            map_tracks=map_tracks,
            num_party_templates=num_party_templates,
            party_templates=party_templates,
            num_party_records=num_party_records,
            num_parties_created=num_parties_created,
            party_records=party_records,
            extended=extended,
            trailing_size=trailing_size,
        )


def decode_save(
    data: bytes,
    *,
    extra_map_icon_boundary: MapIconBoundary = "inclusive",
    extended_sections: bool = False,
) -> Game:
    """Decode ``data`` with a one-off SaveDecoder."""
    options = DecodeOptions(
        extra_map_icon_boundary=extra_map_icon_boundary,
        extended_sections=extended_sections,
    )
    return SaveDecoder(options).decode(data)
