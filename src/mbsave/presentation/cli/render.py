"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
from typing import List

from mbsave.domain import Game, Header, Text


def debug_enabled() -> bool:
    """Return True only when MBSAVE_DEBUG is explicitly set to '1'."""
    return os.getenv("MBSAVE_DEBUG") == "1"


def _text(value: Text) -> str:
    if value.readable is not None:
        return value.readable
    return value.chars.hex()


def render_header(header: Header) -> List[str]:
    return [
        f"Savegame:       {_text(header.savegame_name)}",
        f"Player:         {_text(header.player_name)} (level {header.player_level})",
        f"Game version:   {header.game_version}",
        f"Module version: {header.module_version}",
    ]


def render_summary(game: Game) -> List[str]:
    """Return a short multi-line description of a decoded save."""
    lines = render_header(game.header)
    lines.append(
        f"Date:           day {game.day}, week {game.week}, month {game.month}, "
        f"year {game.year}, {game.hour:02d}:00"
    )
    valid_parties = sum(1 for record in game.party_records if record.is_valid)
    lines.extend(
        [
            f"Quests:         {game.num_quests}",
            f"Sites:          {game.num_sites}",
            f"Factions:       {game.num_factions}",
            f"Party records:  {valid_parties} valid of {game.num_party_records}",
        ]
    )
    if game.difficulty is not None:
        lines.append(f"Combat speed:   {game.difficulty.combat_speed}")
    if game.trailing_size:
        lines.append(f"Undecoded tail: {game.trailing_size} bytes")
    return lines
