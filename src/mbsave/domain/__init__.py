"""Decoded record exports."""

from .extensions import MapEvent, MapEventRecord, PlayerPartyStack
from .game import DifficultySettings, ExtendedSections, Game
from .party import Party, PartyRecord, PartyStack
from .records import (
    Faction,
    Header,
    InfoPage,
    MapTrack,
    Note,
    PartyTemplate,
    Quest,
    SimpleTrigger,
    Site,
    Text,
    Trigger,
)

__all__ = [
    "DifficultySettings",
    "ExtendedSections",
    "Faction",
    "Game",
    "Header",
    "InfoPage",
    "MapEvent",
    "MapEventRecord",
    "MapTrack",
    "Note",
    "Party",
    "PartyRecord",
    "PartyStack",
    "PartyTemplate",
    "PlayerPartyStack",
    "Quest",
    "SimpleTrigger",
    "Site",
    "Text",
    "Trigger",
]
