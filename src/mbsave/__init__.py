"""Decoder for Mount&Blade Warband savegame files."""
from __future__ import annotations

__version__ = "0.3.0"
