"""Command-line front end for inspecting savegames."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Sequence

from mbsave.data.errors import DecodeError, SaveLoadError
from mbsave.data.paths import resolve_savegame_path
from mbsave.domain import Game
from mbsave.presentation.cli import config
from mbsave.presentation.cli.render import debug_enabled, render_summary
from mbsave.services.export import dump_json, section_names, select_section
from mbsave.services.save_decoder import DecodeOptions, SaveDecoder

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mbsave", description="Decode Mount&Blade Warband savegame files."
    )
    parser.add_argument("--config", type=Path, help="Path to an alternate config file.")
    parser.add_argument("--savegame-dir", type=Path, help="Directory used to resolve bare save names.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    info = subparsers.add_parser("info", help="Print a short summary of a savegame.")
    info.add_argument("save", help="Savegame path or name inside the savegame directory.")
    _add_decode_arguments(info)

    dump = subparsers.add_parser("dump", help="Write the decoded savegame as JSON.")
    dump.add_argument("save", help="Savegame path or name inside the savegame directory.")
    dump.add_argument("-o", "--output", type=Path, help="Write JSON here instead of stdout.")
    dump.add_argument("--indent", type=int, help="JSON indentation (0 for compact).")
    dump.add_argument(
        "--section",
        choices=section_names(),
        metavar="NAME",
        help="Only dump one top-level field, e.g. factions or party_records.",
    )
    _add_decode_arguments(dump)
    return parser


def _add_decode_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--map-icon-boundary",
        choices=("inclusive", "exclusive"),
        help="Whether version 1137 saves carry the extra map icon fields.",
    )
    parser.add_argument(
        "--extended",
        action="store_true",
        help="Also decode the player stack info and map event sections.",
    )


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or debug_enabled() else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.captureWarnings(True)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    settings = config.load_config(args.config)

    savegame_dir = args.savegame_dir or settings["savegame_dir"]
    path = resolve_savegame_path(args.save, savegame_dir)
    decoder = SaveDecoder(_build_options(args, settings))
    try:
        game = decoder.decode_file(path)
    except SaveLoadError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    except DecodeError as exc:
        print(f"error: {path}: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    if args.command == "info":
        for line in render_summary(game):
            print(line)
        return EXIT_OK
    return _dump(game, args, settings)


def _build_options(args: argparse.Namespace, settings: Dict[str, Any]) -> DecodeOptions:
    boundary = args.map_icon_boundary or settings["extra_map_icon_boundary"]
    return DecodeOptions(extra_map_icon_boundary=boundary, extended_sections=args.extended)


def _dump(game: Game, args: argparse.Namespace, settings: Dict[str, Any]) -> int:
    indent = args.indent if args.indent is not None else settings["indent"]
    text = dump_json(select_section(game, args.section), indent=indent or None)
    if args.output is None:
        print(text)
        return EXIT_OK
    try:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text + "\n", encoding="utf-8")
    except OSError as exc:
        print(f"error: unable to write {args.output}: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    logger.info("Wrote %s", args.output)
    return EXIT_OK
