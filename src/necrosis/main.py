from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, TextIO

from .builder import DungeonBuilder
from .config import Config, default_config, load_config
from .evaluation import layout_payload
from .layout import DungeonLayout
from .logging_config import setup_logging
from .render import render_ascii


class StreamPlacement:
    """Writes layouts to a text stream instead of a world.

    ``place`` emits world-space blocks; ``preview`` emits the grid layout as
    JSON or as ASCII slices.
    """

    def __init__(self, stream: TextIO, output_format: str = "json", level: Optional[int] = None) -> None:
        self._stream = stream
        self._format = output_format
        self._level = level

    def place(self, layout: DungeonLayout) -> None:
        if self._format == "ascii":
            self.preview(layout)
            return
        payload = {
            "origin": list(layout.origin),
            "entry": list(layout.to_world(layout.entry)),
            "blocks": [[x, y, z, state.value] for (x, y, z), state in layout.world_cells()],
            "stats": layout.stats.to_dict(),
        }
        print(json.dumps(payload, indent=2), file=self._stream)

    def preview(self, layout: DungeonLayout) -> None:
        if self._format == "ascii":
            print(render_ascii(layout, self._level), file=self._stream)
            stats = layout.stats
            print(
                f"\nRooms {stats.rooms_placed}/{stats.rooms_requested}, "
                f"turtles retired {stats.turtles_retired}/{stats.turtles_spawned}, "
                f"steps {stats.steps_run}, seed {stats.seed}",
                file=self._stream,
            )
        else:
            print(json.dumps(layout_payload(layout), indent=2), file=self._stream)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="necrosis",
        description="Carve a turtle-generated dungeon around an origin point.",
    )
    parser.add_argument("--config", type=Path, default=None,
                        help="Path to a TOML config file (built-in defaults when omitted).")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for reproducible output; overrides defaults.seed from the config.")
    parser.add_argument("--log-level", type=str.upper, default=None,
                        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
                        help="Logging level; overrides logging.level from the config.")
    parser.add_argument("--log-file", type=Path, default=None,
                        help="Also write the log to this file.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--origin", type=int, nargs=3, default=(0, 0, 0), metavar=("X", "Y", "Z"),
                         help="World coordinate the dungeon grows from.")
        sub.add_argument("--format", choices=("json", "ascii"), default="json",
                         help="Choose the output format.")
        sub.add_argument("--level", type=int, default=None,
                         help="Render only this grid level in ascii output.")
        sub.add_argument("--candidates", type=int, default=None,
                         help="Number of seeds to sample before keeping the best-scoring layout.")

    new_parser = subparsers.add_parser("new", help="Generate a dungeon with the configured defaults.")
    add_common(new_parser)

    preview_parser = subparsers.add_parser("preview", help="Generate a dungeon for preview.")
    add_common(preview_parser)
    preview_parser.add_argument("size", type=int, nargs="?", default=None)
    preview_parser.add_argument("iterations", type=int, nargs="?", default=None)
    preview_parser.add_argument("turtles", type=int, nargs="?", default=None)
    preview_parser.add_argument("rooms", type=int, nargs="?", default=None)
    return parser


def _load(parser: argparse.ArgumentParser, path: Optional[Path]) -> Config:
    if path is None:
        return default_config()
    try:
        return load_config(path)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))


def main(argv: list[str] | None = None, stream: TextIO | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = _load(parser, args.config)
    if args.candidates is not None:
        config = replace(config, evaluation=replace(config.evaluation, candidate_count=max(args.candidates, 1)))
    setup_logging(args.log_level or config.logging.level, args.log_file)
    stream = stream or sys.stdout

    placement = StreamPlacement(stream, args.format, args.level)
    builder = DungeonBuilder(config, placement=placement, seed=args.seed)

    try:
        if args.command == "new":
            builder.generate_at(tuple(args.origin))
        else:
            builder.generate_preview_at(
                tuple(args.origin), args.size, args.iterations, args.turtles, args.rooms
            )
    except ValueError as exc:
        # InvalidParameter, or a --level outside the generated grid.
        print(f"necrosis: error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
