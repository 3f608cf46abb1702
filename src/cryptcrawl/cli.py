from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .dungeon import build_level
from .exceptions import CryptCrawlError
from .logging_config import configure_logging
from .settings import Settings

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cryptcrawl",
        description="Generate a dungeon level and print it as ASCII",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, default=None, help="YAML settings file to overlay on the defaults")
    parser.add_argument("--seed", type=int, default=None, help="Master run seed")
    parser.add_argument("--depth", type=int, default=1, help="Dungeon depth to generate")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--max-rooms", type=int, default=None)
    parser.add_argument("--json", action="store_true", help="Print a JSON summary instead of the map")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Settings from files and environment, with command-line values on top."""
    settings = Settings.load(user_path=args.config)
    overrides = {
        key: value
        for key, value in (
            ("seed", args.seed),
            ("width", args.width),
            ("height", args.height),
            ("max_rooms", args.max_rooms),
        )
        if value is not None
    }
    if overrides:
        settings.generation = dataclasses.replace(settings.generation, **overrides)
    return settings


def main(argv=None) -> int:
    args = parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    configure_logging(level)

    try:
        settings = build_settings(args)
        dmap = build_level(settings.generation, args.depth)
    except (CryptCrawlError, ValueError) as e:
        logger.error("Level generation failed: %s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.json:
        summary = {
            "depth": dmap.depth,
            "width": dmap.width,
            "height": dmap.height,
            "seed": settings.generation.seed,
            "rooms": [[r.x1, r.y1, r.x2, r.y2] for r in dmap.rooms],
            "stairs": list(dmap.stairs_position() or ()),
        }
        print(json.dumps(summary, indent=2, sort_keys=True))
    else:
        print("\n".join(dmap.to_str_lines()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
