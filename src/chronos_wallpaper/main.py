"""Command-line entry point: config in, wallpaper PNG out."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date, datetime, timezone
from pathlib import Path

from chronos_wallpaper import __version__
from chronos_wallpaper.config import load_config
from chronos_wallpaper.engine import compose_wallpaper
from chronos_wallpaper.errors import ChronosError
from chronos_wallpaper.render import SceneRenderer

logger = logging.getLogger(__name__)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid date {value!r}, expected YYYY-MM-DD") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chronos-wallpaper",
        description="Render a year or life progress wallpaper.",
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML config file")
    parser.add_argument(
        "--output", type=Path, default=Path("wallpaper.png"), help="PNG output path"
    )
    parser.add_argument(
        "--date",
        type=_parse_date,
        default=None,
        help="Reference date (YYYY-MM-DD); defaults to now in the configured timezone",
    )
    parser.add_argument("--scene-json", type=Path, default=None, help="Also dump the Scene as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logger.info("Chronos wallpaper v%s", __version__)

    try:
        config = load_config(args.config)
    except (ChronosError, FileNotFoundError) as e:
        logger.error("Failed to load config: %s", e)
        sys.exit(1)

    reference = args.date if args.date is not None else datetime.now(timezone.utc)
    scene = compose_wallpaper(config, reference)

    png = SceneRenderer().render(scene)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(png)
    logger.info("Wrote %s (%dx%d, %d bytes)", args.output, scene.width, scene.height, len(png))

    if args.scene_json is not None:
        args.scene_json.parent.mkdir(parents=True, exist_ok=True)
        args.scene_json.write_text(
            json.dumps(scene.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8"
        )
        logger.info("Wrote scene JSON to %s", args.scene_json)


if __name__ == "__main__":
    main()
