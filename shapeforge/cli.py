"""
shapeforge command line.

Usage:
  shapeforge build                         # normalize + extract, write module
  shapeforge build --output shape_sets.py  # custom output path
  shapeforge normalize                     # only inject slot_1 backgrounds
  shapeforge build --dry-run               # report without writing anything
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from dotenv import load_dotenv

from shapeforge.config import Settings
from shapeforge.engine.pipeline import create_pipeline

logger = logging.getLogger("shapeforge")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shapeforge",
        description="Extract SVG shape assets into a generated shape-sets module.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="build",
        choices=["build", "normalize"],
        help="build (default) or normalize only",
    )
    parser.add_argument("--assets-dir", type=Path, help="Directory with one subdirectory per shape set")
    parser.add_argument("--output", type=Path, help="Path of the generated module")
    parser.add_argument("--dry-run", action="store_true", help="Report without writing files")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    load_dotenv()
    overrides = {}
    if args.assets_dir is not None:
        overrides["assets_dir"] = args.assets_dir
    if args.output is not None:
        overrides["output_path"] = args.output
    settings = Settings(**overrides)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    pipeline = create_pipeline(settings)

    if args.command == "normalize":
        reports = pipeline.normalize(dry_run=args.dry_run)
        injected = sum(r.injected for r in reports)
        failed = sum(r.failed for r in reports)
        logger.info("Normalize complete: %d injected, %d failed", injected, failed)
        return 0

    try:
        report = pipeline.run(dry_run=args.dry_run)
    except OSError as e:
        logger.error("Could not write %s: %s", settings.output_path, e)
        return 1
    except ValueError as e:
        logger.error("Build failed: %s", e)
        return 1

    for skipped in report.skipped:
        logger.warning("Skipped %s (%s)", skipped.path, skipped.reason)
    for name, keys in report.collisions.items():
        logger.warning("Name collision: %s in %s", name, ", ".join(keys))
    for key, count in report.sets.items():
        logger.info("  %s: %d shapes", key, count)
    return 0
