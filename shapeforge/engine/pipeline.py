"""Pipeline orchestrator: normalize, extract, assemble, write.

Each category directory is normalized to completion before any of its
assets are parsed. Assets are processed in file-name order so repeated runs
produce identical output.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from shapeforge.config import Settings, get_settings
from shapeforge.engine.codegen import write_module
from shapeforge.engine.generator import generate
from shapeforge.engine.registry import Registry, build_registry
from shapeforge.models.reports import BuildReport, NormalizeReport, SkippedAsset
from shapeforge.models.shapes import ShapeFunctionSpec
from shapeforge.svg.normalizer import normalize_directory
from shapeforge.svg.parser import parse_asset

logger = logging.getLogger(__name__)


def discover_categories(assets_dir: Path, order: list[str] | None = None) -> list[str]:
    """Subdirectories of ``assets_dir``: ``order`` first, the rest alphabetically."""
    if not assets_dir.is_dir():
        logger.warning("Assets directory not found: %s", assets_dir)
        return []
    found = sorted(p.name for p in assets_dir.iterdir() if p.is_dir() and not p.name.startswith("."))
    preferred = [key for key in (order or []) if key in found]
    return preferred + [key for key in found if key not in preferred]


class ShapePipeline:
    """Runs the full asset → generated module transform once."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def normalize(self, dry_run: bool = False) -> list[NormalizeReport]:
        """Inject slot_1 backgrounds into every multi-slot category."""
        reports = []
        for key in discover_categories(self.settings.assets_dir, self.settings.set_order):
            if key in self.settings.multi_slot_categories:
                reports.append(self._normalize_category(key, dry_run))
        return reports

    def extract_directory(
        self,
        directory: Path,
        report: BuildReport,
    ) -> dict[str, ShapeFunctionSpec]:
        """Parse and generate every asset of one category."""
        specs: dict[str, ShapeFunctionSpec] = {}
        for path in sorted(directory.glob("*.svg")):
            name = path.stem
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("  %s: could not read: %s", path.name, e)
                report.skipped.append(SkippedAsset(path=str(path), reason=f"unreadable: {e}"))
                continue

            result = parse_asset(content, name)
            if result is None:
                logger.warning("  %s: no recognisable shape, skipping", path.name)
                report.skipped.append(SkippedAsset(path=str(path), reason="no recognisable shape"))
                continue

            if result.unslotted_count:
                report.warnings.append(
                    f"{path}: {result.unslotted_count} untagged region(s) excluded from multi-slot shape"
                )
            specs[name] = generate(name, result)
        return specs

    def build_registry(self, report: BuildReport, dry_run: bool = False) -> Registry:
        categories: dict[str, dict[str, ShapeFunctionSpec]] = {}
        for key in discover_categories(self.settings.assets_dir, self.settings.set_order):
            directory = self.settings.assets_dir / key
            # Normalizer must finish with a directory before it is parsed
            if key in self.settings.multi_slot_categories:
                report.normalize.append(self._normalize_category(key, dry_run))
            specs = self.extract_directory(directory, report)
            logger.info("Found %d shapes in %s", len(specs), key)
            categories[key] = specs
            report.sets[key] = len(specs)

        registry = build_registry(
            categories,
            self.settings.set_meta,
            strict_collisions=self.settings.strict_collisions,
        )
        report.collisions = registry.collisions()
        return registry

    def run(self, dry_run: bool = False) -> BuildReport:
        """Normalize, extract and write the module. Returns the run summary."""
        start = time.perf_counter()
        report = BuildReport()

        registry = self.build_registry(report, dry_run)
        if not dry_run:
            write_module(registry, self.settings.output_path)
            report.output = str(self.settings.output_path)

        report.elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d shapes in %d sets, %d skipped, %.0fms",
            report.total_shapes,
            len(report.sets),
            len(report.skipped),
            report.elapsed_ms,
        )
        return report

    def _normalize_category(self, key: str, dry_run: bool) -> NormalizeReport:
        logger.info("Normalizing %s", key)
        return normalize_directory(
            self.settings.assets_dir / key,
            fill=self.settings.background_fill,
            dry_run=dry_run,
        )


def create_pipeline(settings: Settings | None = None) -> ShapePipeline:
    """Factory function for creating a pipeline instance."""
    return ShapePipeline(settings=settings)
