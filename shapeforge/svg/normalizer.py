"""Slot normalizer: make sure every multi-slot asset has a slot_1 background.

The background rect is injected as the first child of the outermost <g> so
that the group's clip-path also clips the background. Assets without such a
group get it as the first child of <svg>. Files are rewritten only when the
content changes, so running the normalizer twice is a no-op.
"""

from __future__ import annotations

import logging
from pathlib import Path

from shapeforge.models.reports import NormalizeOutcome, NormalizeReport, NormalizeResult
from shapeforge.models.shapes import CANONICAL_SIZE
from shapeforge.render.placement import format_number
from shapeforge.svg.parser import region_tags, slot_number
from shapeforge.svg.tokenizer import iter_tags

logger = logging.getLogger(__name__)


def background_rect(fill: str = "#FFFFFF") -> str:
    """Full-canvas slot_1 rect; always the canonical size since every slot
    renders in the canonical space."""
    side = format_number(CANONICAL_SIZE)
    return f'<rect id="slot_1" width="{side}" height="{side}" fill="{fill}"/>'


def has_background(svg_text: str) -> bool:
    return any(slot_number(tag.attrs.get("id")) == 1 for tag in region_tags(svg_text))


def inject_background(svg_text: str, fill: str = "#FFFFFF") -> tuple[str, str | None]:
    """Return (new_text, anchor). anchor is "group", "root", or None if unchanged.

    Raises ValueError when the document has no <svg> root to insert into.
    """
    if has_background(svg_text):
        return svg_text, None

    root = None
    group = None
    for tag in iter_tags(svg_text):
        if not tag.is_element:
            continue
        if root is None:
            if tag.name == "svg":
                root = tag
            continue
        if tag.name == "g" and tag.kind == "start" and tag.depth == root.depth + 1:
            group = tag
            break

    rect = background_rect(fill)
    if group is not None:
        pos = group.end
        return svg_text[:pos] + "\n" + rect + svg_text[pos:], "group"

    if root is not None and root.kind == "start":
        pos = root.end
        return svg_text[:pos] + "\n" + rect + "\n" + svg_text[pos:], "root"

    raise ValueError("no insertion point for background (missing <svg> root)")


def normalize_file(
    path: Path,
    fill: str = "#FFFFFF",
    dry_run: bool = False,
) -> NormalizeResult:
    try:
        content = path.read_text(encoding="utf-8")
        new_content, anchor = inject_background(content, fill)
        if anchor is None:
            logger.info("  %s: slot_1 already present, skipping", path.name)
            return NormalizeResult(path=str(path), outcome=NormalizeOutcome.SKIPPED)
        if not dry_run:
            path.write_text(new_content, encoding="utf-8")
        logger.info("  %s: injected slot_1 background (%s)", path.name, anchor)
        return NormalizeResult(path=str(path), outcome=NormalizeOutcome.INJECTED, anchor=anchor)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        logger.warning("  %s: FAILED: %s", path.name, e)
        return NormalizeResult(path=str(path), outcome=NormalizeOutcome.FAILED, error=str(e))


def normalize_directory(
    directory: Path,
    fill: str = "#FFFFFF",
    dry_run: bool = False,
) -> NormalizeReport:
    """Normalize every *.svg in ``directory``; one bad file never stops the batch."""
    report = NormalizeReport(directory=str(directory))
    if not directory.is_dir():
        logger.warning("Normalize: directory not found: %s", directory)
        return report

    for path in sorted(directory.glob("*.svg")):
        report.results.append(normalize_file(path, fill, dry_run))

    logger.info(
        "Normalized %s: %d injected, %d skipped, %d failed",
        directory,
        report.injected,
        report.skipped,
        report.failed,
    )
    return report
