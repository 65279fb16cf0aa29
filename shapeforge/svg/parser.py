"""Asset parser: raw SVG text -> AssetResult.

Slot-tagged regions (``id="slot_N"``) make a multi-slot asset; otherwise the
first circle, rect, path or polygon (in that priority) makes a simple asset.
"""

from __future__ import annotations

import logging
import re

from svgpathtools import parse_path

from shapeforge.models.shapes import (
    CANONICAL_CENTER,
    CANONICAL_SIZE,
    AssetResult,
    RegionDescriptor,
    RegionKind,
    ShapeKind,
)
from shapeforge.svg.tokenizer import Tag, iter_tags

logger = logging.getLogger(__name__)

# Design tools de-duplicate repeated layer names as slot_2_2, slot_2_3, ...
_SLOT_ID_RE = re.compile(r"slot_([1-9]\d*)(?:_\d+)?")

REGION_TAGS = {kind.value: kind for kind in RegionKind}

# Defaults for geometry missing from slot-tagged regions
_RECT_DEFAULTS = {"x": 0.0, "y": 0.0, "width": CANONICAL_SIZE, "height": CANONICAL_SIZE}
_CIRCLE_DEFAULTS = {"cx": CANONICAL_CENTER, "cy": CANONICAL_CENTER, "r": CANONICAL_SIZE / 4}

# Single-region detection priority
_SIMPLE_PRIORITY = (RegionKind.CIRCLE, RegionKind.RECT, RegionKind.PATH, RegionKind.POLYGON)


def slot_number(element_id: str | None) -> int | None:
    """``slot_3`` and ``slot_3_2`` -> 3. Anything else (including ``slot_0``) -> None."""
    if not element_id:
        return None
    m = _SLOT_ID_RE.fullmatch(element_id.strip())
    return int(m.group(1)) if m else None


def region_tags(svg_text: str) -> list[Tag]:
    """Painted region elements of the document, in document order."""
    return [
        tag
        for tag in iter_tags(svg_text)
        if tag.is_element and tag.name in REGION_TAGS and not tag.hidden
    ]


def parse_asset(svg_text: str, name: str = "") -> AssetResult | None:
    """Parse one asset. Returns None when no region can be recognised."""
    tags = region_tags(svg_text)

    slotted: list[RegionDescriptor] = []
    unslotted = 0
    for tag in tags:
        slot = slot_number(tag.attrs.get("id"))
        if slot is None:
            unslotted += 1
            continue
        region = _slotted_region(tag, slot, name)
        if region is not None:
            slotted.append(region)

    if slotted:
        # Background paints first; everything else keeps authored stacking order
        ordered = [r for r in slotted if r.slot == 1] + [r for r in slotted if r.slot != 1]
        if unslotted:
            logger.warning(
                "%s: %d untagged region(s) in a multi-slot asset are excluded",
                name or "<asset>",
                unslotted,
            )
        return AssetResult(
            name=name,
            classification=ShapeKind.MULTI_SLOT,
            regions=ordered,
            unslotted_count=unslotted,
        )

    for kind in _SIMPLE_PRIORITY:
        for tag in tags:
            if tag.name != kind.value:
                continue
            region = _simple_region(tag, kind, name)
            if region is not None:
                return AssetResult(name=name, classification=ShapeKind.SIMPLE, regions=[region])

    logger.debug("%s: no recognisable region", name or "<asset>")
    return None


def _slotted_region(tag: Tag, slot: int, name: str) -> RegionDescriptor | None:
    kind = REGION_TAGS[tag.name]
    attrs = tag.attrs

    if kind == RegionKind.RECT:
        geometry = {k: _number(attrs, k, default, name) for k, default in _RECT_DEFAULTS.items()}
        return RegionDescriptor(kind=kind, slot=slot, **geometry)

    if kind == RegionKind.CIRCLE:
        geometry = {k: _number(attrs, k, default, name) for k, default in _CIRCLE_DEFAULTS.items()}
        return RegionDescriptor(kind=kind, slot=slot, **geometry)

    if kind == RegionKind.PATH:
        d = attrs.get("d")
        if not d:
            logger.warning("%s: slot_%d path has no d attribute, dropped", name, slot)
            return None
        _check_path(d, name)
        return RegionDescriptor(kind=kind, slot=slot, d=d)

    points = attrs.get("points")
    if not points:
        logger.warning("%s: slot_%d polygon has no points attribute, dropped", name, slot)
        return None
    return RegionDescriptor(kind=kind, slot=slot, points=points)


def _simple_region(tag: Tag, kind: RegionKind, name: str) -> RegionDescriptor | None:
    attrs = tag.attrs

    if kind == RegionKind.CIRCLE:
        r = _optional_number(attrs, "r")
        if r is None:
            return None
        return RegionDescriptor(
            kind=kind,
            cx=_number(attrs, "cx", CANONICAL_CENTER, name),
            cy=_number(attrs, "cy", CANONICAL_CENTER, name),
            r=r,
        )

    if kind == RegionKind.RECT:
        width = _optional_number(attrs, "width")
        height = _optional_number(attrs, "height")
        if width is None or height is None:
            return None
        return RegionDescriptor(
            kind=kind,
            x=_number(attrs, "x", 0.0, name),
            y=_number(attrs, "y", 0.0, name),
            width=width,
            height=height,
        )

    if kind == RegionKind.PATH:
        d = attrs.get("d")
        if not d:
            return None
        _check_path(d, name)
        return RegionDescriptor(kind=kind, d=d)

    points = attrs.get("points")
    if not points:
        return None
    return RegionDescriptor(kind=kind, points=points)


def _optional_number(attrs: dict[str, str], key: str) -> float | None:
    raw = attrs.get(key)
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _number(attrs: dict[str, str], key: str, default: float, name: str) -> float:
    raw = attrs.get(key)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("%s: %s=%r is not a number, using %s", name, key, raw, default)
        return default


def _check_path(d: str, name: str) -> None:
    """Path data is passed through verbatim; only warn when it does not parse."""
    try:
        parse_path(d)
    except Exception as e:
        logger.warning("%s: path data does not parse (%s), kept verbatim", name, e)
