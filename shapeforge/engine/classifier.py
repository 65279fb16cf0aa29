"""Shape classifier: picks the generation strategy for a parsed asset."""

from __future__ import annotations

from shapeforge.models.shapes import AssetResult, ShapeKind


def classify(result: AssetResult) -> ShapeKind:
    """MULTI_SLOT if any region carries a slot, SIMPLE otherwise."""
    if any(region.slot is not None for region in result.regions):
        return ShapeKind.MULTI_SLOT
    return ShapeKind.SIMPLE
