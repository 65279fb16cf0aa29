"""Renderer generator: parsed assets become ShapeFunctionSpecs.

Specs are plain data; ``shapeforge.render.placement`` evaluates them, so
generation never writes per-shape function bodies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from shapeforge.engine.classifier import classify
from shapeforge.models.shapes import AssetResult, ShapeFunctionSpec, ShapeKind

logger = logging.getLogger(__name__)

Generator = Callable[[str, AssetResult], ShapeFunctionSpec]


def generate_simple(name: str, result: AssetResult) -> ShapeFunctionSpec:
    if len(result.regions) != 1 or result.regions[0].slot is not None:
        raise ValueError(f"{name}: a simple shape needs exactly one untagged region")
    return ShapeFunctionSpec(
        name=name,
        classification=ShapeKind.SIMPLE,
        regions=list(result.regions),
    )


def generate_multi_slot(name: str, result: AssetResult) -> ShapeFunctionSpec:
    if not result.regions or any(r.slot is None for r in result.regions):
        raise ValueError(f"{name}: a multi-slot shape needs slot-tagged regions only")
    return ShapeFunctionSpec(
        name=name,
        classification=ShapeKind.MULTI_SLOT,
        regions=list(result.regions),
    )


_STRATEGIES: dict[ShapeKind, Generator] = {
    ShapeKind.SIMPLE: generate_simple,
    ShapeKind.MULTI_SLOT: generate_multi_slot,
}


def select_generator(kind: ShapeKind) -> Generator:
    return _STRATEGIES[kind]


def generate(name: str, result: AssetResult) -> ShapeFunctionSpec:
    kind = classify(result)
    spec = select_generator(kind)(name, result)
    logger.debug("Generated %s (%s, %d region(s))", name, kind.value, len(spec.regions))
    return spec
