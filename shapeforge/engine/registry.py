"""Shape set registry: named, metadata-tagged collections of shape specs.

The flattened views are recomputed on every call and merge sets in
registry order: a shape in a later set shadows a same-named shape in an
earlier one.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from shapeforge.models.shapes import SetMeta, ShapeFunctionSpec, ShapeSet
from shapeforge.render.placement import PlacementFn, make_placement

logger = logging.getLogger(__name__)


class Registry(BaseModel):
    sets: dict[str, ShapeSet] = Field(default_factory=dict)

    def all_shapes(self) -> dict[str, ShapeFunctionSpec]:
        merged: dict[str, ShapeFunctionSpec] = {}
        for shape_set in self.sets.values():
            merged.update(shape_set.shapes)
        return merged

    def enabled_shapes(self) -> dict[str, ShapeFunctionSpec]:
        merged: dict[str, ShapeFunctionSpec] = {}
        for shape_set in self.sets.values():
            if shape_set.meta.enabled:
                merged.update(shape_set.shapes)
        return merged

    def collisions(self) -> dict[str, list[str]]:
        """Shape names exported by more than one set -> the set keys, in order."""
        owners: dict[str, list[str]] = {}
        for key, shape_set in self.sets.items():
            for name in shape_set.shapes:
                owners.setdefault(name, []).append(key)
        return {name: keys for name, keys in owners.items() if len(keys) > 1}

    def placement_sets(self) -> dict[str, dict[str, Any]]:
        """set key -> {"meta": {...}, "shapes": {name: placement function}}."""
        return {
            key: {
                "meta": shape_set.meta.model_dump(),
                "shapes": placement_table(shape_set.shapes),
            }
            for key, shape_set in self.sets.items()
        }


def placement_table(specs: Mapping[str, ShapeFunctionSpec]) -> dict[str, PlacementFn]:
    return {name: make_placement(spec) for name, spec in specs.items()}


def default_meta(key: str) -> dict[str, Any]:
    return {"name": key.replace("_", " ").title(), "enabled": True}


def build_shape_set(
    key: str,
    shapes: Mapping[str, ShapeFunctionSpec],
    meta: Mapping[str, Any] | None = None,
) -> ShapeSet:
    fields = {**default_meta(key), **(meta or {})}
    fields["multi_color"] = any(spec.is_multi_slot for spec in shapes.values())
    return ShapeSet(key=key, meta=SetMeta(**fields), shapes=dict(shapes))


def build_registry(
    categories: Mapping[str, Mapping[str, ShapeFunctionSpec]],
    set_meta: Mapping[str, Mapping[str, Any]] | None = None,
    strict_collisions: bool = False,
) -> Registry:
    """One ShapeSet per category, in the mapping's order."""
    set_meta = set_meta or {}
    registry = Registry(
        sets={key: build_shape_set(key, shapes, set_meta.get(key)) for key, shapes in categories.items()}
    )

    collisions = registry.collisions()
    for name, keys in collisions.items():
        logger.warning("Shape %r defined in sets %s; %r wins", name, ", ".join(keys), keys[-1])
    if collisions and strict_collisions:
        raise ValueError(f"Shape name collisions across sets: {sorted(collisions)}")

    logger.info(
        "Registry: %d sets, %d shapes (%d enabled)",
        len(registry.sets),
        len(registry.all_shapes()),
        len(registry.enabled_shapes()),
    )
    return registry
