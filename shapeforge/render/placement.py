"""Generic placement evaluator.

One function interprets every ShapeFunctionSpec: given a placement
(center x/y, size, horizontal/vertical flip) it maps the spec's canonical
64x64 geometry to drawable elements. Simple shapes yield one element,
multi-slot shapes a list in paint order with each element's slot.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Union

from numpy.typing import NDArray

from shapeforge.models.shapes import (
    CANONICAL_CENTER,
    CANONICAL_SIZE,
    RegionDescriptor,
    RegionKind,
    ShapeFunctionSpec,
    ShapeKind,
)
from shapeforge.utils.affine import placement_matrix


@dataclass
class RenderElement:
    """One drawable region. Holds a mutable attrs dict, so it is not hashable."""

    type: str
    attrs: dict[str, Any] = field(default_factory=dict)
    slot: int | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type, "attrs": dict(self.attrs)}
        if self.slot is not None:
            out["slot"] = self.slot
        return out


Placement = Union[RenderElement, list[RenderElement]]
PlacementFn = Callable[..., Placement]


def format_number(value: float) -> str:
    """Exact text form of a number: integral values lose the trailing ``.0``."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def transform_chain(x: float, y: float, scale_x: float, scale_y: float) -> str:
    c = format_number(-CANONICAL_CENTER)
    return (
        f"translate({format_number(x)}, {format_number(y)}) "
        f"scale({format_number(scale_x)}, {format_number(scale_y)}) "
        f"translate({c}, {c})"
    )


def affine_matrix(x: float, y: float, scale_x: float, scale_y: float) -> NDArray:
    """The path/polygon transform chain as a 3x3 matrix, same arguments as
    ``transform_chain``."""
    return placement_matrix(x, y, scale_x, scale_y, CANONICAL_CENTER)


def place(
    spec: ShapeFunctionSpec,
    x: float,
    y: float,
    size: float,
    flip_h: float = 1,
    flip_v: float = 1,
) -> Placement:
    scale = size / CANONICAL_SIZE
    scale_x = scale * flip_h
    scale_y = scale * flip_v

    if spec.classification == ShapeKind.SIMPLE:
        return _place_simple(spec.regions[0], x, y, size, scale, scale_x, scale_y)
    return [_place_slotted(r, x, y, scale, scale_x, scale_y) for r in spec.regions]


def make_placement(spec: ShapeFunctionSpec) -> PlacementFn:
    """Bind ``spec`` into a ``(x, y, size, flip_h=1, flip_v=1)`` callable."""

    def placement(x: float, y: float, size: float, flip_h: float = 1, flip_v: float = 1) -> Placement:
        return place(spec, x, y, size, flip_h, flip_v)

    placement.__name__ = spec.name
    placement.__qualname__ = spec.name
    placement.spec = spec  # type: ignore[attr-defined]
    return placement


def _place_simple(
    region: RegionDescriptor,
    x: float,
    y: float,
    size: float,
    scale: float,
    scale_x: float,
    scale_y: float,
) -> RenderElement:
    if region.kind == RegionKind.CIRCLE:
        # Centered on the placement point: flips do not change a circle
        return RenderElement("circle", {"cx": x, "cy": y, "r": region.r * abs(scale)})

    if region.kind == RegionKind.RECT:
        return RenderElement(
            "rect",
            {"x": x - size / 2, "y": y - size / 2, "width": size, "height": size},
        )

    return _place_opaque(region, x, y, scale_x, scale_y)


def _place_slotted(
    region: RegionDescriptor,
    x: float,
    y: float,
    scale: float,
    scale_x: float,
    scale_y: float,
) -> RenderElement:
    c = CANONICAL_CENTER

    if region.kind == RegionKind.RECT:
        # Mirroring swaps the near and far edges; the top-left is the smaller one
        left = min((region.x - c) * scale_x, (region.x + region.width - c) * scale_x)
        top = min((region.y - c) * scale_y, (region.y + region.height - c) * scale_y)
        attrs = {
            "x": x + left,
            "y": y + top,
            "width": region.width * abs(scale_x),
            "height": region.height * abs(scale_y),
        }
        return RenderElement("rect", attrs, region.slot)

    if region.kind == RegionKind.CIRCLE:
        attrs = {
            "cx": x + (region.cx - c) * scale_x,
            "cy": y + (region.cy - c) * scale_y,
            "r": region.r * abs(scale),
        }
        return RenderElement("circle", attrs, region.slot)

    return _place_opaque(region, x, y, scale_x, scale_y)


def _place_opaque(
    region: RegionDescriptor,
    x: float,
    y: float,
    scale_x: float,
    scale_y: float,
) -> RenderElement:
    """Paths and polygons: data verbatim, placement carried by the transform."""
    transform = transform_chain(x, y, scale_x, scale_y)
    if region.kind == RegionKind.PATH:
        return RenderElement("path", {"d": region.d, "transform": transform}, region.slot)
    return RenderElement("polygon", {"points": region.points, "transform": transform}, region.slot)
