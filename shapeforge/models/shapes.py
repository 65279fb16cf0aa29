"""Shape data model: regions, parsed assets, generated specs and shape sets."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field

# Every asset is authored in this fixed square space, origin top-left
CANONICAL_SIZE = 64.0
CANONICAL_CENTER = CANONICAL_SIZE / 2


class RegionKind(str, enum.Enum):
    CIRCLE = "circle"
    RECT = "rect"
    PATH = "path"
    POLYGON = "polygon"


class ShapeKind(str, enum.Enum):
    SIMPLE = "simple"
    MULTI_SLOT = "multi-slot"


class RegionDescriptor(BaseModel):
    """One drawable primitive, in the 64x64 canonical space (origin top-left)."""

    kind: RegionKind
    # circle
    cx: float | None = None
    cy: float | None = None
    r: float | None = None
    # rect
    x: float | None = None
    y: float | None = None
    width: float | None = None
    height: float | None = None
    # path / polygon, passed through verbatim
    d: str | None = None
    points: str | None = None
    # Color-compositing channel; None for single-region assets
    slot: int | None = Field(default=None, ge=1)


class AssetResult(BaseModel):
    """Parse outcome for one asset file. Region order is paint order."""

    name: str = ""
    classification: ShapeKind
    regions: list[RegionDescriptor] = Field(default_factory=list)
    # Untagged regions found inside a multi-slot asset (excluded from output)
    unslotted_count: int = 0


class ShapeFunctionSpec(BaseModel):
    """Everything the placement evaluator needs to draw one shape."""

    name: str
    classification: ShapeKind
    regions: list[RegionDescriptor] = Field(default_factory=list)

    @property
    def is_multi_slot(self) -> bool:
        return self.classification == ShapeKind.MULTI_SLOT

    @property
    def slots(self) -> list[int]:
        return [r.slot for r in self.regions if r.slot is not None]


class SetMeta(BaseModel):
    name: str
    description: str = ""
    icon: str = ""
    enabled: bool = True
    multi_color: bool = False


class ShapeSet(BaseModel):
    key: str
    meta: SetMeta
    shapes: dict[str, ShapeFunctionSpec] = Field(default_factory=dict)
