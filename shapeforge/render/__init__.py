"""Runtime placement evaluator for generated shape specs."""

from shapeforge.render.placement import RenderElement, affine_matrix, make_placement, place
from shapeforge.utils.affine import apply

__all__ = [
    "RenderElement",
    "affine_matrix",
    "apply",
    "make_placement",
    "place",
]
