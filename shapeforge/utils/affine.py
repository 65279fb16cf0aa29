"""3x3 homogeneous affine matrices for 2D placement transforms."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def translation(tx: float, ty: float) -> NDArray[np.float64]:
    return np.array([[1.0, 0.0, tx], [0.0, 1.0, ty], [0.0, 0.0, 1.0]])


def scaling(sx: float, sy: float) -> NDArray[np.float64]:
    return np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]])


def placement_matrix(
    x: float,
    y: float,
    scale_x: float,
    scale_y: float,
    center: float = 32.0,
) -> NDArray[np.float64]:
    """translate(x, y) · scale(scale_x, scale_y) · translate(-center, -center)."""
    return translation(x, y) @ scaling(scale_x, scale_y) @ translation(-center, -center)


def apply(matrix: NDArray[np.float64], points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Apply an affine matrix to an Nx2 array of points."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    homogeneous = np.hstack([pts, np.ones((len(pts), 1))])
    return (homogeneous @ matrix.T)[:, :2]
