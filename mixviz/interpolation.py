"""Interpolated performance heatmap for ternary plots."""

from typing import Optional, Tuple

import numpy as np
from scipy.interpolate import griddata
from scipy.spatial import QhullError

from .logger import get_logger

logger = get_logger(__name__)


def ternary_grid(resolution: int) -> np.ndarray:
    """All (a, b, c) points of the simplex on a 1/resolution lattice."""
    grid = []
    for i in range(resolution + 1):
        for j in range(resolution + 1 - i):
            a = i / resolution
            b = j / resolution
            grid.append((a, b, max(1.0 - a - b, 0.0)))
    return np.array(grid)


def _to_cartesian(coords: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    # b at (1, 0), c at (1/2, sqrt(3)/2), a at the origin
    b = coords[:, 1]
    c = coords[:, 2]
    return 0.5 * (2 * b + c), (np.sqrt(3) / 2) * c


def interpolate_ternary(
    coords,
    values,
    resolution: int = 50,
    method: str = 'linear',
) -> Optional[Tuple[np.ndarray, np.ndarray]]:
    """Interpolate values over the ternary grid.

    Args:
        coords: (points x 3) normalized compositions
        values: Performance value per point
        resolution: Grid steps per axis
        method: 'linear', 'cubic' or 'nearest'

    Returns:
        (grid points x 3, interpolated values) where the interpolant is defined,
        or None if there are too few points or the triangulation fails
    """
    coords = np.asarray(coords, dtype=float).reshape(-1, 3)
    values = np.asarray(values, dtype=float)
    valid = np.isfinite(values)
    min_points = 4 if method == 'cubic' else 3
    if np.sum(valid) < min_points:
        return None

    x_data, y_data = _to_cartesian(coords[valid])
    grid = ternary_grid(resolution)
    x_grid, y_grid = _to_cartesian(grid)

    try:
        z_interp = griddata(
            (x_data, y_data),
            values[valid],
            (x_grid, y_grid),
            method=method
        )
    except (QhullError, ValueError) as e:
        logger.warning("Ternary interpolation failed: %s", e)
        return None

    defined = ~np.isnan(z_interp)
    if not np.any(defined):
        return None
    return grid[defined], z_interp[defined]
