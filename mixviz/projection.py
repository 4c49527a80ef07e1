"""Projection of simplex coordinates into plottable geometry.

Three regimes, chosen by the number of components N:

- N = 3: ternary plot, coordinates are used as-is
- N = 4: barycentric embedding into a regular tetrahedron in 3D
- N >= 5: parallel coordinates over the first N-1 components
"""

from typing import Optional

import numpy as np
import plotly.graph_objects as go

TERNARY = 'ternary'
TETRAHEDRAL = 'tetrahedral'
PARALLEL = 'parallel'

# Regular tetrahedron with unit edges
TETRAHEDRON_VERTICES = np.array([
    [0.0, 0.0, 0.0],
    [1.0, 0.0, 0.0],
    [0.5, np.sqrt(3) / 2, 0.0],
    [0.5, np.sqrt(3) / 6, np.sqrt(6) / 3],
])

TETRAHEDRON_FACES = [(0, 1, 2), (0, 1, 3), (0, 2, 3), (1, 2, 3)]


def projection_mode(n_components: int) -> Optional[str]:
    """Projection regime for a component count, or None below three components."""
    if n_components == 3:
        return TERNARY
    if n_components == 4:
        return TETRAHEDRAL
    if n_components >= 5:
        return PARALLEL
    return None


def _as_matrix(coords, width: int) -> np.ndarray:
    return np.asarray(coords, dtype=float).reshape(-1, width)


def project_ternary(coords) -> np.ndarray:
    """(points x 3) barycentric triples, unchanged."""
    return _as_matrix(coords, 3).copy()


def project_tetrahedral(coords) -> np.ndarray:
    """Map (points x 4) barycentric coordinates to (points x 3) Cartesian points."""
    return _as_matrix(coords, 4) @ TETRAHEDRON_VERTICES


def project_parallel(coords) -> np.ndarray:
    """Drop the last component, which is determined by the others."""
    matrix = np.asarray(coords, dtype=float)
    if matrix.ndim == 1:
        matrix = matrix.reshape(1, -1)
    return matrix[:, :-1].copy()


def project(coords, mode: str) -> np.ndarray:
    if mode == TERNARY:
        return project_ternary(coords)
    if mode == TETRAHEDRAL:
        return project_tetrahedral(coords)
    if mode == PARALLEL:
        return project_parallel(coords)
    raise ValueError(f"Unknown projection mode: {mode}")


def tetrahedron_mesh() -> go.Mesh3d:
    """Translucent boundary of the tetrahedron, independent of the data."""
    i, j, k = (list(index) for index in zip(*TETRAHEDRON_FACES))
    return go.Mesh3d(
        x=TETRAHEDRON_VERTICES[:, 0],
        y=TETRAHEDRON_VERTICES[:, 1],
        z=TETRAHEDRON_VERTICES[:, 2],
        i=i,
        j=j,
        k=k,
        opacity=0.1,
        color='lightgrey',
        flatshading=True,
        hoverinfo='skip',
        showscale=False,
    )
