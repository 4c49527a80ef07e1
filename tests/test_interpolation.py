"""
Tests for the ternary heatmap interpolation.
"""

import numpy as np

from mixviz.interpolation import interpolate_ternary, ternary_grid

CORNERS = np.array([
    [1.0, 0.0, 0.0],
    [0.0, 1.0, 0.0],
    [0.0, 0.0, 1.0],
    [1 / 3, 1 / 3, 1 / 3],
])


def test_grid_covers_the_simplex():
    grid = ternary_grid(4)

    assert grid.shape == (15, 3)
    np.testing.assert_allclose(grid.sum(axis=1), 1.0)
    assert (grid >= 0).all()


def test_linear_interpolation_of_a_plane():
    # Values linear in the composition are reproduced exactly
    values = CORNERS @ np.array([1.0, 2.0, 3.0])

    result = interpolate_ternary(CORNERS, values, resolution=5)

    assert result is not None
    grid, z = result
    np.testing.assert_allclose(z, grid @ np.array([1.0, 2.0, 3.0]), atol=1e-9)


def test_nearest():
    result = interpolate_ternary(CORNERS, [1.0, 2.0, 3.0, 4.0], resolution=3, method='nearest')

    grid, z = result
    assert len(z) == len(ternary_grid(3))


def test_too_few_points():
    assert interpolate_ternary(CORNERS[:2], [1.0, 2.0]) is None
    assert interpolate_ternary(CORNERS[:3], [1.0, 2.0, 3.0], method='cubic') is None


def test_non_finite_values_ignored():
    assert interpolate_ternary(CORNERS, [1.0, np.nan, np.nan, 2.0]) is None


def test_collinear_points_degrade_to_none():
    line = np.array([
        [1.0, 0.0, 0.0],
        [0.5, 0.5, 0.0],
        [0.0, 1.0, 0.0],
    ])

    assert interpolate_ternary(line, [1.0, 2.0, 3.0]) is None
