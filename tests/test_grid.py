import numpy as np
import pytest

import voxell as vx


def test_array_grid_extent():
    grid = vx.ArrayVoxelGrid(np.zeros((4, 5, 6)))
    assert grid.extent(0) == 4
    assert grid.extent(1) == 5
    assert grid.extent(2) == 6
    assert grid.shape == (4, 5, 6)


def test_array_grid_is_foreground():
    mask = np.zeros((4, 5, 6), dtype=bool)
    mask[1, 2, 3] = True
    grid = vx.ArrayVoxelGrid(mask)

    assert grid.is_foreground([1, 2, 3])
    assert not grid.is_foreground([0, 0, 0])

    res = grid.is_foreground(np.array([[1, 2, 3], [1, 2, 4], [3, 4, 5]]))
    assert np.array_equal(res, [True, False, False])


def test_array_grid_is_read_only():
    mask = np.ones((3, 3, 3))
    grid = vx.ArrayVoxelGrid(mask)

    # the grid holds its own copy
    mask[0, 0, 0] = 0
    assert grid.is_foreground([0, 0, 0])

    with pytest.raises(ValueError):
        grid.mask[0, 0, 0] = False


def test_in_bounds():
    grid = vx.ArrayVoxelGrid.full((10, 10, 10))
    assert grid.in_bounds([0, 0, 0])
    assert grid.in_bounds([9, 9, 9])
    assert not grid.in_bounds([10, 0, 0])
    assert not grid.in_bounds([0, -1, 0])

    res = grid.in_bounds(np.array([[0, 5, 9], [5, 10, 5], [-1, 0, 0]]))
    assert np.array_equal(res, [True, False, False])


def test_check_bounds():
    grid = vx.ArrayVoxelGrid.full((10, 10, 10), value=False)

    idx = grid.check_bounds([5.5, 0.2, 9.9])
    assert np.array_equal(idx, [5, 0, 9])

    for point in [[10.0, 5, 5], [5, -1.0, 5], [5, 5, 100], [np.nan, 5, 5]]:
        with pytest.raises(vx.OutOfBoundsError):
            grid.check_bounds(point)

    # OutOfBoundsError is an IndexError
    with pytest.raises(IndexError):
        grid.check_bounds([-5, 0, 0])


def test_grid_from_shape():
    box = vx.Box(half_extents=[1, 1, 1], center=[5, 5, 5])
    grid = vx.ArrayVoxelGrid.from_shape(box, extents=(10, 10, 10))
    assert grid.shape == (10, 10, 10)
    assert np.count_nonzero(grid.mask) == 27
    assert grid.is_foreground([4, 6, 5])
    assert not grid.is_foreground([3, 5, 5])
