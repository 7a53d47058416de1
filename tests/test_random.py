import numpy as np
import pytest

import voxell as vx


def test_random_points_on_hypersphere():
    rng = np.random.default_rng(0)

    # one point
    point = vx.random_points_on_hypersphere(dim=2, rng=rng)
    assert point.shape == (3,)
    assert np.isclose(np.linalg.norm(point), 1.0)

    # multiple points
    points = vx.random_points_on_hypersphere(shape=10, dim=2, rng=rng)
    assert points.shape == (10, 3)
    assert np.allclose(np.linalg.norm(points, axis=-1), 1.0)

    # hypersphere
    points = vx.random_points_on_hypersphere(shape=10, dim=3, rng=rng)
    assert np.allclose(np.linalg.norm(points, axis=-1), 1.0)

    # grid of points
    points = vx.random_points_on_hypersphere(shape=(10, 10), dim=2, rng=rng)
    assert points.shape == (10, 10, 3)
    assert np.allclose(np.linalg.norm(points, axis=-1), 1.0)


def test_random_unit_quaternions():
    rng = np.random.default_rng(0)

    Q = vx.random_unit_quaternions(100, rng=rng)
    assert Q.shape == (100, 4)
    assert np.allclose(np.linalg.norm(Q, axis=1), 1.0)

    # a single quaternion still comes back as a stack
    Q = vx.random_unit_quaternions(1, rng=rng)
    assert Q.shape == (1, 4)

    # same seed, same quaternions
    Q1 = vx.random_unit_quaternions(10, rng=1)
    Q2 = vx.random_unit_quaternions(10, rng=1)
    assert np.array_equal(Q1, Q2)


def test_rejection_sample():
    rng = np.random.default_rng(0)

    # test a single actual shape
    box_actual = vx.Box(half_extents=[0.5, 0.5, 0.5])
    box_bounding = vx.Box(half_extents=[1, 1, 1])

    points = vx.rejection_sample(
        actual_shapes=[box_actual],
        bounding_shape=box_bounding,
        sample_shape=100,
        rng=rng,
    )
    assert points.shape == (100, 3)
    assert box_actual.contains(points).all()

    # multiple actual shapes
    box_actual = vx.Box(half_extents=[0.5, 0.5, 0.5], center=[2, 0, 0])
    ell_actual = vx.Ellipsoid.sphere(radius=0.5, center=[2.5, 0, 0])
    box_bounding = vx.Box(half_extents=[1, 1, 1], center=[2, 0, 0])

    # don't include zero to ensure the generated array of points is being
    # populated properly
    assert not box_actual.contains([0, 0, 0])
    assert not ell_actual.contains([0, 0, 0])

    points = vx.rejection_sample(
        actual_shapes=[box_actual, ell_actual],
        bounding_shape=box_bounding,
        sample_shape=100,
        rng=rng,
    )
    assert np.all(box_actual.contains(points) | ell_actual.contains(points))

    # when the actual shapes is not actually contained in the bounding shape,
    # eventually the algorithm errors out
    box_actual = vx.Box(half_extents=[0.5, 0.5, 0.5])
    box_bounding = vx.Box(half_extents=[1, 1, 1], center=[3, 0, 0])
    with pytest.raises(ValueError):
        vx.rejection_sample(
            actual_shapes=[box_actual],
            bounding_shape=box_bounding,
            sample_shape=100,
            rng=rng,
            max_tries=100,
        )
