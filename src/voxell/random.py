"""Generate random values."""
import numpy as np


def random_points_on_hypersphere(shape=1, dim=2, rng=None):
    """Sample random uniform-distributed points on the ``dim``-sphere.

    See https://compneuro.uwaterloo.ca/files/publications/voelker.2017.pdf
    """
    assert dim >= 1
    if np.isscalar(shape):
        shape = (shape,)
    full_shape = tuple(shape) + (dim + 1,)

    rng = np.random.default_rng(rng)
    X = rng.normal(size=full_shape)

    # make dimension compatible with X
    r = np.expand_dims(np.linalg.norm(X, axis=-1), axis=X.ndim - 1)

    points = X / r

    # squeeze out extra dimension if shape = 1
    if shape == (1,):
        return np.squeeze(points)
    return points


def random_unit_quaternions(n, rng=None):
    """Sample uniformly distributed unit quaternions.

    A point drawn uniformly from the 3-sphere is a unit quaternion, and the
    corresponding rotation is uniformly distributed over SO(3).

    Parameters
    ----------
    n : int
        Number of quaternions.
    rng : int or np.random.Generator
        Integer seed or Generator instance to use for generating random
        numbers.

    Returns
    -------
    : np.ndarray, shape (n, 4)
        The quaternions, in scalar-last ``(x, y, z, w)`` order.
    """
    return np.atleast_2d(random_points_on_hypersphere(shape=n, dim=3, rng=rng))


def rejection_sample(
    actual_shapes, bounding_shape, sample_shape, max_tries=10000, rng=None
):
    """Uniformly sample points from a union of shapes.

    Points are drawn uniformly from ``bounding_shape`` and kept if at least
    one of ``actual_shapes`` contains them.

    Raises
    ------
    ValueError
        If enough points could not be generated within ``max_tries`` rounds.
    """
    if np.isscalar(sample_shape):
        sample_shape = (sample_shape,)
    sample_shape = tuple(sample_shape)

    rng = np.random.default_rng(rng)

    n = np.prod(sample_shape)  # number of points required
    m = 0  # number of points generated so far
    points = np.zeros((n, 3))
    tries = 0
    while m < n:
        # eventually error out if this is taking too long
        if tries >= max_tries:
            raise ValueError(
                "Failed to generate enough points by rejection sampling."
            )
        tries += 1

        # generate as many points as we still need
        candidates = np.atleast_2d(
            bounding_shape.random_points(n - m, rng=rng)
        )

        # check if they are contained in the actual shape
        # any value >= 1 will be cast to True
        c = np.sum(
            [np.atleast_1d(s.contains(candidates)) for s in actual_shapes],
            axis=0,
        ).astype(bool)

        # short-circuit if no points are contained
        if not c.any():
            continue

        # use the points that are contained in at least one of the shapes
        new_points = candidates[c]
        n_new = new_points.shape[0]
        points[m : m + n_new] = new_points

        # update count of remaining points to generate
        m += n_new

    # back to original shape
    if sample_shape == (1,):
        return np.squeeze(points)
    return points.reshape(sample_shape + (3,))
