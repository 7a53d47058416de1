import numpy as np

from ..util import clean_transform
from .base import Shape


class Box(Shape):
    """An oriented box.

    Used as a rasterization phantom and as the sampling envelope of an
    ellipsoid.

    Parameters
    ----------
    half_extents : iterable of float, length 3
        Half of the side length along each of the box's own axes.
    center : np.ndarray, shape (3,)
        The center of the box. Defaults to the origin.
    rotation : np.ndarray, shape (3, 3)
        Columns are the box axes. Defaults to the identity (axis-aligned).
    """

    def __init__(self, half_extents, center=None, rotation=None):
        self.half_extents = np.array(half_extents, dtype=float)
        assert self.half_extents.shape == (3,)
        assert np.all(self.half_extents >= 0)

        self.rotation, self.center = clean_transform(
            rotation=rotation, translation=center
        )
        assert self.rotation.shape == (3, 3)
        assert self.center.shape == (3,)

    @classmethod
    def from_two_vertices(cls, v1, v2):
        """Axis-aligned box spanned by two opposite corners."""
        v1 = np.array(v1, dtype=float)
        v2 = np.array(v2, dtype=float)
        return cls(half_extents=0.5 * np.abs(v2 - v1), center=0.5 * (v1 + v2))

    def __repr__(self):
        return f"Box(half_extents={self.half_extents}, center={self.center}, rotation={self.rotation})"

    @property
    def volume(self):
        return 8 * np.prod(self.half_extents)

    def contains(self, points, tol=1e-8):
        points = np.array(points, dtype=float)
        ndim = points.ndim
        assert ndim <= 2, f"points must have 1 or 2 dimensions, but has {ndim}."

        local = (np.atleast_2d(points) - self.center) @ self.rotation
        res = np.all(np.abs(local) <= self.half_extents + tol, axis=1)
        if ndim == 1:
            return res[0]
        return res

    def random_points(self, shape=1, rng=None):
        """Uniformly sample points inside the box."""
        if np.isscalar(shape):
            shape = (shape,)
        n = np.prod(shape)

        rng = np.random.default_rng(rng)
        local = rng.uniform(low=-1, high=1, size=(n, 3)) * self.half_extents
        points = local @ self.rotation.T + self.center
        if shape == (1,):
            return np.squeeze(points)
        return points.reshape(shape + (3,))
