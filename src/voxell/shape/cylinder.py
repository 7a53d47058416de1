import numpy as np

from ..util import clean_transform
from .base import Shape


class Cylinder(Shape):
    """A solid right circular cylinder, used as a rasterization phantom.

    Parameters
    ----------
    length : float, non-negative
        Extent along the longitudinal axis.
    radius : float, non-negative
        Radius of the circular cross-section.
    rotation : np.ndarray, shape (3, 3)
        The third column is the longitudinal axis. Defaults to the identity,
        i.e. a cylinder along z.
    center : np.ndarray, shape (3,)
        Midpoint of the longitudinal axis. Defaults to the origin.
    """

    def __init__(self, length, radius, rotation=None, center=None):
        assert length >= 0
        assert radius >= 0

        self.length = length
        self.radius = radius
        self.rotation, self.center = clean_transform(
            rotation=rotation, translation=center
        )
        assert self.rotation.shape == (3, 3)
        assert self.center.shape == (3,)

    def __repr__(self):
        return f"Cylinder(length={self.length}, radius={self.radius}, center={self.center}, rotation={self.rotation})"

    @property
    def longitudinal_axis(self):
        return self.rotation[:, 2]

    @property
    def volume(self):
        return np.pi * self.radius**2 * self.length

    def contains(self, points, tol=1e-8):
        points = np.array(points, dtype=float)
        ndim = points.ndim
        assert ndim <= 2, f"points must have 1 or 2 dimensions, but has {ndim}."

        # coordinates in the cylinder frame
        local = (np.atleast_2d(points) - self.center) @ self.rotation
        axial = np.abs(local[:, 2]) <= 0.5 * self.length + tol
        radial = np.sum(local[:, :2] ** 2, axis=1) <= self.radius**2 + tol
        res = axial & radial
        if ndim == 1:
            return res[0]
        return res
