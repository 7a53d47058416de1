from dataclasses import dataclass

import numpy as np
from scipy.spatial.transform import Rotation

from ..util import clean_transform
from ..random import random_unit_quaternions, rejection_sample
from .base import Shape
from .box import Box


@dataclass(frozen=True)
class SemiAxis:
    """One semi-axis of an ellipsoid.

    The direction and length of a semi-axis are always stored, sorted and
    swapped together as a single record.

    Parameters
    ----------
    direction : np.ndarray, shape (3,)
        Unit vector along the semi-axis.
    length : float, positive
        Length of the semi-axis.
    """

    direction: np.ndarray
    length: float


class Ellipsoid(Shape):
    """Ellipsoid in three dimensions.

    The half extents (semi-axis lengths) are stored in ascending order
    ``a <= b <= c``. The columns of ``rotation`` are the corresponding axis
    directions; when the half extents are sorted, the columns are permuted
    with them so each length stays paired with its own direction. The
    rotation is always right-handed: if the permutation (or the caller)
    produces a left-handed basis, the last column is negated, which describes
    the same set of points.

    Ellipsoids are immutable: the arrays they hold are read-only, and methods
    such as :meth:`dilate` and :meth:`transform` return new objects.

    Parameters
    ----------
    half_extents : iterable of float, length 3
        The semi-axis lengths. Must be positive and finite.
    rotation : np.ndarray, shape (3, 3)
        Orthonormal matrix whose columns are the semi-axis directions.
        Defaults to the identity.
    center : np.ndarray, shape (3,)
        The centroid. Defaults to the origin.

    Raises
    ------
    ValueError
        If any half extent is non-positive or non-finite, or if the rotation
        is not orthonormal.
    """

    def __init__(self, half_extents, rotation=None, center=None):
        half_extents = np.array(half_extents, dtype=float)
        assert half_extents.shape == (3,), "Ellipsoid must have 3 half extents."
        if not np.all(np.isfinite(half_extents) & (half_extents > 0)):
            raise ValueError("radii must be positive and finite")

        rotation, center = clean_transform(
            rotation=rotation, translation=center
        )
        assert rotation.shape == (3, 3)
        assert center.shape == (3,)
        if not np.allclose(rotation.T @ rotation, np.eye(3), atol=1e-6):
            raise ValueError("rotation must be orthonormal")

        # sort lengths ascending and carry each column along with its length
        order = np.argsort(half_extents, kind="stable")
        half_extents = half_extents[order]
        rotation = rotation[:, order]
        if np.linalg.det(rotation) < 0:
            rotation[:, 2] = -rotation[:, 2]

        half_extents.flags.writeable = False
        rotation.flags.writeable = False
        center.flags.writeable = False

        self.half_extents = half_extents
        self.rotation = rotation
        self.center = center

    @classmethod
    def sphere(cls, radius, center=None):
        """Construct a sphere.

        Parameters
        ----------
        radius : float
            Radius of the sphere.
        center : np.ndarray, shape (3,)
            Optional center point of the sphere.
        """
        return cls(half_extents=radius * np.ones(3), center=center)

    @classmethod
    def from_semi_axes(cls, semi_axes, center=None):
        """Construct an ellipsoid from three :class:`SemiAxis` records.

        Parameters
        ----------
        semi_axes : iterable of SemiAxis, length 3
            Mutually orthogonal semi-axes.
        center : np.ndarray, shape (3,)
            The centroid.
        """
        semi_axes = list(semi_axes)
        assert len(semi_axes) == 3
        half_extents = [axis.length for axis in semi_axes]
        rotation = np.column_stack([axis.direction for axis in semi_axes])
        return cls(half_extents=half_extents, rotation=rotation, center=center)

    def __repr__(self):
        return f"Ellipsoid(half_extents={self.half_extents}, center={self.center}, rotation={self.rotation})"

    @property
    def a(self):
        """Smallest semi-axis length."""
        return self.half_extents[0]

    @property
    def b(self):
        """Intermediate semi-axis length."""
        return self.half_extents[1]

    @property
    def c(self):
        """Largest semi-axis length."""
        return self.half_extents[2]

    @property
    def semi_axes(self):
        """The semi-axes as ``SemiAxis`` records, shortest first."""
        return [
            SemiAxis(direction=self.rotation[:, i], length=self.half_extents[i])
            for i in range(3)
        ]

    @property
    def E(self):
        """Inverse of the shape matrix."""
        return self.rotation @ np.diag(self.half_extents**2) @ self.rotation.T

    @property
    def volume(self):
        """The volume of the ellipsoid."""
        return 4 * np.pi * np.prod(self.half_extents) / 3

    def is_same(self, other, tol=1e-8):
        """Check if this ellipsoid is the same as another."""
        if not isinstance(other, self.__class__):
            return False
        return np.allclose(self.center, other.center, atol=tol) and np.allclose(
            self.E, other.E, atol=tol
        )

    def contains(self, points, tol=1e-8):
        """Check if points are contained in the ellipsoid.

        Parameters
        ----------
        points : iterable
            Points to check. May be a single point or a list or array of points.
        tol : float, non-negative
            Numerical tolerance for qualifying as inside the ellipsoid.

        Returns
        -------
        :
            Given a single point, return ``True`` if the point is contained in
            the ellipsoid, or ``False`` if not. For multiple points, return a
            boolean array with one value per point.
        """
        points = np.array(points, dtype=float)
        ndim = points.ndim
        assert ndim <= 2, f"points must have 1 or 2 dimensions, but has {ndim}."
        points = np.atleast_2d(points)

        # transform back to the origin; rotation is orthonormal so its
        # transpose is its inverse
        q = (points - self.center) @ self.rotation
        res = np.sum((q / self.half_extents) ** 2, axis=1) <= 1 + tol
        if ndim == 1:
            return res[0]
        return res

    def surface_points(self, directions):
        """Map unit vectors onto the surface of the ellipsoid.

        Parameters
        ----------
        directions : np.ndarray, shape (3,) or (n, 3)
            Unit vectors in the ellipsoid's own (principal axis) frame.

        Returns
        -------
        : np.ndarray, same shape as ``directions``
            Points on the surface, in the world frame.
        """
        directions = np.array(directions, dtype=float)
        return (directions * self.half_extents) @ self.rotation.T + self.center

    def mbb(self):
        """Minimum-volume bounding box."""
        return Box(
            half_extents=self.half_extents,
            center=self.center,
            rotation=self.rotation,
        )

    def aabb(self):
        """Minimum-volume axis-aligned bounding box."""
        v_max = self.center + np.sqrt(np.diag(self.E))
        v_min = self.center - np.sqrt(np.diag(self.E))
        return Box.from_two_vertices(v_min, v_max)

    def random_points(self, shape=1, rng=None):
        """Uniformly sample points inside the ellipsoid.

        Points are rejection sampled from the ellipsoid's bounding box.
        """
        return rejection_sample(
            actual_shapes=[self],
            bounding_shape=self.mbb(),
            sample_shape=shape,
            rng=rng,
        )

    def random_points_on_surface(self, shape=1, rng=None):
        """Uniformly sample points on the surface of the ellipsoid.

        Uniform points on the unit sphere are generated by rotating the pole
        ``(1, 0, 0)`` by uniformly random unit quaternions. Mapping them
        through the scale ``(a, b, c)`` concentrates points where the surface
        is compressed, so each point ``v`` is kept with probability
        ``mu(v) / (b * c)``, where ``mu`` is the local area stretch of the
        map and ``b * c`` is its maximum.

        See Sec. 5.1 of https://doi.org/10.1007/s11075-023-01628-4
        """
        if np.isscalar(shape):
            shape = (shape,)
        n = np.prod(shape)  # total number of points to produce

        rng = np.random.default_rng(rng)

        a, b, c = self.half_extents
        mu_max = b * c
        pole = np.array([1.0, 0, 0])

        points = np.zeros((n, 3))
        count = 0
        while count < n:

            # sample as many points as we still need
            rem = n - count
            q = random_unit_quaternions(rem, rng=rng)
            v = Rotation.from_quat(q).apply(pole)

            # reject some points so that the overall sampling is uniform
            mu = np.sqrt(
                (a * c * v[:, 1]) ** 2
                + (a * b * v[:, 2]) ** 2
                + (b * c * v[:, 0]) ** 2
            )
            u = rng.random(rem)
            accept = u <= mu / mu_max
            n_acc = np.sum(accept)
            points[count : count + n_acc] = v[accept, :] * self.half_extents
            count += n_acc

        # rotate and translate points as needed
        points = points @ self.rotation.T + self.center

        # reshape to desired shape
        if shape == (1,):
            return np.squeeze(points)
        return points.reshape(shape + (3,))

    def sample_surface(self, n, rng=None):
        """Sample ``n`` points uniformly on the surface, shape (n, 3)."""
        return np.atleast_2d(self.random_points_on_surface(shape=n, rng=rng))

    def sample_volume(self, n, rng=None):
        """Sample ``n`` points uniformly inside the ellipsoid, shape (n, 3)."""
        return np.atleast_2d(self.random_points(shape=n, rng=rng))

    def dilate(self, increment):
        """Grow each semi-axis by ``increment``.

        ``increment`` may be a scalar or one value per semi-axis, in the
        stored (ascending) order.
        """
        return Ellipsoid(
            half_extents=self.half_extents + increment,
            rotation=self.rotation,
            center=self.center,
        )

    def contract(self, increment):
        """Shrink each semi-axis by ``increment``."""
        return self.dilate(-np.asarray(increment, dtype=float))

    def transform(self, rotation=None, translation=None):
        rotation, translation = clean_transform(
            rotation=rotation, translation=translation
        )
        new_rotation = rotation @ self.rotation
        new_center = rotation @ self.center + translation
        return Ellipsoid(
            half_extents=self.half_extents,
            rotation=new_rotation,
            center=new_center,
        )
