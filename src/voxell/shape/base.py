"""Abstract base class for geometric shapes."""
import abc

import numpy as np


class Shape(abc.ABC):
    @abc.abstractmethod
    def contains(self, points, tol=1e-8):
        """Test if the shape contains a set of points.

        Parameters
        ----------
        points : np.ndarray, shape (3,) or (n, 3)
            The points to check.
        tol : float, non-negative
            The numerical tolerance for membership.

        Returns
        -------
        : bool or np.ndarray of bool, shape (n,)
            Boolean array where each entry is ``True`` if the shape
            contains the corresponding point and ``False`` otherwise.
        """
        pass

    @property
    @abc.abstractmethod
    def volume(self):
        """The volume of the shape."""
        pass

    def voxelize(self, extents, tol=1e-8):
        """Rasterize the shape onto a regular voxel grid.

        Voxel ``(i, j, k)`` is set if the point ``(i, j, k)`` is contained in
        the shape, i.e. voxels are sampled at their integer corner
        coordinates.

        Parameters
        ----------
        extents : tuple of int
            The number of voxels along each of the three axes.
        tol : float, non-negative
            The numerical tolerance for membership.

        Returns
        -------
        : np.ndarray of bool, shape ``extents``
            The voxel mask, indexed as ``mask[x, y, z]``.
        """
        extents = tuple(int(e) for e in extents)
        assert len(extents) == 3
        assert all(e > 0 for e in extents)

        points = np.indices(extents).reshape(3, -1).T
        contained = np.atleast_1d(self.contains(points, tol=tol))
        return contained.reshape(extents)
