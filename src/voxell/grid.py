"""Read-only binary voxel grids."""
import abc

import numpy as np

from .util import voxel_index


class OutOfBoundsError(IndexError):
    """Raised when a position lies outside of a voxel grid."""


class VoxelGrid(abc.ABC):
    """A read-only binary voxel grid.

    This is the narrow interface needed to march rays through a segmented
    volume: the extent along each axis and a foreground test at integer
    voxel indices. Implementations must not change while a search is running.
    """

    @abc.abstractmethod
    def extent(self, axis):
        """The number of voxels along ``axis`` (0, 1 or 2)."""
        pass

    @abc.abstractmethod
    def is_foreground(self, indices):
        """Test if voxels belong to the foreground.

        Parameters
        ----------
        indices : np.ndarray of int, shape (3,) or (n, 3)
            In-bounds voxel indices ``(x, y, z)``.

        Returns
        -------
        : bool or np.ndarray of bool, shape (n,)
            ``True`` where the voxel is foreground.
        """
        pass

    @property
    def shape(self):
        """The extents along all three axes."""
        return tuple(self.extent(axis) for axis in range(3))

    def in_bounds(self, indices):
        """Test if voxel indices lie inside ``[0, extent)`` on every axis.

        Parameters
        ----------
        indices : np.ndarray of int, shape (3,) or (n, 3)
            The voxel indices.

        Returns
        -------
        : bool or np.ndarray of bool, shape (n,)
            ``True`` where the indices are inside the grid.
        """
        indices = np.asarray(indices)
        res = np.all((indices >= 0) & (indices < np.array(self.shape)), axis=-1)
        if indices.ndim == 1:
            return bool(res)
        return res

    def check_bounds(self, point):
        """Raise ``OutOfBoundsError`` if the voxel of ``point`` is outside the grid.

        Returns
        -------
        : np.ndarray of int, shape (3,)
            The voxel index of ``point``.
        """
        point = np.asarray(point, dtype=float)
        assert point.shape == (3,), "point must be a 3-vector."
        if not np.all(np.isfinite(point)):
            raise OutOfBoundsError(f"Point {point} is not finite.")
        index = voxel_index(point)
        if not self.in_bounds(index):
            raise OutOfBoundsError(
                f"Point {point} lies outside of grid with shape {self.shape}."
            )
        return index


class ArrayVoxelGrid(VoxelGrid):
    """Voxel grid backed by a three-dimensional numpy array.

    The array is indexed ``mask[x, y, z]``; nonzero entries are foreground.
    The mask is copied and the copy is marked read-only.

    Parameters
    ----------
    mask : array_like, shape (nx, ny, nz)
        The binary volume.
    """

    def __init__(self, mask):
        mask = np.array(mask, dtype=bool)
        assert mask.ndim == 3, f"mask must be 3-dimensional, but has {mask.ndim}."
        mask.flags.writeable = False
        self.mask = mask

    @classmethod
    def from_shape(cls, shape, extents):
        """Rasterize a shape into a new grid.

        Parameters
        ----------
        shape : Shape
            The foreground region.
        extents : tuple of int
            The grid size along each axis.
        """
        return cls(shape.voxelize(extents))

    @classmethod
    def full(cls, extents, value=True):
        """Construct a grid that is entirely foreground (or background)."""
        return cls(np.full(tuple(extents), value, dtype=bool))

    def __repr__(self):
        return f"ArrayVoxelGrid(shape={self.shape}, foreground={np.count_nonzero(self.mask)})"

    def extent(self, axis):
        return self.mask.shape[axis]

    def is_foreground(self, indices):
        indices = np.asarray(indices)
        if indices.ndim == 1:
            return bool(self.mask[tuple(indices)])
        return self.mask[indices[:, 0], indices[:, 1], indices[:, 2]]
