"""Ray marching through voxel grids and nearest-contact searches."""
from dataclasses import dataclass

import numpy as np
from scipy.spatial.transform import Rotation

from .random import random_points_on_hypersphere
from .util import normalize, voxel_index


@dataclass(frozen=True)
class Contact:
    """Result of a contact search from a seed point.

    Parameters
    ----------
    origin : np.ndarray, shape (3,)
        The seed point the ray started from.
    point : np.ndarray, shape (3,)
        The position where the ray stopped.
    direction : np.ndarray, shape (3,)
        The unit direction the ray travelled along.
    truncated : bool
        ``True`` if the ray stopped because its next step would have left the
        grid, rather than on a background voxel. ``point`` may then still be
        in the foreground.
    """

    origin: np.ndarray
    point: np.ndarray
    direction: np.ndarray
    truncated: bool

    @property
    def displacement(self):
        """The vector from the origin to the contact point."""
        return self.point - self.origin

    @property
    def length(self):
        """The distance from the origin to the contact point."""
        return np.linalg.norm(self.displacement)


def march(origin, directions, grid):
    """March rays through a voxel grid until they leave the foreground.

    Each ray starts at ``origin`` and repeatedly adds its step vector to a
    real-valued position, which is truncated to voxel indices after every
    step. A ray stops on the first background voxel, returning the
    (background) position reached. If a step would take the ray outside of
    the grid, the step is not taken: the ray stops at its last in-bounds
    position and is flagged as truncated. A ray whose origin is in the
    background does not move.

    Parameters
    ----------
    origin : np.ndarray, shape (3,)
        The start position, in voxel coordinates.
    directions : np.ndarray, shape (3,) or (n, 3)
        Step vector(s). These need not be unit length; the step size is the
        norm of each vector.
    grid : VoxelGrid
        The volume to march through. It is not modified.

    Returns
    -------
    : tuple
        A tuple ``(positions, truncated)``. For a single direction,
        ``positions`` has shape (3,) and ``truncated`` is a bool; otherwise
        they have shapes (n, 3) and (n,).

    Raises
    ------
    OutOfBoundsError
        If ``origin`` lies outside of the grid.
    ValueError
        If any step vector is zero.
    """
    origin = np.array(origin, dtype=float)
    assert origin.shape == (3,), "origin must be a 3-vector."
    directions = np.asarray(directions, dtype=float)
    single = directions.ndim == 1
    directions = np.atleast_2d(directions)
    assert directions.shape[1] == 3

    if np.any(np.all(directions == 0, axis=1)):
        raise ValueError("Ray step vectors must be non-zero.")

    start = grid.check_bounds(origin)

    n = directions.shape[0]
    positions = np.tile(origin, (n, 1))
    truncated = np.zeros(n, dtype=bool)
    active = np.full(n, grid.is_foreground(start), dtype=bool)

    while active.any():
        idx = np.flatnonzero(active)
        candidates = positions[idx] + directions[idx]
        voxels = voxel_index(candidates)
        inside = grid.in_bounds(voxels)

        # rays about to leave the grid stay where they are
        truncated[idx[~inside]] = True
        active[idx[~inside]] = False

        idx = idx[inside]
        positions[idx] = candidates[inside]
        active[idx] = grid.is_foreground(voxels[inside])

    if single:
        return positions[0], bool(truncated[0])
    return positions, truncated


def nearest_contact(seed, directions, grid):
    """Find the closest foreground/background transition among directions.

    Each direction is normalized and marched from ``seed`` with unit steps.
    The contact closest to ``seed`` is returned; if several are equally
    close, the first one in ``directions`` wins.

    Parameters
    ----------
    seed : np.ndarray, shape (3,)
        The start point.
    directions : np.ndarray, shape (3,) or (n, 3)
        Candidate directions; they need not be unit length.
    grid : VoxelGrid
        The volume to search.

    Returns
    -------
    : Contact
        The nearest contact.
    """
    seed = np.array(seed, dtype=float)
    directions = normalize(np.atleast_2d(directions))

    points, truncated = march(seed, directions, grid)
    distances = np.linalg.norm(points - seed, axis=1)
    i = np.argmin(distances)
    return Contact(
        origin=seed,
        point=points[i],
        direction=directions[i],
        truncated=bool(truncated[i]),
    )


def ring_directions(axis, n, rng=None):
    """Generate a ring of unit vectors orthogonal to an axis.

    An arbitrary seed vector orthogonal to ``axis`` is built from the cross
    product of ``axis`` with a random unit vector, and then rotated about
    ``axis`` in ``n`` equal steps of ``2 * pi / n``.

    Parameters
    ----------
    axis : np.ndarray, shape (3,)
        The normal of the plane of the ring. Need not be unit length.
    n : int, positive
        Number of directions.
    rng : int or np.random.Generator
        Integer seed or Generator instance used to draw the seed vector.

    Returns
    -------
    : np.ndarray, shape (n, 3)
        Unit vectors orthogonal to ``axis``.
    """
    assert n >= 1
    axis = normalize(axis)
    rng = np.random.default_rng(rng)

    # redraw in the (measure zero) case that the random vector is parallel
    # to the axis
    start = np.zeros(3)
    while np.linalg.norm(start) < 1e-8:
        u = random_points_on_hypersphere(dim=2, rng=rng)
        start = np.cross(axis, u)
    start = normalize(start)

    angles = 2 * np.pi / n * np.arange(n)
    return Rotation.from_rotvec(angles[:, None] * axis).apply(start)
