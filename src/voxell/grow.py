"""Grow maximal ellipsoids from seed points inside binary voxel volumes.

An ellipsoid is grown from a seed point and an initial direction by finding
three mutually orthogonal semi-axes, each as long as the distance to the
nearest background voxel along it:

1. the first axis follows the initial direction;
2. the second axis is the shortest contact among a ring of directions
   orthogonal to the first;
3. the third axis is the shorter contact of the two directions orthogonal to
   both.

Repeating this for initial directions spread over the sphere and keeping the
largest result gives an estimate of the maximal inscribed ellipsoid at the
seed.
"""
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import logging
from typing import Optional

import numpy as np

from .ray import nearest_contact, ring_directions
from .shape import Ellipsoid, SemiAxis
from .spiral import spiral_directions, n_spiral_points, n_ring_points
from .util import normalize, is_right_handed

logger = logging.getLogger(__name__)


# distance removed from each contact to keep the ellipsoid inside the boundary
CONTACT_MARGIN = 1.0

# semi-axes are never shorter than this
MIN_SEMI_AXIS_LENGTH = 1.0


class NoEllipsoidError(ValueError):
    """Raised when no meaningful ellipsoid can be grown from a seed."""


@dataclass(frozen=True)
class GrowthParameters:
    """Parameters controlling the ellipsoid search.

    Parameters
    ----------
    max_sampling_radius : float, positive
        Radius of the region around the seed that should be sampled densely,
        in voxels. Determines the number of initial and in-plane directions.
    pixel_width : float, positive
        Calibrated width of one voxel.
    n_workers : int or None
        Number of threads used to evaluate candidate ellipsoids. ``None`` or
        ``1`` evaluates them sequentially.
    """

    max_sampling_radius: float = 10.0
    pixel_width: float = 1.0
    n_workers: Optional[int] = None

    def __post_init__(self):
        if not self.max_sampling_radius > 0:
            raise ValueError("max_sampling_radius must be positive.")
        if not self.pixel_width > 0:
            raise ValueError("pixel_width must be positive.")
        if self.n_workers is not None and self.n_workers < 1:
            raise ValueError("n_workers must be at least one.")

    @property
    def n_sphere(self):
        """Number of initial directions on the sphere."""
        return n_spiral_points(self.max_sampling_radius, self.pixel_width)

    @property
    def n_plane(self):
        """Number of directions in each ring searched for the second axis."""
        return n_ring_points(self.max_sampling_radius, self.pixel_width)


def _clamped_semi_axis(contact):
    length = max(contact.length - CONTACT_MARGIN, MIN_SEMI_AXIS_LENGTH)
    return SemiAxis(direction=contact.direction, length=length)


def grow_from_axis(seed, initial_direction, n_plane, grid, rng=None):
    """Grow one candidate ellipsoid from a seed along an initial direction.

    Each semi-axis is one voxel shorter than its contact distance, but never
    shorter than one voxel. If the three axes form a left-handed basis, the
    second and third semi-axes (direction and length together) are swapped.

    Parameters
    ----------
    seed : np.ndarray, shape (3,)
        The center of the ellipsoid, in voxel coordinates.
    initial_direction : np.ndarray, shape (3,)
        Direction of the first semi-axis.
    n_plane : int, positive
        Number of directions searched for the second semi-axis.
    grid : VoxelGrid
        The binary volume.
    rng : int or np.random.Generator
        Random source for the orientation of the ring of in-plane directions.

    Returns
    -------
    : Ellipsoid
        The candidate ellipsoid, centered at ``seed``.

    Raises
    ------
    OutOfBoundsError
        If ``seed`` lies outside of the grid.
    NoEllipsoidError
        If ``seed`` is in a background voxel.
    """
    seed = np.array(seed, dtype=float)
    start = grid.check_bounds(seed)
    if not grid.is_foreground(start):
        raise NoEllipsoidError(f"Seed {seed} is in a background voxel.")
    ellipsoid, _ = _grow_candidate(seed, initial_direction, n_plane, grid, rng)
    return ellipsoid


def _grow_candidate(seed, initial_direction, n_plane, grid, rng):
    """Grow a candidate from a checked foreground seed.

    Also returns whether the first contact was cut off by the grid edge.
    """
    rng = np.random.default_rng(rng)

    contact = nearest_contact(seed, initial_direction, grid)
    first = _clamped_semi_axis(contact)

    ring = ring_directions(first.direction, n_plane, rng=rng)
    second = _clamped_semi_axis(nearest_contact(seed, ring, grid))

    t = normalize(np.cross(second.direction, first.direction))
    third = _clamped_semi_axis(nearest_contact(seed, np.array([t, -t]), grid))

    if not is_right_handed(first.direction, second.direction, third.direction):
        second, third = third, second

    ellipsoid = Ellipsoid.from_semi_axes([first, second, third], center=seed)
    return ellipsoid, contact.truncated


class EllipsoidGrower:
    """Search for the largest ellipsoid that can be grown from seed points.

    The spiral of initial directions depends only on the parameters, so it is
    computed once and reused for every seed.

    Parameters
    ----------
    grid : VoxelGrid
        The binary volume. It is only read.
    params : GrowthParameters
        Search parameters. Defaults to ``GrowthParameters()``.
    """

    def __init__(self, grid, params=None):
        if params is None:
            params = GrowthParameters()
        self.grid = grid
        self.params = params
        self.directions = spiral_directions(params.n_sphere)

    def candidates(self, seed, rng=None):
        """Grow one candidate ellipsoid per initial direction.

        Every candidate gets its own random generator, spawned from ``rng``
        in the order of the directions, so the result does not depend on the
        number of workers.

        Returns
        -------
        : list of Ellipsoid
            The candidates, in the order of ``self.directions``.

        Raises
        ------
        OutOfBoundsError
            If ``seed`` lies outside of the grid.
        NoEllipsoidError
            If ``seed`` is in a background voxel.
        """
        seed = np.array(seed, dtype=float)
        start = self.grid.check_bounds(seed)
        if not self.grid.is_foreground(start):
            raise NoEllipsoidError(f"Seed {seed} is in a background voxel.")
        return [ellipsoid for ellipsoid, _ in self._grow_all(seed, rng)]

    def _grow_all(self, seed, rng):
        rng = np.random.default_rng(rng)
        rngs = rng.spawn(len(self.directions))
        n_plane = self.params.n_plane

        def grow(job):
            direction, child_rng = job
            return _grow_candidate(seed, direction, n_plane, self.grid, child_rng)

        jobs = list(zip(self.directions, rngs))
        n_workers = self.params.n_workers
        if n_workers is None or n_workers == 1:
            return [grow(job) for job in jobs]
        with ThreadPoolExecutor(max_workers=n_workers) as pool:
            return list(pool.map(grow, jobs))

    def grow(self, seed, rng=None):
        """Find the largest candidate ellipsoid at a seed point.

        Ties in volume are resolved in favour of the first candidate in the
        order of the spiral directions.

        Parameters
        ----------
        seed : np.ndarray, shape (3,)
            The seed point, in voxel coordinates.
        rng : int or np.random.Generator
            Random source. Passing the same integer seed gives identical
            results.

        Returns
        -------
        : Ellipsoid or None
            The largest candidate, or ``None`` if no ellipsoid exists at the
            seed: either the seed voxel is background, or no direction from
            the seed reaches the background before the edge of the grid.

        Raises
        ------
        OutOfBoundsError
            If ``seed`` lies outside of the grid.
        """
        seed = np.array(seed, dtype=float)
        start = self.grid.check_bounds(seed)
        if not self.grid.is_foreground(start):
            logger.debug("Seed %s is in a background voxel.", seed)
            return None

        logger.debug(
            "Growing %d candidates from seed %s with %d in-plane directions.",
            len(self.directions),
            seed,
            self.params.n_plane,
        )
        results = self._grow_all(seed, rng)

        # the first axis of each candidate follows one spiral direction
        if all(truncated for _, truncated in results):
            logger.debug("No background reachable from seed %s.", seed)
            return None

        best = None
        for ellipsoid, _ in results:
            if best is None or ellipsoid.volume > best.volume:
                best = ellipsoid

        logger.info(
            "Largest ellipsoid at %s has half extents %s.", seed, best.half_extents
        )
        return best


def grow_ellipsoid(
    seed, grid, max_sampling_radius=10.0, pixel_width=1.0, rng=None, n_workers=None
):
    """Grow the largest ellipsoid at a seed point.

    Convenience wrapper around :class:`EllipsoidGrower`; see
    :meth:`EllipsoidGrower.grow`.
    """
    params = GrowthParameters(
        max_sampling_radius=max_sampling_radius,
        pixel_width=pixel_width,
        n_workers=n_workers,
    )
    return EllipsoidGrower(grid, params).grow(seed, rng=rng)
