"""Deterministic quasi-uniform directions on the unit sphere."""
import numpy as np


# empirical packing-density constant of the generalized spiral set
SPIRAL_STEP = 3.6

# empirical constant relating search radius to the number of spiral points
SPIRAL_DENSITY = 3.809


def spiral_directions(n):
    """Generate ``n`` quasi-uniformly distributed unit vectors.

    This is the generalized spiral set of Rakhmanov et al. (1994), as
    described by Saff and Kuijlaars (1997),
    https://doi.org/10.1007/BF03024331. The index ``k`` is shifted to start
    at zero. The points run from the south pole ``(0, 0, -1)`` to the north
    pole ``(0, 0, 1)``; the output is a pure function of ``n``.

    Parameters
    ----------
    n : int
        Number of directions. Must be greater than two.

    Returns
    -------
    : np.ndarray, shape (n, 3)
        The unit vectors.

    Raises
    ------
    ValueError
        If ``n <= 2``, for which the recurrence is undefined.
    """
    if n <= 2:
        raise ValueError(f"Spiral set needs more than two points, got {n}.")

    k = np.arange(n)
    h = -1.0 + 2.0 * k / (n - 1)
    theta = np.arccos(h)

    # azimuth by recurrence; both poles are fixed to zero
    phi = np.zeros(n)
    for i in range(1, n - 1):
        phi_i = phi[i - 1] + SPIRAL_STEP / np.sqrt(n) / np.sqrt(1 - h[i] ** 2)
        phi[i] = np.mod(phi_i, 2 * np.pi)

    return np.column_stack(
        (np.sin(theta) * np.cos(phi), np.sin(theta) * np.sin(phi), np.cos(theta))
    )


def n_spiral_points(max_sampling_radius, pixel_width=1.0):
    """Number of spiral directions needed to sample a sphere of given radius.

    Parameters
    ----------
    max_sampling_radius : float, positive
        Radius of the search sphere, in voxels.
    pixel_width : float, positive
        Calibrated width of one voxel.

    Returns
    -------
    : int
        ``ceil((max_sampling_radius * 3.809 / pixel_width)**2)``.
    """
    assert max_sampling_radius > 0
    assert pixel_width > 0
    return int(np.ceil((max_sampling_radius * SPIRAL_DENSITY / pixel_width) ** 2))


def n_ring_points(max_sampling_radius, pixel_width=1.0):
    """Number of in-plane directions needed to sample a circle of given radius.

    Returns
    -------
    : int
        ``ceil(2 * pi * max_sampling_radius / pixel_width)``.
    """
    assert max_sampling_radius > 0
    assert pixel_width > 0
    return int(np.ceil(2 * np.pi * max_sampling_radius / pixel_width))
