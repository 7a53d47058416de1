"""Example of growing an ellipsoid inside a voxelized cylinder."""
import logging

import numpy as np
import matplotlib.pyplot as plt

import voxell as vx


def main():
    logging.basicConfig(level=logging.DEBUG)

    cylinder = vx.Cylinder(length=30, radius=10, center=[25, 25, 25])
    grid = vx.ArrayVoxelGrid.from_shape(cylinder, extents=(51, 51, 51))

    seed = [25, 25, 25]
    ell = vx.grow_ellipsoid(seed, grid, max_sampling_radius=3, rng=0)
    print(f"half extents = {ell.half_extents}")
    print(f"volume = {ell.volume:.1f} (cylinder volume = {cylinder.volume:.1f})")

    # points on the ellipsoid surface near the z = 25 slice
    rng = np.random.default_rng(0)
    points = ell.sample_surface(5000, rng=rng)
    points = points[np.abs(points[:, 2] - seed[2]) < 0.5]

    plt.figure()
    plt.imshow(grid.mask[:, :, seed[2]].T, origin="lower", cmap="Greys", alpha=0.5)
    plt.scatter(points[:, 0], points[:, 1], s=1, color="r")
    ax = plt.gca()
    ax.set_aspect("equal")
    plt.xlabel("x")
    plt.ylabel("y")
    plt.title("Ellipsoid grown in a cylinder (z = 25 slice)")

    # same along the longitudinal axis
    points = ell.sample_surface(5000, rng=rng)
    points = points[np.abs(points[:, 1] - seed[1]) < 0.5]

    plt.figure()
    plt.imshow(grid.mask[:, seed[1], :].T, origin="lower", cmap="Greys", alpha=0.5)
    plt.scatter(points[:, 0], points[:, 2], s=1, color="r")
    ax = plt.gca()
    ax.set_aspect("equal")
    plt.xlabel("x")
    plt.ylabel("z")
    plt.title("Ellipsoid grown in a cylinder (y = 25 slice)")

    plt.show()


if __name__ == "__main__":
    main()
