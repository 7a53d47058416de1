import numpy as np
import pytest
from spatialmath.base import rotx, rotz

import voxell as vx


def test_normalize():
    v = np.array([3.0, 0, 4])
    u = vx.normalize(v)
    assert np.allclose(u, [0.6, 0, 0.8])

    # input is not modified
    assert np.allclose(v, [3, 0, 4])

    rng = np.random.default_rng(0)
    V = rng.uniform(-1, 1, size=(20, 3))
    U = vx.normalize(V)
    assert U.shape == (20, 3)
    assert np.allclose(np.linalg.norm(U, axis=1), 1.0)

    with pytest.raises(ValueError):
        vx.normalize(np.zeros(3))


def test_is_right_handed():
    x, y, z = np.eye(3)
    assert vx.is_right_handed(x, y, z)
    assert not vx.is_right_handed(x, z, y)
    assert not vx.is_right_handed(x, y, -z)

    C = rotz(0.3) @ rotx(-1.2)
    assert vx.is_right_handed(C[:, 0], C[:, 1], C[:, 2])
    assert not vx.is_right_handed(C[:, 1], C[:, 0], C[:, 2])


def test_voxel_index():
    # truncation is toward zero
    idx = vx.voxel_index([-0.5, 1.7, 2.0])
    assert idx.dtype.kind == "i"
    assert np.array_equal(idx, [0, 1, 2])

    idx = vx.voxel_index([[-1.5, 0.999, 10.2], [3, 4, 5]])
    assert np.array_equal(idx, [[-1, 0, 10], [3, 4, 5]])
