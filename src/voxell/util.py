import numpy as np


def normalize(v, axis=-1):
    """Scale a vector (or set of vectors) to unit length.

    Parameters
    ----------
    v : np.ndarray, shape (3,) or (n, 3)
        The vector(s) to normalize. The input is not modified.
    axis : int
        The axis along which the norm is computed.

    Returns
    -------
    : np.ndarray, same shape as ``v``
        The unit vector(s).

    Raises
    ------
    ValueError
        If any of the vectors has zero length.
    """
    v = np.asarray(v, dtype=float)
    norm = np.linalg.norm(v, axis=axis, keepdims=True)
    if np.any(norm == 0):
        raise ValueError("Cannot normalize a zero-length vector.")
    return v / norm


def is_right_handed(x, y, z):
    """Check if the ordered axes ``(x, y, z)`` form a right-handed basis.

    This is the sign of ``det([x, y, z])`` with the axes as columns, which is
    the triple product ``(x × y) · z``.
    """
    return np.dot(np.cross(x, y), z) > 0


def voxel_index(points):
    """Truncate real-valued positions to integer voxel indices.

    Truncation is toward zero, so coordinates in ``(-1, 0)`` map to index
    zero.

    Parameters
    ----------
    points : np.ndarray, shape (3,) or (n, 3)
        Positions in voxel coordinates.

    Returns
    -------
    : np.ndarray of int, same shape as ``points``
        The voxel indices.
    """
    return np.trunc(np.asarray(points, dtype=float)).astype(np.int64)


def clean_transform(rotation, translation, dim=3):
    if rotation is None:
        rotation = np.eye(dim)
    else:
        rotation = np.array(rotation, dtype=float)

    if translation is None:
        translation = np.zeros(dim)
    else:
        translation = np.array(translation, dtype=float)

    return rotation, translation
