from .grid import VoxelGrid, ArrayVoxelGrid, OutOfBoundsError
from .grow import (
    EllipsoidGrower,
    GrowthParameters,
    NoEllipsoidError,
    grow_ellipsoid,
    grow_from_axis,
)
from .random import (
    random_points_on_hypersphere,
    random_unit_quaternions,
    rejection_sample,
)
from .ray import Contact, march, nearest_contact, ring_directions
from .shape import *
from .spiral import spiral_directions, n_spiral_points, n_ring_points
from .util import *
