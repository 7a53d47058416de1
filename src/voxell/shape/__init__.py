"""Shapes used to describe and rasterize geometry."""
from .base import Shape
from .box import Box
from .cylinder import Cylinder
from .ellipsoid import Ellipsoid, SemiAxis
