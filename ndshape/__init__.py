"""
Linearization of 2D, 3D and 4D coordinates for flat-buffer-backed arrays.

Axis 0 varies fastest: `linearize([x, y, z]) == x + X*y + X*Y*z`. Pick a different
coordinate order for a different memory layout, e.g. `[z, y, x]` for column-major.
"""
from ndshape.dtype import DType, dtypes
from ndshape.shape import AbstractShape, Shape
from ndshape.const_shape import *
from ndshape.runtime_shape import RuntimeShape, RuntimePow2Shape
