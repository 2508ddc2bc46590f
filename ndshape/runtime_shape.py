from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Sequence
import functools, operator
from ndshape.dtype import DType, dtypes
from ndshape.helpers import cdiv, cmod
from ndshape.layout import check_bits, check_extents, extents_for_bits, masks_for_bits, shifts_for_bits, size_for_bits, \
  size_for_extents, strides_for_extents

@dataclass(frozen=True, slots=True)
class RuntimeShape:
  """A shape with arbitrary extents chosen at runtime. Strides and size are computed once by `new`."""
  dtype:DType
  array:tuple[int, ...]
  strides:tuple[int, ...]
  _size:int

  @staticmethod
  def new(extents:Sequence[int], dtype:DType=dtypes.u32) -> RuntimeShape:
    extents = tuple(extents)
    check_extents(extents, dtype)
    extents = dtype.wrap_all(extents)
    return RuntimeShape(dtype, extents, strides_for_extents(extents, dtype), size_for_extents(extents, dtype))

  @property
  def ndim(self) -> int: return len(self.array)
  def size(self) -> int: return self._size
  def as_array(self) -> tuple[int, ...]: return self.array
  def copy(self) -> RuntimeShape: return replace(self)

  def linearize(self, p:Sequence[int]) -> int:
    assert len(p) == len(self.strides), f"Expected {len(self.strides)} coordinates for shape {self.array} but got {p}"
    return self.dtype.wrap(sum(x * s for x, s in zip(p, self.strides)))

  def delinearize(self, i:int) -> tuple[int, ...]:
    wrap, strides = self.dtype.wrap, self.strides
    i = wrap(i)
    if len(strides) < 2: return (i,)
    coords = [0] * len(strides)
    for k in range(len(strides) - 1, 1, -1):
      coords[k] = wrap(cdiv(i, strides[k]))
      i = wrap(i - coords[k] * strides[k])
    coords[1], coords[0] = wrap(cdiv(i, strides[1])), wrap(cmod(i, strides[1]))
    return tuple(coords)

@dataclass(frozen=True, slots=True)
class RuntimePow2Shape:
  """
  A shape whose extents are powers of two chosen at runtime, given as bits per axis.

  Extents that are not powers of two cannot be expressed; passing bit counts
  that do not fit the scalar type produces overlapping masks unless
  `CHECK_SHAPES` catches it first.
  """
  dtype:DType
  bits:tuple[int, ...]
  array:tuple[int, ...]
  shifts:tuple[int, ...]
  masks:tuple[int, ...]
  _size:int

  @staticmethod
  def new(bits:Sequence[int], dtype:DType=dtypes.u32) -> RuntimePow2Shape:
    bits = tuple(bits)
    check_bits(bits, dtype)
    return RuntimePow2Shape(dtype, bits, extents_for_bits(bits, dtype), shifts_for_bits(bits), masks_for_bits(bits, dtype), size_for_bits(bits, dtype))

  @property
  def ndim(self) -> int: return len(self.array)
  def size(self) -> int: return self._size
  def as_array(self) -> tuple[int, ...]: return self.array
  def copy(self) -> RuntimePow2Shape: return replace(self)

  def linearize(self, p:Sequence[int]) -> int:
    assert len(p) == len(self.shifts), f"Expected {len(self.shifts)} coordinates for shape {self.array} but got {p}"
    return self.dtype.wrap(functools.reduce(operator.or_, (x << s for x, s in zip(p, self.shifts)), 0))

  def delinearize(self, i:int) -> tuple[int, ...]:
    i = self.dtype.wrap(i)
    return tuple((i & m) >> s for m, s in zip(self.masks, self.shifts))
