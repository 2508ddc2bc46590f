from __future__ import annotations
from typing import Protocol, Sequence, runtime_checkable

@runtime_checkable
class AbstractShape(Protocol):
  """
  The shape of an array with unspecified dimensionality.

  Coordinates go in as any sequence of ints and come out as tuples. All
  arithmetic wraps to the scalar type of the shape, so `linearize` never fails
  and never range-checks. `delinearize` only undoes `linearize` for coordinates
  inside the shape, or for any coordinates when the scalar type is signed.
  """

  def size(self) -> int:
    """The number of elements in an array with this shape."""
    ...

  def linearize(self, p:Sequence[int]) -> int:
    """Translate a coordinate vector into a single number that can be used for linear indexing."""
    ...

  def delinearize(self, i:int) -> tuple[int, ...]:
    """The inverse of `linearize`."""
    ...

@runtime_checkable
class Shape(AbstractShape, Protocol):
  """The shape of an `ndim`-dimensional array. Axis 0 varies fastest."""

  @property
  def ndim(self) -> int: ...

  def as_array(self) -> tuple[int, ...]:
    """The extents of the shape, one per axis. Power-of-two shapes report extents, not bits."""
    ...
