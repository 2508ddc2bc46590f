from __future__ import annotations
import functools, itertools, operator
from ndshape.dtype import DType, dtypes
from ndshape.helpers import CHECK_SHAPES, prod, all_instance

NDIMS = (2, 3, 4)

# Arbitrary extents

@functools.lru_cache(maxsize=None)
def strides_for_extents(extents:tuple[int, ...], dtype:DType) -> tuple[int, ...]:
  if not extents: return ()
  return tuple(map(dtype.wrap, itertools.accumulate(extents[:-1], operator.mul, initial=1)))

@functools.lru_cache(maxsize=None)
def size_for_extents(extents:tuple[int, ...], dtype:DType) -> int: return dtype.wrap(prod(extents))

def check_extents(extents:tuple[int, ...], dtype:DType):
  if not CHECK_SHAPES: return
  assert len(extents) in NDIMS, f"Shapes have {', '.join(map(str, NDIMS))} dimensions, got {len(extents)}: {extents}"
  assert all_instance(extents, int), f"Extents have to be ints. Extents: {extents}"
  assert all(e > 0 for e in extents), f"Extents have to be positive. Extents: {extents}"
  assert prod(extents) <= dtype.max, f"Size of shape {extents} is {prod(extents)} which overflows {dtype.name} (max {dtype.max})"

# Power-of-two extents, given as bits per axis

@functools.lru_cache(maxsize=None)
def shifts_for_bits(bits:tuple[int, ...]) -> tuple[int, ...]:
  if not bits: return ()
  return tuple(itertools.accumulate(bits[:-1], operator.add, initial=0))

@functools.lru_cache(maxsize=None)
def masks_for_bits(bits:tuple[int, ...], dtype:DType) -> tuple[int, ...]:
  return tuple(dtype.wrap(((1 << b) - 1) << s) for b, s in zip(bits, shifts_for_bits(bits)))

@functools.lru_cache(maxsize=None)
def extents_for_bits(bits:tuple[int, ...], dtype:DType) -> tuple[int, ...]: return tuple(dtype.wrap(1 << b) for b in bits)

@functools.lru_cache(maxsize=None)
def size_for_bits(bits:tuple[int, ...], dtype:DType) -> int: return dtype.wrap(1 << sum(bits))

def check_bits(bits:tuple[int, ...], dtype:DType):
  if not CHECK_SHAPES: return
  assert len(bits) in NDIMS, f"Shapes have {', '.join(map(str, NDIMS))} dimensions, got {len(bits)}: {bits}"
  assert all_instance(bits, int), f"Bit counts have to be ints. Bits: {bits}"
  assert all(b >= 0 for b in bits), f"Bit counts cannot be negative. Bits: {bits}"
  assert sum(bits) <= dtype.bits - dtype.signed, \
  f"Shape with bits {bits} needs {sum(bits)} bits but {dtype.name} only has {dtype.bits - dtype.signed} usable bits"

def usize(size:int) -> int: return dtypes.usize.wrap(size)
