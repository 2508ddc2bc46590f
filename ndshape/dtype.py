from __future__ import annotations
from dataclasses import dataclass
from typing import Literal
import ctypes, functools

FmtStr = Literal['B', 'H', 'I', 'Q', 'N', 'b', 'h', 'i', 'q']

@dataclass(frozen=True, eq=False)
class DType:
  itemsize: int
  name: str
  fmt: FmtStr
  signed: bool

  @property
  def bits(self) -> int: return self.itemsize * 8
  @functools.cached_property
  def mask(self) -> int: return (1 << self.bits) - 1
  @functools.cached_property
  def min(self) -> int: return -(1 << (self.bits - 1)) if self.signed else 0
  @functools.cached_property
  def max(self) -> int: return (1 << (self.bits - 1)) - 1 if self.signed else self.mask

  def wrap(self, x:int) -> int:
    """Reduce `x` modulo 2**bits, reinterpreting the top bit as a sign for signed types."""
    x &= self.mask
    return x - self.mask - 1 if self.signed and x > self.max else x
  def wrap_all(self, xs) -> tuple[int, ...]: return tuple(self.wrap(x) for x in xs)
  def __repr__(self): return f"dtypes.{self.name}"

class dtypes:
  u8 = DType(1, 'u8', 'B', False)
  u16 = DType(2, 'u16', 'H', False)
  u32 = DType(4, 'u32', 'I', False)
  u64 = DType(8, 'u64', 'Q', False)
  usize = DType(ctypes.sizeof(ctypes.c_size_t), 'usize', 'N', False)
  i8 = DType(1, 'i8', 'b', True)
  i16 = DType(2, 'i16', 'h', True)
  i32 = DType(4, 'i32', 'i', True)
  i64 = DType(8, 'i64', 'q', True)

  all: tuple[DType, ...] = (u8, u16, u32, u64, usize, i8, i16, i32, i64)

  @staticmethod
  def get_dtype(name:str) -> DType:
    if not isinstance(d := getattr(dtypes, name, None), DType): raise ValueError(f"Unknown dtype {name!r}. Expected one of {[d.name for d in dtypes.all]}")
    return d
