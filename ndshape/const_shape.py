from __future__ import annotations
from ndshape import compiler, renderer
from ndshape.dtype import DType, dtypes
from ndshape.helpers import all_instance, cdiv, cmod, tupled
from ndshape.layout import NDIMS, check_bits, check_extents, extents_for_bits, masks_for_bits, shifts_for_bits, size_for_bits, \
  size_for_extents, strides_for_extents, usize

class ConstShapeMetaClass(type):
  cache:dict[tuple, type] = {}
  def __getitem__(cls, params) -> type:
    params = tupled(params)
    if cls.NDIM is None: raise TypeError(f"{cls.__name__} needs a dimension and scalar type first, e.g. {cls.__name__}.family(3, dtypes.u32)")
    if cls.PARAMS is not None: raise TypeError(f"{cls!r} is already specialized")
    if len(params) != cls.NDIM: raise TypeError(f"{cls.__name__} takes {cls.NDIM} parameters but got {len(params)}: {params}")
    if not all_instance(params, int): raise TypeError(f"{cls.__name__} parameters have to be ints but got {params}")
    params = cls.normalize(params)
    key = (cls, params)
    if (ret := ConstShapeMetaClass.cache.get(key)) is None:
      ConstShapeMetaClass.cache[key] = ret = cls.specialize(params)
    return ret
  def __repr__(cls): return cls.__name__ if cls.PARAMS is None else f"{cls.__name__}[{', '.join(map(str, cls.PARAMS))}]"

class _ConstShapeBase(metaclass=ConstShapeMetaClass):
  NDIM:int|None = None
  DTYPE:DType|None = None
  PARAMS:tuple[int, ...]|None = None
  ARRAY:tuple[int, ...]
  SIZE:int
  USIZE:int
  SOURCE:str

  def __new__(cls):
    if cls.PARAMS is None: raise TypeError(f"{cls!r} has to be specialized before it can be instantiated, e.g. {cls.__name__}[{', '.join(['1'] * (cls.NDIM or 3))}]")
    return super().__new__(cls)

  @classmethod
  def family(cls, ndim:int, dtype:DType) -> type:
    assert cls.NDIM is None, f"{cls!r} is already a family"
    assert ndim in NDIMS, f"Shapes have {', '.join(map(str, NDIMS))} dimensions, got {ndim}"
    key = (cls, ndim, dtype)
    if (ret := ConstShapeMetaClass.cache.get(key)) is None:
      name = f"{cls.__name__}{ndim}{dtype.name}"
      ConstShapeMetaClass.cache[key] = ret = type(cls)(name, (cls,), {"NDIM": ndim, "DTYPE": dtype, "__module__": cls.__module__, "__qualname__": name})
    return ret

  # runs on every subscription, before the cache is consulted
  @classmethod
  def normalize(cls, params:tuple[int, ...]) -> tuple[int, ...]: raise NotImplementedError
  @classmethod
  def specialize(cls, params:tuple[int, ...]) -> type: raise NotImplementedError
  @classmethod
  def _create(cls, params:tuple[int, ...], tables:dict, source:str) -> type:
    linearize, delinearize = compiler.compile(source, ("linearize", "delinearize"), {"wrap": cls.DTYPE.wrap, "cdiv": cdiv, "cmod": cmod}, f"<{cls.__name__}{list(params)}>")
    namespace = {"PARAMS": params, "SOURCE": source, "USIZE": usize(tables["SIZE"]), **tables,
                 "linearize": staticmethod(linearize), "delinearize": staticmethod(delinearize),
                 "__module__": cls.__module__, "__qualname__": f"{cls.__name__}[{', '.join(map(str, params))}]"}
    return type(cls)(cls.__name__, (cls,), namespace)

  @property
  def ndim(self) -> int: return self.NDIM
  def size(self) -> int: return self.SIZE
  def as_array(self) -> tuple[int, ...]: return self.ARRAY
  @staticmethod
  def linearize(p) -> int: raise NotImplementedError
  @staticmethod
  def delinearize(i:int) -> tuple[int, ...]: raise NotImplementedError

  def __eq__(self, x): return type(self) is type(x)
  def __hash__(self): return hash(type(self))
  def __repr__(self): return f"{type(self)!r}()"

class ConstShape(_ConstShapeBase):
  """
  A shape with arbitrary extents fixed when the class is specialized.

  `ConstShape3u32[5, 6, 7]` is a class whose strides and size are class
  constants and whose `linearize`/`delinearize` are compiled with the strides
  folded in. It holds no state; instances exist only to satisfy `Shape`.
  """
  STRIDES:tuple[int, ...]

  @classmethod
  def normalize(cls, extents:tuple[int, ...]) -> tuple[int, ...]:
    check_extents(extents, cls.DTYPE)
    return cls.DTYPE.wrap_all(extents)

  @classmethod
  def specialize(cls, extents:tuple[int, ...]) -> type:
    strides = strides_for_extents(extents, cls.DTYPE)
    source = renderer.render_linearize(strides, cls.DTYPE) + "\n" + renderer.render_delinearize(strides, cls.DTYPE)
    return cls._create(extents, {"ARRAY": extents, "STRIDES": strides, "SIZE": size_for_extents(extents, cls.DTYPE)}, source)

class ConstPow2Shape(_ConstShapeBase):
  """
  A shape whose extents are powers of two, parameterized by bits per axis.

  `ConstPow2Shape3u32[1, 2, 3]` has extents (2, 4, 8). Coordinates are packed
  with shifts and unpacked with masks, so no division happens.
  """
  SHIFTS:tuple[int, ...]
  MASKS:tuple[int, ...]

  @classmethod
  def normalize(cls, bits:tuple[int, ...]) -> tuple[int, ...]:
    check_bits(bits, cls.DTYPE)
    return bits

  @classmethod
  def specialize(cls, bits:tuple[int, ...]) -> type:
    shifts, masks = shifts_for_bits(bits), masks_for_bits(bits, cls.DTYPE)
    source = renderer.render_pow2_linearize(shifts, cls.DTYPE) + "\n" + renderer.render_pow2_delinearize(shifts, masks, cls.DTYPE)
    tables = {"ARRAY": extents_for_bits(bits, cls.DTYPE), "SHIFTS": shifts, "MASKS": masks, "SIZE": size_for_bits(bits, cls.DTYPE)}
    return cls._create(bits, tables, source)

__all__ = ["ConstShapeMetaClass", "ConstShape", "ConstPow2Shape"]

# ConstShape2u8 ... ConstShape4i64, ConstPow2Shape2u8 ... ConstPow2Shape4i64
for _dtype in dtypes.all:
  for _ndim in NDIMS:
    for _family in (ConstShape, ConstPow2Shape):
      globals()[_name := f"{_family.__name__}{_ndim}{_dtype.name}"] = _family.family(_ndim, _dtype)
      __all__.append(_name)
