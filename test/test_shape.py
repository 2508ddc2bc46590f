import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from ndshape import AbstractShape, Shape, ConstShape, ConstPow2Shape, RuntimeShape, RuntimePow2Shape, dtypes
from ndshape.const_shape import ConstShape3u32, ConstShape3i32, ConstShape4u32, ConstShape4i32, ConstPow2Shape3u32, \
  ConstPow2Shape4u32, ConstPow2Shape4i64, ConstPow2Shape2i8
from ndshape.helpers import DEBUG, prod
import itertools, unittest

DEBUG.value = 0

def all_coords(extents):
  # axis 0 fastest
  for c in itertools.product(*(range(e) for e in reversed(extents))): yield c[::-1]

def arbitrary_shapes(extents, dtype=dtypes.u32):
  return [ConstShape.family(len(extents), dtype)[tuple(extents)](), RuntimeShape.new(extents, dtype)]

def pow2_shapes(bits, dtype=dtypes.u32):
  return [ConstPow2Shape.family(len(bits), dtype)[tuple(bits)](), RuntimePow2Shape.new(bits, dtype)]

class TestScenarios(unittest.TestCase):
  def test_arbitrary(self):
    shape = ConstShape3u32[5, 6, 7]()
    self.assertEqual(shape.linearize([1, 2, 3]), 101)
    self.assertEqual(shape.delinearize(101), (1, 2, 3))

  def test_pow2(self):
    shape = ConstPow2Shape3u32[1, 2, 3]()
    self.assertEqual(shape.as_array(), (2, 4, 8))
    self.assertEqual(shape.linearize([1, 2, 3]), 0b011_10_1)
    self.assertEqual(shape.linearize([1, 2, 3]), 29)
    self.assertEqual(shape.delinearize(29), (1, 2, 3))

  def test_runtime_matches_const(self):
    const, runtime = ConstShape3u32[5, 6, 7](), RuntimeShape.new([5, 6, 7])
    self.assertEqual(runtime.linearize([1, 2, 3]), 101)
    for c in all_coords((5, 6, 7)):
      self.assertEqual(const.linearize(c), runtime.linearize(c))
      self.assertEqual(const.delinearize(const.linearize(c)), runtime.delinearize(runtime.linearize(c)))

  def test_4d_iteration_is_monotonic(self):
    for shape in arbitrary_shapes((5, 6, 7, 8)):
      data = [0] * (5 * 6 * 7 * 8)
      last = -1
      for w in range(8):
        for z in range(7):
          for y in range(6):
            for x in range(5):
              i = shape.linearize([x, y, z, w])
              self.assertEqual(i, last + 1)
              data[i] += 1
              last = i
      self.assertEqual(last, shape.size() - 1)
      self.assertTrue(all(d == 1 for d in data))

  def test_unsigned_negative_stride(self):
    for shape in arbitrary_shapes((10, 10, 10), dtypes.u32):
      stride = shape.linearize([0, dtypes.u32.wrap(-1), 0])
      self.assertEqual(stride, dtypes.u32.wrap(-10))
      self.assertEqual(shape.linearize([0, -1, 0]), stride)
      self.assertNotEqual(shape.delinearize(stride), (0, dtypes.u32.wrap(-1), 0))
      self.assertEqual(shape.delinearize(stride), (6, 8, 42949672))

  def test_signed_negative_stride(self):
    for shape in arbitrary_shapes((10, 10, 10), dtypes.i32):
      stride = shape.linearize([0, -1, 0])
      self.assertEqual(stride, -10)
      self.assertEqual(shape.delinearize(stride), (0, -1, 0))
    shape = ConstShape3i32[10, 10, 10]
    self.assertEqual(shape.delinearize(shape.linearize([0, 0, -1])), (0, 0, -1))
    self.assertEqual(shape.delinearize(shape.linearize([-1, 0, 0])), (-1, 0, 0))

  def test_signed_4d_negative_stride(self):
    for shape in arbitrary_shapes((5, 6, 7, 8), dtypes.i32):
      self.assertEqual(shape.linearize([0, 0, -1, 0]), -30)
      self.assertEqual(shape.delinearize(-30), (0, 0, -1, 0))
      self.assertEqual(shape.delinearize(-210), (0, 0, 0, -1))

class TestProperties(unittest.TestCase):
  def assert_bijection(self, shape):
    extents = shape.as_array()
    indices = set()
    for c in all_coords(extents):
      i = shape.linearize(c)
      self.assertEqual(shape.delinearize(i), tuple(c), f"{shape} {c} -> {i}")
      indices.add(i)
    self.assertEqual(indices, set(range(shape.size())), shape)
    self.assertEqual(shape.size(), prod(extents))

  def test_arbitrary_bijection(self):
    for extents in [(5, 6), (1, 9), (5, 6, 7), (3, 1, 4), (5, 6, 7, 8), (2, 1, 3, 1)]:
      for dtype in (dtypes.u16, dtypes.u32, dtypes.i32, dtypes.u64, dtypes.usize):
        for shape in arbitrary_shapes(extents, dtype): self.assert_bijection(shape)

  def test_pow2_bijection(self):
    for bits in [(2, 3), (0, 4), (1, 2, 3), (3, 0, 2), (1, 2, 3, 2), (2, 2, 2, 2)]:
      for dtype in (dtypes.u16, dtypes.u32, dtypes.i32, dtypes.i64):
        for shape in pow2_shapes(bits, dtype): self.assert_bijection(shape)

  def test_small_scalars(self):
    for shape in arbitrary_shapes((15, 17), dtypes.u8): self.assert_bijection(shape)
    for shape in arbitrary_shapes((11, 11), dtypes.i8): self.assert_bijection(shape)
    for shape in pow2_shapes((3, 4), dtypes.u8): self.assert_bijection(shape)
    for shape in pow2_shapes((3, 3), dtypes.i8): self.assert_bijection(shape)

  def test_pow2_4d_uses_every_axis(self):
    for shape in pow2_shapes((1, 2, 3, 2)):
      self.assertEqual(shape.linearize([0, 0, 0, 1]), 1 << 6)
      self.assertEqual(shape.linearize([1, 3, 7, 3]), 255)
      self.assertEqual(shape.delinearize(255), (1, 3, 7, 3))
      self.assertEqual(shape.delinearize(1 << 6), (0, 0, 0, 1))
    shape = ConstPow2Shape4u32[4, 4, 4, 4]
    self.assertEqual(shape.linearize([0xA, 0xB, 0xC, 0xD]), 0xDCBA)
    self.assertEqual(shape.delinearize(0xDCBA), (0xA, 0xB, 0xC, 0xD))
    shape = ConstPow2Shape4i64[10, 10, 10, 10]
    c = (1023, 0, 512, 777)
    self.assertEqual(shape.delinearize(shape.linearize(c)), c)

  def test_signed_pow2_full_width(self):
    shape = ConstPow2Shape2i8[3, 4]()
    self.assertEqual(shape.linearize([7, 15]), 127)
    self.assertEqual(shape.delinearize(127), (7, 15))
    self.assertEqual(shape.size(), -128)

  def test_cross_strategy(self):
    for bits in [(1, 2, 3), (2, 2), (3, 1, 0, 2)]:
      extents = tuple(1 << b for b in bits)
      pow2 = pow2_shapes(bits)
      arbitrary = arbitrary_shapes(extents)
      for shape in pow2 + arbitrary: self.assertEqual(shape.as_array(), extents)
      for c in all_coords(extents):
        self.assertEqual(len({shape.linearize(c) for shape in pow2 + arbitrary}), 1, c)

  def test_out_of_range_wraps(self):
    for shape in arbitrary_shapes((5, 6, 7), dtypes.u8):
      self.assertEqual(shape.linearize([0, 0, 10]), 300 % 256)
    for shape in pow2_shapes((4, 4), dtypes.u8):
      self.assertEqual(shape.linearize([0, 16]), 0)
      self.assertEqual(shape.delinearize(0x1FF), (0xF, 0xF))

  def test_as_array_and_ndim(self):
    for shape in arbitrary_shapes((5, 6, 7, 8)):
      self.assertEqual(shape.as_array(), (5, 6, 7, 8))
      self.assertEqual(shape.ndim, 4)
    for shape in pow2_shapes((1, 2)):
      self.assertEqual(shape.as_array(), (2, 4))
      self.assertEqual(shape.ndim, 2)

class TestContract(unittest.TestCase):
  def test_protocols(self):
    for shape in arbitrary_shapes((5, 6, 7)) + pow2_shapes((1, 2, 3)):
      self.assertIsInstance(shape, Shape)
      self.assertIsInstance(shape, AbstractShape)

  def test_interchangeable(self):
    def offset_of(shape:Shape, p) -> int: return shape.linearize(p)
    shapes = [ConstShape4u32[2, 4, 8, 2](), RuntimeShape.new((2, 4, 8, 2)), ConstPow2Shape4u32[1, 2, 3, 1](), RuntimePow2Shape.new((1, 2, 3, 1))]
    self.assertEqual({offset_of(shape, (1, 3, 5, 1)) for shape in shapes}, {1 + 2*3 + 8*5 + 64*1})
    self.assertEqual({shape.size() for shape in shapes}, {128})

  def test_const_class_and_instance_agree(self):
    cls = ConstShape4i32[5, 6, 7, 8]
    self.assertEqual(cls.linearize([4, 5, 6, 7]), cls().linearize([4, 5, 6, 7]))
    self.assertEqual(cls.SIZE, cls().size())
    self.assertEqual(cls.ARRAY, cls().as_array())

if __name__ == '__main__':
  unittest.main()
