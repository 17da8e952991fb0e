from __future__ import annotations

from functools import cached_property
from typing import Optional

from .exceptions import PointDecompressionError
from .field import fe, minus1, one, q, sqrt_ratio, zero
from .util import check_length, tobytes, tointsign

# Twisted Edwards curve: a x2 + y2 = 1 + d x2 y2
# Ed25519 constants:
a, d = minus1, -fe(121665) / fe(121666)

# Points are represented as tuples (X, Y, Z, T) of extended
# coordinates, with x = X/Z, y = Y/Z, x*y = T/Z

class EdPoint:
  def __init__(self, x: fe, y: fe, z: fe = one, t: Optional[fe] = None):
    self.X = x
    self.Y = y
    self.Z = z
    self.T = x * y if t is None else t

  @staticmethod
  def from_bytes(b: bytes) -> EdPoint:
    """
    Decompress a 32-byte Ed25519 point.

    Canonicality is not checked: y values at or above p wrap around, and the
    sign bit is accepted on x = 0 (where negation does nothing), as most
    implementations do.

    :raises InvalidLength: if b is not 32 bytes
    :raises PointDecompressionError: if no point has the encoded y and sign
    """
    val, sign = tointsign(check_length(b, 32, "point"))
    return EdPoint.from_y(fe(val), sign)

  @staticmethod
  def from_y(y: fe, negative=False) -> EdPoint:
    """Restore from a y coordinate and the sign (parity) of x"""
    ok, x = sqrt_ratio(y.sq - one, d * y.sq + one)
    if not ok: raise PointDecompressionError("Point decompression failed")
    return EdPoint(-x if negative else x, y)

  def __repr__(self): return point_name(self)
  def __str__(self): return bytes(self).hex()
  def __bytes__(self): return tobytes(self.y.val + (self.x.is_negative << 255))
  def __hash__(self): return self.y.val

  @cached_property
  def norm(self) -> EdPoint:
    """Return a normalized point, with Z=1."""
    return EdPoint(self.x, self.y)

  @cached_property
  def x(self) -> fe: return self.X / self.Z

  @cached_property
  def y(self) -> fe: return self.Y / self.Z

  @cached_property
  def is_identity(self) -> bool: return self == ZERO

  @cached_property
  def is_small_order(self) -> bool:
    """True for the eight points whose order divides the cofactor"""
    return self.mul_by_cofactor().is_identity

  @cached_property
  def is_torsion_free(self) -> bool:
    """True if the point lies in the prime order subgroup (ZERO included)"""
    return (q * self).is_identity

  def mul_by_cofactor(self) -> EdPoint:
    P = self + self
    P += P
    P += P
    return P.norm

  def __add__(self, othr: EdPoint) -> EdPoint:
    if not isinstance(othr, EdPoint): return NotImplemented
    A = (self.Y - self.X) * (othr.Y - othr.X)
    B = (self.Y + self.X) * (othr.Y + othr.X)
    C = fe(2) * self.T * othr.T * d
    D = fe(2) * self.Z * othr.Z
    E, F, G, H = B - A, D - C, D + C, B + A
    return EdPoint(E * F, G * H, F * G, E * H)

  def __sub__(self, othr: EdPoint) -> EdPoint:
    return self + -othr

  def __neg__(self) -> EdPoint:
    return EdPoint(-self.X, self.Y, self.Z, -self.T)

  def __mul__(self, s: int) -> EdPoint:
    """Multiply the point by an integer, no matter how large or negative."""
    if not isinstance(s, int): return NotImplemented
    Q = ZERO  # Neutral element
    P = self
    # 8 * q is the exponent of the whole group, so this is exact for any point
    s %= 8 * q
    while s > 0:
      if s & 1: Q += P
      P += P
      s >>= 1
    return Q.norm

  def __rmul__(self, s: int) -> EdPoint:
    return self * s

  def __eq__(self, othr):
    if not isinstance(othr, EdPoint): raise TypeError(f"EdPoints cannot be compared with {type(othr)}")
    # x1 / z1 == x2 / z2  <==>  x1 * z2 == x2 * z1
    return (
      (self.X * othr.Z - othr.X * self.Z) == zero and
      (self.Y * othr.Z - othr.Y * self.Z) == zero
    )

# Neutral element
ZERO = EdPoint(zero, one)

# Base point (prime group generator), called B in RFC 8032
G = EdPoint.from_y(fe(4) / fe(5), False)


def double_scalar_mul_basepoint(a: int, A: EdPoint, b: int) -> EdPoint:
  """Compute a * A + b * G"""
  return (a * A + b * G).norm


def point_name(P: EdPoint) -> str:
  """Return variable names rather than xy coordinates for any constants defined here"""
  for name, val in globals().items():
    if isinstance(val, EdPoint) and P == val:
      return name
  return f"EdPoint({P.x!r}, {P.y!r})"
