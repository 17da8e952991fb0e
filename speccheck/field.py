from __future__ import annotations

from functools import cached_property
from typing import Tuple

# Field prime
p = 2**255 - 19

# Exponent used by the square root ratio, (p - 5) / 8 is an integer as p = 5 mod 8
p58 = (p - 5) // 8

# Group order of the prime subgroup (called L in RFC 8032)
q = 2**252 + 27742317777372353535851937790883648493


class fe:
  """A prime field element modulo p = 2^255 - 19"""
  def __init__(self, x: int): self.val = x % p
  def __hash__(self): return self.val
  def __repr__(self): return value_name(self)
  def __str__(self): return bytes(self).hex()
  def __bytes__(self): return self.val.to_bytes(32, 'little')
  def bit(self, n: int): return bool(self.val & 1 << n)

  def __eq__(self, other):
    # Note: if we return NotImplemented, Python does object comparison and returns False
    if not isinstance(other, fe): raise TypeError(f"Cannot compare fe with {other!r}")
    return self.val == other.val

  def __neg__(self): return fe(-self.val)
  def __add__(self, o: fe): return fe(self.val + o.val)
  def __sub__(self, o: fe): return fe(self.val - o.val)
  def __mul__(self, o: fe): return fe(self.val * o.val)

  def __truediv__(self, o: fe) -> fe:
    """Division mod p"""
    return self if o == one else fe(self.val * o.inv.val)

  def __pow__(self, s: int) -> fe:
    return self.sq if s == 2 else fe(pow(self.val, s, p))

  @cached_property
  def inv(self) -> fe: return self**-1

  @cached_property
  def sq(self) -> fe: return self * self

  @cached_property
  def is_negative(self) -> bool:
    """Ed25519 sign convention: odd values are negative."""
    return self.bit(0)

  def __abs__(self): return -self if self.is_negative else self


zero, one, minus1 = fe(0), fe(1), fe(-1)

# square root of -1
sqrtm1 = abs(fe(2)**((p - 1) // 4))
assert sqrtm1 * sqrtm1 == minus1


def sqrt_ratio(u: fe, v: fe) -> Tuple[bool, fe]:
  """
  Compute the non-negative square root of u / v.

  Returns (True, root) when u / v is a square (or u is zero), otherwise
  (False, something) where the second value is meaningless.
  """
  v3 = v.sq * v
  v7 = v3.sq * v
  r = u * v3 * (u * v7)**p58
  check = v * r.sq
  if check == u:
    return True, abs(r)
  if check == -u:
    return True, abs(r * sqrtm1)
  return False, r


def value_name(s: fe) -> str:
  """Return variable names rather than fe(...) for any constants defined here"""
  for name, val in globals().items():
    if isinstance(val, fe) and s == val:
      return name
  for name, val in globals().items():
    if isinstance(val, fe) and s == -val:
      return f"-{name}"
  return f"fe({s.val})"
