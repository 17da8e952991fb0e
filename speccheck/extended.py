from __future__ import annotations

from typing import Iterable

from .field import q
from .util import tobytes, toint

# Non-reducing scalars in radix 2^52, the limb layout of curve25519-dalek's
# Scalar52 but without the final subtraction of q after additions. Values up
# to 2^260 are representable; serialization keeps the low 256 bits only.

LIMBS = 5
RADIX = 52
MASK = (1 << RADIX) - 1


class ExtendedScalar:
  __slots__ = ("limbs",)

  def __init__(self, limbs: Iterable[int]):
    limbs = tuple(limbs)
    if len(limbs) != LIMBS or any(not 0 <= l <= MASK for l in limbs):
      raise ValueError(f"Expected {LIMBS} limbs of {RADIX} bits")
    self.limbs = limbs

  @staticmethod
  def from_int(x: int) -> ExtendedScalar:
    return ExtendedScalar(x >> RADIX * i & MASK for i in range(LIMBS))

  @staticmethod
  def from_bytes(b: bytes) -> ExtendedScalar:
    return ExtendedScalar.from_int(toint(b))

  def __int__(self): return sum(l << RADIX * i for i, l in enumerate(self.limbs))
  def __bytes__(self): return tobytes(int(self) & (1 << 256) - 1)
  def __repr__(self): return f"ExtendedScalar({int(self)})"
  def __hash__(self): return hash(self.limbs)

  def __eq__(self, other):
    if not isinstance(other, ExtendedScalar): return NotImplemented
    return self.limbs == other.limbs

  def __add__(self, other: ExtendedScalar) -> ExtendedScalar:
    """Exact limb-wise addition with carry (no modular reduction)"""
    if not isinstance(other, ExtendedScalar): return NotImplemented
    carry = 0
    limbs = []
    for x, y in zip(self.limbs, other.limbs):
      carry += x + y
      limbs.append(carry & MASK)
      carry >>= RADIX
    # Anything past 2^260 falls off, like a fixed width integer
    return ExtendedScalar(limbs)

  def top_byte(self) -> int:
    """The most significant byte of the 32-byte serialization"""
    return bytes(self)[31]


# The group order, for adding it without reduction
Q = ExtendedScalar.from_int(q)
