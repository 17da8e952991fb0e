from __future__ import annotations

from .exceptions import NonCanonicalScalar
from .field import q
from .util import check_length, sha, tobytes

# Scalars are plain integers underneath so that they multiply EdPoints
# directly. Arithmetic on them returns plain int; wrap the result again
# to state which discipline applies.


class Scalar(int):
  """A canonical scalar, always reduced modulo the group order q"""

  def __new__(cls, x: int):
    return super().__new__(cls, x % q)

  def __repr__(self): return f"Scalar({int(self)})"
  def __bytes__(self): return tobytes(self)

  @staticmethod
  def from_bytes_mod_order(b: bytes) -> Scalar:
    return Scalar(int.from_bytes(check_length(b, 32, "scalar"), "little"))

  @staticmethod
  def from_bytes_mod_order_wide(b: bytes) -> Scalar:
    """Wide reduction of a 64-byte digest"""
    return Scalar(int.from_bytes(check_length(b, 64, "wide scalar"), "little"))

  @staticmethod
  def from_canonical_bytes(b: bytes) -> Scalar:
    val = int.from_bytes(check_length(b, 32, "scalar"), "little")
    if val >= q:
      raise NonCanonicalScalar("Non-canonical s")
    return Scalar(val)


class UncheckedScalar(int):
  """
  A raw 256-bit scalar that is never reduced.

  Only for carrying deliberately out-of-range s values of forged signatures.
  Real verification input must go through Scalar.from_canonical_bytes.
  """

  def __new__(cls, x: int):
    if not 0 <= x < 1 << 256:
      raise ValueError("Unchecked scalar must fit in 256 bits")
    return super().__new__(cls, x)

  def __repr__(self): return f"UncheckedScalar({int(self)})"
  def __bytes__(self): return tobytes(self)

  @staticmethod
  def from_bits(b: bytes) -> UncheckedScalar:
    return UncheckedScalar(int.from_bytes(check_length(b, 32, "scalar"), "little"))


def decode_scalar_strict(b: bytes) -> Scalar:
  """Decode s, rejecting values >= q"""
  return Scalar.from_canonical_bytes(b)

def decode_scalar_permissive(b: bytes) -> UncheckedScalar:
  """Decode s as the raw little-endian value (any 32 bytes are accepted)"""
  return UncheckedScalar.from_bits(b)

def hash_to_scalar(R_bytes: bytes, A_bytes: bytes, message: bytes) -> Scalar:
  """SHA-512 of R || A || message, reduced modulo q"""
  return Scalar(sha(bytes(R_bytes) + bytes(A_bytes) + bytes(message)))
