# Wire formats of points and scalars.
#
# Whether bytes are canonical and whether they decode at all are separate
# questions: a few non-canonical encodings decode fine, so strict callers
# must check both.

from .ed import EdPoint
from .field import p
from .scalar import decode_scalar_permissive, decode_scalar_strict, hash_to_scalar
from .util import toint

# Small order points that decode successfully but are not canonical
# (entries 9 and 10 in Tables 1-2 of "Taming the many EdDSAs")
NEG_ZERO_IDENTITY = bytes([0x01] + 30 * [0x00] + [0x80])
NEG_ZERO_ORDER2 = bytes([0xEC] + 31 * [0xFF])


def is_canonical_point(b: bytes) -> bool:
  """Check that y < p and that b is not one of the two special small order cases"""
  if len(b) != 32: return False
  if toint(b) & (1 << 255) - 1 >= p: return False
  return b not in (NEG_ZERO_IDENTITY, NEG_ZERO_ORDER2)

def decode_point(b: bytes) -> EdPoint:
  return EdPoint.from_bytes(b)

def encode_point(P: EdPoint) -> bytes:
  return bytes(P)


__all__ = [
  "is_canonical_point",
  "decode_point",
  "encode_point",
  "decode_scalar_strict",
  "decode_scalar_permissive",
  "hash_to_scalar",
]
