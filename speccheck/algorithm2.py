# Individual signature verification from "Taming the many EdDSAs" (Algorithm 2)
# Chalkias, Garillot, Nikolaenko, https://ia.cr/2020/1244
#
# Rejects non-canonical R and A, s >= q and small order public keys, then
# runs cofactored verification.

from typing import Tuple

from .codec import is_canonical_point
from .ed import EdPoint
from .exceptions import NonCanonicalPointEncoding
from .scalar import Scalar, decode_scalar_strict
from .util import check_length
from .verify import accepts, verify_cofactored


def deserialize_point(b: bytes) -> EdPoint:
  """
  Decode a point, refusing anything but canonical encodings.

  :raises NonCanonicalPointEncoding: if the encoding is not canonical
  :raises PointDecompressionError: if the bytes are not a curve point
  """
  if not is_canonical_point(check_length(b, 32, "point")):
    raise NonCanonicalPointEncoding("Non-canonical point encoding")
  return EdPoint.from_bytes(b)

deserialize_R = deserialize_pk = deserialize_point

def deserialize_s(b: bytes) -> Scalar:
  return decode_scalar_strict(b)

def deserialize_signature(sig: bytes) -> Tuple[Scalar, EdPoint]:
  check_length(sig, 64, "signature")
  s = deserialize_s(sig[32:])
  R = deserialize_R(sig[:32])
  return s, R

def verify_signature(s: Scalar, R: EdPoint, message: bytes, A: EdPoint) -> bool:
  if A.is_small_order:
    return False
  return accepts(verify_cofactored, message, A, (R, s))

def verify(message: bytes, pub_key: bytes, signature: bytes) -> bool:
  """Verify raw bytes, treating any decoding failure as a rejection."""
  try:
    A = deserialize_pk(pub_key)
    s, R = deserialize_signature(signature)
  except ValueError:
    return False
  return verify_signature(s, R, message, A)
