# Ed25519 signature verification edge cases
#
# Forges test vectors that separate cofactored from cofactorless verification,
# canonical from non-canonical encodings and s < L from larger s, following
# "Taming the many EdDSAs" (https://ia.cr/2020/1244).
#
# Plain Python curve arithmetic: not constant time, only fit for producing and
# checking test vectors, never for handling secrets.
#
# Lower case constants are scalars (int or fe), upper case are EdPoints.

__version__ = "0.1.0"

from .codec import decode_point, encode_point, is_canonical_point
from .ed import ZERO, EdPoint, G
from .exceptions import (
  ForgeError, InvalidLength, NonCanonicalPointEncoding, NonCanonicalScalar, PointDecompressionError,
  VerificationFailure
)
from .field import fe, p, q
from .scalar import Scalar, UncheckedScalar, decode_scalar_permissive, decode_scalar_strict, hash_to_scalar
from .torsion import EIGHT_TORSION, EIGHT_TORSION_NON_CANONICAL, LO, pick_small_nonzero_point
from .vectors import TestVector, generate_test_vectors, generate_vectors
from .verify import (
  accepts, compute_hram, verify_cofactored, verify_cofactorless, verify_pre_reduced_cofactored
)
