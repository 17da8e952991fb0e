# Ed25519 verification equations as implemented in the wild.
#
# The hash scalar h is the same in all of them, only the check differs:
#   cofactorless             R - (h * -A + s * G) == 0
#   cofactored           8 * (R - (h * -A + s * G)) == 0
#   pre-reduced cofactored   8 * R - ((8h mod q) * -A + (8s mod q) * G) == 0
#
# Small order components of R and A vanish from the cofactored check, but
# not from the pre-reduced one, because 8h mod q need not be a multiple of 8.

from contextlib import suppress
from typing import Callable, Tuple

from .ed import EdPoint, double_scalar_mul_basepoint
from .exceptions import VerificationFailure
from .scalar import Scalar, hash_to_scalar

Signature = Tuple[EdPoint, int]


def compute_hram(message: bytes, A: EdPoint, R: EdPoint) -> Scalar:
  """The hash scalar h with both points re-serialized (canonical encodings)"""
  return hash_to_scalar(bytes(R), bytes(A), message)

def compute_hram_with_r_bytes(message: bytes, A: EdPoint, R_bytes: bytes) -> Scalar:
  """The hash scalar h using R bytes exactly as they appear in the signature"""
  return hash_to_scalar(R_bytes, bytes(A), message)

def compute_hram_with_pk_bytes(message: bytes, A_bytes: bytes, R: EdPoint) -> Scalar:
  """The hash scalar h using the public key bytes exactly as given"""
  return hash_to_scalar(bytes(R), A_bytes, message)


def verify_cofactored(message: bytes, A: EdPoint, signature: Signature) -> None:
  """
  Cofactored verification, 8 (R - (h * -A + s * G)) == 0.

  :raises VerificationFailure: if the signature is rejected
  """
  h = compute_hram(message, A, signature[0])
  verify_final_cofactored(A, signature, h)

def verify_cofactorless(message: bytes, A: EdPoint, signature: Signature) -> None:
  """
  Cofactorless verification, R - (h * -A + s * G) == 0.

  :raises VerificationFailure: if the signature is rejected
  """
  h = compute_hram(message, A, signature[0])
  verify_final_cofactorless(A, signature, h)

def verify_pre_reduced_cofactored(message: bytes, A: EdPoint, signature: Signature) -> None:
  """
  Cofactored verification with 8h and 8s reduced modulo q before multiplying.

  :raises VerificationFailure: if the signature is rejected
  """
  h = compute_hram(message, A, signature[0])
  verify_final_pre_reduced_cofactored(A, signature, h)


def verify_final_cofactored(A: EdPoint, signature: Signature, h: int) -> None:
  R, s = signature
  Rprime = double_scalar_mul_basepoint(h, -A, s)
  if not (R - Rprime).mul_by_cofactor().is_identity:
    raise VerificationFailure("cofactored")

def verify_final_cofactorless(A: EdPoint, signature: Signature, h: int) -> None:
  R, s = signature
  Rprime = double_scalar_mul_basepoint(h, -A, s)
  if not (R - Rprime).is_identity:
    raise VerificationFailure("cofactorless")

def verify_final_pre_reduced_cofactored(A: EdPoint, signature: Signature, h: int) -> None:
  R, s = signature
  eight_h = Scalar(8 * h)
  eight_s = Scalar(8 * s)
  Rprime = double_scalar_mul_basepoint(eight_h, -A, eight_s)
  if not (R.mul_by_cofactor() - Rprime).is_identity:
    raise VerificationFailure("pre-reduced cofactored")


def accepts(verify: Callable[..., None], *args) -> bool:
  """Run a verify function, returning whether it accepted instead of raising."""
  with suppress(VerificationFailure):
    verify(*args)
    return True
  return False
