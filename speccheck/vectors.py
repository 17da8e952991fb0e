# Forging of Ed25519 edge case test vectors.
#
# Based on "Taming the many EdDSAs" (Chalkias, Garillot, Nikolaenko)
# https://ia.cr/2020/1244
#
# Every vector is built so that it lands in a known cell of the table below:
# whether cofactored and cofactorless verification accept it. Keys and nonce
# points are mixes of a large order part (a multiple of G) and a small order
# part (a torsion point). Messages are drawn until the small order terms of
# the verification equation cancel out (or deliberately do not), which takes
# ord(T) draws on average for a torsion point T.
#
# All vectors are checked against the verification equations before they
# are returned. A mismatch is a bug in this module and raises ForgeError.

import logging
from typing import Callable, Iterable, List, NamedTuple, Optional, Tuple

from .ed import EdPoint, G
from .exceptions import ForgeError
from .extended import Q, ExtendedScalar
from .field import q
from .rng import ChaChaRng, new_rng
from .scalar import Scalar, UncheckedScalar
from .torsion import EIGHT_TORSION_NON_CANONICAL, pick_small_nonzero_point
from .util import shabytes, tobytes
from .verify import (
  Signature, accepts, compute_hram, compute_hram_with_pk_bytes, compute_hram_with_r_bytes,
  verify_final_cofactored, verify_final_cofactorless, verify_final_pre_reduced_cofactored
)

log = logging.getLogger(__name__)

# Upper bound on message draws in a search. The worst search succeeds with
# probability 1/64 per draw, so running out means a broken construction.
MAX_TRIALS = 4096


class TestVector(NamedTuple):
  __test__ = False  # not a pytest class

  message: bytes
  pub_key: bytes
  signature: bytes
  scenario: Optional[int] = None
  description: str = ""

  def to_dict(self) -> dict:
    return dict(message=self.message.hex(), pub_key=self.pub_key.hex(), signature=self.signature.hex())


class Cell(NamedTuple):
  """Documented classification and outcomes of a generated vector"""
  s: str
  a: str
  r: str
  cofactored: bool
  cofactorless: bool
  comment: str = ""
  # Outcome of pre-reduced cofactored verification where documented
  pre_reduced: Optional[bool] = None
  # Outcomes hold when the hash is computed over the bytes as transmitted
  # rather than over re-serialized points (only differs for non-canonical input)
  wire_hash: bool = False


CELLS = (
  Cell("= 0", "small", "small", True, True, "small A and R"),
  Cell("< L", "small", "mixed", True, True, "small A only"),
  Cell("< L", "mixed", "small", True, True, "small R only"),
  Cell("< L", "mixed", "mixed", True, True, "succeeds unless full-order is checked"),
  Cell("< L", "mixed", "mixed", True, False),
  Cell("< L", "mixed", "L", True, False, "fails cofactored iff (8h) prereduced", pre_reduced=False),
  Cell("> L", "L", "L", True, True),
  Cell(">> L", "L", "L", True, True),
  Cell("< L", "mixed", "small*", True, True, "non-canonical R, reduced for hash"),
  Cell("< L", "mixed", "small*", True, True, "non-canonical R, not reduced for hash", wire_hash=True),
  Cell("< L", "small*", "mixed", True, True, "non-canonical A, reduced for hash"),
  Cell("< L", "small*", "mixed", True, True, "non-canonical A, not reduced for hash", wire_hash=True),
)


def serialize_signature(R: EdPoint, s: int) -> bytes:
  return bytes(R) + tobytes(s)

def nonce_scalar(nonce: bytes, message: bytes) -> Scalar:
  """Deterministic nonce r of an ordinary signature"""
  return Scalar.from_bytes_mod_order_wide(shabytes(nonce + message))


def expect(
  A: EdPoint, signature: Signature, h: int, *, cofactored: bool, cofactorless: bool,
  pre_reduced: Optional[bool] = None
) -> None:
  """Raise ForgeError unless the verification equations give the expected outcomes."""
  outcomes = dict(
    cofactored=(accepts(verify_final_cofactored, A, signature, h), cofactored),
    cofactorless=(accepts(verify_final_cofactorless, A, signature, h), cofactorless),
  )
  if pre_reduced is not None:
    outcomes["pre-reduced cofactored"] = (
      accepts(verify_final_pre_reduced_cofactored, A, signature, h), pre_reduced
    )
  wrong = [name for name, (got, want) in outcomes.items() if got != want]
  if wrong:
    raise ForgeError(f"Unexpected {', '.join(wrong)} verification outcome")

def forge(
  description: str, message: bytes, A: EdPoint, signature: Signature, *,
  cofactored: bool, cofactorless: bool, pre_reduced: Optional[bool] = None,
  h: Optional[int] = None, pub_key: Optional[bytes] = None, R_bytes: Optional[bytes] = None
) -> TestVector:
  """
  Check a forged signature against the verification equations and pack it.

  :param h: hash scalar to verify with, by default over re-serialized R and A
  :param pub_key: public key bytes to emit instead of the encoding of A
  :param R_bytes: R bytes to emit instead of the encoding of R
  :raises ForgeError: if any outcome differs from the expected one
  """
  R, s = signature
  if h is None: h = compute_hram(message, A, R)
  expect(A, signature, h, cofactored=cofactored, cofactorless=cofactorless, pre_reduced=pre_reduced)
  sig = serialize_signature(R, s)
  if R_bytes is not None:
    sig = R_bytes + sig[32:]
  tv = TestVector(
    message=message,
    pub_key=bytes(A) if pub_key is None else pub_key,
    signature=sig,
    description=description,
  )
  log.debug(
    "%s\n\"message\": \"%s\", \"pub_key\": \"%s\", \"signature\": \"%s\"", description,
    tv.message.hex(), tv.pub_key.hex(), tv.signature.hex()
  )
  return tv


## Message searches

def first_message(rng: ChaChaRng, holds: Callable[[bytes], bool]) -> bytes:
  """Draw messages until one satisfies the condition."""
  for _ in range(MAX_TRIALS):
    message = rng.fill_bytes(32)
    if holds(message):
      return message
  raise ForgeError(f"No suitable message in {MAX_TRIALS} draws")

def split_search(rng: ChaChaRng, holds: Callable[[bytes], bool]) -> Tuple[bytes, bytes]:
  """
  Draw messages until finding both one where the condition fails and one where it holds.

  :returns: (failing message, holding message)
  """
  found = {}
  for _ in range(MAX_TRIALS):
    message = rng.fill_bytes(32)
    found.setdefault(holds(message), message)
    if len(found) == 2:
      return found[False], found[True]
  raise ForgeError(f"No split found in {MAX_TRIALS} draws, bad seed?")


## Scenarios

def zero_small_small() -> Tuple[TestVector, TestVector]:
  """S = 0, small A, small R (R = -A), repudiable"""
  rng = new_rng()
  A = pick_small_nonzero_point(rng.next_u64() + 1)
  R = -A
  s = Scalar(0)

  # Cofactorless: R + h A == (h - 1) A
  failing, holding = split_search(rng, lambda m: (R + compute_hram(m, A, R) * A).is_identity)
  desc = "S=0, small A, small R"
  return (
    forge(f"{desc}, passes cofactored, fails cofactorless", failing, A, (R, s),
      cofactored=True, cofactorless=False),
    forge(f"{desc}, passes cofactored, passes cofactorless", holding, A, (R, s),
      cofactored=True, cofactorless=True),
  )

def non_zero_mixed_small() -> Tuple[TestVector, TestVector]:
  """S > 0, small A, mixed R (R = sG - A), repudiable"""
  rng = new_rng()
  s = rng.scalar()
  A = pick_small_nonzero_point(rng.next_u64() + 1)
  R = s * G - A

  failing, holding = split_search(rng, lambda m: (-A + compute_hram(m, A, R) * A).is_identity)
  desc = "S > 0, small A, mixed R"
  return (
    forge(f"{desc}, passes cofactored, fails cofactorless", failing, A, (R, s),
      cofactored=True, cofactorless=False),
    forge(f"{desc}, passes cofactored, passes cofactorless", holding, A, (R, s),
      cofactored=True, cofactorless=True),
  )

def non_zero_small_mixed() -> Tuple[TestVector, TestVector]:
  """S > 0, mixed A (aG - T), small R (T), leaks the private key a = s / h"""
  rng = new_rng()
  a = rng.scalar()
  R = pick_small_nonzero_point(rng.next_u64() + 1)
  A = a * G - R

  def signature(message: bytes) -> Signature:
    return R, Scalar(compute_hram(message, A, R) * a)

  failing, holding = split_search(rng, lambda m: (R - compute_hram(m, A, R) * R).is_identity)
  desc = "S > 0, mixed A, small R"
  return (
    forge(f"{desc}, passes cofactored, fails cofactorless", failing, A, signature(failing),
      cofactored=True, cofactorless=False),
    forge(f"{desc}, passes cofactored, passes cofactorless", holding, A, signature(holding),
      cofactored=True, cofactorless=True),
  )

def non_zero_mixed_mixed() -> Tuple[TestVector, TestVector]:
  """S > 0, mixed A (aG + T), mixed R (rG - T), an otherwise ordinary signature"""
  rng = new_rng()
  a = rng.scalar()
  nonce = rng.fill_bytes(32)
  T = pick_small_nonzero_point(rng.next_u64() + 1)
  A = a * G + T

  def signature(message: bytes) -> Signature:
    r = nonce_scalar(nonce, message)
    R = r * G - T
    return R, Scalar(r + compute_hram(message, A, R) * a)

  def holds(message: bytes) -> bool:
    R, _ = signature(message)
    return (-T + compute_hram(message, A, R) * T).is_identity

  failing, holding = split_search(rng, holds)
  desc = "S > 0, mixed A, mixed R"
  return (
    forge(f"{desc}, passes cofactored, fails cofactorless", failing, A, signature(failing),
      cofactored=True, cofactorless=False),
    forge(f"{desc}, passes cofactored, passes cofactorless", holding, A, signature(holding),
      cofactored=True, cofactorless=True),
  )

def pre_reduced_scalar() -> Tuple[TestVector]:
  """S > 0, mixed A (aG + T), large order R: 8h mod q must not clear T"""
  rng = new_rng()
  a = rng.scalar()
  nonce = rng.fill_bytes(32)
  T = pick_small_nonzero_point(rng.next_u64() + 1)
  A = a * G + T

  def holds(message: bytes) -> bool:
    h = compute_hram(message, A, nonce_scalar(nonce, message) * G)
    # The residual is h T for cofactorless and (8h mod q) T for pre-reduced
    return not (h * T).is_identity and not (Scalar(8 * h) * T).is_identity

  message = first_message(rng, holds)
  r = nonce_scalar(nonce, message)
  R = r * G
  s = Scalar(r + compute_hram(message, A, R) * a)
  return (forge(
    "S > 0, mixed A, large order R, passes cofactored, fails pre-reducing cofactored, fails cofactorless",
    message, A, (R, s), cofactored=True, cofactorless=False, pre_reduced=False,
  ),)

def _ordinary_signature(rng: ChaChaRng) -> Tuple[bytes, EdPoint, EdPoint, Scalar]:
  """Draw a key, nonce and message and sign normally."""
  a = rng.scalar()
  nonce = rng.fill_bytes(32)
  A = a * G
  message = rng.fill_bytes(32)
  r = nonce_scalar(nonce, message)
  R = r * G
  s = Scalar(r + compute_hram(message, A, R) * a)
  expect(A, (R, s), compute_hram(message, A, R), cofactored=True, cofactorless=True)
  return message, A, R, s

def _malleated(s: Scalar, s_prime: ExtendedScalar) -> UncheckedScalar:
  """Take the low 256 bits of s_prime as the new s, confirming it is another representative of s."""
  s2 = UncheckedScalar.from_bits(bytes(s_prime))
  if s2 == s or s2 % q != s:
    raise ForgeError("The malleated s is not a distinct representative of s")
  return s2

def large_s() -> Tuple[TestVector]:
  """S > L, large order A and R: s + q verifies just like s (breaks strong unforgeability)"""
  message, A, R, s = _ordinary_signature(new_rng())
  s_prime = _malleated(s, ExtendedScalar.from_bytes(bytes(s)) + Q)
  return (forge(
    "S > L, large order A, large order R, passes cofactored, passes cofactorless, breaks strong unforgeability",
    message, A, (R, s_prime), cofactored=True, cofactorless=True, pre_reduced=True,
  ),)

def really_large_s() -> Tuple[TestVector]:
  """S much larger than L, large order A and R: gets past checks of the top bits only"""
  message, A, R, s = _ordinary_signature(new_rng())
  s_prime = ExtendedScalar.from_bytes(bytes(s))
  # Model of the incomplete check that only looks at the top three bits instead of s < q
  while s_prime.top_byte() & 0xE0 == 0:
    s_prime += Q
  return (forge(
    "S much larger than L, large order A, large order R, passes cofactored, passes cofactorless, "
    "escapes high bit checks, breaks strong unforgeability",
    message, A, (R, _malleated(s, s_prime)), cofactored=True, cofactorless=True, pre_reduced=True,
  ),)

def non_zero_small_non_canonical_mixed() -> Tuple[TestVector, TestVector]:
  """
  S > 0, mixed A, R = (-0, -1) of order 2 encoded non-canonically as ECFF..FF.

  Libraries rejecting non-canonical or small order R reject both vectors.
  The first passes verifiers that re-serialize R before hashing and fails
  those hashing the bytes as received, the second the other way around.
  """
  R_bytes = EIGHT_TORSION_NON_CANONICAL[2]
  rng = new_rng()
  a = rng.scalar()
  R = EdPoint.from_bytes(R_bytes)
  T = pick_small_nonzero_point(rng.next_u64() + 1)
  A = a * G - T

  def holds(message: bytes) -> bool:
    h = compute_hram(message, A, R)
    h_wire = compute_hram_with_r_bytes(message, A, R_bytes)
    return (R - h * T).is_identity and (R - h_wire * T).is_identity

  message = first_message(rng, holds)
  h = compute_hram(message, A, R)
  h_wire = compute_hram_with_r_bytes(message, A, R_bytes)
  desc = "S > 0, mixed A, small non-canonical R, passes cofactored, passes cofactorless, leaks private key"

  sig1 = R, Scalar(h * a)
  expect(A, sig1, h_wire, cofactored=False, cofactorless=False)
  sig2 = R, Scalar(h_wire * a)
  expect(A, sig2, h, cofactored=False, cofactorless=False)
  return (
    forge(f"{desc}, R re-serialized for hash", message, A, sig1, R_bytes=R_bytes,
      cofactored=True, cofactorless=True),
    forge(f"{desc}, R not re-serialized for hash", message, A, sig2, R_bytes=R_bytes, h=h_wire,
      cofactored=True, cofactorless=True),
  )

def non_zero_mixed_small_non_canonical() -> Tuple[TestVector, TestVector]:
  """
  S > 0, A = (-0, -1) of order 2 encoded non-canonically as ECFF..FF, mixed R.

  Libraries rejecting non-canonical or small order A reject both vectors.
  Cofactored verification accepts both. Cofactorless verification accepts
  the first only when A is re-serialized before hashing, and the second only
  when the public key bytes are hashed as received.
  """
  A_bytes = EIGHT_TORSION_NON_CANONICAL[2]
  rng = new_rng()
  s = rng.scalar()
  A = EdPoint.from_bytes(A_bytes)
  R = s * G - A

  def cancels(h: int) -> bool:
    return (-A + h * A).is_identity

  def reserialized(message: bytes) -> bool:
    return cancels(compute_hram(message, A, R)) and not cancels(compute_hram_with_pk_bytes(message, A_bytes, R))

  def wire(message: bytes) -> bool:
    return cancels(compute_hram_with_pk_bytes(message, A_bytes, R)) and not cancels(compute_hram(message, A, R))

  desc = "S > 0, non-canonical A, mixed R, passes cofactored, passes cofactorless, repudiable"
  m1 = first_message(rng, reserialized)
  expect(A, (R, s), compute_hram_with_pk_bytes(m1, A_bytes, R), cofactored=True, cofactorless=False)
  tv1 = forge(f"{desc}, A re-serialized for hash", m1, A, (R, s), pub_key=A_bytes,
    cofactored=True, cofactorless=True)

  m2 = first_message(rng, wire)
  expect(A, (R, s), compute_hram(m2, A, R), cofactored=True, cofactorless=False)
  tv2 = forge(f"{desc}, A not re-serialized for hash", m2, A, (R, s), pub_key=A_bytes,
    h=compute_hram_with_pk_bytes(m2, A_bytes, R), cofactored=True, cofactorless=True)
  return tv1, tv2


# Scenario functions and the indices of their vectors that go to the output, in output order
SCENARIOS: Tuple[Tuple[Callable[[], Tuple[TestVector, ...]], Tuple[int, ...]], ...] = (
  (zero_small_small, (1,)),
  (non_zero_mixed_small, (1,)),
  (non_zero_small_mixed, (1,)),
  (non_zero_mixed_mixed, (1, 0)),
  (pre_reduced_scalar, (0,)),
  (large_s, (0,)),
  (really_large_s, (0,)),
  (non_zero_small_non_canonical_mixed, (0, 1)),
  (non_zero_mixed_small_non_canonical, (0, 1)),
)


def generate_test_vectors(scenarios: Iterable = SCENARIOS) -> List[TestVector]:
  """
  Generate all the test vectors, numbered in the order of CELLS.

  Deterministic: every call returns the same bytes.

  :param scenarios: SCENARIOS, possibly wrapped for progress display
  :raises ForgeError: if any vector misses its documented outcomes (a bug)
  """
  vectors = []
  for scenario, keep in scenarios:
    tvs = scenario()
    vectors += [tvs[i] for i in keep]
  if len(vectors) != len(CELLS):
    raise ForgeError(f"Generated {len(vectors)} vectors for {len(CELLS)} documented cells")
  return [tv._replace(scenario=i) for i, tv in enumerate(vectors)]

generate_vectors = generate_test_vectors
