import nacl.bindings as sodium
import pytest

from speccheck import *
from speccheck import algorithm2
from speccheck.verify import (
  compute_hram_with_pk_bytes, compute_hram_with_r_bytes, verify_final_cofactored, verify_final_cofactorless,
  verify_final_pre_reduced_cofactored
)

ALL = verify_cofactored, verify_cofactorless, verify_pre_reduced_cofactored


@pytest.fixture
def signed():
  """An ordinary signature made by libsodium"""
  pk, sk = sodium.crypto_sign_seed_keypair(bytes(range(32)))
  message = b"Ed25519 edge cases"
  sig = sodium.crypto_sign(message, sk)[:64]
  return message, pk, sig


def test_sodium_signature(signed):
  message, pk, sig = signed
  A = decode_point(pk)
  signature = decode_point(sig[:32]), decode_scalar_strict(sig[32:])
  for verify in ALL:
    verify(message, A, signature)
    assert accepts(verify, message, A, signature)
  assert algorithm2.verify(message, pk, sig)


def test_tampered(signed):
  message, pk, sig = signed
  A = decode_point(pk)
  signature = decode_point(sig[:32]), decode_scalar_strict(sig[32:])
  variants = "cofactored", "cofactorless", "pre-reduced cofactored"
  for verify, variant in zip(ALL, variants):
    with pytest.raises(VerificationFailure) as exc:
      verify(message + b"!", A, signature)
    assert exc.value.variant == variant
    assert str(exc.value) == f"Invalid {variant} signature"
    assert not accepts(verify, message + b"!", A, signature)
  assert not algorithm2.verify(message + b"!", pk, sig)
  assert not algorithm2.verify(message, pk, sig[:32] + bytes(32))


def test_hram(signed):
  message, pk, sig = signed
  A, R = decode_point(pk), decode_point(sig[:32])
  h = compute_hram(message, A, R)
  assert h == hash_to_scalar(sig[:32], pk, message)
  assert h == compute_hram_with_r_bytes(message, A, sig[:32])
  assert h == compute_hram_with_pk_bytes(message, pk, R)

  # Differs from the re-serialized hash only for non-canonical bytes
  nc = EIGHT_TORSION_NON_CANONICAL[2]
  T = decode_point(nc)
  assert compute_hram_with_r_bytes(message, A, nc) != compute_hram(message, A, T)
  assert compute_hram_with_pk_bytes(message, nc, R) != compute_hram(message, T, R)


def test_repudiation():
  # With a small order key and s = 0, R = -A is accepted by cofactored verification for every message
  A = LO[4]
  signature = -A, Scalar(0)
  for message in (b"", b"a", b"b", b"c"):
    h = compute_hram(message, A, -A)
    assert accepts(verify_cofactored, message, A, signature)
    assert accepts(verify_final_cofactorless, A, signature, h) == (h % 2 == 1)
    # Algorithm 2 refuses small order keys
    assert not algorithm2.verify_signature(Scalar(0), -A, message, A)


def test_pre_reduced_differs():
  # 8h mod q is not a multiple of 8, so (8h mod q) A keeps the small order part of A
  a = 12345
  T = LO[1]
  A = a * G + T
  R = 777 * G
  for h in range(1, 200):
    s = Scalar(777 + h * a)
    cofactored = accepts(verify_final_cofactored, A, (R, s), h)
    pre_reduced = accepts(verify_final_pre_reduced_cofactored, A, (R, s), h)
    assert cofactored
    assert pre_reduced == (Scalar(8 * h) * T).is_identity
    assert accepts(verify_final_cofactorless, A, (R, s), h) == (h * T).is_identity


def test_algorithm2_decoding(signed):
  message, pk, sig = signed
  with pytest.raises(NonCanonicalPointEncoding):
    algorithm2.deserialize_point(EIGHT_TORSION_NON_CANONICAL[0])
  with pytest.raises(InvalidLength):
    algorithm2.deserialize_signature(sig[:63])
  with pytest.raises(NonCanonicalScalar):
    algorithm2.deserialize_s((int.from_bytes(sig[32:], "little") + q).to_bytes(32, "little"))
  s, R = algorithm2.deserialize_signature(sig)
  assert bytes(R) == sig[:32]
  assert bytes(s) == sig[32:]

  # Decoding failures are rejections, not errors
  assert not algorithm2.verify(message, EIGHT_TORSION_NON_CANONICAL[4], sig)
  assert not algorithm2.verify(message, pk[:31], sig)
  assert not algorithm2.verify(message, pk, sig + b"\0")
  assert not algorithm2.verify(message, EIGHT_TORSION[2], sig)
