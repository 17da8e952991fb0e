import pytest

from speccheck import *
from speccheck import vectors as vec
from speccheck.rng import ChaChaRng, new_rng
from speccheck.vectors import CELLS, SCENARIOS, expect, split_search
from speccheck.verify import verify_final_cofactored, verify_final_cofactorless, verify_final_pre_reduced_cofactored


def unpack(tv):
  A = decode_point(tv.pub_key)
  R = decode_point(tv.signature[:32])
  s = decode_scalar_permissive(tv.signature[32:])
  return A, (R, s)


def test_count(vectors):
  assert len(vectors) == len(CELLS) == 12
  assert [tv.scenario for tv in vectors] == list(range(12))
  for tv in vectors:
    assert len(tv.pub_key) == 32
    assert len(tv.signature) == 64
    assert len(tv.message) == 32
    assert tv.description


def test_cells(vectors):
  for tv, cell in zip(vectors, CELLS):
    A, sig = unpack(tv)
    if cell.wire_hash:
      h = hash_to_scalar(tv.signature[:32], tv.pub_key, tv.message)
    else:
      h = compute_hram(tv.message, A, sig[0])
    assert accepts(verify_final_cofactored, A, sig, h) == cell.cofactored, tv.scenario
    assert accepts(verify_final_cofactorless, A, sig, h) == cell.cofactorless, tv.scenario
    if cell.pre_reduced is not None:
      assert accepts(verify_final_pre_reduced_cofactored, A, sig, h) == cell.pre_reduced, tv.scenario


def test_deterministic(vectors):
  assert generate_test_vectors() == vectors
  assert generate_vectors is generate_test_vectors
  assert new_rng().fill_bytes(64) == new_rng().fill_bytes(64)
  assert ChaChaRng(bytes(32)).fill_bytes(16) != new_rng().fill_bytes(16)
  with pytest.raises(ValueError):
    ChaChaRng(bytes(16))


def test_small_order_parts(vectors):
  for tv in vectors[:2]:
    A, (R, s) = unpack(tv)
    assert A.is_small_order and not A.is_identity
  A, (R, s) = unpack(vectors[0])
  assert s == 0
  assert R == -A
  A, (R, s) = unpack(vectors[2])
  assert R.is_small_order and not A.is_small_order
  for tv in vectors[3:5]:
    A, (R, s) = unpack(tv)
    assert not A.is_torsion_free and not A.is_small_order
    assert not R.is_torsion_free and not R.is_small_order
  # The mixed vectors differ in their message only
  assert vectors[3].pub_key == vectors[4].pub_key


def test_pre_reduced(vectors):
  A, (R, s) = unpack(vectors[5])
  assert R.is_torsion_free
  assert not A.is_torsion_free
  assert s < q


def test_large_s(vectors):
  for tv in vectors[6:8]:
    A, (R, s) = unpack(tv)
    assert s >= q
    assert A.is_torsion_free and R.is_torsion_free
    with pytest.raises(NonCanonicalScalar):
      decode_scalar_strict(tv.signature[32:])
  assert unpack(vectors[6])[1][1] < 2 * q
  # Escapes a check of the top three bits
  assert vectors[7].signature[63] & 0xE0


def test_non_canonical(vectors):
  nc = EIGHT_TORSION_NON_CANONICAL[2]
  for tv in vectors[8:10]:
    assert tv.signature[:32] == nc
    assert not is_canonical_point(tv.signature[:32])
  for tv in vectors[10:12]:
    assert tv.pub_key == nc
    assert not is_canonical_point(tv.pub_key)
  # Same message, different s depending on which hash the signer used
  assert vectors[8].message == vectors[9].message
  assert vectors[8].signature != vectors[9].signature
  assert vectors[10].message != vectors[11].message


def test_to_dict(vectors):
  d = vectors[0].to_dict()
  assert list(d) == ["message", "pub_key", "signature"]
  assert bytes.fromhex(d["signature"]) == vectors[0].signature


def test_forge_errors(monkeypatch):
  rng = new_rng()
  with pytest.raises(ForgeError):
    split_search(rng, lambda m: True)
  with pytest.raises(ForgeError):
    vec.first_message(rng, lambda m: False)

  monkeypatch.setattr(vec, "MAX_TRIALS", 0)
  with pytest.raises(ForgeError):
    vec.generate_test_vectors()


def test_expect():
  A = LO[4]
  sig = -A, Scalar(0)
  expect(A, sig, 1, cofactored=True, cofactorless=True)
  expect(A, sig, 2, cofactored=True, cofactorless=False)
  with pytest.raises(ForgeError) as exc:
    expect(A, sig, 2, cofactored=True, cofactorless=True)
  assert "cofactorless" in str(exc.value)


def test_scenario_count():
  assert sum(len(keep) for _, keep in SCENARIOS) == len(CELLS)
  with pytest.raises(ForgeError):
    generate_test_vectors(SCENARIOS[:3])


def test_rng_scalar():
  # Non-zero scalars come from a wide reduction of 64 bytes
  assert new_rng().scalar() == Scalar.from_bytes_mod_order_wide(new_rng().fill_bytes(64))
  rng = new_rng()
  assert all(0 < rng.scalar() < q for _ in range(10))


def test_not_collected():
  assert TestVector.__test__ is False
  assert TestVector(b"", b"", b"")._fields == ("message", "pub_key", "signature", "scenario", "description")
