# The 8-torsion subgroup E[8] of Ed25519.
#
# It is cyclic: EIGHT_TORSION[i] is [i]P for a point P of order 8, so the
# points of E[4] sit at indices 0, 2, 4, 6 and those of E[2] at 0, 4.

from typing import Tuple

from .ed import EdPoint

EIGHT_TORSION: Tuple[bytes, ...] = tuple(bytes.fromhex(h) for h in (
  "0100000000000000000000000000000000000000000000000000000000000000",  # (0, 1) order 1, neutral element
  "c7176a703d4dd84fba3c0b760d10670f2a2053fa2c39ccc64ec7fd7792ac037a",  # order 8
  "0000000000000000000000000000000000000000000000000000000000000080",  # order 4
  "26e8958fc2b227b045c3f489f2ef98f0d5dfac05d3c63339b13802886d53fc05",  # order 8
  "ecffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff7f",  # order 2
  "26e8958fc2b227b045c3f489f2ef98f0d5dfac05d3c63339b13802886d53fc85",  # order 8
  "0000000000000000000000000000000000000000000000000000000000000000",  # order 4
  "c7176a703d4dd84fba3c0b760d10670f2a2053fa2c39ccc64ec7fd7792ac03fa",  # order 8
))

# Non-canonical encodings of the torsion points that have one.
# The first three decode to the neutral element.
EIGHT_TORSION_NON_CANONICAL: Tuple[bytes, ...] = tuple(bytes.fromhex(h) for h in (
  "0100000000000000000000000000000000000000000000000000000000000080",  # (-0, 1) order 1, wrong x sign
  "eeffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff",  # (-0, 2^255 - 18) order 1, wrong x sign
  "ecffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff",  # (-0, -1) order 2, wrong x sign
  "eeffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff7f",  # (0, 2^255 - 18) order 1, y too large
  "edffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff",  # (-sqrt(-1), 2^255 - 19) order 4
  "edffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff7f",  # (sqrt(-1), 2^255 - 19) order 4
))

# Decoded points, same indexing as EIGHT_TORSION
LO = tuple(EdPoint.from_bytes(b) for b in EIGHT_TORSION)


def pick_small_nonzero_point(idx: int) -> EdPoint:
  """Map any integer to one of the seven torsion points other than the neutral element"""
  return LO[idx % 7 + 1]
