import hashlib
from typing import Tuple

from .exceptions import InvalidLength


def check_length(b: bytes, expected: int, name: str) -> bytes:
  """Return b unchanged if it has the expected length, raise InvalidLength otherwise."""
  if len(b) != expected:
    raise InvalidLength(f"{name} must be {expected} bytes, got {len(b)}")
  return b

def toint(x) -> int:
  if isinstance(x, int): return x
  return int.from_bytes(check_length(x, 32, "value"), "little")

def tointsign(x) -> Tuple[int, bool]:
  """Separate the 255 bit integer and its high bit as a sign, return both."""
  val = toint(x)
  sign = val & 1 << 255
  return val ^ sign, bool(sign)

def tobytes(x: int) -> bytes:
  return x.to_bytes(32, "little")

def sha(s) -> int:
  """Return SHA-512 as 512 bit integer"""
  return int.from_bytes(shabytes(s), "little")

def shabytes(s) -> bytes:
  return hashlib.sha512(s).digest()
