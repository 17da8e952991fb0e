# Run the vectors through independent Ed25519 verifiers and tabulate the
# outcomes, one V (accepted) or X (rejected) per vector.

from typing import Callable, Dict, List, Sequence

import nacl.bindings as sodium
from colorama import Fore, Style
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey
from nacl.exceptions import CryptoError

from . import algorithm2
from .codec import decode_point, decode_scalar_permissive
from .scalar import hash_to_scalar
from .vectors import TestVector
from .verify import accepts, compute_hram, verify_final_cofactored, verify_final_cofactorless

Verifier = Callable[[bytes, bytes, bytes], bool]


def verify_libsodium(message: bytes, pub_key: bytes, signature: bytes) -> bool:
  try:
    sodium.crypto_sign_open(signature + message, pub_key)
  except (CryptoError, ValueError):
    return False
  return True

def verify_openssl(message: bytes, pub_key: bytes, signature: bytes) -> bool:
  try:
    Ed25519PublicKey.from_public_bytes(pub_key).verify(signature, message)
  except (InvalidSignature, ValueError):
    return False
  return True

def permissive(verify_final: Callable, wire_hash: bool = False) -> Verifier:
  """
  A verifier that decodes without any canonicality or range checks.

  :param wire_hash: hash the R and public key bytes as received instead of re-serializing
  """
  def run(message: bytes, pub_key: bytes, signature: bytes) -> bool:
    try:
      A = decode_point(pub_key)
      R = decode_point(signature[:32])
      s = decode_scalar_permissive(signature[32:])
    except ValueError:
      return False
    h = hash_to_scalar(signature[:32], pub_key, message) if wire_hash else compute_hram(message, A, R)
    return accepts(verify_final, A, (R, s), h)
  return run


VERIFIERS: Dict[str, Verifier] = {
  "[CGN20e] Alg.2": algorithm2.verify,
  "cofactored": permissive(verify_final_cofactored),
  "cofactorless": permissive(verify_final_cofactorless),
  "cofactored wire": permissive(verify_final_cofactored, wire_hash=True),
  "cofactorless wire": permissive(verify_final_cofactorless, wire_hash=True),
  "LibSodium": verify_libsodium,
  "OpenSSL": verify_openssl,
}


def compare(vectors: Sequence[TestVector], verifiers: Dict[str, Verifier] = VERIFIERS) -> Dict[str, List[bool]]:
  return {
    name: [verify(tv.message, tv.pub_key, tv.signature) for tv in vectors]
    for name, verify in verifiers.items()
  }

def header_row(count: int) -> str:
  return f"|{'':17}|" + "".join(f"{i:^3}|" for i in range(count))

def format_row(name: str, results: Sequence[bool], color=False) -> str:
  if color:
    marks = [f"{Fore.GREEN}V{Style.RESET_ALL}" if ok else f"{Fore.RED}X{Style.RESET_ALL}" for ok in results]
  else:
    marks = ["V" if ok else "X" for ok in results]
  return f"|{name:17}|" + "".join(f" {m} |" for m in marks)
