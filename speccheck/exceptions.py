class InvalidLength(ValueError):
  """Wrong number of bytes for a point, scalar or signature"""

class NonCanonicalPointEncoding(ValueError):
  """Point bytes are not in canonical form"""

class PointDecompressionError(ValueError):
  """No curve point corresponds to the encoded y coordinate and sign"""

class NonCanonicalScalar(ValueError):
  """Scalar is not below the group order"""

class VerificationFailure(ValueError):
  """Signature rejected by a verification equation"""

  def __init__(self, variant: str):
    super().__init__(f"Invalid {variant} signature")
    self.variant = variant

class ForgeError(AssertionError):
  """A forged vector does not land in its documented cell (a bug, not bad input)"""
