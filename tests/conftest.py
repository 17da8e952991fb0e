import pytest

from speccheck.vectors import generate_test_vectors


@pytest.fixture(scope="session")
def vectors():
  # Forging is slow in plain Python, do it once for all tests
  return generate_test_vectors()
