import pytest
from cbgen.generation.context import ParentContext

STAMP = "2024-01-01T00:00:00+00:00"


@pytest.fixture
def stamp():
	return STAMP


@pytest.fixture
def jovian():
	return ParentContext.jupiter_like()
