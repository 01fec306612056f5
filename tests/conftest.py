import pytest

from .vectors import RFC4226_KEY, ZERO_KEY


@pytest.fixture
def zero_key() -> bytes:
    return ZERO_KEY


@pytest.fixture
def rfc_key() -> bytes:
    return RFC4226_KEY
