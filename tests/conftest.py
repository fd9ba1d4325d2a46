import pytest

from addrgen.generator import get_generator
from addrgen.services.address_generator import AddressGenerator


@pytest.fixture
def gen() -> AddressGenerator:
    return AddressGenerator()


@pytest.fixture
def lenient_gen() -> AddressGenerator:
    generator = AddressGenerator()
    generator.enable_test_mode()
    return generator


@pytest.fixture(autouse=True)
def _reset_shared_generator():
    yield
    get_generator().reset()
