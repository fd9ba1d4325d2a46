from ipaddress import IPv4Address

from addrgen import generator
from addrgen.services.address_generator import AddressGenerator


def test_shared_generator_is_a_singleton() -> None:
    assert generator.get_generator() is generator.get_generator()
    assert isinstance(generator.get_generator(), AddressGenerator)


def test_module_functions_share_one_pool() -> None:
    generator.init("10.1.1.0", "/24", "0.0.0.3")

    assert generator.get_address("/24") == IPv4Address("10.1.1.3")
    assert generator.next_address("/24") == IPv4Address("10.1.1.3")
    assert generator.get_generator().is_address_allocated("10.1.1.3")

    assert generator.add_allocated("10.1.1.4") is True
    assert generator.next_address("/24") == IPv4Address("10.1.1.5")
    assert generator.is_address_allocated("10.1.1.4")


def test_module_network_functions() -> None:
    generator.init("10.0.0.0", "/30")

    assert generator.next_network("/30") == IPv4Address("10.0.0.4")
    assert generator.get_network("/30") == IPv4Address("10.0.0.4")
    assert generator.is_network_allocated("10.0.0.4", "/30")
    assert generator.add_network_allocated("10.0.0.8", "/30") is True
    assert generator.next_network("/30") == IPv4Address("10.0.0.12")

    generator.init_address("10.0.0.14", "/30")
    assert generator.next_address("/30") == IPv4Address("10.0.0.14")


def test_reset_clears_shared_state() -> None:
    generator.init("10.1.1.0", "/24")
    generator.next_address("/24")

    generator.reset()

    assert not generator.is_address_allocated("10.1.1.1")
    assert not generator.is_network_allocated("10.1.1.0", "/24")


def test_enable_test_mode_switches_shared_generator() -> None:
    generator.enable_test_mode()
    try:
        assert generator.next_address("/8") is None
        assert generator.get_generator().last_error is not None
    finally:
        generator.get_generator.cache_clear()
